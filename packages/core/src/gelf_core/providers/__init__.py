"""AI provider selection."""

from __future__ import annotations

from gelf_core.config import ConfigError
from gelf_core.providers.base import BaseProvider, ProviderError

PROVIDERS = ("anthropic", "openai", "gemini")

# Environment variable holding each provider's API key, as resolved by load_config.
API_KEY_ENV = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}


def provider_class(name: str) -> type[BaseProvider]:
    if name == "anthropic":
        from gelf_core.providers.anthropic import AnthropicProvider

        return AnthropicProvider
    if name == "openai":
        from gelf_core.providers.openai import OpenAIProvider

        return OpenAIProvider
    if name == "gemini":
        from gelf_core.providers.gemini import GeminiProvider

        return GeminiProvider
    raise ConfigError(f"Unknown model provider: {name!r}. Choose one of: {', '.join(PROVIDERS)}.")


def resolve_model(provider_cls: type[BaseProvider], name: str | None, purpose: str) -> str:
    """Turn a configured model name into a concrete model identifier.

    ``flash`` and ``pro`` select the provider's fast or strong model. With no
    name, commit messages use the fast model; reviews and docs the strong one.
    """
    if not name:
        return provider_cls.FAST_MODEL if purpose == "commit" else provider_cls.STRONG_MODEL
    if name == "flash":
        return provider_cls.FAST_MODEL
    if name == "pro":
        return provider_cls.STRONG_MODEL
    return name


def model_for(config: dict, purpose: str) -> str:
    """Concrete model identifier the configured provider will use for ``purpose``."""
    return resolve_model(provider_class(config["provider"]), config.get(f"{purpose}_model"), purpose)


def get_provider(config: dict, purpose: str = "review") -> BaseProvider:
    """Build the configured provider for ``purpose`` ("commit", "review" or "doc")."""
    name = config["provider"]
    return provider_class(name)(api_key=config.get(f"{name}_api_key"), model=model_for(config, purpose))


__all__ = [
    "API_KEY_ENV",
    "PROVIDERS",
    "BaseProvider",
    "ProviderError",
    "get_provider",
    "model_for",
    "provider_class",
    "resolve_model",
]
