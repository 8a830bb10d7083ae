"""Provider construction with credential checks.

API keys are resolved from the environment by load_config. This module only
turns a missing key into a UsageError that names the variable to set, so
the failure is reported before any git or AI work starts.
"""

from __future__ import annotations

import logging

import click

from gelf_core.config import ConfigError
from gelf_core.providers import API_KEY_ENV, PROVIDERS, BaseProvider, get_provider

logger = logging.getLogger(__name__)


def require_api_key(config: dict) -> str:
    """Return the configured provider's API key or raise click.UsageError."""
    provider = config.get("provider")
    if provider not in PROVIDERS:
        raise click.UsageError(f"Unknown provider {provider!r}. Choose one of: {', '.join(PROVIDERS)}.")
    key = config.get(f"{provider}_api_key")
    if not key:
        raise click.UsageError(f"{API_KEY_ENV[provider]} environment variable is not set.")
    return key


def build_provider(config: dict, purpose: str) -> BaseProvider:
    require_api_key(config)
    try:
        provider = get_provider(config, purpose)
    except (ConfigError, ImportError) as e:
        raise click.ClickException(str(e))
    logger.debug("Using %s with model %s for %s", type(provider).__name__, provider.model, purpose)
    return provider
