import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "provider": "anthropic",
    "commit_model": None,  # None = provider default; "flash"/"pro" select fast/strong model
    "review_model": None,
    "doc_model": None,
    "language": "english",
    "commit_language": None,  # None = fall back to "language"
    "review_language": None,
    "doc_language": None,  # None = fall back to review_language
    "max_workers": 8,
    "context_lines": 3,
    "max_chars_per_file": 20000,
    "exclude": [],  # fnmatch patterns or directory names to skip (e.g. "migrations/", "*.min.js")
    "color": "always",
}

CONFIG_FILE_NAMES = ("gelf.yml", "gelf.yaml")


class ConfigError(ValueError):
    """Invalid configuration file or value."""


def config_search_paths() -> list[Path]:
    """Candidate config files, highest priority first."""
    paths = [Path(name) for name in CONFIG_FILE_NAMES]

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    paths.extend(base / "gelf" / name for name in CONFIG_FILE_NAMES)

    paths.extend(Path.home() / f".{name}" for name in CONFIG_FILE_NAMES)
    return paths


def find_config_file() -> Optional[Path]:
    for path in config_search_paths():
        if path.is_file():
            return path
    return None


def _read_yaml(path: Path) -> dict:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}.")
    return data


def load_config(config_path: Optional[str] = None, cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. config_path, or the first file found by find_config_file()
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "exclude": list(DEFAULT_CONFIG["exclude"])}

    path = Path(config_path) if config_path else find_config_file()
    if path is not None and path.exists():
        config.update(_read_yaml(path))
        config["config_path"] = str(path)
    else:
        config["config_path"] = None

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # A YAML key with no value loads as None; treat it as unset.
    for key in ("provider", "language", "max_workers", "context_lines", "max_chars_per_file", "color"):
        if config.get(key) is None:
            config[key] = DEFAULT_CONFIG[key]
    exclude = config.get("exclude") or []
    config["exclude"] = [exclude] if isinstance(exclude, str) else list(exclude)

    config["commit_language"] = config.get("commit_language") or config["language"]
    config["review_language"] = config.get("review_language") or config["language"]
    config["doc_language"] = config.get("doc_language") or config["review_language"]

    # Resolve credentials from environment variables
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")
    config["gemini_api_key"] = os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")

    return config


def use_color(config: dict) -> bool:
    return config.get("color", "always") != "never"
