"""Tests for configuration loading."""

import pytest

from gelf_core.config import ConfigError, config_search_paths, find_config_file, load_config, use_color


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    """Keep the developer's own config files and API keys out of every test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in ("ANTHROPIC_API_KEY", "OPENAI_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_applied_when_no_config_file():
    config = load_config()
    assert config["provider"] == "anthropic"
    assert config["max_workers"] == 8
    assert config["context_lines"] == 3
    assert config["exclude"] == []
    assert config["commit_model"] is None
    assert config["config_path"] is None


def test_missing_explicit_path_uses_defaults(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["provider"] == "anthropic"
    assert config["config_path"] is None


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / "custom.yml"
    cfg.write_text("provider: gemini\nmax_workers: 2\n")
    config = load_config(config_path=str(cfg))
    assert config["provider"] == "gemini"
    assert config["max_workers"] == 2
    assert config["config_path"] == str(cfg)


def test_exclude_patterns_loaded(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("exclude:\n  - migrations/\n  - '*.lock'\n")
    config = load_config(config_path=str(cfg))
    assert config["exclude"] == ["migrations/", "*.lock"]


def test_null_values_fall_back_to_defaults(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("exclude:\nmax_workers: null\ncontext_lines: 0\nlanguage:\n")
    config = load_config(config_path=str(cfg))
    assert config["exclude"] == []
    assert config["max_workers"] == 8
    assert config["context_lines"] == 0
    assert config["review_language"] == "english"


def test_single_exclude_pattern_string(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("exclude: vendor/\n")
    assert load_config(config_path=str(cfg))["exclude"] == ["vendor/"]


def test_doc_language_falls_back_to_review_language(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("language: german\nreview_language: japanese\n")
    config = load_config(config_path=str(cfg))
    assert config["doc_language"] == "japanese"
    assert load_config(cli_overrides={"doc_language": "french"})["doc_language"] == "french"


def test_defaults_not_mutated_between_loads(tmp_path):
    load_config()["exclude"].append("vendor/")
    assert load_config()["exclude"] == []


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("review_model: flash\n")
    config = load_config(config_path=str(cfg), cli_overrides={"review_model": "pro"})
    assert config["review_model"] == "pro"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("review_model: flash\n")
    config = load_config(config_path=str(cfg), cli_overrides={"review_model": None})
    assert config["review_model"] == "flash"


def test_language_fallback(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("language: japanese\nreview_language: english\n")
    config = load_config(config_path=str(cfg))
    assert config["commit_language"] == "japanese"
    assert config["review_language"] == "english"


def test_language_override_applies_to_one_purpose_only():
    config = load_config(cli_overrides={"commit_language": "german"})
    assert config["commit_language"] == "german"
    assert config["review_language"] == "english"


def test_env_vars_loaded(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
    config = load_config()
    assert config["anthropic_api_key"] == "ant-key"
    assert config["openai_api_key"] == "oai-key"
    assert config["gemini_api_key"] == "gem-key"


def test_google_api_key_accepted_for_gemini(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "goog-key")
    assert load_config()["gemini_api_key"] == "goog-key"


def test_missing_env_vars_are_none():
    config = load_config()
    assert config["anthropic_api_key"] is None
    assert config["gemini_api_key"] is None


def test_invalid_yaml_raises(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("provider: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(config_path=str(cfg))


def test_non_mapping_raises(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError, match="must contain a mapping"):
        load_config(config_path=str(cfg))


def test_empty_file_uses_defaults(tmp_path):
    cfg = tmp_path / "gelf.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["provider"] == "anthropic"


class TestDiscovery:
    def test_nothing_found(self):
        assert find_config_file() is None

    def test_xdg_config_found(self, tmp_path):
        xdg_file = tmp_path / "xdg" / "gelf" / "gelf.yml"
        xdg_file.parent.mkdir(parents=True)
        xdg_file.write_text("provider: openai\n")
        assert find_config_file() == xdg_file
        assert load_config()["provider"] == "openai"

    def test_home_dotfile_found(self, tmp_path):
        home_file = tmp_path / "home" / ".gelf.yaml"
        home_file.parent.mkdir(parents=True)
        home_file.write_text("provider: gemini\n")
        assert find_config_file() == home_file

    def test_working_directory_wins(self, tmp_path):
        xdg_file = tmp_path / "xdg" / "gelf" / "gelf.yml"
        xdg_file.parent.mkdir(parents=True)
        xdg_file.write_text("provider: openai\n")
        (tmp_path / "gelf.yml").write_text("provider: gemini\n")
        assert load_config()["provider"] == "gemini"

    def test_search_order(self, tmp_path):
        paths = [str(p) for p in config_search_paths()]
        assert paths[0] == "gelf.yml"
        assert paths.index(str(tmp_path / "xdg" / "gelf" / "gelf.yml")) < paths.index(
            str(tmp_path / "home" / ".gelf.yml")
        )


def test_use_color():
    assert use_color({"color": "always"}) is True
    assert use_color({"color": "never"}) is False
    assert use_color({}) is True
