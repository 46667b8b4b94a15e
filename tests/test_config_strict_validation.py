from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import CallChainConfig, ConfigError, load_config


def _write_config(repo_root: Path, toml_content: str) -> None:
    (repo_root / "callchain.toml").write_text(toml_content, encoding="utf-8")


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "exclude = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_unsupported_extension_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'extensions = [".rb"]')

    with pytest.raises(ConfigError, match="Unsupported extensions"):
        load_config(tmp_path)


def test_zero_chain_depth_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "max_chain_depth = 0")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_list_suppressed_codes_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'suppressed_codes = "6133"')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
exclude = ["**/*.test.ts"]
extensions = [".TS", ".tsx"]
max_chain_depth = 3
suppressed_codes = [6133, "F401"]
trigger_event_props = ["onClick", "onKeyDown"]
tolerate_syntax_errors = true
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.exclude == ["**/*.test.ts"]
    assert config.extensions == [".ts", ".tsx"]
    assert config.max_chain_depth == 3
    assert config.suppressed_codes == ["6133", "F401"]
    assert config.trigger_event_props == ["onClick", "onKeyDown"]
    assert config.tolerate_syntax_errors is True


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == CallChainConfig()


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.output_dir == ".callchain"
    assert config.include == []
    assert config.exclude == []
    assert "node_modules" in config.exclude_dirs
    assert config.max_chain_depth == 6
    assert set(config.suppressed_codes) == {"6133", "6196", "F401", "F841"}
    assert config.trigger_event_props[0] == "onClick"
    assert ".tsx" in config.extensions
