"""Tests for YAML configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from promo_feed.config import AppConfig, LocateConfig, NormalizeConfig, PolicyConfig, SourceConfig, load_config


def test_load_config_without_path_returns_defaults():
    """No config file means the built-in defaults"""
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.locate.max_climb == 7
    assert (cfg.locate.min_length, cfg.locate.max_length) == (60, 4000)
    assert cfg.policy.tag_vocabulary == ["SIGN-UP", "SPORTSBOOK", "CASINO", "CRYPTO", "RE-UP"]


def test_load_config_returns_independent_defaults():
    """Mutating one loaded config never leaks into the next"""
    first = load_config(None)
    first.policy.ui_labels.append("Claim")

    assert "Claim" not in load_config(None).policy.ui_labels


def test_partial_yaml_merges_over_defaults(tmp_path: Path):
    """Only the keys present in the file are overridden"""
    path = tmp_path / "config.yaml"
    path.write_text(
        "locate:\n"
        "  max_climb: 4\n"
        "  anchor_phrases: [Join Now]\n"
        "policy:\n"
        "  version: 3\n"
        "  marker_phrase: Bonus Code\n"
        "source:\n"
        "  text_mode: flattened\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.locate.max_climb == 4
    assert cfg.locate.anchor_phrases == ["Join Now"]
    assert cfg.locate.max_length == 4000
    assert cfg.policy.version == 3
    assert cfg.policy.marker_phrase == "Bonus Code"
    assert cfg.policy.min_title_length == 6
    assert cfg.source.text_mode == "flattened"


def test_unknown_keys_are_ignored(tmp_path: Path):
    """Unknown sections and keys do not break loading"""
    path = tmp_path / "config.yaml"
    path.write_text("fetch:\n  retries: 3\nlogging:\n  level: DEBUG\n  colour: true\n", encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg.logging.level == "DEBUG"


def test_empty_yaml_file_uses_defaults(tmp_path: Path):
    """An empty file is the same as no overrides"""
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


def test_missing_file_raises(tmp_path: Path):
    """A missing config file is a configuration error"""
    with pytest.raises(OSError):
        load_config(str(tmp_path / "missing.yaml"))


@pytest.mark.parametrize(
    "factory",
    [
        lambda: LocateConfig(max_climb=-1),
        lambda: LocateConfig(min_length=500, max_length=100),
        lambda: NormalizeConfig(mode="html"),
        lambda: PolicyConfig(marker_phrase="  "),
        lambda: PolicyConfig(tag_vocabulary=[]),
        lambda: SourceConfig(text_mode="markdown"),
    ],
)
def test_impossible_values_are_rejected(factory):
    """Impossible settings fail fast at construction"""
    with pytest.raises(ValueError):
        factory()


def test_invalid_yaml_value_is_rejected(tmp_path: Path):
    """Validation also applies to values loaded from YAML"""
    path = tmp_path / "config.yaml"
    path.write_text("normalize:\n  mode: sometimes\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(str(path))
