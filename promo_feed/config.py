"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SourceConfig: Which page the content came from and how its text is rendered
- LocateConfig: Card boundary heuristics (block kinds, climb bound, length range)
- NormalizeConfig: Line reconstruction settings
- PolicyConfig: Versioned extraction policy (tag vocabulary, UI labels, thresholds)
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


TEXT_MODES = ("lines", "flattened")
NORMALIZE_MODES = ("auto", "lines", "flattened")


@dataclass
class SourceConfig:
    """Configuration for the content source.

    Attributes:
        url: Label recorded as the payload source (the page the snapshot came from)
        text_mode: "lines" renders node text like a browser's innerText,
                   "flattened" joins all text with single spaces
    """

    url: str = "https://www.betus.com.pa/promotions/"
    text_mode: str = "lines"

    def __post_init__(self) -> None:
        if self.text_mode not in TEXT_MODES:
            raise ValueError(f"Unknown text_mode: {self.text_mode!r}")


@dataclass
class LocateConfig:
    """Configuration for the card boundary locator.

    Attributes:
        block_kinds: Node kinds that can start a climb (nearest one is used)
        max_climb: Maximum number of parent steps taken from the starting block
        min_length: Minimum card text length accepted
        max_length: Maximum card text length accepted
        anchor_phrases: Optional secondary phrases (e.g. a call-to-action label);
                        when set, climbing only stops at text containing one of them
    """

    block_kinds: list[str] = field(default_factory=lambda: ["article", "li", "section", "div"])
    max_climb: int = 7
    min_length: int = 60
    max_length: int = 4000
    anchor_phrases: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.max_climb < 0:
            raise ValueError("max_climb must be non-negative")
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")


@dataclass
class NormalizeConfig:
    """Configuration for card text normalization.

    Attributes:
        mode: "lines" to split on existing breaks, "flattened" to rebuild them first,
              "auto" to rebuild only when the block has no line break at all
        bullet_glyphs: Characters that start a new line in flattened text
        sentence_punctuation: Characters that end a line when followed by whitespace
    """

    mode: str = "auto"
    bullet_glyphs: list[str] = field(default_factory=lambda: ["•", "●", "▪"])
    sentence_punctuation: str = ".!?"

    def __post_init__(self) -> None:
        if self.mode not in NORMALIZE_MODES:
            raise ValueError(f"Unknown normalize mode: {self.mode!r}")


@dataclass
class PolicyConfig:
    """Versioned extraction policy passed into the field extractor.

    Attributes:
        version: Policy revision, bumped whenever the tables below change
        marker_phrase: Literal phrase introducing a redemption code
        tag_vocabulary: Closed set of category labels a card may carry
        ui_labels: Button/UI labels never taken as title or bullet (prefix match)
        min_title_length: Minimum title length
        min_bullet_length: Bullets shorter than this are dropped
    """

    version: int = 1
    marker_phrase: str = "Promocode"
    tag_vocabulary: list[str] = field(
        default_factory=lambda: ["SIGN-UP", "SPORTSBOOK", "CASINO", "CRYPTO", "RE-UP"]
    )
    ui_labels: list[str] = field(default_factory=lambda: ["Join Now", "Bonus Details", "Filter by:"])
    min_title_length: int = 6
    min_bullet_length: int = 3

    def __post_init__(self) -> None:
        if not self.marker_phrase.strip():
            raise ValueError("marker_phrase cannot be empty")
        if not self.tag_vocabulary:
            raise ValueError("tag_vocabulary cannot be empty")


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    source: SourceConfig = field(default_factory=SourceConfig)
    locate: LocateConfig = field(default_factory=LocateConfig)
    normalize: NormalizeConfig = field(default_factory=NormalizeConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "source": {
            "url": cfg.source.url,
            "text_mode": cfg.source.text_mode,
        },
        "locate": {
            "block_kinds": list(cfg.locate.block_kinds),
            "max_climb": cfg.locate.max_climb,
            "min_length": cfg.locate.min_length,
            "max_length": cfg.locate.max_length,
            "anchor_phrases": list(cfg.locate.anchor_phrases),
        },
        "normalize": {
            "mode": cfg.normalize.mode,
            "bullet_glyphs": list(cfg.normalize.bullet_glyphs),
            "sentence_punctuation": cfg.normalize.sentence_punctuation,
        },
        "policy": {
            "version": cfg.policy.version,
            "marker_phrase": cfg.policy.marker_phrase,
            "tag_vocabulary": list(cfg.policy.tag_vocabulary),
            "ui_labels": list(cfg.policy.ui_labels),
            "min_title_length": cfg.policy.min_title_length,
            "min_bullet_length": cfg.policy.min_bullet_length,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        source=SourceConfig(**data["source"]),
        locate=LocateConfig(**data["locate"]),
        normalize=NormalizeConfig(**data["normalize"]),
        policy=PolicyConfig(**data["policy"]),
        logging=LoggingConfig(**data["logging"]),
    )
