"""
Main pipeline orchestration for promo extraction.

This module coordinates the entire workflow over one already-acquired page:
1. Locate candidate card blocks around the marker phrase
2. Normalize each block into lines
3. Extract a record from each block (or reject it)
4. Deduplicate records by redemption code

Fetching the page and writing the payload are left to the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .config import AppConfig
from .core.dedup import dedup_promos
from .core.types import ContentNode, ExtractionResult, ExtractStats, PromoPayload, PromoRecord
from .extract.fields import extract_promo
from .extract.locator import locate_card_blocks
from .extract.normalizer import normalize_lines
from .logging_utils import get_logger, log_event, truncate_text
from .source.soup import parse_html


def extract_promos(
    root: ContentNode,
    cfg: AppConfig,
    logger: logging.Logger | None = None,
) -> ExtractionResult:
    """Run the extraction pipeline over a content tree.

    Args:
        root: Root node of the page content
        cfg: Application configuration
        logger: Logger for run events (defaults to the package logger)

    Returns:
        ExtractionResult with promos unique by code. An empty result is
        not an error; check ``is_empty`` to apply an escalation policy.
    """
    logger = logger or get_logger()
    stats = ExtractStats()
    policy = cfg.policy

    blocks = locate_card_blocks(root, cfg.locate, policy.marker_phrase, logger=logger, stats=stats)

    records: list[PromoRecord] = []
    for block in blocks:
        lines = normalize_lines(block, cfg.normalize, policy)
        record = extract_promo(lines, policy)
        if record is None:
            stats.rejected += 1
            log_event(
                logger,
                "Rejected card block",
                logging.DEBUG,
                lines=len(lines),
                preview=truncate_text(" | ".join(lines)),
            )
            continue
        records.append(record)

    promos = dedup_promos(records)
    stats.records = len(records)
    stats.duplicates = len(records) - len(promos)
    stats.promos = len(promos)

    result = ExtractionResult(promos=promos, stats=stats)
    if result.is_empty:
        log_event(
            logger,
            "No promos extracted; page structure may have changed or the content was blocked",
            logging.WARNING,
            markers=stats.markers,
            candidates=stats.candidates,
        )
    else:
        log_event(
            logger,
            f"Extracted {stats.promos} promos",
            candidates=stats.candidates,
            rejected=stats.rejected,
            duplicates=stats.duplicates,
            policy_version=policy.version,
        )
    return result


def extract_promos_from_html(
    html: str,
    cfg: AppConfig,
    logger: logging.Logger | None = None,
) -> ExtractionResult:
    """Parse an HTML page with the configured text mode and extract its promos."""
    root = parse_html(html, text_mode=cfg.source.text_mode)
    return extract_promos(root, cfg, logger=logger)


def build_payload(
    result: ExtractionResult,
    source: str,
    now: datetime | None = None,
) -> PromoPayload:
    """Shape an extraction result into the document the persistence layer writes."""
    return PromoPayload(
        last_updated_utc=now or datetime.now(timezone.utc),
        source=source,
        promos=list(result.promos),
    )
