"""
Card boundary detection.

Offer cards on the promotions page carry no stable markup, so cards are
found from the one reliable anchor, the marker phrase in front of a
redemption code. For every node containing the marker we climb a bounded
number of parent links until the text looks like one whole card.
"""

from __future__ import annotations

import logging
from typing import Iterator

from ..config import LocateConfig
from ..core.types import ContentNode, ExtractStats
from ..logging_utils import log_event


def iter_marker_nodes(root: ContentNode, marker_phrase: str) -> Iterator[ContentNode]:
    """Yield every node whose text contains the marker, in document order.

    Ancestors come before their descendants, so a wrapper holding several
    cards is yielded before the cards themselves.
    """
    needle = marker_phrase.lower()
    stack = [root]
    while stack:
        node = stack.pop()
        if needle not in node.text().lower():
            # no descendant can contain it either
            continue
        yield node
        stack.extend(reversed(node.children()))


def looks_like_card(text: str, cfg: LocateConfig, marker_phrase: str) -> bool:
    """Stopping rule for the climb: marker present, length in range, anchor if configured."""
    lower = text.lower()
    if marker_phrase.lower() not in lower:
        return False
    if not cfg.min_length <= len(text) <= cfg.max_length:
        return False
    if cfg.anchor_phrases:
        return any(anchor.lower() in lower for anchor in cfg.anchor_phrases)
    return True


def climb_to_card(node: ContentNode, cfg: LocateConfig, marker_phrase: str) -> ContentNode | None:
    """Climb from a marker node's nearest block ancestor to its card.

    Returns None when the node has no block-like ancestor at all. When the
    climb bound runs out before the stopping rule holds, the last ancestor
    reached is returned.
    """
    card = node.ancestor_of_kind(cfg.block_kinds)
    if card is None:
        return None
    for _ in range(cfg.max_climb):
        parent = card.parent()
        if parent is None:
            break
        if looks_like_card(card.text().strip(), cfg, marker_phrase):
            break
        card = parent
    return card


def locate_card_blocks(
    root: ContentNode,
    cfg: LocateConfig,
    marker_phrase: str,
    logger: logging.Logger | None = None,
    stats: ExtractStats | None = None,
) -> list[str]:
    """Find the text of every candidate offer card under ``root``.

    Args:
        root: Root of the content tree
        cfg: Locator thresholds
        marker_phrase: Phrase that introduces a redemption code
        logger: Optional logger for per-run counts
        stats: Optional stats object updated with marker/candidate counts

    Returns:
        Unique card texts in first-seen order. Blocks missing the marker or
        outside the accepted length range are dropped.
    """
    stats = stats if stats is not None else ExtractStats()
    needle = marker_phrase.lower()
    seen: set[str] = set()
    blocks: list[str] = []
    out_of_range = 0

    for node in iter_marker_nodes(root, marker_phrase):
        stats.markers += 1
        card = climb_to_card(node, cfg, marker_phrase)
        if card is None:
            # document, html and body sit above every block; only orphans count
            if node is not root and node.parent() is None:
                stats.detached += 1
            continue

        text = card.text().strip()
        if needle not in text.lower():
            continue
        if not cfg.min_length <= len(text) <= cfg.max_length:
            out_of_range += 1
            continue

        if text in seen:
            continue
        seen.add(text)
        blocks.append(text)

    stats.candidates = len(blocks)
    log_event(
        logger,
        "Located card blocks",
        logging.DEBUG,
        markers=stats.markers,
        detached=stats.detached,
        out_of_range=out_of_range,
        candidates=len(blocks),
    )
    return blocks
