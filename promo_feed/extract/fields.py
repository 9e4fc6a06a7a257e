"""
Field extraction from normalized card lines.

A card's lines are parsed into a ``PromoRecord``:
- tag lines: a line that is exactly one of the tag vocabulary labels
- code line: "<marker> [:] TOKEN", the token uppercased is the code
- title: the first substantial line that is none of the above nor a UI label
- bullets: what sits between the title and the code line

Blocks without a title or a code yield no record. That is the normal
outcome for navigation or footer blocks that happen to mention the marker.
"""

from __future__ import annotations

import re
from typing import Sequence

from ..config import PolicyConfig
from ..core.types import PromoRecord


def _marker_prefix(policy: PolicyConfig) -> str:
    # "Promocodes ..." is prose, not a code line
    boundary = r"(?![A-Za-z0-9])" if policy.marker_phrase[-1:].isalnum() else ""
    return r"^" + re.escape(policy.marker_phrase) + boundary


def _code_re(policy: PolicyConfig) -> re.Pattern[str]:
    return re.compile(_marker_prefix(policy) + r"\s*:?\s*([A-Za-z0-9]+)", re.IGNORECASE)


def _marker_line_re(policy: PolicyConfig) -> re.Pattern[str]:
    return re.compile(_marker_prefix(policy), re.IGNORECASE)


def _is_ui_label(line: str, policy: PolicyConfig) -> bool:
    lower = line.lower()
    return any(lower.startswith(label.lower()) for label in policy.ui_labels)


def extract_promo(lines: Sequence[str], policy: PolicyConfig) -> PromoRecord | None:
    """Parse one card's lines into a record.

    Args:
        lines: Normalized lines of a single card, in document order
        policy: Extraction policy (vocabulary, UI labels, marker, thresholds)

    Returns:
        The record, or None when no code line or no title was found

    Examples:
        >>> extract_promo(["SIGN-UP", "Welcome Bonus", "Get 125% up to $500",
        ...                "Promocode: JOIN125", "Join Now"], PolicyConfig())
        PromoRecord(title='Welcome Bonus', tags=('SIGN-UP',), bullets=('Get 125% up to $500',), code='JOIN125')
    """
    vocabulary = {tag.upper() for tag in policy.tag_vocabulary}
    code_re = _code_re(policy)
    marker_line_re = _marker_line_re(policy)

    tags: list[str] = []
    code = ""
    code_idx: int | None = None
    title = ""
    title_idx: int | None = None

    for idx, line in enumerate(lines):
        upper = line.upper()
        if upper in vocabulary:
            if upper not in tags:
                tags.append(upper)
            continue
        if code_idx is None:
            match = code_re.match(line)
            if match:
                code = match.group(1).upper()
                code_idx = idx
                continue
        if title_idx is None and _is_title_candidate(line, policy, marker_line_re):
            title = line
            title_idx = idx

    if not code or title_idx is None:
        return None

    end = code_idx if code_idx is not None else len(lines)
    bullets = [
        line
        for line in lines[title_idx + 1:end]
        if line.upper() not in vocabulary
        and not _is_ui_label(line, policy)
        and len(line) >= policy.min_bullet_length
    ]

    return PromoRecord(title=title, tags=tuple(tags), bullets=tuple(bullets), code=code)


def _is_title_candidate(line: str, policy: PolicyConfig, marker_line_re: re.Pattern[str]) -> bool:
    if len(line) < policy.min_title_length:
        return False
    if marker_line_re.match(line):
        return False
    return not _is_ui_label(line, policy)
