"""
Promo deduplication by redemption code.

The locator can hand the same offer to the extractor several times (a
wrapper around a group of cards, then the card itself). Records sharing a
code are collapsed here.
"""

from __future__ import annotations

from typing import Iterable

from .types import PromoRecord


def dedup_promos(records: Iterable[PromoRecord]) -> list[PromoRecord]:
    """Collapse records that share a redemption code.

    When several records carry the same code, the last one processed wins.
    Output order is the order in which each code was first seen, not the
    order of the final overwrite.

    Args:
        records: Records in candidate-discovery order

    Returns:
        One record per code

    Examples:
        >>> first = PromoRecord(title="Welcome Bonus", code="JOIN125")
        >>> second = PromoRecord(title="Welcome Bonus 125%", code="JOIN125")
        >>> dedup_promos([first, second]) == [second]
        True
    """
    by_code: dict[str, PromoRecord] = {}
    for record in records:
        # dict keeps the first insertion position on overwrite
        by_code[record.code] = record
    return list(by_code.values())
