"""
Promo extraction stages.

This package holds the three per-card stages of the pipeline:
card boundary location, text normalization and field extraction.
"""

from .fields import extract_promo
from .locator import climb_to_card, iter_marker_nodes, locate_card_blocks, looks_like_card
from .normalizer import normalize_lines, reconstruct_line_breaks, split_lines

__all__ = [
    "climb_to_card",
    "extract_promo",
    "iter_marker_nodes",
    "locate_card_blocks",
    "looks_like_card",
    "normalize_lines",
    "reconstruct_line_breaks",
    "split_lines",
]
