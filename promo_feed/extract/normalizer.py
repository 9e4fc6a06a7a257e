"""
Card text normalization.

Turns a raw card block into ordered, clean lines. When the block arrives
flattened (all text on one line), line boundaries are rebuilt from the
tokens that start or end a visual line on the card: tag labels, the
marker phrase, sentence ends and bullet glyphs. The rebuild is lossy; it
aims at the card's visual line structure, not the exact text.
"""

from __future__ import annotations

import re

from ..config import NormalizeConfig, PolicyConfig


def split_lines(text: str) -> list[str]:
    """Split on line breaks, collapse whitespace, drop empty lines."""
    lines = (" ".join(line.split()) for line in text.splitlines())
    return [line for line in lines if line]


def reconstruct_line_breaks(text: str, cfg: NormalizeConfig, policy: PolicyConfig) -> str:
    """Insert line breaks into flattened card text.

    Args:
        text: Card text with no (or unreliable) line breaks
        cfg: Normalizer settings (bullet glyphs, sentence punctuation)
        policy: Extraction policy supplying the tag vocabulary and marker phrase

    Returns:
        The text with a newline around each tag token, before each marker
        phrase (rewritten as "<marker>: "), after sentence-ending punctuation
        and in place of each bullet glyph

    Examples:
        >>> reconstruct_line_breaks("SIGN-UP Welcome Bonus Promocode JOIN125", cfg, policy)
        '\\nSIGN-UP\\n Welcome Bonus \\nPromocode: JOIN125'
    """
    # longest first so a token never matches inside a longer one
    tokens = sorted(policy.tag_vocabulary, key=len, reverse=True)
    # standalone tokens only: "CRYPTO50" is a code, not the CRYPTO tag
    tag_re = re.compile(
        r"(?<![A-Za-z0-9])(" + "|".join(re.escape(token) for token in tokens) + r")(?![A-Za-z0-9])"
    )
    text = tag_re.sub(r"\n\1\n", text)

    # "Promocodes cannot be combined" stays prose
    boundary = r"(?![A-Za-z0-9])" if policy.marker_phrase[-1:].isalnum() else ""
    marker_re = re.compile(re.escape(policy.marker_phrase) + boundary + r"\s*:?\s*", re.IGNORECASE)
    text = marker_re.sub(lambda _: f"\n{policy.marker_phrase}: ", text)

    if cfg.sentence_punctuation:
        sentence_re = re.compile("([" + re.escape(cfg.sentence_punctuation) + r"])\s+")
        text = sentence_re.sub("\\1\n", text)

    for glyph in cfg.bullet_glyphs:
        text = text.replace(glyph, "\n")
    return text


def normalize_lines(block: str, cfg: NormalizeConfig, policy: PolicyConfig) -> list[str]:
    """Convert a raw card block into its ordered, non-empty lines."""
    mode = cfg.mode
    if mode == "auto":
        mode = "lines" if "\n" in block.strip() else "flattened"
    if mode == "flattened":
        block = reconstruct_line_breaks(block, cfg, policy)
    return split_lines(block)
