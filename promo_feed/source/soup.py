"""
BeautifulSoup-backed content source.

Wraps a parsed HTML document so the extraction pipeline can walk it
through the ``ContentNode`` interface. Two text renderings are offered:

1. lines: mimics a browser's innerText (block elements and <br> start new
   lines, inline elements do not), so card text keeps its visual lines
2. flattened: mimics textContent, every string joined with single spaces;
   the normalizer has to rebuild line boundaries from this
"""

from __future__ import annotations

import re
from typing import Collection

from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag


# Tags that never contribute visible text
DROPPED_TAGS = ["script", "style", "noscript", "template"]

# Tags rendered on their own line(s)
BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "button", "dd", "details", "dialog",
    "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav",
    "ol", "p", "pre", "section", "summary", "table", "td", "th", "tr", "ul",
})

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)
_WS_RE = re.compile(r"\s+")


class _Document:
    """Per-document render cache shared by every node wrapper."""

    def __init__(self, soup: BeautifulSoup, text_mode: str):
        self.soup = soup
        self.text_mode = text_mode
        self._raw: dict[int, str] = {}
        self._text: dict[int, str] = {}

    def text_of(self, tag: Tag) -> str:
        key = id(tag)
        cached = self._text.get(key)
        if cached is None:
            if self.text_mode == "flattened":
                cached = " ".join(tag.get_text(" ").split())
            else:
                cached = _clean_lines(self._raw_of(tag))
            self._text[key] = cached
        return cached

    def _raw_of(self, tag: Tag) -> str:
        key = id(tag)
        cached = self._raw.get(key)
        if cached is not None:
            return cached
        parts: list[str] = []
        for child in tag.children:
            if isinstance(child, NavigableString):
                if isinstance(child, _SKIPPED_STRINGS):
                    continue
                parts.append(_WS_RE.sub(" ", str(child)))
            elif isinstance(child, Tag):
                if child.name == "br":
                    parts.append("\n")
                elif child.name in BLOCK_TAGS:
                    parts.append("\n" + self._raw_of(child) + "\n")
                else:
                    parts.append(self._raw_of(child))
        raw = "".join(parts)
        self._raw[key] = raw
        return raw


def _clean_lines(raw: str) -> str:
    lines = (" ".join(line.split()) for line in raw.split("\n"))
    return "\n".join(line for line in lines if line)


class SoupNode:
    """``ContentNode`` implementation over a BeautifulSoup tag."""

    __slots__ = ("_tag", "_doc")

    def __init__(self, tag: Tag, doc: _Document):
        self._tag = tag
        self._doc = doc

    @property
    def kind(self) -> str:
        return self._tag.name

    def text(self) -> str:
        return self._doc.text_of(self._tag)

    def children(self) -> list[SoupNode]:
        return [SoupNode(child, self._doc) for child in self._tag.children if isinstance(child, Tag)]

    def parent(self) -> SoupNode | None:
        parent = self._tag.parent
        if parent is None:
            return None
        return SoupNode(parent, self._doc)

    def ancestor_of_kind(self, kinds: Collection[str]) -> SoupNode | None:
        current: Tag | None = self._tag
        while current is not None:
            if current.name in kinds:
                return SoupNode(current, self._doc)
            current = current.parent
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SoupNode):
            return NotImplemented
        return self._tag is other._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"SoupNode(<{self.kind}>)"


def parse_html(html: str, text_mode: str = "lines") -> SoupNode:
    """Parse an HTML page into the root ``SoupNode``.

    Args:
        html: The page markup (already fetched or rendered by the caller)
        text_mode: "lines" for innerText-like text, "flattened" for
                   space-joined textContent-like text

    Returns:
        The document root; its kind is "[document]" and it has no parent
    """
    if text_mode not in ("lines", "flattened"):
        raise ValueError(f"Unknown text_mode: {text_mode!r}")
    soup = BeautifulSoup(html, "html.parser")
    # Remove non-content tags
    for tag in soup(DROPPED_TAGS):
        tag.decompose()
    return SoupNode(soup, _Document(soup, text_mode))
