"""
Core data types for the promo extraction pipeline.

This module defines the fundamental data structures used throughout the pipeline:
- ContentNode: Read-only view of one node of the page tree (supplied by the caller)
- PromoRecord: One validated promotional offer
- ExtractStats: Counters collected over one extraction run
- ExtractionResult: Deduplicated records plus run statistics
- PromoPayload: The document handed to the persistence collaborator
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Collection, Protocol, Sequence


class ContentNode(Protocol):
    """Read-only node of a content tree.

    Any tree-shaped content representation can implement this; the
    pipeline never mutates it.
    """

    def text(self) -> str:
        """Full text content of the node, descendants included."""
        ...

    def children(self) -> Sequence[ContentNode]:
        """Child nodes in document order."""
        ...

    def parent(self) -> ContentNode | None:
        """Parent node, or None at the root or for a detached node."""
        ...

    def ancestor_of_kind(self, kinds: Collection[str]) -> ContentNode | None:
        """Nearest node of one of ``kinds``, starting with the node itself."""
        ...


@dataclass(frozen=True)
class PromoRecord:
    """A single promotional offer extracted from one card block.

    Attributes:
        title: Offer headline, at least the policy's minimum title length
        tags: Category labels from the tag vocabulary, first-seen order
        bullets: Benefit lines between the title and the code line
        code: Uppercase alphanumeric redemption code
    """
    title: str
    tags: tuple[str, ...] = ()
    bullets: tuple[str, ...] = ()
    code: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize the record in the published document's shape."""
        return {
            "title": self.title,
            "tags": list(self.tags),
            "bullets": list(self.bullets),
            "promocode": self.code,
        }


@dataclass
class ExtractStats:
    """Statistics collected during one extraction run.

    Attributes:
        markers: Nodes whose text contained the marker phrase
        detached: Marker nodes below the root that have lost their parent link
        candidates: Unique card blocks produced by the locator
        rejected: Candidates for which no record could be derived
        records: Records produced before deduplication
        duplicates: Records superseded by a later record with the same code
        promos: Records in the final output
    """
    markers: int = 0
    detached: int = 0
    candidates: int = 0
    rejected: int = 0
    records: int = 0
    duplicates: int = 0
    promos: int = 0


@dataclass
class ExtractionResult:
    """Deduplicated promos and the statistics of the run that produced them."""
    promos: list[PromoRecord] = field(default_factory=list)
    stats: ExtractStats = field(default_factory=ExtractStats)

    @property
    def is_empty(self) -> bool:
        """True when the run produced no promos at all.

        Callers usually treat this as a sign that the page structure
        changed or the content was blocked upstream.
        """
        return not self.promos


@dataclass
class PromoPayload:
    """Document shape consumed by the persistence collaborator."""
    last_updated_utc: datetime
    source: str
    promos: list[PromoRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lastUpdatedUtc": self.last_updated_utc.isoformat(),
            "source": self.source,
            "promos": [promo.to_dict() for promo in self.promos],
        }
