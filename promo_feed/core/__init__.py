"""
Core domain models and business logic.

This package contains data types and business logic that is
independent of any specific pipeline stage.
"""

from .types import ContentNode, ExtractionResult, ExtractStats, PromoPayload, PromoRecord
from .dedup import dedup_promos

__all__ = [
    "ContentNode",
    "ExtractionResult",
    "ExtractStats",
    "PromoPayload",
    "PromoRecord",
    "dedup_promos",
]
