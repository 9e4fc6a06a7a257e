"""
Promo Feed - heuristic promotional-offer extraction.

This package turns a promotions page whose markup has no stable structure
into validated offer records (title, tags, bullets, redemption code),
anchored on the phrase that introduces each code.

Main entry point is ``extract_promos_from_html`` (or ``extract_promos`` for
any ``ContentNode`` tree).

Example:
    >>> result = extract_promos_from_html(html, AppConfig())
    >>> payload = build_payload(result, source="https://example.com/promotions/")
"""

__all__ = [
    "__version__",
    "AppConfig",
    "ExtractionResult",
    "PromoRecord",
    "build_payload",
    "extract_promos",
    "extract_promos_from_html",
    "load_config",
]
__version__ = "0.1.0"

from .config import AppConfig, load_config
from .core.types import ExtractionResult, PromoRecord
from .runner import build_payload, extract_promos, extract_promos_from_html
