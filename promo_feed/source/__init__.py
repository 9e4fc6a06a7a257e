"""
Content source adapters.

The pipeline only needs the ``ContentNode`` interface; this package
provides the HTML implementation used by the runner.
"""

from .soup import SoupNode, parse_html

__all__ = ["SoupNode", "parse_html"]
