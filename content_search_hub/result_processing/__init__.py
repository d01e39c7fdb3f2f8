"""Result processing package for search hits.

This package contains modules for turning a raw hit stream into display
results:
- merger: Dedup and cap a hit stream into a result set
- visibility: Withhold hidden items from callers without permission
- formatter: Map retained hits to title/icon/url triples
"""

from .formatter import ResultFormatter, format_results
from .merger import ResultMerger, merge_hits, offer_hit
from .visibility import HiddenItemFilter

__all__ = [
    "HiddenItemFilter",
    "ResultFormatter",
    "ResultMerger",
    "format_results",
    "merge_hits",
    "offer_hit",
]
