"""
State Layer

Responsibility:
Own the mutable viewer state: the current page and the cross-page selection.

PRINCIPLES:
1. Explicit owner objects, no module globals
2. Page data is replaced, never merged
3. Selection survives navigation
"""

from .selection import SelectionAccumulator
from .page_cache import PageCache
from .failures import FailureLog, FetchFailure
from .envelope import PaginationDTO

__all__ = [
    'SelectionAccumulator',
    'PageCache',
    'FailureLog',
    'FetchFailure',
    'PaginationDTO',
]
