"""Data integration modules"""

from .merge_sources import (
    merge_sources,
    year_window
)

__all__ = [
    'merge_sources',
    'year_window'
]
