"""Source file loaders"""

from .loaders import (
    read_delimited,
    load_mortality,
    load_facilities,
    load_regions,
    load_population
)

__all__ = [
    'read_delimited',
    'load_mortality',
    'load_facilities',
    'load_regions',
    'load_population'
]
