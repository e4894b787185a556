"""Data cleaning modules"""

from .cleaners import (
    to_numeric,
    clean_mortality,
    clean_facilities,
    clean_regions,
    clean_population,
    percent_missing
)

__all__ = [
    'to_numeric',
    'clean_mortality',
    'clean_facilities',
    'clean_regions',
    'clean_population',
    'percent_missing'
]
