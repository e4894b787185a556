"""Feature derivation: annual densification and classification"""

from .interpolation import interpolate_linear, densify_years
from .classification import classify_density, add_urban_rural, add_deaths_per_capita

__all__ = [
    'interpolate_linear',
    'densify_years',
    'classify_density',
    'add_urban_rural',
    'add_deaths_per_capita'
]
