"""
Data Engineering Module for the Urban vs. Rural Overdose Report

This module contains all data engineering code organized by pipeline stage:
1. load/ - Read the four raw source files
2. clean/ - Per-source cleaning and type coercion
3. features/ - Annual densification and Urban/Rural classification
4. integrate/ - Inner joins on State/Year
5. datasets/ - Merged dataset creation
6. utils/ - Schema validation

Usage:
    from data_engineering.datasets.build_merged_dataset import build_merged_dataset
    from data_engineering.features import densify_years
"""

__version__ = "1.0.0"
