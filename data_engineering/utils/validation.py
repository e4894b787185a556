#!/usr/bin/env python3
"""
Data Quality and Schema Validation

Uses pandera to validate the cleaned source tables and the merged
state-year dataset for:
- Schema compliance (correct data types, ranges, allowed labels)
- Key uniqueness (one row per State/Year)
- Data quality checks (missing values, empty classes)

Usage:
    from data_engineering.utils.validation import validate_table, validate_merged_dataset

    validate_table(mortality_clean, 'mortality')
    validate_merged_dataset(merged)
"""

import pandera as pa
from pandera import Column, Check
import pandas as pd

from config.settings import (
    CENSUS_REGIONS,
    CLASS_ORDER,
    MIN_YEAR,
    MAX_YEAR,
)
from data_engineering.clean.cleaners import percent_missing


YEAR_COLUMN = Column(int, Check.in_range(MIN_YEAR, MAX_YEAR), nullable=False)
STATE_COLUMN = Column(str, Check.str_length(min_value=1), nullable=False)


# ============================================================================
# CLEANED SOURCE SCHEMAS
# ============================================================================

mortality_schema = pa.DataFrameSchema(
    {
        'State': STATE_COLUMN,
        'Year': YEAR_COLUMN,
        'Crude_Rate': Column(float, Check.greater_than_or_equal_to(0), nullable=False,
                             description='Deaths per 100,000 population'),
        'Deaths': Column(int, Check.greater_than_or_equal_to(0), nullable=False),
    },
    unique=['State', 'Year'],
    strict=False,
    coerce=True,
    description='Cleaned mortality table'
)

facility_schema = pa.DataFrameSchema(
    {
        'State': STATE_COLUMN,
        'Year': YEAR_COLUMN,
        'Facilities': Column(int, Check.greater_than_or_equal_to(0), nullable=False),
    },
    unique=['State', 'Year'],
    strict=False,
    coerce=True,
    description='Cleaned facility table (single indicator)'
)

region_schema = pa.DataFrameSchema(
    {
        'State': Column(str, Check.str_length(min_value=1), nullable=False, unique=True),
        'Region': Column(str, Check.isin(CENSUS_REGIONS), nullable=False),
    },
    strict=False,
    coerce=True,
    description='Census region lookup'
)

# Edge years may stay unfilled after densification
population_schema = pa.DataFrameSchema(
    {
        'State': STATE_COLUMN,
        'Year': YEAR_COLUMN,
        'Population': Column(float, Check.greater_than(0), nullable=True),
        'Density': Column(float, Check.greater_than(0), nullable=True),
    },
    unique=['State', 'Year'],
    strict=False,
    coerce=True,
    description='Annual population and density'
)

SOURCE_SCHEMAS = {
    'mortality': mortality_schema,
    'facilities': facility_schema,
    'regions': region_schema,
    'population': population_schema,
}


# ============================================================================
# MERGED DATASET SCHEMA
# ============================================================================

merged_schema = pa.DataFrameSchema(
    {
        'State': STATE_COLUMN,
        'Year': YEAR_COLUMN,
        'Region': Column(str, Check.isin(CENSUS_REGIONS), nullable=False),
        'Crude_Rate': Column(float, Check.greater_than_or_equal_to(0), nullable=False),
        'Deaths': Column(int, Check.greater_than_or_equal_to(0), nullable=False),
        'Facilities': Column(int, Check.greater_than_or_equal_to(0), nullable=False),
        'Population': Column(float, Check.greater_than(0), nullable=False),
        'Density': Column(float, Check.greater_than(0), nullable=False),
        'Urban_Rural': Column(str, Check.isin(CLASS_ORDER), nullable=False,
                              description='Density > threshold is Urban'),
        'Deaths_Per_Capita': Column(float, Check.greater_than_or_equal_to(0), nullable=False),
    },
    unique=['State', 'Year'],
    strict=False,
    coerce=True,
    description='Merged state-year overdose dataset'
)


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def _validate(schema: pa.DataFrameSchema, df: pd.DataFrame, name: str,
              verbose: bool = True) -> pd.DataFrame:
    try:
        validated = schema.validate(df, lazy=True)
    except pa.errors.SchemaErrors as err:
        print(f'  ❌ Schema validation failed for {name}:')
        print(err.failure_cases)
        raise
    if verbose:
        print(f'  ✓ Schema validation passed for {name}')
    return validated


def validate_table(df: pd.DataFrame, source: str, verbose: bool = True) -> pd.DataFrame:
    """
    Validate one cleaned source table

    Args:
        df: Cleaned table
        source: One of mortality, facilities, regions, population
        verbose: Print progress

    Returns:
        The validated (type-coerced) DataFrame

    Raises:
        ValueError: Unknown source name
        pandera.errors.SchemaErrors: If validation fails
    """
    if source not in SOURCE_SCHEMAS:
        raise ValueError(f'Unknown source {source!r}, expected one of {list(SOURCE_SCHEMAS)}')
    return _validate(SOURCE_SCHEMAS[source], df, source, verbose=verbose)


def validate_merged_dataset(df: pd.DataFrame, verbose: bool = True) -> pd.DataFrame:
    """
    Validate the merged state-year dataset

    Returns:
        The validated DataFrame

    Raises:
        ValueError: If the dataset is empty
        pandera.errors.SchemaErrors: If validation fails
    """
    if verbose:
        print(f'\n{"="*70}')
        print('Validating merged dataset')
        print(f'{"="*70}')

    if df.empty:
        raise ValueError(
            '❌ Merged dataset is empty: no State/Year is present in all four sources'
        )

    validated = _validate(merged_schema, df, 'merged dataset', verbose=verbose)

    if verbose:
        check_data_quality(validated, 'merged dataset')
        print(f'  ✓ All validations passed\n')
    return validated


def check_data_quality(df: pd.DataFrame, name: str):
    """
    Perform data quality checks beyond schema validation

    Checks:
    - Missing value percentages
    - Duplicate State/Year keys
    - Urban/Rural classes with no rows
    """
    if len(df) == 0:
        print(f'  ⚠️  {name} has no rows')
        return

    # Missing values
    missing_pct = percent_missing(df).sort_values(ascending=False)
    high_missing = missing_pct[missing_pct > 50]
    if len(high_missing) > 0:
        print(f'  ⚠️  High missing values (>50%):')
        for col, pct in high_missing.items():
            print(f'     - {col}: {pct:.1f}%')

    # Duplicates
    if {'State', 'Year'}.issubset(df.columns):
        dup_count = df.duplicated(subset=['State', 'Year']).sum()
        if dup_count > 0:
            print(f'  ⚠️  WARNING: {dup_count} duplicate State/Year keys found')

    # Class balance
    if 'Urban_Rural' in df.columns:
        class_counts = df['Urban_Rural'].value_counts()
        print(f'  Classification distribution:')
        for label in CLASS_ORDER:
            count = class_counts.get(label, 0)
            print(f'    - {label}: {count:,} rows ({count / len(df) * 100:.1f}%)')
            if count == 0:
                print(f'  ⚠️  No {label} rows: comparisons for this class will be empty')
