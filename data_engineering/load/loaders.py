"""
Source File Loaders

Reads the four raw inputs into string-typed DataFrames. Cleaning decides
what is numeric, so nothing is coerced here.

Functions:
    - read_delimited: Generic reader (tab for .txt/.tsv, comma otherwise)
    - load_mortality: CDC WONDER overdose deaths by state and year
    - load_facilities: Treatment facility counts by indicator
    - load_regions: Census region lookup
    - load_population: Census apportionment population and density
"""

import pandas as pd
from pathlib import Path
from typing import List

from config.settings import (
    MORTALITY_COLUMNS,
    FACILITY_COLUMNS,
    REGION_COLUMNS,
    POPULATION_COLUMNS,
)

TAB_DELIMITED_SUFFIXES = {'.txt', '.tsv'}


def read_delimited(file_path, required_cols: List[str], description: str,
                   verbose: bool = True) -> pd.DataFrame:
    """
    Read a delimited text file as strings and check its columns

    Args:
        file_path: Path to the file
        required_cols: Columns that must be present
        description: Human readable name for progress output
        verbose: Print progress

    Returns:
        DataFrame with every column as str (NaN for empty cells)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If any required column is missing
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"{description} file not found: {file_path}")

    sep = '\t' if file_path.suffix.lower() in TAB_DELIMITED_SUFFIXES else ','

    if verbose:
        print(f"Loading {description} from {file_path}...")

    df = pd.read_csv(file_path, sep=sep, dtype=str, skipinitialspace=True)
    df.columns = df.columns.str.strip()

    missing = [col for col in required_cols if col not in df.columns]
    if missing:
        raise ValueError(
            f"{description} file {file_path.name} is missing columns: {missing}"
        )

    if verbose:
        print(f"  ✓ Loaded {len(df):,} rows")

    return df


def load_mortality(file_path, verbose=True):
    """Load CDC WONDER mortality export (State, Year, Deaths, Crude Rate)"""
    return read_delimited(file_path, MORTALITY_COLUMNS, 'mortality', verbose=verbose)


def load_facilities(file_path, verbose=True):
    """Load facility counts (State, Year, Indicator, Value)"""
    return read_delimited(file_path, FACILITY_COLUMNS, 'facility', verbose=verbose)


def load_regions(file_path, verbose=True):
    """Load census region lookup (State, Region)"""
    return read_delimited(file_path, REGION_COLUMNS, 'region', verbose=verbose)


def load_population(file_path, verbose=True):
    """Load apportionment population and density table"""
    return read_delimited(file_path, POPULATION_COLUMNS, 'population', verbose=verbose)
