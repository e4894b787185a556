"""
Multi-Source Integration

Joins the four cleaned tables into one state-year table.

All joins are inner joins. A state-year missing from any one source is
dropped from the result, which also narrows the analysis window to the
years every source covers.

Functions:
    - merge_sources: mortality ⋈ facilities ⋈ regions ⋈ population
    - year_window: First and last year present in a table

Author: Data Engineering Team
"""

import pandas as pd

STATE_YEAR_KEYS = ['State', 'Year']


def year_window(df: pd.DataFrame, year_col: str = 'Year'):
    """Return (first_year, last_year) or (None, None) for an empty table"""
    if df.empty:
        return None, None
    return int(df[year_col].min()), int(df[year_col].max())


def merge_sources(mortality: pd.DataFrame,
                  facilities: pd.DataFrame,
                  regions: pd.DataFrame,
                  population: pd.DataFrame,
                  verbose: bool = True) -> pd.DataFrame:
    """
    Inner-join the cleaned sources

    Args:
        mortality: State, Year, Crude_Rate, Deaths
        facilities: State, Year, Facilities
        regions: State, Region
        population: State, Year, Population, Density (annual)
        verbose: Print progress

    Returns:
        DataFrame with State, Year, Crude_Rate, Deaths, Facilities, Region,
        Population, Density
    """
    if verbose:
        print(f"\nJoining sources (inner joins)...")
        print(f"  Mortality rows: {len(mortality):,}")

    merged = mortality.merge(facilities, on=STATE_YEAR_KEYS, how='inner')
    if verbose:
        print(f"  ✓ + facilities on State/Year: {len(merged):,} rows")

    merged = merged.merge(regions, on='State', how='inner')
    if verbose:
        print(f"  ✓ + regions on State:         {len(merged):,} rows")

    merged = merged.merge(population, on=STATE_YEAR_KEYS, how='inner')
    if verbose:
        print(f"  ✓ + population on State/Year: {len(merged):,} rows")

    merged = merged.sort_values(STATE_YEAR_KEYS).reset_index(drop=True)

    if verbose:
        first, last = year_window(merged)
        if first is None:
            print(f"  ⚠️  WARNING: No state-year is present in all four sources!")
        else:
            print(f"  Analysis window: {first}-{last}, "
                  f"{merged['State'].nunique():,} states")

    return merged
