"""
Annual Densification of Population/Density Series

The apportionment table only reports population and density in census
years. The mortality and facility tables are annual, so each state's series
is expanded to one row per calendar year and the gaps are filled by linear
interpolation between the nearest reported years.

Years before a state's first or after its last reported value are never
extrapolated: they stay NaN.

Usage:
    from data_engineering.features.interpolation import densify_years

    population_annual = densify_years(population_clean)
"""

import pandas as pd
import numpy as np
from typing import Sequence


def interpolate_linear(years, values) -> np.ndarray:
    """
    Fill NaN values by linear interpolation on the year axis

    For a missing value at year x bracketed by known (x0, y0) and (x1, y1):
        y = y0 + (y1 - y0) * (x - x0) / (x1 - x0)

    Known values are returned unchanged. Missing values with no known value
    on one side stay NaN.

    Args:
        years: Year for each value (any order, no duplicates)
        values: Values aligned with years, NaN where unknown

    Returns:
        New float array aligned with the input
    """
    x = np.asarray(years, dtype=float)
    y = np.array(values, dtype=float)

    known = ~np.isnan(y)
    if known.sum() < 2:
        return y

    order = np.argsort(x[known])
    known_x = x[known][order]
    known_y = y[known][order]

    fill = ~known & (x > known_x[0]) & (x < known_x[-1])
    y[fill] = np.interp(x[fill], known_x, known_y)
    return y


def densify_years(
    df: pd.DataFrame,
    group_col: str = 'State',
    year_col: str = 'Year',
    value_cols: Sequence[str] = ('Population', 'Density'),
    verbose: bool = True
) -> pd.DataFrame:
    """
    Expand each group to a contiguous run of years and interpolate gaps

    Each value column is interpolated independently, so a year where only
    density was reported still gets an interpolated population.

    Args:
        df: Sparse observations with group, year and value columns
        group_col: Column identifying the series (state)
        year_col: Integer year column
        value_cols: Numeric columns to fill
        verbose: Print progress

    Returns:
        DataFrame with one row per group per year from the group's first to
        last observed year, sorted by group then year
    """
    columns = [group_col, year_col] + list(value_cols)
    if df.empty:
        return pd.DataFrame(columns=columns)

    frames = []
    inserted = 0

    for group, observed in df.groupby(group_col, sort=True):
        observed = observed.drop_duplicates(subset=year_col, keep='first')
        years = np.arange(observed[year_col].min(), observed[year_col].max() + 1)

        annual = observed.set_index(year_col)[list(value_cols)].reindex(years)
        inserted += len(years) - len(observed)

        for col in value_cols:
            annual[col] = interpolate_linear(years, annual[col].to_numpy())

        annual.index.name = year_col
        annual = annual.reset_index()
        annual.insert(0, group_col, group)
        frames.append(annual)

    result = pd.concat(frames, ignore_index=True)[columns]
    result[year_col] = result[year_col].astype(int)

    if verbose:
        print(f"  ✓ Densified {df[group_col].nunique():,} series to {len(result):,} "
              f"annual rows ({inserted:,} interpolated years)")
        unfilled = result[list(value_cols)].isna().any(axis=1).sum()
        if unfilled:
            print(f"  ⚠️  {unfilled:,} rows left unfilled (no bracketing values)")

    return result
