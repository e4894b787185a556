"""
Per-Source Cleaning

Turns the raw string tables into typed tables keyed by (State, Year).
Rows with a missing, placeholder or out-of-range value in a required field
are dropped without raising, so one bad row never stops the report.

Usage:
    from data_engineering.clean import clean_mortality, clean_population

    mortality = clean_mortality(load_mortality(path))
"""

import pandas as pd
import numpy as np

from config.settings import (
    FACILITY_INDICATOR,
    UNRELIABLE_MARKERS,
    CENSUS_REGIONS,
    STATE_GEOGRAPHY_TYPE,
    MIN_YEAR,
    MAX_YEAR,
)

# Parenthesised notes CDC WONDER appends to values, e.g. "3.1 (Unreliable)"
FOOTNOTE_PATTERN = r'\(.*?\)'


def to_numeric(series: pd.Series) -> pd.Series:
    """
    Coerce a string column to float after stripping thousands separators
    and parenthesised footnote markers

    Anything that still is not a number (sentinels, blanks) becomes NaN.
    """
    cleaned = (
        series.astype(str)
        .str.replace(FOOTNOTE_PATTERN, '', regex=True)
        .str.replace(',', '', regex=False)
        .str.strip()
    )
    return pd.to_numeric(cleaned, errors='coerce').astype(float)


def is_whole_number(series: pd.Series) -> pd.Series:
    """True where the value is a finite float with no fractional part"""
    return np.isfinite(series) & (series % 1 == 0)


def valid_year(series: pd.Series) -> pd.Series:
    """Whole years inside MIN_YEAR..MAX_YEAR"""
    return is_whole_number(series) & series.between(MIN_YEAR, MAX_YEAR)


def valid_count(series: pd.Series) -> pd.Series:
    """Whole, non-negative counts (deaths, facilities)"""
    return is_whole_number(series) & (series >= 0)


def clean_state_names(series: pd.Series) -> pd.Series:
    """Trim whitespace so join keys match across sources"""
    return series.astype('string').str.strip().replace('', pd.NA)


def _report(description, before, after, verbose):
    if not verbose:
        return
    dropped = before - after
    print(f"  ✓ {description}: kept {after:,} of {before:,} rows ({dropped:,} dropped)")


def _dedupe_keys(df, keys):
    return df.drop_duplicates(subset=keys, keep='first').reset_index(drop=True)


def clean_mortality(raw: pd.DataFrame, verbose: bool = True) -> pd.DataFrame:
    """
    Clean CDC WONDER mortality rows

    Drops footer/total rows (no State), rows whose Crude Rate is flagged
    Unreliable/Suppressed/etc, rows with non-numeric deaths or year, and
    rows with a negative rate, fractional or negative deaths, or a year
    outside MIN_YEAR..MAX_YEAR.

    Args:
        raw: Output of load_mortality
        verbose: Print progress

    Returns:
        DataFrame with State, Year, Crude_Rate, Deaths
    """
    df = pd.DataFrame({
        'State': clean_state_names(raw['State']),
        'Year': to_numeric(raw['Year']),
        'Crude_Rate': to_numeric(raw['Crude Rate']),
        'Deaths': to_numeric(raw['Deaths']),
    })

    # Any marker anywhere in the cell excludes the row, even next to a number
    crude_text = raw['Crude Rate'].astype('string').str.strip()
    flagged = pd.Series(False, index=raw.index)
    for marker in UNRELIABLE_MARKERS:
        flagged |= crude_text.str.contains(marker, case=False, regex=False).fillna(False)

    df = df[~flagged.to_numpy(dtype=bool)]
    df = df.dropna(subset=['State', 'Year', 'Crude_Rate', 'Deaths'])
    in_range = valid_year(df['Year']) & valid_count(df['Deaths']) & (df['Crude_Rate'] >= 0)
    df = df[in_range.to_numpy(dtype=bool)]

    df = df.astype({'State': str, 'Year': int, 'Crude_Rate': float, 'Deaths': int})
    df = _dedupe_keys(df, ['State', 'Year'])

    _report('Mortality', len(raw), len(df), verbose)
    return df


def clean_facilities(raw: pd.DataFrame, indicator: str = FACILITY_INDICATOR,
                     verbose: bool = True) -> pd.DataFrame:
    """
    Keep one facility indicator and coerce its counts

    Args:
        raw: Output of load_facilities
        indicator: Indicator code to keep
        verbose: Print progress

    Returns:
        DataFrame with State, Year, Facilities
    """
    keep = raw['Indicator'].astype('string').str.strip().eq(indicator).fillna(False)
    subset = raw[keep.to_numpy(dtype=bool)]

    df = pd.DataFrame({
        'State': clean_state_names(subset['State']),
        'Year': to_numeric(subset['Year']),
        'Facilities': to_numeric(subset['Value']),
    })
    df = df.dropna(subset=['State', 'Year', 'Facilities'])
    in_range = valid_year(df['Year']) & valid_count(df['Facilities'])
    df = df[in_range.to_numpy(dtype=bool)]
    df = df.astype({'State': str, 'Year': int, 'Facilities': int})
    df = _dedupe_keys(df, ['State', 'Year'])

    if verbose and len(subset) == 0:
        print(f"  ⚠️  No rows found for facility indicator '{indicator}'")
    _report(f'Facilities ({indicator})', len(raw), len(df), verbose)
    return df


def clean_regions(raw: pd.DataFrame, verbose: bool = True) -> pd.DataFrame:
    """
    Clean census region lookup

    Returns:
        DataFrame with State, Region (one row per state)
    """
    df = pd.DataFrame({
        'State': clean_state_names(raw['State']),
        'Region': raw['Region'].astype('string').str.strip(),
    })
    df = df[df['Region'].isin(CENSUS_REGIONS).fillna(False).to_numpy(dtype=bool)]
    df = df.dropna(subset=['State'])
    df = df.astype({'State': str, 'Region': str})
    df = _dedupe_keys(df, ['State'])

    _report('Regions', len(raw), len(df), verbose)
    return df


def clean_population(raw: pd.DataFrame, verbose: bool = True) -> pd.DataFrame:
    """
    Clean apportionment population/density rows

    Keeps state-level rows only. A row is kept when at least one of
    population or density parses as a positive number, the densifier
    fills the other.

    Returns:
        DataFrame with State, Year, Population, Density (sparse years)
    """
    geography = raw['Geography Type'].astype('string').str.strip()
    subset = raw[geography.eq(STATE_GEOGRAPHY_TYPE).fillna(False).to_numpy(dtype=bool)]

    df = pd.DataFrame({
        'State': clean_state_names(subset['Name']),
        'Year': to_numeric(subset['Year']),
        'Population': to_numeric(subset['Resident Population']),
        'Density': to_numeric(subset['Resident Population Density']),
    })
    df = df.dropna(subset=['State', 'Year'])
    df = df[valid_year(df['Year']).to_numpy(dtype=bool)]
    # Non-positive values count as missing
    df = df.assign(
        Population=df['Population'].where(df['Population'] > 0),
        Density=df['Density'].where(df['Density'] > 0),
    )
    df = df.dropna(subset=['Population', 'Density'], how='all')
    df = df.astype({'State': str, 'Year': int, 'Population': float, 'Density': float})
    df = _dedupe_keys(df, ['State', 'Year'])

    _report('Population', len(raw), len(df), verbose)
    return df


def percent_missing(df: pd.DataFrame) -> pd.Series:
    """Percentage of missing values per column"""
    if len(df) == 0:
        return pd.Series(np.nan, index=df.columns)
    return df.isna().sum() / len(df) * 100
