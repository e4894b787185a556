#!/usr/bin/env python3
"""
Summary Statistics - Urban vs. Rural Overdose Mortality

Grouped reductions over the merged state-year dataset:
- By Urban/Rural: density, per-capita deaths, facilities, deaths
- By Urban/Rural and year: crude rate trend
- By region and Urban/Rural: per-capita deaths, facilities, deaths
- Density vs. crude rate linear fit (for the scatter plot)

Averages are unweighted means of the row values, so a small state counts as
much as a large one. Missing values are skipped, not propagated.

Usage:
    from analysis.summary_statistics import summarize_by_classification

    summary = summarize_by_classification(merged)
"""

import pandas as pd
import numpy as np
from typing import Dict, Any, Optional
from sklearn.linear_model import LinearRegression

from config.settings import (
    CLASS_ORDER,
    URBAN,
    RURAL,
    PER_CAPITA_SCALE,
    SUMMARY_COLUMN_RENAME,
    REGION_COLUMN_RENAME,
)


def _with_per_capita(df: pd.DataFrame) -> pd.DataFrame:
    if 'Deaths_Per_Capita' in df.columns:
        return df
    df = df.copy()
    df['Deaths_Per_Capita'] = df['Deaths'] / df['Population']
    return df


def _class_sort_key(series: pd.Series) -> pd.Series:
    order = {label: i for i, label in enumerate(CLASS_ORDER)}
    return series.map(order)


def summarize_by_classification(df: pd.DataFrame) -> pd.DataFrame:
    """
    Summary table by Urban/Rural

    Returns:
        DataFrame with Urban_Rural, Avg_Density, Avg_Deaths_Per_Capita,
        Total_Facilities, Total_Deaths (Urban first)
    """
    df = _with_per_capita(df)
    summary = (
        df.groupby('Urban_Rural')
        .agg(
            Avg_Density=('Density', 'mean'),
            Avg_Deaths_Per_Capita=('Deaths_Per_Capita', 'mean'),
            Total_Facilities=('Facilities', 'sum'),
            Total_Deaths=('Deaths', 'sum'),
        )
        .reset_index()
    )
    return summary.sort_values('Urban_Rural', key=_class_sort_key).reset_index(drop=True)


def trend_by_year(df: pd.DataFrame) -> pd.DataFrame:
    """
    Mean crude rate per Urban/Rural class per year

    Returns:
        DataFrame with Urban_Rural, Year, Avg_Crude_Rate
    """
    trend = (
        df.groupby(['Urban_Rural', 'Year'])
        .agg(Avg_Crude_Rate=('Crude_Rate', 'mean'))
        .reset_index()
    )
    trend = trend.sort_values(['Urban_Rural', 'Year'],
                              key=lambda s: _class_sort_key(s) if s.name == 'Urban_Rural' else s)
    return trend.reset_index(drop=True)


def summarize_by_region(df: pd.DataFrame) -> pd.DataFrame:
    """
    Summary by census region and Urban/Rural

    Returns:
        DataFrame with Region, Urban_Rural, Avg_Deaths_Per_Capita,
        Total_Facilities, Total_Deaths
    """
    df = _with_per_capita(df)
    regional = (
        df.groupby(['Region', 'Urban_Rural'])
        .agg(
            Avg_Deaths_Per_Capita=('Deaths_Per_Capita', 'mean'),
            Total_Facilities=('Facilities', 'sum'),
            Total_Deaths=('Deaths', 'sum'),
        )
        .reset_index()
    )
    regional = regional.sort_values(['Region', 'Urban_Rural'],
                                    key=lambda s: _class_sort_key(s) if s.name == 'Urban_Rural' else s)
    return regional.reset_index(drop=True)


def fit_density_trend(df: pd.DataFrame, x_col: str = 'Density',
                      y_col: str = 'Crude_Rate') -> Dict[str, float]:
    """
    Ordinary least squares fit of y on x for the scatter trend line

    Args:
        df: Merged dataset
        x_col: Predictor column
        y_col: Response column

    Returns:
        Dict with slope, intercept, r_squared, pearson_r, n

    Raises:
        ValueError: If fewer than two usable rows or x is constant
    """
    data = df[[x_col, y_col]].dropna()
    if len(data) < 2 or data[x_col].nunique() < 2:
        raise ValueError(
            f'Need at least two distinct {x_col} values to fit a trend line '
            f'(got {len(data)} rows)'
        )

    X = data[[x_col]].to_numpy()
    y = data[y_col].to_numpy()

    model = LinearRegression()
    model.fit(X, y)

    return {
        'slope': float(model.coef_[0]),
        'intercept': float(model.intercept_),
        'r_squared': float(model.score(X, y)),
        'pearson_r': float(np.corrcoef(data[x_col], data[y_col])[0, 1]),
        'n': int(len(data)),
    }


def describe_coverage(df: pd.DataFrame) -> Dict[str, Any]:
    """States, years and rows per class in the merged dataset"""
    rows_per_class = df['Urban_Rural'].value_counts()
    states_per_class = df.groupby('Urban_Rural')['State'].nunique()

    return {
        'first_year': int(df['Year'].min()) if len(df) else None,
        'last_year': int(df['Year'].max()) if len(df) else None,
        'n_rows': int(len(df)),
        'n_states': int(df['State'].nunique()),
        'rows_per_class': {label: int(rows_per_class.get(label, 0)) for label in CLASS_ORDER},
        'states_per_class': {label: int(states_per_class.get(label, 0)) for label in CLASS_ORDER},
    }


def per_capita_ratio(summary: pd.DataFrame) -> Optional[float]:
    """Urban Avg_Deaths_Per_Capita divided by Rural, None if either is missing or zero"""
    values = summary.set_index('Urban_Rural')['Avg_Deaths_Per_Capita']
    urban, rural = values.get(URBAN), values.get(RURAL)
    if urban is None or rural is None or pd.isna(urban) or pd.isna(rural) or rural == 0:
        return None
    return float(urban / rural)


def format_summary_table(summary: pd.DataFrame) -> pd.DataFrame:
    """
    Display-ready summary table

    Per-capita deaths are shown per 100,000 people, totals with thousands
    separators, and columns get readable names.
    """
    table = pd.DataFrame({
        'Urban_Rural': summary['Urban_Rural'],
        'Avg_Density': summary['Avg_Density'].map('{:,.1f}'.format),
        'Avg_Deaths_Per_Capita': (summary['Avg_Deaths_Per_Capita'] * PER_CAPITA_SCALE)
            .map('{:,.2f}'.format),
        'Total_Facilities': summary['Total_Facilities'].map('{:,.0f}'.format),
        'Total_Deaths': summary['Total_Deaths'].map('{:,.0f}'.format),
    })
    return table.rename(columns=SUMMARY_COLUMN_RENAME)


def format_region_table(regional: pd.DataFrame) -> pd.DataFrame:
    """Display-ready regional table (same formatting as format_summary_table)"""
    table = pd.DataFrame({
        'Region': regional['Region'],
        'Urban_Rural': regional['Urban_Rural'],
        'Avg_Deaths_Per_Capita': (regional['Avg_Deaths_Per_Capita'] * PER_CAPITA_SCALE)
            .map('{:,.2f}'.format),
        'Total_Facilities': regional['Total_Facilities'].map('{:,.0f}'.format),
        'Total_Deaths': regional['Total_Deaths'].map('{:,.0f}'.format),
    })
    return table.rename(columns=REGION_COLUMN_RENAME)
