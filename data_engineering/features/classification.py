"""
Urban/Rural Classification

A state-year is Urban when its population density is strictly above
DENSITY_THRESHOLD persons per square mile, Rural otherwise. The same rule
feeds the summary table, trend lines, regional bars and scatter plot.
"""

import pandas as pd
import numpy as np

from config.settings import DENSITY_THRESHOLD, URBAN, RURAL


def classify_density(density):
    """
    Classify a single density value

    Returns:
        'Urban' if density > DENSITY_THRESHOLD, 'Rural' otherwise,
        None if density is missing
    """
    if pd.isna(density):
        return None
    return URBAN if density > DENSITY_THRESHOLD else RURAL


def add_urban_rural(df: pd.DataFrame, density_col: str = 'Density') -> pd.DataFrame:
    """Return a copy of df with an Urban_Rural column"""
    df = df.copy()
    density = df[density_col]
    labels = np.where(density > DENSITY_THRESHOLD, URBAN, RURAL)
    df['Urban_Rural'] = pd.Series(labels, index=df.index).where(density.notna(), None)
    return df


def add_deaths_per_capita(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of df with Deaths_Per_Capita = Deaths / Population per row"""
    df = df.copy()
    df['Deaths_Per_Capita'] = df['Deaths'] / df['Population']
    return df
