#!/usr/bin/env python3
"""
Report Figures

Three charts for the Urban vs. Rural report:
- Figure 1: Average crude rate per year, one line per classification
- Figure 2: Average deaths per 100k by census region, grouped by classification
- Figure 3: Density vs. crude rate scatter with fitted linear trend line

Each function takes the aggregated (or merged) table, writes a PNG and
returns its path.
"""

from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from config.settings import (
    CLASS_ORDER,
    CLASS_COLORS,
    CENSUS_REGIONS,
    DENSITY_THRESHOLD,
    FIGURE_DPI,
    PER_CAPITA_SCALE,
    SEABORN_STYLE,
    TREND_LINE_COLOR,
)

TREND_FIGURE = 'figure_1_crude_rate_trend.png'
REGION_FIGURE = 'figure_2_regional_deaths.png'
SCATTER_FIGURE = 'figure_3_density_scatter.png'

sns.set_style(SEABORN_STYLE)


def _present_classes(series):
    present = set(series.dropna().unique())
    return [label for label in CLASS_ORDER if label in present]


def _save(fig, output_path, verbose):
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=FIGURE_DPI, bbox_inches='tight')
    plt.close(fig)
    if verbose:
        print(f'  ✓ Saved: {output_path}')
    return output_path


def plot_trend_by_year(trend: pd.DataFrame, output_dir, verbose: bool = True) -> Path:
    """
    Line chart of Avg_Crude_Rate by year for Urban and Rural states

    Args:
        trend: Output of trend_by_year
        output_dir: Directory for the PNG
    """
    fig, ax = plt.subplots(figsize=(10, 6))
    classes = _present_classes(trend['Urban_Rural'])

    for label in classes:
        subset = trend[trend['Urban_Rural'] == label].sort_values('Year')
        ax.plot(subset['Year'], subset['Avg_Crude_Rate'],
                marker='o', lw=2.5, alpha=0.85,
                color=CLASS_COLORS[label], label=label)

    ax.set_xlabel('Year', fontsize=12, fontweight='bold')
    ax.set_ylabel('Average Crude Rate (per 100k)', fontsize=12, fontweight='bold')
    ax.set_title('Overdose Crude Death Rate Over Time: Urban vs. Rural States',
                 fontsize=14, fontweight='bold', pad=15)
    ax.xaxis.get_major_locator().set_params(integer=True)
    ax.legend(title='Classification', fontsize=11)
    ax.grid(alpha=0.3)

    return _save(fig, Path(output_dir) / TREND_FIGURE, verbose)


def plot_regional_bars(regional: pd.DataFrame, output_dir, verbose: bool = True) -> Path:
    """
    Grouped bar chart of average deaths per 100k by region and classification

    Args:
        regional: Output of summarize_by_region
        output_dir: Directory for the PNG
    """
    data = regional.assign(
        Deaths_Per_100k=regional['Avg_Deaths_Per_Capita'] * PER_CAPITA_SCALE
    )
    present_regions = set(data['Region'])
    regions = [r for r in CENSUS_REGIONS if r in present_regions]
    classes = _present_classes(data['Urban_Rural'])

    fig, ax = plt.subplots(figsize=(10, 6))
    x = np.arange(len(regions))
    width = 0.8 / max(len(classes), 1)

    for i, label in enumerate(classes):
        values = (
            data[data['Urban_Rural'] == label]
            .set_index('Region')['Deaths_Per_100k']
            .reindex(regions)
        )
        offset = (i - (len(classes) - 1) / 2) * width
        bars = ax.bar(x + offset, values.fillna(0).to_numpy(), width,
                      label=label, color=CLASS_COLORS[label], alpha=0.85)

        for bar, value in zip(bars, values):
            if pd.notna(value):
                ax.text(bar.get_x() + bar.get_width() / 2., bar.get_height(),
                        f'{value:.1f}', ha='center', va='bottom', fontsize=9)

    ax.set_xticks(x)
    ax.set_xticklabels(regions, fontsize=11)
    ax.set_xlabel('Census Region', fontsize=12, fontweight='bold')
    ax.set_ylabel('Average Deaths per 100k', fontsize=12, fontweight='bold')
    ax.set_title('Overdose Deaths per Capita by Region',
                 fontsize=14, fontweight='bold', pad=15)
    ax.legend(title='Classification', fontsize=11)
    ax.grid(axis='y', alpha=0.3)

    return _save(fig, Path(output_dir) / REGION_FIGURE, verbose)


def plot_density_scatter(df: pd.DataFrame, fit: dict, output_dir,
                         verbose: bool = True) -> Path:
    """
    Scatter of Density vs. Crude_Rate colored by classification, with the
    fitted trend line from fit_density_trend

    Args:
        df: Merged dataset
        fit: Output of fit_density_trend, or None to omit the trend line
        output_dir: Directory for the PNG
    """
    fig, ax = plt.subplots(figsize=(10, 7))
    classes = _present_classes(df['Urban_Rural'])

    sns.scatterplot(
        data=df, x='Density', y='Crude_Rate',
        hue='Urban_Rural', hue_order=classes,
        palette={label: CLASS_COLORS[label] for label in classes},
        alpha=0.7, s=40, ax=ax
    )

    if fit is not None:
        x_line = np.linspace(df['Density'].min(), df['Density'].max(), 100)
        y_line = fit['intercept'] + fit['slope'] * x_line
        ax.plot(x_line, y_line, color=TREND_LINE_COLOR, lw=2, linestyle='--',
                label=f"Trend (slope={fit['slope']:.3f}, R²={fit['r_squared']:.2f})")

    ax.axvline(DENSITY_THRESHOLD, color='red', linestyle=':', alpha=0.6, lw=1.5,
               label=f'Urban threshold ({DENSITY_THRESHOLD}/sq. mi.)')

    ax.set_xlabel('Population Density (per sq. mi.)', fontsize=12, fontweight='bold')
    ax.set_ylabel('Crude Rate (per 100k)', fontsize=12, fontweight='bold')
    ax.set_title('Population Density vs. Overdose Crude Death Rate',
                 fontsize=14, fontweight='bold', pad=15)
    ax.legend(fontsize=10, framealpha=0.95)
    ax.grid(alpha=0.3)

    return _save(fig, Path(output_dir) / SCATTER_FIGURE, verbose)
