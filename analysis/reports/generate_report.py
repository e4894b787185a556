#!/usr/bin/env python3
"""
Generate the Urban vs. Rural Overdose Report

Reads the merged state-year dataset (building it from bronze files when it
does not exist yet), computes the grouped summaries, renders the three
figures and writes a self-contained HTML report with the summary table and
narrative.

Outputs:
  - outputs/figures/figure_*.png
  - outputs/reports/urban_rural_overdose_report.html
  - data/gold/analytics/*.csv   (summary tables behind the report)

Usage:
    python analysis/reports/generate_report.py
    python analysis/reports/generate_report.py --rebuild
    python analysis/reports/generate_report.py --data-dir /tmp/data --output-dir /tmp/out
"""

import sys
import os
import argparse
import html
from pathlib import Path
from datetime import datetime

import pandas as pd

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from config.paths import (
    GOLD,
    GOLD_ANALYTICS,
    FIGURES,
    REPORTS,
    MERGED_DATASET_NAME,
    REPORT_FILE_NAME,
)
from config.settings import (
    DENSITY_THRESHOLD,
    PER_CAPITA_SCALE,
    REPORT_TITLE,
    URBAN,
    RURAL,
)
from analysis.summary_statistics import (
    summarize_by_classification,
    trend_by_year,
    summarize_by_region,
    fit_density_trend,
    describe_coverage,
    per_capita_ratio,
    format_summary_table,
    format_region_table,
)
from analysis.reports.figures import (
    plot_trend_by_year,
    plot_regional_bars,
    plot_density_scatter,
)


def load_merged_dataset(data_dir=None, rebuild=False, verbose=True):
    """
    Read data/gold/overdose_state_year.csv, building it first if needed

    Args:
        data_dir: Alternate data root (None for project default)
        rebuild: Rebuild from bronze even if the gold file exists
        verbose: Print progress

    Returns:
        Merged DataFrame
    """
    gold_dir = GOLD if data_dir is None else Path(data_dir) / 'gold'
    merged_path = gold_dir / MERGED_DATASET_NAME

    if rebuild or not merged_path.exists():
        from data_engineering.datasets.build_merged_dataset import (
            build_merged_dataset,
            save_outputs,
        )
        if verbose:
            print(f'Building merged dataset from bronze sources...')
        merged, cleaned = build_merged_dataset(data_dir, verbose=verbose, return_sources=True)
        save_outputs(merged, cleaned, data_dir, verbose=verbose)
        return merged

    if verbose:
        print(f'Loading merged dataset from {merged_path}...')
    merged = pd.read_csv(merged_path)
    if verbose:
        print(f'  ✓ Loaded {len(merged):,} state-years')
    return merged


def compute_report_tables(merged: pd.DataFrame, verbose=True):
    """
    All aggregates used by the figures and narrative

    'fit' is None when the data has fewer than two distinct densities.
    """
    try:
        fit = fit_density_trend(merged)
    except ValueError as e:
        if verbose:
            print(f'  ⚠️  Skipping density trend line: {e}')
        fit = None

    return {
        'summary': summarize_by_classification(merged),
        'trend': trend_by_year(merged),
        'regional': summarize_by_region(merged),
        'fit': fit,
        'coverage': describe_coverage(merged),
    }


def save_analytics(tables, analytics_dir, verbose=True):
    """Write the summary tables behind the report as CSV"""
    analytics_dir = Path(analytics_dir)
    analytics_dir.mkdir(parents=True, exist_ok=True)

    outputs = {
        'summary_by_classification.csv': tables['summary'],
        'crude_rate_trend_by_year.csv': tables['trend'],
        'summary_by_region.csv': tables['regional'],
    }
    if tables['fit'] is not None:
        outputs['density_trend_fit.csv'] = pd.DataFrame([tables['fit']])
    paths = []
    for name, df in outputs.items():
        path = analytics_dir / name
        df.to_csv(path, index=False)
        paths.append(path)
        if verbose:
            print(f'  ✓ Saved: {path}')
    return paths


def _per_100k(value):
    return f'{value * PER_CAPITA_SCALE:,.2f}'


def build_narrative(tables):
    """
    Prose paragraphs for the report, filled in from the computed tables

    Returns:
        List of plain-text paragraphs
    """
    coverage = tables['coverage']
    summary = tables['summary'].set_index('Urban_Rural')
    trend = tables['trend']
    regional = tables['regional']
    fit = tables['fit']

    paragraphs = []

    paragraphs.append(
        f"The merged dataset covers {coverage['n_states']} states over "
        f"{coverage['first_year']}-{coverage['last_year']} "
        f"({coverage['n_rows']:,} state-years). Only state-years present in all "
        f"four sources are kept, so the analysis window is limited to the years "
        f"every source reports. A state-year is labelled Urban when its population "
        f"density exceeds {DENSITY_THRESHOLD} persons per square mile and Rural "
        f"otherwise: {coverage['states_per_class'][URBAN]} states contribute Urban "
        f"state-years and {coverage['states_per_class'][RURAL]} contribute Rural ones."
    )

    if URBAN in summary.index and RURAL in summary.index:
        ratio = per_capita_ratio(tables['summary'])
        comparison = (
            f"Urban state-years averaged {_per_100k(summary.loc[URBAN, 'Avg_Deaths_Per_Capita'])} "
            f"overdose deaths per 100,000 residents, against "
            f"{_per_100k(summary.loc[RURAL, 'Avg_Deaths_Per_Capita'])} for Rural state-years"
        )
        if ratio is not None:
            comparison += f", a ratio of {ratio:.2f}."
        else:
            comparison += '.'
        comparison += (
            f" Over the window, Urban states recorded {summary.loc[URBAN, 'Total_Deaths']:,.0f} "
            f"deaths and Rural states {summary.loc[RURAL, 'Total_Deaths']:,.0f}, with "
            f"{summary.loc[URBAN, 'Total_Facilities']:,.0f} and "
            f"{summary.loc[RURAL, 'Total_Facilities']:,.0f} facility-years respectively."
        )
        paragraphs.append(comparison)
    else:
        only = summary.index[0] if len(summary) else 'no'
        paragraphs.append(
            f"Every state-year in the window falls in the {only} class, so no "
            f"Urban/Rural comparison can be made."
        )

    latest_year = trend['Year'].max()
    latest = trend[trend['Year'] == latest_year].set_index('Urban_Rural')['Avg_Crude_Rate']
    first_year = trend['Year'].min()
    first = trend[trend['Year'] == first_year].set_index('Urban_Rural')['Avg_Crude_Rate']
    trend_parts = [
        f"{label} states moved from {first[label]:.1f} to {latest[label]:.1f} deaths per 100k"
        for label in latest.index if label in first.index
    ]
    if trend_parts:
        paragraphs.append(
            f"Between {first_year} and {latest_year}, " + '; '.join(trend_parts) +
            ' (average crude rate, Figure 1).'
        )

    if len(regional):
        top = regional.loc[regional['Avg_Deaths_Per_Capita'].idxmax()]
        paragraphs.append(
            f"The highest average per-capita burden is in {top['Urban_Rural']} states of "
            f"the {top['Region']}, at {_per_100k(top['Avg_Deaths_Per_Capita'])} deaths "
            f"per 100k (Figure 2)."
        )

    if fit is not None:
        direction = 'rises' if fit['slope'] > 0 else 'falls'
        paragraphs.append(
            f"Across all {fit['n']:,} state-years the crude rate {direction} by "
            f"{abs(fit['slope']):.4f} deaths per 100k for each additional person per "
            f"square mile (Pearson r = {fit['pearson_r']:.2f}, R² = {fit['r_squared']:.2f}, "
            f"Figure 3)."
        )

    paragraphs.append(
        "Rows with unreliable or suppressed rates and state-years missing from any "
        "source are excluded without notice, and years between census counts use "
        "linearly interpolated population and density. The Urban/Rural label is a "
        "density cut-off, not an official designation."
    )

    return paragraphs


def render_html(tables, figure_paths, report_path):
    """
    Write the HTML report

    Args:
        tables: Output of compute_report_tables
        figure_paths: Dict with trend, regional, scatter PNG paths
        report_path: Destination HTML file

    Returns:
        Path of the written report
    """
    report_path = Path(report_path)
    report_path.parent.mkdir(parents=True, exist_ok=True)

    def img(key, caption):
        src = Path(os.path.relpath(figure_paths[key], report_path.parent)).as_posix()
        return (
            f'<figure><img src="{html.escape(src)}" alt="{html.escape(caption)}" width="800">'
            f'<figcaption>{html.escape(caption)}</figcaption></figure>'
        )

    paragraphs = '\n'.join(f'<p>{html.escape(p)}</p>' for p in build_narrative(tables))
    summary_html = format_summary_table(tables['summary']).to_html(index=False, border=0,
                                                                    classes='summary')
    scatter_caption = 'Figure 3: Population density vs. crude rate'
    if tables['fit'] is not None:
        scatter_caption += ' with fitted trend'
    regional_html = format_region_table(tables['regional']).to_html(index=False, border=0,
                                                                     classes='summary')

    document = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{html.escape(REPORT_TITLE)}</title>
<style>
body {{ font-family: sans-serif; max-width: 900px; margin: 2em auto; color: #2c3e50; }}
table.summary {{ border-collapse: collapse; margin: 1em 0; }}
table.summary th, table.summary td {{ padding: 6px 12px; border-bottom: 1px solid #ddd; text-align: right; }}
figcaption {{ font-size: 0.9em; color: #7f8c8d; }}
</style>
</head>
<body>
<h1>{html.escape(REPORT_TITLE)}</h1>
<p><em>Generated {datetime.now().strftime('%Y-%m-%d %H:%M')}</em></p>
<h2>Summary</h2>
{summary_html}
{paragraphs}
<h2>Trend Over Time</h2>
{img('trend', 'Figure 1: Average overdose crude rate by year')}
<h2>Regional Comparison</h2>
{img('regional', 'Figure 2: Average deaths per 100k by census region')}
{regional_html}
<h2>Density and Mortality</h2>
{img('scatter', scatter_caption)}
</body>
</html>
"""
    report_path.write_text(document, encoding='utf-8')
    return report_path


def generate_report(merged=None, data_dir=None, output_dir=None, rebuild=False, verbose=True):
    """
    Build every report artifact

    Args:
        merged: Merged dataset (None to load or build it)
        data_dir: Alternate data root (None for project default)
        output_dir: Alternate outputs root (None for project outputs/)
        rebuild: Rebuild the merged dataset from bronze
        verbose: Print progress

    Returns:
        Path of the HTML report
    """
    if merged is None:
        merged = load_merged_dataset(data_dir, rebuild=rebuild, verbose=verbose)

    if output_dir is None:
        figures_dir, reports_dir = FIGURES, REPORTS
    else:
        figures_dir, reports_dir = Path(output_dir) / 'figures', Path(output_dir) / 'reports'
    analytics_dir = GOLD_ANALYTICS if data_dir is None else Path(data_dir) / 'gold' / 'analytics'

    if verbose:
        print('\nComputing summary statistics...')
    tables = compute_report_tables(merged, verbose=verbose)
    save_analytics(tables, analytics_dir, verbose=verbose)

    if verbose:
        print('\nRendering figures...')
    figure_paths = {
        'trend': plot_trend_by_year(tables['trend'], figures_dir, verbose=verbose),
        'regional': plot_regional_bars(tables['regional'], figures_dir, verbose=verbose),
        'scatter': plot_density_scatter(merged, tables['fit'], figures_dir, verbose=verbose),
    }

    report_path = render_html(tables, figure_paths, reports_dir / REPORT_FILE_NAME)
    if verbose:
        print(f'\n✓ Report written: {report_path}')
        print('\nSummary by classification:')
        print(format_summary_table(tables['summary']).to_string(index=False))
    return report_path


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Generate the Urban vs. Rural overdose report',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Use the existing gold dataset (builds it if missing)
  python analysis/reports/generate_report.py

  # Rebuild the merged dataset from bronze first
  python analysis/reports/generate_report.py --rebuild
        """
    )
    parser.add_argument('--data-dir', type=Path,
                        help='Data root containing bronze/ and gold/ (default: project data/)')
    parser.add_argument('--output-dir', type=Path,
                        help='Outputs root for figures/ and reports/ (default: project outputs/)')
    parser.add_argument('--rebuild', action='store_true',
                        help='Rebuild the merged dataset from bronze sources')
    parser.add_argument('--quiet', action='store_true', help='Suppress progress output')
    args = parser.parse_args(argv)

    verbose = not args.quiet
    if verbose:
        print('=' * 80)
        print('URBAN VS. RURAL OVERDOSE REPORT')
        print('=' * 80)

    generate_report(data_dir=args.data_dir, output_dir=args.output_dir,
                    rebuild=args.rebuild, verbose=verbose)
    return 0


if __name__ == '__main__':
    sys.exit(main())
