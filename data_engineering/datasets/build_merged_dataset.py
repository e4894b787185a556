#!/usr/bin/env python3
"""
Build Merged State-Year Overdose Dataset

Combines the four bronze sources into one analysis-ready table.

Input: data/bronze/
  - mortality/overdose_mortality_by_state.txt  (CDC WONDER, tab-delimited)
  - facilities/treatment_facilities_by_state.csv
  - regions/us_census_regions.csv
  - population/apportionment.csv                (decennial)

Output:
  - data/silver/*.csv                           (one cleaned table per source)
  - data/gold/overdose_state_year.csv           (merged + Urban/Rural)

Steps:
  1. Load   2. Clean   3. Densify population to annual rows
  4. Inner-join on State/Year   5. Classify Urban/Rural   6. Validate

Usage:
  python data_engineering/datasets/build_merged_dataset.py
  python data_engineering/datasets/build_merged_dataset.py --data-dir /path/to/data
"""

import sys
import argparse
from pathlib import Path
from datetime import datetime

import pandas as pd

sys.path.append(str(Path(__file__).parent.parent.parent))
from config.paths import bronze_files, SILVER, GOLD, SILVER_FILE_NAMES, MERGED_DATASET_NAME
from data_engineering.load import load_mortality, load_facilities, load_regions, load_population
from data_engineering.clean import clean_mortality, clean_facilities, clean_regions, clean_population
from data_engineering.features import densify_years, add_urban_rural, add_deaths_per_capita
from data_engineering.integrate import merge_sources
from data_engineering.utils.validation import validate_table, validate_merged_dataset


MERGED_COLUMNS = [
    'State', 'Year', 'Region',
    'Crude_Rate', 'Deaths', 'Facilities',
    'Population', 'Density',
    'Deaths_Per_Capita', 'Urban_Rural',
]


def print_header(text):
    """Print a formatted section header"""
    print('\n' + '=' * 80)
    print(text)
    print('=' * 80)


def load_sources(files, verbose=True):
    """Load the four raw tables from a dict of paths (see config.paths.bronze_files)"""
    return {
        'mortality': load_mortality(files['mortality'], verbose=verbose),
        'facilities': load_facilities(files['facilities'], verbose=verbose),
        'regions': load_regions(files['regions'], verbose=verbose),
        'population': load_population(files['population'], verbose=verbose),
    }


def clean_sources(raw, verbose=True):
    """Clean and validate each raw table; population is densified to annual rows"""
    population = densify_years(clean_population(raw['population'], verbose=verbose),
                               verbose=verbose)
    cleaned = {
        'mortality': clean_mortality(raw['mortality'], verbose=verbose),
        'facilities': clean_facilities(raw['facilities'], verbose=verbose),
        'regions': clean_regions(raw['regions'], verbose=verbose),
        'population': population,
    }
    return {name: validate_table(df, name, verbose=verbose) for name, df in cleaned.items()}


def finalize_merged(merged: pd.DataFrame, verbose: bool = True) -> pd.DataFrame:
    """
    Drop rows left without population/density, then derive the
    Deaths_Per_Capita and Urban_Rural columns
    """
    before = len(merged)
    merged = merged.dropna(subset=['Population', 'Density'])
    if verbose and len(merged) < before:
        print(f"  ⚠️  Dropped {before - len(merged):,} rows with no population/density")

    merged = add_deaths_per_capita(merged)
    merged = add_urban_rural(merged)
    return merged[MERGED_COLUMNS].reset_index(drop=True)


def build_merged_dataset(data_dir=None, verbose=True, return_sources=False):
    """
    Run load → clean → densify → join → classify → validate

    Args:
        data_dir: Alternate data root containing bronze/ (None for project default)
        verbose: Print progress
        return_sources: Also return the cleaned source tables

    Returns:
        Merged DataFrame, or (merged, cleaned_sources) if return_sources

    Raises:
        FileNotFoundError: If an input file is missing
        ValueError: If an input lacks expected columns or nothing survives the join
        pandera.errors.SchemaErrors: If a table fails validation
    """
    files = bronze_files(data_dir)

    if verbose:
        print_header('1. LOADING SOURCES')
    raw = load_sources(files, verbose=verbose)

    if verbose:
        print_header('2. CLEANING AND DENSIFYING')
    cleaned = clean_sources(raw, verbose=verbose)

    if verbose:
        print_header('3. JOINING AND CLASSIFYING')
    merged = merge_sources(
        cleaned['mortality'],
        cleaned['facilities'],
        cleaned['regions'],
        cleaned['population'],
        verbose=verbose
    )
    merged = finalize_merged(merged, verbose=verbose)
    merged = validate_merged_dataset(merged, verbose=verbose)

    if return_sources:
        return merged, cleaned
    return merged


def save_outputs(merged, cleaned, data_dir=None, verbose=True):
    """
    Write cleaned sources to silver/ and the merged dataset to gold/

    Returns:
        Path of the merged dataset file
    """
    if data_dir is None:
        silver_dir, gold_dir = SILVER, GOLD
    else:
        silver_dir, gold_dir = Path(data_dir) / 'silver', Path(data_dir) / 'gold'

    silver_dir.mkdir(parents=True, exist_ok=True)
    gold_dir.mkdir(parents=True, exist_ok=True)

    for name, df in cleaned.items():
        out_path = silver_dir / SILVER_FILE_NAMES[name]
        df.to_csv(out_path, index=False)
        if verbose:
            print(f'  ✓ Saved {name}: {out_path} ({len(df):,} rows)')

    merged_path = gold_dir / MERGED_DATASET_NAME
    merged.to_csv(merged_path, index=False)
    if verbose:
        print(f'  ✓ Saved merged dataset: {merged_path} ({len(merged):,} rows)')

    return merged_path


def main(argv=None):
    parser = argparse.ArgumentParser(description='Build the merged state-year overdose dataset')
    parser.add_argument(
        '--data-dir',
        type=Path,
        help='Data root containing bronze/ (default: project data/)'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress progress output'
    )
    args = parser.parse_args(argv)
    verbose = not args.quiet

    if verbose:
        print('=' * 80)
        print('MERGED STATE-YEAR DATASET BUILDER')
        print('=' * 80)
        print(f'Started: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')

    merged, cleaned = build_merged_dataset(args.data_dir, verbose=verbose, return_sources=True)

    if verbose:
        print_header('4. SAVING OUTPUTS')
    save_outputs(merged, cleaned, args.data_dir, verbose=verbose)

    if verbose:
        print(f'\n✓ Done: {len(merged):,} rows, {merged["State"].nunique():,} states, '
              f'{merged["Year"].min()}-{merged["Year"].max()}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
