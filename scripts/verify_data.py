#!/usr/bin/env python3
"""
Data Verification Script

Checks that the four input files are present and carry their expected
columns before running the data pipeline.

Usage:
    python scripts/verify_data.py
    python scripts/verify_data.py --data-dir /path/to/data
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from config.paths import bronze_files, ensure_directories
from config.settings import (
    MORTALITY_COLUMNS,
    FACILITY_COLUMNS,
    REGION_COLUMNS,
    POPULATION_COLUMNS,
)
from data_engineering.load import read_delimited

SOURCES = [
    ('mortality', 'CDC WONDER overdose mortality', MORTALITY_COLUMNS),
    ('facilities', 'Treatment facility counts', FACILITY_COLUMNS),
    ('regions', 'Census regions', REGION_COLUMNS),
    ('population', 'Census apportionment (population/density)', POPULATION_COLUMNS),
]


def check_file_exists(file_path, description):
    """Check if a file exists and print status"""
    if file_path.exists():
        size_kb = file_path.stat().st_size / 1024
        print(f'✓ {description}: {size_kb:.1f} KB')
        return True
    else:
        print(f'✗ {description}: NOT FOUND')
        print(f'  Expected: {file_path}')
        return False


def verify_columns(file_path, required_cols, description):
    """Verify a source file parses and has its expected columns"""
    try:
        df = read_delimited(file_path, required_cols, description, verbose=False)
    except ValueError as e:
        print(f'  ✗ {e}')
        return False

    print(f'  ✓ Contains {len(df):,} rows')
    print(f'  ✓ Required columns present')
    return True


def verify_sources(data_dir=None):
    """
    Check every source file

    Returns:
        True if all files exist and have their columns
    """
    files = bronze_files(data_dir)
    all_ok = True

    for key, description, required_cols in SOURCES:
        print(f'{description}:')
        if check_file_exists(files[key], description):
            if not verify_columns(files[key], required_cols, description):
                all_ok = False
        else:
            all_ok = False
        print()

    return all_ok


def main(argv=None):
    """Main verification function"""
    parser = argparse.ArgumentParser(description='Verify input data files')
    parser.add_argument('--data-dir', type=Path,
                        help='Data root containing bronze/ (default: project data/)')
    args = parser.parse_args(argv)

    print('=' * 80)
    print('DATA VERIFICATION')
    print('=' * 80)

    if args.data_dir is None:
        print('\n1. Checking directory structure...')
        ensure_directories()
        print('  ✓ Directory structure initialized')

    print('\n2. Checking required data files...')
    print()

    all_ok = verify_sources(args.data_dir)

    print('=' * 80)

    if all_ok:
        print('✓ ALL CHECKS PASSED')
        print()
        print('Next steps:')
        print('  1. Run pipeline: python scripts/run_pipeline.py')
        print('  2. Open report:  outputs/reports/urban_rural_overdose_report.html')
        return 0
    else:
        print('✗ VERIFICATION FAILED')
        print()
        print('Please fix the issues above before running the pipeline.')
        print('See README.md for the expected files and columns.')
        return 1


if __name__ == '__main__':
    sys.exit(main())
