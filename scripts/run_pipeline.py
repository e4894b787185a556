#!/usr/bin/env python3
"""
Master Pipeline Orchestration Script

Runs the complete report pipeline:
0. Verify data sources
1. Build merged state-year dataset (bronze → silver → gold)
2. Generate figures and the HTML report

Any failing step aborts the run.

Usage:
    # Full pipeline
    python scripts/run_pipeline.py

    # Skip verification
    python scripts/run_pipeline.py --skip-verify

    # Alternate data root
    python scripts/run_pipeline.py --data-dir /path/to/data
"""

import sys
import argparse
from pathlib import Path
from datetime import datetime
import subprocess

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.append(str(PROJECT_ROOT))

from config.paths import ensure_directories


def print_header(text):
    """Print a formatted header"""
    print('\n' + '=' * 80)
    print(text.center(80))
    print('=' * 80 + '\n')


def run_command(cmd, description):
    """Run a command and report whether it succeeded"""
    print(f'\n>>> {description}')
    print(f'Command: {" ".join(cmd)}')
    print()

    try:
        subprocess.run(cmd, check=True, cwd=PROJECT_ROOT)
        print(f'\n✓ {description} completed successfully')
        return True
    except subprocess.CalledProcessError as e:
        print(f'\n✗ {description} failed with exit code {e.returncode}')
        return False


def _data_dir_args(data_dir):
    return ['--data-dir', str(data_dir)] if data_dir else []


def verify_data(data_dir=None):
    """Run data verification"""
    print_header('STEP 0: DATA VERIFICATION')
    cmd = [sys.executable, 'scripts/verify_data.py'] + _data_dir_args(data_dir)
    return run_command(cmd, 'Data verification')


def build_dataset(data_dir=None):
    """Build merged state-year dataset"""
    print_header('STEP 1: BUILD MERGED DATASET')
    cmd = [sys.executable, 'data_engineering/datasets/build_merged_dataset.py']
    cmd += _data_dir_args(data_dir)
    return run_command(cmd, 'Merged dataset builder')


def generate_report(data_dir=None, output_dir=None):
    """Render figures and the HTML report"""
    print_header('STEP 2: GENERATE REPORT')
    cmd = [sys.executable, 'analysis/reports/generate_report.py'] + _data_dir_args(data_dir)
    if output_dir:
        cmd.extend(['--output-dir', str(output_dir)])
    return run_command(cmd, 'Report generator')


def main(argv=None):
    """Main pipeline orchestration"""
    parser = argparse.ArgumentParser(
        description='Run the complete Urban vs. Rural overdose report pipeline',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full pipeline
  python scripts/run_pipeline.py

  # Skip verification
  python scripts/run_pipeline.py --skip-verify
        """
    )

    parser.add_argument(
        '--skip-verify',
        action='store_true',
        help='Skip data verification step'
    )

    parser.add_argument(
        '--data-dir',
        type=Path,
        help='Data root containing bronze/ (default: project data/)'
    )

    parser.add_argument(
        '--output-dir',
        type=Path,
        help='Outputs root for figures/ and reports/ (default: project outputs/)'
    )

    args = parser.parse_args(argv)

    print_header('URBAN VS. RURAL OVERDOSE - REPORT PIPELINE')
    print(f'Started: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    print()

    print('Ensuring directory structure...')
    ensure_directories()
    print('✓ Directory structure ready\n')

    start_time = datetime.now()

    steps = []
    if not args.skip_verify:
        steps.append(lambda: verify_data(args.data_dir))
    steps.append(lambda: build_dataset(args.data_dir))
    steps.append(lambda: generate_report(args.data_dir, args.output_dir))

    for step in steps:
        if not step():
            print('\nPipeline aborted.')
            return 1

    duration = datetime.now() - start_time

    print_header('PIPELINE SUMMARY')
    print(f'Started:  {start_time.strftime("%Y-%m-%d %H:%M:%S")}')
    print(f'Duration: {duration}')
    print()
    print('✓ PIPELINE COMPLETED SUCCESSFULLY')
    print()
    return 0


if __name__ == '__main__':
    sys.exit(main())
