"""
Project Path Configuration

Centralized path definitions for data, figures, and reports
Using Medallion Architecture: Bronze (raw) → Silver (cleaned) → Gold (analysis-ready)
"""

from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# ==============================================================================
# MEDALLION ARCHITECTURE (Bronze / Silver / Gold)
# ==============================================================================

DATA_ROOT = PROJECT_ROOT / "data"

# Bronze Layer: Raw, immutable data (as downloaded)
BRONZE = DATA_ROOT / "bronze"
BRONZE_MORTALITY = BRONZE / "mortality"
BRONZE_FACILITIES = BRONZE / "facilities"
BRONZE_REGIONS = BRONZE / "regions"
BRONZE_POPULATION = BRONZE / "population"

# Silver Layer: Cleaned, validated, standardized (one table per source)
SILVER = DATA_ROOT / "silver"

# Gold Layer: Merged state-year dataset and aggregate tables
GOLD = DATA_ROOT / "gold"
GOLD_ANALYTICS = GOLD / "analytics"

# ==============================================================================
# DEFAULT FILES
# ==============================================================================

# CDC WONDER export (tab-delimited)
DEFAULT_MORTALITY_FILE = BRONZE_MORTALITY / "overdose_mortality_by_state.txt"
DEFAULT_FACILITY_FILE = BRONZE_FACILITIES / "treatment_facilities_by_state.csv"
DEFAULT_REGION_FILE = BRONZE_REGIONS / "us_census_regions.csv"
# Census apportionment table (decennial population and density)
DEFAULT_POPULATION_FILE = BRONZE_POPULATION / "apportionment.csv"

SILVER_FILE_NAMES = {
    'mortality': 'mortality_clean.csv',
    'facilities': 'facilities_clean.csv',
    'regions': 'regions_clean.csv',
    'population': 'population_annual.csv',
}

MERGED_DATASET_NAME = "overdose_state_year.csv"

# ==============================================================================
# OUTPUTS
# ==============================================================================

OUTPUTS_ROOT = PROJECT_ROOT / "outputs"
FIGURES = OUTPUTS_ROOT / "figures"
REPORTS = OUTPUTS_ROOT / "reports"

REPORT_FILE_NAME = "urban_rural_overdose_report.html"

# ==============================================================================
# DIRECTORY INITIALIZATION
# ==============================================================================

def ensure_directories():
    """Create all necessary directories if they don't exist"""

    bronze_dirs = [
        BRONZE,
        BRONZE_MORTALITY, BRONZE_FACILITIES,
        BRONZE_REGIONS, BRONZE_POPULATION
    ]

    silver_dirs = [SILVER]

    gold_dirs = [GOLD, GOLD_ANALYTICS]

    output_dirs = [OUTPUTS_ROOT, FIGURES, REPORTS]

    all_dirs = bronze_dirs + silver_dirs + gold_dirs + output_dirs
    for directory in all_dirs:
        directory.mkdir(parents=True, exist_ok=True)


def bronze_files(data_dir=None):
    """
    Resolve the four input files, optionally under an alternate data root

    Args:
        data_dir: Directory laid out like data/ (None for the project default)

    Returns:
        Dict mapping source name to path
    """
    if data_dir is None:
        return {
            'mortality': DEFAULT_MORTALITY_FILE,
            'facilities': DEFAULT_FACILITY_FILE,
            'regions': DEFAULT_REGION_FILE,
            'population': DEFAULT_POPULATION_FILE,
        }

    bronze = Path(data_dir) / "bronze"
    return {
        'mortality': bronze / "mortality" / DEFAULT_MORTALITY_FILE.name,
        'facilities': bronze / "facilities" / DEFAULT_FACILITY_FILE.name,
        'regions': bronze / "regions" / DEFAULT_REGION_FILE.name,
        'population': bronze / "population" / DEFAULT_POPULATION_FILE.name,
    }
