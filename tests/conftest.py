"""Shared fixtures: small synthetic source tables and a bronze data directory"""

import sys
from pathlib import Path

import pandas as pd
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import FACILITY_INDICATOR


MORTALITY_TSV = '''"Notes"\t"State"\t"State Code"\t"Year"\t"Year Code"\t"Deaths"\t"Population"\t"Crude Rate"
\t"Alpha"\t"01"\t"2018"\t"2018"\t"2,160"\t"1080000"\t"20.0"
\t"Alpha"\t"01"\t"2019"\t"2019"\t"2,400"\t"1090000"\t"22.0"
\t"Alpha"\t"01"\t"2020"\t"2020"\t"2,640"\t"1100000"\t"24.0"
\t"Beta"\t"02"\t"2018"\t"2018"\t"290"\t"580000"\t"50.0"
\t"Beta"\t"02"\t"2019"\t"2019"\t"300"\t"590000"\t"51.0"
\t"Beta"\t"02"\t"2020"\t"2020"\t"12"\t"600000"\t"Unreliable"
\t"Gamma"\t"03"\t"2018"\t"2018"\t"40"\t"200000"\t"20.0"
"Total"\t\t\t\t\t"5842"\t"3240000"\t"25.1"
"---"
"Dataset: Multiple Cause of Death, 1999-2020"
'''

FACILITIES_CSV = f'''State,Year,Indicator,Value
Alpha,2018,{FACILITY_INDICATOR},"1,200"
Alpha,2019,{FACILITY_INDICATOR},"1,250"
Alpha,2020,{FACILITY_INDICATOR},"1,300"
Alpha,2021,{FACILITY_INDICATOR},"1,310"
Beta,2018,{FACILITY_INDICATOR},40
Beta,2019,{FACILITY_INDICATOR},42
Beta,2020,{FACILITY_INDICATOR},45
Gamma,2018,{FACILITY_INDICATOR},10
Alpha,2018,OTHER_INDICATOR,999
Beta,2019,{FACILITY_INDICATOR},n/a
'''

REGIONS_CSV = '''State,State Code,Region,Division
Alpha,AL,Northeast,New England
Beta,BE,West,Mountain
'''

POPULATION_CSV = '''Name,Geography Type,Year,Resident Population,Resident Population Density
United States,Nation,2010,"308,745,538",87.4
Alpha,State,2010,"1,000,000",200.0
Alpha,State,2020,"1,100,000",220.0
Beta,State,2010,"500,000",50.0
Beta,State,2020,"600,000",60.0
Gamma,State,2010,"200,000",30.0
Gamma,State,2020,"210,000",31.0
Northeast,Region,2010,"55,317,240",
'''


@pytest.fixture
def data_dir(tmp_path):
    """Project-style data root with the four bronze files"""
    root = tmp_path / 'data'
    files = {
        'mortality/overdose_mortality_by_state.txt': MORTALITY_TSV,
        'facilities/treatment_facilities_by_state.csv': FACILITIES_CSV,
        'regions/us_census_regions.csv': REGIONS_CSV,
        'population/apportionment.csv': POPULATION_CSV,
    }
    for relative, content in files.items():
        path = root / 'bronze' / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    return root


@pytest.fixture
def merged_two_states():
    """One Rural and one Urban state, each with Deaths=10 and Population=1000"""
    return pd.DataFrame({
        'State': ['Ruralia', 'Urbania'],
        'Year': [2020, 2020],
        'Region': ['Midwest', 'Northeast'],
        'Crude_Rate': [1000.0, 1000.0],
        'Deaths': [10, 10],
        'Facilities': [3, 7],
        'Population': [1000.0, 1000.0],
        'Density': [50.0, 200.0],
        'Urban_Rural': ['Rural', 'Urban'],
    })


@pytest.fixture
def merged_panel():
    """Two Urban and two Rural state-years over two years with uneven populations"""
    return pd.DataFrame({
        'State': ['A', 'A', 'B', 'B', 'C', 'C', 'D', 'D'],
        'Year': [2019, 2020] * 4,
        'Region': ['South', 'South', 'South', 'South', 'West', 'West', 'West', 'West'],
        'Crude_Rate': [10.0, 20.0, 30.0, 40.0, 5.0, 15.0, 25.0, 35.0],
        'Deaths': [10, 20, 30, 40, 1, 2, 3, 4],
        'Facilities': [1, 2, 3, 4, 5, 6, 7, 8],
        'Population': [100.0, 100.0, 1000.0, 1000.0, 10.0, 10.0, 100.0, 100.0],
        'Density': [150.0, 150.0, 300.0, 300.0, 20.0, 20.0, 80.0, 80.0],
        'Urban_Rural': ['Urban'] * 4 + ['Rural'] * 4,
    })
