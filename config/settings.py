"""
Analysis constants for the Urban vs. Rural overdose report
Thresholds, source codes, colors, and display settings
"""

# Urban/Rural split: persons per square mile, strictly greater is Urban
DENSITY_THRESHOLD = 100

URBAN = 'Urban'
RURAL = 'Rural'
CLASS_ORDER = [URBAN, RURAL]

# Indicator code kept from the facility table
FACILITY_INDICATOR = 'SUD_TX_FACILITIES'

# Crude Rate placeholders published by CDC WONDER instead of a number
UNRELIABLE_MARKERS = [
    'Unreliable',
    'Suppressed',
    'Missing',
    'Not Applicable',
]

CENSUS_REGIONS = ['Northeast', 'Midwest', 'South', 'West']

# Geography Type value for state rows in the apportionment table
STATE_GEOGRAPHY_TYPE = 'State'

# Years outside this window are data entry errors; cleaners drop them
MIN_YEAR = 1900
MAX_YEAR = 2100

# Raw column names per source
MORTALITY_COLUMNS = ['State', 'Year', 'Deaths', 'Crude Rate']
FACILITY_COLUMNS = ['State', 'Year', 'Indicator', 'Value']
REGION_COLUMNS = ['State', 'Region']
POPULATION_COLUMNS = [
    'Name',
    'Geography Type',
    'Year',
    'Resident Population',
    'Resident Population Density',
]

# Chart colors by classification
CLASS_COLORS = {
    URBAN: '#3498db',   # Blue
    RURAL: '#e67e22',   # Carrot
}

TREND_LINE_COLOR = '#34495e'  # Dark gray

SEABORN_STYLE = 'whitegrid'
FIGURE_DPI = 300

# Per-capita values are shown per 100,000 people in tables and prose
PER_CAPITA_SCALE = 100_000

# Column Display Names (prettier names for the summary table)
SUMMARY_COLUMN_RENAME = {
    'Urban_Rural': 'Classification',
    'Avg_Density': 'Avg. Density (per sq. mi.)',
    'Avg_Deaths_Per_Capita': 'Avg. Deaths per 100k',
    'Total_Facilities': 'Total Facilities',
    'Total_Deaths': 'Total Deaths',
}

REGION_COLUMN_RENAME = {
    'Region': 'Region',
    'Urban_Rural': 'Classification',
    'Avg_Deaths_Per_Capita': 'Avg. Deaths per 100k',
    'Total_Facilities': 'Total Facilities',
    'Total_Deaths': 'Total Deaths',
}

REPORT_TITLE = 'Overdose Mortality in Urban and Rural U.S. States'
