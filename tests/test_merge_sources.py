"""Tests for the inner joins across the four sources"""

import pandas as pd

from data_engineering.integrate import merge_sources, year_window


def _sources():
    mortality = pd.DataFrame({
        'State': ['Alpha', 'Alpha', 'Alpha', 'Beta', 'Beta', 'Gamma'],
        'Year': [2017, 2018, 2019, 2018, 2019, 2018],
        'Crude_Rate': [10.0, 11.0, 12.0, 20.0, 21.0, 5.0],
        'Deaths': [100, 110, 120, 20, 21, 5],
    })
    facilities = pd.DataFrame({
        'State': ['Alpha', 'Alpha', 'Alpha', 'Beta', 'Beta', 'Gamma'],
        'Year': [2018, 2019, 2020, 2018, 2019, 2018],
        'Facilities': [5, 6, 7, 1, 1, 2],
    })
    regions = pd.DataFrame({
        'State': ['Alpha', 'Beta', 'Delta'],
        'Region': ['South', 'West', 'Midwest'],
    })
    population = pd.DataFrame({
        'State': ['Alpha', 'Alpha', 'Alpha', 'Beta', 'Gamma'],
        'Year': [2017, 2018, 2019, 2018, 2018],
        'Population': [1000.0, 1010.0, 1020.0, 500.0, 100.0],
        'Density': [150.0, 151.0, 152.0, 40.0, 10.0],
    })
    return mortality, facilities, regions, population


def test_only_keys_present_in_all_sources_survive():
    merged = merge_sources(*_sources(), verbose=False)

    keys = set(zip(merged['State'], merged['Year']))
    # Alpha 2017: no facilities; Alpha 2020: no mortality; Beta 2019: no population;
    # Gamma: no region
    assert keys == {('Alpha', 2018), ('Alpha', 2019), ('Beta', 2018)}


def test_merged_columns_and_values():
    merged = merge_sources(*_sources(), verbose=False)

    assert list(merged.columns) == [
        'State', 'Year', 'Crude_Rate', 'Deaths', 'Facilities',
        'Region', 'Population', 'Density',
    ]
    beta = merged[merged['State'] == 'Beta'].iloc[0]
    assert beta['Region'] == 'West'
    assert beta['Facilities'] == 1
    assert beta['Density'] == 40.0


def test_row_count_never_exceeds_any_source():
    sources = _sources()

    merged = merge_sources(*sources, verbose=False)

    assert len(merged) <= min(len(df) for df in sources)


def test_window_is_truncated_to_common_years():
    merged = merge_sources(*_sources(), verbose=False)

    assert year_window(merged) == (2018, 2019)


def test_no_overlap_gives_empty_result():
    mortality, facilities, regions, population = _sources()
    facilities = facilities.assign(Year=facilities['Year'] + 100)

    merged = merge_sources(mortality, facilities, regions, population, verbose=False)

    assert merged.empty
    assert year_window(merged) == (None, None)


def test_inputs_are_not_modified():
    sources = _sources()
    copies = [df.copy() for df in sources]

    merge_sources(*sources, verbose=False)

    for original, copy in zip(sources, copies):
        pd.testing.assert_frame_equal(original, copy)
