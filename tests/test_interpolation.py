"""Tests for linear gap filling and annual densification"""

import numpy as np
import pandas as pd
import pytest

from data_engineering.features.interpolation import interpolate_linear, densify_years


def test_interpolated_value_follows_line_between_brackets():
    x0, y0, x1, y1 = 2000, 100.0, 2010, 250.0
    years = np.arange(x0, x1 + 1)
    values = np.full(len(years), np.nan)
    values[0], values[-1] = y0, y1

    result = interpolate_linear(years, values)

    for x, y in zip(years, result):
        assert y == pytest.approx(y0 + (y1 - y0) * (x - x0) / (x1 - x0))


def test_observed_values_are_preserved_exactly():
    values = [0.1 + 0.2, np.nan, 1 / 3, np.nan, np.nan, 2.718281828]
    years = [2000, 2001, 2002, 2003, 2004, 2005]

    result = interpolate_linear(years, values)

    assert result[0] == values[0]
    assert result[2] == values[2]
    assert result[5] == values[5]


def test_no_extrapolation_outside_observed_range():
    years = [2000, 2001, 2002, 2003, 2004]
    values = [np.nan, 10.0, np.nan, 30.0, np.nan]

    result = interpolate_linear(years, values)

    assert np.isnan(result[0])
    assert result[2] == pytest.approx(20.0)
    assert np.isnan(result[4])


def test_single_known_value_is_left_alone():
    result = interpolate_linear([2000, 2001, 2002], [np.nan, 5.0, np.nan])

    assert np.isnan(result[0])
    assert result[1] == 5.0
    assert np.isnan(result[2])


def test_unsorted_years():
    result = interpolate_linear([2010, 2000, 2005], [200.0, 100.0, np.nan])

    assert result[2] == pytest.approx(150.0)


def test_input_is_not_modified():
    values = np.array([1.0, np.nan, 3.0])

    interpolate_linear([0, 1, 2], values)

    assert np.isnan(values[1])


def test_densify_produces_contiguous_years_per_state():
    sparse = pd.DataFrame({
        'State': ['Beta', 'Alpha', 'Alpha', 'Beta', 'Alpha'],
        'Year': [2000, 2020, 2000, 2003, 2010],
        'Population': [10.0, 300.0, 100.0, 40.0, 200.0],
        'Density': [1.0, 30.0, 10.0, 4.0, 20.0],
    })

    result = densify_years(sparse, verbose=False)

    alpha = result[result['State'] == 'Alpha']
    beta = result[result['State'] == 'Beta']
    assert list(alpha['Year']) == list(range(2000, 2021))
    assert list(beta['Year']) == [2000, 2001, 2002, 2003]
    assert not result.duplicated(subset=['State', 'Year']).any()
    assert list(result.columns) == ['State', 'Year', 'Population', 'Density']


def test_densify_fills_each_state_independently():
    sparse = pd.DataFrame({
        'State': ['Alpha', 'Alpha', 'Beta', 'Beta'],
        'Year': [2000, 2010, 2000, 2010],
        'Population': [100.0, 200.0, 1000.0, 500.0],
        'Density': [10.0, 20.0, 50.0, 40.0],
    })

    result = densify_years(sparse, verbose=False).set_index(['State', 'Year'])

    assert result.loc[('Alpha', 2004), 'Population'] == pytest.approx(140.0)
    assert result.loc[('Alpha', 2004), 'Density'] == pytest.approx(14.0)
    assert result.loc[('Beta', 2004), 'Population'] == pytest.approx(800.0)
    assert result.loc[('Beta', 2004), 'Density'] == pytest.approx(46.0)
    assert result.loc[('Alpha', 2010), 'Population'] == 200.0


def test_densify_fills_columns_independently():
    sparse = pd.DataFrame({
        'State': ['Alpha', 'Alpha', 'Alpha'],
        'Year': [2000, 2010, 2020],
        'Population': [100.0, np.nan, 300.0],
        'Density': [10.0, 20.0, np.nan],
    })

    result = densify_years(sparse, verbose=False).set_index('Year')

    assert result.loc[2010, 'Population'] == pytest.approx(200.0)
    assert np.isnan(result.loc[2015, 'Density'])
    assert result.loc[2005, 'Density'] == pytest.approx(15.0)


def test_densify_empty_frame():
    empty = pd.DataFrame(columns=['State', 'Year', 'Population', 'Density'])

    result = densify_years(empty, verbose=False)

    assert result.empty
    assert list(result.columns) == ['State', 'Year', 'Population', 'Density']
