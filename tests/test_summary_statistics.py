"""Tests for grouped summaries and the density trend fit"""

import numpy as np
import pandas as pd
import pytest

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


def test_two_state_scenario(merged_two_states):
    summary = summarize_by_classification(merged_two_states).set_index('Urban_Rural')

    for label in ['Urban', 'Rural']:
        assert summary.loc[label, 'Total_Deaths'] == 10
        assert summary.loc[label, 'Avg_Deaths_Per_Capita'] == pytest.approx(0.01)
    assert summary.loc['Urban', 'Avg_Density'] == 200.0
    assert summary.loc['Rural', 'Avg_Density'] == 50.0
    assert summary.loc['Urban', 'Total_Facilities'] == 7


def test_per_capita_is_mean_of_row_ratios(merged_panel):
    summary = summarize_by_classification(merged_panel).set_index('Urban_Rural')

    urban = merged_panel[merged_panel['Urban_Rural'] == 'Urban']
    mean_of_ratios = (urban['Deaths'] / urban['Population']).mean()
    ratio_of_sums = urban['Deaths'].sum() / urban['Population'].sum()

    assert summary.loc['Urban', 'Avg_Deaths_Per_Capita'] == pytest.approx(mean_of_ratios)
    assert summary.loc['Urban', 'Avg_Deaths_Per_Capita'] != pytest.approx(ratio_of_sums)
    assert mean_of_ratios == pytest.approx(0.0925)


def test_summary_columns_and_order(merged_panel):
    summary = summarize_by_classification(merged_panel)

    assert list(summary.columns) == [
        'Urban_Rural', 'Avg_Density', 'Avg_Deaths_Per_Capita',
        'Total_Facilities', 'Total_Deaths',
    ]
    assert list(summary['Urban_Rural']) == ['Urban', 'Rural']
    assert list(summary['Total_Facilities']) == [10, 26]
    assert list(summary['Total_Deaths']) == [100, 10]
    assert list(summary['Avg_Density']) == [225.0, 50.0]


def test_missing_values_are_skipped(merged_panel):
    df = merged_panel.copy()
    df['Deaths_Per_Capita'] = df['Deaths'] / df['Population']
    df.loc[0, 'Deaths_Per_Capita'] = np.nan
    df.loc[0, 'Density'] = np.nan

    summary = summarize_by_classification(df).set_index('Urban_Rural')

    assert summary.loc['Urban', 'Avg_Deaths_Per_Capita'] == pytest.approx((0.2 + 0.03 + 0.04) / 3)
    assert summary.loc['Urban', 'Avg_Density'] == pytest.approx(250.0)


def test_trend_by_year(merged_panel):
    trend = trend_by_year(merged_panel)

    assert list(trend.columns) == ['Urban_Rural', 'Year', 'Avg_Crude_Rate']
    assert trend.to_dict('records') == [
        {'Urban_Rural': 'Urban', 'Year': 2019, 'Avg_Crude_Rate': 20.0},
        {'Urban_Rural': 'Urban', 'Year': 2020, 'Avg_Crude_Rate': 30.0},
        {'Urban_Rural': 'Rural', 'Year': 2019, 'Avg_Crude_Rate': 15.0},
        {'Urban_Rural': 'Rural', 'Year': 2020, 'Avg_Crude_Rate': 25.0},
    ]


def test_summarize_by_region(merged_panel):
    df = merged_panel.copy()
    df.loc[df['State'] == 'D', 'Region'] = 'South'

    regional = summarize_by_region(df)

    assert list(regional.columns) == [
        'Region', 'Urban_Rural', 'Avg_Deaths_Per_Capita',
        'Total_Facilities', 'Total_Deaths',
    ]
    keys = list(zip(regional['Region'], regional['Urban_Rural']))
    assert keys == [('South', 'Urban'), ('South', 'Rural'), ('West', 'Rural')]

    south_rural = regional.iloc[1]
    assert south_rural['Total_Deaths'] == 7
    assert south_rural['Total_Facilities'] == 15
    assert south_rural['Avg_Deaths_Per_Capita'] == pytest.approx(0.035)


def test_fit_density_trend_recovers_line():
    df = pd.DataFrame({
        'Density': [10.0, 20.0, 30.0, 40.0],
        'Crude_Rate': [21.0, 41.0, 61.0, 81.0],
    })

    fit = fit_density_trend(df)

    assert fit['slope'] == pytest.approx(2.0)
    assert fit['intercept'] == pytest.approx(1.0)
    assert fit['r_squared'] == pytest.approx(1.0)
    assert fit['pearson_r'] == pytest.approx(1.0)
    assert fit['n'] == 4


def test_fit_density_trend_needs_spread():
    df = pd.DataFrame({'Density': [10.0, 10.0], 'Crude_Rate': [1.0, 2.0]})

    with pytest.raises(ValueError):
        fit_density_trend(df)


def test_describe_coverage(merged_panel):
    coverage = describe_coverage(merged_panel)

    assert coverage['first_year'] == 2019
    assert coverage['last_year'] == 2020
    assert coverage['n_rows'] == 8
    assert coverage['n_states'] == 4
    assert coverage['rows_per_class'] == {'Urban': 4, 'Rural': 4}
    assert coverage['states_per_class'] == {'Urban': 2, 'Rural': 2}


def test_per_capita_ratio(merged_two_states):
    summary = summarize_by_classification(merged_two_states)

    assert per_capita_ratio(summary) == pytest.approx(1.0)
    assert per_capita_ratio(summary[summary['Urban_Rural'] == 'Urban']) is None


def test_format_summary_table(merged_two_states):
    table = format_summary_table(summarize_by_classification(merged_two_states))

    assert list(table.columns) == [
        'Classification', 'Avg. Density (per sq. mi.)', 'Avg. Deaths per 100k',
        'Total Facilities', 'Total Deaths',
    ]
    urban = table.iloc[0]
    assert urban['Classification'] == 'Urban'
    assert urban['Avg. Deaths per 100k'] == '1,000.00'
    assert urban['Avg. Density (per sq. mi.)'] == '200.0'


def test_format_region_table(merged_two_states):
    table = format_region_table(summarize_by_region(merged_two_states))

    assert list(table['Region']) == ['Midwest', 'Northeast']
    assert list(table['Total Deaths']) == ['10', '10']
