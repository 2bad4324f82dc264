"""Test functions in policy_targets.ren21.historical module."""

import pandas as pd
import pytest
from owid.catalog import Table

from policy_targets.ren21 import historical
from policy_targets.ren21.shared import TECHNOLOGIES


def test_prepare_historical_capacity_converts_to_gw(tb_capacity):
    df = historical.prepare_historical_capacity(tb_capacity)
    assert df.loc[("AAA", 2015), "Hydro"] == pytest.approx(2.0)
    assert df.loc[("AAA", 2015), "SolarPV"] == pytest.approx(1.0)
    assert df.loc[("AAA", 2015), "Biomass"] == pytest.approx(0.5)
    assert set(TECHNOLOGIES) <= set(df.columns)


def test_prepare_historical_capacity_combines_wind_components(tb_capacity):
    df = historical.prepare_historical_capacity(tb_capacity)
    # Only onshore and offshore are given for AAA.
    assert df.loc[("AAA", 2015), "Wind"] == pytest.approx(6.0)
    # Total wind is given for BBB.
    assert df.loc[("BBB", 2015), "Wind"] == pytest.approx(3.0)


def test_prepare_historical_capacity_ignores_other_technologies(tb_capacity):
    df = historical.prepare_historical_capacity(tb_capacity)
    assert "Renewable energy" not in df.columns


def test_prepare_historical_generation_keeps_gwh(tb_generation):
    df = historical.prepare_historical_generation(tb_generation)
    assert df.loc[("AAA", 2015), "Hydro"] == 8760.0
    assert df.loc[("AAA", 2015), "Geothermal"] == 0.0


class TestValuesInYear:
    def test_missing_countries_are_zero(self, tb_capacity):
        df = historical.prepare_historical_capacity(tb_capacity)
        values = historical.values_in_year(df, year=2015, countries=["CCC", "ZZZ"])
        assert values.index.tolist() == ["CCC", "ZZZ"]
        assert (values.loc["ZZZ"] == 0).all()

    def test_missing_year_is_zero(self, tb_capacity):
        df = historical.prepare_historical_capacity(tb_capacity)
        values = historical.values_in_year(df, year=1990, countries=["AAA"])
        assert (values.loc["AAA"] == 0).all()


class TestCalculateHydroCapacityFactor:
    def test_capacity_factor(self, tb_capacity, tb_generation):
        capacity = historical.prepare_historical_capacity(tb_capacity)
        generation = historical.prepare_historical_generation(tb_generation)
        cf = historical.calculate_hydro_capacity_factor(capacity=capacity, generation=generation)
        assert cf["AAA"] == pytest.approx(0.5)
        assert cf["CCC"] == pytest.approx(0.5)

    def test_countries_without_hydropower_capacity_are_zero(self, tb_capacity):
        capacity = historical.prepare_historical_capacity(tb_capacity)
        generation = historical.prepare_historical_generation(
            Table(
                pd.DataFrame({"country": ["BBB"], "year": [2015], "technology": ["Hydropower"], "generation": [10.0]})
            )
        )
        cf = historical.calculate_hydro_capacity_factor(capacity=capacity, generation=generation)
        # BBB has generation but no capacity, and CCC has capacity but no generation.
        assert cf["BBB"] == 0.0
        assert cf["CCC"] == 0.0
