"""Test functions in policy_targets.ren21.potentials module."""

import pandas as pd
import pytest
from owid.catalog import Table
from structlog.testing import capture_logs

from policy_targets.ren21 import potentials
from policy_targets.ren21.shared import EJ_TO_GWH


def test_maxprod_is_converted_to_gwh(tb_wind, tb_hydro, tb_solar):
    df = potentials.combine_potentials(tb_wind, tb_hydro, tb_solar, regions=["AAA", "BBB"])
    assert df.loc["AAA", ("Hydro", "maxprod", 1)] == pytest.approx(0.01 * EJ_TO_GWH)
    assert df.loc["BBB", ("SolarPV", "maxprod", 2)] == pytest.approx(0.1 * EJ_TO_GWH)
    # Capacity factors are unchanged.
    assert df.loc["AAA", ("Hydro", "nur", 2)] == pytest.approx(0.4)


def test_regions_without_potentials_are_zero(tb_wind, tb_hydro, tb_solar):
    df = potentials.combine_potentials(tb_wind, tb_hydro, tb_solar, regions=["BBB", "ZZZ"])
    assert df.index.tolist() == ["BBB", "ZZZ"]
    assert (df.loc["ZZZ"] == 0).all()
    assert (df.loc["BBB", "Hydro"] == 0).all()


def test_solar_proxies(tb_wind, tb_hydro, tb_solar):
    with capture_logs() as cap_logs:
        df = potentials.combine_potentials(tb_wind, tb_hydro, tb_solar, regions=["KOR"])
    assert df.loc["KOR", ("SolarPV", "maxprod", 1)] == pytest.approx(0.3 * EJ_TO_GWH)
    assert df.loc["KOR", ("SolarCSP", "nur", 1)] == pytest.approx(0.35)
    assert any(log["event"] == "combine_potentials.solar_proxy" and log["country"] == "KOR" for log in cap_logs)


def test_bins_are_sorted_numerically(tb_hydro, tb_solar):
    tb_wind = Table(
        pd.DataFrame(
            {
                "country": ["AAA"] * 4,
                "type": ["maxprod", "maxprod", "nur", "nur"],
                "bin": ["10", "9", "10", "9"],
                "value": [0.1, 0.2, 0.1, 0.2],
            }
        )
    )
    df = potentials.combine_potentials(tb_wind, tb_hydro, tb_solar, regions=["AAA"])
    bins = potentials.get_bins(df, country="AAA", technology="Wind")
    assert bins.index.tolist() == [9, 10]
    assert bins.columns.tolist() == ["maxprod", "nur"]
    assert bins.loc[9, "nur"] == pytest.approx(0.2)


def test_get_bins_of_unknown_technology_is_empty(tb_wind, tb_hydro, tb_solar):
    df = potentials.combine_potentials(tb_wind, tb_hydro, tb_solar, regions=["AAA"])
    assert potentials.get_bins(df, country="AAA", technology="Geothermal").empty
