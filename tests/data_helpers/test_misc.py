"""Test functions in policy_targets.data_helpers.misc module."""

import pandas as pd
import pytest
from structlog.testing import capture_logs

from policy_targets.data_helpers.misc import check_required_columns, drop_unknown_values, long_to_wide
from policy_targets.exceptions import MissingColumns, UnexpectedLabels


def test_check_required_columns():
    df = pd.DataFrame({"country": ["AAA"], "year": [2020]})
    check_required_columns(df, ["country", "year"])
    with pytest.raises(MissingColumns, match="value"):
        check_required_columns(df, ["country", "year", "value"])


class TestDropUnknownValues:
    df = pd.DataFrame({"technology": ["Wind", "Marine", "Hydro"], "value": [1, 2, 3]})

    def test_unknown_values_are_dropped(self):
        with capture_logs() as cap_logs:
            df_out = drop_unknown_values(self.df, column_name="technology", values_expected=["Wind", "Hydro"])
        assert df_out["technology"].tolist() == ["Wind", "Hydro"]
        assert df_out.index.tolist() == [0, 1]
        assert cap_logs[0]["values"] == ["Marine"]

    def test_unknown_values_raise_in_strict_mode(self):
        with pytest.raises(UnexpectedLabels):
            drop_unknown_values(self.df, column_name="technology", values_expected={"Wind", "Hydro"}, strict=True)

    def test_all_values_known(self):
        df_out = drop_unknown_values(self.df, column_name="technology", values_expected=["Wind", "Hydro", "Marine"])
        assert len(df_out) == 3


def test_long_to_wide_adds_duplicates_and_fills_zeros():
    df = pd.DataFrame(
        {
            "country": ["AAA", "AAA", "AAA", "BBB"],
            "year": [2020, 2020, 2025, 2020],
            "technology": ["Wind", "Wind", "Hydro", "Hydro"],
            "value": [1.0, 2.0, 3.0, 4.0],
        }
    )
    wide = long_to_wide(df, index=["country", "year"], columns="technology", values="value")
    assert wide.loc[("AAA", 2020), "Wind"] == 3.0
    assert wide.loc[("AAA", 2020), "Hydro"] == 0.0
    assert wide.loc[("BBB", 2020), "Wind"] == 0.0
    assert wide.columns.name == "technology"
