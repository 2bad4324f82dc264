"""Prepare the REN21 survey of policy targets.

The survey comes as a long table with one row per country, year, target type and technology. Here it is turned into
a wide frame indexed by country and year, with one column per (target type, technology), and targets set in
off-cycle years are projected onto the model years.

"""

import numpy as np
import pandas as pd
from owid.catalog import Table
from structlog import get_logger

from policy_targets import config
from policy_targets.data_helpers.misc import check_required_columns, drop_unknown_values, long_to_wide
from policy_targets.ren21.shared import (
    BASE_YEAR,
    MODEL_YEARS,
    OFF_CYCLE_GROWTH_RATE,
    SURVEY_TECHNOLOGIES,
    TARGET_ADDITIONAL,
    TARGET_TYPES,
    TECHNOLOGIES,
    WIND_COMPONENTS,
)

log = get_logger()

SURVEY_COLUMNS = ["country", "year", "target_type", "technology", "value"]


def pivot_survey(tb: Table) -> pd.DataFrame:
    """Turn the long survey into a wide frame with all target types and technologies, where missing targets are zero."""
    check_required_columns(tb, SURVEY_COLUMNS)
    tb = drop_unknown_values(tb, column_name="target_type", values_expected=TARGET_TYPES, strict=config.STRICT)
    tb = drop_unknown_values(tb, column_name="technology", values_expected=SURVEY_TECHNOLOGIES, strict=config.STRICT)

    # Base years are not additive: keep the latest one given for each target.
    df = pd.DataFrame(tb)[SURVEY_COLUMNS]
    is_base_year = df["technology"] == BASE_YEAR
    base_years = df[is_base_year].groupby(["country", "year", "target_type"], as_index=False)["value"].max()
    if len(base_years) < is_base_year.sum():
        log.info("pivot_survey.duplicated_base_years", rows=int(is_base_year.sum() - len(base_years)))
    df = pd.concat([df[~is_base_year], base_years.assign(technology=BASE_YEAR)[SURVEY_COLUMNS]], ignore_index=True)

    df = long_to_wide(
        df.astype({"year": int}), index=["country", "year"], columns=["target_type", "technology"], values="value"
    )

    # Ensure all combinations exist, so that missing targets are treated as zero.
    columns = pd.MultiIndex.from_product([TARGET_TYPES, SURVEY_TECHNOLOGIES], names=["target_type", "technology"])
    df = df.reindex(columns=columns, fill_value=0.0).fillna(0.0).sort_index()

    return df


def combine_wind(df: pd.DataFrame) -> pd.DataFrame:
    """Add onshore and offshore wind targets to the wind targets given without distinction, for each target type."""
    df = df.copy()
    for target_type in TARGET_TYPES:
        components = [(target_type, "Wind")] + [(target_type, component) for component in WIND_COMPONENTS]
        df[(target_type, "Wind")] = df[components].sum(axis=1)

    return df


def project_off_cycle_years(df: pd.DataFrame) -> pd.DataFrame:
    """Project targets set in off-cycle years onto the following model year.

    A non-zero target given in year i, where m - 5 < i < m for a model year m, replaces the target of year m by the
    target of year i grown by 5% per year. Off-cycle years are processed in ascending order, so the latest one in the
    same five-year bucket wins.

    """
    # Ensure all model years exist for all countries.
    countries = df.index.get_level_values("country").unique()
    model_index = pd.MultiIndex.from_product([countries, MODEL_YEARS], names=["country", "year"])
    df = df.reindex(df.index.union(model_index), fill_value=0.0)

    columns = [(target_type, technology) for target_type in TARGET_TYPES for technology in TECHNOLOGIES]
    years = df.index.get_level_values("year").unique().sort_values()
    off_cycle_years = [year for year in years if year % 5 != 0]

    for year in off_cycle_years:
        model_year = next((model_year for model_year in MODEL_YEARS if model_year - 5 < year < model_year), None)
        if model_year is None:
            continue
        factor = 1 + (model_year - year) * OFF_CYCLE_GROWTH_RATE
        values = df.xs(year, level="year")[columns]
        for country, row in values.iterrows():
            informed = row[row != 0]
            if informed.empty:
                continue
            for column, value in informed.items():
                df.loc[(country, model_year), column] = value * factor

    return df.sort_index()


def select_model_years(df: pd.DataFrame) -> pd.DataFrame:
    """Keep only model years; model years without any target become rows of zeros."""
    countries = df.index.get_level_values("country").unique()
    index = pd.MultiIndex.from_product([countries, MODEL_YEARS], names=["country", "year"])

    return df.reindex(index, fill_value=0.0)


def prepare_survey(tb: Table) -> pd.DataFrame:
    df = pivot_survey(tb)
    df = combine_wind(df)
    df = project_off_cycle_years(df)
    df = select_model_years(df)

    n_base_years = int(np.count_nonzero(df[(TARGET_ADDITIONAL, BASE_YEAR)]))
    log.info("prepare_survey", countries=df.index.get_level_values("country").nunique(), base_years=n_base_years)

    return df
