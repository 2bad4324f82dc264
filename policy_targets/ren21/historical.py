"""Prepare IRENA historical capacity and generation, used as baseline for the REN21 targets."""

import numpy as np
import pandas as pd
from owid.catalog import Table
from owid.datautils.dataframes import map_series
from structlog import get_logger

from policy_targets.data_helpers.misc import check_required_columns, long_to_wide
from policy_targets.ren21.shared import HISTORICAL_YEAR, HOURS_PER_YEAR, MW_TO_GW, TECHNOLOGIES, WIND_COMPONENTS

log = get_logger()

# IRENA technology labels and their names in this conversion.
# Labels not listed here (e.g. aggregates like "Renewable energy", or "Marine energy") are not needed.
IRENA_TECHNOLOGIES = {
    "Hydropower": "Hydro",
    "Wind energy": "Wind",
    "Onshore wind energy": "Wind_ON",
    "Offshore wind energy": "Wind_OFF",
    "Solar photovoltaic": "SolarPV",
    "Concentrated solar power": "SolarCSP",
    "Bioenergy": "Biomass",
    "Geothermal energy": "Geothermal",
}
# Allow tables where technologies have already been renamed.
IRENA_TECHNOLOGIES.update({technology: technology for technology in TECHNOLOGIES + WIND_COMPONENTS})


def _prepare_irena_table(tb: Table, value_column: str) -> pd.DataFrame:
    check_required_columns(tb, ["country", "year", "technology", value_column])
    tb = tb.copy()
    tb["technology"] = map_series(tb["technology"], mapping=IRENA_TECHNOLOGIES, make_unmapped_values_nan=True)
    if tb["technology"].isnull().any():
        log.info("irena.unused_technologies", column=value_column, rows=int(tb["technology"].isnull().sum()))
    tb = tb.dropna(subset=["technology"])

    df = long_to_wide(tb.astype({"year": int}), index=["country", "year"], columns="technology", values=value_column)
    df = df.reindex(columns=TECHNOLOGIES + WIND_COMPONENTS, fill_value=0.0).fillna(0.0)

    # Some releases only report onshore and offshore wind separately.
    df["Wind"] = df["Wind"].where(df["Wind"] != 0, df["Wind_ON"] + df["Wind_OFF"])
    df.columns.name = "technology"

    return df


def prepare_historical_capacity(tb: Table) -> pd.DataFrame:
    """Historical installed capacity in GW, indexed by country and year, with one column per technology."""
    df = _prepare_irena_table(tb, value_column="capacity")
    # Capacity is given in MW.
    df *= MW_TO_GW

    return df


def prepare_historical_generation(tb: Table) -> pd.DataFrame:
    """Historical generation in GWh, indexed by country and year, with one column per technology."""
    return _prepare_irena_table(tb, value_column="generation")


def values_in_year(df: pd.DataFrame, year: int, countries=None) -> pd.DataFrame:
    """Historical values for a given year, indexed by country, with zeros where data is missing."""
    if year in df.index.get_level_values("year"):
        values = df.xs(year, level="year")
    else:
        values = pd.DataFrame(columns=df.columns, index=pd.Index([], name="country"), dtype=float)
    if countries is not None:
        values = values.reindex(countries)

    return values.fillna(0.0)


def calculate_hydro_capacity_factor(
    capacity: pd.DataFrame, generation: pd.DataFrame, year: int = HISTORICAL_YEAR
) -> pd.Series:
    """Real-world capacity factor of hydropower, as generation over the maximum possible generation in a year.

    Countries without hydropower capacity (or without data) get a capacity factor of zero.
    """
    countries = capacity.index.get_level_values("country").union(generation.index.get_level_values("country")).unique()
    hydro_capacity = values_in_year(capacity, year=year, countries=countries)["Hydro"]
    hydro_generation = values_in_year(generation, year=year, countries=countries)["Hydro"]

    with np.errstate(divide="ignore", invalid="ignore"):
        capacity_factor = hydro_generation / (HOURS_PER_YEAR * hydro_capacity)
    capacity_factor = capacity_factor.replace([np.inf, -np.inf], np.nan).fillna(0.0).rename("Hydro")

    return capacity_factor
