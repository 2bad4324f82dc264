"""Combine resource potentials of solar, wind and hydropower.

Potentials are given in bins of decreasing quality. For each bin, `nur` is the capacity factor and `maxprod` the
maximum production (in EJ per year) that can be obtained from it.

"""

from typing import Dict, Iterable

import pandas as pd
from owid.catalog import Table
from structlog import get_logger

from policy_targets.data_helpers.misc import check_required_columns
from policy_targets.ren21.shared import EJ_TO_GWH, POTENTIAL_MAXPROD, POTENTIAL_TYPES

log = get_logger()

# Solar potentials are only available for the regions of the energy model. Some countries with solar targets take the
# potentials of the region they belong to.
SOLAR_PROXIES = {
    "KOR": "JPN",
    "MKD": "EUR",
}
# Solar technology names in the potentials data.
SOLAR_TECHNOLOGIES = {
    "spv": "SolarPV",
    "csp": "SolarCSP",
}


def _potentials_to_wide(tb: pd.DataFrame) -> pd.DataFrame:
    tb = tb[tb["type"].isin(POTENTIAL_TYPES)].astype({"bin": int})
    if tb.empty:
        columns = pd.MultiIndex.from_tuples([], names=["technology", "type", "bin"])
        return pd.DataFrame(index=pd.Index([], name="country"), columns=columns, dtype=float)
    df = pd.DataFrame(tb).pivot_table(
        index="country", columns=["technology", "type", "bin"], values="value", aggfunc="sum", fill_value=0.0
    )

    return df.astype(float)


def combine_potentials(
    tb_wind: Table,
    tb_hydro: Table,
    tb_solar: Table,
    regions: Iterable[str],
    solar_proxies: Dict[str, str] = SOLAR_PROXIES,
) -> pd.DataFrame:
    """Combine potentials in a frame indexed by country, with columns (technology, type, bin).

    Bins are sorted numerically, maximum production is converted to GWh, and countries without potentials have zeros.

    """
    for tb in [tb_wind, tb_hydro]:
        check_required_columns(tb, ["country", "type", "bin", "value"])
    check_required_columns(tb_solar, ["country", "technology", "type", "bin", "value"])

    tb_solar = tb_solar[tb_solar["technology"].isin(list(SOLAR_TECHNOLOGIES))].copy()
    tb_solar["technology"] = tb_solar["technology"].map(SOLAR_TECHNOLOGIES)
    df_solar = _potentials_to_wide(tb_solar)

    # Assign potentials of the corresponding region to countries without their own solar potentials.
    for country, proxy in solar_proxies.items():
        if proxy in df_solar.index:
            df_solar.loc[country] = df_solar.loc[proxy].values
            log.info("combine_potentials.solar_proxy", country=country, proxy=proxy)

    df_wind = _potentials_to_wide(pd.DataFrame(tb_wind).assign(technology="Wind"))
    df_hydro = _potentials_to_wide(pd.DataFrame(tb_hydro).assign(technology="Hydro"))

    regions = pd.Index(list(regions), name="country")
    combined = pd.concat([df_solar, df_wind, df_hydro], axis=1).reindex(regions).fillna(0.0)
    combined = combined.sort_index(axis=1)

    # Convert maximum production from EJ/a to GWh.
    maxprod = combined.columns.get_level_values("type") == POTENTIAL_MAXPROD
    combined.loc[:, maxprod] *= EJ_TO_GWH

    return combined


def get_bins(potentials: pd.DataFrame, country: str, technology: str) -> pd.DataFrame:
    """Potential bins of a technology in a country, as a frame with columns maxprod and nur, sorted by bin."""
    if technology not in potentials.columns.get_level_values("technology"):
        return pd.DataFrame(columns=POTENTIAL_TYPES, dtype=float)
    bins = potentials.loc[country, technology].unstack("type")

    return bins.reindex(columns=POTENTIAL_TYPES, fill_value=0.0).fillna(0.0).sort_index()
