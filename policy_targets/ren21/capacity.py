"""Harmonise REN21 policy targets into total installed capacity targets (in GW).

REN21 targets come in different flavours:
* Additional capacity (AC-Absolute), to be installed on top of the capacity of a base year.
* Total installed capacity (TIC-Absolute).
* Production (Production-Absolute), in GWh.

All of them are converted into total installed capacity, and the target of each technology and model year is the
largest of the converted targets (and never smaller than the existing capacity). Hydropower is a special case: its
targets are first expressed as generation, which is then converted into capacity using the potential bins.

Countries that are not in the REN21 database keep their historical capacity.

"""

from typing import Iterable

import numpy as np
import pandas as pd
from owid.catalog import Table
from structlog import get_logger

from policy_targets import config
from policy_targets.ren21.historical import (
    calculate_hydro_capacity_factor,
    prepare_historical_capacity,
    prepare_historical_generation,
    values_in_year,
)
from policy_targets.ren21.potentials import combine_potentials, get_bins
from policy_targets.ren21.shared import (
    BASE_YEAR,
    CAPACITY_FACTOR_BIOMASS,
    CAPACITY_FACTOR_GEOTHERMAL,
    HISTORICAL_YEAR,
    HOURS_PER_YEAR,
    MODEL_TECHNOLOGY_NAMES,
    MODEL_YEARS,
    POTENTIAL_MAXPROD,
    POTENTIAL_NUR,
    TARGET_ADDITIONAL,
    TARGET_PRODUCTION,
    TARGET_TOTAL,
    TECHNOLOGIES,
    TECHNOLOGIES_WITH_POTENTIALS,
)
from policy_targets.ren21.survey import prepare_survey

log = get_logger()

# Technologies whose additional and total capacity targets are given directly in GW.
TECHNOLOGIES_WITH_CAPACITY_TARGETS = ["Wind", "SolarPV", "SolarCSP", "Biomass"]


def _by_country(series: pd.Series, index: pd.MultiIndex) -> np.ndarray:
    # Broadcast a series indexed by country to a (country, year) index.
    return series.reindex(index.get_level_values("country")).fillna(0.0).to_numpy()


def _empty_like(survey: pd.DataFrame) -> pd.DataFrame:
    return pd.DataFrame(0.0, index=survey.index, columns=pd.Index(TECHNOLOGIES, name="technology"))


def initial_capacity(survey: pd.DataFrame, capacity: pd.DataFrame, generation: pd.DataFrame) -> pd.DataFrame:
    """Existing capacity that targets build upon, for each country and model year.

    It is the historical capacity of the base year of additional capacity targets, if given, or otherwise the
    capacity in 2015. For hydropower, it is the 2015 generation (in GWh), since hydropower targets are handled as
    generation targets.

    """
    countries = survey.index.get_level_values("country")
    base_years = survey[(TARGET_ADDITIONAL, BASE_YEAR)]
    reference_years = base_years.where(base_years != 0, HISTORICAL_YEAR).astype(int)

    lookup = pd.MultiIndex.from_arrays([countries, reference_years.to_numpy()], names=["country", "year"])
    baseline = capacity.reindex(columns=TECHNOLOGIES).reindex(lookup).fillna(0.0)
    baseline.index = survey.index

    hydro_generation = values_in_year(generation, year=HISTORICAL_YEAR)["Hydro"]
    baseline["Hydro"] = _by_country(hydro_generation, survey.index)

    return baseline


def additional_capacity_targets(survey: pd.DataFrame, baseline: pd.DataFrame, cf_hydro: pd.Series) -> pd.DataFrame:
    """Convert additional capacity targets into total capacity targets (hydropower as generation, in GWh)."""
    additional = _empty_like(survey)
    for technology in TECHNOLOGIES_WITH_CAPACITY_TARGETS:
        additional[technology] = baseline[technology] + survey[(TARGET_ADDITIONAL, technology)]
    additional["Hydro"] = baseline["Hydro"] + survey[(TARGET_ADDITIONAL, "Hydro")] * _by_country(
        cf_hydro * HOURS_PER_YEAR, survey.index
    )

    return additional


def production_targets_biomass_geothermal(survey: pd.DataFrame, baseline: pd.DataFrame) -> pd.DataFrame:
    """Convert production targets of biomass and geothermal into capacity, using fixed capacity factors."""
    production = _empty_like(survey)
    capacity_factors = {"Biomass": CAPACITY_FACTOR_BIOMASS, "Geothermal": CAPACITY_FACTOR_GEOTHERMAL}
    for technology, capacity_factor in capacity_factors.items():
        production[technology] = np.maximum(
            baseline[technology], survey[(TARGET_PRODUCTION, technology)] / (HOURS_PER_YEAR * capacity_factor)
        )

    return production


def total_installed_capacity_targets(
    survey: pd.DataFrame, baseline: pd.DataFrame, cf_hydro: pd.Series
) -> pd.DataFrame:
    """Total installed capacity targets, never below existing capacity (hydropower as generation, in GWh)."""
    total = _empty_like(survey)
    for technology in TECHNOLOGIES_WITH_CAPACITY_TARGETS:
        total[technology] = np.maximum(baseline[technology], survey[(TARGET_TOTAL, technology)])
    total["Hydro"] = np.maximum(
        baseline["Hydro"], survey[(TARGET_TOTAL, "Hydro")] * _by_country(cf_hydro * HOURS_PER_YEAR, survey.index)
    )

    return total


def allocate_production_to_bins(production: float, bins: pd.DataFrame) -> float:
    """Capacity (in GW) needed to produce a certain amount of energy (in GWh per year) from potential bins.

    Production is allocated to bins in order, starting from the first bin with non-zero maximum production. Each bin
    that is used up contributes with maxprod / nur hours of capacity, and the last, partially used bin contributes
    with the remaining production over its capacity factor.

    """
    informed = (bins[POTENTIAL_MAXPROD] != 0).to_numpy()
    if not informed.any():
        return 0.0
    bins = bins.iloc[int(np.argmax(informed)) :]

    remaining = production
    capacity_hours = 0.0
    for maxprod, nur in bins[[POTENTIAL_MAXPROD, POTENTIAL_NUR]].itertuples(index=False):
        if remaining <= 0:
            break
        if (maxprod <= 0) or (nur <= 0):
            continue
        if maxprod > remaining:
            capacity_hours += remaining / nur
            remaining = 0.0
        else:
            capacity_hours += maxprod / nur
            remaining -= maxprod

    return capacity_hours / HOURS_PER_YEAR


def _hydro_maxprod(potentials: pd.DataFrame, countries: Iterable[str]) -> pd.DataFrame:
    if "Hydro" not in potentials.columns.get_level_values("technology"):
        return pd.DataFrame(0.0, index=pd.Index(countries, name="country"), columns=[0])
    maxprod = potentials.xs(("Hydro", POTENTIAL_MAXPROD), axis=1, level=["technology", "type"])

    return maxprod.reindex(countries).fillna(0.0)


def production_to_capacity(
    survey: pd.DataFrame,
    potentials: pd.DataFrame,
    additional: pd.DataFrame,
    total: pd.DataFrame,
) -> pd.DataFrame:
    """Convert production targets of solar, wind and hydropower into capacity targets (in GW), using potential bins.

    Hydropower production targets are first raised to the generation implied by its other targets. A production
    target is only converted if the country's potentials could absorb its largest production target; otherwise the
    resulting capacity is zero.

    """
    production = survey[TARGET_PRODUCTION][TECHNOLOGIES_WITH_POTENTIALS].copy()
    production["Hydro"] = np.maximum.reduce(
        [production["Hydro"].to_numpy(), total["Hydro"].to_numpy(), additional["Hydro"].to_numpy()]
    )

    # Hydropower generation cannot be converted for countries without (or with inconsistent) hydropower potentials.
    countries = production.index.get_level_values("country").unique()
    hydro_maxprod = _hydro_maxprod(potentials, countries)
    has_production = (production["Hydro"] != 0).groupby(level="country").any().reindex(countries)
    no_potential = (hydro_maxprod == 0).all(axis=1) & has_production
    negative_potential = (hydro_maxprod < 0).any(axis=1)
    countries_to_zero = countries[(no_potential | negative_potential).reindex(countries).to_numpy()]
    if len(countries_to_zero) > 0:
        log.info("production_to_capacity.hydro_without_potentials", countries=list(countries_to_zero))
        production.loc[production.index.get_level_values("country").isin(countries_to_zero), "Hydro"] = 0.0

    capacity = _empty_like(survey)
    for technology in TECHNOLOGIES_WITH_POTENTIALS:
        for country in countries:
            targets = production.xs(country, level="country")[technology]
            if (targets == 0).all():
                continue
            bins = get_bins(potentials, country=country, technology=technology)
            if not bins[POTENTIAL_MAXPROD].sum() > targets.max():
                log.info("production_to_capacity.insufficient_potential", country=country, technology=technology)
                continue
            for year, target in targets.items():
                if target != 0:
                    capacity.loc[(country, year), technology] = allocate_production_to_bins(target, bins)

    return capacity


def reconcile_targets(
    additional: pd.DataFrame,
    production_biomass_geothermal: pd.DataFrame,
    total: pd.DataFrame,
    from_production: pd.DataFrame,
) -> pd.DataFrame:
    """Take the largest capacity target of each technology, except for hydropower, which comes from production."""
    from_generation = from_production.copy()
    from_generation[["Biomass", "Geothermal"]] = production_biomass_geothermal[["Biomass", "Geothermal"]]

    targets = np.maximum(np.maximum(additional, from_generation), total)
    # Other hydropower targets are given as generation, and have already been converted via production targets.
    targets["Hydro"] = from_generation["Hydro"]

    return targets


def enforce_non_decreasing(df: pd.DataFrame) -> pd.DataFrame:
    """Ensure targets of a model year are never smaller than the ones of the previous model year."""
    return df.sort_index().groupby(level="country").cummax()


def fill_missing_regions(targets: pd.DataFrame, capacity: pd.DataFrame, cf_hydro: pd.Series) -> pd.DataFrame:
    """Add countries with historical capacity but no REN21 targets, keeping their 2015 capacity in all model years."""
    countries_with_targets = set(targets.index.get_level_values("country"))
    missing = sorted(set(capacity.index.get_level_values("country")) - countries_with_targets)
    if not missing:
        return targets

    log.info("fill_missing_regions", n_countries=len(missing))
    reference = values_in_year(capacity, year=HISTORICAL_YEAR, countries=missing)[TECHNOLOGIES].copy()
    reference["Hydro"] = reference["Hydro"] * cf_hydro.reindex(reference.index).fillna(0.0)

    others = pd.concat({year: reference for year in MODEL_YEARS}, names=["year"]).swaplevel("year", "country")

    return pd.concat([targets, others]).sort_index()


def calculate_capacity_targets(
    tb_survey: Table,
    tb_capacity: Table,
    tb_generation: Table,
    tb_wind: Table,
    tb_hydro: Table,
    tb_solar: Table,
) -> Table:
    """Total installed capacity targets (GW) per country, model year and technology of the energy model.

    Parameters
    ----------
    tb_survey : Table
        REN21 targets, with columns country (ISO3), year, target_type, technology and value.
    tb_capacity : Table
        IRENA installed capacity (MW), with columns country, year, technology and capacity.
    tb_generation : Table
        IRENA generation (GWh), with columns country, year, technology and generation.
    tb_wind, tb_hydro : Table
        Potentials with columns country, type (maxprod in EJ/a, or nur), bin and value.
    tb_solar : Table
        Potentials like the previous ones, with an additional column technology (spv or csp).

    Returns
    -------
    tb : Table
        Capacity targets, indexed by country and year, with one column per technology.

    """
    survey = prepare_survey(tb_survey)
    capacity = prepare_historical_capacity(tb_capacity)
    generation = prepare_historical_generation(tb_generation)
    cf_hydro = calculate_hydro_capacity_factor(capacity=capacity, generation=generation)

    countries = survey.index.get_level_values("country").unique()
    potentials = combine_potentials(tb_wind=tb_wind, tb_hydro=tb_hydro, tb_solar=tb_solar, regions=countries)

    baseline = initial_capacity(survey=survey, capacity=capacity, generation=generation)
    additional = additional_capacity_targets(survey=survey, baseline=baseline, cf_hydro=cf_hydro)
    production_bg = production_targets_biomass_geothermal(survey=survey, baseline=baseline)
    total = total_installed_capacity_targets(survey=survey, baseline=baseline, cf_hydro=cf_hydro)
    from_production = production_to_capacity(survey=survey, potentials=potentials, additional=additional, total=total)

    if config.DEBUG:
        for name, df in [("baseline", baseline), ("additional", additional), ("total", total)]:
            log.debug("calculate_capacity_targets.intermediate", table=name, data=df.to_dict())

    targets = reconcile_targets(
        additional=additional,
        production_biomass_geothermal=production_bg,
        total=total,
        from_production=from_production,
    )
    targets = enforce_non_decreasing(targets)
    targets = fill_missing_regions(targets, capacity=capacity, cf_hydro=cf_hydro)

    # Adapt to the naming conventions of the energy model.
    targets = targets.fillna(0.0)[TECHNOLOGIES].rename(columns=MODEL_TECHNOLOGY_NAMES, errors="raise")
    targets.columns.name = None

    tb = Table(targets, short_name="capacity_targets")
    for column in tb.columns:
        tb[column].metadata.unit = "gigawatts"
        tb[column].metadata.short_unit = "GW"

    return tb
