"""Step that converts the REN21 policy database into inputs for the energy model.

Subtypes:
* Capacity: total installed capacity targets (GW) per country, model year and technology.
* investmentCosts: investment costs per country.

"""

from pathlib import Path
from typing import Dict, Optional

import pandas as pd
from owid.catalog import Table
from owid.datautils.io import df_from_file
from structlog import get_logger

from policy_targets import config, paths
from policy_targets.data_helpers.geo import harmonize_countries
from policy_targets.exceptions import UnknownSubtype
from policy_targets.helpers import create_dataset, input_exists, load_input
from policy_targets.ren21.capacity import calculate_capacity_targets
from policy_targets.ren21.investment_costs import calculate_investment_costs

log = get_logger()

SUBTYPE_CAPACITY = "Capacity"
SUBTYPE_INVESTMENT_COSTS = "investmentCosts"

# Short names of the input files required by each subtype.
INPUTS = {
    SUBTYPE_CAPACITY: [
        "ren21_capacity",
        "irena_capacity",
        "irena_generation",
        "potential_wind",
        "potential_hydro",
        "potential_solar",
    ],
    SUBTYPE_INVESTMENT_COSTS: ["ren21_investment_costs"],
}


def convert_ren21(subtype: str, tables: Dict[str, Table], region_mapping: Optional[pd.DataFrame] = None) -> Table:
    """Convert REN21 data of a given subtype.

    `tables` maps the input short names (see `INPUTS`) to their tables. Survey countries must already be given as
    ISO3 codes.
    """
    if subtype == SUBTYPE_CAPACITY:
        return calculate_capacity_targets(
            tb_survey=tables["ren21_capacity"],
            tb_capacity=tables["irena_capacity"],
            tb_generation=tables["irena_generation"],
            tb_wind=tables["potential_wind"],
            tb_hydro=tables["potential_hydro"],
            tb_solar=tables["potential_solar"],
        )
    elif subtype == SUBTYPE_INVESTMENT_COSTS:
        if region_mapping is None:
            raise ValueError("A region mapping is needed to convert investment costs.")
        return calculate_investment_costs(tables["ren21_investment_costs"], region_mapping=region_mapping)
    else:
        raise UnknownSubtype(subtype=subtype)


def load_region_mapping(path: Path | str = paths.REGION_MAPPING_FILE) -> pd.DataFrame:
    return df_from_file(path, sep=";")  # type: ignore


def run(dest_dir: str, input_dir: Path | str | None = None) -> None:
    #
    # Load data.
    #
    tables = []
    for subtype in config.SUBTYPES:
        if subtype not in INPUTS:
            raise UnknownSubtype(subtype=subtype)

        missing = [short_name for short_name in INPUTS[subtype] if not input_exists(short_name, input_dir=input_dir)]
        if missing and subtype == SUBTYPE_INVESTMENT_COSTS:
            log.warning("ren21.skip_subtype", subtype=subtype, missing=missing)
            continue

        inputs = {short_name: load_input(short_name, input_dir=input_dir) for short_name in INPUTS[subtype]}

        #
        # Process data.
        #
        region_mapping = None
        if subtype == SUBTYPE_CAPACITY:
            # REN21 gives country names, other inputs use ISO3 codes.
            inputs["ren21_capacity"] = harmonize_countries(
                df=inputs["ren21_capacity"], countries_file=paths.COUNTRIES_FILE, warn_on_unused_countries=False
            )
        else:
            mapping_path = Path(input_dir) / paths.REGION_MAPPING_FILE.name if input_dir else paths.REGION_MAPPING_FILE
            region_mapping = load_region_mapping(mapping_path)

        tables.append(convert_ren21(subtype, tables=inputs, region_mapping=region_mapping))

    #
    # Save outputs.
    #
    ds = create_dataset(dest_dir=dest_dir, tables=tables, metadata_path=paths.METADATA_FILE)
    ds.save()
