"""Investment costs of renewable technologies from REN21, at the country level.

REN21 reports investment costs for a few large countries and for world regions. Regional costs are assigned to all
member countries, and then the costs of the countries with their own data take precedence.

"""

import pandas as pd
from owid.catalog import Table
from owid.datautils.dataframes import combine_two_overlapping_dataframes, map_series
from structlog import get_logger

from policy_targets.data_helpers.geo import disaggregate_regions
from policy_targets.data_helpers.misc import check_required_columns

log = get_logger()

# Countries with their own cost data, and their ISO3 codes.
COUNTRIES_WITH_OWN_DATA = {
    "China": "CHN",
    "India": "IND",
    "United States": "USA",
}


def calculate_investment_costs(tb: Table, region_mapping: pd.DataFrame) -> Table:
    """Investment costs per country.

    Parameters
    ----------
    tb : Table
        Investment costs with columns country (country or region name), year, technology and investment_cost.
    region_mapping : pd.DataFrame
        Mapping from REN21 regions to ISO3 country codes, with columns region and country.

    Returns
    -------
    tb_costs : Table
        Investment costs indexed by country (ISO3), year and technology.

    """
    index_columns = ["country", "year", "technology"]
    check_required_columns(tb, index_columns + ["investment_cost"])

    # Separate the data of countries with their own costs, and use ISO3 codes for them.
    is_country = tb["country"].isin(list(COUNTRIES_WITH_OWN_DATA))
    tb_countries = tb[is_country].reset_index(drop=True).copy()
    tb_countries["country"] = map_series(tb_countries["country"], mapping=COUNTRIES_WITH_OWN_DATA)

    # Assign regional costs to all member countries.
    tb_regions = disaggregate_regions(tb[~is_country].reset_index(drop=True), region_mapping=region_mapping)
    log.info(
        "calculate_investment_costs",
        regions=int(tb[~is_country]["country"].nunique()),
        countries=int(tb_regions["country"].nunique()),
    )

    # Country-level data overwrites the data assigned from regions.
    combined = combine_two_overlapping_dataframes(
        df1=pd.DataFrame(tb_countries)[index_columns + ["investment_cost"]],
        df2=pd.DataFrame(tb_regions)[index_columns + ["investment_cost"]],
        index_columns=index_columns,
    )

    tb_costs = Table(
        combined.astype({"year": int}).set_index(index_columns, verify_integrity=True).sort_index(),
        short_name="investment_costs",
    )
    if isinstance(tb, Table) and tb["investment_cost"].metadata.unit:
        tb_costs["investment_cost"].metadata.unit = tb["investment_cost"].metadata.unit

    return tb_costs
