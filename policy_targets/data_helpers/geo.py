"""Utils related to geographical entities."""

from pathlib import Path
from typing import TypeVar

import pandas as pd
from owid.catalog import Table
from owid.datautils.dataframes import map_series
from owid.datautils.io.json import load_json
from structlog import get_logger

from policy_targets.exceptions import MissingColumns

# Initialize logger.
log = get_logger()

TableOrDataFrame = TypeVar("TableOrDataFrame", pd.DataFrame, Table)


def harmonize_countries(
    df: TableOrDataFrame,
    countries_file: Path | str,
    country_col: str = "country",
    warn_on_missing_countries: bool = True,
    make_missing_countries_nan: bool = False,
    warn_on_unused_countries: bool = True,
    show_full_warning: bool = True,
) -> TableOrDataFrame:
    """Replace the country names of REN21 by the ISO3 codes used in the historical and potential data.

    Parameters
    ----------
    df : pd.DataFrame
        Data with a column of REN21 country names.
    countries_file : str
        Path to a json file mapping REN21 country names to ISO3 codes.
    country_col : str
        Name of the column of country names.
    warn_on_missing_countries : bool
        True to warn about names in the data that are not in the mapping.
    make_missing_countries_nan : bool
        True to make those names nan; otherwise they are kept as they are.
    warn_on_unused_countries : bool
        True to warn about names in the mapping that are not in the data.
    show_full_warning : bool
        True to print the affected names in warnings.

    Returns
    -------
    df_harmonized : pd.DataFrame
        Copy of the data with ISO3 codes in the country column.

    """
    countries = load_json(countries_file, warn_on_duplicated_keys=True)

    df_harmonized = df.copy()
    df_harmonized[country_col] = map_series(
        series=pd.Series(df[country_col]),
        mapping=countries,
        make_unmapped_values_nan=make_missing_countries_nan,
        warn_on_missing_mappings=warn_on_missing_countries,
        warn_on_unused_mappings=warn_on_unused_countries,
        show_full_warning=show_full_warning,
    )

    return df_harmonized  # type: ignore


def disaggregate_regions(
    df: TableOrDataFrame,
    region_mapping: pd.DataFrame,
    country_col: str = "country",
    mapping_region_col: str = "region",
    mapping_country_col: str = "country",
) -> TableOrDataFrame:
    """Assign the data of each region to all of its member countries.

    Values are copied (not split), so this is only meaningful for intensive variables like costs or prices.

    Parameters
    ----------
    df : pd.DataFrame
        Data with a column of region names and a dummy index.
    region_mapping : pd.DataFrame
        Mapping with one row per member country, and columns for the region and the country.
    country_col : str
        Name of the column in df containing region names. In the output it contains the member countries.
    mapping_region_col : str
        Name of the column in region_mapping containing region names.
    mapping_country_col : str
        Name of the column in region_mapping containing member countries.

    Returns
    -------
    df_disaggregated : pd.DataFrame
        One row per member country (and other dimensions of the original data).

    """
    missing_columns = {mapping_region_col, mapping_country_col} - set(region_mapping.columns)
    if missing_columns:
        raise MissingColumns(columns=sorted(missing_columns))

    members = (
        region_mapping[[mapping_region_col, mapping_country_col]]
        .drop_duplicates()
        .rename(columns={mapping_region_col: "_region", mapping_country_col: "_member"}, errors="raise")
    )
    if isinstance(df, Table):
        # Table.merge needs both sides to be tables.
        members = Table(members)

    unknown_regions = set(df[country_col]) - set(members["_region"])
    if unknown_regions:
        log.warning("disaggregate_regions.unknown_regions", regions=sorted(unknown_regions))

    df_disaggregated = df.merge(members, left_on=country_col, right_on="_region", how="inner")
    df_disaggregated[country_col] = df_disaggregated["_member"]
    df_disaggregated = df_disaggregated.drop(columns=["_region", "_member"]).reset_index(drop=True)

    return df_disaggregated  # type: ignore
