"""Miscellaneous checks and reshaping helpers for long-format input tables."""

from typing import Any, Iterable, List, Set, TypeVar, Union

import pandas as pd
from owid.catalog import Table
from structlog import get_logger

from policy_targets.exceptions import MissingColumns, UnexpectedLabels

log = get_logger()

TableOrDataFrame = TypeVar("TableOrDataFrame", pd.DataFrame, Table)


def check_required_columns(df: pd.DataFrame, required_cols: Iterable[str]) -> None:
    """Check that all required columns are in a dataframe."""
    missing_cols = set(required_cols).difference(set(df.columns))
    if len(missing_cols) > 0:
        raise MissingColumns(columns=sorted(missing_cols))


def drop_unknown_values(
    df: TableOrDataFrame,
    column_name: str,
    values_expected: Union[Set[Any], List[Any]],
    strict: bool = False,
) -> TableOrDataFrame:
    """Remove rows whose value in a column is not among the expected ones.

    Unknown values are logged and dropped, or raise an exception if `strict` is True.
    """
    if not isinstance(values_expected, set):
        values_expected = set(values_expected)
    is_known = df[column_name].isin(values_expected)
    if values_unknown := set(df.loc[~is_known, column_name]):
        if strict:
            raise UnexpectedLabels(column=column_name, values=sorted(map(str, values_unknown)))
        log.info("drop_unknown_values", column=column_name, values=sorted(map(str, values_unknown)))

    return df[is_known].reset_index(drop=True)  # type: ignore


def long_to_wide(
    df: pd.DataFrame,
    index: List[str],
    columns: Union[str, List[str]],
    values: str,
) -> pd.DataFrame:
    """Pivot a long table into a wide frame, adding up duplicated entries and making missing values zero."""
    wide = pd.DataFrame(df).pivot_table(index=index, columns=columns, values=values, aggfunc="sum", fill_value=0.0)
    wide.columns.names = [columns] if isinstance(columns, str) else columns

    return wide.astype(float)
