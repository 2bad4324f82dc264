#
#  helpers.py
#  policy_targets
#
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import pandas as pd
import structlog
import yaml
from owid.catalog import Dataset, DatasetMeta, Table
from owid.datautils.io import df_from_file

from policy_targets import paths
from policy_targets.exceptions import InputNotFound

log = structlog.get_logger()

# Supported formats of input files, in order of preference.
INPUT_FORMATS = ["feather", "parquet", "csv"]


def get_input_path(short_name: str, input_dir: Path | str | None = None) -> Path:
    """Path to the input file with a given short name, in the first format that exists."""
    input_dir = Path(input_dir or paths.INPUT_DIR)
    for file_format in INPUT_FORMATS:
        input_path = input_dir / f"{short_name}.{file_format}"
        if input_path.exists():
            return input_path

    raise InputNotFound(f"No input file for {short_name} in {input_dir} (formats: {', '.join(INPUT_FORMATS)}).")


def input_exists(short_name: str, input_dir: Path | str | None = None) -> bool:
    try:
        get_input_path(short_name, input_dir=input_dir)
    except InputNotFound:
        return False
    return True


def load_input(short_name: str, input_dir: Path | str | None = None, **kwargs: Any) -> Table:
    """Load an input file as a table with a dummy index."""
    input_path = get_input_path(short_name, input_dir=input_dir)
    log.info("load_input", short_name=short_name, path=str(input_path))
    df = df_from_file(input_path, **kwargs)
    assert isinstance(df, pd.DataFrame)

    return Table(df.reset_index(drop=True), short_name=short_name)


def load_metadata_yaml(path: Path | str) -> Dict[str, Any]:
    with open(path) as istream:
        return yaml.safe_load(istream) or {}


def update_metadata_from_yaml(tb: Table, path: Path | str, table_name: Optional[str] = None) -> Table:
    """Update table and variables metadata from a YAML file.

    The file follows the structure of ETL `*.meta.yml` files:

        tables:
          <table_name>:
            title: ...
            variables:
              <column>:
                title: ...
                unit: ...

    Variables in the YAML file that are not in the table are ignored.
    """
    table_name = table_name or tb.metadata.short_name
    table_meta = load_metadata_yaml(path).get("tables", {}).get(table_name, {})

    for field in ["title", "description"]:
        if field in table_meta:
            setattr(tb.metadata, field, table_meta[field])

    for column, variable_meta in (table_meta.get("variables") or {}).items():
        if column not in tb.columns:
            continue
        for field, value in variable_meta.items():
            setattr(tb[column].metadata, field, value)

    return tb


def create_dataset(
    dest_dir: str | Path,
    tables: Iterable[Table],
    metadata_path: Path | str | None = None,
) -> Dataset:
    """Create a dataset in `dest_dir` and add a list of tables.

    The dataset short name is the name of `dest_dir`. If a metadata file is given, its `dataset` section is used for
    the dataset metadata, and its `tables` section to update the metadata of tables and variables.

    Usage:
        ds = create_dataset(dest_dir, [table_a, table_b], metadata_path=paths.METADATA_FILE)
        ds.save()
    """
    dest_dir = Path(dest_dir)
    dataset_meta: Dict[str, Any] = {}
    if metadata_path is not None and Path(metadata_path).exists():
        dataset_meta = load_metadata_yaml(metadata_path).get("dataset", {})

    default_metadata = DatasetMeta(
        short_name=dest_dir.name,
        namespace=dataset_meta.get("namespace", "ren21"),
        version=dataset_meta.get("version"),
        title=dataset_meta.get("title"),
        description=dataset_meta.get("description"),
    )
    ds = Dataset.create_empty(dest_dir, metadata=default_metadata)

    used_short_names = set()
    for table in tables:
        if table.metadata.short_name in used_short_names:
            raise ValueError(f"Table short name `{table.metadata.short_name}` is already in use.")
        used_short_names.add(table.metadata.short_name)

        if metadata_path is not None and Path(metadata_path).exists():
            table = update_metadata_from_yaml(table, metadata_path)
        ds.add(table)

    return ds
