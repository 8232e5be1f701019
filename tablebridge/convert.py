import logging

import pandas as pd

from tablebridge.column_converter import (
    read_native_types,
    record_native_types,
    to_foreign_columns,
    to_native_columns,
)
from tablebridge.index_handler import (
    apply_keys,
    extract_index,
    extract_keys,
    restore_keys,
)
from tablebridge.reorder import reorder_columns, reorder_table
from tablebridge.table import Table

logger = logging.getLogger(__name__)


def native_to_foreign(table, bridge=None):
    """Converts a native table to a pandas DataFrame.

    Column order is preserved and key columns become the DataFrame's index. The native
    type of every column is recorded in ``DataFrame.attrs["native_types"]`` so that
    converting back restores the original granularities.

    Args:
        table (Table): The table to convert.
        bridge (Bridge, optional): Fast path to delegate to when it is available. Availability
            is checked on every call.

    Returns:
        pd.DataFrame: The converted DataFrame.
    """
    if not isinstance(table, Table):
        raise TypeError(f"Input must be a Table, got {type(table).__name__}")
    if bridge is not None and bridge.is_available():
        logger.debug("Delegating conversion of %r to %s", table, type(bridge).__name__)
        return bridge.to_foreign(table)

    unkeyed, key_names = extract_keys(table)
    columns = to_foreign_columns(unkeyed)
    frame = pd.DataFrame(columns, index=pd.RangeIndex(len(unkeyed)))
    frame = reorder_columns(frame, unkeyed.columns)
    frame = apply_keys(frame, key_names)
    return record_native_types(frame, table)


def foreign_to_native(
    dataframe,
    localize_timezones=False,
    materialize_foreign_objects=False,
    object_converter=None,
):
    """Converts a pandas DataFrame to a native table.

    Named index levels become the table's key columns. An unnamed single-level index,
    such as the default RangeIndex, is dropped.

    Args:
        dataframe (pd.DataFrame): The DataFrame to convert.
        localize_timezones (bool, optional): If True, timezone-aware columns are converted
            to local time before their zone is dropped, otherwise to UTC. Defaults to False.
        materialize_foreign_objects (bool, optional): If True, object columns holding date
            and time objects are converted to native temporals. Otherwise they are kept as
            Foreign columns. Defaults to False.
        object_converter (callable, optional): Function applied to each value of object
            columns that do not hold text, before conversion.

    Returns:
        Table: The converted table.
    """
    if not isinstance(dataframe, pd.DataFrame):
        raise TypeError(f"Input must be a pandas DataFrame, got {type(dataframe).__name__}")
    if isinstance(dataframe.columns, pd.MultiIndex):
        raise ValueError("DataFrames with MultiIndex columns cannot be converted to a table")

    type_hints = read_native_types(dataframe)
    flat, level_count = extract_index(dataframe)
    flat.columns = [str(name) for name in flat.columns]
    columns = to_native_columns(
        flat,
        localize_timezones=localize_timezones,
        materialize_foreign_objects=materialize_foreign_objects,
        object_converter=object_converter,
        type_hints=type_hints,
    )
    table = reorder_table(Table(columns), list(flat.columns))
    return restore_keys(table, level_count)


def foreign_to_native_utc(dataframe):
    """Converts a DataFrame to a native table with timezone-aware values in UTC and
    foreign objects left as Foreign columns."""
    return foreign_to_native(
        dataframe,
        localize_timezones=False,
        materialize_foreign_objects=False,
    )
