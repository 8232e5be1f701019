import datetime
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from tablebridge.config import config
from tablebridge.native_types import (
    Boolean,
    Date,
    Datetime,
    Float,
    Foreign,
    Int,
    Long,
    Minute,
    Month,
    Real,
    Second,
    Short,
    String,
    Symbol,
    Time,
    Timespan,
    Timestamp,
)
from tablebridge.table import Column, Table


@pytest.fixture(autouse=True)
def reset_config():
    yield
    for option in [
        "native_epoch",
        "local_timezone",
        "symbols_as_categorical",
        "record_native_types",
        "use_native_type_hints",
    ]:
        config.reset_option(option)


@pytest.fixture()
def sample_table():
    return Table(
        {
            "x": Column([1, 2, 3], Long),
            "y": Column(["a", "b", "c"], Symbol),
            "z": Column.from_datetime64(["2021-01-01", "2021-01-02", "2021-01-03"], Date),
        },
    )


@pytest.fixture()
def all_types_table():
    return Table(
        {
            "boolean": Column([True, False, True], Boolean),
            "short": Column([1, Short.null_value, -3], Short),
            "int": Column([1, Int.null_value, -3], Int),
            "long": Column([1, Long.null_value, 2**40], Long),
            "real": Column([1.5, np.nan, 0.1], Real),
            "float": Column([1.5, np.nan, 0.1], Float),
            "symbol": Column(["a", "", "b"], Symbol),
            "string": Column(["hello", "", "world"], String),
            "date": Column([7671, Date.null_value, -1], Date),
            "month": Column([252, Month.null_value, -1], Month),
            "minute": Column([90, Minute.null_value, 1440], Minute),
            "second": Column([3600, Second.null_value, -1], Second),
            "time": Column([1500, Time.null_value, -1], Time),
            "timespan": Column([1, Timespan.null_value, -5], Timespan),
            "datetime": Column([0.5, np.nan, -1.25], Datetime),
            "timestamp": Column([1, Timestamp.null_value, 662774400000000000], Timestamp),
            "foreign": Column([Decimal("1.5"), None, Decimal("2")], Foreign),
        },
    )


@pytest.fixture()
def keyed_table():
    return Table(
        {
            "a": Column(["x", "y", "z"], Symbol),
            "b": Column.from_datetime64(["2021-01-01", "2021-01-01", "2021-01-02"], Date),
            "value": Column([1.0, 2.0, 3.0], Float),
        },
        keys=["a", "b"],
    )


@pytest.fixture()
def sample_df():
    return pd.DataFrame(
        {
            "ints": pd.Series([1, 2, 3], dtype="int64"),
            "floats": pd.Series([0.5, np.nan, 2.0], dtype="float64"),
            "bools": pd.Series([True, False, True], dtype="bool"),
            "categories": pd.Categorical(["a", "b", "a"]),
            "text": pd.Series(["foo", None, "bar"], dtype="object"),
            "datetimes": pd.Series(
                ["2021-01-01", "2021-01-02", None],
                dtype="datetime64[ns]",
            ),
            "timedeltas": pd.Series([1, 2, 3], dtype="timedelta64[ns]"),
        },
    )


@pytest.fixture()
def plus_two():
    return datetime.timezone(datetime.timedelta(hours=2))


@pytest.fixture()
def plus_nine():
    return datetime.timezone(datetime.timedelta(hours=9))
