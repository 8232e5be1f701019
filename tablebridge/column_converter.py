import datetime
import logging
import warnings

import numpy as np
import pandas as pd
from dateutil import tz

from tablebridge.categories import Category
from tablebridge.config import config
from tablebridge.exceptions import (
    NativeTypeHintIgnoredWarning,
    NullsReplacedWarning,
    UnsupportedTypeError,
)
from tablebridge.native_types import (
    TEMPORAL_TYPES,
    Boolean,
    Date,
    Float,
    Foreign,
    Int,
    Long,
    Real,
    Short,
    String,
    Symbol,
    Time,
    Timespan,
    Timestamp,
    str_to_native_type,
)
from tablebridge.table import Column
from tablebridge.temporal import (
    from_datetime64,
    from_timedelta64,
    to_datetime64,
    to_timedelta64,
)
from tablebridge.type_sys.type_classifier import classify_frame, classify_table
from tablebridge.utils import _first_value, _object_array

logger = logging.getLogger(__name__)

# Categories converted without any temporal work
DIRECT_CATEGORIES = (Category.NUMERIC, Category.REDUCED_FLOAT, Category.SYMBOLIC)

# Categories kept out of the bulk extraction when converting to native
SPECIALIZED_CATEGORIES = (
    Category.REDUCED_FLOAT,
    Category.TEMPORAL,
    Category.TEMPORAL_TZ,
    Category.DURATION,
)


def symbol_series(values):
    """Wraps symbol values so pandas treats them as categorical"""
    if config.get_option("symbols_as_categorical"):
        return pd.Series(pd.Categorical(_object_array(values)))
    return text_series(values)


def text_series(values):
    """Builds an object series of ``str`` from native text"""
    return pd.Series(_object_array(values), dtype="object")


# Native -> foreign


def _numeric_to_foreign(name, column):
    return pd.Series(column.values.copy(), dtype=column.native_type.foreign_dtype)


def _reduced_float_to_foreign(name, column):
    return pd.Series(column.values.astype(np.float32, copy=True), dtype="float32")


def _symbolic_to_foreign(name, column):
    if column.native_type is Symbol:
        return symbol_series(column.values)
    return text_series(column.values)


def _temporal_to_foreign(name, column):
    return pd.Series(to_datetime64(column.values, column.native_type))


def _duration_to_foreign(name, column):
    return pd.Series(to_timedelta64(column.values).copy())


def _opaque_to_foreign(name, column):
    if column.native_type is Foreign:
        return pd.Series(column.values.copy(), dtype="object")
    raise UnsupportedTypeError(name, column.native_type, "to a DataFrame")


def _unsupported_to_foreign(name, column):
    raise UnsupportedTypeError(name, column.native_type, "to a DataFrame")


TO_FOREIGN = {
    Category.NUMERIC: _numeric_to_foreign,
    Category.REDUCED_FLOAT: _reduced_float_to_foreign,
    Category.SYMBOLIC: _symbolic_to_foreign,
    Category.TEMPORAL: _temporal_to_foreign,
    Category.DURATION: _duration_to_foreign,
    # native tables have no zoned temporals
    Category.TEMPORAL_TZ: _unsupported_to_foreign,
    Category.OPAQUE: _opaque_to_foreign,
}


def to_foreign_columns(table):
    """Converts every column of an unkeyed native table to a pandas Series.

    Columns are processed grouped by category, so the returned dictionary is not in
    the table's column order.

    Args:
        table (Table): The table to convert.

    Returns:
        dict[str -> pd.Series]: The converted columns.
    """
    categories = classify_table(table)
    converted = _convert_group(table, categories, DIRECT_CATEGORIES)
    if all(category in DIRECT_CATEGORIES for category in categories.values()):
        logger.debug("All columns of %r convert directly", table)
        return converted

    remaining = [category for category in Category if category not in DIRECT_CATEGORIES]
    converted.update(_convert_group(table, categories, remaining))
    return converted


def _convert_group(table, categories, group):
    converted = {}
    for category in group:
        for name, column in table.items():
            if categories[name] == category:
                series = TO_FOREIGN[category](name, column)
                series.name = name
                converted[name] = series
    return converted


# Foreign -> native


def _numeric_to_native(name, series, hint, **kwargs):
    np_dtype = np.dtype(getattr(series.dtype, "numpy_dtype", series.dtype))
    native_type = _numeric_native_type(name, series.dtype, np_dtype)
    if hint is not None:
        if np_dtype.kind in _NUMERIC_HINT_KINDS.get(hint, ""):
            native_type = hint
        else:
            _warn_hint_ignored(name, hint.type_string, series.dtype)

    if np_dtype.kind == "u" and np_dtype.itemsize == 8:
        valid = series.dropna()
        if len(valid) and valid.max() > np.iinfo(np.int64).max:
            raise UnsupportedTypeError(name, series.dtype, "without overflowing a long")

    fill = native_type.null_value
    if series.hasnans:
        if native_type is Boolean:
            fill = False
            warnings.warn(
                NullsReplacedWarning().get_warning_message(name, fill),
                NullsReplacedWarning,
            )
        return Column(series.to_numpy(dtype=native_type.storage_dtype, na_value=fill), native_type)
    return Column(series.to_numpy().astype(native_type.storage_dtype), native_type)


_NUMERIC_HINT_KINDS = {
    Boolean: "b",
    Short: "iu",
    Int: "iu",
    Long: "iu",
    Float: "f",
}


def _numeric_native_type(name, dtype, np_dtype):
    if np_dtype.kind == "b":
        return Boolean
    if np_dtype.kind == "f":
        return Float
    if np_dtype.kind == "i":
        return {1: Short, 2: Short, 4: Int}.get(np_dtype.itemsize, Long)
    if np_dtype.kind == "u":
        return {1: Short, 2: Int}.get(np_dtype.itemsize, Long)
    raise UnsupportedTypeError(name, dtype, "to a native numeric")


def _reduced_float_to_native(name, series, hint, **kwargs):
    # float32 columns never carry temporal sub-fields, the tz flag has nothing to act on
    return Column(series.to_numpy(dtype=np.float32, na_value=np.nan), Real)


def _symbolic_to_native(name, series, hint, **kwargs):
    if isinstance(series.dtype, pd.CategoricalDtype):
        categories = series.cat.categories
        if categories.inferred_type not in ("string", "empty"):
            # non-text categories convert through the dtype of the categories
            if series.hasnans:
                return _convert_series(name, series.astype(object), None, **kwargs)
            return _convert_series(name, series.astype(categories.dtype), None, **kwargs)
        default = Symbol
    else:
        default = String
    native_type = hint if hint in (Symbol, String) else default
    return Column(_text_values(name, series), native_type)


def _temporal_to_native(name, series, hint, **kwargs):
    native_type = hint if hint in TEMPORAL_TYPES else Timestamp
    values = series.to_numpy(dtype="datetime64[ns]")
    try:
        encoded = from_datetime64(values, native_type)
    except ValueError as err:
        raise UnsupportedTypeError(
            name,
            series.dtype,
            f"to a native {native_type.type_string} without overflowing",
        ) from err
    return Column(encoded, native_type)


def _temporal_tz_to_native(name, series, hint, localize_timezones=False, **kwargs):
    naive = series.dt.tz_convert(_target_timezone(localize_timezones)).dt.tz_localize(None)
    return _temporal_to_native(name, naive, hint)


def _duration_to_native(name, series, hint, **kwargs):
    return Column(from_timedelta64(series.to_numpy(dtype="timedelta64[ns]")), Timespan)


def _opaque_to_native(
    name,
    series,
    hint,
    localize_timezones=False,
    materialize_foreign_objects=False,
    object_converter=None,
):
    values = series.to_numpy(dtype=object)
    first = _first_value(values)
    if len(values) == 0 or isinstance(first, (str, bytes)):
        native_type = hint if hint in (Symbol, String) else String
        return Column(_text_values(name, series), native_type)

    # only the first value decides whether a column holds foreign objects
    if object_converter is not None:
        converted = pd.Series([object_converter(value) for value in values], name=name)
        return _convert_series(
            name,
            converted,
            None,
            localize_timezones=localize_timezones,
            materialize_foreign_objects=materialize_foreign_objects,
        )
    if materialize_foreign_objects:
        materialized = _materialize(name, values, localize_timezones)
        if materialized is not None:
            return materialized
    return Column(values, Foreign)


FROM_FOREIGN = {
    Category.NUMERIC: _numeric_to_native,
    Category.REDUCED_FLOAT: _reduced_float_to_native,
    Category.SYMBOLIC: _symbolic_to_native,
    Category.TEMPORAL: _temporal_to_native,
    Category.DURATION: _duration_to_native,
    Category.TEMPORAL_TZ: _temporal_tz_to_native,
    Category.OPAQUE: _opaque_to_native,
}

# Hint categories accepted for each classified category
_HINT_CATEGORIES = {
    Category.TEMPORAL_TZ: (Category.TEMPORAL,),
    Category.OPAQUE: (Category.SYMBOLIC, Category.OPAQUE),
}


def to_native_columns(
    dataframe,
    localize_timezones=False,
    materialize_foreign_objects=False,
    object_converter=None,
    type_hints=None,
):
    """Converts every column of a DataFrame without index levels to a native Column.

    Numeric, categorical and text columns are extracted in bulk first. Reduced precision
    floats, datetimes and durations follow through their dedicated conversions, and object
    columns last, since only their first value tells whether they hold foreign objects.

    Args:
        dataframe (pd.DataFrame): The DataFrame to convert.
        localize_timezones (bool): If True, timezone-aware values are converted to local
            time before their zone is dropped. Otherwise they are converted to UTC.
        materialize_foreign_objects (bool): If True, object columns of date and time values
            are converted to native temporals. Otherwise they are kept as Foreign columns.
        object_converter (callable, optional): Applied to every value of an object column
            that does not hold text. The results are converted again as a regular column.
        type_hints (dict[str -> str], optional): Native type strings recorded for the columns
            when the DataFrame was created from a native table.

    Returns:
        dict[str -> Column]: The converted columns, grouped by category.
    """
    categories = classify_frame(dataframe)
    type_hints = type_hints or {}
    options = {
        "localize_timezones": localize_timezones,
        "materialize_foreign_objects": materialize_foreign_objects,
        "object_converter": object_converter,
    }

    bulk = [name for name, cat in categories.items() if cat not in SPECIALIZED_CATEGORIES]
    specialized = [name for name, cat in categories.items() if cat in SPECIALIZED_CATEGORIES]

    columns = {}
    for name in [n for n in bulk if categories[n] != Category.OPAQUE] + specialized:
        columns[name] = _convert_column(name, dataframe[name], categories[name], type_hints, options)
    for name in [n for n in bulk if categories[n] == Category.OPAQUE]:
        columns[name] = _convert_column(name, dataframe[name], categories[name], type_hints, options)
    return columns


def _convert_column(name, series, category, type_hints, options):
    hint = _resolve_hint(name, type_hints.get(name), category, series.dtype)
    return FROM_FOREIGN[category](name, series, hint, **options)


def _convert_series(name, series, hint, **options):
    category = classify_frame(series.to_frame(name=name))[name]
    return FROM_FOREIGN[category](name, series, hint, **options)


def _resolve_hint(name, hint_string, category, dtype):
    if hint_string is None:
        return None
    try:
        hint = str_to_native_type(hint_string)
    except ValueError:
        hint = None
    if hint is not None and hint.category in _HINT_CATEGORIES.get(category, (category,)):
        return hint
    _warn_hint_ignored(name, hint_string, dtype)
    return None


def _warn_hint_ignored(name, hint, dtype):
    warnings.warn(
        NativeTypeHintIgnoredWarning().get_warning_message(name, hint, dtype),
        NativeTypeHintIgnoredWarning,
    )


def _text_values(name, series):
    values = []
    for value in series.to_numpy(dtype=object):
        if _is_null_scalar(value):
            values.append("")
        elif isinstance(value, bytes):
            values.append(value.decode("utf-8"))
        elif isinstance(value, str):
            values.append(value)
        else:
            raise UnsupportedTypeError(
                name,
                f"object holding {type(value).__name__}",
                "to native text",
            )
    return values


def _is_null_scalar(value):
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _target_timezone(localize_timezones):
    if not localize_timezones:
        return "UTC"
    return config.get_option("local_timezone") or tz.tzlocal()


# Per-element materialization of foreign date/time objects


def _materialize(name, values, localize_timezones):
    native_type = _materialized_type(values[0])
    if native_type is None:
        return None
    convert = _MATERIALIZERS[native_type]
    encoded = []
    for value in values:
        if _is_null_scalar(value):
            encoded.append(native_type.null_value)
            continue
        try:
            encoded.append(convert(value, localize_timezones))
        except TypeError:
            raise UnsupportedTypeError(
                name,
                f"object holding {type(value).__name__}",
                f"to a native {native_type.type_string}",
            )
    return Column(encoded, native_type)


def _materialized_type(value):
    if isinstance(value, (datetime.datetime, np.datetime64)):
        return Timestamp
    if isinstance(value, datetime.date):
        return Date
    if isinstance(value, datetime.time):
        return Time
    if isinstance(value, (datetime.timedelta, np.timedelta64)):
        return Timespan
    return None


def _materialize_timestamp(value, localize_timezones):
    if not isinstance(value, (datetime.datetime, np.datetime64)):
        raise TypeError(value)
    stamp = pd.Timestamp(value)
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert(_target_timezone(localize_timezones)).tz_localize(None)
    return from_datetime64(np.array([stamp.to_datetime64()]), Timestamp)[0]


def _materialize_date(value, localize_timezones):
    if not isinstance(value, datetime.date):
        raise TypeError(value)
    if isinstance(value, datetime.datetime):
        value = value.date()
    epoch = datetime.date.fromisoformat(config.get_option("native_epoch"))
    return (value - epoch).days


def _materialize_time(value, localize_timezones):
    if not isinstance(value, datetime.time):
        raise TypeError(value)
    seconds = (value.hour * 60 + value.minute) * 60 + value.second
    return seconds * 1000 + value.microsecond // 1000


def _materialize_timespan(value, localize_timezones):
    if not isinstance(value, (datetime.timedelta, np.timedelta64)):
        raise TypeError(value)
    return pd.Timedelta(value).value


_MATERIALIZERS = {
    Timestamp: _materialize_timestamp,
    Date: _materialize_date,
    Time: _materialize_time,
    Timespan: _materialize_timespan,
}


# Native type hints carried in DataFrame.attrs

NATIVE_TYPES_ATTR = "native_types"


def record_native_types(dataframe, table):
    """Stores the native type of every column of ``table`` in ``dataframe.attrs``"""
    if config.get_option("record_native_types"):
        dataframe.attrs[NATIVE_TYPES_ATTR] = {
            name: ntype.type_string for name, ntype in table.native_types.items()
        }
    return dataframe


def read_native_types(dataframe):
    """Returns the native type hints stored on a DataFrame, keyed by column name"""
    hints = dataframe.attrs.get(NATIVE_TYPES_ATTR)
    if not config.get_option("use_native_type_hints") or not isinstance(hints, dict):
        return {}
    return {str(name): hint for name, hint in hints.items()}
