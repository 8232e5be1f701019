"""Nanosecond epoch arithmetic between native temporal encodings and numpy
``datetime64[ns]``/``timedelta64[ns]`` arrays.

Native temporals count ``unit`` steps from the native epoch (``2000-01-01`` by
default). pandas counts nanoseconds from the unix epoch. Converting adds the
native epoch expressed in the column's own granularity before widening to
nanoseconds, and the reverse truncates (floors) to the granularity first.

Datetime values are fractional days, so going through whole nanoseconds rounds
them. Values with millisecond precision convert back exactly, finer fractions may
come back a few ulps away.
"""
import numpy as np

from tablebridge.config import config
from tablebridge.native_types import Datetime, Month

UNIX_EPOCH = "1970-01-01"
NAT = np.iinfo(np.int64).min
MS_PER_DAY = 86_400_000

NS_PER_UNIT = {
    "D": 86_400_000_000_000,
    "h": 3_600_000_000_000,
    "m": 60_000_000_000,
    "s": 1_000_000_000,
    "ms": 1_000_000,
    "us": 1_000,
    "ns": 1,
}


def epoch_offset(unit, epoch=None):
    """Returns the native epoch as a count of ``unit`` steps since the unix epoch.

    Args:
        unit (str): numpy datetime unit, such as "D", "M" or "ns"
        epoch (str, optional): native epoch. Defaults to the ``native_epoch`` config option.

    Returns:
        int: the offset
    """
    epoch = np.datetime64(epoch or config.get_option("native_epoch"))
    unix = np.datetime64(UNIX_EPOCH)
    return int(
        (epoch.astype(f"datetime64[{unit}]") - unix.astype(f"datetime64[{unit}]")).astype(np.int64),
    )


def to_datetime64(values, native_type):
    """Converts native temporal values to a ``datetime64[ns]`` array. Nulls become NaT."""
    values = np.asarray(values)
    nulls = native_type.is_null(values)
    if native_type is Datetime:
        ns = _days_to_ns(np.where(nulls, 0.0, values)) + epoch_offset("ns")
    elif native_type is Month:
        months = np.where(nulls, 0, values).astype(np.int64) + epoch_offset("M")
        ns = months.astype("datetime64[M]").astype("datetime64[ns]").view(np.int64)
    else:
        steps = np.where(nulls, 0, values).astype(np.int64) + epoch_offset(native_type.unit)
        ns = steps * NS_PER_UNIT[native_type.unit]
    ns = np.array(ns, dtype=np.int64)
    ns[nulls] = NAT
    return ns.view("datetime64[ns]")


def from_datetime64(values, native_type):
    """Converts a datetime64 array (any unit, naive) to native temporal values.

    Values are floored to the native granularity; NaT becomes the native null.
    """
    values = np.asarray(values).astype("datetime64[ns]")
    nulls = np.isnat(values)
    ns = np.where(nulls, 0, values.view(np.int64))
    if native_type is Datetime:
        encoded = _ns_to_days(ns - epoch_offset("ns"))
    elif native_type is Month:
        months = ns.view("datetime64[ns]").astype("datetime64[M]").astype(np.int64)
        encoded = months - epoch_offset("M")
    else:
        encoded = ns // NS_PER_UNIT[native_type.unit] - epoch_offset(native_type.unit)
    _check_range(encoded[~nulls], native_type)
    encoded = encoded.astype(native_type.storage_dtype)
    encoded[nulls] = native_type.null_value
    return encoded


def to_timedelta64(values):
    """Native timespans are nanosecond counts and their null is NaT's bit pattern."""
    return np.asarray(values).astype(np.int64).view("timedelta64[ns]")


def from_timedelta64(values):
    return np.asarray(values).astype("timedelta64[ns]").view(np.int64).copy()


def _days_to_ns(days):
    # whole milliseconds are split off first so millisecond values survive exactly
    ms = np.asarray(days, dtype=np.float64) * MS_PER_DAY
    whole = np.floor(ms)
    sub_ms = np.round((ms - whole) * NS_PER_UNIT["ms"]).astype(np.int64)
    return whole.astype(np.int64) * NS_PER_UNIT["ms"] + sub_ms


def _ns_to_days(ns):
    whole, sub_ms = np.divmod(ns, NS_PER_UNIT["ms"])
    return whole / MS_PER_DAY + sub_ms / NS_PER_UNIT["D"]


def _check_range(encoded, native_type):
    storage = np.dtype(native_type.storage_dtype)
    if storage.kind != "i" or len(encoded) == 0:
        return
    # the smallest value is the null sentinel
    info = np.iinfo(storage)
    if encoded.min() <= info.min or encoded.max() > info.max:
        raise ValueError(
            f"Values between {encoded.min()} and {encoded.max()} do not fit a native "
            f"{native_type.type_string}, which holds {storage.name} counts of {native_type.unit} "
            f"from the native epoch",
        )
