import numpy as np
import pytest

from tablebridge.config import config
from tablebridge.native_types import (
    Date,
    Datetime,
    Minute,
    Month,
    Second,
    Time,
    Timespan,
    Timestamp,
)
from tablebridge.temporal import (
    epoch_offset,
    from_datetime64,
    from_timedelta64,
    to_datetime64,
    to_timedelta64,
)
from tablebridge.tests.testing_utils import to_datetime64 as dt64


def test_epoch_offset():
    assert epoch_offset('D') == 10957
    assert epoch_offset('M') == 360
    assert epoch_offset('ns') == 946684800000000000
    assert epoch_offset('D', epoch='1970-01-01') == 0


@pytest.mark.parametrize(
    'native_type, values, expected',
    [
        (Date, [7671, 0], ['2021-01-01', '2000-01-01']),
        (Month, [252, -1], ['2021-01-01', '1999-12-01']),
        (Minute, [90, 1440], ['2000-01-01T01:30', '2000-01-02T00:00']),
        (Second, [3600, -1], ['2000-01-01T01:00:00', '1999-12-31T23:59:59']),
        (Time, [1500, -1], ['2000-01-01T00:00:01.500', '1999-12-31T23:59:59.999']),
        (Datetime, [0.5, -1.25], ['2000-01-01T12:00', '1999-12-30T18:00']),
        (Timestamp, [1, 662774400000000000], ['2000-01-01T00:00:00.000000001', '2021-01-01']),
    ],
)
def test_temporal_round_trip(native_type, values, expected):
    converted = to_datetime64(values, native_type)
    assert converted.dtype == np.dtype('datetime64[ns]')
    np.testing.assert_array_equal(converted, dt64(expected))

    restored = from_datetime64(converted, native_type)
    assert restored.dtype == np.dtype(native_type.storage_dtype)
    np.testing.assert_array_equal(restored, values)


@pytest.mark.parametrize('native_type', [Date, Month, Minute, Second, Time, Datetime, Timestamp])
def test_nulls_become_nat(native_type):
    values = native_type.coerce([native_type.null_value])
    converted = to_datetime64(values, native_type)
    assert np.isnat(converted[0])
    assert native_type.is_null(from_datetime64(converted, native_type))[0]


def test_from_datetime64_floors():
    values = dt64(['1999-12-31T12:00', '2021-01-01T23:59'])
    np.testing.assert_array_equal(from_datetime64(values, Date), [-1, 7671])
    np.testing.assert_array_equal(from_datetime64(values, Month), [-1, 252])


def test_from_datetime64_any_unit():
    values = np.array(['2021-01-01'], dtype='datetime64[s]')
    np.testing.assert_array_equal(from_datetime64(values, Date), [7671])


def test_custom_native_epoch():
    with config.with_options(native_epoch='1970-01-01'):
        np.testing.assert_array_equal(to_datetime64([0, 1], Date), dt64(['1970-01-01', '1970-01-02']))
        assert from_datetime64(dt64(['2000-01-01']), Date)[0] == 10957


def test_timedelta_round_trip():
    values = np.array([1, Timespan.null_value, -5], dtype=np.int64)
    converted = to_timedelta64(values)
    assert converted.dtype == np.dtype('timedelta64[ns]')
    assert np.isnat(converted[1])
    np.testing.assert_array_equal(from_timedelta64(converted), values)


@pytest.mark.parametrize(
    'native_type, value',
    [
        (Time, '2021-01-01T10:00'),
        (Time, '1999-12-01'),
        (Second, '2070-01-01'),
    ],
)
def test_from_datetime64_out_of_range(native_type, value):
    match = f'do not fit a native {native_type.type_string}'
    with pytest.raises(ValueError, match=match):
        from_datetime64(dt64([value]), native_type)


def test_from_datetime64_in_range_edges():
    np.testing.assert_array_equal(from_datetime64(dt64(['2000-01-25T00:00']), Time), [2_073_600_000])
    np.testing.assert_array_equal(from_datetime64(dt64(['2060-01-01', 'NaT']), Second)[:1], [1_893_456_000])


def test_datetime_millisecond_values_round_trip():
    rng = np.random.RandomState(0)
    ms = rng.randint(-10_000 * 86_400_000, 20_000 * 86_400_000, size=2000, dtype=np.int64)
    days = ms / 86_400_000
    converted = to_datetime64(days, Datetime)
    np.testing.assert_array_equal(
        converted.view(np.int64),
        ms * 1_000_000 + epoch_offset('ns'),
    )
    np.testing.assert_array_equal(from_datetime64(converted, Datetime), days)
