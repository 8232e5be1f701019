import numpy as np
import pytest

from tablebridge.categories import Category
from tablebridge.native_types import (
    NATIVE_TYPES,
    TEMPORAL_TYPES,
    Boolean,
    Date,
    Datetime,
    Float,
    Foreign,
    Long,
    NativeType,
    Real,
    Short,
    String,
    Symbol,
    Timespan,
    Timestamp,
    get_native_type,
    str_to_native_type,
)


def test_native_type_eq():
    assert Long == Long
    assert Long() == Long()
    assert Long != Short
    assert Long() != Short()


def test_native_type_repr_and_type_string():
    assert repr(Timestamp) == 'Timestamp'
    assert str(Timestamp()) == 'Timestamp'
    assert Timestamp.type_string == 'timestamp'
    assert Timespan.type_string == 'timespan'


def test_type_chars_are_unique():
    chars = [ntype.type_char for ntype in NATIVE_TYPES]
    assert len(chars) == len(set(chars))


def test_temporal_types():
    assert Timespan not in TEMPORAL_TYPES
    assert Timestamp in TEMPORAL_TYPES
    assert all(ntype.foreign_dtype == 'datetime64[ns]' for ntype in TEMPORAL_TYPES)


@pytest.mark.parametrize('name', ['p', 'timestamp', 'Timestamp', 'TIMESTAMP'])
def test_str_to_native_type(name):
    assert str_to_native_type(name) is Timestamp


def test_str_to_native_type_errors():
    with pytest.raises(ValueError, match='Unrecognized native type specified: guid'):
        str_to_native_type('guid')
    with pytest.raises(ValueError, match='Unrecognized native type specified'):
        str_to_native_type(12)


def test_get_native_type():
    assert get_native_type(Date) is Date
    assert get_native_type(Date()) is Date
    assert get_native_type('d') is Date

    with pytest.raises(TypeError, match='Invalid native type specified'):
        get_native_type(int)


def test_categories():
    assert Long.category == Category.NUMERIC
    assert Boolean.category == Category.NUMERIC
    assert Real.category == Category.REDUCED_FLOAT
    assert Symbol.category == Category.SYMBOLIC
    assert String.category == Category.SYMBOLIC
    assert Datetime.category == Category.TEMPORAL
    assert Timespan.category == Category.DURATION
    assert Foreign.category == Category.OPAQUE


def test_coerce_numeric():
    values = Short.coerce([1, 2, 3])
    assert values.dtype == np.int16
    with pytest.raises(ValueError, match='must be 1 dimensional'):
        Long.coerce([[1, 2], [3, 4]])


def test_symbols_are_interned():
    first = ''.join(['ab', 'c'])
    second = ''.join(['a', 'bc'])
    assert first is not second
    values = Symbol.coerce([first, second])
    assert values[0] is values[1]


def test_coerce_text():
    values = String.coerce(['a', None, b'b'])
    assert list(values) == ['a', '', 'b']
    assert values.dtype == object

    with pytest.raises(TypeError, match='string columns only hold text'):
        String.coerce(['a', 1])
    with pytest.raises(ValueError, match='must be a sequence of text'):
        Symbol.coerce('abc')


def test_coerce_foreign_keeps_sequences():
    values = Foreign.coerce([[1, 2], [3, 4]])
    assert values.shape == (2,)
    assert values[0] == [1, 2]


def test_is_null():
    np.testing.assert_array_equal(Long.is_null([1, Long.null_value]), [False, True])
    np.testing.assert_array_equal(Float.is_null([1.0, np.nan]), [False, True])
    np.testing.assert_array_equal(Symbol.is_null(Symbol.coerce(['a', ''])), [False, True])
    np.testing.assert_array_equal(Boolean.is_null([True, False]), [False, False])
    np.testing.assert_array_equal(Foreign.is_null(Foreign.coerce([1, None])), [False, True])


def test_unregistered_subclass():
    class Guid(NativeType):
        type_char = 'g'

    assert Guid not in NATIVE_TYPES
    assert get_native_type(Guid) is Guid
