import sys

import numpy as np

from tablebridge.categories import Category
from tablebridge.utils import _object_array, camel_to_snake


class ClassNameDescriptor(object):
    """Descriptor to convert a class's name from camelcase to snakecase"""

    def __get__(self, instance, class_):
        return camel_to_snake(class_.__name__)


class NativeTypeMetaClass(type):
    def __repr__(cls):
        return cls.__name__


class NativeType(object, metaclass=NativeTypeMetaClass):
    """Base class for all native column types"""

    type_string = ClassNameDescriptor()
    type_char = None
    storage_dtype = "object"
    foreign_dtype = "object"
    category = Category.OPAQUE
    null_value = None
    unit = None

    def __eq__(self, other):
        return isinstance(other, self.__class__)

    def __hash__(self):
        return hash(self.__class__)

    def __str__(self):
        return str(self.__class__)

    @classmethod
    def coerce(cls, values):
        """Returns a new 1-d array holding ``values`` in the type's storage dtype."""
        array = np.array(values, dtype=cls.storage_dtype)
        if array.ndim != 1:
            raise ValueError(
                f"{cls.type_string} column values must be 1 dimensional, got {array.ndim} dimensions",
            )
        return array

    @classmethod
    def is_null(cls, values):
        values = np.asarray(values)
        if cls.null_value is None:
            return np.zeros(len(values), dtype=bool)
        if isinstance(cls.null_value, float) and np.isnan(cls.null_value):
            return np.isnan(values)
        return values == cls.null_value


class Boolean(NativeType):
    """Represents columns of true/false values. Booleans have no null.

    Examples:
        .. code-block:: python

            [True, False, True]
    """

    type_char = "b"
    storage_dtype = "bool"
    foreign_dtype = "bool"
    category = Category.NUMERIC


class Short(NativeType):
    """Represents columns of 16-bit integers. Null is the smallest int16."""

    type_char = "h"
    storage_dtype = "int16"
    foreign_dtype = "int16"
    category = Category.NUMERIC
    null_value = int(np.iinfo(np.int16).min)


class Int(NativeType):
    """Represents columns of 32-bit integers. Null is the smallest int32."""

    type_char = "i"
    storage_dtype = "int32"
    foreign_dtype = "int32"
    category = Category.NUMERIC
    null_value = int(np.iinfo(np.int32).min)


class Long(NativeType):
    """Represents columns of 64-bit integers. Null is the smallest int64.

    Examples:
        .. code-block:: python

            [1, 2, 3]
    """

    type_char = "j"
    storage_dtype = "int64"
    foreign_dtype = "int64"
    category = Category.NUMERIC
    null_value = int(np.iinfo(np.int64).min)


class Real(NativeType):
    """Represents columns of reduced precision (32-bit) floating point numbers.
    Converted through a dedicated path so values are never widened to 64 bits.
    """

    type_char = "e"
    storage_dtype = "float32"
    foreign_dtype = "float32"
    category = Category.REDUCED_FLOAT
    null_value = float("nan")


class Float(NativeType):
    """Represents columns of 64-bit floating point numbers. Null is NaN."""

    type_char = "f"
    storage_dtype = "float64"
    foreign_dtype = "float64"
    category = Category.NUMERIC
    null_value = float("nan")


class _Text(NativeType):
    storage_dtype = "object"
    category = Category.SYMBOLIC
    null_value = ""

    @classmethod
    def _to_text(cls, value):
        if value is None:
            return ""
        if isinstance(value, bytes):
            return value.decode("utf-8")
        if isinstance(value, str):
            return value
        raise TypeError(
            f"{cls.type_string} columns only hold text, got value of type {type(value).__name__}",
        )

    @classmethod
    def coerce(cls, values):
        if isinstance(values, str):
            raise ValueError(f"{cls.type_string} column values must be a sequence of text")
        return _object_array(cls._to_text(value) for value in values)


class Symbol(_Text):
    """Represents columns of interned text. Sent to pandas as a categorical.

    Examples:
        .. code-block:: python

            ["a", "b", "a"]
    """

    type_char = "s"
    foreign_dtype = "category"

    @classmethod
    def _to_text(cls, value):
        return sys.intern(super()._to_text(value))


class String(_Text):
    """Represents columns of plain character data. Sent to pandas as object text."""

    type_char = "C"


class _Temporal(NativeType):
    """Temporals are stored as integer offsets from the native epoch in ``unit``."""

    foreign_dtype = "datetime64[ns]"
    category = Category.TEMPORAL


class Date(_Temporal):
    """Days since the native epoch.

    Examples:
        .. code-block:: python

            [7671, 7672]  # 2021-01-01, 2021-01-02
    """

    type_char = "d"
    storage_dtype = "int32"
    null_value = int(np.iinfo(np.int32).min)
    unit = "D"


class Month(_Temporal):
    """Calendar months since the native epoch's month."""

    type_char = "m"
    storage_dtype = "int32"
    null_value = int(np.iinfo(np.int32).min)
    unit = "M"


class Minute(_Temporal):
    type_char = "u"
    storage_dtype = "int32"
    null_value = int(np.iinfo(np.int32).min)
    unit = "m"


class Second(_Temporal):
    type_char = "v"
    storage_dtype = "int32"
    null_value = int(np.iinfo(np.int32).min)
    unit = "s"


class Time(_Temporal):
    """Milliseconds since the native epoch."""

    type_char = "t"
    storage_dtype = "int32"
    null_value = int(np.iinfo(np.int32).min)
    unit = "ms"


class Datetime(_Temporal):
    """Fractional days since the native epoch. Null is NaN."""

    type_char = "z"
    storage_dtype = "float64"
    null_value = float("nan")
    unit = "D"


class Timestamp(_Temporal):
    """Nanoseconds since the native epoch.

    Examples:
        .. code-block:: python

            [662774400000000000]  # 2021-01-01D00:00:00
    """

    type_char = "p"
    storage_dtype = "int64"
    null_value = int(np.iinfo(np.int64).min)
    unit = "ns"


class Timespan(NativeType):
    """Elapsed time in nanoseconds. Sent to pandas as timedelta64[ns]."""

    type_char = "n"
    storage_dtype = "int64"
    foreign_dtype = "timedelta64[ns]"
    category = Category.DURATION
    null_value = int(np.iinfo(np.int64).min)
    unit = "ns"


class Foreign(NativeType):
    """Represents columns of values owned by the foreign runtime. The payloads are
    passed through untouched in both directions.
    """

    type_char = " "
    storage_dtype = "object"
    foreign_dtype = "object"
    category = Category.OPAQUE

    @classmethod
    def coerce(cls, values):
        return _object_array(values)

    @classmethod
    def is_null(cls, values):
        return np.array([value is None for value in values], dtype=bool)


NATIVE_TYPES = [
    Boolean,
    Short,
    Int,
    Long,
    Real,
    Float,
    Symbol,
    String,
    Date,
    Month,
    Minute,
    Second,
    Time,
    Timespan,
    Datetime,
    Timestamp,
    Foreign,
]

TEMPORAL_TYPES = [ntype for ntype in NATIVE_TYPES if ntype.category == Category.TEMPORAL]


def str_to_native_type(name):
    """Returns the registered native type matching ``name``, which can be either the
    type string (``"timestamp"``) or the single character type code (``"p"``).
    """
    if not isinstance(name, str):
        raise ValueError(f"Unrecognized native type specified: {name}")
    for ntype in NATIVE_TYPES:
        if name == ntype.type_char or name.lower() in (
            ntype.type_string,
            ntype.__name__.lower(),
        ):
            return ntype
    raise ValueError(f"Unrecognized native type specified: {name}")


def get_native_type(native_type):
    """Normalizes a native type given as a class, an instance or a string to its class."""
    if isinstance(native_type, str):
        return str_to_native_type(native_type)
    if isinstance(native_type, NativeType):
        return native_type.__class__
    if isinstance(native_type, type) and issubclass(native_type, NativeType):
        return native_type
    raise TypeError(f"Invalid native type specified: {native_type}")
