import numpy as np

from tablebridge.exceptions import IndexShapeMismatch
from tablebridge.native_types import get_native_type


class Column(object):
    def __init__(self, values, native_type):
        """Create Column

        Args:
            values (sequence): Values in the native encoding of ``native_type``. Temporal values
                are offsets from the native epoch, see ``Column.from_datetime64`` to build
                temporal columns from datetimes.
            native_type (NativeType or str): The column's native type, given as a class, an instance,
                a type string ("timestamp") or a type character ("p").
        """
        self._native_type = get_native_type(native_type)
        values = self._native_type.coerce(values)
        values.setflags(write=False)
        self._values = values

    @classmethod
    def from_datetime64(cls, values, native_type):
        """Builds a temporal column from datetime-like values, flooring to the type's granularity."""
        from tablebridge.temporal import from_datetime64

        native_type = get_native_type(native_type)
        return cls(from_datetime64(np.asarray(values, dtype="datetime64[ns]"), native_type), native_type)

    @property
    def native_type(self):
        """The column's NativeType class"""
        return self._native_type

    @property
    def values(self):
        """Read-only array of the column's native encoding"""
        return self._values

    def is_null(self):
        return self._native_type.is_null(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, Column):
            return False
        if self.native_type is not other.native_type or len(self) != len(other):
            return False
        self_nulls = self.is_null()
        if not np.array_equal(self_nulls, other.is_null()):
            return False
        valid = ~self_nulls
        return bool(np.all(self.values[valid] == other.values[valid]))

    def __repr__(self):
        return f"<Column (Native Type = {self.native_type}) {self._values[:5].tolist()}>"


class Table(object):
    def __init__(self, columns, keys=None):
        """Create Table

        Args:
            columns (dict[str -> Column]): Ordered mapping of column name to Column. All columns
                must have the same length.
            keys (list[str], optional): Names of the key columns. Key columns are moved to the
                front of the table so the key is always a prefix of the columns.
        """
        columns = dict(columns)
        _validate_columns(columns)
        keys = list(keys or [])
        missing = [key for key in keys if key not in columns]
        if missing:
            raise KeyError(f"Key column(s) {missing} not found in table")
        if len(set(keys)) != len(keys):
            raise ValueError("Key columns must be unique")
        ordered = {key: columns[key] for key in keys}
        ordered.update({name: col for name, col in columns.items() if name not in ordered})
        self._columns = ordered
        self._keys = tuple(keys)

    @property
    def columns(self):
        """List of column names, keys first"""
        return list(self._columns.keys())

    @property
    def keys(self):
        return self._keys

    @property
    def is_keyed(self):
        return len(self._keys) > 0

    @property
    def value_columns(self):
        return [name for name in self._columns if name not in self._keys]

    @property
    def native_types(self):
        """A dictionary containing the native type for each column"""
        return {name: col.native_type for name, col in self._columns.items()}

    def items(self):
        return self._columns.items()

    def set_keys(self, keys):
        """Returns a new table keyed on ``keys``, given as a list of names or as a number of
        leading columns."""
        if isinstance(keys, int):
            if keys > len(self._columns) or keys < 0:
                raise IndexShapeMismatch(keys, len(self._columns))
            keys = self.columns[:keys]
        return Table(self._columns, keys=keys)

    def unkey(self):
        return Table(self._columns)

    def select(self, names):
        """Returns a new table with only ``names``, in that order. Keys are kept when selected."""
        missing = [name for name in names if name not in self._columns]
        if missing:
            raise KeyError(f"Column(s) {missing} not found in table")
        keys = [key for key in self._keys if key in names]
        return Table({name: self._columns[name] for name in names}, keys=keys)

    def __getitem__(self, name):
        if name not in self._columns:
            raise KeyError(f"Column with name '{name}' not found in table")
        return self._columns[name]

    def __contains__(self, name):
        return name in self._columns

    def __iter__(self):
        return iter(self._columns)

    def __len__(self):
        if not self._columns:
            return 0
        return len(next(iter(self._columns.values())))

    def __eq__(self, other):
        if not isinstance(other, Table):
            return False
        if self.columns != other.columns or self.keys != other.keys:
            return False
        return all(self[name] == other[name] for name in self.columns)

    def __repr__(self):
        msg = "<Table"
        if self._keys:
            msg += u" (Keys = {})".format(list(self._keys))
        msg += u" (Columns = {})".format(
            ", ".join(f"{name}: {col.native_type.type_char}" for name, col in self._columns.items()),
        )
        msg += ">"
        return msg


def _validate_columns(columns):
    lengths = set()
    for name, column in columns.items():
        if not isinstance(name, str):
            raise TypeError(f"Column names must be strings, got {name!r}")
        if not isinstance(column, Column):
            raise TypeError(f"Column '{name}' must be a Column, got {type(column).__name__}")
        lengths.add(len(column))
    if len(lengths) > 1:
        raise ValueError(f"All columns must have the same length, got lengths {sorted(lengths)}")
