import pandas as pd

from tablebridge.categories import Category
from tablebridge.column_converter import TO_FOREIGN, record_native_types
from tablebridge.exceptions import RuntimeUnavailableError
from tablebridge.index_handler import apply_keys
from tablebridge.temporal import to_datetime64, to_timedelta64
from tablebridge.type_sys.type_classifier import classify_table
from tablebridge.utils import import_or_none

PYARROW_ERR_MSG = (
    "The pyarrow library is required to use the ArrowBridge.\n"
    "Install via pip:\n"
    "    pip install 'pyarrow>=10.0.0'\n"
    "Install via conda:\n"
    "    conda install 'pyarrow>=10.0.0'"
)

# Categories moved through a single arrow table; the others are attached afterwards
ARROW_CATEGORIES = (
    Category.NUMERIC,
    Category.REDUCED_FLOAT,
    Category.TEMPORAL,
    Category.DURATION,
)


class Bridge(object):
    """Base class for fast paths that turn a native table into a DataFrame in one call.

    A bridge is a capability handed to ``native_to_foreign``. Its availability is checked
    on every conversion, since the resource behind it may be loaded lazily.
    """

    def is_available(self):
        return False

    def to_foreign(self, table):
        raise RuntimeUnavailableError(f"{type(self).__name__} is not available")


class ArrowBridge(Bridge):
    def __init__(self, enabled=True):
        """Create ArrowBridge

        Args:
            enabled (bool, optional): Whether the bridge should be used when pyarrow is
                installed. Defaults to True.
        """
        self.enabled = enabled

    def is_available(self):
        return bool(self.enabled) and import_or_none("pyarrow") is not None

    def to_foreign(self, table):
        """Converts a native table to a DataFrame, moving numeric and temporal columns through
        ``pyarrow.Table.to_pandas``. The result matches ``native_to_foreign`` without a bridge.

        Args:
            table (Table): The table to convert.

        Returns:
            pd.DataFrame: The converted DataFrame.
        """
        pa = import_or_none("pyarrow")
        if pa is None:
            raise RuntimeUnavailableError(PYARROW_ERR_MSG)
        if not self.enabled:
            raise RuntimeUnavailableError("ArrowBridge has been disabled")

        categories = classify_table(table)
        arrays, arrow_names, attached = [], [], {}
        for name, column in table.items():
            category = categories[name]
            if category in ARROW_CATEGORIES:
                arrays.append(_to_arrow(pa, column, category))
                arrow_names.append(name)
            else:
                attached[name] = TO_FOREIGN[category](name, column)

        arrow_frame = pa.Table.from_arrays(arrays, names=arrow_names).to_pandas()
        columns = {}
        for name in table.columns:
            if name in attached:
                columns[name] = attached[name].rename(name)
            else:
                columns[name] = arrow_frame[name].reset_index(drop=True)
        frame = pd.DataFrame(columns, index=pd.RangeIndex(len(table)))
        frame = apply_keys(frame, list(table.keys))
        return record_native_types(frame, table)


def _to_arrow(pa, column, category):
    if category == Category.TEMPORAL:
        values = to_datetime64(column.values, column.native_type)
        return pa.array(values, type=pa.timestamp("ns"), from_pandas=True)
    if category == Category.DURATION:
        return pa.array(to_timedelta64(column.values), type=pa.duration("ns"), from_pandas=True)
    return pa.array(column.values)
