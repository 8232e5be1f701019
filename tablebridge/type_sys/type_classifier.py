import numpy as np
import pandas as pd
from pandas.api import types as pdtypes

from tablebridge.categories import Category
from tablebridge.native_types import NATIVE_TYPES


def classify_native_type(native_type):
    """Return the category of a native type. Types outside the registered set are
    considered opaque, leaving it to the converter to decide whether they convert."""
    if native_type in NATIVE_TYPES:
        return native_type.category
    return Category.OPAQUE


def classify_dtype(dtype):
    """Return the category of a pandas or numpy dtype.

    Args:
        dtype (dtype): the dtype to classify

    Returns:
        Category: the dtype's category. Dtypes that are not recognized are opaque.
    """
    dtype = pdtypes.pandas_dtype(dtype)
    if isinstance(dtype, (pd.CategoricalDtype, pd.StringDtype)):
        return Category.SYMBOLIC
    if isinstance(dtype, pd.DatetimeTZDtype):
        return Category.TEMPORAL_TZ
    if pdtypes.is_datetime64_dtype(dtype):
        return Category.TEMPORAL
    if pdtypes.is_timedelta64_dtype(dtype):
        return Category.DURATION
    if pdtypes.is_bool_dtype(dtype) or pdtypes.is_integer_dtype(dtype):
        return Category.NUMERIC
    if pdtypes.is_float_dtype(dtype):
        if _itemsize(dtype) <= 4:
            return Category.REDUCED_FLOAT
        return Category.NUMERIC
    return Category.OPAQUE


def classify_table(table):
    """Return a dictionary mapping each column of a native table to its category"""
    return {name: classify_native_type(col.native_type) for name, col in table.items()}


def classify_frame(dataframe):
    """Return a dictionary mapping each column of a DataFrame to its category"""
    if not dataframe.columns.is_unique:
        duplicates = sorted(set(dataframe.columns[dataframe.columns.duplicated()]), key=str)
        raise ValueError(f"DataFrame column names must be unique, found duplicates: {duplicates}")
    return {name: classify_dtype(dtype) for name, dtype in dataframe.dtypes.items()}


def _itemsize(dtype):
    return np.dtype(getattr(dtype, "numpy_dtype", dtype)).itemsize
