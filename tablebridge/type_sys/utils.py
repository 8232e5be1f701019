import pandas as pd

from tablebridge.categories import Category
from tablebridge.native_types import NATIVE_TYPES


def list_native_types():
    """Returns a dataframe describing all of the available native types.

    Args:
        None

    Returns:
        pd.DataFrame: A dataframe containing details on each native type, including
        the storage dtype of its native encoding, the pandas dtype it converts to
        and its category.
    """
    ntypes_df = pd.DataFrame(
        [
            {
                "name": ntype.__name__,
                "type_string": ntype.type_string,
                "type_char": ntype.type_char,
                "description": (ntype.__doc__ or "").strip().split("\n")[0],
                "storage_dtype": ntype.storage_dtype,
                "foreign_dtype": ntype.foreign_dtype,
                "category": ntype.category.value,
            }
            for ntype in NATIVE_TYPES
        ],
    )
    return ntypes_df.sort_values("name").reset_index(drop=True)


def list_categories():
    """Returns a dataframe describing each category and the native types belonging to it.

    Args:
        None

    Returns:
        pd.DataFrame: A dataframe with one row per category.
    """
    return pd.DataFrame(
        [
            {
                "name": category.value,
                "native_types": [ntype for ntype in NATIVE_TYPES if ntype.category == category],
            }
            for category in Category
        ],
    )
