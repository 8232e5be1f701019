import importlib
import re

import numpy as np


def import_or_none(library):
    """Attempts to import the requested library.

    Args:
        library (str): the name of the library
    Returns: the library if it is installed, else None
    """
    try:
        return importlib.import_module(library)
    except ImportError:
        return None


def camel_to_snake(s):
    s = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", s)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s).lower()


def _object_array(values):
    """Builds a 1-d object array without letting numpy split nested sequences."""
    values = list(values)
    array = np.empty(len(values), dtype=object)
    array[:] = values
    return array


def _first_value(values):
    if len(values) == 0:
        return None
    return values[0]
