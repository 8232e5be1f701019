# flake8: noqa
from tablebridge.config import config
from tablebridge.version import __version__

import tablebridge.native_types
from tablebridge.bridge import ArrowBridge, Bridge
from tablebridge.categories import Category
from tablebridge.convert import (
    foreign_to_native,
    foreign_to_native_utc,
    native_to_foreign,
)
from tablebridge.table import Column, Table
from tablebridge.type_sys import classify_frame, classify_table
from tablebridge.type_sys.utils import list_categories, list_native_types
