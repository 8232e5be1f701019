# flake8: noqa
from tablebridge.tests.testing_utils.table_utils import (
    assert_table_equal,
    to_datetime64,
)
