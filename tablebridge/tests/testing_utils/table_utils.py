import numpy as np


def assert_table_equal(left, right):
    assert left.columns == right.columns
    assert left.keys == right.keys
    for name in left.columns:
        left_col, right_col = left[name], right[name]
        assert left_col.native_type is right_col.native_type, name
        assert left_col == right_col, f"{name}: {left_col.values} != {right_col.values}"
    assert left == right


def to_datetime64(values):
    return np.array(values, dtype="datetime64[ns]")
