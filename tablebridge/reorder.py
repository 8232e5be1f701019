from tablebridge.exceptions import ColumnNotPresentError


def reorder_columns(dataframe, names):
    """Return a new DataFrame whose columns follow ``names`` exactly"""
    _check_permutation(list(dataframe.columns), names)
    return dataframe[list(names)]


def reorder_table(table, names):
    """Return a new native table whose columns follow ``names`` exactly"""
    _check_permutation(table.columns, names)
    return table.select(list(names))


def _check_permutation(available, names):
    missing = [name for name in names if name not in available]
    if missing:
        raise ColumnNotPresentError(missing)
    if len(names) != len(available) or len(set(names)) != len(names):
        dropped = [name for name in available if name not in names]
        raise ValueError(
            f"Column order must list every column exactly once, dropped {dropped}",
        )
