def extract_keys(table):
    """Strips the keys from a native table.

    Args:
        table (Table): The table to unkey.

    Returns:
        (Table, list[str]): The unkeyed table and the names of its former key columns.
    """
    return table.unkey(), list(table.keys)


def apply_keys(dataframe, key_names):
    """Sets ``key_names`` as the DataFrame's index, returning a new DataFrame"""
    if not key_names:
        return dataframe
    return dataframe.set_index(list(key_names))


def extract_index(dataframe):
    """Moves a DataFrame's named index levels into ordinary leading columns.

    A frame with a single unnamed level (such as the default RangeIndex) is treated as
    having no index and that level is dropped.

    Args:
        dataframe (pd.DataFrame): The DataFrame whose index should be extracted.

    Returns:
        (pd.DataFrame, int): A new DataFrame with a default index and the number of
        index levels that were moved into columns.

    Raises:
        ValueError: If a named index level has the same name as a column.
    """
    names = list(dataframe.index.names)
    if len(names) == 0 or (len(names) == 1 and names[0] is None):
        return dataframe.reset_index(drop=True), 0
    conflicts = [name for name in names if name is not None and name in dataframe.columns]
    if conflicts:
        raise ValueError(
            f"Index level(s) {conflicts} share a name with a column and cannot become key columns",
        )
    return dataframe.reset_index(), len(names)


def restore_keys(table, level_count):
    """Re-keys a native table on its ``level_count`` leading columns"""
    if level_count == 0:
        return table
    return table.set_keys(level_count)
