class UnsupportedTypeError(TypeError):
    def __init__(self, column, source_type, direction=None):
        message = f"Column '{column}' has type {source_type}, which cannot be converted"
        if direction is not None:
            message += f" {direction}"
        self.column = column
        self.source_type = source_type
        super().__init__(message)


class RuntimeUnavailableError(RuntimeError):
    pass


class IndexShapeMismatch(ValueError):
    def __init__(self, level_count, available):
        self.level_count = level_count
        self.available = available
        super().__init__(
            f"Cannot restore {level_count} key column(s) on a table with {available} column(s)",
        )


class CardinalityError(ValueError):
    pass


class NullsReplacedWarning(UserWarning):
    def get_warning_message(self, column, replacement):
        return (
            f"Null values in column '{column}' have no native representation "
            f"and have been replaced with {replacement}"
        )


class NativeTypeHintIgnoredWarning(UserWarning):
    def get_warning_message(self, column, hint, dtype):
        return (
            f"Native type hint '{hint}' for column '{column}' is incompatible with "
            f"dtype {dtype} and has been ignored"
        )


class ColumnNotPresentError(KeyError):
    def __init__(self, column):
        if isinstance(column, str):
            return super().__init__(f"Column with name '{column}' not found")
        elif isinstance(column, list):
            return super().__init__(f"Column(s) '{column}' not found")
