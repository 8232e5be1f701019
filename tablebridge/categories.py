from enum import Enum


class Category(Enum):
    """Semantic category shared by native types and pandas dtypes.

    Every column on either side resolves to exactly one category, which
    selects the conversion routine used for it.
    """

    NUMERIC = "numeric"
    REDUCED_FLOAT = "reduced_float"
    SYMBOLIC = "symbolic"
    TEMPORAL = "temporal"
    DURATION = "duration"
    TEMPORAL_TZ = "temporal_tz"
    OPAQUE = "opaque"

    def __repr__(self):
        return f"<Category.{self.name}>"
