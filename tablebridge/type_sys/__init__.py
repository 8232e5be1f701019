from .type_classifier import (
    classify_dtype,
    classify_frame,
    classify_native_type,
    classify_table,
)
