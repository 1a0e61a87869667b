"""Domain services: pure conversions of cell values."""

from .ibm_float import ibm_to_ieee, is_missing
from .value_coercion import CoercionError, numeric_to_text, text_to_numeric

__all__ = [
    "CoercionError",
    "ibm_to_ieee",
    "is_missing",
    "numeric_to_text",
    "text_to_numeric",
]
