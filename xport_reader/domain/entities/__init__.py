"""Domain entities.

Column descriptors, decoded values, header tags and destination slots.
"""

from .destinations import Destination, NumericSlot, TextSlot
from .header import (
    HeaderSignature,
    HeaderStatus,
    LibraryHeader,
    MemberHeader,
    recognize_signature,
)
from .variable import DecodedValue, VariableDescriptor, VariableType, row_length

__all__ = [
    # Columns and cells
    "DecodedValue",
    "VariableDescriptor",
    "VariableType",
    "row_length",
    # Headers
    "HeaderSignature",
    "HeaderStatus",
    "LibraryHeader",
    "MemberHeader",
    "recognize_signature",
    # Typed binding
    "Destination",
    "NumericSlot",
    "TextSlot",
]
