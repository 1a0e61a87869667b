"""Typed destination slots for positional row binding.

A caller hands ``XPTFile.read_next_into`` an ordered list of slots; slot *i*
receives the value of column *i*. Slots whose type differs from the column
type get a converted value, which is lossy (fixed-point rendering of floats)
or fallible (text that is not a float literal raises ``ValueConversionError``).
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TypeAlias


@dataclass(slots=True)
class NumericSlot:
    value: float = math.nan


@dataclass(slots=True)
class TextSlot:
    value: str = ""


Destination: TypeAlias = NumericSlot | TextSlot
