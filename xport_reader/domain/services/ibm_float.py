"""IBM System/370 hexadecimal floating point to IEEE 754 binary64.

IBM:  1-bit sign, 7-bit base-16 exponent (excess 64), 56-bit mantissa
      value = sign * 0.mantissa * 16 ** (exponent - 64)
IEEE: 1-bit sign, 11-bit base-2 exponent (excess 1023), 52-bit mantissa
      value = sign * 1.mantissa * 2 ** (exponent - 1023)

Every IBM exponent maps into the IEEE exponent range, so the conversion never
overflows the bit pattern; precision is kept because the IBM mantissa has at
most 53 significant bits once its leading zero bits are shifted out. Bit
patterns that are neither normalized IBM numbers nor zero/missing markers are
converted by the same arithmetic without any check; the result for such input
is unspecified.
"""

from __future__ import annotations

import math
import struct

from ...constants import MissingValues

SIGN_MASK = 0x8000_0000_0000_0000
EXPONENT_MASK = 0x7F00_0000_0000_0000
MANTISSA_MASK = 0x00FF_FFFF_FFFF_FFFF
IMPLICIT_BIT_MASK = 0xFFEF_FFFF_FFFF_FFFF

_IEEE = struct.Struct(">d")
_UINT64 = struct.Struct(">Q")


def is_missing(raw: int) -> bool:
    """True for SAS missing values: ``.``, ``_`` or ``A``-``Z`` with no mantissa."""
    return (raw & MANTISSA_MASK) == 0 and (raw >> 56) in MissingValues.MARKERS


def ibm_to_ieee(raw: int) -> float:
    """Convert a 64-bit IBM float, given as an unsigned integer, to a float."""
    sign = raw & SIGN_MASK
    exponent = (raw & EXPONENT_MASK) >> 56
    mantissa = raw & MANTISSA_MASK

    if is_missing(raw):
        return math.nan
    if mantissa == 0:
        return -0.0 if sign else 0.0

    # base-16 exponent leaves up to three leading zero bits in the mantissa
    if raw & 0x0080_0000_0000_0000:
        shift = 3
    elif raw & 0x0040_0000_0000_0000:
        shift = 2
    elif raw & 0x0020_0000_0000_0000:
        shift = 1
    else:
        shift = 0

    mantissa >>= shift
    # the leading 1 is implicit in IEEE
    mantissa &= IMPLICIT_BIT_MASK

    # excess 64 minus one more for the IEEE implicit bit, then base 16 -> base 2
    exponent -= 65
    exponent <<= 2
    exponent += shift + 1023

    ieee = sign | (exponent << 52) | mantissa
    return _IEEE.unpack(_UINT64.pack(ieee))[0]
