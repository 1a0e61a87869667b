"""Fixed-offset field extraction from already-read XPT buffers.

Every multi-byte integer in a transport file is big-endian. The structs below
carry the byte order explicitly, so extraction is correct on any host and no
caller has to swap bytes itself.
"""

from __future__ import annotations

import struct

from ...constants import Layout

_UINT16 = struct.Struct(">H")
_INT32 = struct.Struct(">i")
_UINT64 = struct.Struct(">Q")

_WHITESPACE = b" \t\n\r\x0b\x0c"
_TRAILING_FILL = _WHITESPACE + b"\x00"

Buffer = bytes | bytearray | memoryview


def read_uint16(buf: Buffer, offset: int) -> int:
    return _UINT16.unpack_from(buf, offset)[0]


def read_int32(buf: Buffer, offset: int) -> int:
    return _INT32.unpack_from(buf, offset)[0]


def read_uint64(buf: Buffer, offset: int, length: int = 8) -> int:
    """Read a big-endian 64-bit word stored in ``length`` (<= 8) bytes.

    Shorter fields hold the high-order bytes; the missing low-order bytes
    are zero.
    """
    if length >= Layout.NUMERIC_VALUE_LENGTH:
        return _UINT64.unpack_from(buf, offset)[0]
    raw = bytes(buf[offset : offset + length])
    return _UINT64.unpack(raw.ljust(Layout.NUMERIC_VALUE_LENGTH, b"\x00"))[0]


def trim_field(raw: Buffer) -> bytes:
    """Strip the blank padding around a fixed-width character field."""
    return bytes(raw).rstrip(_TRAILING_FILL).lstrip(_WHITESPACE)


def read_text(buf: Buffer, offset: int, length: int, encoding: str = "latin-1") -> str:
    return trim_field(buf[offset : offset + length]).decode(encoding, errors="replace")


def read_raw_text(buf: Buffer, offset: int, length: int) -> str:
    """Read a field without trimming; used for exact signature matching."""
    return bytes(buf[offset : offset + length]).decode("latin-1")


def is_blank(raw: Buffer) -> bool:
    return not bytes(raw).strip(b" ")
