import math
import struct

import pytest

_NAMEDESC = {
    "library": "LIBRARY HEADER RECORD",
    "member": "MEMBER  HEADER RECORD",
    "descriptor": "DSCRPTR HEADER RECORD",
    "namestr": "NAMESTR HEADER RECORD",
    "observation": "OBS     HEADER RECORD",
}
STAMP = "16OCT26:10:20:30"
DEFAULT_ORDER = ("library", "member", "descriptor", "namestr", "observation")


@pytest.fixture(autouse=True)
def _clean_reader_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep XPT_* variables from the developer's shell out of config tests."""
    for key in ("XPT_TEXT_ENCODING", "XPT_NUMERIC_TEXT_PRECISION", "XPT_STRICT_EOF"):
        monkeypatch.delenv(key, raising=False)


def ieee_to_ibm(value: float) -> bytes:
    """Encode a float as an 8-byte IBM hexadecimal float (NaN -> SAS '.')."""
    if math.isnan(value):
        return b"." + b"\x00" * 7
    if value == 0.0:
        return b"\x00" * 8
    (ulong,) = struct.unpack(">Q", struct.pack(">d", value))
    sign = ulong >> 63
    exponent = ((ulong >> 52) & 0x7FF) - 1023
    mantissa = 0x0010000000000000 | (ulong & 0x000FFFFFFFFFFFFF)
    quotient, remainder = divmod(exponent, 4)
    mantissa <<= remainder
    exponent = quotient + 1 + 64
    return struct.pack(">Q", (sign << 63) | (exponent << 56) | mantissa)


def header_card(kind: str, numbers: str = "0" * 30) -> bytes:
    card = "HEADER RECORD*******" + _NAMEDESC[kind] + "!!!!!!!" + numbers
    return card.ljust(80).encode("ascii")


def namestr_record(
    *,
    vtype: int,
    name: str,
    label: str,
    length: int,
    ordinal: int,
    position: int,
    record_length: int = 140,
) -> bytes:
    primary = struct.pack(
        ">hhhh8s40s8shhh2s8s",
        vtype,
        0,
        length,
        ordinal,
        name.ljust(8).encode("ascii"),
        label.ljust(40).encode("ascii"),
        b"".ljust(8),
        0,
        0,
        0,
        b"\x00\x00",
        b"".ljust(8),
    )
    secondary = struct.pack(">hhi", 0, 0, position)
    return (primary + secondary).ljust(record_length, b"\x00")


class XPTBuilder:
    """Assembles transport files card by card for tests.

    ``columns`` holds ``(name, label, "num" | "char", length)`` tuples; rows are
    lists of floats (numeric) or strings (character) in column order.
    """

    def __init__(
        self,
        columns: list[tuple[str, str, str, int]],
        rows: list[list[object]] | None = None,
        *,
        member_name: str = "DM",
        member_label: str = "Demographics",
        namestr_length: int = 140,
        namestr_count: str | None = None,
    ) -> None:
        self.columns = columns
        self.rows = rows or []
        self.member_name = member_name
        self.member_label = member_label
        self.namestr_length = namestr_length
        self.namestr_count = namestr_count

    @property
    def row_length(self) -> int:
        return sum(length for _, _, _, length in self.columns)

    def library(self) -> bytes:
        first = (
            "SAS     SAS     SASLIB  9.4     X64_10PR" + " " * 24 + STAMP
        ).encode("ascii")
        second = STAMP.ljust(80).encode("ascii")
        return header_card("library") + first + second

    def member(self) -> bytes:
        numbers = "00000" * 3 + "00160" + "00000" + f"{self.namestr_length:05d}"
        return header_card("member", numbers)

    def descriptor(self) -> bytes:
        first = (
            "SAS     "
            + self.member_name.ljust(8)
            + "SASDATA 9.4     X64_10PR"
            + " " * 24
            + STAMP
        ).encode("ascii")
        second = (
            STAMP + " " * 16 + self.member_label.ljust(40) + "DATA    "
        ).encode("ascii")
        return header_card("descriptor") + first + second

    def namestr(self) -> bytes:
        count = self.namestr_count or f"{len(self.columns):04d}"
        card = header_card("namestr", "000000" + count + "0" * 20)
        records = b""
        position = 0
        for ordinal, (name, label, kind, length) in enumerate(self.columns, start=1):
            records += namestr_record(
                vtype=1 if kind == "num" else 2,
                name=name,
                label=label,
                length=length,
                ordinal=ordinal,
                position=position,
                record_length=self.namestr_length,
            )
            position += length
        rest = len(records) % 80
        if rest:
            records += b" " * (80 - rest)
        return card + records

    def observation(self) -> bytes:
        return header_card("observation")

    def data(self, *, pad: bool = True) -> bytes:
        body = b""
        for row in self.rows:
            for (_, _, kind, length), value in zip(self.columns, row):
                if kind == "num":
                    body += ieee_to_ibm(float(value))[:length]
                else:
                    body += str(value).encode("ascii").ljust(length)[:length]
        rest = len(body) % 80
        if pad and rest:
            body += b" " * (80 - rest)
        return body

    def headers(self, order: tuple[str, ...] = DEFAULT_ORDER) -> bytes:
        return b"".join(getattr(self, part)() for part in order)

    def build(self, order: tuple[str, ...] = DEFAULT_ORDER, *, pad: bool = True) -> bytes:
        return self.headers(order) + self.data(pad=pad)


@pytest.fixture
def xpt_builder() -> type[XPTBuilder]:
    return XPTBuilder


@pytest.fixture
def ibm():
    return ieee_to_ibm


@pytest.fixture
def demo_builder() -> XPTBuilder:
    """Three columns, three rows: USUBJID (char 8), AGE (num 8), WEIGHT (num 8)."""
    return XPTBuilder(
        columns=[
            ("USUBJID", "Unique Subject Identifier", "char", 8),
            ("AGE", "Age", "num", 8),
            ("WEIGHT", "Weight (kg)", "num", 8),
        ],
        rows=[
            ["SUBJ001", 34.0, 70.5],
            ["SUBJ002", 51.0, 82.25],
            ["SUBJ003", 28.0, math.nan],
        ],
    )


@pytest.fixture
def demo_file(tmp_path, demo_builder):
    path = tmp_path / "dm.xpt"
    path.write_bytes(demo_builder.build())
    return path


@pytest.fixture
def make_namestr():
    return namestr_record
