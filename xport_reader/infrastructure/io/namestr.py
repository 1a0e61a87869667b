"""Variable descriptor ("namestr") table parsing.

Each column is declared by a packed record pair: a primary record of 80 bytes
(type, length, ordinal, name, label, format) and a secondary record holding the
informat and the column's byte offset within a row. The pair is 140 bytes on
most hosts and 136 bytes on VAX/VMS. Pairs are not padded individually; only
the whole block is padded to the next 80-byte card boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...constants import Layout, NamestrOffsets
from ...domain.entities.variable import VariableDescriptor, VariableType, row_length
from .binary import read_int32, read_text, read_uint16

if TYPE_CHECKING:
    from collections.abc import Callable

PRIMARY_RECORD_LENGTH = 80


@dataclass(frozen=True, slots=True)
class NamestrRecord:
    ntype: int
    nhfun: int
    length: int
    ordinal: int
    name: str
    label: str
    format_name: str
    format_length: int
    format_decimals: int
    justification: int
    informat_name: str
    informat_length: int
    informat_decimals: int
    position: int

    def to_descriptor(self) -> VariableDescriptor:
        # only 1 is numeric; any other code is read as character data
        vtype = (
            VariableType.NUMERIC
            if self.ntype == VariableType.NUMERIC
            else VariableType.STRING
        )
        return VariableDescriptor(
            name=self.name,
            label=self.label,
            type=vtype,
            length=self.length,
            ordinal=self.ordinal,
            position=self.position,
        )


def parse_namestr(
    primary: bytes, secondary: bytes, encoding: str = "latin-1"
) -> NamestrRecord:
    # secondary-record offsets are relative to the start of the pair
    base = PRIMARY_RECORD_LENGTH
    o = NamestrOffsets
    return NamestrRecord(
        ntype=read_uint16(primary, o.NTYPE),
        nhfun=read_uint16(primary, o.NHFUN),
        length=read_uint16(primary, o.NLNG),
        ordinal=read_uint16(primary, o.NVAR0),
        name=read_text(primary, o.NNAME, o.NNAME_LENGTH, encoding),
        label=read_text(primary, o.NLABEL, o.NLABEL_LENGTH, encoding),
        format_name=read_text(primary, o.NFORM, o.NFORM_LENGTH, encoding),
        format_length=read_uint16(primary, o.NFL),
        format_decimals=read_uint16(primary, o.NFD),
        justification=read_uint16(primary, o.NFJ),
        informat_name=read_text(primary, o.NIFORM, o.NIFORM_LENGTH, encoding),
        informat_length=read_uint16(secondary, o.NIFL - base),
        informat_decimals=read_uint16(secondary, o.NIFD - base),
        position=read_int32(secondary, o.NPOS - base),
    )


@dataclass(frozen=True, slots=True)
class NamestrTable:
    descriptors: tuple[VariableDescriptor, ...]
    row_length: int
    bytes_read: int

    @property
    def padding(self) -> int:
        rest = self.bytes_read % Layout.CARD_LENGTH
        return Layout.CARD_LENGTH - rest if rest else 0


def resolve_record_length(declared: int | None) -> int:
    if declared in Layout.SUPPORTED_NAMESTR_LENGTHS:
        return declared
    return Layout.NAMESTR_LENGTH


def read_namestr_table(
    read_exact: Callable[[int], bytes | None],
    count: int,
    *,
    record_length: int = Layout.NAMESTR_LENGTH,
    encoding: str = "latin-1",
) -> NamestrTable | None:
    """Read ``count`` record pairs in file order.

    Returns None if the stream ends before every pair is read. Descriptors keep
    the order in which they were declared; they are not sorted by ordinal.
    """
    secondary_length = record_length - PRIMARY_RECORD_LENGTH
    descriptors: list[VariableDescriptor] = []
    bytes_read = 0
    for _ in range(count):
        primary = read_exact(PRIMARY_RECORD_LENGTH)
        if primary is None:
            return None
        secondary = read_exact(secondary_length)
        if secondary is None:
            return None
        bytes_read += record_length
        descriptor = parse_namestr(primary, secondary, encoding).to_descriptor()
        descriptors.append(descriptor)
    columns = tuple(descriptors)
    return NamestrTable(
        descriptors=columns,
        row_length=row_length(columns),
        bytes_read=bytes_read,
    )
