"""Validation of the fixed header section of a transport file.

The header section is read strictly in order:

    LIBRARY card, 2 library cards
    MEMBER card
    DSCRPTR card, 2 member cards
    NAMESTR card, namestr record pairs, padding to the next card boundary
    OBS card

Each header card is recognized by its 21-byte name field. A card that is
missing, misplaced or cut short ends the sequence with the status naming the
header that was expected.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import TYPE_CHECKING

from ...constants import LibraryCardOffsets, Layout, MemberCardOffsets
from ...domain.entities.header import (
    HeaderSignature,
    HeaderStatus,
    LibraryHeader,
    MemberHeader,
    recognize_signature,
)
from ..logging.null_logger import NullLogger
from .binary import read_raw_text, read_text
from .namestr import read_namestr_table, resolve_record_length

if TYPE_CHECKING:
    from collections.abc import Callable

    from ...application.ports.services import LoggerPort
    from ...domain.entities.variable import VariableDescriptor
    from .record_stream import RecordStream

DATETIME_FORMAT = "%d%b%y:%H:%M:%S"


class HeaderState(Enum):
    EXPECT_LIBRARY = auto()
    EXPECT_MEMBER = auto()
    EXPECT_DESCRIPTOR = auto()
    EXPECT_NAMESTR = auto()
    READING_NAMESTRS = auto()
    EXPECT_OBSERVATION = auto()
    READY = auto()
    FAILED = auto()


@dataclass(frozen=True, slots=True)
class HeaderResult:
    status: HeaderStatus
    descriptors: tuple[VariableDescriptor, ...] = ()
    row_length: int = 0
    member_name: str = ""


def parse_header_card(card: bytes) -> tuple[HeaderSignature, list[str]]:
    """Return the card's signature and its six 5-character numeric fields."""
    namedesc = read_raw_text(card, Layout.NAMEDESC_OFFSET, Layout.NAMEDESC_LENGTH)
    fields = [
        read_raw_text(
            card,
            Layout.NUMERIC_FIELDS_OFFSET + i * Layout.NUMERIC_FIELD_LENGTH,
            Layout.NUMERIC_FIELD_LENGTH,
        )
        for i in range(6)
    ]
    return recognize_signature(namedesc), fields


def parse_datetime(text: str) -> datetime | None:
    try:
        return datetime.strptime(text.strip(), DATETIME_FORMAT)
    except ValueError:
        return None


def parse_library_cards(
    first: bytes, second: bytes, encoding: str = "latin-1"
) -> LibraryHeader:
    o = LibraryCardOffsets
    return LibraryHeader(
        sas_symbols=(
            read_text(first, o.SAS_SYMBOL_1, o.FIELD_LENGTH, encoding),
            read_text(first, o.SAS_SYMBOL_2, o.FIELD_LENGTH, encoding),
        ),
        saslib=read_text(first, o.SASLIB, o.FIELD_LENGTH, encoding),
        sas_version=read_text(first, o.SASVER, o.FIELD_LENGTH, encoding),
        sas_os=read_text(first, o.SAS_OS, o.FIELD_LENGTH, encoding),
        created=parse_datetime(read_text(first, o.CREATED, o.DATETIME_LENGTH)),
        modified=parse_datetime(read_text(second, 0, o.DATETIME_LENGTH)),
    )


def parse_member_cards(
    first: bytes, second: bytes, encoding: str = "latin-1"
) -> MemberHeader:
    o = MemberCardOffsets
    return MemberHeader(
        sas_symbol=read_text(first, o.SAS_SYMBOL, o.FIELD_LENGTH, encoding),
        dataset_name=read_text(first, o.DSNAME, o.FIELD_LENGTH, encoding),
        sasdata=read_text(first, o.SASDATA, o.FIELD_LENGTH, encoding),
        sas_version=read_text(first, o.SASVER, o.FIELD_LENGTH, encoding),
        sas_os=read_text(first, o.SAS_OS, o.FIELD_LENGTH, encoding),
        created=parse_datetime(read_text(first, o.CREATED, o.DATETIME_LENGTH)),
        modified=parse_datetime(read_text(second, o.MODIFIED, o.DATETIME_LENGTH)),
        label=read_text(second, o.DSLABEL, o.DSLABEL_LENGTH, encoding),
        dataset_type=read_text(second, o.DSTYPE, o.FIELD_LENGTH, encoding),
    )


def _parse_count(field: str) -> int | None:
    cleaned = field.strip()
    if not cleaned or not cleaned.isascii() or not cleaned.isdigit():
        return None
    return int(cleaned)


class HeaderReader:
    """State machine over the header cards of one member.

    Each handler consumes the cards belonging to its state and returns either
    the next state or the failure status for the sequence.
    """

    def __init__(
        self,
        stream: RecordStream,
        *,
        encoding: str = "latin-1",
        logger: LoggerPort | None = None,
    ) -> None:
        self._stream = stream
        self._encoding = encoding
        self._logger = logger or NullLogger()
        self._state = HeaderState.EXPECT_LIBRARY
        self._namestr_count = 0
        self._namestr_length = Layout.NAMESTR_LENGTH
        self._descriptors: tuple[VariableDescriptor, ...] = ()
        self._row_length = 0
        self._member_name = ""
        self._handlers: dict[HeaderState, Callable[[], HeaderState | HeaderStatus]] = {
            HeaderState.EXPECT_LIBRARY: self._expect_library,
            HeaderState.EXPECT_MEMBER: self._expect_member,
            HeaderState.EXPECT_DESCRIPTOR: self._expect_descriptor,
            HeaderState.EXPECT_NAMESTR: self._expect_namestr,
            HeaderState.READING_NAMESTRS: self._read_namestrs,
            HeaderState.EXPECT_OBSERVATION: self._expect_observation,
        }

    @property
    def state(self) -> HeaderState:
        return self._state

    def read(self) -> HeaderResult:
        while self._state is not HeaderState.READY:
            if self._state is HeaderState.FAILED:
                raise RuntimeError("HeaderReader cannot be reused after a failure")
            outcome = self._handlers[self._state]()
            if isinstance(outcome, HeaderStatus):
                self._state = HeaderState.FAILED
                return HeaderResult(status=outcome)
            self._state = outcome
        return HeaderResult(
            status=HeaderStatus.OK,
            descriptors=self._descriptors,
            row_length=self._row_length,
            member_name=self._member_name,
        )

    def _read_header_card(self) -> tuple[HeaderSignature, list[str]] | None:
        card = self._stream.read_exact(Layout.CARD_LENGTH)
        if card is None:
            return None
        return parse_header_card(card)

    def _read_card_pair(self) -> tuple[bytes, bytes] | None:
        first = self._stream.read_exact(Layout.CARD_LENGTH)
        if first is None:
            return None
        second = self._stream.read_exact(Layout.CARD_LENGTH)
        if second is None:
            return None
        return first, second

    def _expect_library(self) -> HeaderState | HeaderStatus:
        header = self._read_header_card()
        if header is None or header[0] is not HeaderSignature.LIBRARY:
            return HeaderStatus.NO_LIBRARY_HEADER
        cards = self._read_card_pair()
        if cards is None:
            return HeaderStatus.NO_MEMBER_HEADER
        library = parse_library_cards(*cards, encoding=self._encoding)
        self._logger.debug(
            f"Library: {library.saslib} SAS {library.sas_version} on "
            f"{library.sas_os}, created {library.created}, modified {library.modified}"
        )
        return HeaderState.EXPECT_MEMBER

    def _expect_member(self) -> HeaderState | HeaderStatus:
        header = self._read_header_card()
        if header is None or header[0] is not HeaderSignature.MEMBER:
            return HeaderStatus.NO_MEMBER_HEADER
        declared = _parse_count(header[1][Layout.NAMESTR_SIZE_FIELD])
        self._namestr_length = resolve_record_length(declared)
        return HeaderState.EXPECT_DESCRIPTOR

    def _expect_descriptor(self) -> HeaderState | HeaderStatus:
        header = self._read_header_card()
        if header is None or header[0] is not HeaderSignature.DESCRIPTOR:
            return HeaderStatus.NO_DESCRIPTOR_HEADER
        cards = self._read_card_pair()
        if cards is None:
            return HeaderStatus.NO_NAMESTR_HEADER
        member = parse_member_cards(*cards, encoding=self._encoding)
        self._member_name = member.dataset_name
        self._logger.debug(
            f"Member: {member.dataset_name} ({member.dataset_type or 'no type'}) "
            f"label={member.label!r}, SAS {member.sas_version} on {member.sas_os}, "
            f"created {member.created}, modified {member.modified}"
        )
        return HeaderState.EXPECT_NAMESTR

    def _expect_namestr(self) -> HeaderState | HeaderStatus:
        header = self._read_header_card()
        if header is None or header[0] is not HeaderSignature.NAMESTR:
            return HeaderStatus.NO_NAMESTR_HEADER
        count = _parse_count(header[1][Layout.NAMESTR_COUNT_FIELD])
        if count is None:
            return HeaderStatus.NO_NAMESTR_HEADER
        self._namestr_count = count
        return HeaderState.READING_NAMESTRS

    def _read_namestrs(self) -> HeaderState | HeaderStatus:
        table = read_namestr_table(
            self._stream.read_exact,
            self._namestr_count,
            record_length=self._namestr_length,
            encoding=self._encoding,
        )
        if table is None or not self._stream.discard(table.padding):
            return HeaderStatus.NO_OBSERVATION_HEADER
        self._descriptors = table.descriptors
        self._row_length = table.row_length
        return HeaderState.EXPECT_OBSERVATION

    def _expect_observation(self) -> HeaderState | HeaderStatus:
        header = self._read_header_card()
        if header is None or header[0] is not HeaderSignature.OBSERVATION:
            return HeaderStatus.NO_OBSERVATION_HEADER
        return HeaderState.READY
