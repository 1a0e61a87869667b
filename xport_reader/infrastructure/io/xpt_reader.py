"""Streaming decoder session for SAS XPORT (v5) transport files.

Usage::

    with XPTFile() as xpt:
        if not xpt.open(path):
            ...
        if xpt.read_headers() is not HeaderStatus.OK:
            ...
        while (row := xpt.read_next()) is not None:
            ...

Rows are read strictly in file order, one row buffer at a time, so memory use
is bounded by the row length plus one card of lookahead whatever the file size.
A full blank row is trailing padding only when the stream ends within that
card and nothing but blanks follows it; otherwise it is returned as data.

A partial row at the end of the stream is blank padding when every byte is an
ASCII blank; anything else is a truncated file. By default a truncated row ends
the data with a logged warning, making it indistinguishable from a clean end to
callers that ignore the log; set ``ReaderConfig.strict_eof`` to raise
``TruncatedDataError`` instead.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from ...config import ReaderConfig
from ...constants import Layout
from ...domain.entities.destinations import NumericSlot, TextSlot
from ...domain.entities.header import HeaderStatus
from ...domain.services.ibm_float import ibm_to_ieee
from ...domain.services.value_coercion import (
    CoercionError,
    numeric_to_text,
    text_to_numeric,
)
from ..logging.null_logger import NullLogger
from .binary import is_blank, read_text, read_uint64
from .exceptions import (
    DataSourceNotFoundError,
    HeaderValidationError,
    ReaderStateError,
    TruncatedDataError,
    ValueConversionError,
)
from .header_reader import HeaderReader
from .record_stream import RecordStream

if TYPE_CHECKING:
    from types import TracebackType

    from ...application.ports.services import LoggerPort
    from ...domain.entities.destinations import Destination
    from ...domain.entities.variable import DecodedValue, VariableDescriptor


class XPTFile:
    """One decoding session over one XPT stream."""

    def __init__(
        self,
        stream: BinaryIO | None = None,
        *,
        config: ReaderConfig | None = None,
        logger: LoggerPort | None = None,
        name: str | None = None,
    ) -> None:
        self.config = config or ReaderConfig()
        self._logger = logger or NullLogger()
        self._stream: BinaryIO | None = None
        self._records: RecordStream | None = None
        self._owns_stream = False
        self._name = name or ""
        self._reset()
        if stream is not None:
            self._attach(stream, owns=False)

    def _reset(self) -> None:
        self._status: HeaderStatus | None = None
        self._columns: tuple[VariableDescriptor, ...] = ()
        self._row_length = 0
        self._buffer = bytearray()
        self._rows_read = 0
        self._exhausted = False

    def _attach(self, stream: BinaryIO, *, owns: bool) -> None:
        self._stream = stream
        self._records = RecordStream(stream)
        self._owns_stream = owns
        if not self._name:
            self._name = str(getattr(stream, "name", "") or "<stream>")
        self._logger.log_file_opened(self._name)

    # -- lifecycle ---------------------------------------------------------

    def open(self, path: str | Path) -> bool:
        """Open ``path`` for reading; False if it is missing or unreadable."""
        self.close()
        try:
            stream = Path(path).open("rb")
        except OSError:
            return False
        self._name = Path(path).name
        self._attach(stream, owns=True)
        return True

    def close(self) -> None:
        if self._stream is None:
            return
        if self._status is HeaderStatus.OK:
            self._logger.log_rows_read(self._name, self._rows_read)
        if self._owns_stream:
            self._stream.close()
        self._stream = None
        self._records = None
        self._owns_stream = False
        self._name = ""
        self._reset()

    def __enter__(self) -> XPTFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # -- headers -----------------------------------------------------------

    def read_headers(self) -> HeaderStatus:
        """Validate the header section and build the column table.

        The headers are read once; later calls return the first outcome.
        """
        if self._records is None:
            raise ReaderStateError("No XPT stream is open")
        if self._status is not None:
            return self._status
        result = HeaderReader(
            self._records, encoding=self.config.text_encoding, logger=self._logger
        ).read()
        self._status = result.status
        if not result.status.ok:
            self._logger.log_header_failure(result.status)
            return result.status
        self._columns = result.descriptors
        self._row_length = result.row_length
        self._buffer = bytearray(self._row_length)
        self._logger.log_headers_read(
            result.member_name, len(self._columns), self._row_length
        )
        return result.status

    @property
    def status(self) -> HeaderStatus | None:
        return self._status

    @property
    def columns(self) -> tuple[VariableDescriptor, ...]:
        return self._columns

    def column(self, name: str) -> VariableDescriptor | None:
        for descriptor in self._columns:
            if descriptor.name == name:
                return descriptor
        return None

    @property
    def row_length(self) -> int:
        return self._row_length

    @property
    def rows_read(self) -> int:
        return self._rows_read

    @property
    def bytes_consumed(self) -> int:
        return self._records.consumed if self._records is not None else 0

    # -- rows --------------------------------------------------------------

    def read_next(self) -> list[DecodedValue] | None:
        """Decode the next row, or return None at the end of the data."""
        self._require_ready()
        row = self._next_row()
        if row is None:
            return None
        return [self._decode(descriptor, row) for descriptor in self._columns]

    def read_next_into(self, *destinations: Destination) -> bool:
        """Decode the next row into positional destination slots.

        Slot *i* receives column *i*; columns past the last slot are skipped.
        A numeric column bound to a ``TextSlot`` is rendered in fixed-point
        notation, and a text column bound to a ``NumericSlot`` is parsed as a
        float literal (``ValueConversionError`` if it is not one). Returns
        False at the end of the data.
        """
        self._require_ready()
        if len(destinations) > len(self._columns):
            raise ValueError(
                f"{len(destinations)} destinations given for "
                f"{len(self._columns)} columns"
            )
        row = self._next_row()
        if row is None:
            return False
        for descriptor, destination in zip(self._columns, destinations):
            value = self._decode(descriptor, row)
            if isinstance(destination, NumericSlot):
                destination.value = self._as_numeric(descriptor, value)
            elif isinstance(destination, TextSlot):
                destination.value = self._as_text(value)
            else:
                raise TypeError(
                    f"Unsupported destination type: {type(destination).__name__}"
                )
        return True

    def __iter__(self) -> Iterator[list[DecodedValue]]:
        while (row := self.read_next()) is not None:
            yield row

    def _require_ready(self) -> None:
        if self._records is None:
            raise ReaderStateError("No XPT stream is open")
        if self._status is None:
            raise ReaderStateError("read_headers() must succeed before reading rows")
        if not self._status.ok:
            raise ReaderStateError(
                f"Header validation failed ({self._status.name}); no rows available"
            )

    def _next_row(self) -> memoryview | None:
        if self._exhausted or self._row_length == 0:
            return None
        assert self._records is not None
        filled = self._records.read_into(self._buffer)
        view = memoryview(self._buffer)
        if filled < self._row_length:
            self._exhausted = True
            self._check_tail(view[:filled])
            return None
        if self._is_padding(view):
            self._exhausted = True
            return None
        self._rows_read += 1
        return view

    def _is_padding(self, row: memoryview) -> bool:
        # a blank row is padding only if it starts in the final card of the
        # stream and every byte after it is blank as well
        if self._row_length >= Layout.CARD_LENGTH or not is_blank(row):
            return False
        window = Layout.CARD_LENGTH - self._row_length
        assert self._records is not None
        ahead = self._records.peek(window)
        return len(ahead) < window and is_blank(ahead)

    def _check_tail(self, tail: memoryview) -> None:
        if is_blank(tail):
            return
        message = (
            f"{self._name}: trailing {len(tail)} of {self._row_length} row bytes "
            f"after row {self._rows_read}; file appears truncated"
        )
        if self.config.strict_eof:
            raise TruncatedDataError(message)
        self._logger.warning(message)

    def _decode(self, descriptor: VariableDescriptor, row: memoryview) -> DecodedValue:
        if descriptor.is_numeric:
            raw = read_uint64(row, descriptor.position, descriptor.length)
            return ibm_to_ieee(raw)
        return read_text(
            row, descriptor.position, descriptor.length, self.config.text_encoding
        )

    def _as_numeric(self, descriptor: VariableDescriptor, value: DecodedValue) -> float:
        if isinstance(value, float):
            return value
        try:
            return text_to_numeric(value)
        except CoercionError as e:
            raise ValueConversionError(descriptor.name, str(e)) from e

    def _as_text(self, value: DecodedValue) -> str:
        if isinstance(value, str):
            return value
        return numeric_to_text(value, self.config.numeric_text_precision)


def iter_xpt_rows(
    path: str | Path,
    *,
    config: ReaderConfig | None = None,
    logger: LoggerPort | None = None,
) -> Iterator[list[DecodedValue]]:
    """Yield every row of ``path``, raising instead of returning status codes."""
    with XPTFile(config=config, logger=logger) as xpt:
        if not xpt.open(path):
            raise DataSourceNotFoundError(f"Cannot open XPT file: {path}")
        status = xpt.read_headers()
        if not status.ok:
            raise HeaderValidationError(status, f"{path}: {status.name}")
        yield from xpt
