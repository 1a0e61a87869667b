from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.entities.header import HeaderStatus


class XPTReaderError(Exception):
    pass


class DataSourceError(XPTReaderError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    pass


class HeaderValidationError(DataParseError):
    def __init__(self, status: HeaderStatus, message: str | None = None) -> None:
        super().__init__(message or f"Invalid XPT header sequence: {status.name}")
        self.status = status


class TruncatedDataError(DataParseError):
    pass


class ValueConversionError(DataParseError, ValueError):
    def __init__(self, column: str, message: str) -> None:
        super().__init__(f"Column {column}: {message}")
        self.column = column


class ReaderStateError(XPTReaderError, RuntimeError):
    pass
