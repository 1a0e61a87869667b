"""Infrastructure I/O layer.

This package contains the stream-facing pieces of the XPT decoder: fixed-offset
field extraction, header validation, namestr parsing and the row-streaming
session.

Architecture note:
- Internal modules import from the defining modules, not from here.
"""

from .exceptions import (
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
    HeaderValidationError,
    ReaderStateError,
    TruncatedDataError,
    ValueConversionError,
    XPTReaderError,
)
from .header_reader import HeaderReader, HeaderResult, HeaderState
from .xpt_reader import XPTFile, iter_xpt_rows

__all__ = [
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "HeaderReader",
    "HeaderResult",
    "HeaderState",
    "HeaderValidationError",
    "ReaderStateError",
    "TruncatedDataError",
    "ValueConversionError",
    "XPTFile",
    "XPTReaderError",
    "iter_xpt_rows",
]
