"""SAS XPORT transport file reader.

This package decodes SAS Transport (XPORT, version 5) files: it validates the
header card sequence, builds the column table from the namestr records and
streams rows one at a time, converting IBM hexadecimal floats to Python floats.

Features:
- Status-code session API (``XPTFile``)
- Positional typed binding into ``NumericSlot`` / ``TextSlot`` destinations
- Exception-raising iteration helper (``iter_xpt_rows``)
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("xport-reader")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Core exports
from xport_reader.config import ConfigLoader, ReaderConfig
from xport_reader.domain.entities import (
    DecodedValue,
    Destination,
    HeaderStatus,
    NumericSlot,
    TextSlot,
    VariableDescriptor,
    VariableType,
)
from xport_reader.infrastructure.io.exceptions import (
    DataSourceNotFoundError,
    HeaderValidationError,
    ReaderStateError,
    TruncatedDataError,
    ValueConversionError,
    XPTReaderError,
)
from xport_reader.infrastructure.io.xpt_reader import XPTFile, iter_xpt_rows

__all__ = [
    "__version__",
    # Session
    "XPTFile",
    "iter_xpt_rows",
    # Configuration
    "ConfigLoader",
    "ReaderConfig",
    # Data model
    "DecodedValue",
    "Destination",
    "HeaderStatus",
    "NumericSlot",
    "TextSlot",
    "VariableDescriptor",
    "VariableType",
    # Errors
    "DataSourceNotFoundError",
    "HeaderValidationError",
    "ReaderStateError",
    "TruncatedDataError",
    "ValueConversionError",
    "XPTReaderError",
]
