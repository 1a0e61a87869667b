from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities.header import HeaderStatus


@runtime_checkable
class LoggerPort(Protocol):
    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_file_opened(self, file_name: str) -> None: ...

    def log_headers_read(
        self, member_name: str, column_count: int, row_length: int
    ) -> None: ...

    def log_header_failure(self, status: HeaderStatus) -> None: ...

    def log_rows_read(self, file_name: str, row_count: int) -> None: ...

    def log_final_stats(self) -> None: ...
