from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...domain.entities.header import HeaderStatus


class NullLogger(LoggerPort):
    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_file_opened(self, file_name: str) -> None:
        return None

    @override
    def log_headers_read(
        self, member_name: str, column_count: int, row_length: int
    ) -> None:
        return None

    @override
    def log_header_failure(self, status: HeaderStatus) -> None:
        return None

    @override
    def log_rows_read(self, file_name: str, row_count: int) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
