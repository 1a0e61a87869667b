from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...domain.entities.header import HeaderStatus


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    file_name: str = ""
    member_name: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


def _empty_stats() -> dict[str, int]:
    return {
        "files_opened": 0,
        "headers_failed": 0,
        "rows_read": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_file_opened(self, file_name: str) -> None:
        self.set_context(file_name=file_name, operation="open")
        self._stats["files_opened"] += 1
        self.verbose(f"Opened {file_name}")

    @override
    def log_headers_read(
        self, member_name: str, column_count: int, row_length: int
    ) -> None:
        self.set_context(member_name=member_name, operation="read")
        label = member_name or "<unnamed>"
        self.verbose(
            f"Member {label}: {column_count} columns, {row_length:,} bytes per row"
        )

    @override
    def log_header_failure(self, status: HeaderStatus) -> None:
        self._stats["headers_failed"] += 1
        file_name = self._context.file_name if self._context else ""
        where = f" in {file_name}" if file_name else ""
        self.error(f"Header validation failed{where}: {status.name}")

    @override
    def log_rows_read(self, file_name: str, row_count: int) -> None:
        self._stats["rows_read"] += row_count
        msg = f"Read {row_count:,} rows from {file_name}"
        if self._context is not None and self.verbosity >= LogLevel.DEBUG:
            msg += f" ({self._context.elapsed_ms():.1f} ms)"
        self.verbose(msg)

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Reader Statistics:[/dim]")
            self.console.print(f"[dim]  Files opened: {self._stats['files_opened']}[/dim]")
            self.console.print(f"[dim]  Rows read: {self._stats['rows_read']:,}[/dim]")
            if self._stats["headers_failed"] > 0:
                self.console.print(
                    f"[dim red]  Header failures: {self._stats['headers_failed']}[/dim red]"
                )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _empty_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts: list[str] = []
        if self._context.file_name:
            parts.append(self._context.file_name)
        if self._context.member_name:
            parts.append(self._context.member_name)
        return escape(f"[{':'.join(parts)}] ") if parts else ""
