from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..config import ConfigLoader
from .io.xpt_reader import XPTFile
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger

if TYPE_CHECKING:
    from pathlib import Path

    from ..application.ports.services import LoggerPort
    from ..config import ReaderConfig


class DependencyContainer:
    def __init__(
        self,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
        config: ReaderConfig | None = None,
    ) -> None:
        super().__init__()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self._config_instance = config
        self._logger_instance: LoggerPort | None = None

    def create_config(self) -> ReaderConfig:
        if self._config_instance is None:
            self._config_instance = ConfigLoader.load()
        return self._config_instance

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_reader(self) -> XPTFile:
        return XPTFile(config=self.create_config(), logger=self.create_logger())

    def open_reader(self, path: str | Path) -> XPTFile | None:
        """Open ``path`` in a new session; None if the file cannot be opened."""
        reader = self.create_reader()
        if not reader.open(path):
            return None
        return reader

    def reset_singletons(self) -> None:
        self._config_instance = None
        self._logger_instance = None

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger

    def override_config(self, config: ReaderConfig) -> None:
        self._config_instance = config


def create_default_container(verbose: int = 0) -> DependencyContainer:
    return DependencyContainer(verbose=verbose)
