from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class ReaderConfig:
    text_encoding: str = Defaults.TEXT_ENCODING
    numeric_text_precision: int = Defaults.NUMERIC_TEXT_PRECISION
    strict_eof: bool = Defaults.STRICT_EOF

    def __post_init__(self) -> None:
        if not self.text_encoding:
            raise ValueError("text_encoding must not be empty")
        try:
            "".encode(self.text_encoding)
        except LookupError as e:
            raise ValueError(f"Unknown text_encoding: {self.text_encoding}") from e
        if self.numeric_text_precision < 0:
            raise ValueError(
                "numeric_text_precision must be non-negative, "
                f"got {self.numeric_text_precision}"
            )

    @classmethod
    def from_env(cls) -> ReaderConfig:
        return cls(
            text_encoding=os.getenv("XPT_TEXT_ENCODING", Defaults.TEXT_ENCODING),
            numeric_text_precision=int(
                os.getenv(
                    "XPT_NUMERIC_TEXT_PRECISION", str(Defaults.NUMERIC_TEXT_PRECISION)
                )
            ),
            strict_eof=_coerce_bool(
                os.getenv("XPT_STRICT_EOF", ""), key="XPT_STRICT_EOF"
            ),
        )


class ConfigLoader:
    """Builds a ReaderConfig from the environment, then an optional TOML file."""

    @staticmethod
    def load(config_file: Path | None = None) -> ReaderConfig:
        config = ReaderConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: ReaderConfig) -> ReaderConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        reader = _get_table(data, "reader")
        text_encoding = base_config.text_encoding
        if value := reader.get("text_encoding"):
            text_encoding = str(value)
        numeric_text_precision = base_config.numeric_text_precision
        if (value := reader.get("numeric_text_precision")) is not None:
            numeric_text_precision = _coerce_int(
                value, key="reader.numeric_text_precision"
            )
        strict_eof = base_config.strict_eof
        if (value := reader.get("strict_eof")) is not None:
            strict_eof = _coerce_bool(value, key="reader.strict_eof")
        return ReaderConfig(
            text_encoding=text_encoding,
            numeric_text_precision=numeric_text_precision,
            strict_eof=strict_eof,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")
