"""Parser configuration for bibscan operations."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ParserConfig:
    """Options controlling how entries and documents are parsed."""

    allow_empty_labels: bool = False
    max_workers: int = 1
    strict_trailing: bool = False

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {self.max_workers}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ParserConfig:
        """Create configuration from ``BIBSCAN_*`` environment variables.

        Args:
            environ: Mapping to read from (default: ``os.environ``)

        Returns:
            ParserConfig with unset variables left at their defaults

        Raises:
            ConfigurationError: If a variable holds an unparseable value
        """
        if environ is None:
            environ = os.environ

        workers_raw = environ.get("BIBSCAN_MAX_WORKERS", "1")
        try:
            max_workers = int(workers_raw)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid BIBSCAN_MAX_WORKERS: {workers_raw!r}") from exc

        return cls(
            allow_empty_labels=_env_flag(environ, "BIBSCAN_ALLOW_EMPTY_LABELS"),
            max_workers=max_workers,
            strict_trailing=_env_flag(environ, "BIBSCAN_STRICT_TRAILING"),
        )


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    raw = environ.get(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid {name}: {raw!r}")
