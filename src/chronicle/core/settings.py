"""Settings for the chronicle versioning core.

Configuration is read from ``CHRONICLE_*`` environment variables and an
optional ``.env`` file via pydantic-settings. Nothing here is required:
defaults work out of the box, and every engine option can also be passed
explicitly at call time.

Fields
──────
debug               : Shortcut for DEBUG-level logging
log_level           : Structlog log level
json_logs           : Force JSON (True) / console (False) output; None = auto
verify_diff_prefix  : Default for ``difference(..., verify=None)``

Examples:
    >>> from chronicle.core.settings import get_settings
    >>> get_settings().verify_diff_prefix
    True

Tags:
    settings, configuration, pydantic, environment, chronicle
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from chronicle.core.logging import configure_logging


class ChronicleSettings(BaseSettings):
    """Process-wide options for the versioning core."""

    model_config = SettingsConfigDict(
        env_prefix="CHRONICLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool | None = None

    # ── Diffing ──────────────────────────────────────────────────
    verify_diff_prefix: bool = Field(
        default=True,
        description="Check that the shorter history is a prefix of the longer before slicing",
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


@lru_cache(maxsize=1)
def get_settings() -> ChronicleSettings:
    """Cached settings, loaded once per process."""
    return ChronicleSettings()


def configure_from_settings(settings: ChronicleSettings | None = None) -> ChronicleSettings:
    """Apply the logging fields of ``settings`` (default: cached settings)."""
    settings = settings or get_settings()
    configure_logging(
        level=settings.effective_log_level,
        json_format=settings.json_logs,
        service="chronicle",
    )
    return settings


__all__ = ["ChronicleSettings", "get_settings", "configure_from_settings"]
