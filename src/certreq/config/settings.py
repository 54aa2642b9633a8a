"""Typed, frozen dataclasses for every configuration section.

This module is the **single source of truth** for default values.
JSON Schema defaults exist only for documentation; these builders
are what the application actually reads.

Access pattern::

    from certreq.config import get_config

    limit = get_config().settings.validation.max_domains
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationSettings:
    """Request validation rules (placeholder title, limits, suffixes)."""

    default_title: str
    max_domains: int
    internal_suffixes: tuple[str, ...]
    wildcard_prefix: str


def _build_validation(data: dict | None) -> ValidationSettings:
    d = data or {}
    return ValidationSettings(
        default_title=d.get("default_title", "New Managed Certificate"),
        max_domains=d.get("max_domains", 100),
        internal_suffixes=tuple(s.lower() for s in d.get("internal_suffixes", [".local"])),
        wildcard_prefix=d.get("wildcard_prefix", "*."),
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingSettings:
    """Application logging configuration (level, format)."""

    level: str
    format: str


def _build_logging(data: dict | None) -> LoggingSettings:
    d = data or {}
    return LoggingSettings(
        level=d.get("level", "INFO"),
        format=d.get("format", "text"),
    )


# ---------------------------------------------------------------------------
# Root settings aggregate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CertreqSettings:
    validation: ValidationSettings
    logging: LoggingSettings


def build_settings(data: dict) -> CertreqSettings:
    """Build the full typed settings tree from raw config data.

    Called during :class:`CertreqConfig` initialization after schema
    validation and environment-variable resolution.  An empty dict
    yields the defaults, which is what library callers get when they
    pass no settings at all.
    """
    return CertreqSettings(
        validation=_build_validation(data.get("validation")),
        logging=_build_logging(data.get("logging")),
    )


DEFAULT_SETTINGS = build_settings({})
