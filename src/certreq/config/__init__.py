"""Configuration subsystem for certreq.

Public API::

    from certreq.config import get_config, CertreqConfig

    # At startup (CLI only):
    CertreqConfig(config_file="config.yaml")

    # Everywhere else:
    cfg = get_config()
    limit = cfg.settings.validation.max_domains

The typed settings are importable on their own; the ConfigKit-backed
loader is imported on first access so library callers that only pass
settings objects do not load it.
"""

from certreq.config.settings import (
    DEFAULT_SETTINGS,
    CertreqSettings,
    LoggingSettings,
    ValidationSettings,
    build_settings,
)

_LOADER_NAMES = frozenset({"CertreqConfig", "ConfigValidationError", "get_config"})


def __getattr__(name: str):
    if name in _LOADER_NAMES:
        from certreq.config import certreq_config

        return getattr(certreq_config, name)
    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "DEFAULT_SETTINGS",
    "CertreqConfig",
    "CertreqSettings",
    "ConfigValidationError",
    "LoggingSettings",
    "ValidationSettings",
    "build_settings",
    "get_config",
]
