"""certreq configuration loader built on ConfigKit.

Lifecycle::

    # 1. CLI creates the singleton (once, at startup)
    CertreqConfig(config_file="/etc/certreq/config.yaml")

    # 2. Any module retrieves it afterwards
    from certreq.config import get_config
    cfg = get_config()
    cfg.settings.validation.max_domains  # typed access
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

from configkit import ConfigKit, ConfigKitMeta

from certreq.config.settings import CertreqSettings, build_settings

_SCHEMA_PATH = Path(__file__).parent / "schema.json"

_ENV_RE = re.compile(
    r"^\$\{([^}:]+?)(?::-(.*))?\}$",
    re.DOTALL,
)

# Public CAs cap the number of names per certificate at 100.
_CA_NAME_LIMIT = 100

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level singleton reference
# ---------------------------------------------------------------------------
_instance: CertreqConfig | None = None


def get_config() -> CertreqConfig:
    """Return the initialised configuration singleton.

    Raises :class:`RuntimeError` if :class:`CertreqConfig` has not been
    created yet.
    """
    if _instance is None:
        msg = (
            "Configuration not initialised. "
            "CertreqConfig must be created with config_file= before calling get_config()."
        )
        raise RuntimeError(msg)
    return _instance


# ---------------------------------------------------------------------------
# Validation error collector
# ---------------------------------------------------------------------------


class ConfigValidationError(Exception):
    """Raised when cross-field validation finds one or more problems."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        body = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Configuration validation failed:\n{body}")


# ---------------------------------------------------------------------------
# Environment variable resolution
# ---------------------------------------------------------------------------


def _resolve_value(value: str, path: str) -> str:
    """Replace ``${VAR}`` or ``${VAR:-default}`` with env var value."""
    match = _ENV_RE.match(value)
    if match is None:
        return value
    var_name = match.group(1)
    fallback = match.group(2)
    resolved = os.environ.get(var_name)
    if resolved is not None:
        return resolved
    if fallback is not None:
        return fallback
    raise ConfigValidationError(
        [
            f"Environment variable '${{{var_name}}}' referenced "
            f"at '{path}' is not set and has no default",
        ],
    )


def _resolve_env_vars(
    data: Any,  # noqa: ANN401
    path: str = "",
) -> None:
    """Walk *data* in-place and resolve ``${VAR}``/``${VAR:-default}`` strings."""
    if isinstance(data, dict):
        for key in data:
            child_path = f"{path}.{key}" if path else key
            if isinstance(data[key], str):
                data[key] = _resolve_value(data[key], child_path)
            elif isinstance(data[key], (dict, list)):
                _resolve_env_vars(data[key], child_path)
    elif isinstance(data, list):
        for idx, item in enumerate(data):
            child_path = f"{path}[{idx}]"
            if isinstance(item, str):
                data[idx] = _resolve_value(item, child_path)
            elif isinstance(item, (dict, list)):
                _resolve_env_vars(item, child_path)


# ---------------------------------------------------------------------------
# Config class
# ---------------------------------------------------------------------------


class CertreqConfig(ConfigKit):
    """Central configuration for certreq.

    Subclasses :class:`configkit.ConfigKit`.  The JSON schema is
    bundled at ``config/schema.json``; users supply only ``config_file``.
    """

    def __init__(
        self,
        *,
        config_file: str | Path,
        schema_file: str | Path | None = None,  # noqa: ARG002
    ) -> None:
        global _instance  # noqa: PLW0603

        # The bundled schema is always used; schema_file only satisfies
        # ConfigKitMeta's __call__ guard.
        super().__init__(
            config_file=config_file,
            schema_file=_SCHEMA_PATH,
        )
        self._settings: CertreqSettings = build_settings(self.data)
        _instance = self

    def _load(self) -> None:
        """Load config file then resolve ``${VAR}`` env-var references.

        Runs before schema validation so substituted values are checked
        against the schema.
        """
        super()._load()
        _resolve_env_vars(self._data)

    @property
    def settings(self) -> CertreqSettings:
        """Fully-typed, frozen settings tree."""
        return self._settings

    def additional_checks(self) -> None:
        """Cross-field validation, called by ConfigKit after the schema passes."""
        errors: list[str] = []
        warnings: list[str] = []

        validation = self.data.get("validation") or {}

        max_domains = validation.get("max_domains", _CA_NAME_LIMIT)
        if max_domains < 1:
            errors.append(f"validation.max_domains ({max_domains}) must be >= 1")
        elif max_domains > _CA_NAME_LIMIT:
            warnings.append(
                f"validation.max_domains ({max_domains}) exceeds the "
                f"{_CA_NAME_LIMIT}-name limit of public CAs, issuance may fail",
            )

        if not str(validation.get("default_title", "New Managed Certificate")).strip():
            errors.append("validation.default_title must not be empty")

        for idx, suffix in enumerate(validation.get("internal_suffixes", [])):
            if not suffix.startswith("."):
                errors.append(
                    f"validation.internal_suffixes[{idx}] '{suffix}' must start with '.'",
                )

        for w in warnings:
            log.warning("Config warning: %s", w)

        if errors:
            raise ConfigValidationError(errors)

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton -- testing only."""
        global _instance  # noqa: PLW0603
        _instance = None
        ConfigKitMeta.reset()

    def __repr__(self) -> str:
        source = self.data.get("_source", "?")
        return f"<CertreqConfig config_file={source}>"
