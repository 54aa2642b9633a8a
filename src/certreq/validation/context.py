"""Per-pass state shared by the validation stages."""

from __future__ import annotations

from dataclasses import dataclass

from certreq.config.settings import DEFAULT_SETTINGS, ValidationSettings


@dataclass(frozen=True)
class ValidationContext:
    """Settings and caller flags for one validation pass.

    ``confirmed`` is set by the caller when re-running after the
    operator acknowledged a :class:`ConfirmationRequired` outcome.
    """

    settings: ValidationSettings = DEFAULT_SETTINGS.validation
    confirmed: bool = False
