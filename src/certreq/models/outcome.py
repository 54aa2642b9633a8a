"""Validation outcome value object."""

from __future__ import annotations

from dataclasses import dataclass

from certreq.core.types import OutcomeStatus, Rule


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of one validation pass.

    ``rule`` and ``message`` are ``None`` for a ready outcome.  Messages
    are caller-facing and may be displayed verbatim.
    """

    status: OutcomeStatus
    rule: Rule | None = None
    message: str | None = None

    @classmethod
    def ready(cls) -> ValidationOutcome:
        return cls(OutcomeStatus.READY)

    @classmethod
    def violation(cls, rule: Rule, message: str) -> ValidationOutcome:
        return cls(OutcomeStatus.RULE_VIOLATION, rule, message)

    @classmethod
    def confirmation(cls, rule: Rule, message: str) -> ValidationOutcome:
        return cls(OutcomeStatus.NEEDS_CONFIRMATION, rule, message)

    @property
    def is_ready(self) -> bool:
        return self.status is OutcomeStatus.READY

    @property
    def is_violation(self) -> bool:
        return self.status is OutcomeStatus.RULE_VIOLATION

    @property
    def needs_confirmation(self) -> bool:
        return self.status is OutcomeStatus.NEEDS_CONFIRMATION
