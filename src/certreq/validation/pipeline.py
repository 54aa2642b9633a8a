"""Validation pipeline: the ordered, short-circuiting rule sequence.

Stages run in a fixed order over one mutable request::

    domains -> challenges -> binding -> webhook

Each stage may normalize the request in place and may raise a
:class:`ValidationProblem` to stop the pass.  Mutations made before the
stop are kept, so a caller correcting one field does not have to redo
the fixes already applied.  Every stage is a no-op on its own output,
so re-running a ready request returns ready without further changes.

Usage::

    from certreq.validation import validate_request

    outcome = validate_request(request)
    if outcome.needs_confirmation and operator_agrees(outcome.message):
        outcome = validate_request(request, confirmed=True)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from certreq.config.settings import DEFAULT_SETTINGS
from certreq.core.types import Rule
from certreq.models.outcome import ValidationOutcome
from certreq.validation.binding import normalize_binding
from certreq.validation.challenges import validate_challenges
from certreq.validation.context import ValidationContext
from certreq.validation.domains import resolve_primary_domain
from certreq.validation.errors import INTERNAL_INCONSISTENCY, ValidationProblem
from certreq.validation.webhook import validate_webhook

if TYPE_CHECKING:
    from certreq.config.settings import ValidationSettings
    from certreq.models.request import CertificateRequest

log = logging.getLogger(__name__)

Stage = Callable[["CertificateRequest", ValidationContext], object]

DEFAULT_STAGES: tuple[tuple[str, Stage], ...] = (
    ("domains", resolve_primary_domain),
    ("challenges", validate_challenges),
    ("binding", normalize_binding),
    ("webhook", validate_webhook),
)


class ValidationPipeline:
    """Run the validation stages over a request.

    Parameters
    ----------
    settings:
        Validation rules; defaults to the built-in settings.
    stages:
        Ordered ``(name, callable)`` pairs.  Each callable receives the
        request and a :class:`ValidationContext`.

    The pipeline holds no per-request state and may be shared between
    callers, provided each caller passes its own request.
    """

    def __init__(
        self,
        settings: ValidationSettings | None = None,
        stages: tuple[tuple[str, Stage], ...] = DEFAULT_STAGES,
    ) -> None:
        self._settings = settings or DEFAULT_SETTINGS.validation
        self._stages = stages

    @property
    def settings(self) -> ValidationSettings:
        return self._settings

    @property
    def stage_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._stages)

    def run(self, request: CertificateRequest, *, confirmed: bool = False) -> ValidationOutcome:
        """Validate and normalize *request* in place.

        Returns the outcome of the first stage that stops, or ready when
        every stage completes.
        """
        context = ValidationContext(settings=self._settings, confirmed=confirmed)

        for name, stage in self._stages:
            log_extra = {"request_name": request.name or "-", "stage": name}
            log.debug("Running validation stage %s", name, extra=log_extra)
            try:
                stage(request, context)
            except ValidationProblem as exc:
                outcome = exc.to_outcome()
                log.info(
                    "Validation stopped at stage %s: %s (%s)",
                    name,
                    outcome.status.value,
                    exc.rule.value,
                    extra=log_extra,
                )
                return outcome
            except Exception as exc:
                log.exception("Validation stage %s failed unexpectedly", name, extra=log_extra)
                return ValidationOutcome.violation(
                    Rule.INTERNAL_INCONSISTENCY,
                    INTERNAL_INCONSISTENCY.format(stage=name, error=exc),
                )

        log.info("Request is ready", extra={"request_name": request.name or "-", "stage": "-"})
        return ValidationOutcome.ready()


def validate_request(
    request: CertificateRequest,
    *,
    confirmed: bool = False,
    settings: ValidationSettings | None = None,
) -> ValidationOutcome:
    """Validate *request* with the default stage order."""
    return ValidationPipeline(settings).run(request, confirmed=confirmed)
