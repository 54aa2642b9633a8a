"""Eligibility checks run before a real or a test request.

Neither check talks to a CA or a web server; the caller reports what it
knows about the local environment and acts on the returned outcome.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from certreq.challenge.matching import get_challenge_config
from certreq.core.types import ChallengeType, Rule
from certreq.models.outcome import ValidationOutcome
from certreq.validation.errors import NO_CHALLENGE_CONFIG, WEB_SERVER_UNAVAILABLE
from certreq.validation.pipeline import validate_request

if TYPE_CHECKING:
    from certreq.config.settings import ValidationSettings
    from certreq.models.request import CertificateRequest

log = logging.getLogger(__name__)


def check_request_eligibility(
    request: CertificateRequest,
    *,
    confirmed: bool = False,
    settings: ValidationSettings | None = None,
) -> ValidationOutcome:
    """Decide whether *request* may be handed to the issuance engine."""
    return validate_request(request, confirmed=confirmed, settings=settings)


def check_test_eligibility(
    request: CertificateRequest,
    *,
    web_server_available: bool,
    confirmed: bool = False,
    settings: ValidationSettings | None = None,
) -> ValidationOutcome:
    """Decide whether a test challenge may be run for *request*.

    The request must pass full validation first.  An http-01 test for a
    request attached to a local site needs the local web server to
    answer the challenge.
    """
    outcome = validate_request(request, confirmed=confirmed, settings=settings)
    if not outcome.is_ready:
        return outcome

    challenge = get_challenge_config(request)
    if challenge is None:
        return ValidationOutcome.violation(Rule.NO_CHALLENGE_CONFIG, NO_CHALLENGE_CONFIG)

    if (
        challenge.challenge_type == ChallengeType.HTTP_01
        and request.server_site_id
        and not web_server_available
    ):
        log.info("Test for site %s refused: web server unavailable", request.server_site_id)
        return ValidationOutcome.violation(Rule.WEB_SERVER_UNAVAILABLE, WEB_SERVER_UNAVAILABLE)

    return outcome
