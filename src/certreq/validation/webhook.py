"""Webhook validator.

A webhook with an active trigger needs an absolute URL and an HTTP
method.  When the trigger is unset or ``none`` every webhook field is
cleared so stale settings do not survive a trigger reset.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import TYPE_CHECKING

from certreq.core.types import Rule, WebhookTrigger
from certreq.validation.errors import (
    UNKNOWN_WEBHOOK_TRIGGER,
    WEBHOOK_METHOD_REQUIRED,
    WEBHOOK_URL_INVALID,
    RuleViolation,
)

if TYPE_CHECKING:
    from certreq.models.request import CertificateRequest
    from certreq.validation.context import ValidationContext

log = logging.getLogger(__name__)

_KNOWN_TRIGGERS = frozenset(t.value for t in WebhookTrigger)


def is_absolute_url(value: str | None) -> bool:
    """Return True if *value* has both a scheme and a network location.

    Absolute URIs without a host, such as ``file:///hook`` or
    ``mailto:ops@example.com``, are not accepted as webhook targets.
    """
    if not value:
        return False
    try:
        parts = urllib.parse.urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def validate_webhook(
    request: CertificateRequest,
    context: ValidationContext,  # noqa: ARG001
) -> None:
    """Check webhook completeness or clear the webhook fields."""
    config = request.request_config
    trigger = config.webhook_trigger

    if trigger and trigger != WebhookTrigger.NONE:
        if trigger not in _KNOWN_TRIGGERS:
            raise RuleViolation(
                Rule.UNKNOWN_WEBHOOK_TRIGGER,
                UNKNOWN_WEBHOOK_TRIGGER.format(trigger=trigger),
            )
        if not is_absolute_url(config.webhook_url):
            raise RuleViolation(Rule.WEBHOOK_URL_INVALID, WEBHOOK_URL_INVALID)
        if not config.webhook_method:
            raise RuleViolation(Rule.WEBHOOK_METHOD_REQUIRED, WEBHOOK_METHOD_REQUIRED)
        return

    if config.webhook_url:
        log.debug("Webhook trigger is %r, clearing webhook settings", trigger)
    config.webhook_url = None
    config.webhook_method = None
    config.webhook_content_type = None
    config.webhook_content_body = None
