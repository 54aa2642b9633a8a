"""Validation problems and their caller-facing messages.

Stages raise a :class:`ValidationProblem` subclass to stop the pipeline;
the pipeline converts it into a :class:`ValidationOutcome`.

Usage::

    raise RuleViolation(Rule.NAME_REQUIRED, NAME_REQUIRED)
"""

from __future__ import annotations

from certreq.core.types import Rule
from certreq.models.outcome import ValidationOutcome

# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

NO_PRIMARY_DOMAIN = (
    "No primary domain: select at least one domain and mark one of them as the primary domain."
)
NAME_REQUIRED = "A name is required for this certificate."
INTERNAL_HOSTNAME = (
    "One or more domains specified are internal hostnames. Certificates for internal "
    "host names are not supported by the Certificate Authority."
)
WILDCARD_REQUIRES_DNS = (
    "Wildcard domains cannot use http-01 validation for domain authorization. Use dns-01 instead."
)
UNKNOWN_CHALLENGE_TYPE = "Unknown challenge type '{challenge_type}'."
LEGACY_CHALLENGE_NEW = (
    "Sorry, the tls-sni-01 challenge type is no longer supported for new certificates."
)
LEGACY_CHALLENGE_EXISTING = (
    "The tls-sni-01 challenge type is no longer available. "
    "You need to switch to either http-01 or dns-01."
)
DNS_PROVIDER_REQUIRED = "The dns-01 challenge type requires a DNS Update Method selection."
DUPLICATE_MATCH_ANY = (
    "Only one authorization configuration can be used to match any domain (domain match blank). "
    "Specify domain(s) to match or remove additional configuration."
)
PARAMETER_REQUIRED = "Challenge configuration parameter required: {name}"
TOO_MANY_DOMAINS = (
    "Certificates cannot include more than {limit} names. You will need to remove names "
    "or split your certificate into 2 or more managed certificates."
)
SNI_SPECIFIC_IP = (
    "Binding with SNI to a specific IP address is unusual. "
    "Confirm this binding or use the '*' (all unassigned) IP address."
)
UNKNOWN_WEBHOOK_TRIGGER = "Unknown webhook trigger '{trigger}'."
WEBHOOK_URL_INVALID = "The webhook URL must be a valid absolute URL."
WEBHOOK_METHOD_REQUIRED = "The webhook method must be set."
NO_CHALLENGE_CONFIG = "No challenge configuration is available to test."
WEB_SERVER_UNAVAILABLE = (
    "The http-01 challenge cannot be tested for this site because the local web server "
    "is not available."
)
INTERNAL_INCONSISTENCY = "Request could not be validated: inconsistent data in {stage} ({error})."


# ---------------------------------------------------------------------------
# Problem exceptions
# ---------------------------------------------------------------------------


class ValidationProblem(Exception):
    """A terminal result raised by a validation stage.

    Parameters
    ----------
    rule:
        Stable key of the rule that stopped validation.
    detail:
        Caller-facing message.

    """

    def __init__(self, rule: Rule, detail: str) -> None:
        self.rule = rule
        self.detail = detail
        super().__init__(detail)

    def to_outcome(self) -> ValidationOutcome:
        raise NotImplementedError


class RuleViolation(ValidationProblem):
    """The request is not issuable as-is."""

    def to_outcome(self) -> ValidationOutcome:
        return ValidationOutcome.violation(self.rule, self.detail)


class ConfirmationRequired(ValidationProblem):
    """The request is issuable only with explicit operator acknowledgement."""

    def to_outcome(self) -> ValidationOutcome:
        return ValidationOutcome.confirmation(self.rule, self.detail)
