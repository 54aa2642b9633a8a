"""Enumerated types for certreq.

All enums inherit from :class:`enum.StrEnum` so their ``.value`` is a
plain string that YAML/JSON round-trips naturally.
"""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Challenge types
# ---------------------------------------------------------------------------


class ChallengeType(StrEnum):
    HTTP_01 = "http-01"
    DNS_01 = "dns-01"
    TLS_ALPN_01 = "tls-alpn-01"
    # Deprecated by every public CA; kept so stored requests still parse.
    TLS_SNI_01 = "tls-sni-01"


# ---------------------------------------------------------------------------
# Webhooks
# ---------------------------------------------------------------------------


class WebhookTrigger(StrEnum):
    NONE = "none"
    ON_SUCCESS = "on-success"
    ON_ERROR = "on-error"
    ON_SUCCESS_OR_ERROR = "on-success-or-error"


# ---------------------------------------------------------------------------
# Validation outcome
# ---------------------------------------------------------------------------


class OutcomeStatus(StrEnum):
    READY = "ready"
    RULE_VIOLATION = "rule_violation"
    NEEDS_CONFIRMATION = "needs_confirmation"


class Rule(StrEnum):
    """Stable keys identifying which rule produced an outcome."""

    NO_PRIMARY_DOMAIN = "no_primary_domain"
    NAME_REQUIRED = "name_required"
    INTERNAL_HOSTNAME = "internal_hostname"
    WILDCARD_REQUIRES_DNS = "wildcard_requires_dns"
    UNKNOWN_CHALLENGE_TYPE = "unknown_challenge_type"
    LEGACY_CHALLENGE = "legacy_challenge"
    DNS_PROVIDER_REQUIRED = "dns_provider_required"
    DUPLICATE_MATCH_ANY = "duplicate_match_any"
    PARAMETER_REQUIRED = "parameter_required"
    TOO_MANY_DOMAINS = "too_many_domains"
    SNI_SPECIFIC_IP = "sni_specific_ip"
    UNKNOWN_WEBHOOK_TRIGGER = "unknown_webhook_trigger"
    WEBHOOK_URL_INVALID = "webhook_url_invalid"
    WEBHOOK_METHOD_REQUIRED = "webhook_method_required"
    NO_CHALLENGE_CONFIG = "no_challenge_config"
    WEB_SERVER_UNAVAILABLE = "web_server_unavailable"
    INTERNAL_INCONSISTENCY = "internal_inconsistency"
