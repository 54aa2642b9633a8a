"""Challenge configuration validator.

Runs after the primary domain is resolved.  Checks are applied in a
fixed order and the first failure raises :class:`RuleViolation`:

1. display name present
2. no internal hostnames among the selected domains
3. (normalization) default title replaced by the primary domain
4. wildcard domains require a dns-01 challenge
5. no unknown or deprecated challenge types
6. dns-01 challenges name a DNS provider
7. at most one challenge matches any domain
8. required challenge parameters are filled in
9. selected domain count within the CA limit
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from certreq.core.types import ChallengeType, Rule
from certreq.validation.errors import (
    DNS_PROVIDER_REQUIRED,
    DUPLICATE_MATCH_ANY,
    INTERNAL_HOSTNAME,
    LEGACY_CHALLENGE_EXISTING,
    LEGACY_CHALLENGE_NEW,
    NAME_REQUIRED,
    PARAMETER_REQUIRED,
    TOO_MANY_DOMAINS,
    UNKNOWN_CHALLENGE_TYPE,
    WILDCARD_REQUIRES_DNS,
    RuleViolation,
)

if TYPE_CHECKING:
    from certreq.config.settings import ValidationSettings
    from certreq.models.request import CertificateRequest, ChallengeConfig
    from certreq.validation.context import ValidationContext

log = logging.getLogger(__name__)

_KNOWN_CHALLENGE_TYPES = frozenset(t.value for t in ChallengeType)


def validate_challenges(request: CertificateRequest, context: ValidationContext) -> None:
    """Check the request's name, domains and challenge configuration."""
    settings = context.settings
    challenges = request.request_config.challenges
    selected = [d.domain for d in request.selected_domains]

    if not request.name:
        raise RuleViolation(Rule.NAME_REQUIRED, NAME_REQUIRED)

    _check_internal_hostnames(selected, settings)
    _apply_default_name(request, settings)
    _check_wildcard_coupling(selected, challenges, settings)
    _check_challenge_types(request, challenges)
    _check_dns_providers(challenges)
    _check_match_any(challenges)
    _check_parameters(challenges)

    if len(selected) > settings.max_domains:
        raise RuleViolation(
            Rule.TOO_MANY_DOMAINS,
            TOO_MANY_DOMAINS.format(limit=settings.max_domains),
        )


def is_internal_hostname(domain: str, settings: ValidationSettings) -> bool:
    """Return True for names a public CA will not issue for.

    A name without a label separator, or ending in one of the
    configured internal suffixes, is internal.
    """
    return "." not in domain or domain.lower().endswith(settings.internal_suffixes)


def _check_internal_hostnames(selected: list[str], settings: ValidationSettings) -> None:
    for domain in selected:
        if is_internal_hostname(domain, settings):
            log.debug("Internal hostname rejected: %s", domain)
            raise RuleViolation(Rule.INTERNAL_HOSTNAME, INTERNAL_HOSTNAME)


def _apply_default_name(request: CertificateRequest, settings: ValidationSettings) -> None:
    """Replace the placeholder title with the primary domain."""
    primary = request.primary_domain
    if request.name == settings.default_title and primary is not None:
        request.name = primary.domain


def _check_wildcard_coupling(
    selected: list[str],
    challenges: list[ChallengeConfig],
    settings: ValidationSettings,
) -> None:
    has_wildcard = any(d.startswith(settings.wildcard_prefix) for d in selected)
    has_dns = any(c.challenge_type == ChallengeType.DNS_01 for c in challenges)
    if has_wildcard and not has_dns:
        raise RuleViolation(Rule.WILDCARD_REQUIRES_DNS, WILDCARD_REQUIRES_DNS)


def _check_challenge_types(
    request: CertificateRequest,
    challenges: list[ChallengeConfig],
) -> None:
    for challenge in challenges:
        if challenge.challenge_type not in _KNOWN_CHALLENGE_TYPES:
            raise RuleViolation(
                Rule.UNKNOWN_CHALLENGE_TYPE,
                UNKNOWN_CHALLENGE_TYPE.format(challenge_type=challenge.challenge_type),
            )
    if any(c.challenge_type == ChallengeType.TLS_SNI_01 for c in challenges):
        message = LEGACY_CHALLENGE_NEW if request.is_new else LEGACY_CHALLENGE_EXISTING
        raise RuleViolation(Rule.LEGACY_CHALLENGE, message)


def _check_dns_providers(challenges: list[ChallengeConfig]) -> None:
    for challenge in challenges:
        if challenge.challenge_type == ChallengeType.DNS_01 and not challenge.challenge_provider:
            raise RuleViolation(Rule.DNS_PROVIDER_REQUIRED, DNS_PROVIDER_REQUIRED)


def _check_match_any(challenges: list[ChallengeConfig]) -> None:
    if sum(1 for c in challenges if c.matches_any_domain) > 1:
        raise RuleViolation(Rule.DUPLICATE_MATCH_ANY, DUPLICATE_MATCH_ANY)


def _check_parameters(challenges: list[ChallengeConfig]) -> None:
    for challenge in challenges:
        for param in challenge.parameters:
            if param.is_required and not param.value:
                raise RuleViolation(
                    Rule.PARAMETER_REQUIRED,
                    PARAMETER_REQUIRED.format(name=param.name),
                )
