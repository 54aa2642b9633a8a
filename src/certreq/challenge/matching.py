"""Domain-match scoping for challenge configurations.

A challenge configuration's ``domain_match`` is a list of names or
``*.`` wildcard patterns separated by ``;`` or ``,``.  A blank value
applies to any domain not matched by another configuration.

Usage::

    challenge = get_challenge_config(request, "www.example.com")
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import dns.exception
import dns.name

if TYPE_CHECKING:
    from certreq.models.request import CertificateRequest, ChallengeConfig

_SEPARATOR_RE = re.compile(r"[;,]")


def parse_domain_match(value: str | None) -> tuple[str, ...]:
    """Split a domain-match string into lower-cased patterns."""
    if not value:
        return ()
    parts = (p.strip().lower() for p in _SEPARATOR_RE.split(value))
    return tuple(p for p in parts if p)


def _to_name(text: str) -> dns.name.Name | None:
    try:
        return dns.name.from_text(text)
    except dns.exception.DNSException:
        return None


def domain_matches(domain: str, pattern: str) -> bool:
    """Return True if *domain* is covered by *pattern*.

    A plain pattern matches the same name (case-insensitively).  A
    wildcard pattern matches names exactly one label below its base,
    as a wildcard certificate would.  Names dnspython cannot parse
    never match.
    """
    if not domain or not pattern:
        return False
    name = _to_name(domain)
    target = _to_name(pattern)
    if name is None or target is None:
        return False
    if name == target:
        return True
    if not target.is_wild():
        return False
    base = target.parent()
    return name.is_subdomain(base) and len(name.labels) == len(target.labels)


def get_challenge_config(
    request: CertificateRequest,
    domain: str | None = None,
) -> ChallengeConfig | None:
    """Return the challenge configuration that applies to *domain*.

    *domain* defaults to the primary domain.  Explicit matches win over
    the match-any configuration; with neither, the first configuration
    is used.  Returns ``None`` when no challenges are configured.
    """
    challenges = request.request_config.challenges
    if not challenges:
        return None

    if domain is None:
        primary = request.primary_domain
        domain = primary.domain if primary is not None else None

    if domain:
        for challenge in challenges:
            if any(domain_matches(domain, p) for p in parse_domain_match(challenge.domain_match)):
                return challenge

    for challenge in challenges:
        if challenge.matches_any_domain:
            return challenge

    return challenges[0]
