"""Domain selection resolver.

Decides which selected domain is the certificate's primary (subject)
domain, repairing the selection in place:

1. A domain still marked primary is re-selected if it was unchecked.
2. With no primary marked, the first selected domain is promoted.
3. Otherwise there is nothing to promote and validation stops.

Only the first primary mark counts; later marks are cleared so that
exactly one primary remains.  No domain is ever removed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from certreq.core.types import Rule
from certreq.validation.errors import NO_PRIMARY_DOMAIN, RuleViolation

if TYPE_CHECKING:
    from certreq.models.request import CertificateRequest, DomainOption
    from certreq.validation.context import ValidationContext

log = logging.getLogger(__name__)


def resolve_primary_domain(
    request: CertificateRequest,
    context: ValidationContext,  # noqa: ARG001
) -> DomainOption:
    """Ensure exactly one selected primary domain and return it.

    Raises :class:`RuleViolation` when no primary can be resolved.
    """
    primary = request.primary_domain

    if primary is not None:
        for option in request.domain_options:
            if option.is_primary_domain and option is not primary:
                log.debug("Clearing extra primary mark on %s", option.domain)
                option.is_primary_domain = False
        if not primary.is_selected:
            log.debug("Re-selecting primary domain %s", primary.domain)
            primary.is_selected = True
        return primary

    selected = request.selected_domains
    if not selected:
        raise RuleViolation(Rule.NO_PRIMARY_DOMAIN, NO_PRIMARY_DOMAIN)

    primary = selected[0]
    primary.is_primary_domain = True
    log.debug("Promoted %s to primary domain", primary.domain)
    return primary
