"""Binding normalizer.

Automated binding owns IP/port/SNI selection, so explicit values are
cleared.  Manual binding defaults to SNI and asks for confirmation when
SNI is combined with one specific IP address.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from certreq.core.types import Rule
from certreq.validation.errors import SNI_SPECIFIC_IP, ConfirmationRequired

if TYPE_CHECKING:
    from certreq.models.request import CertificateRequest
    from certreq.validation.context import ValidationContext

log = logging.getLogger(__name__)

# All unassigned addresses.
ANY_IP = "*"


def normalize_binding(request: CertificateRequest, context: ValidationContext) -> None:
    """Normalize binding fields; raise :class:`ConfirmationRequired` for SNI on a fixed IP."""
    config = request.request_config

    if config.perform_automated_binding:
        config.binding_ip_address = None
        config.binding_port = None
        config.binding_use_sni = None
        return

    if config.binding_use_sni is None:
        config.binding_use_sni = True

    ip = config.binding_ip_address
    if config.binding_use_sni and ip and ip != ANY_IP:
        if context.confirmed:
            log.warning(
                "SNI binding to specific IP %s accepted by caller confirmation",
                ip,
            )
            return
        raise ConfirmationRequired(Rule.SNI_SPECIFIC_IP, SNI_SPECIFIC_IP)
