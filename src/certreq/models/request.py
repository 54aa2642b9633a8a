"""Certificate request entities.

Unlike persisted entities these are plain mutable dataclasses: the
validation pipeline normalizes them in place (primary domain, binding
fields, webhook fields) and the caller persists the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from certreq.core.types import ChallengeType

if TYPE_CHECKING:
    from datetime import datetime


@dataclass
class DomainOption:
    domain: str
    is_selected: bool = False
    is_primary_domain: bool = False


@dataclass
class ChallengeParameter:
    name: str
    value: str | None = None
    is_required: bool = False


@dataclass
class ChallengeConfig:
    """How control of one or more domains is proven to the CA.

    ``challenge_type`` holds a raw string when the stored value is not a
    known :class:`ChallengeType`, so validation can reject it by name.
    """

    challenge_type: ChallengeType | str = ChallengeType.HTTP_01
    domain_match: str | None = None
    challenge_provider: str | None = None
    parameters: list[ChallengeParameter] = field(default_factory=list)

    @property
    def matches_any_domain(self) -> bool:
        return not self.domain_match


@dataclass
class RequestConfig:
    challenges: list[ChallengeConfig] = field(default_factory=list)

    # -- binding --
    perform_automated_binding: bool = True
    binding_ip_address: str | None = None
    binding_port: str | None = None
    binding_use_sni: bool | None = None

    # -- scripting (opaque paths, executed elsewhere) --
    pre_request_script: str | None = None
    post_request_script: str | None = None

    # -- webhook --
    webhook_trigger: str | None = None
    webhook_url: str | None = None
    webhook_method: str | None = None
    webhook_content_type: str | None = None
    webhook_content_body: str | None = None

    @property
    def uses_advanced_options(self) -> bool:
        """Whether scripting or webhooks are configured."""
        return bool(self.pre_request_script or self.post_request_script or self.webhook_url)


@dataclass
class CertificateRequest:
    name: str | None = None
    domain_options: list[DomainOption] = field(default_factory=list)
    request_config: RequestConfig = field(default_factory=RequestConfig)
    id: str | None = None
    date_last_renewal_attempt: datetime | None = None
    server_site_id: str | None = None

    @property
    def is_new(self) -> bool:
        return self.id is None

    @property
    def has_run(self) -> bool:
        """True for a saved request that has been attempted at least once."""
        return self.id is not None and self.date_last_renewal_attempt is not None

    @property
    def primary_domain(self) -> DomainOption | None:
        for option in self.domain_options:
            if option.is_primary_domain:
                return option
        return None

    @property
    def selected_domains(self) -> list[DomainOption]:
        return [d for d in self.domain_options if d.is_selected]
