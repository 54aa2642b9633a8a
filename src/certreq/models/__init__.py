"""Entity models for certreq.

Request entities are mutable dataclasses normalized in place by the
validation pipeline; :class:`ValidationOutcome` is frozen.
"""

from certreq.models.outcome import ValidationOutcome
from certreq.models.request import (
    CertificateRequest,
    ChallengeConfig,
    ChallengeParameter,
    DomainOption,
    RequestConfig,
)

__all__ = [
    "CertificateRequest",
    "ChallengeConfig",
    "ChallengeParameter",
    "DomainOption",
    "RequestConfig",
    "ValidationOutcome",
]
