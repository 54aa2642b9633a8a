"""Certificate request validation.

Public API::

    from certreq.validation import validate_request

    outcome = validate_request(request, confirmed=False)
"""

from certreq.validation.context import ValidationContext
from certreq.validation.errors import ConfirmationRequired, RuleViolation, ValidationProblem
from certreq.validation.pipeline import ValidationPipeline, validate_request
from certreq.validation.preflight import check_request_eligibility, check_test_eligibility

__all__ = [
    "ConfirmationRequired",
    "RuleViolation",
    "ValidationContext",
    "ValidationPipeline",
    "ValidationProblem",
    "check_request_eligibility",
    "check_test_eligibility",
    "validate_request",
]
