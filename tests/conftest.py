"""Root conftest for the certreq test suite."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Make ``src/`` importable without installing the package
# ---------------------------------------------------------------------------
_SRC = str(Path(__file__).resolve().parent.parent / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

from certreq.core.types import ChallengeType  # noqa: E402
from certreq.models.request import (  # noqa: E402
    CertificateRequest,
    ChallengeConfig,
    DomainOption,
    RequestConfig,
)


# ---------------------------------------------------------------------------
# Request builder
# ---------------------------------------------------------------------------


def build_request(
    domains=("www.example.com",),
    *,
    primary: str | None = "__first__",
    name: str | None = "www.example.com",
    challenges: list[ChallengeConfig] | None = None,
    request_id: str | None = None,
    **config_fields,
) -> CertificateRequest:
    """Build a request that passes validation unless told otherwise.

    *domains* items are either domain strings (selected) or
    :class:`DomainOption` instances used as-is.  *primary* names the
    primary domain; the default marks the first domain, ``None`` marks
    none.
    """
    options = []
    for idx, item in enumerate(domains):
        if isinstance(item, DomainOption):
            options.append(item)
            continue
        is_primary = item == primary or (primary == "__first__" and idx == 0)
        options.append(DomainOption(domain=item, is_selected=True, is_primary_domain=is_primary))

    if challenges is None:
        challenges = [ChallengeConfig(challenge_type=ChallengeType.HTTP_01)]

    return CertificateRequest(
        id=request_id,
        name=name,
        domain_options=options,
        request_config=RequestConfig(challenges=challenges, **config_fields),
    )


@pytest.fixture()
def make_request():
    """Return the :func:`build_request` factory."""
    return build_request


@pytest.fixture(autouse=True)
def restore_certreq_logger():
    """Undo ``configure_logging`` so caplog keeps seeing ``certreq`` records."""
    logger = logging.getLogger("certreq")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


# ---------------------------------------------------------------------------
# ConfigKit singleton cleanup, autouse so every test gets a fresh slate
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def fresh_config():
    """Reset the CertreqConfig singleton before and after every test."""
    try:
        from certreq.config.certreq_config import CertreqConfig

        CertreqConfig.reset()
    except ImportError:
        pass
    yield
    try:
        from certreq.config.certreq_config import CertreqConfig

        CertreqConfig.reset()
    except ImportError:
        pass
