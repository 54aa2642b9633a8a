"""Dict and file (de)serialization for certificate requests.

Request documents use the field names of the model classes, with a few
shorter keys for the nested lists::

    name: www.example.com
    domains:
      - {domain: www.example.com, selected: true, primary: true}
    request_config:
      challenges:
        - {type: dns-01, provider: DNS01.API.Route53}
      perform_automated_binding: true
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from certreq.core.types import ChallengeType
from certreq.models.request import (
    CertificateRequest,
    ChallengeConfig,
    ChallengeParameter,
    DomainOption,
    RequestConfig,
)

if TYPE_CHECKING:
    from certreq.models.outcome import ValidationOutcome

_CONFIG_STRING_FIELDS = (
    "binding_ip_address",
    "pre_request_script",
    "post_request_script",
    "webhook_trigger",
    "webhook_url",
    "webhook_method",
    "webhook_content_type",
    "webhook_content_body",
)


class RequestFormatError(ValueError):
    """Raised when a request document is structurally invalid."""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _require_mapping(value: Any, path: str) -> dict:  # noqa: ANN401
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{path}' must be a mapping, got {type(value).__name__}"
        raise RequestFormatError(msg)
    return value


def _require_list(value: Any, path: str) -> list:  # noqa: ANN401
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'{path}' must be a list, got {type(value).__name__}"
        raise RequestFormatError(msg)
    return value


def _optional_str(value: Any) -> str | None:  # noqa: ANN401
    return None if value is None else str(value)


def _parse_challenge_type(value: Any) -> ChallengeType | str:  # noqa: ANN401
    """Return the enum member, or the raw string for unknown types."""
    raw = str(value) if value is not None else ChallengeType.HTTP_01.value
    try:
        return ChallengeType(raw)
    except ValueError:
        return raw


def _parse_datetime(value: Any) -> datetime | None:  # noqa: ANN401
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        msg = f"'date_last_renewal_attempt' is not an ISO-8601 timestamp: {value!r}"
        raise RequestFormatError(msg) from exc


def _parse_challenge(data: Any, path: str) -> ChallengeConfig:  # noqa: ANN401
    d = _require_mapping(data, path)
    parameters = []
    for idx, item in enumerate(_require_list(d.get("parameters"), f"{path}.parameters")):
        p = _require_mapping(item, f"{path}.parameters[{idx}]")
        parameters.append(
            ChallengeParameter(
                name=str(p.get("name", "")),
                value=_optional_str(p.get("value")),
                is_required=bool(p.get("required", False)),
            ),
        )
    return ChallengeConfig(
        challenge_type=_parse_challenge_type(d.get("type")),
        domain_match=_optional_str(d.get("domain_match")),
        challenge_provider=_optional_str(d.get("provider")),
        parameters=parameters,
    )


def _parse_request_config(data: Any) -> RequestConfig:  # noqa: ANN401
    d = _require_mapping(data, "request_config")
    challenges = [
        _parse_challenge(item, f"request_config.challenges[{idx}]")
        for idx, item in enumerate(_require_list(d.get("challenges"), "request_config.challenges"))
    ]
    automated = d.get("perform_automated_binding")
    use_sni = d.get("binding_use_sni")
    config = RequestConfig(
        challenges=challenges,
        perform_automated_binding=True if automated is None else bool(automated),
        binding_port=_optional_str(d.get("binding_port")),
        binding_use_sni=None if use_sni is None else bool(use_sni),
    )
    for name in _CONFIG_STRING_FIELDS:
        setattr(config, name, _optional_str(d.get(name)))
    return config


def request_from_dict(data: dict) -> CertificateRequest:
    """Build a :class:`CertificateRequest` from a request document.

    Raises :class:`RequestFormatError` for structural problems.  Rule
    problems (unknown challenge types, missing names) are left for the
    validation pipeline to report.
    """
    d = _require_mapping(data, "request")
    if "domains" not in d:
        msg = "request document has no 'domains' list"
        raise RequestFormatError(msg)

    options = []
    for idx, item in enumerate(_require_list(d["domains"], "domains")):
        if isinstance(item, str):
            options.append(DomainOption(domain=item, is_selected=True))
            continue
        o = _require_mapping(item, f"domains[{idx}]")
        if "domain" not in o:
            msg = f"'domains[{idx}]' has no 'domain'"
            raise RequestFormatError(msg)
        if not isinstance(o["domain"], str):
            msg = f"'domains[{idx}].domain' must be a string"
            raise RequestFormatError(msg)
        options.append(
            DomainOption(
                domain=o["domain"],
                is_selected=bool(o.get("selected", False)),
                is_primary_domain=bool(o.get("primary", False)),
            ),
        )

    return CertificateRequest(
        id=_optional_str(d.get("id")),
        name=_optional_str(d.get("name")),
        domain_options=options,
        request_config=_parse_request_config(d.get("request_config")),
        date_last_renewal_attempt=_parse_datetime(d.get("date_last_renewal_attempt")),
        server_site_id=_optional_str(d.get("server_site_id")),
    )


def load_request(path: str | Path) -> CertificateRequest:
    """Read a YAML or JSON request document from *path*."""
    source = Path(path)
    with source.open(encoding="utf-8") as f:
        if source.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    return request_from_dict(data)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def request_to_dict(request: CertificateRequest) -> dict:
    """Serialize *request* to a document :func:`request_from_dict` accepts."""
    config = request.request_config
    result: dict[str, Any] = {
        "id": request.id,
        "name": request.name,
        "server_site_id": request.server_site_id,
        "date_last_renewal_attempt": (
            request.date_last_renewal_attempt.isoformat()
            if request.date_last_renewal_attempt
            else None
        ),
        "domains": [
            {"domain": o.domain, "selected": o.is_selected, "primary": o.is_primary_domain}
            for o in request.domain_options
        ],
    }
    request_config: dict[str, Any] = {
        "challenges": [
            {
                "type": str(c.challenge_type),
                "domain_match": c.domain_match,
                "provider": c.challenge_provider,
                "parameters": [
                    {"name": p.name, "value": p.value, "required": p.is_required}
                    for p in c.parameters
                ],
            }
            for c in config.challenges
        ],
        "perform_automated_binding": config.perform_automated_binding,
        "binding_port": config.binding_port,
        "binding_use_sni": config.binding_use_sni,
    }
    for name in _CONFIG_STRING_FIELDS:
        request_config[name] = getattr(config, name)
    result["request_config"] = request_config
    return result


def outcome_to_dict(outcome: ValidationOutcome) -> dict:
    """Serialize a :class:`ValidationOutcome`."""
    return {
        "status": outcome.status.value,
        "rule": outcome.rule.value if outcome.rule is not None else None,
        "message": outcome.message,
    }
