"""Tests for certreq.validation.challenges: challenge configuration rules."""

from __future__ import annotations

import pytest

from certreq.config.settings import build_settings
from certreq.core.types import ChallengeType, Rule
from certreq.models.request import ChallengeConfig, ChallengeParameter, DomainOption
from certreq.validation.challenges import is_internal_hostname, validate_challenges
from certreq.validation.context import ValidationContext
from certreq.validation.errors import (
    LEGACY_CHALLENGE_EXISTING,
    LEGACY_CHALLENGE_NEW,
    RuleViolation,
)


def _dns(provider="DNS01.API.Route53", domain_match=None, parameters=None):
    return ChallengeConfig(
        challenge_type=ChallengeType.DNS_01,
        domain_match=domain_match,
        challenge_provider=provider,
        parameters=parameters or [],
    )


def _http(domain_match=None, parameters=None):
    return ChallengeConfig(
        challenge_type=ChallengeType.HTTP_01,
        domain_match=domain_match,
        parameters=parameters or [],
    )


def _violation(request, context=None):
    with pytest.raises(RuleViolation) as exc_info:
        validate_challenges(request, context or ValidationContext())
    return exc_info.value


class TestNameAndHostnames:
    def test_valid_request_passes(self, make_request):
        validate_challenges(make_request(), ValidationContext())

    @pytest.mark.parametrize("name", ["", None])
    def test_name_required(self, make_request, name):
        problem = _violation(make_request(name=name))
        assert problem.rule is Rule.NAME_REQUIRED

    @pytest.mark.parametrize("domain", ["intranet", "server.local", "SERVER.LOCAL"])
    def test_internal_hostname_rejected(self, make_request, domain):
        request = make_request(["www.example.com", domain])

        problem = _violation(request)

        assert problem.rule is Rule.INTERNAL_HOSTNAME
        assert "internal" in problem.detail

    def test_unselected_internal_hostname_ignored(self, make_request):
        request = make_request(["www.example.com", DomainOption("intranet")])
        validate_challenges(request, ValidationContext())

    def test_name_checked_before_hostnames(self, make_request):
        problem = _violation(make_request(["intranet"], name=""))
        assert problem.rule is Rule.NAME_REQUIRED

    def test_configured_internal_suffixes(self):
        settings = build_settings({"validation": {"internal_suffixes": [".corp", ".LAN"]}})
        assert is_internal_hostname("host.corp", settings.validation)
        assert is_internal_hostname("host.lan", settings.validation)
        assert not is_internal_hostname("host.local", settings.validation)


class TestDefaultName:
    def test_default_title_replaced_by_primary_domain(self, make_request):
        request = make_request(
            ["a.example.com", "b.example.com"],
            primary="b.example.com",
            name="New Managed Certificate",
        )

        validate_challenges(request, ValidationContext())

        assert request.name == "b.example.com"

    def test_custom_name_kept(self, make_request):
        request = make_request(name="My site")
        validate_challenges(request, ValidationContext())
        assert request.name == "My site"

    def test_substitution_happens_even_if_later_rule_fails(self, make_request):
        request = make_request(["*.example.com"], name="New Managed Certificate")

        _violation(request)

        assert request.name == "*.example.com"


class TestWildcards:
    def test_wildcard_without_dns_rejected(self, make_request):
        problem = _violation(make_request(["*.example.com"]))
        assert problem.rule is Rule.WILDCARD_REQUIRES_DNS
        assert "dns-01" in problem.detail

    def test_wildcard_with_dns_passes(self, make_request):
        request = make_request(["*.example.com"], challenges=[_dns()])
        validate_challenges(request, ValidationContext())

    def test_unselected_wildcard_ignored(self, make_request):
        request = make_request(["www.example.com", DomainOption("*.example.com")])
        validate_challenges(request, ValidationContext())


class TestChallengeTypes:
    def test_legacy_type_rejected_for_new_request(self, make_request):
        request = make_request(challenges=[ChallengeConfig(ChallengeType.TLS_SNI_01)])

        problem = _violation(request)

        assert problem.rule is Rule.LEGACY_CHALLENGE
        assert problem.detail == LEGACY_CHALLENGE_NEW

    def test_legacy_type_rejected_for_existing_request(self, make_request):
        request = make_request(
            challenges=[ChallengeConfig(ChallengeType.TLS_SNI_01)],
            request_id="abc-123",
        )

        problem = _violation(request)

        assert problem.rule is Rule.LEGACY_CHALLENGE
        assert problem.detail == LEGACY_CHALLENGE_EXISTING

    def test_unknown_type_fails_closed(self, make_request):
        request = make_request(challenges=[ChallengeConfig("http-02")])

        problem = _violation(request)

        assert problem.rule is Rule.UNKNOWN_CHALLENGE_TYPE
        assert "http-02" in problem.detail

    def test_raw_known_string_accepted(self, make_request):
        request = make_request(challenges=[ChallengeConfig("dns-01", challenge_provider="x")])
        validate_challenges(request, ValidationContext())

    def test_dns_without_provider_rejected(self, make_request):
        problem = _violation(make_request(challenges=[_dns(provider=None)]))
        assert problem.rule is Rule.DNS_PROVIDER_REQUIRED

    def test_legacy_checked_before_provider(self, make_request):
        request = make_request(
            challenges=[
                _dns(provider=None, domain_match="a.example.com"),
                ChallengeConfig(ChallengeType.TLS_SNI_01),
            ],
        )
        assert _violation(request).rule is Rule.LEGACY_CHALLENGE


class TestDomainMatch:
    def test_two_match_any_configs_rejected(self, make_request):
        problem = _violation(make_request(challenges=[_http(), _dns()]))
        assert problem.rule is Rule.DUPLICATE_MATCH_ANY

    def test_single_match_any_passes(self, make_request):
        request = make_request(challenges=[_http(), _dns(domain_match="*.example.com")])
        validate_challenges(request, ValidationContext())

    def test_empty_string_counts_as_match_any(self, make_request):
        problem = _violation(make_request(challenges=[_http(domain_match=""), _http()]))
        assert problem.rule is Rule.DUPLICATE_MATCH_ANY


class TestParameters:
    def test_missing_required_parameter_named(self, make_request):
        params = [
            ChallengeParameter("zoneid", "Z123", is_required=True),
            ChallengeParameter("apikey", "", is_required=True),
            ChallengeParameter("secret", None, is_required=True),
        ]
        problem = _violation(make_request(challenges=[_dns(parameters=params)]))

        assert problem.rule is Rule.PARAMETER_REQUIRED
        assert problem.detail.endswith("apikey")

    def test_optional_parameter_may_be_empty(self, make_request):
        params = [ChallengeParameter("propagationdelay", None, is_required=False)]
        validate_challenges(make_request(challenges=[_dns(parameters=params)]), ValidationContext())


class TestDomainCount:
    def _domains(self, count):
        return [f"host{i}.example.com" for i in range(count)]

    def test_exactly_100_passes(self, make_request):
        validate_challenges(make_request(self._domains(100)), ValidationContext())

    def test_101_rejected(self, make_request):
        problem = _violation(make_request(self._domains(101)))

        assert problem.rule is Rule.TOO_MANY_DOMAINS
        assert "100" in problem.detail

    def test_unselected_domains_not_counted(self, make_request):
        domains = [*self._domains(100), DomainOption("extra.example.com")]
        validate_challenges(make_request(domains), ValidationContext())

    def test_configured_limit(self, make_request):
        settings = build_settings({"validation": {"max_domains": 2}})
        context = ValidationContext(settings=settings.validation)

        problem = _violation(make_request(self._domains(3)), context)

        assert "2 names" in problem.detail
