"""Tests for certreq.validation.preflight."""

from __future__ import annotations

from certreq.core.types import ChallengeType, Rule
from certreq.models.request import ChallengeConfig, DomainOption
from certreq.validation import check_request_eligibility, check_test_eligibility


class TestRequestEligibility:
    def test_matches_pipeline(self, make_request):
        assert check_request_eligibility(make_request()).is_ready
        assert check_request_eligibility(make_request(name="")).rule is Rule.NAME_REQUIRED

    def test_confirmation_passed_through(self, make_request):
        request = make_request(perform_automated_binding=False, binding_ip_address="192.0.2.10")

        assert check_request_eligibility(request).needs_confirmation
        assert check_request_eligibility(request, confirmed=True).is_ready


class TestTestEligibility:
    def test_http_on_local_site_needs_web_server(self, make_request):
        request = make_request()
        request.server_site_id = "1"

        outcome = check_test_eligibility(request, web_server_available=False)

        assert outcome.rule is Rule.WEB_SERVER_UNAVAILABLE

    def test_http_on_local_site_with_web_server(self, make_request):
        request = make_request()
        request.server_site_id = "1"

        assert check_test_eligibility(request, web_server_available=True).is_ready

    def test_http_without_local_site(self, make_request):
        assert check_test_eligibility(make_request(), web_server_available=False).is_ready

    def test_dns_on_local_site_without_web_server(self, make_request):
        request = make_request(
            challenges=[
                ChallengeConfig(ChallengeType.DNS_01, challenge_provider="DNS01.Manual"),
            ],
        )
        request.server_site_id = "1"

        assert check_test_eligibility(request, web_server_available=False).is_ready

    def test_challenge_for_primary_domain_is_used(self, make_request):
        request = make_request(
            ["www.example.com", "api.example.com"],
            primary="api.example.com",
            challenges=[
                ChallengeConfig(ChallengeType.HTTP_01),
                ChallengeConfig(
                    ChallengeType.DNS_01,
                    domain_match="api.example.com",
                    challenge_provider="DNS01.Manual",
                ),
            ],
        )
        request.server_site_id = "1"

        assert check_test_eligibility(request, web_server_available=False).is_ready

    def test_no_challenges(self, make_request):
        outcome = check_test_eligibility(make_request(challenges=[]), web_server_available=True)
        assert outcome.rule is Rule.NO_CHALLENGE_CONFIG

    def test_validation_failure_returned_first(self, make_request):
        request = make_request([DomainOption("www.example.com")], challenges=[])

        outcome = check_test_eligibility(request, web_server_available=True)

        assert outcome.rule is Rule.NO_PRIMARY_DOMAIN
