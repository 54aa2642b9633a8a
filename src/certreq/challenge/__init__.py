"""Challenge configuration helpers."""

from certreq.challenge.matching import domain_matches, get_challenge_config, parse_domain_match

__all__ = ["domain_matches", "get_challenge_config", "parse_domain_match"]
