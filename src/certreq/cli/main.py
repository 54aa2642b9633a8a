"""certreq command-line entry point.

Usage::

    certreq validate request.yaml
    certreq validate request.yaml --confirm
    certreq validate request.yaml --test --web-server-available
    certreq -c config.yaml validate request.json
    certreq -c config.yaml --validate-only
    python -m certreq validate request.yaml

``validate`` prints the outcome and the normalized request as JSON and
exits 0 when the request is ready, 1 on a rule violation (or a request
that cannot be loaded) and 2 when confirmation is needed.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

log = logging.getLogger(__name__)

EXIT_READY = 0
EXIT_VIOLATION = 1
EXIT_NEEDS_CONFIRMATION = 2


def _get_version() -> str:
    from certreq import __version__

    return __version__


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="certreq",
        description="certreq: validate and normalize certificate requests",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        metavar="PATH",
        help="Path to the configuration file (YAML or JSON). Built-in defaults when omitted.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable debug output (full tracebacks, verbose logging).",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        default=False,
        help="Validate the configuration file and exit.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command")

    validate = subparsers.add_parser("validate", help="Validate a certificate request file")
    validate.add_argument("request_file", metavar="REQUEST", help="Request document (YAML or JSON)")
    validate.add_argument(
        "--confirm",
        action="store_true",
        default=False,
        help="Accept bindings that need operator confirmation.",
    )
    validate.add_argument(
        "--test",
        action="store_true",
        default=False,
        help="Check whether a test challenge may run instead of a real request.",
    )
    validate.add_argument(
        "--web-server-available",
        action="store_true",
        default=False,
        help="The local web server can answer http-01 test challenges.",
    )

    return parser


def _print_error(message: str) -> None:
    """Print a user-facing error to stderr."""
    print(f"certreq: error: {message}", file=sys.stderr)


def _load_settings(args):
    """Return the settings tree from ``--config`` or the built-in defaults."""
    from certreq.config.settings import DEFAULT_SETTINGS

    if args.config is None:
        if args.validate_only:
            _print_error("--validate-only requires --config")
            sys.exit(EXIT_VIOLATION)
        return DEFAULT_SETTINGS

    config_path = Path(args.config)
    if not config_path.is_file():
        _print_error(f"configuration file not found: {config_path}")
        sys.exit(EXIT_VIOLATION)

    try:
        from certreq.config import CertreqConfig, ConfigValidationError

        config = CertreqConfig(config_file=str(config_path), schema_file="bundled")
    except ConfigValidationError as exc:
        _print_error(str(exc))
        sys.exit(EXIT_VIOLATION)
    except Exception as exc:
        if args.debug:
            raise
        _print_error(f"failed to load configuration: {exc}")
        sys.exit(EXIT_VIOLATION)
    return config.settings


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.  Parses arguments, loads config, dispatches."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    settings = _load_settings(args)

    from certreq.logging import configure_logging

    configure_logging(settings.logging)

    if args.validate_only:
        print(json.dumps({"config": args.config, "valid": True}))
        sys.exit(EXIT_READY)

    if args.command == "validate":
        sys.exit(_run_validate(settings, args))

    parser.print_help(sys.stderr)
    sys.exit(EXIT_VIOLATION)


def _run_validate(settings, args) -> int:
    """Validate one request file and print the result.  Returns the exit code."""
    import yaml

    from certreq.models.serializers import load_request, outcome_to_dict, request_to_dict
    from certreq.validation import check_request_eligibility, check_test_eligibility

    try:
        request = load_request(args.request_file)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        # RequestFormatError and JSON decode errors are ValueErrors
        _print_error(f"cannot load request {args.request_file}: {exc}")
        return EXIT_VIOLATION

    if args.test:
        outcome = check_test_eligibility(
            request,
            web_server_available=args.web_server_available,
            confirmed=args.confirm,
            settings=settings.validation,
        )
    else:
        outcome = check_request_eligibility(
            request,
            confirmed=args.confirm,
            settings=settings.validation,
        )

    print(
        json.dumps(
            {"outcome": outcome_to_dict(outcome), "request": request_to_dict(request)},
            indent=2,
        ),
    )

    if outcome.is_ready:
        return EXIT_READY
    if outcome.needs_confirmation:
        return EXIT_NEEDS_CONFIRMATION
    return EXIT_VIOLATION
