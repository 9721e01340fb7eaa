"""Command-line entry point for the Google OAuth redirect exchange check."""

import argparse
import logging
import sys
from pathlib import Path

from oauth_check.config import ConfigurationError, Settings, load_settings
from oauth_check.google.dto import CredentialSet
from oauth_check.prompt import InputProvider
from oauth_check.report import Reporter
from oauth_check.runner import CheckState, OAuthCheck

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="google-oauth-check",
        description="Verify a Google OAuth2 client by exchanging a real authorization code.",
    )
    p.add_argument("--env-file", type=Path, help="Read settings from this .env file")
    p.add_argument(
        "--url-only",
        action="store_true",
        help="Print the configuration and consent URL, then exit without prompting",
    )
    p.add_argument(
        "--verify-refresh",
        action="store_true",
        help="After a successful exchange, also prove the refresh token works",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run(
    settings: Settings,
    input_provider: InputProvider | None = None,
    reporter: Reporter | None = None,
    url_only: bool = False,
    verify_refresh: bool = False,
    **overrides,
) -> CheckState:
    """
    Run the check against the given settings.

    Args:
        settings: Loaded settings
        input_provider: Source of the pasted redirect URL (default: stdin)
        reporter: Console output
        url_only: Stop after printing the consent URL
        verify_refresh: Also run one refresh-token grant
        **overrides: oauth_client / people_service replacements

    Returns:
        Final state of the check
    """
    reporter = reporter or Reporter()

    try:
        credentials = CredentialSet.from_settings(settings)
    except ConfigurationError as e:
        logger.error(str(e))
        reporter.missing_config(e.missing)
        return CheckState.MISSING_CONFIG

    check = OAuthCheck(
        credentials,
        input_provider,
        reporter=reporter,
        verify_refresh=verify_refresh,
        **overrides,
    )
    if url_only:
        check.show_consent_url(url_only=True)
        return CheckState.DONE
    return check.run()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.env_file)
    configure_logging(settings, args.verbose)

    try:
        state = run(settings, url_only=args.url_only, verify_refresh=args.verify_refresh)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130

    logger.info(f"OAuth check finished: {state.value}")
    return 1 if state is CheckState.MISSING_CONFIG else 0


if __name__ == "__main__":
    sys.exit(main())
