from __future__ import annotations

import argparse
import json
import logging
from importlib.metadata import PackageNotFoundError, version

from .browser_profiles import default_user_data_dir, list_firefox_profiles, list_profiles
from .config import SUPPORTED_BROWSERS, ResolverOptions
from .doctor import run_doctor
from .extract import extract_from_browser
from .models import ResolutionOutcome
from .providers import BrowserCookieProvider
from .resolver import resolve_credentials
from .security_utils import redact_credentials


def _tool_version() -> str:
    try:
        return version("xauth-credentials")
    except PackageNotFoundError:
        return "0.0.0"


def _emit(payload: dict, output_format: str) -> None:
    if output_format == "ndjson":
        print(json.dumps(payload, separators=(",", ":")))
        return
    print(json.dumps(payload, indent=2))


def _outcome_payload(outcome: ResolutionOutcome, redact: bool) -> dict:
    payload = outcome.to_dict()
    if redact:
        payload["cookies"] = redact_credentials(payload["cookies"])
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xauth",
        description=(
            "Resolve X (Twitter) auth_token/ct0 credentials from arguments, "
            "environment variables or local browser cookie stores."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_tool_version()}")
    parser.add_argument("--format", choices=["json", "ndjson"], default="json")
    parser.add_argument("--verbose", action="store_true", help="Log each credential source tried")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve credentials through the full cascade")
    resolve_parser.add_argument("--auth-token", default=None)
    resolve_parser.add_argument("--ct0", default=None)
    resolve_parser.add_argument(
        "--cookie-source",
        action="append",
        default=None,
        choices=list(SUPPORTED_BROWSERS),
        help="Repeatable browser to read cookies from, in order (default: platform order)",
    )
    resolve_parser.add_argument("--chrome-profile", default=None)
    resolve_parser.add_argument("--firefox-profile", default=None)
    resolve_parser.add_argument("--cookie-timeout", type=float, default=None, help="Seconds per browser store")
    resolve_parser.add_argument("--redact-output", action="store_true")

    extract_parser = subparsers.add_parser("extract", help="Read credentials from a single browser")
    extract_parser.add_argument("--browser", required=True, choices=list(SUPPORTED_BROWSERS))
    extract_parser.add_argument("--profile", default=None)
    extract_parser.add_argument("--cookie-timeout", type=float, default=None)
    extract_parser.add_argument("--redact-output", action="store_true")

    profiles_parser = subparsers.add_parser("profile-list", help="List local browser profiles")
    profiles_parser.add_argument("--browser", default="chrome", choices=["chrome", "firefox"])
    profiles_parser.add_argument("--user-data-dir", default=None)

    doctor_parser = subparsers.add_parser("doctor", help="Check which browser cookie stores are readable")
    doctor_parser.add_argument("--chrome-profile", default=None)
    doctor_parser.add_argument("--firefox-profile", default=None)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "resolve":
        options = ResolverOptions(
            auth_token=args.auth_token,
            ct0=args.ct0,
            cookie_source=args.cookie_source,
            chrome_profile=args.chrome_profile,
            firefox_profile=args.firefox_profile,
            cookie_timeout_seconds=args.cookie_timeout,
        )
        outcome = resolve_credentials(options)
        _emit(_outcome_payload(outcome, args.redact_output), args.format)
        if not outcome.cookies.is_complete:
            raise SystemExit(1)
        return

    if args.command == "extract":
        provider = BrowserCookieProvider(timeout_seconds=args.cookie_timeout)
        outcome = extract_from_browser(args.browser, profile=args.profile, provider=provider)
        _emit(_outcome_payload(outcome, args.redact_output), args.format)
        if not outcome.cookies.is_complete:
            raise SystemExit(1)
        return

    if args.command == "profile-list":
        user_data_dir = args.user_data_dir or default_user_data_dir(args.browser)
        if not user_data_dir:
            raise RuntimeError("Could not determine user data dir. Pass --user-data-dir")
        if args.browser == "firefox":
            profiles = list_firefox_profiles(user_data_dir)
        else:
            profiles = list_profiles(user_data_dir)
        _emit({"browser": args.browser, "user_data_dir": user_data_dir, "profiles": profiles}, args.format)
        return

    if args.command == "doctor":
        report = run_doctor(args.chrome_profile, args.firefox_profile)
        _emit(report, args.format)
        return

    parser.error("Unknown command")


if __name__ == "__main__":
    main()
