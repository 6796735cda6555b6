"""Credential cascade: CLI arguments, then environment, then browser cookie stores."""

from __future__ import annotations

import logging
import os
import platform
from collections.abc import Callable, Sequence
from functools import partial

from .config import (
    CLI_SOURCE,
    DARWIN_BROWSER_ORDER,
    DEFAULT_BROWSER_ORDER,
    ENV_CREDENTIAL_PAIRS,
    MISSING_AUTH_TOKEN_WARNING,
    MISSING_CT0_WARNING,
    ResolverOptions,
)
from .extract import extract_from_browser
from .models import ResolutionOutcome, ResolvedCredentials
from .providers import BrowserCookieProvider, CookieProvider, validate_browser
from .selection import build_credentials

logger = logging.getLogger(__name__)

Attempt = Callable[[], ResolutionOutcome]


def default_browser_order() -> list[str]:
    if "darwin" in platform.system().lower():
        return list(DARWIN_BROWSER_ORDER)
    return list(DEFAULT_BROWSER_ORDER)


def resolve_browser_order(cookie_source: str | Sequence[str] | None) -> list[str]:
    """Expand ``cookie_source`` into the browsers to query, in order.

    Raises ``ConfigurationError`` for identifiers no provider understands.
    """
    if cookie_source is None:
        return default_browser_order()
    if isinstance(cookie_source, str):
        return [validate_browser(cookie_source)]
    return [validate_browser(browser) for browser in cookie_source]


def _cli_attempt(options: ResolverOptions) -> ResolutionOutcome:
    return ResolutionOutcome(cookies=build_credentials(options.auth_token, options.ct0, CLI_SOURCE))


def _env_attempt(auth_var: str, ct0_var: str) -> ResolutionOutcome:
    # A pair is only ever read together; halves never mix across pairs.
    credentials = build_credentials(os.getenv(auth_var), os.getenv(ct0_var), f"env {auth_var}")
    return ResolutionOutcome(cookies=credentials)


def _browser_attempt(browser: str, options: ResolverOptions, provider: CookieProvider) -> ResolutionOutcome:
    profiles = {"chrome": options.chrome_profile, "firefox": options.firefox_profile}
    return extract_from_browser(browser, profile=profiles.get(browser), provider=provider)


def build_attempts(
    options: ResolverOptions,
    browsers: Sequence[str],
    provider: CookieProvider,
) -> list[Attempt]:
    attempts: list[Attempt] = [partial(_cli_attempt, options)]
    attempts.extend(partial(_env_attempt, auth_var, ct0_var) for auth_var, ct0_var in ENV_CREDENTIAL_PAIRS)
    attempts.extend(partial(_browser_attempt, browser, options, provider) for browser in browsers)
    return attempts


def resolve_credentials(
    options: ResolverOptions | None = None,
    provider: CookieProvider | None = None,
) -> ResolutionOutcome:
    """Resolve ``auth_token``/``ct0`` from the first source holding both.

    Attempts run strictly in order and the first complete pair stops the
    cascade, so later browsers are never read. When nothing is complete the
    last candidate is returned with ``source=None`` and a warning for each
    missing value.
    """
    options = options or ResolverOptions()
    browsers = resolve_browser_order(options.cookie_source)
    provider = provider or BrowserCookieProvider(timeout_seconds=options.cookie_timeout_seconds)

    warnings: list[str] = []
    credentials = ResolvedCredentials()
    for attempt in build_attempts(options, browsers, provider):
        outcome = attempt()
        warnings.extend(outcome.warnings)
        credentials = outcome.cookies
        if credentials.is_complete:
            logger.info("Resolved X credentials from %s", credentials.source)
            return ResolutionOutcome(cookies=credentials, warnings=warnings)

    if not browsers:
        # Partial CLI or env values are never reported as the result.
        credentials = ResolvedCredentials()
    logger.debug("No complete credential pair after trying %s", ", ".join(browsers) or "no browsers")
    if credentials.auth_token is None:
        warnings.append(MISSING_AUTH_TOKEN_WARNING)
    if credentials.ct0 is None:
        warnings.append(MISSING_CT0_WARNING)
    return ResolutionOutcome(cookies=credentials, warnings=warnings)
