from __future__ import annotations

import logging

from .config import BROWSER_DISPLAY_NAMES
from .models import ResolutionOutcome
from .providers import BrowserCookieProvider, CookieProvider, validate_browser
from .selection import select_credentials

logger = logging.getLogger(__name__)


def browser_source_label(browser: str, profile: str | None = None) -> str:
    display = BROWSER_DISPLAY_NAMES[browser]
    return f"{display} ({profile})" if profile else display


def extract_from_browser(
    browser: str,
    profile: str | None = None,
    provider: CookieProvider | None = None,
) -> ResolutionOutcome:
    """Read the X session cookies from a single browser.

    The outcome carries the provider's own warnings and, when the pair is
    incomplete, a hint that nothing usable was found in that browser.
    """
    key = validate_browser(browser)
    if key == "safari":
        profile = None
    provider = provider or BrowserCookieProvider()

    raw = provider.get_cookies([key], profile=profile)
    warnings = list(raw.warnings)
    credentials = select_credentials(raw.cookies, browser_source_label(key, profile))
    if not credentials.is_complete:
        display = BROWSER_DISPLAY_NAMES[key]
        logger.debug("No complete cookie pair in %s (%d records)", display, len(raw.cookies))
        warnings.append(
            f"No Twitter cookies found in {display}. Make sure you are logged into x.com in {display}."
        )
    return ResolutionOutcome(cookies=credentials, warnings=warnings)


def extract_cookies_from_safari(provider: CookieProvider | None = None) -> ResolutionOutcome:
    return extract_from_browser("safari", provider=provider)


def extract_cookies_from_chrome(
    profile: str | None = None,
    provider: CookieProvider | None = None,
) -> ResolutionOutcome:
    return extract_from_browser("chrome", profile=profile, provider=provider)


def extract_cookies_from_firefox(
    profile: str | None = None,
    provider: CookieProvider | None = None,
) -> ResolutionOutcome:
    return extract_from_browser("firefox", profile=profile, provider=provider)
