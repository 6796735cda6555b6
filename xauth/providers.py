"""Cookie providers: the only seam between credential resolution and browsers."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import browser_cookie3

from .browser_profiles import chrome_cookie_file, firefox_cookie_file
from .config import (
    AUTH_TOKEN_COOKIE,
    BROWSER_DISPLAY_NAMES,
    COOKIE_DOMAINS,
    CT0_COOKIE,
    SUPPORTED_BROWSERS,
)
from .exceptions import ConfigurationError
from .models import BrowserExtractionResult, CookieRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class CookieProvider(Protocol):
    """Reads raw cookie records from local browser stores.

    Implementations report unreadable or empty stores through
    ``BrowserExtractionResult.warnings`` and only raise for invalid
    browser identifiers.
    """

    def get_cookies(self, browsers: Sequence[str], profile: str | None = None) -> BrowserExtractionResult:
        ...


def validate_browser(browser: str) -> str:
    key = str(browser).lower().strip()
    if key not in SUPPORTED_BROWSERS:
        raise ConfigurationError(
            f"Unsupported cookie source '{browser}'. Available: {', '.join(SUPPORTED_BROWSERS)}"
        )
    return key


class BrowserCookieProvider:
    """``CookieProvider`` backed by ``browser_cookie3``."""

    def __init__(
        self,
        domains: Sequence[str] = COOKIE_DOMAINS,
        names: Sequence[str] = (AUTH_TOKEN_COOKIE, CT0_COOKIE),
        timeout_seconds: float | None = None,
    ) -> None:
        self.domains = list(domains)
        self.names = set(names)
        self.timeout_seconds = timeout_seconds

    def get_cookies(self, browsers: Sequence[str], profile: str | None = None) -> BrowserExtractionResult:
        result = BrowserExtractionResult()
        for browser in [validate_browser(b) for b in browsers]:
            cookies, warnings = self._read_browser(browser, profile)
            result.cookies.extend(cookies)
            result.warnings.extend(warnings)
        return result

    def _cookie_file(self, browser: str, profile: str | None) -> str | None:
        if not profile or browser == "safari":
            return None
        if browser == "chrome":
            return chrome_cookie_file(profile)
        return firefox_cookie_file(profile)

    def _matches_domain(self, domain: str | None) -> bool:
        # browser_cookie3 filters domain_name with a substring match.
        if not domain:
            return False
        return any(domain == d or domain.endswith(f".{d}") for d in self.domains)

    def _load(self, browser: str, cookie_file: str | None) -> list[CookieRecord]:
        loader = getattr(browser_cookie3, browser)
        records: list[CookieRecord] = []
        seen: set[tuple[str, str, str | None]] = set()
        for domain in self.domains:
            for cookie in loader(cookie_file=cookie_file, domain_name=domain):
                if cookie.name not in self.names or cookie.value is None:
                    continue
                cookie_domain = cookie.domain.lstrip(".") if cookie.domain else None
                if not self._matches_domain(cookie_domain):
                    continue
                record = CookieRecord(name=cookie.name, value=cookie.value, domain=cookie_domain)
                key = (record.name, record.value, record.domain)
                if key not in seen:
                    seen.add(key)
                    records.append(record)
        return records

    def _load_with_timeout(self, browser: str, cookie_file: str | None) -> list[CookieRecord] | None:
        """Like ``_load`` but returns ``None`` once ``timeout_seconds`` elapses."""
        # Daemon thread so a stuck store read cannot keep the interpreter alive.
        outcome: dict[str, object] = {}

        def run() -> None:
            try:
                outcome["records"] = self._load(browser, cookie_file)
            except Exception as exc:  # noqa: BLE001
                outcome["error"] = exc

        worker = threading.Thread(target=run, name=f"xauth-{browser}-cookies", daemon=True)
        worker.start()
        worker.join(self.timeout_seconds)
        if worker.is_alive():
            return None
        if "error" in outcome:
            raise outcome["error"]  # type: ignore[misc]
        return outcome["records"]  # type: ignore[return-value]

    def _read_browser(self, browser: str, profile: str | None) -> tuple[list[CookieRecord], list[str]]:
        display = BROWSER_DISPLAY_NAMES[browser]
        try:
            cookie_file = self._cookie_file(browser, profile)
        except Exception as exc:  # noqa: BLE001
            return [], [f"Failed to read {display} profile '{profile}': {exc}"]
        if profile and browser != "safari" and cookie_file is None:
            return [], [f"{display} profile '{profile}' not found"]

        logger.debug("Reading %s cookies (cookie_file=%s)", display, cookie_file or "default")
        try:
            if self.timeout_seconds is None:
                return self._load(browser, cookie_file), []
            records = self._load_with_timeout(browser, cookie_file)
        except Exception as exc:  # noqa: BLE001
            return [], [f"Failed to read {display} cookies: {exc}"]
        if records is None:
            return [], [f"Timed out reading {display} cookies after {self.timeout_seconds:g}s"]
        return records, []
