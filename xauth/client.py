from __future__ import annotations

import asyncio

import requests

from .browser_profiles import default_user_data_dir, list_firefox_profiles, list_profiles
from .config import ResolverOptions
from .doctor import run_doctor
from .exceptions import CredentialsMissingError
from .extract import extract_from_browser
from .hooks import CredentialHooks
from .models import ResolutionOutcome
from .providers import CookieProvider
from .resolver import resolve_credentials
from .session import build_request_headers, build_session


class CredentialClient:
    """Stable library API for programmatic access to xauth."""

    def __init__(self, provider: CookieProvider | None = None, hooks: CredentialHooks | None = None) -> None:
        self.provider = provider
        self.hooks = hooks

    def resolve(self, options: ResolverOptions | None = None) -> ResolutionOutcome:
        if self.hooks:
            self.hooks.on_resolve_start()
        outcome = resolve_credentials(options, provider=self.provider)
        if self.hooks:
            self.hooks.on_resolve_end(outcome)
        return outcome

    def extract(self, browser: str, profile: str | None = None) -> ResolutionOutcome:
        outcome = extract_from_browser(browser, profile=profile, provider=self.provider)
        if self.hooks:
            self.hooks.on_extract_end(browser, outcome)
        return outcome

    async def resolve_async(self, options: ResolverOptions | None = None) -> ResolutionOutcome:
        return await asyncio.to_thread(self.resolve, options)

    async def extract_async(self, browser: str, profile: str | None = None) -> ResolutionOutcome:
        return await asyncio.to_thread(self.extract, browser, profile)

    def request_headers(self, options: ResolverOptions | None = None) -> dict[str, str]:
        outcome = self.resolve(options)
        if not outcome.cookies.is_complete:
            raise CredentialsMissingError("; ".join(outcome.warnings))
        return build_request_headers(outcome.cookies)

    def session(self, options: ResolverOptions | None = None) -> requests.Session:
        outcome = self.resolve(options)
        if not outcome.cookies.is_complete:
            raise CredentialsMissingError("; ".join(outcome.warnings))
        return build_session(outcome.cookies)

    def profiles(self, browser: str = "chrome", user_data_dir: str | None = None) -> list[dict]:
        data_dir = user_data_dir or default_user_data_dir(browser)
        if not data_dir:
            raise RuntimeError(f"Could not determine the {browser} profile directory")
        if browser == "firefox":
            return list_firefox_profiles(data_dir)
        return list_profiles(data_dir)

    def doctor(self, chrome_profile: str | None = None, firefox_profile: str | None = None) -> dict:
        return run_doctor(chrome_profile, firefox_profile)
