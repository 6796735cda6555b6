"""xauth package."""

from .client import CredentialClient
from .config import ResolverOptions
from .exceptions import ConfigurationError, CredentialsMissingError, XAuthError
from .extract import (
    extract_cookies_from_chrome,
    extract_cookies_from_firefox,
    extract_cookies_from_safari,
    extract_from_browser,
)
from .models import BrowserExtractionResult, CookieRecord, ResolutionOutcome, ResolvedCredentials
from .providers import BrowserCookieProvider, CookieProvider
from .resolver import resolve_credentials
from .selection import normalize_value, pick_cookie_value
from .session import build_request_headers, build_session

__all__ = [
    "BrowserCookieProvider",
    "BrowserExtractionResult",
    "ConfigurationError",
    "CookieProvider",
    "CookieRecord",
    "CredentialClient",
    "CredentialsMissingError",
    "ResolutionOutcome",
    "ResolvedCredentials",
    "ResolverOptions",
    "XAuthError",
    "build_request_headers",
    "build_session",
    "extract_cookies_from_chrome",
    "extract_cookies_from_firefox",
    "extract_cookies_from_safari",
    "extract_from_browser",
    "normalize_value",
    "pick_cookie_value",
    "resolve_credentials",
]
