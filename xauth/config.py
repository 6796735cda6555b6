from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

SUPPORTED_BROWSERS = ("safari", "chrome", "firefox")

BROWSER_DISPLAY_NAMES = {
    "safari": "Safari",
    "chrome": "Chrome",
    "firefox": "Firefox",
}

# Safari cookie access only works on macOS.
DARWIN_BROWSER_ORDER = ["safari", "chrome", "firefox"]
DEFAULT_BROWSER_ORDER = ["chrome", "firefox"]

COOKIE_DOMAINS = ("x.com", "twitter.com")
AUTH_TOKEN_COOKIE = "auth_token"
CT0_COOKIE = "ct0"

# (auth_token var, ct0 var), primary pair first.
ENV_CREDENTIAL_PAIRS = [
    ("AUTH_TOKEN", "CT0"),
    ("TWITTER_AUTH_TOKEN", "TWITTER_CT0"),
]

CLI_SOURCE = "CLI argument"

MISSING_AUTH_TOKEN_WARNING = (
    "Missing auth_token - provide via --auth-token, AUTH_TOKEN env var, "
    "or login to x.com in Safari/Chrome/Firefox"
)
MISSING_CT0_WARNING = (
    "Missing ct0 - provide via --ct0, CT0 env var, "
    "or login to x.com in Safari/Chrome/Firefox"
)


@dataclass(frozen=True)
class ResolverOptions:
    auth_token: str | None = None
    ct0: str | None = None
    cookie_source: str | Sequence[str] | None = None
    chrome_profile: str | None = None
    firefox_profile: str | None = None
    cookie_timeout_seconds: float | None = None
