"""Cookie selection and value normalization shared by every credential tier."""

from __future__ import annotations

from collections.abc import Iterable

from .config import AUTH_TOKEN_COOKIE, COOKIE_DOMAINS, CT0_COOKIE
from .models import CookieRecord, ResolvedCredentials


def normalize_value(value: str | None) -> str | None:
    """Trim *value*; blank or missing values become ``None``."""
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def pick_cookie_value(
    cookies: Iterable[CookieRecord],
    name: str,
    preferred_domains: Iterable[str] = COOKIE_DOMAINS,
) -> str | None:
    """Pick the raw value of the cookie called *name*.

    Domains are tried in *preferred_domains* order; when none of them
    matches, the first record carrying *name* wins. Returns ``None`` when
    no record has that name.
    """
    matches = [c for c in cookies if c.name == name]
    if not matches:
        return None
    for domain in preferred_domains:
        for cookie in matches:
            if cookie.domain == domain:
                return cookie.value
    return matches[0].value


def build_cookie_header(auth_token: str, ct0: str) -> str:
    return f"{AUTH_TOKEN_COOKIE}={auth_token}; {CT0_COOKIE}={ct0}"


def build_credentials(auth_token: str | None, ct0: str | None, source: str | None) -> ResolvedCredentials:
    """Normalize a candidate pair; only a complete pair keeps its source and header."""
    auth_token = normalize_value(auth_token)
    ct0 = normalize_value(ct0)
    if auth_token and ct0:
        return ResolvedCredentials(
            auth_token=auth_token,
            ct0=ct0,
            source=source,
            cookie_header=build_cookie_header(auth_token, ct0),
        )
    return ResolvedCredentials(auth_token=auth_token, ct0=ct0)


def select_credentials(cookies: Iterable[CookieRecord], source: str | None) -> ResolvedCredentials:
    records = list(cookies)
    return build_credentials(
        pick_cookie_value(records, AUTH_TOKEN_COOKIE),
        pick_cookie_value(records, CT0_COOKIE),
        source,
    )
