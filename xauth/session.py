from __future__ import annotations

import requests

from .config import AUTH_TOKEN_COOKIE, CT0_COOKIE
from .exceptions import CredentialsMissingError
from .models import ResolvedCredentials
from .selection import build_cookie_header

COOKIE_DOMAIN = ".x.com"


def build_request_headers(credentials: ResolvedCredentials) -> dict[str, str]:
    """Headers an authenticated X web API call needs, minus the bearer token."""
    if not credentials.is_complete:
        raise CredentialsMissingError("Both auth_token and ct0 are required to build request headers")
    return {
        "cookie": credentials.cookie_header or build_cookie_header(str(credentials.auth_token), str(credentials.ct0)),
        "x-csrf-token": str(credentials.ct0),
        "x-twitter-auth-type": "OAuth2Session",
        "x-twitter-active-user": "yes",
    }


def build_session(
    credentials: ResolvedCredentials,
    session: requests.Session | None = None,
) -> requests.Session:
    headers = build_request_headers(credentials)
    session = session or requests.Session()
    # The cookie jar carries the tokens; an explicit Cookie header would shadow it.
    session.headers.update({k: v for k, v in headers.items() if k != "cookie"})
    session.cookies.set(AUTH_TOKEN_COOKIE, str(credentials.auth_token), domain=COOKIE_DOMAIN, path="/")
    session.cookies.set(CT0_COOKIE, str(credentials.ct0), domain=COOKIE_DOMAIN, path="/")
    return session
