"""Tests for xauth.providers with a stand-in for browser_cookie3."""

from __future__ import annotations

import threading
from types import SimpleNamespace

import pytest

from xauth.config import ResolverOptions
from xauth.exceptions import ConfigurationError
from xauth.models import CookieRecord
from xauth.providers import BrowserCookieProvider, CookieProvider
from xauth.resolver import resolve_credentials


def _cookie(name, value, domain):
    return SimpleNamespace(name=name, value=value, domain=domain)


class FakeLoader:
    def __init__(self, cookies=None, error=None):
        self.cookies = cookies or []
        self.error = error
        self.calls = []

    def __call__(self, cookie_file=None, domain_name=""):
        self.calls.append({"cookie_file": cookie_file, "domain_name": domain_name})
        if self.error:
            raise self.error
        return [c for c in self.cookies if domain_name in c.domain]


def _install(monkeypatch, **loaders):
    fake = SimpleNamespace(
        safari=loaders.get("safari", FakeLoader()),
        chrome=loaders.get("chrome", FakeLoader()),
        firefox=loaders.get("firefox", FakeLoader()),
    )
    monkeypatch.setattr("xauth.providers.browser_cookie3", fake)
    return fake


def test_provider_satisfies_protocol():
    assert isinstance(BrowserCookieProvider(), CookieProvider)


def test_reads_target_cookies_for_each_domain(monkeypatch):
    chrome = FakeLoader([
        _cookie("auth_token", "x_auth", ".x.com"),
        _cookie("ct0", "x_ct0", ".x.com"),
        _cookie("guest_id", "ignored", ".x.com"),
        _cookie("auth_token", "tw_auth", ".twitter.com"),
    ])
    _install(monkeypatch, chrome=chrome)

    result = BrowserCookieProvider().get_cookies(["chrome"])

    assert [c["domain_name"] for c in chrome.calls] == ["x.com", "twitter.com"]
    assert result.cookies == [
        CookieRecord("auth_token", "x_auth", "x.com"),
        CookieRecord("ct0", "x_ct0", "x.com"),
        CookieRecord("auth_token", "tw_auth", "twitter.com"),
    ]
    assert result.warnings == []


def test_duplicate_records_are_dropped(monkeypatch):
    def unfiltered(cookie_file=None, domain_name=""):
        return [_cookie("ct0", "v", ".api.x.com")]

    _install(monkeypatch, firefox=unfiltered)

    result = BrowserCookieProvider().get_cookies(["firefox"])

    assert result.cookies == [CookieRecord("ct0", "v", "api.x.com")]


def test_library_errors_become_warnings(monkeypatch):
    _install(monkeypatch, safari=FakeLoader(error=PermissionError("Operation not permitted")))

    result = BrowserCookieProvider().get_cookies(["safari"])

    assert result.cookies == []
    assert result.warnings == ["Failed to read Safari cookies: Operation not permitted"]


def test_unknown_browser_raises(monkeypatch):
    _install(monkeypatch)

    with pytest.raises(ConfigurationError):
        BrowserCookieProvider().get_cookies(["lynx"])


def test_unknown_profile_is_a_warning(monkeypatch):
    chrome = FakeLoader()
    _install(monkeypatch, chrome=chrome)
    monkeypatch.setattr("xauth.providers.chrome_cookie_file", lambda profile: None)

    result = BrowserCookieProvider().get_cookies(["chrome"], profile="Nope")

    assert result.warnings == ["Chrome profile 'Nope' not found"]
    assert chrome.calls == []


def test_profile_resolves_to_cookie_file(monkeypatch):
    firefox = FakeLoader([_cookie("auth_token", "a", "x.com")])
    _install(monkeypatch, firefox=firefox)
    monkeypatch.setattr(
        "xauth.providers.firefox_cookie_file",
        lambda profile: f"/profiles/{profile}/cookies.sqlite",
    )

    result = BrowserCookieProvider().get_cookies(["firefox"], profile="abc.default-release")

    assert firefox.calls[0]["cookie_file"] == "/profiles/abc.default-release/cookies.sqlite"
    assert result.cookies[0].value == "a"


def test_timeout_becomes_warning(monkeypatch):
    release = threading.Event()

    def slow_loader(cookie_file=None, domain_name=""):
        release.wait(5)
        return []

    _install(monkeypatch, chrome=slow_loader)
    try:
        result = BrowserCookieProvider(timeout_seconds=0.05).get_cookies(["chrome"])
    finally:
        release.set()

    assert result.cookies == []
    assert result.warnings == ["Timed out reading Chrome cookies after 0.05s"]


def test_timeout_path_returns_cookies_when_fast(monkeypatch):
    _install(monkeypatch, chrome=FakeLoader([_cookie("ct0", "v", "x.com")]))

    result = BrowserCookieProvider(timeout_seconds=5).get_cookies(["chrome"])

    assert result.cookies == [CookieRecord("ct0", "v", "x.com")]


def test_substring_domain_matches_from_other_sites_are_dropped(monkeypatch):
    chrome = FakeLoader([
        _cookie("auth_token", "dropbox_secret", ".dropbox.com"),
        _cookie("auth_token", "netflix_secret", ".netflix.com"),
        _cookie("ct0", "guest_ct0", ".x.com"),
        _cookie("ct0", "box_ct0", "box.com"),
    ])
    _install(monkeypatch, chrome=chrome)

    result = BrowserCookieProvider().get_cookies(["chrome"])

    assert result.cookies == [CookieRecord("ct0", "guest_ct0", "x.com")]


def test_foreign_auth_token_does_not_stop_the_cascade(monkeypatch):
    for key in ("AUTH_TOKEN", "CT0", "TWITTER_AUTH_TOKEN", "TWITTER_CT0"):
        monkeypatch.delenv(key, raising=False)
    _install(
        monkeypatch,
        chrome=FakeLoader([
            _cookie("auth_token", "dropbox_secret", ".dropbox.com"),
            _cookie("ct0", "guest_ct0", ".x.com"),
        ]),
        firefox=FakeLoader([
            _cookie("auth_token", "firefox_auth", ".x.com"),
            _cookie("ct0", "firefox_ct0", ".x.com"),
        ]),
    )

    outcome = resolve_credentials(
        ResolverOptions(cookie_source=["chrome", "firefox"]),
        provider=BrowserCookieProvider(),
    )

    assert outcome.cookies.auth_token == "firefox_auth"
    assert outcome.cookies.ct0 == "firefox_ct0"
    assert "Firefox" in outcome.cookies.source


def test_corrupt_local_state_becomes_warning(monkeypatch, tmp_path):
    (tmp_path / "Local State").write_text("{not json", encoding="utf-8")
    chrome = FakeLoader()
    _install(monkeypatch, chrome=chrome)
    monkeypatch.setattr("xauth.browser_profiles.default_user_data_dir", lambda browser: str(tmp_path))

    result = BrowserCookieProvider().get_cookies(["chrome"], profile="Work")

    assert result.cookies == []
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith("Failed to read Chrome profile 'Work'")
    assert chrome.calls == []


def test_timed_out_read_runs_on_daemon_thread(monkeypatch):
    release = threading.Event()
    started = threading.Event()

    def slow_loader(cookie_file=None, domain_name=""):
        started.set()
        release.wait(5)
        return []

    _install(monkeypatch, firefox=slow_loader)
    try:
        result = BrowserCookieProvider(timeout_seconds=0.05).get_cookies(["firefox"])
        assert started.wait(1)
        workers = [t for t in threading.enumerate() if t.name == "xauth-firefox-cookies"]
        assert workers
        # Non-daemon workers are joined at interpreter exit and would block it.
        assert all(t.daemon for t in workers)
    finally:
        release.set()

    assert result.warnings == ["Timed out reading Firefox cookies after 0.05s"]


def test_loader_error_on_timeout_path_becomes_warning(monkeypatch):
    _install(monkeypatch, chrome=FakeLoader(error=OSError("database is locked")))

    result = BrowserCookieProvider(timeout_seconds=5).get_cookies(["chrome"])

    assert result.warnings == ["Failed to read Chrome cookies: database is locked"]
