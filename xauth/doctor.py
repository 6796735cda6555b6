from __future__ import annotations

import platform
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .browser_profiles import chrome_cookie_file, default_user_data_dir, firefox_cookie_file, safari_cookie_file
from .resolver import default_browser_order


def _browser_cookie3_version() -> str | None:
    try:
        return version("browser-cookie3")
    except PackageNotFoundError:
        return None


def _default_chrome_cookie_file() -> str | None:
    return chrome_cookie_file("Default")


def _default_firefox_cookie_file() -> str | None:
    root = default_user_data_dir("firefox")
    if not root:
        return None
    for candidate in ("default-release", "default"):
        path = firefox_cookie_file(candidate, profiles_dir=root)
        if path:
            return path
    return None


def run_doctor(chrome_profile: str | None = None, firefox_profile: str | None = None) -> dict:
    report = {
        "platform": platform.system(),
        "default_order": default_browser_order(),
        "browser_cookie3_version": _browser_cookie3_version(),
        "browsers": {},
        "errors": [],
    }
    if not report["browser_cookie3_version"]:
        report["errors"].append("browser-cookie3 is not installed")

    lookups = {
        "safari": safari_cookie_file,
        "chrome": (lambda: chrome_cookie_file(chrome_profile)) if chrome_profile else _default_chrome_cookie_file,
        "firefox": (lambda: firefox_cookie_file(firefox_profile)) if firefox_profile else _default_firefox_cookie_file,
    }
    for browser, lookup in lookups.items():
        try:
            path = lookup()
        except Exception as exc:  # noqa: BLE001
            report["errors"].append(f"{browser} cookie store lookup failed: {exc}")
            path = None
        report["browsers"][browser] = {
            "cookie_file": path,
            "cookie_file_exists": bool(path and Path(path).exists()),
        }
        if browser in report["default_order"] and not report["browsers"][browser]["cookie_file_exists"]:
            report["errors"].append(f"{browser} cookie store not found")

    return report
