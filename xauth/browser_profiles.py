from __future__ import annotations

import json
import os
import platform
from pathlib import Path


def _platform_roots(home: str) -> dict[str, str]:
    system = platform.system().lower()
    if "darwin" in system:
        return {
            "chrome": f"{home}/Library/Application Support/Google/Chrome",
            "firefox": f"{home}/Library/Application Support/Firefox/Profiles",
        }
    if "windows" in system:
        local = os.path.expandvars(r"%LocalAppData%")
        roaming = os.path.expandvars(r"%AppData%")
        return {
            "chrome": f"{local}\\Google\\Chrome\\User Data",
            "firefox": f"{roaming}\\Mozilla\\Firefox\\Profiles",
        }
    return {
        "chrome": f"{home}/.config/google-chrome",
        "firefox": f"{home}/.mozilla/firefox",
    }


def default_user_data_dir(browser: str) -> str | None:
    """Return the Chrome user data root or the Firefox profiles root, if present."""
    path = _platform_roots(str(Path.home())).get(browser.lower())
    return path if path and Path(path).exists() else None


def safari_cookie_file() -> str | None:
    if "darwin" not in platform.system().lower():
        return None
    home = Path.home()
    candidates = [
        home / "Library/Containers/com.apple.Safari/Data/Library/Cookies/Cookies.binarycookies",
        home / "Library/Cookies/Cookies.binarycookies",
    ]
    for candidate in candidates:
        if candidate.exists():
            return str(candidate)
    return None


def list_profiles(user_data_dir: str) -> list[dict[str, str]]:
    """Chrome profiles recorded in ``Local State``, sorted by directory."""
    local_state = Path(user_data_dir) / "Local State"
    if not local_state.exists():
        raise FileNotFoundError(f"Local State not found in {user_data_dir}")

    info_cache = json.loads(local_state.read_text(encoding="utf-8")).get("profile", {}).get("info_cache", {})
    profiles = [
        {
            "profile_directory": str(directory),
            "name": str(details.get("name", "")),
            "email": str(details.get("user_name") or details.get("gaia_name") or ""),
        }
        for directory, details in info_cache.items()
    ]
    return sorted(profiles, key=lambda p: p["profile_directory"])


def list_firefox_profiles(profiles_dir: str) -> list[dict[str, str]]:
    root = Path(profiles_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Firefox profiles directory not found: {profiles_dir}")
    profiles: list[dict[str, str]] = []
    for entry in root.iterdir():
        if not (entry / "cookies.sqlite").exists():
            continue
        _, _, name = entry.name.partition(".")
        profiles.append({"profile_directory": entry.name, "name": name or entry.name})
    return sorted(profiles, key=lambda p: p["profile_directory"])


def resolve_profile(
    name_or_email: str,
    browser: str = "chrome",
    user_data_dir: str | None = None,
) -> tuple[str, str]:
    """Map a profile display name or account email to ``(user_data_dir, profile_directory)``.

    Raises ``RuntimeError`` when no data directory or matching profile exists.
    """
    data_dir = user_data_dir or default_user_data_dir(browser)
    if not data_dir:
        raise RuntimeError(f"Cannot auto-detect profile: no {browser} user data directory found")

    profiles = list_profiles(data_dir)
    needle = name_or_email.strip().lower()
    for p in profiles:
        if needle and needle in (p["name"].lower(), p["email"].lower()):
            return data_dir, p["profile_directory"]

    available = ", ".join(p["profile_directory"] for p in profiles) or "none"
    raise RuntimeError(f"No {browser} profile found for '{name_or_email}' (profiles: {available})")


def _looks_like_path(value: str) -> bool:
    return value.startswith("~") or "/" in value or "\\" in value


def _chrome_cookie_db(profile_dir: Path) -> str | None:
    # Chrome 96+ moved the database under Network/.
    for candidate in (profile_dir / "Network" / "Cookies", profile_dir / "Cookies"):
        if candidate.is_file():
            return str(candidate)
    return None


def chrome_cookie_file(profile: str, user_data_dir: str | None = None) -> str | None:
    """Map a Chrome profile selector to its cookie database.

    *profile* may be a cookie file path, a profile directory path, a profile
    directory name such as ``"Default"`` or ``"Profile 1"``, or a profile
    display name / account email.
    """
    if _looks_like_path(profile):
        candidate = Path(profile).expanduser()
        if candidate.is_file():
            return str(candidate)
        return _chrome_cookie_db(candidate) if candidate.is_dir() else None

    data_dir = user_data_dir or default_user_data_dir("chrome")
    if not data_dir:
        return None
    profile_dir = Path(data_dir) / profile
    if profile_dir.is_dir():
        return _chrome_cookie_db(profile_dir)
    try:
        _, directory = resolve_profile(profile, browser="chrome", user_data_dir=data_dir)
    except (FileNotFoundError, RuntimeError):
        return None
    return _chrome_cookie_db(Path(data_dir) / directory)


def firefox_cookie_file(profile: str, profiles_dir: str | None = None) -> str | None:
    """Map a Firefox profile selector to its ``cookies.sqlite``.

    *profile* may be a path, a full profile directory name such as
    ``"abc123.default-release"`` or just its suffix (``"default-release"``).
    """
    if _looks_like_path(profile):
        candidate = Path(profile).expanduser()
        if candidate.is_file():
            return str(candidate)
        db = candidate / "cookies.sqlite"
        return str(db) if db.is_file() else None

    root = profiles_dir or default_user_data_dir("firefox")
    if not root:
        return None
    try:
        profiles = list_firefox_profiles(root)
    except FileNotFoundError:
        return None
    for p in profiles:
        if p["profile_directory"] == profile:
            return str(Path(root) / p["profile_directory"] / "cookies.sqlite")
    for p in profiles:
        if p["name"] == profile:
            return str(Path(root) / p["profile_directory"] / "cookies.sqlite")
    return None
