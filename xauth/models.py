from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CookieRecord:
    name: str
    value: str
    domain: str | None = None


@dataclass
class BrowserExtractionResult:
    cookies: list[CookieRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class ResolvedCredentials:
    auth_token: str | None = None
    ct0: str | None = None
    source: str | None = None
    cookie_header: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.auth_token and self.ct0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "auth_token": self.auth_token,
            "ct0": self.ct0,
            "source": self.source,
            "cookie_header": self.cookie_header,
        }


@dataclass
class ResolutionOutcome:
    cookies: ResolvedCredentials = field(default_factory=ResolvedCredentials)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"cookies": self.cookies.to_dict(), "warnings": list(self.warnings)}
