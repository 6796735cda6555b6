from __future__ import annotations

from .models import ResolutionOutcome


class CredentialHooks:
    """No-op callbacks; subclass and override the events you care about."""

    def on_resolve_start(self) -> None:
        pass

    def on_resolve_end(self, outcome: ResolutionOutcome) -> None:
        pass

    def on_extract_end(self, browser: str, outcome: ResolutionOutcome) -> None:
        pass
