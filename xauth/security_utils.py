from __future__ import annotations

from typing import Any

REDACTED = "***REDACTED***"

SENSITIVE_FIELDS = {"auth_token", "ct0", "cookie_header"}


def redact_credentials(payload: dict[str, Any]) -> dict[str, Any]:
    """Mask token values in a ``ResolvedCredentials.to_dict()`` payload; ``None`` stays ``None``."""
    redacted: dict[str, Any] = {}
    for k, v in payload.items():
        if k in SENSITIVE_FIELDS and v is not None:
            redacted[k] = REDACTED
        else:
            redacted[k] = v
    return redacted
