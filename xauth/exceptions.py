from __future__ import annotations


class XAuthError(Exception):
    """Base exception type for library consumers."""


class ConfigurationError(XAuthError):
    pass


class CredentialsMissingError(XAuthError):
    pass
