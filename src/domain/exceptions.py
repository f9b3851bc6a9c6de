"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
validation and delivery failures without leaking framework details.
"""

from .ports import TransportErrorKind


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class MissingRequiredFields(RegistrationError):
    """One or more of name, email, phone, program is missing or empty."""

    pass


class TransportError(RegistrationError):
    """Mail transport rejected or failed to deliver a message."""

    def __init__(self, kind: TransportErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail


class ConfigurationError(TransportError):
    """Transport credentials are missing; surfaces only when a send or probe runs."""

    def __init__(self, detail: str) -> None:
        super().__init__(TransportErrorKind.CONFIGURATION, detail)
