"""
Domain layer - Pure registration logic with zero framework imports.

This package contains the request-handling logic for registrations and
the port interface for outbound email, keeping the HTTP framework and
the SMTP transport behind adapters.
"""

from .exceptions import (
    ConfigurationError,
    MissingRequiredFields,
    RegistrationError,
    TransportError,
)
from .ports import (
    Accepted,
    EmailSender,
    Failed,
    OutboundMessage,
    RegistrationOutcome,
    RegistrationRequest,
    SendOutcome,
    TransportErrorKind,
    ValidationFailed,
)
from .registration import RegistrationService

__all__ = [
    "Accepted",
    "ConfigurationError",
    "EmailSender",
    "Failed",
    "MissingRequiredFields",
    "OutboundMessage",
    "RegistrationError",
    "RegistrationOutcome",
    "RegistrationRequest",
    "RegistrationService",
    "SendOutcome",
    "TransportError",
    "TransportErrorKind",
    "ValidationFailed",
]
