"""
Port interfaces - Protocol definitions and value types for the registration flow.

This module defines the values that move through a registration request
and the interface (port) the domain requires from the mail transport.
Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


@dataclass(frozen=True)
class RegistrationRequest:
    """
    Validated registration payload.

    All four fields are non-empty strings. They are opaque display
    values: no email or phone format checking is applied.
    """

    name: str
    email: str
    phone: str
    program: str


@dataclass(frozen=True)
class OutboundMessage:
    """Confirmation email ready for dispatch."""

    sender: str
    recipient: str
    subject: str
    body_html: str


class TransportErrorKind(str, Enum):
    """Classification of a failed send attempt."""

    AUTHENTICATION = "authentication"
    CONNECTION = "connection"
    RECIPIENT_REJECTED = "recipient_rejected"
    SENDER_REJECTED = "sender_rejected"
    TIMEOUT = "timeout"
    CONFIGURATION = "configuration"
    PROTOCOL = "protocol"


@dataclass(frozen=True)
class Accepted:
    """Transport accepted the message."""

    message_id: str
    transport_response: str


@dataclass(frozen=True)
class Failed:
    """Transport did not accept the message."""

    error_kind: TransportErrorKind
    detail: str


@dataclass(frozen=True)
class ValidationFailed:
    """Payload was missing at least one required field."""

    message: str


# Result of a single send attempt
SendOutcome = Accepted | Failed

# Result of a whole registration request
RegistrationOutcome = ValidationFailed | Accepted | Failed


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, message: OutboundMessage) -> SendOutcome:
        """
        Attempt delivery of a composed message.

        Exactly one attempt is made; implementations never retry.

        Args:
            message: Fully-formed outbound message

        Returns:
            Accepted with the transport message id, or Failed with an
            error classification and a human-readable detail
        """
        ...

    def verify(self) -> bool:
        """
        Probe connectivity and authentication against the transport.

        Diagnostic only; implementations log the result and never raise.

        Returns:
            True if the transport accepted the connection and credentials
        """
        ...
