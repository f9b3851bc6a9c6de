"""
Registration domain service - Request handling state machine.

This module contains the core logic for handling a single registration
request: validation, confirmation message composition, and dispatch to
the mail transport.

Request State Machine
=====================

States:
- RECEIVED: Payload arrived from the HTTP layer
- VALIDATED: All four fields present and non-empty
- MESSAGE_COMPOSED: Confirmation email rendered
- SENT: Transport accepted the message
- VALIDATION_FAILED: At least one field missing or empty
- SEND_FAILED: Transport rejected or failed

Transitions:
    RECEIVED -> VALIDATED -> MESSAGE_COMPOSED -> SENT
    RECEIVED -> VALIDATION_FAILED
    MESSAGE_COMPOSED -> SEND_FAILED

Every path ends in exactly one outcome (ValidationFailed, Accepted or
Failed), which the API layer maps to an HTTP response. Failures are
terminal: nothing is retried or queued.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from email.utils import formataddr
from typing import Any

from .exceptions import MissingRequiredFields
from .ports import (
    EmailSender,
    OutboundMessage,
    RegistrationOutcome,
    RegistrationRequest,
    SendOutcome,
    ValidationFailed,
)
from .template import SENDER_NAME, SUBJECT, render_welcome

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone", "program")
ALL_FIELDS_REQUIRED = "All fields are required"


@dataclass
class RegistrationService:
    """
    Domain service for registration requests.

    Holds no per-request state, so one instance may serve concurrent
    requests.
    """

    email_sender: EmailSender
    sender_address: str
    escape_html: bool = False

    def register(self, payload: Mapping[str, Any]) -> RegistrationOutcome:
        """
        Handle one registration request end to end.

        Args:
            payload: Request body with name, email, phone, program

        Returns:
            ValidationFailed if a field is missing, otherwise the
            transport's Accepted or Failed outcome
        """
        logger.info("Received registration request")
        try:
            request = self.validate(payload)
        except MissingRequiredFields as exc:
            logger.info("Validation failed - missing required fields")
            return ValidationFailed(message=str(exc))

        logger.info("Validation passed, sending email to: %s", request.email)
        message = self.compose(request)
        return self.dispatch(message)

    def validate(self, payload: Mapping[str, Any]) -> RegistrationRequest:
        """
        Check that all four required fields are present and non-empty.

        Missing keys, None and empty strings count as absent. Values are
        otherwise accepted as-is.

        Raises:
            MissingRequiredFields: If any field is absent (no per-field detail)
        """
        values = [payload.get(field) for field in REQUIRED_FIELDS]
        if any(value is None or value == "" for value in values):
            raise MissingRequiredFields(ALL_FIELDS_REQUIRED)
        name, email, phone, program = values
        return RegistrationRequest(name=name, email=email, phone=phone, program=program)

    def compose(self, request: RegistrationRequest) -> OutboundMessage:
        """Render the confirmation email. Pure: same request, same message."""
        body_html = render_welcome(
            request.name,
            request.email,
            request.phone,
            request.program,
            escape=self.escape_html,
        )
        return OutboundMessage(
            sender=formataddr((SENDER_NAME, self.sender_address)),
            recipient=request.email,
            subject=SUBJECT,
            body_html=body_html,
        )

    def dispatch(self, message: OutboundMessage) -> SendOutcome:
        """Hand the message to the transport. Exactly one send per call."""
        return self.email_sender.send(message)
