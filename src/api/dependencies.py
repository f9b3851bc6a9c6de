"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request

from src.config.settings import Settings, get_settings
from src.domain.ports import EmailSender
from src.domain.registration import RegistrationService


def get_email_sender(request: Request) -> EmailSender:
    """
    Get email sender from app state.

    The sender is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.email_sender


def get_registration_service(
    email_sender: EmailSender = Depends(get_email_sender),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires the email sender and the configured sender identity together.
    """
    return RegistrationService(
        email_sender=email_sender,
        sender_address=settings.email_user or "",
        escape_html=settings.template_escape_html,
    )
