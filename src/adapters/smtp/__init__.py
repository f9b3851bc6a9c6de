"""SMTP adapters - Outbound email implementations."""

from .smtp import OPPORTUNISTIC_TLS, SmtpEmailSender, TransportConfig

__all__ = ["OPPORTUNISTIC_TLS", "SmtpEmailSender", "TransportConfig"]
