"""
SMTP email sender adapter - Implements EmailSender protocol.

This module provides the smtplib implementation of the domain's email
sender port. Each send opens its own SMTP session, so concurrent sends
share nothing but the read-only TransportConfig.

Session sequence per send:
    connect -> EHLO -> STARTTLS (if advertised) -> EHLO -> LOGIN
    -> MAIL FROM -> RCPT TO -> DATA -> QUIT

TLS is opportunistic (STARTTLS on the submission port), never implicit
TLS on port 465.
"""

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email import policy
from email.errors import MessageError
from email.message import EmailMessage
from email.utils import formatdate, make_msgid, parseaddr
from typing import Any

from src.domain.exceptions import ConfigurationError, TransportError
from src.domain.ports import (
    Accepted,
    Failed,
    OutboundMessage,
    SendOutcome,
    TransportErrorKind,
)

logger = logging.getLogger(__name__)

OPPORTUNISTIC_TLS = "opportunistic"

# Raised by the email header parser for addresses it cannot make sense of
# ("a@", "<", "a:b;c"), and by the policy for CR/LF in header values.
MALFORMED_MESSAGE_ERRORS = (ValueError, LookupError, AttributeError, MessageError)


@dataclass(frozen=True)
class TransportConfig:
    """
    Immutable SMTP transport configuration.

    Built once at startup and shared read-only by every request.
    A timeout of None leaves socket timeouts to the operating system.
    """

    host: str
    port: int = 587
    username: str | None = None
    password: str | None = None
    timeout: float | None = None
    use_tls: str = OPPORTUNISTIC_TLS


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Performs a single attempt per send; never retries.
    """

    def __init__(self, config: TransportConfig) -> None:
        """
        Initialize sender with transport configuration.

        Args:
            config: Immutable SMTP configuration
        """
        self._config = config

    @property
    def config(self) -> TransportConfig:
        return self._config

    def send(self, message: OutboundMessage) -> SendOutcome:
        """
        Deliver a message over a fresh SMTP session.

        Args:
            message: Fully-formed outbound message

        Returns:
            Accepted with the generated Message-ID and the server's reply
            to DATA, or Failed with the classified transport error
        """
        envelope_from = parseaddr(message.sender)[1] or (self._config.username or "")

        logger.info(
            "Attempting to send email from %s to %s", envelope_from, message.recipient
        )
        try:
            mime = self._build_mime(message, envelope_from)
            payload = mime.as_bytes(policy=policy.SMTP)
        except MALFORMED_MESSAGE_ERRORS as exc:
            return _failed(
                TransportError(TransportErrorKind.PROTOCOL, f"Invalid message: {exc!r}")
            )

        try:
            response = self._deliver(envelope_from, message.recipient, payload)
        except (smtplib.SMTPException, OSError, ValueError, TransportError) as exc:
            return _failed(_classify(exc))

        message_id = str(mime["Message-ID"])
        logger.info("Email sent successfully! Message ID: %s Response: %s", message_id, response)
        return Accepted(message_id=message_id, transport_response=response)

    def verify(self) -> bool:
        """
        Probe connectivity and authentication (connect, STARTTLS, LOGIN, QUIT).

        Diagnostic only. The outcome is logged and returned; nothing is raised.
        """
        try:
            with self._connect():
                pass
        except (smtplib.SMTPException, OSError, ValueError, TransportError) as exc:
            error = _classify(exc)
            logger.error("SMTP configuration error: %s", error.detail)
            return False

        logger.info("Server is ready to send emails")
        return True

    def _connect(self) -> smtplib.SMTP:
        """
        Open an authenticated session.

        Raises:
            ConfigurationError: If username or password is not configured
        """
        if not self._config.username or not self._config.password:
            raise ConfigurationError(
                "Missing SMTP credentials: EMAIL_USER and EMAIL_PASSWORD must be set"
            )

        kwargs: dict[str, Any] = {}
        if self._config.timeout is not None:
            kwargs["timeout"] = self._config.timeout

        smtp = smtplib.SMTP(self._config.host, self._config.port, **kwargs)
        try:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls(context=ssl.create_default_context())
                smtp.ehlo()
            smtp.login(self._config.username, self._config.password)
        except BaseException:
            smtp.close()
            raise
        return smtp

    def _deliver(self, envelope_from: str, recipient: str, payload: bytes) -> str:
        """Run MAIL/RCPT/DATA and return the server's final reply line."""
        with self._connect() as smtp:
            code, reply = smtp.mail(envelope_from)
            if code != 250:
                raise smtplib.SMTPSenderRefused(code, reply, envelope_from)

            code, reply = smtp.rcpt(recipient)
            if code not in (250, 251):
                raise smtplib.SMTPRecipientsRefused({recipient: (code, reply)})

            code, reply = smtp.data(payload)
            if code != 250:
                raise smtplib.SMTPDataError(code, reply)

        return f"{code} {_text(reply)}"

    def _build_mime(self, message: OutboundMessage, envelope_from: str) -> EmailMessage:
        domain = envelope_from.rpartition("@")[2] or "localhost"

        mime = EmailMessage()
        mime["From"] = message.sender
        mime["To"] = message.recipient
        mime["Subject"] = message.subject
        mime["Date"] = formatdate(localtime=True)
        mime["Message-ID"] = make_msgid(domain=domain)
        mime.set_content(message.body_html, subtype="html")
        return mime


def _failed(error: TransportError) -> Failed:
    logger.error("Error sending email (%s): %s", error.kind.value, error.detail)
    return Failed(error_kind=error.kind, detail=error.detail)


def _text(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _classify(exc: BaseException) -> TransportError:
    """Map an smtplib/socket exception onto a TransportError."""
    # Order matters: every SMTPException is an OSError, and TimeoutError is too
    if isinstance(exc, TransportError):
        return exc
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return TransportError(
            TransportErrorKind.AUTHENTICATION,
            f"Invalid login: {exc.smtp_code} {_text(exc.smtp_error)}",
        )
    if isinstance(exc, smtplib.SMTPRecipientsRefused):
        rejected = "; ".join(
            f"{address} ({code} {_text(reply)})"
            for address, (code, reply) in exc.recipients.items()
        )
        return TransportError(
            TransportErrorKind.RECIPIENT_REJECTED, f"Recipient rejected: {rejected}"
        )
    if isinstance(exc, smtplib.SMTPSenderRefused):
        return TransportError(
            TransportErrorKind.SENDER_REJECTED,
            f"Sender rejected: {exc.sender} ({exc.smtp_code} {_text(exc.smtp_error)})",
        )
    if isinstance(exc, smtplib.SMTPConnectError | smtplib.SMTPServerDisconnected):
        return TransportError(TransportErrorKind.CONNECTION, f"Connection failed: {exc}")
    if isinstance(exc, smtplib.SMTPResponseException):
        return TransportError(
            TransportErrorKind.PROTOCOL, f"{exc.smtp_code} {_text(exc.smtp_error)}"
        )
    if isinstance(exc, smtplib.SMTPException):
        return TransportError(TransportErrorKind.PROTOCOL, str(exc))
    if isinstance(exc, ValueError):
        return TransportError(TransportErrorKind.PROTOCOL, f"Invalid message: {exc}")
    if isinstance(exc, TimeoutError):
        return TransportError(TransportErrorKind.TIMEOUT, f"Connection timed out: {exc}")
    return TransportError(TransportErrorKind.CONNECTION, f"Connection failed: {exc}")
