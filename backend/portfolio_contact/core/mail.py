# portfolio_contact/core/mail.py
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Any, Callable, Dict, Optional, Protocol

log = logging.getLogger("uvicorn.error")


class MailTransportError(RuntimeError):
    """Raised when the relay cannot be reached, refuses our login or rejects a message."""


@dataclass(frozen=True)
class MailConfig:
    sender_account: Optional[str]
    credential_secret: Optional[str]
    host: str = "smtp.gmail.com"
    port: int = 465
    from_label: str = "Portfolio Contact"
    timeout: Optional[float] = None
    escape_html: bool = True


def mail_config_from_settings(settings) -> MailConfig:
    return MailConfig(
        sender_account=settings.email_user,
        credential_secret=settings.email_pass,
        host=settings.smtp_host,
        port=settings.smtp_port,
        from_label=settings.mail_from_label,
        timeout=settings.smtp_timeout,
        escape_html=settings.mail_escape_html,
    )


@dataclass(frozen=True)
class OutgoingMessage:
    from_header: str
    reply_to: str
    to: str
    subject: str
    text: str
    html: str


class MailTransport(Protocol):
    def verify(self) -> None: ...

    def send(self, message: OutgoingMessage) -> Dict[str, Any]: ...

    def close(self) -> None: ...


TransportFactory = Callable[[MailConfig], MailTransport]


def _smtp_error_text(exc: Exception) -> str:
    if isinstance(exc, smtplib.SMTPResponseException):
        detail = exc.smtp_error
        if isinstance(detail, bytes):
            detail = detail.decode("utf-8", "replace")
        return f"{exc.smtp_code} {detail}"
    return str(exc) or exc.__class__.__name__


def to_mime(message: OutgoingMessage, sender_account: str) -> EmailMessage:
    """Render the message as multipart/alternative (plain text first, then HTML)."""
    mime = EmailMessage()
    mime["From"] = message.from_header
    mime["To"] = message.to
    mime["Reply-To"] = message.reply_to
    mime["Subject"] = message.subject
    domain = sender_account.rsplit("@", 1)[-1] if "@" in sender_account else None
    mime["Message-ID"] = make_msgid(domain=domain)
    mime.set_content(message.text)
    mime.add_alternative(message.html, subtype="html")
    return mime


class SmtpTransport:
    """One authenticated SMTP-over-TLS session.

    The connection is opened lazily by the first ``verify()`` or ``send()``
    and reused by the other, so a request costs a single login.
    """

    def __init__(self, config: MailConfig):
        self.config = config
        self._smtp: Optional[smtplib.SMTP_SSL] = None

    def __enter__(self) -> "SmtpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _connect(self) -> smtplib.SMTP_SSL:
        if self._smtp is not None:
            return self._smtp
        cfg = self.config
        if not cfg.sender_account or not cfg.credential_secret:
            raise MailTransportError("Missing credentials: set EMAIL_USER and EMAIL_PASS")

        kwargs: Dict[str, Any] = {}
        if cfg.timeout is not None:
            kwargs["timeout"] = cfg.timeout
        try:
            smtp = smtplib.SMTP_SSL(cfg.host, cfg.port, **kwargs)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailTransportError(
                f"Could not connect to {cfg.host}:{cfg.port}: {_smtp_error_text(exc)}"
            ) from exc

        try:
            smtp.login(cfg.sender_account, cfg.credential_secret)
        except smtplib.SMTPAuthenticationError as exc:
            smtp.close()
            raise MailTransportError(f"Invalid login: {_smtp_error_text(exc)}") from exc
        except (smtplib.SMTPException, OSError) as exc:
            smtp.close()
            raise MailTransportError(_smtp_error_text(exc)) from exc

        self._smtp = smtp
        return smtp

    def verify(self) -> None:
        smtp = self._connect()
        try:
            code, resp = smtp.noop()
        except (smtplib.SMTPException, OSError) as exc:
            raise MailTransportError(f"Connection check failed: {_smtp_error_text(exc)}") from exc
        if code != 250:
            text = resp.decode("utf-8", "replace") if isinstance(resp, bytes) else resp
            raise MailTransportError(f"Connection check failed: {code} {text}")
        log.info(f"[mail] transport verified for {self.config.host}:{self.config.port}")

    def send(self, message: OutgoingMessage) -> Dict[str, Any]:
        smtp = self._connect()
        sender = self.config.sender_account
        recipients = [message.to]
        try:
            mime = to_mime(message, sender)
        except ValueError as exc:
            # header values carrying CR/LF
            raise MailTransportError(f"Invalid message header: {exc}") from exc

        try:
            refused = smtp.send_message(mime, from_addr=sender, to_addrs=recipients)
        except smtplib.SMTPRecipientsRefused as exc:
            raise MailTransportError(
                f"All recipients were rejected: {', '.join(sorted(exc.recipients))}"
            ) from exc
        except (smtplib.SMTPException, OSError) as exc:
            raise MailTransportError(_smtp_error_text(exc)) from exc

        return {
            "message_id": mime["Message-ID"],
            "envelope": {"from": sender, "to": recipients},
            "accepted": [r for r in recipients if r not in refused],
            "rejected": sorted(refused),
        }

    def close(self) -> None:
        smtp, self._smtp = self._smtp, None
        if smtp is None:
            return
        try:
            smtp.quit()
        except (smtplib.SMTPException, OSError):
            smtp.close()
