# portfolio_contact/lib/contact_relay.py
import html
import logging
from dataclasses import dataclass
from email.utils import formataddr
from typing import Any, Dict, Mapping, Optional

from portfolio_contact.core.mail import MailConfig, MailTransport, OutgoingMessage

log = logging.getLogger("uvicorn.error")

FIELDS = ("name", "email", "message")

METHOD_NOT_ALLOWED = {"error": "Method not allowed"}
MISSING_FIELDS = {"error": "Missing name, email or message"}
SEND_FAILED = "Email could not be sent"


@dataclass(frozen=True)
class Submission:
    name: str
    email: str
    message: str


@dataclass(frozen=True)
class RelayOutcome:
    status_code: int
    body: Dict[str, Any]


def is_present(value: Any) -> bool:
    """A field counts only if it is a string with something besides whitespace."""
    return isinstance(value, str) and bool(value.strip())


def parse_submission(payload: Any) -> Optional[Submission]:
    if not isinstance(payload, Mapping):
        return None
    values = [payload.get(f) for f in FIELDS]
    if not all(is_present(v) for v in values):
        return None
    name, email, message = (v.strip() for v in values)
    return Submission(name=name, email=email, message=message)


def build_message(sub: Submission, config: MailConfig) -> OutgoingMessage:
    # escape_html=False reproduces the historical raw interpolation
    esc = html.escape if config.escape_html else (lambda s: s)
    account = config.sender_account or ""
    text = f"Name: {sub.name}\nEmail: {sub.email}\n\nMessage:\n{sub.message}\n"
    body = (
        f"<p><strong>Name:</strong> {esc(sub.name)}</p>\n"
        f"<p><strong>Email:</strong> {esc(sub.email)}</p>\n"
        f"<p><strong>Message:</strong></p>\n"
        f"<p>{esc(sub.message)}</p>"
    )
    return OutgoingMessage(
        from_header=formataddr((config.from_label, account)),
        reply_to=sub.email,
        to=account,
        subject=f"New message from {sub.name}",
        text=text,
        html=body,
    )


def relay_submission(sub: Submission, transport: MailTransport, config: MailConfig) -> RelayOutcome:
    """Verify the transport, send once, and map the result to a response.

    Verification failure is reported exactly like a send failure and
    skips the send. Nothing is retried.
    """
    try:
        transport.verify()
        info = transport.send(build_message(sub, config))
    except Exception as exc:
        log.error(f"[contact] email send error: {exc}")
        return RelayOutcome(500, {"error": SEND_FAILED, "details": str(exc)})
    log.info(f"[contact] email sent: {info}")
    return RelayOutcome(200, {"success": True, "info": info})
