# portfolio_contact/client/contact_form.py
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from portfolio_contact.client.notifications import ERROR, SUCCESS, NotificationCenter

log = logging.getLogger(__name__)

FIELDS = ("name", "email", "message")

SEND_LABEL = "Send"
SPINNER_LABEL = "spinner"  # stands in for the spinner element shown while sending

FILL_ALL_FIELDS = "Please fill all fields before sending."
MESSAGE_SENT = "Message sent successfully!"
SEND_FAILED = "Failed to send message."
NETWORK_FAILURE = "Internal server error. Try again later."


def error_message_from(body: Any) -> str:
    """Prefer the server's ``error``, then ``details``, then a generic message."""
    if isinstance(body, dict):
        for key in ("error", "details"):
            if body.get(key):
                return str(body[key])
    return SEND_FAILED


class ContactForm:
    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: str = "/api/contact",
        notifications: Optional[NotificationCenter] = None,
    ):
        self.client = client
        self.endpoint = endpoint
        self.notifications = notifications if notifications is not None else NotificationCenter()
        self.fields: Dict[str, Any] = {f: "" for f in FIELDS}
        self.sending = False

    def __enter__(self) -> "ContactForm":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def inputs_disabled(self) -> bool:
        return self.sending

    @property
    def submit_label(self) -> str:
        return SPINNER_LABEL if self.sending else SEND_LABEL

    def fill(self, **values: Any) -> None:
        unknown = set(values) - set(FIELDS)
        if unknown:
            raise ValueError(f"unknown form fields: {sorted(unknown)}")
        self.fields.update(values)

    def reset(self) -> None:
        self.fields = {f: "" for f in FIELDS}

    async def submit(self, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Validate, POST as JSON, and report the outcome as a notification.

        Never raises for request or server failures; ``sending`` is back to
        False when this returns.
        """
        if self.sending:
            log.info("[form] submit ignored; a submission is already in flight")
            return
        if fields is not None:
            self.fill(**fields)

        payload = {f: self.fields.get(f) for f in FIELDS}
        if not all(payload.values()):
            self._notify(ERROR, FILL_ALL_FIELDS)
            return

        self.sending = True
        try:
            resp = await self.client.post(self.endpoint, json=payload)
            try:
                body = resp.json()
            except ValueError:
                body = {}

            if resp.is_success:
                self._notify(SUCCESS, MESSAGE_SENT)
                self.reset()
            else:
                self._notify(ERROR, error_message_from(body))
        except httpx.HTTPError as exc:
            log.warning(f"[form] contact submit error: {exc}")
            self._notify(ERROR, NETWORK_FAILURE)
        finally:
            self.sending = False

    def _notify(self, kind: str, message: str) -> None:
        # the form may have been torn down while the request was in flight
        if self.notifications.closed:
            log.info(f"[form] form closed; dropping {kind} notification: {message}")
            return
        self.notifications.show(kind, message)

    def close(self) -> None:
        self.notifications.close()
