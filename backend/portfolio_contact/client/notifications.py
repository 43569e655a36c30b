# portfolio_contact/client/notifications.py
import asyncio
from dataclasses import dataclass
from typing import Optional

SUCCESS = "success"
ERROR = "error"

DEFAULT_DURATION = 3.5  # seconds


@dataclass(frozen=True)
class Notification:
    kind: str
    message: str


class NotificationCenter:
    """Holds at most one notification and clears it after a fixed delay.

    Showing a new notification replaces the current one and restarts the
    timer. ``close()`` (or leaving the ``with`` block) cancels the pending
    timer so no callback fires after the owning form is gone.
    """

    def __init__(self, duration: float = DEFAULT_DURATION):
        self.duration = duration
        self.current: Optional[Notification] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._closed = False

    def __enter__(self) -> "NotificationCenter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def show(self, kind: str, message: str, duration: Optional[float] = None) -> Notification:
        if self._closed:
            raise RuntimeError("notification center is closed")
        if kind not in (SUCCESS, ERROR):
            raise ValueError(f"unknown notification kind: {kind!r}")

        self._cancel_timer()
        note = Notification(kind=kind, message=message)
        self.current = note
        delay = self.duration if duration is None else duration
        self._handle = asyncio.get_running_loop().call_later(delay, self._expire, note)
        return note

    def dismiss(self) -> None:
        self._cancel_timer()
        self.current = None

    def close(self) -> None:
        self._cancel_timer()
        self._closed = True

    def _expire(self, note: Notification) -> None:
        self._handle = None
        # a newer notification owns its own timer
        if self.current is note:
            self.current = None

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
