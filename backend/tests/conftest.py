import os

import pytest

os.environ.setdefault("CORS_ORIGINS", "http://localhost")
os.environ.setdefault("EMAIL_USER", "owner@example.com")
os.environ.setdefault("EMAIL_PASS", "fake")

from portfolio_contact.core.mail import MailConfig
from portfolio_contact.dependencies import get_mail_config, get_transport_factory
from portfolio_contact.main import app

CONFIG = MailConfig(sender_account="owner@example.com", credential_secret="app-pass")

RECEIPT = {
    "message_id": "<abc123@example.com>",
    "envelope": {"from": "owner@example.com", "to": ["owner@example.com"]},
    "accepted": ["owner@example.com"],
    "rejected": [],
}


class FakeTransport:
    def __init__(self, config, verify_error=None, send_error=None):
        self.config = config
        self.verify_error = verify_error
        self.send_error = send_error
        self.verify_calls = 0
        self.sent = []
        self.closed = False

    def verify(self):
        self.verify_calls += 1
        if self.verify_error is not None:
            raise self.verify_error

    def send(self, message):
        self.sent.append(message)
        if self.send_error is not None:
            raise self.send_error
        return dict(RECEIPT)

    def close(self):
        self.closed = True


class FakeRelay:
    """Transport factory that records every transport it hands out."""

    def __init__(self):
        self.created = []
        self.verify_error = None
        self.send_error = None

    def __call__(self, config):
        transport = FakeTransport(config, self.verify_error, self.send_error)
        self.created.append(transport)
        return transport


@pytest.fixture
def relay():
    fake = FakeRelay()
    app.dependency_overrides[get_transport_factory] = lambda: fake
    app.dependency_overrides[get_mail_config] = lambda: CONFIG
    yield fake
    app.dependency_overrides.clear()
