# backend/tests/test_health.py
from fastapi.testclient import TestClient
from portfolio_contact.core.mail import MailTransportError
from portfolio_contact.main import app

client = TestClient(app)


def test_health():
    """Basic health endpoint returns status ok."""
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_health_mail_verifies_without_sending(relay):
    resp = client.get("/health/mail")

    assert resp.status_code == 200
    assert resp.json() == {
        "ok": True,
        "host": "smtp.gmail.com",
        "port": 465,
        "sender_configured": True,
    }
    transport = relay.created[0]
    assert transport.verify_calls == 1
    assert transport.sent == []
    assert transport.closed is True


def test_health_mail_reports_transport_failure(relay):
    relay.verify_error = MailTransportError("Invalid login: 535 bad credentials")

    resp = client.get("/health/mail")

    assert resp.status_code == 503
    assert resp.json() == {"ok": False, "error": "Invalid login: 535 bad credentials"}


def test_routes_listing_includes_contact():
    resp = client.get("/__routes")
    assert resp.status_code == 200
    contact_methods = set()
    for r in resp.json():
        if r["path"] == "/api/contact":
            contact_methods.update(r["methods"])
    assert {"POST", "GET", "DELETE"} <= contact_methods
    assert "/health/mail" in {r["path"] for r in resp.json()}
    listed = [(r["path"], tuple(r["methods"])) for r in resp.json()]
    assert len(listed) == len(set(listed))
