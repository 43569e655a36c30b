# backend/portfolio_contact/dependencies.py
import logging

from portfolio_contact.core.mail import MailConfig, SmtpTransport, TransportFactory, mail_config_from_settings
from portfolio_contact.core.settings import settings

log = logging.getLogger("uvicorn.error")

if not settings.email_user or not settings.email_pass:
    log.warning("EMAIL_USER / EMAIL_PASS not set; contact submissions will fail until they are configured.")


def get_mail_config() -> MailConfig:
    """Read per request so each send sees the current settings object."""
    return mail_config_from_settings(settings)


def get_transport_factory() -> TransportFactory:
    # Tests override this through app.dependency_overrides
    return SmtpTransport
