# portfolio_contact/core/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    api_title: str = Field(default="Portfolio Contact API", alias="API_TITLE")
    cors_origins: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")

    # Account that relays mail; messages are also delivered back to it
    email_user: Optional[str] = Field(default=None, alias="EMAIL_USER")
    # Gmail App Password (or the provider's equivalent)
    email_pass: Optional[str] = Field(default=None, alias="EMAIL_PASS")

    smtp_host: str = Field(default="smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(default=465, alias="SMTP_PORT")
    # None keeps smtplib's own default
    smtp_timeout: Optional[float] = Field(default=None, alias="SMTP_TIMEOUT")

    mail_from_label: str = Field(default="Portfolio Contact", alias="MAIL_FROM_LABEL")
    mail_escape_html: bool = Field(default=True, alias="MAIL_ESCAPE_HTML")

    # Prebuilt portfolio page; if unset only the API is served
    site_root: Optional[str] = Field(default=None, alias="SITE_ROOT")

settings = Settings()
