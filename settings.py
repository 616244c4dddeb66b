import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class MailSettings:
    host: str
    port: int
    user: str
    password: str
    recipient: str


@dataclass(frozen=True)
class Settings:
    """Startup configuration. ``mail`` is None when notifications are disabled."""

    port: int = 3000
    host: str = "0.0.0.0"
    orders_file: str = "orders.txt"
    mail_timeout: float = 15.0
    mail: Optional[MailSettings] = None


def load_mail_settings(env) -> Optional[MailSettings]:
    user = env.get("SMTP_USER", "")
    password = env.get("SMTP_PASS", "")
    if not user or not password:
        return None
    return MailSettings(
        host=env.get("SMTP_HOST") or "smtp.gmail.com",
        port=int(env.get("SMTP_PORT") or 587),
        user=user,
        password=password,
        recipient=env.get("EMAIL_TO") or user,
    )


def load_settings(env=None, dotenv=True) -> Settings:
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ
    return Settings(
        port=int(env.get("PORT") or 3000),
        host=env.get("HOST") or "0.0.0.0",
        orders_file=env.get("ORDERS_FILE") or "orders.txt",
        mail_timeout=float(env.get("MAIL_TIMEOUT") or 15),
        mail=load_mail_settings(env),
    )
