"""
config.py — Run configuration for the AI Weekly Roundup.

Reads the seven required environment variables once, at startup, into an
immutable RunConfig that is passed explicitly to every stage:

    GEMINI_API_KEY     Gemini API key
    SMTP_HOST          SMTP server host
    SMTP_PORT          SMTP server port ("465" selects implicit TLS)
    SMTP_USER          SMTP username, also the From address
    SMTP_PASS          SMTP password (Gmail: a 16-char App Password)
    RECIPIENT_EMAILS   comma-separated recipient addresses
    NEWSLETTER_PROMPT  topic for this issue, e.g. "AI"

Optional:
    GEMINI_MODEL       model name (default: gemini-2.5-flash)

There are no defaults for the required values. Anything missing is fatal.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from roundup.shared.exceptions import ConfigError

REQUIRED_VARS = (
    "GEMINI_API_KEY",
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASS",
    "RECIPIENT_EMAILS",
    "NEWSLETTER_PROMPT",
)

DEFAULT_MODEL = "gemini-2.5-flash"

# Port text that selects implicit TLS. Compared literally, never parsed.
IMPLICIT_TLS_PORT = "465"


@dataclass(frozen=True)
class RunConfig:
    api_key: str = field(repr=False)
    mail_host: str
    mail_port: str
    mail_user: str
    mail_password: str = field(repr=False)
    recipients: tuple[str, ...]
    recipient_field: str
    topic_prompt: str
    model: str = DEFAULT_MODEL

    @property
    def implicit_tls(self) -> bool:
        return self.mail_port == IMPLICIT_TLS_PORT


def _split_recipients(raw: str) -> tuple[str, ...]:
    return tuple(r.strip() for r in raw.split(",") if r.strip())


def load_run_config(environ: Optional[Mapping[str, str]] = None) -> RunConfig:
    """Build a RunConfig from the environment.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Raises:
        ConfigError: listing every required variable that is absent or blank.
    """
    env = os.environ if environ is None else environ

    # Stripped only to decide presence; the stored values are kept verbatim
    values = {name: env.get(name) or "" for name in REQUIRED_VARS}
    recipients = _split_recipients(values["RECIPIENT_EMAILS"])

    missing = [name for name, value in values.items() if not value.strip()]
    if values["RECIPIENT_EMAILS"].strip() and not recipients:
        # e.g. RECIPIENT_EMAILS=" , "
        missing.append("RECIPIENT_EMAILS")
    if missing:
        raise ConfigError(missing)

    return RunConfig(
        api_key=values["GEMINI_API_KEY"],
        mail_host=values["SMTP_HOST"],
        mail_port=values["SMTP_PORT"],
        mail_user=values["SMTP_USER"],
        mail_password=values["SMTP_PASS"],
        recipients=recipients,
        recipient_field=values["RECIPIENT_EMAILS"],
        topic_prompt=values["NEWSLETTER_PROMPT"],
        model=(env.get("GEMINI_MODEL") or "").strip() or DEFAULT_MODEL,
    )
