"""
email_sender.py — SMTP delivery for the AI Weekly Roundup.

Sends the rendered page as one HTML email to every address in
RECIPIENT_EMAILS, in a single SMTP session.

Transport:
    SMTP_PORT == "465"  → implicit TLS (smtplib.SMTP_SSL)
    any other port      → plain SMTP, upgraded with STARTTLS when the
                          server offers it

Gmail setup:
    1. Enable 2-Step Verification at myaccount.google.com
    2. Go to Security → App passwords
    3. Generate a password for "Mail"
    4. Use that 16-character password as SMTP_PASS
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from roundup.shared.config import RunConfig
from roundup.shared.exceptions import DispatchError

log = logging.getLogger(__name__)

FROM_NAME = "AI Weekly Roundup"
SUBJECT   = "Your AI Weekly Roundup!"


def build_message(html: str, config: RunConfig) -> MIMEMultipart:
    """multipart/alternative: short plain-text fallback + the full HTML page."""
    plain = (
        f"{FROM_NAME}\n\n"
        f"This issue covers: {config.topic_prompt}\n\n"
        f"Open this email in an HTML-capable client to read the full newsletter."
    )

    msg = MIMEMultipart("alternative")
    msg["Subject"] = SUBJECT
    msg["From"]    = f'"{FROM_NAME}" <{config.mail_user}>'
    msg["To"]      = config.recipient_field
    msg.attach(MIMEText(plain, "plain", "utf-8"))
    msg.attach(MIMEText(html,  "html",  "utf-8"))
    return msg


def _open_session(config: RunConfig) -> smtplib.SMTP:
    try:
        port = int(config.mail_port)
    except ValueError as exc:
        raise DispatchError(f"SMTP_PORT is not a port number: {config.mail_port!r}") from exc

    context = ssl.create_default_context()
    if config.implicit_tls:
        return smtplib.SMTP_SSL(config.mail_host, port, context=context)

    server = smtplib.SMTP(config.mail_host, port)
    try:
        server.ehlo()
        if server.has_extn("starttls"):
            server.starttls(context=context)
            server.ehlo()
    except (smtplib.SMTPException, OSError):
        server.close()
        raise
    return server


def send_newsletter(html: str, config: RunConfig) -> None:
    """Send the newsletter once, to all recipients.

    Raises DispatchError on any connection, authentication or send failure.
    Refused individual recipients are not tracked separately.
    """
    msg = build_message(html, config)
    mode = "implicit TLS" if config.implicit_tls else "STARTTLS if offered"

    log.info(
        f"→ Sending to {len(config.recipients)} recipient(s) via "
        f"{config.mail_host}:{config.mail_port} ({mode})..."
    )
    try:
        with _open_session(config) as server:
            server.login(config.mail_user, config.mail_password)
            server.sendmail(config.mail_user, list(config.recipients), msg.as_bytes())
    except smtplib.SMTPAuthenticationError as exc:
        raise DispatchError(
            "SMTP authentication failed. For Gmail, use an App Password, "
            "not your account password."
        ) from exc
    except (smtplib.SMTPException, OSError) as exc:
        raise DispatchError(f"Failed to send email: {exc}") from exc

    log.info(f"   ✓ Sent to: {', '.join(config.recipients)}")
