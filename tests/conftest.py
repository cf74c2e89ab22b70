"""Shared pytest fixtures for the AI Weekly Roundup test suite.

No network: Gemini is replaced by FakeGeminiClient and smtplib's SMTP
classes by FakeSMTP (see the fake_smtp fixture).
"""
import json
from types import SimpleNamespace

import pytest

from roundup.newsletter import email_sender
from roundup.newsletter.models import NewsItem
from roundup.shared.config import load_run_config


# ---------------------------------------------------------------------------
# Environment / config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def env():
    """All seven required variables, as the scheduler would provide them."""
    return {
        "GEMINI_API_KEY": "test-gemini-key",
        "SMTP_HOST": "smtp.example.com",
        "SMTP_PORT": "465",
        "SMTP_USER": "roundup@example.com",
        "SMTP_PASS": "app-password",
        "RECIPIENT_EMAILS": "alice@example.com, bob@example.com",
        "NEWSLETTER_PROMPT": "AI",
    }


@pytest.fixture
def run_config(env):
    return load_run_config(env)


@pytest.fixture
def starttls_config(env):
    return load_run_config({**env, "SMTP_PORT": "587"})


# ---------------------------------------------------------------------------
# News item fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def raw_items():
    """Seven items as Gemini returns them (plain dicts)."""
    return [
        {"headline": "Agents Go Mainstream", "summary": "Autonomous agents moved from demos into production workflows."},
        {"headline": "Small Models, Big Wins", "summary": "Compact open-weight models now match last year's frontier on many tasks."},
        {"headline": "Inference Costs Keep Falling", "summary": "Per-token prices dropped again as hardware and batching improved."},
        {"headline": "Multimodal by Default", "summary": "New releases accept text, images and audio in a single request."},
        {"headline": "Regulation Takes Shape", "summary": "Disclosure rules for AI-generated content are entering force."},
        {"headline": "Robotics Gets a Brain", "summary": "Foundation models are being adapted to control general-purpose robots."},
        {"headline": "Evaluations Under Scrutiny", "summary": "Benchmark contamination pushes labs toward private, rotating test sets."},
    ]


@pytest.fixture
def news_items(raw_items):
    return [NewsItem(**item) for item in raw_items]


@pytest.fixture
def gemini_json(raw_items):
    return json.dumps(raw_items, indent=2)


# ---------------------------------------------------------------------------
# Template fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def template_path(tmp_path):
    path = tmp_path / "template.html"
    path.write_text(
        "<html><body><table>{{NEWS_ITEMS_PLACEHOLDER}}</table></body></html>",
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeGeminiClient:
    """Stands in for google.genai.Client — records every generate_content call."""

    def __init__(self, text=None, error=None):
        self.calls = []
        self._text = text
        self._error = error
        self.models = SimpleNamespace(generate_content=self._generate_content)

    def _generate_content(self, model, contents, **kwargs):
        self.calls.append({"model": model, "contents": contents})
        if self._error is not None:
            raise self._error
        return SimpleNamespace(text=self._text)


class FakeSMTP:
    """Records the SMTP session instead of opening a socket."""

    instances: list = []
    implicit_tls = False
    login_error = None
    send_error = None

    def __init__(self, host, port, **kwargs):
        self.host = host
        self.port = port
        self.kwargs = kwargs
        self.started_tls = False
        self.logged_in = None
        self.sent = []
        self.closed = False
        type(self).instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def ehlo(self):
        return (250, b"ok")

    def has_extn(self, name):
        return name.lower() == "starttls"

    def starttls(self, context=None):
        self.started_tls = True

    def login(self, user, password):
        if self.login_error is not None:
            raise self.login_error
        self.logged_in = (user, password)

    def sendmail(self, from_addr, to_addrs, msg):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append({"from": from_addr, "to": to_addrs, "msg": msg})
        return {}

    def close(self):
        self.closed = True


@pytest.fixture
def fake_gemini():
    return FakeGeminiClient


@pytest.fixture
def fake_smtp(monkeypatch):
    """Patch smtplib.SMTP / SMTP_SSL as seen by email_sender.

    Returns the FakeSMTP class; sessions land in FakeSMTP.instances and
    FakeSMTP.implicit_tls is set to True by the SMTP_SSL stand-in.
    """

    class PlainSMTP(FakeSMTP):
        instances = []
        implicit_tls = False

    class SSLSMTP(PlainSMTP):
        implicit_tls = True

    monkeypatch.setattr(email_sender.smtplib, "SMTP", PlainSMTP)
    monkeypatch.setattr(email_sender.smtplib, "SMTP_SSL", SSLSMTP)
    return PlainSMTP
