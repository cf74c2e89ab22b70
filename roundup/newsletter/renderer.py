"""
renderer.py — HTML rendering for the AI Weekly Roundup.

Substitutes the generated news items into newsletter-template.html and
writes the result to frontend/index.html. The same document is the static
page and the email body.

Inline styles only: Gmail and Outlook strip <style> blocks entirely.
Output is a pure function of (template, items): no dates, no random IDs.
"""

from __future__ import annotations

import html
import logging
from pathlib import Path

from roundup.newsletter.models import NewsItem
from roundup.shared.exceptions import RenderError
from roundup.shared.utils import save_text

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

# Relative to the working directory the scheduler runs from
TEMPLATE_FILE = Path("newsletter-template.html")
OUTPUT_FILE   = Path("frontend") / "index.html"

PLACEHOLDER = "{{NEWS_ITEMS_PLACEHOLDER}}"

# ---------------------------------------------------------------------------
# Design constants
# ---------------------------------------------------------------------------

_SANS      = "font-family: Arial, sans-serif;"
_BLUE      = "#0d3d8a"   # lead story headline band
_INK       = "#333"      # secondary headline
_MID       = "#555"      # lead summary
_MUTED     = "#666"      # secondary summary
_RULE      = "#dddddd"   # lead summary border
_LEAD_IMG  = (
    "https://images.unsplash.com/photo-1677756119517-756a188d2d94"
    "?q=80&w=1470&auto=format&fit=crop"
)
_ICON_IMG  = "https://placehold.co/50x50/2563EB/FFFFFF?text=i&font=arial"

# Story-type markers on each fragment row
LEAD_MARKER      = 'data-story="lead"'
SECONDARY_MARKER = 'data-story="secondary"'


# ---------------------------------------------------------------------------
# Fragments
# ---------------------------------------------------------------------------

def _spacer(height: int) -> str:
    return (
        f'<tr><td style="font-size: 0; line-height: 0;" height="{height}">&nbsp;</td></tr>'
    )


def render_lead_story(item: NewsItem) -> str:
    """Hero image, headline on a blue band, summary in a bordered box."""
    headline = html.escape(item.headline, quote=False)
    summary  = html.escape(item.summary, quote=False)
    return (
        f"<tr {LEAD_MARKER}><td>"
        f'<img src="{_LEAD_IMG}" width="100%" '
        f'style="max-width: 100%; height: auto; display: block;" alt="Main Story">'
        f'<table border="0" cellpadding="0" cellspacing="0" width="100%">'
        f'<tr><td bgcolor="{_BLUE}" style="padding: 20px; color: #ffffff; {_SANS}">'
        f'<h2 style="margin: 0; font-size: 22px;">{headline}</h2>'
        f"</td></tr>"
        f'<tr><td style="padding: 20px; border: 1px solid {_RULE}; border-top: 0; '
        f'{_SANS} font-size: 15px; color: {_MID}; line-height: 1.6;">{summary}</td></tr>'
        f"</table>"
        f"</td></tr>"
        + _spacer(25)
    )


def render_secondary_story(item: NewsItem) -> str:
    """Round icon on the left, headline as a sub-heading and summary as body text."""
    headline = html.escape(item.headline, quote=False)
    summary  = html.escape(item.summary, quote=False)
    return (
        f"<tr {SECONDARY_MARKER}><td>"
        f'<table border="0" cellpadding="0" cellspacing="0" width="100%"><tr>'
        f'<td width="60" valign="top">'
        f'<img src="{_ICON_IMG}" width="50" height="50" style="border-radius: 50%;" alt="">'
        f"</td>"
        f'<td valign="top" style="padding-left: 15px; {_SANS}">'
        f'<h3 style="margin: 0 0 5px 0; font-size: 18px; color: {_INK};">{headline}</h3>'
        f'<p style="margin: 0; font-size: 14px; color: {_MUTED}; line-height: 1.5;">{summary}</p>'
        f"</td>"
        f"</tr></table>"
        f"</td></tr>"
        + _spacer(20)
    )


def render_news_html(items: list[NewsItem]) -> str:
    """First item as the lead story, the rest as secondary stories, in order."""
    return "".join(
        render_lead_story(item) if index == 0 else render_secondary_story(item)
        for index, item in enumerate(items)
    )


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

def load_template(path: Path = TEMPLATE_FILE) -> str:
    try:
        template = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise RenderError(f"Cannot read template {path}: {exc}") from exc

    if PLACEHOLDER not in template:
        raise RenderError(f"Template {path} has no {PLACEHOLDER} token")
    return template


def render_document(template: str, items: list[NewsItem]) -> str:
    # First occurrence only
    return template.replace(PLACEHOLDER, render_news_html(items), 1)


def write_document(document: str, path: Path = OUTPUT_FILE) -> Path:
    try:
        save_text(document, path, logger=log)
    except OSError as exc:
        raise RenderError(f"Cannot write {path}: {exc}") from exc
    return Path(path)


def build_page(
    items: list[NewsItem],
    template_path: Path = TEMPLATE_FILE,
    output_path: Path = OUTPUT_FILE,
) -> str:
    """Render items into the template, write the page and return the HTML.

    Raises RenderError if the template is missing or the page can't be written.
    """
    log.info(f"→ Reading template {Path(template_path).name}...")
    template = load_template(template_path)

    document = render_document(template, items)
    out_path = write_document(document, output_path)
    log.info(f"   ✓ Written to: {out_path}")
    return document
