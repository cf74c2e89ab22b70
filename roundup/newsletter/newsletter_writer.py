#!/usr/bin/env python3
"""
newsletter_writer.py — AI Weekly Roundup

Runs one issue end to end: asks Gemini for 5–7 trends on NEWSLETTER_PROMPT,
renders them into newsletter-template.html, writes frontend/index.html and
emails the same page to RECIPIENT_EMAILS. Meant to be triggered by a
scheduler (cron, GitHub Actions); nothing is kept between runs.

Pipeline:
    config → Gemini (trend_generator) → HTML (renderer) → SMTP (email_sender)

Usage:
    ai-roundup                    # generate, write and send
    ai-roundup --dry-run          # generate and write, no email
    ai-roundup --output public/index.html --log-level DEBUG

Output (relative to the working directory):
    frontend/index.html

Requires:
    GEMINI_API_KEY, SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASS,
    RECIPIENT_EMAILS, NEWSLETTER_PROMPT (environment or .env in the working directory)

Exit status is 0 on success and 1 if any stage fails.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from roundup.newsletter.email_sender import send_newsletter
from roundup.newsletter.renderer import OUTPUT_FILE, TEMPLATE_FILE, build_page
from roundup.newsletter.trend_generator import generate_news_items
from roundup.shared.config import RunConfig, load_run_config
from roundup.shared.exceptions import NewsletterError
from roundup.shared.utils import setup_logging

log = logging.getLogger("roundup.run")


def run(
    config: RunConfig,
    template_path: Path = TEMPLATE_FILE,
    output_path: Path = OUTPUT_FILE,
    send: bool = True,
    client: Optional[Any] = None,
) -> str:
    """Generate, render, write and (optionally) send one issue.

    Returns the rendered HTML. Raises a NewsletterError subclass naming the
    stage that failed; nothing after a failed stage runs.
    """
    log.info(f'Received prompt: "{config.topic_prompt}"')

    items    = generate_news_items(config, client=client)
    document = build_page(items, template_path=template_path, output_path=output_path)

    if send:
        send_newsletter(document, config)
    else:
        log.info("(Dry-run: page written, email not sent.)")
    return document


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Generate and send the AI Weekly Roundup newsletter.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  # Generate, write frontend/index.html and email RECIPIENT_EMAILS
  ai-roundup

  # Write the page only (all environment variables are still required)
  ai-roundup --dry-run
        """,
    )
    p.add_argument(
        "--dry-run", action="store_true", default=False,
        help="Generate and write the page but do not send the email.",
    )
    p.add_argument(
        "--template", type=Path, default=TEMPLATE_FILE,
        help="HTML template containing {{NEWS_ITEMS_PLACEHOLDER}} "
             "(default: newsletter-template.html)",
    )
    p.add_argument(
        "--output", type=Path, default=OUTPUT_FILE,
        help="Where to write the rendered page (default: frontend/index.html)",
    )
    p.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level (default: INFO)",
    )
    p.add_argument(
        "--log-file", type=Path, default=None,
        help="Also write logs to this rotating file",
    )
    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)
    setup_logging("roundup", level=args.log_level, log_file=args.log_file)

    # Variables already set in the environment take precedence over .env
    load_dotenv(Path(".env"), override=False)

    log.info("Starting newsletter generation...")
    try:
        config = load_run_config()
        run(
            config,
            template_path=args.template,
            output_path=args.output,
            send=not args.dry_run,
        )
    except NewsletterError as exc:
        log.error(f"Newsletter run failed during {exc.stage}: {exc}")
        sys.exit(1)

    log.info("✓ Newsletter run complete")


if __name__ == "__main__":
    main()
