"""
trend_generator.py — Gemini trend generation for the AI Weekly Roundup.

Sends one request to Gemini asking for 5–7 current trends on the issue's
topic and turns the reply into a validated list of NewsItem.

No retries and no fallback content: the run either gets a real list or
aborts with GenerationError.

Requires:
    GEMINI_API_KEY (carried in RunConfig)
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from google import genai
from pydantic import ValidationError

from roundup.newsletter.models import NewsItem, NewsItemList
from roundup.shared.config import RunConfig
from roundup.shared.exceptions import GenerationError

log = logging.getLogger(__name__)

MIN_ITEMS = 5
MAX_ITEMS = 7

_OPEN_FENCE  = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_CLOSE_FENCE = re.compile(r"\n?```$")


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

def build_generation_prompt(topic: str) -> str:
    return (
        f'Based on the topic "{topic}", generate a list of {MIN_ITEMS} to {MAX_ITEMS} '
        f"important and current trends.\n"
        f"For each trend, provide a concise, engaging headline and a short summary "
        f"(1-2 sentences).\n"
        f"Return the result as a valid JSON array of objects, where each object has "
        f'exactly two keys: "headline" and "summary".'
    )


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def strip_code_fences(text: str) -> str:
    """Remove the ```json ... ``` wrapper Gemini sometimes puts around JSON."""
    raw = text.strip()
    raw = _OPEN_FENCE.sub("", raw, count=1)
    raw = _CLOSE_FENCE.sub("", raw, count=1)
    return raw.strip()


def parse_news_items(text: str) -> list[NewsItem]:
    """Parse a Gemini reply into NewsItems.

    Raises GenerationError if the text is not JSON, is not an array of
    {headline, summary} objects with string values, or is empty.
    """
    raw = strip_code_fences(text)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        log.debug(f"Raw response: {raw[:500]}")
        raise GenerationError(f"Gemini response is not valid JSON: {exc}") from exc

    try:
        items = NewsItemList.validate_python(data)
    except ValidationError as exc:
        raise GenerationError(
            f"Gemini response does not match the news item schema: {exc}"
        ) from exc

    if not items:
        raise GenerationError("Gemini returned an empty list of news items")

    if not MIN_ITEMS <= len(items) <= MAX_ITEMS:
        log.warning(
            f"Expected {MIN_ITEMS}–{MAX_ITEMS} news items, got {len(items)}. Continuing."
        )
    return items


# ---------------------------------------------------------------------------
# Gemini call
# ---------------------------------------------------------------------------

def generate_news_items(config: RunConfig, client: Optional[Any] = None) -> list[NewsItem]:
    """Single Gemini call returning this issue's news items.

    Args:
        config: Run configuration (API key, model, topic).
        client: A google.genai.Client, or any object with the same
                models.generate_content() method. Built from the API key
                when None.
    """
    if client is None:
        client = genai.Client(api_key=config.api_key)

    prompt = build_generation_prompt(config.topic_prompt)

    log.info(f"→ Generating content from Gemini ({config.model})...")
    try:
        response = client.models.generate_content(
            model=config.model,
            contents=prompt,
        )
        text = response.text
    except Exception as exc:
        raise GenerationError(f"Gemini request failed: {exc}") from exc

    if not text:
        raise GenerationError("Gemini returned an empty response")

    items = parse_news_items(text)
    log.info(f"   ✓ Generated {len(items)} news items")
    return items
