"""Data model for one generated newsletter issue."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter


class NewsItem(BaseModel):
    """One trend: a short headline and a 1–2 sentence summary.

    List position is display order; item 0 is rendered as the lead story.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    headline: StrictStr = Field(min_length=1)
    summary: StrictStr = Field(min_length=1)


NewsItemList = TypeAdapter(list[NewsItem])
