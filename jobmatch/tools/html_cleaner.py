"""HTML cleaning utility for job descriptions."""

from __future__ import annotations

import html
import re

from bs4 import BeautifulSoup


def clean_html(raw_html: str | None) -> str:
    """Strip HTML tags and normalize whitespace so descriptions can be scored.

    Greenhouse ships descriptions entity-escaped (``&lt;p&gt;``), so entities
    are unescaped once before parsing.
    """
    if not raw_html:
        return ""

    soup = BeautifulSoup(html.unescape(raw_html), "html.parser")

    # Remove script and style elements
    for element in soup(["script", "style"]):
        element.decompose()

    text = soup.get_text(separator=" ")

    # Normalize whitespace
    return re.sub(r"\s+", " ", text).strip()
