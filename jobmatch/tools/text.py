"""Text normalization helpers shared by every match scorer."""

from __future__ import annotations

import re

STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "to", "for", "of", "in", "on", "with", "at",
    "from", "by", "as", "is", "are", "be", "this", "that", "we", "you", "your",
    "our", "they", "their", "will", "can", "may", "able", "about", "into",
})

# Title synonym groups; the first phrase of each group is its canonical label.
# Lookup is first-match in table order.
TITLE_SYNONYMS: tuple[tuple[str, ...], ...] = (
    ("software engineer", "software developer", "swe", "developer"),
    ("frontend", "front-end", "ui", "react developer", "web developer"),
    ("backend", "back-end", "api", "node developer", "server developer"),
    ("fullstack", "full-stack", "mern"),
    ("devops", "site reliability", "sre", "platform engineer"),
    ("qa", "quality assurance", "test engineer", "automation engineer"),
)

_APOSTROPHES = re.compile(r"[’']")
_DISALLOWED = re.compile(r"[^a-z0-9+.#/\s-]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Lower-case text and reduce it to the characters skills are written with.

    ``+``, ``.``, ``#``, ``/`` and ``-`` survive so that "c++", "c#",
    "node.js" and "ci/cd" keep their shape.
    """
    if not text:
        return ""
    s = _APOSTROPHES.sub("'", str(text).lower())
    s = _DISALLOWED.sub(" ", s)
    return _WHITESPACE.sub(" ", s).strip()


def tokenize(text: str | None) -> set[str]:
    """Split normalized text into a set of non-stop-word tokens."""
    return {w for w in normalize_text(text).split(" ") if w and w not in STOP_WORDS}


def jaccard(a: set[str], b: set[str]) -> float:
    """Jaccard similarity; two empty sets score 0."""
    if not a and not b:
        return 0.0
    inter = len(a & b)
    union = len(a) + len(b) - inter
    return inter / union if union else 0.0


def map_title_to_group(title: str | None) -> str:
    """Return the canonical synonym-group label for a title, or ''."""
    t = normalize_text(title)
    for group in TITLE_SYNONYMS:
        for phrase in group:
            if phrase in t:
                return group[0]
    return ""
