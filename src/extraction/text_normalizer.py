from __future__ import annotations

import re
from typing import List, Optional

# Checked in order; the first pattern with any match wins.
TIME_PATTERNS = [
    re.compile(r"\bat \d{1,2}(?::\d{2})?\s*(?:[aA][mM]|[pP][mM])\b"),
    re.compile(r"\b\d{1,2}(?::\d{2})?\s*(?:[aA][mM]|[pP][mM])\b"),
    re.compile(
        r"\b(?:this morning|this afternoon|tonight|today|tomorrow|this week|next week)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b", re.IGNORECASE),
]

_LEADING_PHRASE = re.compile(
    r"^(?:I need to|I have to|I should|I must|Remember to|Don['’]t forget to)\b\s*",
    re.IGNORECASE,
)
_LEADING_CONNECTOR = re.compile(r"^(?:and then|then|also|plus)\b[,\s]*", re.IGNORECASE)
_SENTENCE_END = re.compile(r"[.!?]+")
_HAS_WORD = re.compile(r"\w")


def extract_time_context(text: str) -> Optional[str]:
    """Return the first time phrase found in `text`, verbatim, or None."""
    for pattern in TIME_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def _strip_leading(pattern: re.Pattern, text: str) -> str:
    stripped = pattern.sub("", text, count=1).strip()
    # never strip down to nothing (e.g. the bare phrase "Remember to")
    if not _HAS_WORD.search(stripped):
        return text
    return stripped


def clean_task_text(text: str) -> str:
    """Turn a spoken fragment into a task line.

    Drops a leading "I need to"-style phrase and a leading connector such as
    "then", capitalizes the first letter and makes sure the text ends with
    terminal punctuation. Stripping repeats until nothing more comes off, so
    cleaning an already cleaned text changes nothing.
    """
    cleaned = text.strip()
    while True:
        before = cleaned
        cleaned = _strip_leading(_LEADING_PHRASE, cleaned)
        cleaned = _strip_leading(_LEADING_CONNECTOR, cleaned)
        if cleaned == before:
            break

    if cleaned:
        cleaned = cleaned[0].upper() + cleaned[1:]
    if not cleaned.endswith((".", "!", "?")):
        cleaned += "."
    return cleaned


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_END.split(text) if s.strip()]
