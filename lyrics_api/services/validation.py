"""Input cleanup applied before free text reaches the database layer."""

from __future__ import annotations

import re

MAX_QUERY_LENGTH = 100

_UNSAFE_QUERY_CHARS = re.compile(r"[<>\"';]")
_EMAIL_SHAPE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def sanitize_query(value: str | None) -> str:
    """Trim, drop markup/quote characters and cap at 100 characters."""

    cleaned = _UNSAFE_QUERY_CHARS.sub("", (value or "").strip())
    return cleaned[:MAX_QUERY_LENGTH]


def is_valid_email(value: str) -> bool:
    """Loose ``local@domain.tld`` shape check, not full RFC 5322 validation."""

    return bool(_EMAIL_SHAPE.match(value))
