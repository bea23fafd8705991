"""Message Sanitizer — all-or-nothing redaction of user-facing error text.

Invariants:
    - Matching is case-insensitive
    - Any marker hit discards the WHOLE message (no partial redaction)
    - sanitize() is idempotent: the fallback itself contains no marker
    - Text without a marker passes through unchanged

Design Decisions:
    - Markers kept as data (SENSITIVE_MARKERS): adding one never touches call sites
    - "auth" matches on word boundaries only, so "Authentication error: ..." survives;
      every other marker is a plain substring ("credentials", "client_secret", "Token")
"""

import re
from enum import Enum
from typing import NamedTuple

SANITIZED_FALLBACK = "An error occurred while processing the request"


class MatchRule(str, Enum):
    WORD = "word"
    SUBSTRING = "substring"


class SensitiveMarker(NamedTuple):
    marker: str
    rule: MatchRule


SENSITIVE_MARKERS: tuple[SensitiveMarker, ...] = (
    SensitiveMarker("password", MatchRule.SUBSTRING),
    SensitiveMarker("token", MatchRule.SUBSTRING),
    SensitiveMarker("secret", MatchRule.SUBSTRING),
    SensitiveMarker("credential", MatchRule.SUBSTRING),
    SensitiveMarker("api_key", MatchRule.SUBSTRING),
    SensitiveMarker("apikey", MatchRule.SUBSTRING),
    SensitiveMarker("auth", MatchRule.WORD),
    SensitiveMarker("bearer", MatchRule.SUBSTRING),
    SensitiveMarker("jwt", MatchRule.SUBSTRING),
    SensitiveMarker("session_id", MatchRule.SUBSTRING),
    SensitiveMarker("cookie", MatchRule.SUBSTRING),
)


def _compile(entry: SensitiveMarker) -> re.Pattern[str]:
    escaped = re.escape(entry.marker)
    if entry.rule is MatchRule.WORD:
        return re.compile(rf"\b{escaped}\b", re.IGNORECASE)
    return re.compile(escaped, re.IGNORECASE)


_PATTERNS = tuple(_compile(entry) for entry in SENSITIVE_MARKERS)


def contains_sensitive(text: str) -> bool:
    return any(pattern.search(text) for pattern in _PATTERNS)


def sanitize(text: str) -> str:
    """Return text unchanged, or the fixed fallback if any marker matches."""
    if contains_sensitive(text):
        return SANITIZED_FALLBACK
    return text
