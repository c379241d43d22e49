# threadly/moderation/profanity.py
"""Whole-word blocklist applied to thread and reply text before it is stored."""
from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from fastapi import HTTPException, status

from threadly.config import PROFANITY_EXTRA_WORDS

logger = logging.getLogger(__name__)

BLOCKED_WORDS = frozenset({"ass", "fuck", "shit", "bitch"})


def build_blocklist(words: Iterable[str]) -> Optional[re.Pattern]:
    """One case-insensitive alternation; longer words first so they win over their prefixes."""
    cleaned = sorted({w.strip().lower() for w in words if w.strip()}, key=lambda w: (-len(w), w))
    if not cleaned:
        return None
    alternation = "|".join(re.escape(w) for w in cleaned)
    return re.compile(rf"(?<!\w)({alternation})(?!\w)", re.IGNORECASE)


_blocklist = build_blocklist([*BLOCKED_WORDS, *PROFANITY_EXTRA_WORDS.split(",")])


def contains_profanity(text: Optional[str], pattern: Optional[re.Pattern] = None) -> Optional[str]:
    """First blocked word in `text` as written, or None."""
    pattern = pattern or _blocklist
    if pattern is None or not text:
        return None
    m = pattern.search(text)
    return m.group(1) if m else None


def ensure_clean(text: Optional[str]) -> None:
    hit = contains_profanity(text)
    if hit:
        raise ValueError(f"Text contains a blocked word: {hit!r}")


def ensure_clean_or_400(text: str, what: str = "Thread") -> None:
    try:
        ensure_clean(text)
    except ValueError as e:
        logger.info("Rejected %s text: %s", what.lower(), e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "PROFANITY", "message": f"{what} contains inappropriate language."},
        )
