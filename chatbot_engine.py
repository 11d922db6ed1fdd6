"""
chatbot_engine.py  –  ProjectHub FAQ matcher
=============================================
Maps free-text questions onto the static knowledge base in faq_knowledge.py.

Matching pipeline (highest → lowest priority):
  1. Exact / substring match  – input equals or contains a keyword
  2. Word overlap             – an input word and a keyword contain one another
  3. Random FALLBACK_RESPONSES entry

Entries are always scanned in declaration order and the first hit wins.
Only the pick *within* the winning entry's responses is random.

Public API
----------
find_entry(user_message)                   -> MatchResult | None
match(user_message, rng=None)              -> str
answer(user_message, rng=None)             -> (str, MatchResult | None)
resolve_scripted_query(query, user_name)   -> str
"""

from __future__ import annotations

import logging
import random
from typing import NamedTuple, Optional, Sequence

from faq_knowledge import (
    FALLBACK_RESPONSES,
    FAQ_ENTRIES,
    SCRIPTED_FALLBACK,
    SCRIPTED_TOPICS,
    FAQEntry,
    ScriptedTopic,
)

logger = logging.getLogger(__name__)

EXACT_PASS = 1
OVERLAP_PASS = 2


class MatchResult(NamedTuple):
    entry: FAQEntry
    pass_no: int          # EXACT_PASS or OVERLAP_PASS
    keyword: str


def _normalise(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def find_entry(
    user_message: Optional[str],
    entries: Sequence[FAQEntry] = FAQ_ENTRIES,
) -> Optional[MatchResult]:
    """
    Classify *user_message* without picking a response.

    Returns the first entry hit by pass 1, else by pass 2, else None.
    Empty or whitespace-only input never matches.
    """
    text = _normalise(user_message)
    if not text:
        return None

    # ── Pass 1: exact or substring ────────────────────────────────────────────
    for entry in entries:
        for kw in entry.keywords:
            if text == kw or kw in text:
                return MatchResult(entry, EXACT_PASS, kw)

    # ── Pass 2: word overlap ──────────────────────────────────────────────────
    words = text.split()
    for entry in entries:
        for kw in entry.keywords:
            if any(word in kw or kw in word for word in words):
                return MatchResult(entry, OVERLAP_PASS, kw)

    return None


def answer(
    user_message: Optional[str],
    entries: Sequence[FAQEntry] = FAQ_ENTRIES,
    fallbacks: Sequence[str] = FALLBACK_RESPONSES,
    rng=None,
) -> tuple[str, Optional[MatchResult]]:
    """
    Classify *user_message* once and pick a reply.

    Returns ``(reply, result)``; *result* is None when the reply is a
    fallback.  *rng* is anything with a ``choice`` method (e.g.
    ``random.Random(7)``); the module-level ``random`` is used when omitted.
    """
    rng = rng or random
    result = find_entry(user_message, entries)
    if result is None:
        logger.debug("match: no intent for %r, using fallback", user_message)
        return rng.choice(fallbacks), None

    logger.debug(
        "match: %r → category=%s (pass %d, keyword=%r)",
        user_message, result.entry.category, result.pass_no, result.keyword,
    )
    return rng.choice(result.entry.responses), result


def match(
    user_message: Optional[str],
    entries: Sequence[FAQEntry] = FAQ_ENTRIES,
    fallbacks: Sequence[str] = FALLBACK_RESPONSES,
    rng=None,
) -> str:
    """Return one reply for *user_message*. Never raises, never returns ""."""
    return answer(user_message, entries, fallbacks, rng)[0]


def find_scripted_topic(
    query: Optional[str],
    topics: Sequence[ScriptedTopic] = SCRIPTED_TOPICS,
) -> Optional[ScriptedTopic]:
    """Return the first topic with a trigger contained in *query*."""
    text = _normalise(query)
    if not text:
        return None
    for topic in topics:
        if any(trigger in text for trigger in topic.triggers):
            return topic
    return None


def resolve_scripted_query(
    query: Optional[str],
    user_name: str,
    topics: Sequence[ScriptedTopic] = SCRIPTED_TOPICS,
) -> str:
    """
    Landing-page resolver: fixed template for the first matching topic,
    otherwise a "not sure" reply addressed to *user_name*.
    """
    topic = find_scripted_topic(query, topics)
    if topic is None:
        logger.debug("resolve_scripted_query: no topic for %r", query)
        return SCRIPTED_FALLBACK.format(user_name=user_name)
    logger.debug("resolve_scripted_query: %r → %s", query, topic.name)
    return topic.render(user_name)
