"""
Keyword-overlap match scoring between user and reference insights.

The score is a heuristic, not a semantic similarity: tokens match when one
is a substring of the other, and every (user, reference) pair contributes
credit independently, so one user insight can score against several
reference points.
"""

import math
import re
from typing import Iterable, List, NamedTuple, Protocol, Sequence

# Japanese particles/auxiliaries plus common English function words
STOP_WORDS = frozenset({
    "の", "に", "は", "を", "が", "と", "で", "た", "し", "て",
    "です", "ます", "ない", "ある",
    "the", "an", "and", "or", "but", "of", "to", "in", "on", "at", "for",
    "by", "with", "from", "as", "is", "are", "was", "were", "be", "been",
    "it", "its", "this", "that", "these", "those", "not", "no",
})

_TOKEN_SPLIT = re.compile(r"\s+|、|。")


class _PlainText(NamedTuple):
    title: str
    description: str


class TitledInsight(Protocol):
    title: str
    description: str


def extract_keywords(text: str) -> List[str]:
    """Lower-case and split text, dropping one-character tokens and stop words."""
    return [
        word
        for word in _TOKEN_SPLIT.split((text or "").lower())
        if len(word) > 1 and word not in STOP_WORDS
    ]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _pair_credit(user_keywords: Sequence[str], ai_keywords: Sequence[str]) -> float:
    if not user_keywords or not ai_keywords:
        return 0.0

    matching = sum(
        1
        for keyword in user_keywords
        if any(ai_kw in keyword or keyword in ai_kw for ai_kw in ai_keywords)
    )
    if matching == 0:
        return 0.0
    return matching / max(len(user_keywords), len(ai_keywords))


def compare_insights(
    user_insights: Sequence[str],
    ai_insights: Sequence[TitledInsight],
) -> int:
    """
    Score how well user insights line up with reference insights.

    Args:
        user_insights: Free-text user observations
        ai_insights: Reference points exposing ``title`` and ``description``

    Returns:
        Integer score in [0, 100]; 0 when either side is empty
    """
    if not user_insights or not ai_insights:
        return 0

    ai_keyword_sets = [
        extract_keywords(f"{insight.title} {insight.description}")
        for insight in ai_insights
    ]

    total = 0.0
    for text in user_insights:
        user_keywords = extract_keywords(text)
        for ai_keywords in ai_keyword_sets:
            total += _pair_credit(user_keywords, ai_keywords)

    score = _round_half_up(total / min(len(user_insights), len(ai_insights)) * 100)
    return max(0, min(100, score))


def compare_texts(user_insights: Iterable[str], ai_texts: Iterable[str]) -> int:
    """Score against plain reference strings (e.g. stored AI insight contents)."""
    return compare_insights(
        list(user_insights),
        [_PlainText(title="", description=text) for text in ai_texts],
    )
