"""
Category strength/weakness classification and canned recommendations.
"""

from collections import Counter
from typing import Dict, Iterable, List, Tuple

from insightmaster.models.categories import InsightCategory

STRENGTH_RATIO = 0.8
WEAKNESS_RATIO = 0.3

EXCELLENT_SCORE = 80
GOOD_SCORE = 50

SCORE_RECOMMENDATIONS = {
    "excellent": (
        "You have strong insight skills. Try tackling more specialised articles next."
    ),
    "good": (
        "Good insight. Looking at the article from more angles will sharpen it further."
    ),
    "basic": (
        "Learning the common insight patterns will help you stop missing key points."
    ),
}

CATEGORY_RECOMMENDATIONS = {
    InsightCategory.HIDDEN_ASSUMPTION: (
        "Practise spotting hidden assumptions. Ask yourself what has to be true "
        "for each claim to hold."
    ),
    InsightCategory.CAUSALITY: (
        "Strengthen causal analysis by repeatedly asking \"why?\" and tracing "
        "claims back to their root causes."
    ),
    InsightCategory.CONTRADICTION: (
        "Get into the habit of checking claims against each other to find "
        "contradictions in the text."
    ),
    InsightCategory.DATA_INTERPRETATION: (
        "Study basic statistical concepts and common misuse patterns to read "
        "data more critically."
    ),
    InsightCategory.AUTHOR_BIAS: (
        "Consider the author's background and position, and check the "
        "information from other viewpoints."
    ),
    InsightCategory.INDUSTRY_TREND: (
        "Follow recent developments in related fields and keep the historical "
        "context in mind."
    ),
}


def count_categories(categories: Iterable[InsightCategory]) -> Dict[InsightCategory, int]:
    """Count occurrences per category."""
    return dict(Counter(InsightCategory.parse(c) for c in categories))


def classify_categories(
    user_counts: Dict[InsightCategory, int],
    ai_counts: Dict[InsightCategory, int],
) -> Tuple[List[InsightCategory], List[InsightCategory]]:
    """
    Classify each core category as a strength or weakness.

    Categories the reference never covers (ai count 0) are skipped. The
    ratio thresholds are inclusive on both sides.

    Returns:
        (strengths, weaknesses) in category display order
    """
    strengths: List[InsightCategory] = []
    weaknesses: List[InsightCategory] = []

    for category in InsightCategory.core():
        ai_count = ai_counts.get(category, 0)
        if ai_count == 0:
            continue

        ratio = user_counts.get(category, 0) / ai_count
        if ratio >= STRENGTH_RATIO:
            strengths.append(category)
        elif ratio <= WEAKNESS_RATIO:
            weaknesses.append(category)

    return strengths, weaknesses


def matched_categories(
    user_counts: Dict[InsightCategory, int],
    ai_counts: Dict[InsightCategory, int],
) -> Dict[InsightCategory, int]:
    """Per category, how many reference points the user could have matched."""
    return {
        category: min(user_counts[category], ai_counts[category])
        for category in InsightCategory.core()
        if user_counts.get(category, 0) > 0 and ai_counts.get(category, 0) > 0
    }


def build_recommendations(
    match_score: int,
    weaknesses: Iterable[InsightCategory],
) -> List[str]:
    """One overall line keyed on the score band, then one line per weak category."""
    if match_score >= EXCELLENT_SCORE:
        recommendations = [SCORE_RECOMMENDATIONS["excellent"]]
    elif match_score >= GOOD_SCORE:
        recommendations = [SCORE_RECOMMENDATIONS["good"]]
    else:
        recommendations = [SCORE_RECOMMENDATIONS["basic"]]

    for category in weaknesses:
        text = CATEGORY_RECOMMENDATIONS.get(category)
        if text:
            recommendations.append(text)

    return recommendations


def summarize_feedback(
    match_score: int,
    strengths: List[InsightCategory],
    weaknesses: List[InsightCategory],
) -> str:
    """Short human-readable feedback line for an evaluation."""
    parts = [f"Match score: {match_score}/100."]
    if strengths:
        parts.append("Strong on " + ", ".join(c.label.lower() for c in strengths) + ".")
    if weaknesses:
        parts.append("Needs work on " + ", ".join(c.label.lower() for c in weaknesses) + ".")
    return " ".join(parts)
