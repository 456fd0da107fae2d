"""
Closed category vocabularies for insights.

Two vocabularies exist: the analytical categories used by training mode
(hidden assumptions, causality, ...) and the article categories used by
insights stored on articles (main idea, supporting evidence, ...).

Both carry an explicit ``OTHER`` member. Unknown strings are parsed into it
at the boundary instead of being relabelled as a real category.
"""

from enum import Enum
from typing import List, Optional


def _normalize(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).strip().lower().replace("-", "_").replace(" ", "_")


class InsightCategory(str, Enum):
    """Analytical category of a training insight point."""

    HIDDEN_ASSUMPTION = "hidden_assumption"
    CAUSALITY = "causality"
    CONTRADICTION = "contradiction"
    DATA_INTERPRETATION = "data_interpretation"
    AUTHOR_BIAS = "author_bias"
    INDUSTRY_TREND = "industry_trend"
    OTHER = "other"

    @classmethod
    def core(cls) -> List["InsightCategory"]:
        """The six real categories, in display order."""
        return [c for c in cls if c is not cls.OTHER]

    @classmethod
    def parse(cls, value: Optional[str]) -> "InsightCategory":
        """
        Parse a category string, mapping anything unknown to OTHER.

        Accepts enum values, member names and hyphen/space variants
        ("Hidden-Assumption", "author bias").
        """
        if isinstance(value, cls):
            return value
        normalized = _normalize(value)
        for category in cls:
            if category.value == normalized:
                return category
        return cls.OTHER

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]

    @property
    def description(self) -> str:
        return CATEGORY_DESCRIPTIONS[self]


CATEGORY_LABELS = {
    InsightCategory.HIDDEN_ASSUMPTION: "Hidden assumption",
    InsightCategory.CAUSALITY: "Causality",
    InsightCategory.CONTRADICTION: "Contradiction",
    InsightCategory.DATA_INTERPRETATION: "Data interpretation",
    InsightCategory.AUTHOR_BIAS: "Author bias",
    InsightCategory.INDUSTRY_TREND: "Industry trend",
    InsightCategory.OTHER: "Other",
}

CATEGORY_DESCRIPTIONS = {
    InsightCategory.HIDDEN_ASSUMPTION: (
        "Assumptions the argument relies on without stating them"
    ),
    InsightCategory.CAUSALITY: (
        "Claimed cause-and-effect relationships and how well they are supported"
    ),
    InsightCategory.CONTRADICTION: "Contradictions or inconsistent claims within the text",
    InsightCategory.DATA_INTERPRETATION: (
        "How data and statistics are interpreted, and whether that holds up"
    ),
    InsightCategory.AUTHOR_BIAS: "Bias arising from the author's viewpoint or position",
    InsightCategory.INDUSTRY_TREND: "Connections to wider industry or field trends",
    InsightCategory.OTHER: "Uncategorized observation",
}


class ArticleInsightCategory(str, Enum):
    """Category of an insight stored on an article."""

    MAIN_IDEA = "main_idea"
    SUPPORTING_EVIDENCE = "supporting_evidence"
    IMPLICATION = "implication"
    COUNTERPOINT = "counterpoint"
    LIMITATION = "limitation"
    RECOMMENDATION = "recommendation"
    QUESTION = "question"
    OTHER = "other"

    @classmethod
    def core(cls) -> List["ArticleInsightCategory"]:
        return [c for c in cls if c is not cls.OTHER]

    @classmethod
    def parse(cls, value: Optional[str]) -> "ArticleInsightCategory":
        """
        Parse a category from free text such as an LLM response.

        The first known category contained in the lower-cased value wins,
        so "Main_Idea (primary)" parses as MAIN_IDEA.
        """
        if isinstance(value, cls):
            return value
        normalized = _normalize(value)
        if not normalized:
            return cls.OTHER
        for category in cls.core():
            if category.value in normalized:
                return category
        return cls.OTHER


class AnalysisLevel(str, Enum):
    """Depth of an analysis pass."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AnalysisLevel":
        """Parse a level, defaulting to BEGINNER for unknown values."""
        if isinstance(value, cls):
            return value
        normalized = _normalize(value)
        # Older clients send basic/advanced/expert
        aliases = {"basic": cls.BEGINNER, "expert": cls.ADVANCED}
        if normalized in aliases:
            return aliases[normalized]
        for level in cls:
            if level.value == normalized:
                return level
        return cls.BEGINNER

    @property
    def ai_insight_count(self) -> int:
        return {
            AnalysisLevel.BEGINNER: 3,
            AnalysisLevel.INTERMEDIATE: 5,
            AnalysisLevel.ADVANCED: 7,
        }[self]
