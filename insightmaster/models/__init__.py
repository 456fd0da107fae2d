"""
InsightMaster domain models.
"""

from insightmaster.models.categories import (
    AnalysisLevel,
    ArticleInsightCategory,
    InsightCategory,
)
from insightmaster.models.insight import (
    AiInsight,
    ArticleInsight,
    GeneratedInsight,
    InsightAnalysis,
    InsightComparison,
    InsightPoint,
    UserInsight,
    UserInsightAnalysis,
)
from insightmaster.models.article import ArticleStatus
from insightmaster.models.user import UserRole, UserStatus

__all__ = [
    "AnalysisLevel",
    "ArticleInsightCategory",
    "InsightCategory",
    "AiInsight",
    "ArticleInsight",
    "GeneratedInsight",
    "InsightAnalysis",
    "InsightComparison",
    "InsightPoint",
    "UserInsight",
    "UserInsightAnalysis",
    "ArticleStatus",
    "UserRole",
    "UserStatus",
]
