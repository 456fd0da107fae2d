"""
Insight analysis: match scoring, category classification and the
heuristic training analyzer.
"""

from insightmaster.services.analysis.scorer import compare_insights, compare_texts, extract_keywords
from insightmaster.services.analysis.feedback import (
    build_recommendations,
    classify_categories,
    count_categories,
    matched_categories,
)
from insightmaster.services.analysis.analyzer import InsightAnalyzer

__all__ = [
    "compare_insights",
    "compare_texts",
    "extract_keywords",
    "build_recommendations",
    "classify_categories",
    "count_categories",
    "matched_categories",
    "InsightAnalyzer",
]
