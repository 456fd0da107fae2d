"""
AI insight generation and comparison.
"""

from insightmaster.services.ai.result import AIResult
from insightmaster.services.ai.insight_service import AIInsightService
from insightmaster.services.ai.fallbacks import (
    fallback_ai_insights,
    fallback_comparisons,
    fallback_generated_insights,
)

__all__ = [
    "AIResult",
    "AIInsightService",
    "fallback_ai_insights",
    "fallback_comparisons",
    "fallback_generated_insights",
]
