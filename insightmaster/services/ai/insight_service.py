"""
AI-powered article insight service.

Builds prompts for article analysis, insight comparison and free-form
insight generation, sends them to the configured AIProvider and parses the
JSON the model returns. Every operation returns an AIResult; failures are
reported, never replaced with placeholder data here.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from common.ai import AIProvider

from insightmaster.models.categories import AnalysisLevel, ArticleInsightCategory
from insightmaster.models.insight import (
    AiInsight,
    ArticleInsight,
    GeneratedInsight,
    InsightComparison,
)
from insightmaster.services.ai.result import AIResult

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "AI provider is not configured"
DEFAULT_CONFIDENCE = 0.7

SYSTEM_PROMPT = (
    "You are an AI assistant with excellent critical-thinking and analytical skills."
)

LEVEL_INSTRUCTIONS = {
    AnalysisLevel.BEGINNER: (
        "Perform a basic analysis and identify the main ideas and key points."
    ),
    AnalysisLevel.INTERMEDIATE: (
        "Perform a detailed analysis and identify not only the main ideas but also "
        "supporting evidence, counterpoints and implications."
    ),
    AnalysisLevel.ADVANCED: (
        "Perform an expert-level, in-depth analysis covering main ideas, supporting "
        "evidence, counterpoints, implications, limitations, recommendations and "
        "open questions from multiple perspectives."
    ),
}

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


# ─────────────────────────────────────────────────────────────────
# Parsing Helpers
# ─────────────────────────────────────────────────────────────────

def validate_confidence(value: Any) -> float:
    """Clamp a confidence to [0, 1]; non-numeric values become the default."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE
    if value != value:  # NaN
        return DEFAULT_CONFIDENCE
    return max(0.0, min(1.0, float(value)))


def extract_json_array(response: str) -> List[Any]:
    """
    Extract the first JSON array from a model response.

    Raises:
        ValueError: If no array can be found or decoded
    """
    match = _JSON_ARRAY.search(response or "")
    if not match:
        raise ValueError("No JSON array found in AI response")

    data = json.loads(match.group(0))
    if not isinstance(data, list):
        raise ValueError("AI response is not a JSON array")
    return data


def parse_ai_insights(response: str) -> List[AiInsight]:
    """Parse an article-analysis response into AiInsight items."""
    items = extract_json_array(response)

    insights = []
    for item in items:
        if not isinstance(item, dict) or not item.get("content"):
            continue
        insights.append(
            AiInsight(
                content=str(item["content"]),
                category=ArticleInsightCategory.parse(item.get("category")),
                evidence=item.get("evidence"),
                confidence=validate_confidence(item.get("confidence")),
            )
        )

    if not insights:
        raise ValueError("AI response contained no usable insights")
    return insights


def parse_comparisons(
    response: str,
    user_insights: Sequence[ArticleInsight],
    ai_insights: Sequence[AiInsight],
) -> List[InsightComparison]:
    """
    Parse a comparison response.

    Out-of-range user indices fall back to the first user insight; out-of-range
    or null AI indices mean "no match".
    """
    items = extract_json_array(response)

    comparisons = []
    for item in items:
        if not isinstance(item, dict):
            continue

        user_index = item.get("userInsightIndex")
        if isinstance(user_index, int) and 0 <= user_index < len(user_insights):
            user_insight = user_insights[user_index]
        else:
            user_insight = user_insights[0]

        ai_index = item.get("aiInsightIndex")
        ai_insight = None
        if isinstance(ai_index, int) and 0 <= ai_index < len(ai_insights):
            ai_insight = ai_insights[ai_index]

        comparisons.append(
            InsightComparison(
                userInsight=user_insight,
                aiInsight=ai_insight,
                matchScore=validate_confidence(item.get("matchScore")),
                feedback=str(item.get("feedback") or ""),
            )
        )

    if not comparisons:
        raise ValueError("AI response contained no comparisons")
    return comparisons


def parse_generated_insights(response: str) -> List[GeneratedInsight]:
    """Parse a generation response: a top-level array or {"insights": [...]}."""
    text = (response or "").strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        match = _JSON_OBJECT.search(text) if text.startswith("{") else None
        data = json.loads(match.group(0)) if match else extract_json_array(text)

    items = data.get("insights") if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ValueError("AI response does not contain an insights list")

    results = []
    for item in items:
        if not isinstance(item, dict) or not item.get("content"):
            continue
        tags = item.get("tags") or []
        results.append(
            GeneratedInsight(
                content=str(item["content"]),
                tags=[str(t) for t in tags] if isinstance(tags, list) else [],
            )
        )
    return results


# ─────────────────────────────────────────────────────────────────
# Service
# ─────────────────────────────────────────────────────────────────

class AIInsightService:
    """
    Article analysis and comparison backed by an LLM.

    Construct with ``provider=None`` when no API key is configured; every
    call then returns a failure result without touching the network.
    """

    def __init__(
        self,
        provider: Optional[AIProvider],
        temperature: float = 0.3,
        max_tokens: int = 2000,
    ):
        self._provider = provider
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def enabled(self) -> bool:
        return self._provider is not None

    async def _complete(self, prompt: str, **kwargs: Any) -> str:
        return await self._provider.chat(
            message=prompt,
            system_prompt=kwargs.pop("system_prompt", SYSTEM_PROMPT),
            max_tokens=self._max_tokens,
            temperature=self._temperature,
            **kwargs,
        )

    # ─────────────────────────────────────────────────────────────
    # Prompts
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def build_analysis_prompt(article: Dict[str, Any], level: AnalysisLevel) -> str:
        categories = ", ".join(c.value for c in ArticleInsightCategory.core())
        return f"""Read the following article. {LEVEL_INSTRUCTIONS[level]}

Article title: {article.get("title", "")}
Article content:
{article.get("content", "")}

Extract {level.ai_insight_count} insights. For each insight include:
1. content: the insight, stated clearly and concisely
2. category: one of {categories}
3. evidence: the relevant passage or quote from the article
4. confidence: 0.0-1.0, how clearly the insight follows from the article

Respond with JSON only, for example:
[
  {{
    "content": "Insight text",
    "category": "main_idea",
    "evidence": "Supporting passage",
    "confidence": 0.95
  }}
]"""

    @staticmethod
    def build_comparison_prompt(
        user_insights: Sequence[ArticleInsight],
        ai_insights: Sequence[AiInsight],
    ) -> str:
        user_lines = "\n".join(
            f"{i}. category: {u.category.value}, content: {u.content}"
            for i, u in enumerate(user_insights)
        )
        ai_lines = "\n".join(
            f"{i}. category: {a.category.value}, content: {a.content}, "
            f"confidence: {a.confidence}"
            for i, a in enumerate(ai_insights)
        )
        return f"""Compare the insights a user extracted from an article with the insights an AI extracted, and rate their similarity.

User insights:
{user_lines}

AI insights:
{ai_lines}

For each user insight, find the most similar AI insight and return:
1. userInsightIndex: index of the user insight (0-based)
2. aiInsightIndex: index of the most similar AI insight, or null if none is similar
3. matchScore: similarity from 0.0 to 1.0
4. feedback: concrete advice for improving the user's insight

Respond with JSON only, for example:
[
  {{
    "userInsightIndex": 0,
    "aiInsightIndex": 2,
    "matchScore": 0.85,
    "feedback": "Advice"
  }}
]"""

    @staticmethod
    def build_generation_prompt(prompt: Optional[str] = None) -> str:
        system = """You are an expert at extracting key insights from articles.
Analyse the article and extract three important insights, each with suggested tags.

Respond with JSON in this shape:
{"insights": [{"content": "Insight text", "tags": ["tag1", "tag2", "tag3"]}]}"""
        if prompt:
            system += f"\n\nPay particular attention to: {prompt}"
        return system

    # ─────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────

    async def analyze_article(
        self,
        article: Dict[str, Any],
        level: AnalysisLevel = AnalysisLevel.BEGINNER,
    ) -> AIResult[List[AiInsight]]:
        """
        Ask the model for insights about an article.

        Args:
            article: Article document (title, content)
            level: Analysis depth, controls the number of insights requested

        Returns:
            AIResult with parsed AiInsight items
        """
        if not self.enabled:
            return AIResult.failure(NOT_CONFIGURED)

        level = AnalysisLevel.parse(level)
        try:
            response = await self._complete(self.build_analysis_prompt(article, level))
            insights = parse_ai_insights(response)
        except Exception as e:
            logger.warning(f"AI article analysis failed: {e}")
            return AIResult.failure(str(e))

        logger.info(f"AI analysis produced {len(insights)} insights ({level.value})")
        return AIResult.success(insights)

    async def compare_insights(
        self,
        user_insights: Sequence[ArticleInsight],
        ai_insights: Sequence[AiInsight],
    ) -> AIResult[List[InsightComparison]]:
        """Ask the model to pair each user insight with its closest AI insight."""
        if not self.enabled:
            return AIResult.failure(NOT_CONFIGURED)
        if not user_insights or not ai_insights:
            return AIResult.failure("Both user and AI insights are required")

        try:
            response = await self._complete(
                self.build_comparison_prompt(user_insights, ai_insights)
            )
            comparisons = parse_comparisons(response, user_insights, ai_insights)
        except Exception as e:
            logger.warning(f"AI insight comparison failed: {e}")
            return AIResult.failure(str(e))

        return AIResult.success(comparisons)

    async def generate_insights(
        self,
        article: Dict[str, Any],
        prompt: Optional[str] = None,
    ) -> AIResult[List[GeneratedInsight]]:
        """Free-form insight generation with tags, optionally steered by a prompt."""
        if not self.enabled:
            return AIResult.failure(NOT_CONFIGURED)

        article_info = (
            f"Title: {article.get('title', '')}\n"
            f"Source: {article.get('source') or ''}\n"
            f"Tags: {', '.join(article.get('tags') or [])}\n"
            f"Content:\n{article.get('content', '')}"
        )

        try:
            response = await self._complete(
                article_info,
                system_prompt=self.build_generation_prompt(prompt),
            )
            insights = parse_generated_insights(response)
        except Exception as e:
            logger.warning(f"AI insight generation failed: {e}")
            return AIResult.failure(str(e))

        return AIResult.success(insights)
