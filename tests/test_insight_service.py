"""Unit tests for AI insight parsing, the AI service and its fallbacks."""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from insightmaster.models.categories import AnalysisLevel, ArticleInsightCategory
from insightmaster.models.insight import AiInsight, ArticleInsight
from insightmaster.services.ai import (
    AIInsightService,
    AIResult,
    fallback_ai_insights,
    fallback_comparisons,
    fallback_generated_insights,
)
from insightmaster.services.ai.insight_service import (
    NOT_CONFIGURED,
    extract_json_array,
    parse_ai_insights,
    parse_comparisons,
    parse_generated_insights,
    validate_confidence,
)


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_provider():
    provider = MagicMock()
    provider.chat = AsyncMock()
    return provider


@pytest.fixture
def ai_service(mock_provider):
    return AIInsightService(provider=mock_provider, temperature=0.3, max_tokens=2000)


@pytest.fixture
def article():
    return {"title": "Solar growth", "content": "Solar capacity doubled.", "tags": ["energy"]}


@pytest.fixture
def user_insights():
    return [
        ArticleInsight(content="Costs are falling", category="main_idea"),
        ArticleInsight(content="Grid limits growth", category="limitation"),
    ]


@pytest.fixture
def ai_insights():
    return [
        AiInsight(content="Falling costs", category="main_idea", confidence=0.9),
        AiInsight(content="Policy support", category="supporting_evidence", confidence=0.8),
    ]


# ─────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────


class TestValidateConfidence:
    @pytest.mark.parametrize(
        "raw,expected",
        [(0.5, 0.5), (1.7, 1.0), (-2, 0.0), ("high", 0.7), (None, 0.7), (True, 0.7), (float("nan"), 0.7)],
    )
    def test_clamps_or_defaults(self, raw, expected):
        assert validate_confidence(raw) == expected


class TestParseAiInsights:
    def test_extracts_array_surrounded_by_prose(self):
        response = (
            "Here are the insights:\n"
            '[{"content": "Main point", "category": "main_idea", '
            '"evidence": "quote", "confidence": 0.95}]\nHope this helps.'
        )
        insights = parse_ai_insights(response)
        assert len(insights) == 1
        assert insights[0].category is ArticleInsightCategory.MAIN_IDEA
        assert insights[0].confidence == 0.95
        assert insights[0].evidence == "quote"

    def test_coerces_category_and_confidence(self):
        response = json.dumps([{"content": "x", "category": "Opinion", "confidence": 3}])
        insight = parse_ai_insights(response)[0]
        assert insight.category is ArticleInsightCategory.OTHER
        assert insight.confidence == 1.0

    def test_skips_items_without_content(self):
        response = json.dumps([{"category": "main_idea"}, {"content": "kept"}])
        insights = parse_ai_insights(response)
        assert [i.content for i in insights] == ["kept"]

    def test_no_array_raises(self):
        with pytest.raises(ValueError):
            extract_json_array("no json here")

    def test_no_usable_items_raises(self):
        with pytest.raises(ValueError):
            parse_ai_insights("[]")


class TestParseComparisons:
    def test_maps_indices(self, user_insights, ai_insights):
        response = json.dumps([
            {"userInsightIndex": 1, "aiInsightIndex": 0, "matchScore": 0.4, "feedback": "ok"},
        ])
        comparison = parse_comparisons(response, user_insights, ai_insights)[0]
        assert comparison.userInsight == user_insights[1]
        assert comparison.aiInsight == ai_insights[0]
        assert comparison.matchScore == 0.4

    def test_out_of_range_indices(self, user_insights, ai_insights):
        response = json.dumps([{"userInsightIndex": 9, "aiInsightIndex": 9, "matchScore": 0.2}])
        comparison = parse_comparisons(response, user_insights, ai_insights)[0]
        assert comparison.userInsight == user_insights[0]
        assert comparison.aiInsight is None

    def test_null_ai_index(self, user_insights, ai_insights):
        response = json.dumps([{"userInsightIndex": 0, "aiInsightIndex": None}])
        comparison = parse_comparisons(response, user_insights, ai_insights)[0]
        assert comparison.aiInsight is None
        assert comparison.matchScore == 0.7


class TestParseGeneratedInsights:
    def test_object_with_insights_key(self):
        response = json.dumps({"insights": [{"content": "c", "tags": ["a", "b"]}]})
        insights = parse_generated_insights(response)
        assert insights[0].content == "c"
        assert insights[0].tags == ["a", "b"]

    def test_top_level_array(self):
        response = 'Sure: [{"content": "c"}]'
        insights = parse_generated_insights(response)
        assert insights[0].tags == []

    def test_missing_list_raises(self):
        with pytest.raises(ValueError):
            parse_generated_insights('{"result": "nothing"}')


# ─────────────────────────────────────────────────────────────────
# Service
# ─────────────────────────────────────────────────────────────────


class TestAnalyzeArticle:
    @pytest.mark.asyncio
    async def test_returns_parsed_insights(self, ai_service, mock_provider, article):
        mock_provider.chat.return_value = json.dumps([
            {"content": "Main point", "category": "main_idea", "confidence": 0.9},
        ])

        result = await ai_service.analyze_article(article, AnalysisLevel.INTERMEDIATE)

        assert result.ok
        assert result.value[0].content == "Main point"
        prompt = mock_provider.chat.call_args.kwargs["message"]
        assert "Extract 5 insights" in prompt
        assert article["content"] in prompt

    @pytest.mark.asyncio
    async def test_provider_error_becomes_failure(self, ai_service, mock_provider, article):
        mock_provider.chat.side_effect = RuntimeError("rate limited")

        result = await ai_service.analyze_article(article)

        assert not result.ok
        assert "rate limited" in result.error

    @pytest.mark.asyncio
    async def test_unparseable_response_becomes_failure(self, ai_service, mock_provider, article):
        mock_provider.chat.return_value = "I cannot help with that."

        result = await ai_service.analyze_article(article)

        assert not result.ok

    @pytest.mark.asyncio
    async def test_without_provider(self, article):
        service = AIInsightService(provider=None)

        result = await service.analyze_article(article)

        assert not service.enabled
        assert result.error == NOT_CONFIGURED
        assert result.unwrap_or(fallback_ai_insights())[0].confidence == 0.9


class TestCompareAndGenerate:
    @pytest.mark.asyncio
    async def test_compare_requires_both_sides(self, ai_service, mock_provider, user_insights):
        result = await ai_service.compare_insights(user_insights, [])
        assert not result.ok
        mock_provider.chat.assert_not_called()

    @pytest.mark.asyncio
    async def test_compare_returns_comparisons(
        self, ai_service, mock_provider, user_insights, ai_insights,
    ):
        mock_provider.chat.return_value = json.dumps([
            {"userInsightIndex": 0, "aiInsightIndex": 0, "matchScore": 0.85, "feedback": "Good"},
        ])

        result = await ai_service.compare_insights(user_insights, ai_insights)

        assert result.ok
        assert result.value[0].matchScore == 0.85

    @pytest.mark.asyncio
    async def test_generate_passes_prompt_as_system_instruction(
        self, ai_service, mock_provider, article,
    ):
        mock_provider.chat.return_value = json.dumps({"insights": [{"content": "c", "tags": []}]})

        result = await ai_service.generate_insights(article, prompt="economic impact")

        assert result.ok
        system_prompt = mock_provider.chat.call_args.kwargs["system_prompt"]
        assert "economic impact" in system_prompt


# ─────────────────────────────────────────────────────────────────
# Fallbacks
# ─────────────────────────────────────────────────────────────────


class TestFallbacks:
    def test_fallback_ai_insights(self):
        insights = fallback_ai_insights()
        assert [i.category for i in insights] == [
            ArticleInsightCategory.MAIN_IDEA,
            ArticleInsightCategory.SUPPORTING_EVIDENCE,
            ArticleInsightCategory.IMPLICATION,
        ]
        assert [i.confidence for i in insights] == [0.9, 0.85, 0.7]

    def test_fallback_comparisons_match_by_category(self, user_insights, ai_insights):
        comparisons = fallback_comparisons(user_insights, ai_insights)
        assert comparisons[0].aiInsight == ai_insights[0]
        assert comparisons[0].matchScore == 0.5
        assert comparisons[1].aiInsight is None
        assert comparisons[1].matchScore == 0.3

    def test_fallback_generated_insights(self):
        insights = fallback_generated_insights("Solar growth")
        assert len(insights) == 1
        assert "Solar growth" in insights[0].content


class TestAIResult:
    def test_unwrap_or_else_receives_error(self):
        result = AIResult.failure("boom")
        assert result.unwrap_or_else(lambda error: error.upper()) == "BOOM"

    def test_success_ignores_fallback(self):
        assert AIResult.success([1]).unwrap_or([2]) == [1]
