"""Unit tests for the heuristic training analyzer."""

import pytest
from bson import ObjectId

from insightmaster.models.categories import AnalysisLevel, InsightCategory
from insightmaster.models.insight import UserInsight
from insightmaster.services.analysis.analyzer import InsightAnalyzer, resolve_topic


@pytest.fixture
def analyzer():
    return InsightAnalyzer()


@pytest.fixture
def economy_article():
    return {
        "_id": ObjectId(),
        "title": "Rate cut lifts consumer spending",
        "content": "Spending rose after the central bank cut rates.",
        "category": "economy",
    }


class TestResolveTopic:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Technology", "technology"),
            ("テクノロジー", "technology"),
            ("環境", "environment"),
            ("economics", "economy"),
            ("sports", None),
            (None, None),
        ],
    )
    def test_resolve(self, raw, expected):
        assert resolve_topic(raw) == expected


class TestAnalyzeArticle:
    @pytest.mark.parametrize(
        "level,count",
        [
            (AnalysisLevel.BEGINNER, 2),
            (AnalysisLevel.INTERMEDIATE, 3),
            (AnalysisLevel.ADVANCED, 4),
        ],
    )
    def test_point_count_per_level(self, analyzer, economy_article, level, count):
        analysis = analyzer.analyze_article(economy_article, level)
        assert len(analysis.insights) == count
        assert analysis.analysisLevel is level

    def test_topic_points(self, analyzer, economy_article):
        analysis = analyzer.analyze_article(economy_article)
        categories = [p.category for p in analysis.insights]
        assert categories == [InsightCategory.CAUSALITY, InsightCategory.CONTRADICTION]

    def test_unknown_topic_uses_default_points(self, analyzer):
        analysis = analyzer.analyze_article({"id": "x", "title": "T", "category": "sports"})
        categories = [p.category for p in analysis.insights]
        assert categories == [InsightCategory.HIDDEN_ASSUMPTION, InsightCategory.AUTHOR_BIAS]

    def test_advanced_adds_data_and_trend_points(self, analyzer, economy_article):
        analysis = analyzer.analyze_article(economy_article, "expert")
        categories = [p.category for p in analysis.insights]
        assert categories[-2:] == [
            InsightCategory.DATA_INTERPRETATION,
            InsightCategory.INDUSTRY_TREND,
        ]

    def test_points_reference_the_article(self, analyzer, economy_article):
        analysis = analyzer.analyze_article(economy_article)
        article_id = str(economy_article["_id"])
        assert analysis.articleId == article_id
        assert all(p.articleId == article_id for p in analysis.insights)

    def test_summary_names_article_and_count(self, analyzer, economy_article):
        analysis = analyzer.analyze_article(economy_article)
        assert economy_article["title"] in analysis.summary
        assert "2 insight points" in analysis.summary

    def test_is_deterministic(self, analyzer, economy_article):
        first = analyzer.analyze_article(economy_article)
        second = analyzer.analyze_article(economy_article)
        assert [p.title for p in first.insights] == [p.title for p in second.insights]


class TestEvaluate:
    def test_reports_missed_and_extra_insights(self, analyzer, economy_article):
        analysis = analyzer.analyze_article(economy_article)
        user_insights = [
            UserInsight(category="causality", description="policy caused economic change"),
            UserInsight(category="author_bias", description="the author favours the bank"),
        ]

        result = analyzer.evaluate(analysis, user_insights, user_id="u1")

        assert result.userId == "u1"
        assert [p.category for p in result.missedInsights] == [InsightCategory.CONTRADICTION]
        assert [u.category for u in result.extraInsights] == [InsightCategory.AUTHOR_BIAS]
        assert result.strengths == [InsightCategory.CAUSALITY]
        assert result.weaknesses == [InsightCategory.CONTRADICTION]
        assert result.matchedCategories == {InsightCategory.CAUSALITY: 1}
        assert 0 <= result.matchScore <= 100
        assert result.recommendations

    def test_no_user_insights_scores_zero(self, analyzer, economy_article):
        analysis = analyzer.analyze_article(economy_article)
        result = analyzer.evaluate(analysis, [])
        assert result.matchScore == 0
        assert result.matchedCategories == {}
        assert len(result.missedInsights) == len(analysis.insights)
