"""Unit tests for keyword-overlap insight match scoring."""

from insightmaster.models.categories import InsightCategory
from insightmaster.models.insight import InsightPoint
from insightmaster.services.analysis.scorer import (
    compare_insights,
    compare_texts,
    extract_keywords,
)


def point(title, description, category=InsightCategory.HIDDEN_ASSUMPTION):
    return InsightPoint(
        articleId="a1",
        category=category,
        title=title,
        description=description,
    )


# ─────────────────────────────────────────────────────────────────
# extract_keywords
# ─────────────────────────────────────────────────────────────────


class TestExtractKeywords:
    def test_splits_on_whitespace_and_japanese_punctuation(self):
        assert extract_keywords("前提条件、記事の前提。結論 です") == ["前提条件", "記事の前提", "結論"]

    def test_drops_single_characters_and_stop_words(self):
        assert extract_keywords("The a cost of energy is X") == ["cost", "energy"]

    def test_lower_cases(self):
        assert extract_keywords("Solar POWER") == ["solar", "power"]

    def test_empty_text(self):
        assert extract_keywords("") == []
        assert extract_keywords(None) == []


# ─────────────────────────────────────────────────────────────────
# compare_insights
# ─────────────────────────────────────────────────────────────────


class TestCompareInsights:
    def test_japanese_example_scores_fifty(self):
        score = compare_insights(
            ["隠れた前提条件についての指摘"],
            [point("前提条件", "記事の前提")],
        )
        assert score == 50

    def test_empty_user_insights_score_zero(self):
        assert compare_insights([], [point("cost", "energy")]) == 0

    def test_empty_ai_insights_score_zero(self):
        assert compare_insights(["cost of energy"], []) == 0

    def test_empty_string_user_insight_scores_zero(self):
        assert compare_insights([""], [point("前提条件", "記事の前提")]) == 0

    def test_no_overlap_scores_zero(self):
        assert compare_insights(["bananas"], [point("solar", "panels")]) == 0

    def test_identical_text_scores_hundred(self):
        assert compare_insights(["solar panels"], [point("solar", "panels")]) == 100

    def test_score_is_clamped_when_credit_is_multi_counted(self):
        ai = [point("solar", "panels"), point("solar", "panels"), point("solar", "panels")]
        score = compare_insights(["solar panels"], ai)
        assert score == 100

    def test_more_overlap_never_lowers_score(self):
        ai = [point("solar capacity", "costs fell sharply")]
        low = compare_insights(["solar growth"], ai)
        high = compare_insights(["solar capacity growth"], ai)
        assert 0 < low <= high

    def test_result_is_int_in_range(self):
        ai = [point("policy", "economic indicators changed"), point("short term", "long term")]
        users = ["policy caused change", "long term impact", "unrelated"]
        score = compare_insights(users, ai)
        assert isinstance(score, int)
        assert 0 <= score <= 100

    def test_rounds_half_up(self):
        # one matching token out of max(1, 8) -> 0.125 -> 12.5 -> 13
        ai = [point("aa bb cc dd", "ee ff gg hh")]
        assert compare_insights(["aa"], ai) == 13


class TestCompareTexts:
    def test_scores_against_plain_strings(self):
        assert compare_texts(["solar panels"], ["solar panels"]) == 100

    def test_empty_reference(self):
        assert compare_texts(["solar"], []) == 0
