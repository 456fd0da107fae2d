"""
Pydantic models for insights and analysis results.

Training mode works with InsightPoint/UserInsight pairs tagged with an
analytical InsightCategory. Articles store ArticleInsight/AiInsight items
tagged with an ArticleInsightCategory.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from insightmaster.models.categories import (
    AnalysisLevel,
    ArticleInsightCategory,
    InsightCategory,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(ObjectId())


# ─────────────────────────────────────────────────────────────────
# Training Insights
# ─────────────────────────────────────────────────────────────────

class InsightPoint(BaseModel):
    """Reference observation about an article, produced by an analysis pass."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    articleId: str
    category: InsightCategory
    title: str
    description: str
    relatedText: Optional[str] = None
    importance: int = Field(3, ge=1, le=5)
    createdAt: datetime = Field(default_factory=utcnow)

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v):
        return InsightCategory.parse(v)


class UserInsight(BaseModel):
    """User-authored observation written during a training session."""

    id: str = Field(default_factory=new_id)
    userId: Optional[str] = None
    articleId: Optional[str] = None
    category: InsightCategory
    description: str
    relatedText: Optional[str] = None
    createdAt: datetime = Field(default_factory=utcnow)

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v):
        return InsightCategory.parse(v)


class InsightAnalysis(BaseModel):
    """Result of analysing one article at one level."""

    id: str = Field(default_factory=lambda: f"analysis-{new_id()}")
    articleId: str
    insights: List[InsightPoint]
    summary: str
    analysisLevel: AnalysisLevel
    createdAt: datetime = Field(default_factory=utcnow)


class UserInsightAnalysis(BaseModel):
    """Evaluation of a user's insights against a reference analysis."""

    articleId: str
    userId: Optional[str] = None
    userInsights: List[UserInsight]
    aiInsights: List[InsightPoint]
    matchScore: int = Field(..., ge=0, le=100)
    missedInsights: List[InsightPoint] = Field(default_factory=list)
    extraInsights: List[UserInsight] = Field(default_factory=list)
    strengths: List[InsightCategory] = Field(default_factory=list)
    weaknesses: List[InsightCategory] = Field(default_factory=list)
    matchedCategories: Dict[InsightCategory, int] = Field(default_factory=dict)
    recommendations: List[str] = Field(default_factory=list)
    feedback: str = ""
    createdAt: datetime = Field(default_factory=utcnow)


# ─────────────────────────────────────────────────────────────────
# Article Insights
# ─────────────────────────────────────────────────────────────────

class ArticleInsight(BaseModel):
    """Insight embedded in an article's ``insights`` array."""

    id: str = Field(default_factory=new_id)
    content: str
    category: ArticleInsightCategory
    evidence: Optional[str] = None
    createdAt: datetime = Field(default_factory=utcnow)
    updatedAt: datetime = Field(default_factory=utcnow)

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v):
        return ArticleInsightCategory.parse(v)


class AiInsight(ArticleInsight):
    """AI-generated insight embedded in an article's ``aiInsights`` array."""

    confidence: float = Field(0.7, ge=0.0, le=1.0)


class InsightComparison(BaseModel):
    """Best AI match for one user insight."""

    userInsight: ArticleInsight
    aiInsight: Optional[AiInsight] = None
    matchScore: float = Field(..., ge=0.0, le=1.0)
    feedback: str = ""


class GeneratedInsight(BaseModel):
    """Free-form AI insight with suggested tags."""

    content: str
    tags: List[str] = Field(default_factory=list)
