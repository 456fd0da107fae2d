"""
Pydantic models for Article and Insight request validation.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from insightmaster.models.article import ArticleStatus
from insightmaster.models.categories import AnalysisLevel, ArticleInsightCategory


class ArticleCreateRequest(BaseModel):
    """Request body for creating an article."""
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    url: Optional[str] = None
    author: Optional[str] = None
    source: Optional[str] = None
    category: Optional[str] = Field(None, description="Topic, e.g. technology")
    publishedAt: Optional[datetime] = None
    imageUrl: Optional[str] = None
    status: ArticleStatus = ArticleStatus.DRAFT
    tags: List[str] = Field(default_factory=list)


class ArticleUpdateRequest(BaseModel):
    """Request body for updating an article (partial)."""
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    content: Optional[str] = Field(None, min_length=1)
    url: Optional[str] = None
    author: Optional[str] = None
    source: Optional[str] = None
    category: Optional[str] = None
    publishedAt: Optional[datetime] = None
    imageUrl: Optional[str] = None
    status: Optional[ArticleStatus] = None
    tags: Optional[List[str]] = None


class InsightCreateRequest(BaseModel):
    """Request body for adding an insight to an article."""
    content: Optional[str] = None
    category: Optional[str] = Field(
        None,
        description=" | ".join(c.value for c in ArticleInsightCategory),
    )
    evidence: Optional[str] = None


class InsightUpdateRequest(BaseModel):
    """Request body for editing an article insight (partial)."""
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    evidence: Optional[str] = None


class AnalyzeRequest(BaseModel):
    """Request body for running AI analysis on an article."""
    level: AnalysisLevel = AnalysisLevel.BEGINNER

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v):
        return AnalysisLevel.parse(v)
