"""
Pydantic models for training-mode requests.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from insightmaster.models.categories import AnalysisLevel


class TrainingAnalyzeRequest(BaseModel):
    """Analyse a stored article (articleId) or an ad-hoc article body."""
    articleId: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    level: AnalysisLevel = AnalysisLevel.BEGINNER

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v):
        return AnalysisLevel.parse(v)


class UserInsightInput(BaseModel):
    category: str
    description: str = Field(..., min_length=1)
    relatedText: Optional[str] = None


class TrainingEvaluateRequest(TrainingAnalyzeRequest):
    """Evaluate user insights against the reference analysis of an article."""
    insights: List[UserInsightInput] = Field(default_factory=list)
