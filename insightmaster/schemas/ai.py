"""
Pydantic models for AI generation requests.
"""

from typing import Optional
from pydantic import BaseModel, Field


class GenerateInsightsRequest(BaseModel):
    """Request body for free-form insight generation."""
    articleId: str = Field(..., min_length=1)
    prompt: Optional[str] = None
