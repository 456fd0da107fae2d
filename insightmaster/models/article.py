"""
Article document helpers.

Articles are stored as plain documents in the ``articles`` collection with
their user insights and AI insights embedded as arrays.
"""

import math
import re
from enum import Enum
from typing import Any, Dict, Optional

WORDS_PER_MINUTE = 200


class ArticleStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


def calculate_reading_time(content: Optional[str]) -> int:
    """Estimated reading time in minutes (never less than 1)."""
    words = [w for w in re.split(r"\s+", content or "") if w]
    return max(1, math.ceil(len(words) / WORDS_PER_MINUTE))


def _serialize_insight(insight: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(insight)
    if "id" in data:
        data["id"] = str(data["id"])
    return data


def serialize_article(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert an article document into its API representation."""
    if doc is None:
        return None

    data = dict(doc)
    data["id"] = str(data.pop("_id"))
    if data.get("userId") is not None:
        data["userId"] = str(data["userId"])
    data["insights"] = [_serialize_insight(i) for i in data.get("insights") or []]
    data["aiInsights"] = [_serialize_insight(i) for i in data.get("aiInsights") or []]
    return data


def article_summary(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Compact article view used by dashboard statistics."""
    return {
        "id": str(doc["_id"]),
        "title": doc.get("title"),
        "category": doc.get("category"),
        "createdAt": doc.get("createdAt"),
        "insightCount": len(doc.get("insights") or []),
    }
