"""
Article repository.

Handles persistence of articles and their embedded user and AI insights in
the ``articles`` collection, plus the per-user aggregations used by the
dashboard statistics.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from insightmaster.models.article import ArticleStatus, calculate_reading_time
from insightmaster.models.insight import AiInsight, ArticleInsight, new_id
from insightmaster.services.user.user_repository import to_object_id

logger = logging.getLogger(__name__)

ARTICLE_FIELDS = (
    "title",
    "content",
    "url",
    "author",
    "source",
    "category",
    "publishedAt",
    "imageUrl",
    "status",
    "tags",
)

INSIGHT_FIELDS = ("content", "category", "evidence")


class ArticleRepository:
    """
    Data access for articles owned by users.

    Every write is scoped by ``userId`` so one user can never modify another
    user's article even with a guessed id.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize ArticleRepository.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._articles_collection = db["articles"]

    # ─────────────────────────────────────────────────────────────────
    # Articles
    # ─────────────────────────────────────────────────────────────────

    async def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create an article for a user.

        Args:
            user_id: Owner's user ID
            data: Article fields (title and content required)

        Returns:
            The inserted article document
        """
        now = datetime.now(timezone.utc)
        article = {k: data[k] for k in ARTICLE_FIELDS if data.get(k) is not None}
        article.update({
            "userId": ObjectId(user_id),
            "status": data.get("status") or ArticleStatus.DRAFT.value,
            "tags": list(data.get("tags") or []),
            "insights": [],
            "readingTime": calculate_reading_time(data.get("content")),
            "createdAt": now,
            "updatedAt": now,
        })

        result = await self._articles_collection.insert_one(article)
        article["_id"] = result.inserted_id

        logger.info(f"Created article {article['_id']} for user {user_id}")
        return article

    async def update(
        self,
        article_id: str,
        user_id: str,
        updates: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Apply a partial update; reading time is recomputed when content changes."""
        oid = to_object_id(article_id)
        if oid is None:
            return None

        fields = {
            k: v for k, v in updates.items()
            if k in ARTICLE_FIELDS and v is not None
        }
        if "content" in fields:
            fields["readingTime"] = calculate_reading_time(fields["content"])
        fields["updatedAt"] = datetime.now(timezone.utc)

        return await self._articles_collection.find_one_and_update(
            {"_id": oid, "userId": ObjectId(user_id)},
            {"$set": fields},
            return_document=True,
        )

    async def find_by_id(self, article_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(article_id)
        if oid is None:
            return None
        return await self._articles_collection.find_one({"_id": oid})

    async def find_by_user(
        self,
        user_id: str,
        status: Optional[str] = None,
        limit: int = 10,
        skip: int = 0,
        sort_field: str = "updatedAt",
    ) -> List[Dict[str, Any]]:
        """List a user's articles, newest first."""
        query: Dict[str, Any] = {"userId": ObjectId(user_id)}
        if status:
            query["status"] = status

        cursor = self._articles_collection.find(query)
        cursor = cursor.sort(sort_field, -1).skip(skip).limit(limit)
        return await cursor.to_list(length=limit)

    async def count_by_user(self, user_id: str, status: Optional[str] = None) -> int:
        query: Dict[str, Any] = {"userId": ObjectId(user_id)}
        if status:
            query["status"] = status
        return await self._articles_collection.count_documents(query)

    async def delete(self, article_id: str, user_id: str) -> bool:
        oid = to_object_id(article_id)
        if oid is None:
            return False
        result = await self._articles_collection.delete_one(
            {"_id": oid, "userId": ObjectId(user_id)}
        )
        if result.deleted_count:
            logger.info(f"Deleted article {article_id}")
        return result.deleted_count > 0

    async def find_by_tag(
        self,
        user_id: str,
        tag: str,
        limit: int = 10,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        cursor = self._articles_collection.find({"userId": ObjectId(user_id), "tags": tag})
        cursor = cursor.sort("updatedAt", -1).skip(skip).limit(limit)
        return await cursor.to_list(length=limit)

    async def search(
        self,
        user_id: str,
        keyword: str,
        limit: int = 10,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        """Case-insensitive keyword search over title, content and tags."""
        pattern = {"$regex": re.escape(keyword), "$options": "i"}
        query = {
            "userId": ObjectId(user_id),
            "$or": [
                {"title": pattern},
                {"content": pattern},
                {"tags": pattern},
            ],
        }

        cursor = self._articles_collection.find(query)
        cursor = cursor.sort("updatedAt", -1).skip(skip).limit(limit)
        return await cursor.to_list(length=limit)

    # ─────────────────────────────────────────────────────────────────
    # Embedded Insights
    # ─────────────────────────────────────────────────────────────────

    async def add_insight(
        self,
        article_id: str,
        user_id: str,
        insight: ArticleInsight,
    ) -> Optional[Dict[str, Any]]:
        """Push a user insight onto the article; returns the updated article."""
        oid = to_object_id(article_id)
        if oid is None:
            return None

        doc = insight.model_dump(mode="python")
        doc["id"] = doc.get("id") or new_id()
        doc["category"] = insight.category.value

        return await self._articles_collection.find_one_and_update(
            {"_id": oid, "userId": ObjectId(user_id)},
            {
                "$push": {"insights": doc},
                "$set": {"updatedAt": doc["createdAt"]},
            },
            return_document=True,
        )

    async def update_insight(
        self,
        article_id: str,
        user_id: str,
        insight_id: str,
        updates: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Update fields of one embedded insight via the positional operator."""
        oid = to_object_id(article_id)
        if oid is None:
            return None

        now = datetime.now(timezone.utc)
        fields: Dict[str, Any] = {"updatedAt": now, "insights.$.updatedAt": now}
        for key in INSIGHT_FIELDS:
            if updates.get(key) is not None:
                value = updates[key]
                fields[f"insights.$.{key}"] = getattr(value, "value", value)

        return await self._articles_collection.find_one_and_update(
            {"_id": oid, "userId": ObjectId(user_id), "insights.id": insight_id},
            {"$set": fields},
            return_document=True,
        )

    async def delete_insight(
        self,
        article_id: str,
        user_id: str,
        insight_id: str,
    ) -> Optional[Dict[str, Any]]:
        oid = to_object_id(article_id)
        if oid is None:
            return None

        return await self._articles_collection.find_one_and_update(
            {"_id": oid, "userId": ObjectId(user_id)},
            {
                "$pull": {"insights": {"id": insight_id}},
                "$set": {"updatedAt": datetime.now(timezone.utc)},
            },
            return_document=True,
        )

    async def save_ai_insights(
        self,
        article_id: str,
        user_id: str,
        insights: Sequence[AiInsight],
    ) -> Optional[Dict[str, Any]]:
        """Replace the article's AI insights and stamp ``analyzedAt``."""
        oid = to_object_id(article_id)
        if oid is None:
            return None

        now = datetime.now(timezone.utc)
        docs = []
        for insight in insights:
            doc = insight.model_dump(mode="python")
            doc["category"] = insight.category.value
            docs.append(doc)

        return await self._articles_collection.find_one_and_update(
            {"_id": oid, "userId": ObjectId(user_id)},
            {"$set": {"aiInsights": docs, "analyzedAt": now, "updatedAt": now}},
            return_document=True,
        )

    # ─────────────────────────────────────────────────────────────────
    # Statistics
    # ─────────────────────────────────────────────────────────────────

    async def _aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        cursor = self._articles_collection.aggregate(pipeline)
        return await cursor.to_list(length=None)

    async def count_insights_by_user(self, user_id: str) -> int:
        result = await self._aggregate([
            {"$match": {"userId": ObjectId(user_id)}},
            {"$project": {"insightCount": {"$size": {"$ifNull": ["$insights", []]}}}},
            {"$group": {"_id": None, "totalInsights": {"$sum": "$insightCount"}}},
        ])
        return result[0]["totalInsights"] if result else 0

    async def article_category_counts(self, user_id: str) -> Dict[str, int]:
        result = await self._aggregate([
            {"$match": {"userId": ObjectId(user_id)}},
            {"$group": {"_id": "$category", "count": {"$sum": 1}}},
        ])
        return {(row["_id"] or "uncategorized"): row["count"] for row in result}

    async def insight_category_counts(self, user_id: str) -> Dict[str, int]:
        result = await self._aggregate([
            {"$match": {"userId": ObjectId(user_id)}},
            {"$unwind": {"path": "$insights", "preserveNullAndEmptyArrays": False}},
            {"$group": {"_id": "$insights.category", "count": {"$sum": 1}}},
        ])
        return {(row["_id"] or "uncategorized"): row["count"] for row in result}

    async def recent_activity(
        self,
        user_id: str,
        since: datetime,
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Daily counts of articles created and insights added since a date."""
        user_oid = ObjectId(user_id)

        article_activity = await self._aggregate([
            {"$match": {"userId": user_oid, "createdAt": {"$gte": since}}},
            {"$group": {
                "_id": {"$dateToString": {"format": "%Y-%m-%d", "date": "$createdAt"}},
                "count": {"$sum": 1},
            }},
            {"$sort": {"_id": 1}},
        ])

        insight_activity = await self._aggregate([
            {"$match": {"userId": user_oid}},
            {"$unwind": {"path": "$insights", "preserveNullAndEmptyArrays": False}},
            {"$match": {"insights.createdAt": {"$gte": since}}},
            {"$group": {
                "_id": {"$dateToString": {"format": "%Y-%m-%d", "date": "$insights.createdAt"}},
                "count": {"$sum": 1},
            }},
            {"$sort": {"_id": 1}},
        ])

        return {
            "articleActivity": [{"date": r["_id"], "count": r["count"]} for r in article_activity],
            "insightActivity": [{"date": r["_id"], "count": r["count"]} for r in insight_activity],
        }
