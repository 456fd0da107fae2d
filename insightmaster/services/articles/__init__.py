from insightmaster.services.articles.article_repository import ArticleRepository

__all__ = ["ArticleRepository"]
