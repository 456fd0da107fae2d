from insightmaster.services.user.user_repository import UserRepository, to_object_id

__all__ = ["UserRepository", "to_object_id"]
