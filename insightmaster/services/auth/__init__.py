from insightmaster.services.auth.auth_service import AuthService, check_password_strength

__all__ = ["AuthService", "check_password_strength"]
