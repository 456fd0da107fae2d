"""
FastAPI authentication helpers.

Token extraction shared by the application's auth dependencies. Works with
any AuthProvider implementation.

Example:
    from common.auth import extract_token

    async def require_auth(request: Request) -> dict:
        token = extract_token(request, cookie_name="token")
        if not token:
            raise UnauthorizedException("Authentication required")
        return await auth.verify_token(token)
"""

from typing import Optional

from fastapi import Request


def extract_token(
    request: Request,
    cookie_name: Optional[str] = None,
    header_name: str = "Authorization",
    scheme: str = "Bearer",
) -> Optional[str]:
    """
    Extract a token from the Authorization header, then from a cookie.

    Args:
        request: HTTP request object
        cookie_name: Cookie checked when the header is absent
        header_name: Header to extract token from (default: Authorization)
        scheme: Auth scheme prefix (default: Bearer)

    Returns:
        Token string if present and well formed, None otherwise
    """
    auth_header = request.headers.get(header_name)

    if auth_header:
        parts = auth_header.split()
        if len(parts) == 2 and parts[0].lower() == scheme.lower() and parts[1]:
            return parts[1]
        return None

    if cookie_name:
        return request.cookies.get(cookie_name) or None

    return None
