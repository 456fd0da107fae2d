"""
Password strength validation.

Configurable password validation with support for various requirements.

Example:
    from common.utils import validate_password

    is_valid, errors = validate_password("weakpass")
    if not is_valid:
        print("Password errors:", errors)

    # Relaxed requirements
    is_valid, errors = validate_password("MyPass123", require_special=False)
"""

import re
from typing import List, Tuple, Optional

DEFAULT_SPECIAL_CHARS = "@$!%*?&"


def validate_password(
    password: str,
    min_length: int = 8,
    max_length: int = 128,
    require_uppercase: bool = True,
    require_lowercase: bool = True,
    require_digit: bool = True,
    require_special: bool = True,
    special_chars: str = DEFAULT_SPECIAL_CHARS,
    restrict_charset: bool = True,
    disallowed_patterns: Optional[List[str]] = None,
) -> Tuple[bool, List[str]]:
    """
    Validate password strength.

    Args:
        password: The password to validate
        min_length: Minimum password length
        max_length: Maximum password length
        require_uppercase: Require at least one uppercase letter
        require_lowercase: Require at least one lowercase letter
        require_digit: Require at least one digit
        require_special: Require at least one special character
        special_chars: String of allowed special characters
        restrict_charset: Only allow ASCII letters, digits and special_chars
        disallowed_patterns: List of regex patterns that are not allowed

    Returns:
        Tuple of (is_valid: bool, errors: List[str])

    Examples:
        >>> is_valid, errors = validate_password("weak")
        >>> print(is_valid)
        False

        >>> is_valid, errors = validate_password("StrongP@ss123")
        >>> print(is_valid)
        True
    """
    errors: List[str] = []
    escaped_chars = re.escape(special_chars)

    # Check length
    if len(password) < min_length:
        errors.append(f"Password must be at least {min_length} characters")

    if len(password) > max_length:
        errors.append(f"Password must be no more than {max_length} characters")

    # Check character requirements
    if require_uppercase and not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")

    if require_lowercase and not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")

    if require_digit and not re.search(r"\d", password):
        errors.append("Password must contain at least one digit")

    if require_special and not re.search(f"[{escaped_chars}]", password):
        errors.append(
            f"Password must contain at least one special character ({special_chars})"
        )

    if restrict_charset and not re.fullmatch(f"[A-Za-z0-9{escaped_chars}]*", password):
        errors.append(
            f"Password may only contain letters, digits and {special_chars}"
        )

    # Check disallowed patterns
    if disallowed_patterns:
        for pattern in disallowed_patterns:
            if re.search(pattern, password, re.IGNORECASE):
                errors.append("Password contains disallowed pattern")
                break

    return len(errors) == 0, errors
