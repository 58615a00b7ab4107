"""Cache key builders. Single place for key format (DRY).

Key components (resource kind, user_id, email) must be non-empty and
must not contain CACHE_KEY_SEP, so every (kind, user) pair maps to
exactly one key and no two pairs collide.
"""

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_OTP
from app.domain.enums import ResourceKind


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def resource_key(kind: ResourceKind, user_id: str) -> str:
    """Cache key for a user's resource: <kind>:<user_id>."""
    _validate_key_component(user_id, "user_id")
    return f"{kind.value}{CACHE_KEY_SEP}{user_id}"


def otp_key(email: str) -> str:
    """Cache key for a pending password-reset OTP (email is lower-cased)."""
    normalized = email.strip().lower()
    _validate_key_component(normalized, "email")
    return f"{CACHE_PREFIX_OTP}{CACHE_KEY_SEP}{normalized}"
