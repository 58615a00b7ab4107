"""Domain enumerations.

Enums represent fixed sets of domain values (e.g. cacheable resource kinds).
"""

from enum import Enum


class ResourceKind(str, Enum):
    """Per-user resource served through the cache.

    The value is the URL segment and the cache key prefix, so two kinds
    never share a key for the same user.
    """

    USER_PROMPTS = "user-prompts"
    SPOTIFY_STATS = "spotify-stats"
    SELECTED_TRACKS = "selected-tracks"
    USER_PROFILE = "user-profile"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid kind values as strings.

        Returns:
            List of enum value strings (e.g. for validation or route docs).
        """
        return [kind.value for kind in cls]
