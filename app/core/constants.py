"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Resource kinds
are the key prefixes for cached resources (see app.domain.enums).
"""

CACHE_PREFIX_OTP = "otp"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Record source limits for ordered sub-resources
TOP_ARTISTS_LIMIT = 3
TOP_TRACKS_LIMIT = 10

# Password-reset OTP range (six digits)
OTP_MIN = 100_000
OTP_MAX = 999_999
