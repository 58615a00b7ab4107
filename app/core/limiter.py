"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Limits are keyed by client address.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
TOKEN_EXCHANGE_LIMIT = "30/minute"
TOKEN_REFRESH_LIMIT = "60/minute"
OTP_LIMIT = "5/minute"

limit_token_exchange = limiter.limit(TOKEN_EXCHANGE_LIMIT)
limit_token_refresh = limiter.limit(TOKEN_REFRESH_LIMIT)
limit_otp = limiter.limit(OTP_LIMIT)
