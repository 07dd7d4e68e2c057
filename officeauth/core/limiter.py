"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. create_app() turns it off when
settings.rate_limit_enabled is False.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
LOGIN_LIMIT = "10/minute"
REGISTER_LIMIT = "5/minute"
TOKEN_REQUEST_LIMIT = "5/minute"
TOKEN_REDEEM_LIMIT = "20/minute"

limit_login = limiter.limit(LOGIN_LIMIT)
limit_register = limiter.limit(REGISTER_LIMIT)
limit_token_request = limiter.limit(TOKEN_REQUEST_LIMIT)
limit_token_redeem = limiter.limit(TOKEN_REDEEM_LIMIT)
