"""Rate limiting middleware using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Remote lookups hit the tenant directory on every call, so they are limited per client IP
limiter = Limiter(key_func=get_remote_address)


def reset_limiter() -> None:
    """Reset the limiter storage. Used in tests to clear rate limit state."""
    limiter.reset()
