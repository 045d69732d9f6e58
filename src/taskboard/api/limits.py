"""Rate limiting shared by the API routers."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from taskboard.config import get_settings

# Effectively unlimited when rate limiting is disabled
UNLIMITED = "1000000/minute"

limiter = Limiter(key_func=get_remote_address)


def default_rate_limit() -> str:
    """Rate limit for task mutations."""
    settings = get_settings()
    if not settings.rate_limit_enabled:
        return UNLIMITED
    return settings.rate_limit_default


def attachment_rate_limit() -> str:
    """Rate limit for attachment registration."""
    settings = get_settings()
    if not settings.rate_limit_enabled:
        return UNLIMITED
    return settings.rate_limit_attachments
