"""Per-client rate limits for the expensive endpoints."""

from fastapi import Request
from limits import parse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from slowapi.wrappers import Limit

from jobseeker.config import Settings


def create_limiter(settings: Settings) -> Limiter:
    """In-memory limiter owned by one app instance."""
    return Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


class RateLimit:
    """
    Dependency enforcing one settings-named limit per client address.

    The limit string and the limiter both come from the app handling the
    request, so two apps never share counters or configuration.
    """

    def __init__(self, scope: str, setting: str):
        self.scope = scope
        self.setting = setting

    def __call__(self, request: Request) -> None:
        limiter: Limiter = request.app.state.limiter
        if not limiter.enabled:
            return

        item = parse(getattr(request.app.state.settings, self.setting))
        key = get_remote_address(request)
        if not limiter.limiter.hit(item, key, self.scope):
            limiter.logger.warning("ratelimit %s (%s) exceeded at endpoint: %s", item, key, self.scope)
            raise RateLimitExceeded(Limit(item, get_remote_address, self.scope, False, None, None, None, 1, False))


analyze_limit = RateLimit("resume.analyze", "analyze_rate_limit")
pipeline_limit = RateLimit("pipeline.trigger", "pipeline_rate_limit")
