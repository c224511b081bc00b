"""Pre-verification content screening used by web and bot callers."""

from verification_system.screening.content_screener import (
    ContentScreener,
    ScreeningReport,
    UrlCheck,
)
from verification_system.screening.rate_limiter import RequestRateLimiter

__all__ = ["ContentScreener", "RequestRateLimiter", "ScreeningReport", "UrlCheck"]
