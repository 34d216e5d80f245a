"""Application Exceptions."""

from news_gateway.application.exceptions.base import ApplicationError
from news_gateway.application.exceptions.upstream import (
    EmptySourceError,
    FeedFetchError,
    UpstreamError,
    UpstreamFailureError,
    UpstreamQuotaExceededError,
)
from news_gateway.application.exceptions.validation import (
    InvalidInputError,
    RateLimitedError,
)

__all__ = [
    "ApplicationError",
    "EmptySourceError",
    "FeedFetchError",
    "InvalidInputError",
    "RateLimitedError",
    "UpstreamError",
    "UpstreamFailureError",
    "UpstreamQuotaExceededError",
]
