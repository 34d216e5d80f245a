"""Application Ports (Interfaces)."""

from news_gateway.application.ports.feed_source import FeedSourcePort
from news_gateway.application.ports.rate_limiter import (
    RateLimitConfig,
    RateLimitDecision,
    RateLimiterPort,
)
from news_gateway.application.ports.response_cache import ResponseCachePort
from news_gateway.application.ports.stream_sink import StreamSinkPort
from news_gateway.application.ports.text_generation import TextGenerationPort

__all__ = [
    "FeedSourcePort",
    "RateLimitConfig",
    "RateLimitDecision",
    "RateLimiterPort",
    "ResponseCachePort",
    "StreamSinkPort",
    "TextGenerationPort",
]
