"""Cache Infrastructure."""

from news_gateway.infrastructure.cache.memory_rate_limiter import MemoryRateLimiter
from news_gateway.infrastructure.cache.memory_ttl_cache import MemoryTTLCache

__all__ = ["MemoryRateLimiter", "MemoryTTLCache"]
