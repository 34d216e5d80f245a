"""Domain Entities."""

from news_gateway.domain.entities.cache_entry import CacheEntry, ClientWindow
from news_gateway.domain.entities.feed_item import FeedItem

__all__ = ["CacheEntry", "ClientWindow", "FeedItem"]
