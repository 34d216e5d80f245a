"""External Integrations."""

from news_gateway.infrastructure.integrations.newsapi import NewsApiClient
from news_gateway.infrastructure.integrations.rss import RssFeedClient

__all__ = ["NewsApiClient", "RssFeedClient"]
