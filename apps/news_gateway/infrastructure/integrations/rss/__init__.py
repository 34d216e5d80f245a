from news_gateway.infrastructure.integrations.rss.rss_feed_client import RssFeedClient

__all__ = ["RssFeedClient"]
