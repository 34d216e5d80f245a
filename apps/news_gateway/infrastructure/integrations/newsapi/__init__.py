from news_gateway.infrastructure.integrations.newsapi.newsapi_client import NewsApiClient

__all__ = ["NewsApiClient"]
