"""Application Queries."""

from news_gateway.application.queries.get_health_query import GetHealthQuery

__all__ = ["GetHealthQuery"]
