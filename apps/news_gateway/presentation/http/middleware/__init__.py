from news_gateway.presentation.http.middleware.rate_limit import (
    enforce_rate_limit,
    get_client_id,
)

__all__ = ["enforce_rate_limit", "get_client_id"]
