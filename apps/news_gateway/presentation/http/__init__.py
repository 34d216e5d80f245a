"""HTTP Presentation."""

from news_gateway.presentation.http.router import router

__all__ = ["router"]
