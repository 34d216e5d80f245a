"""Application Services."""

from news_gateway.application.services.feed_aggregator import FeedAggregatorService
from news_gateway.application.services.prompt_builder import PromptBuilder
from news_gateway.application.services.single_flight import FlightOutcome, SingleFlight
from news_gateway.application.services.stream_relay import RelayMessages, StreamRelayService

__all__ = [
    "FeedAggregatorService",
    "FlightOutcome",
    "PromptBuilder",
    "RelayMessages",
    "SingleFlight",
    "StreamRelayService",
]
