"""Streaming Infrastructure."""

from news_gateway.infrastructure.streaming.queue_stream_sink import QueueStreamSink

__all__ = ["QueueStreamSink"]
