"""Queue Stream Sink.

릴레이(producer)와 HTTP 응답 본문(consumer)을 잇는 Bounded Queue 싱크.

- producer: StreamRelayService가 write()/complete() 호출
- consumer: StreamingResponse가 iter_fragments()를 순회
- consumer가 중단(클라이언트 이탈)되면 close() → 이후 write는 무시되고
  producer는 closed를 보고 업스트림 소비를 멈춘다
- consumer가 write_timeout 동안 큐를 비우지 않으면 producer 측에서 close()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from news_gateway.application.ports.stream_sink import StreamSinkPort

logger = logging.getLogger(__name__)

_DONE = object()

DEFAULT_WRITE_TIMEOUT = 30.0


class QueueStreamSink(StreamSinkPort):
    """asyncio.Queue 기반 스트림 싱크."""

    def __init__(self, maxsize: int = 64, write_timeout: float | None = DEFAULT_WRITE_TIMEOUT):
        """초기화.

        Args:
            maxsize: 큐 최대 크기 (가득 차면 producer 대기)
            write_timeout: 가득 찬 큐에서 producer가 기다리는 최대 시간 (None이면 무제한)
        """
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=maxsize)
        self._write_timeout = write_timeout
        self._opened = False
        self._completed = False
        self._done_pending = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def opened(self) -> bool:
        return self._opened

    @property
    def completed(self) -> bool:
        return self._completed

    def open(self) -> None:
        self._opened = True

    async def write(self, fragment: str) -> bool:
        if self._closed or self._completed:
            return False
        try:
            await asyncio.wait_for(self._queue.put(fragment), timeout=self._write_timeout)
        except TimeoutError:
            logger.warning(
                "Stream consumer stalled, closing sink",
                extra={"write_timeout": self._write_timeout},
            )
            self.close()
            return False
        return not self._closed

    async def complete(self) -> None:
        """종료 신호. 대기하지 않는다.

        큐가 가득 차 있으면 consumer가 큐를 비운 뒤 종료를 확인한다.
        """
        if self._completed:
            return
        self._completed = True
        if self._closed:
            return
        try:
            self._queue.put_nowait(_DONE)
        except asyncio.QueueFull:
            self._done_pending = True

    def close(self) -> None:
        """consumer 측 종료.

        대기 중인 producer가 풀려나도록 큐를 비운다.
        """
        if self._closed:
            return
        self._closed = True
        while not self._queue.empty():
            self._queue.get_nowait()
        if not self._completed:
            logger.debug("Stream sink closed by consumer")

    async def iter_fragments(self) -> AsyncIterator[str]:
        """complete 신호까지 조각을 순서대로 내보낸다."""
        try:
            while not (self._done_pending and self._queue.empty()):
                item = await self._queue.get()
                if item is _DONE:
                    break
                yield item  # type: ignore[misc]
        finally:
            self.close()
