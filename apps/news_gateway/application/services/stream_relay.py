"""Stream Relay Service.

업스트림 생성 스트림을 클라이언트 싱크로 실시간 전달하면서
전체 텍스트를 누적해 완료 시 캐시에 저장한다.

플로우:
1. 캐시 히트 → 전체 텍스트를 한 번에 전달, 종료
2. 진행 중인 동일 키 요청이 있으면 그 결과를 대기 (single-flight)
3. 캐시 미스 → 싱크를 점진 전송 모드로 열고 조각을 도착 순서대로 전달/누적
4. 조각이 하나도 없으면 fallback 문구를 전체 텍스트로 사용
5. 정상 종료 시 캐시 저장, 실패 시 캐시 없이 오류 조각 전달
6. 모든 경로에서 싱크 종료
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from news_gateway.application.exceptions import (
    UpstreamError,
    UpstreamFailureError,
    UpstreamQuotaExceededError,
)
from news_gateway.application.services.single_flight import FlightOutcome, SingleFlight

if TYPE_CHECKING:
    from news_gateway.application.ports.response_cache import ResponseCachePort
    from news_gateway.application.ports.stream_sink import StreamSinkPort
    from news_gateway.application.ports.text_generation import TextGenerationPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelayMessages:
    """사용자 노출 메시지."""

    fallback: str
    quota_error: str
    upstream_error: str


class StreamRelayService:
    """스트리밍 릴레이 서비스.

    책임:
    - 업스트림 조각의 순서 보장 전달
    - 전체 텍스트 누적 및 캐시 커밋
    - 실패 분류별 오류 조각 전달
    - 싱크 종료 감지 시 업스트림 소비 중단
    """

    def __init__(
        self,
        generator: TextGenerationPort,
        cache: ResponseCachePort,
        messages: RelayMessages,
        single_flight: SingleFlight | None = None,
    ):
        """초기화.

        Args:
            generator: 생성형 텍스트 포트
            cache: 응답 캐시
            messages: fallback/오류 메시지
            single_flight: 동일 키 동시 요청 병합기 (None이면 비활성)
        """
        self._generator = generator
        self._cache = cache
        self._messages = messages
        self._single_flight = single_flight
        self._tasks: set[asyncio.Task[str | None]] = set()

    @property
    def active_relays(self) -> int:
        return len(self._tasks)

    def spawn(
        self,
        prompt: str,
        system_instruction: str | None,
        cache_key: str,
        sink: StreamSinkPort,
    ) -> asyncio.Task[str | None]:
        """릴레이를 백그라운드 태스크(producer)로 실행."""
        task = asyncio.create_task(
            self.relay(prompt, system_instruction, cache_key, sink),
            name=f"relay:{cache_key}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def shutdown(self) -> None:
        """진행 중인 릴레이 취소."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Cancelled in-flight relays", extra={"count": len(tasks)})

    async def relay(
        self,
        prompt: str,
        system_instruction: str | None,
        cache_key: str,
        sink: StreamSinkPort,
    ) -> str | None:
        """릴레이 실행.

        Args:
            prompt: 업스트림 프롬프트
            system_instruction: 시스템 지시문
            cache_key: 정규화된 캐시 키
            sink: 클라이언트 싱크

        Returns:
            전체 텍스트 (실패/중단 시 None)
        """
        try:
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.info("Relay cache hit", extra={"cache_key": cache_key})
                await sink.write(cached)
                return cached

            if self._single_flight is None:
                outcome = await self._run_upstream(prompt, system_instruction, cache_key, sink)
                return outcome.text
            return await self._relay_shared(prompt, system_instruction, cache_key, sink)
        finally:
            await sink.complete()

    async def resolve(
        self,
        prompt: str,
        system_instruction: str | None,
        cache_key: str,
    ) -> tuple[str, bool]:
        """비스트리밍 답변 (캐시 → generate → 캐시 저장).

        Returns:
            (전체 텍스트, 캐시 히트 여부)

        Raises:
            UpstreamError: 업스트림 실패
        """
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached, True

        text = await self._generator.generate(prompt, system_instruction)
        if not text:
            logger.warning("Upstream returned empty text", extra={"cache_key": cache_key})
            text = self._messages.fallback

        self._cache.set(cache_key, text)
        return text, False

    async def _relay_shared(
        self,
        prompt: str,
        system_instruction: str | None,
        cache_key: str,
        sink: StreamSinkPort,
    ) -> str | None:
        assert self._single_flight is not None
        flights = self._single_flight

        while (pending := flights.pending(cache_key)) is not None:
            logger.info("Awaiting in-flight relay", extra={"cache_key": cache_key})
            outcome = await asyncio.shield(pending)
            if outcome.aborted:
                # leader가 중단됨 → 다시 확인 후 필요하면 leader 승계
                continue
            if outcome.error is not None:
                await sink.write(self._error_message(outcome.error))
                return None
            await sink.write(outcome.text)
            return outcome.text

        flights.begin(cache_key)
        outcome = FlightOutcome()
        try:
            outcome = await self._run_upstream(prompt, system_instruction, cache_key, sink)
            return outcome.text
        finally:
            flights.finish(cache_key, outcome)

    async def _run_upstream(
        self,
        prompt: str,
        system_instruction: str | None,
        cache_key: str,
        sink: StreamSinkPort,
    ) -> FlightOutcome:
        """업스트림 스트림 소비 + 오류 조각 변환."""
        try:
            text = await self._consume(prompt, system_instruction, cache_key, sink)
            return FlightOutcome(text=text)
        except UpstreamError as e:
            error: UpstreamError = e
            logger.error(
                "Relay upstream failed",
                extra={"cache_key": cache_key, "error": str(e), "type": type(e).__name__},
            )
        except Exception as e:
            logger.exception("Relay failed unexpectedly", extra={"cache_key": cache_key})
            error = UpstreamFailureError(str(e))

        await sink.write(self._error_message(error))
        return FlightOutcome(error=error)

    async def _consume(
        self,
        prompt: str,
        system_instruction: str | None,
        cache_key: str,
        sink: StreamSinkPort,
    ) -> str | None:
        if sink.closed:
            logger.info("Sink closed before relay start", extra={"cache_key": cache_key})
            return None

        sink.open()
        fragments: list[str] = []
        stream = self._generator.generate_stream(prompt, system_instruction)

        logger.info("Relay started", extra={"cache_key": cache_key})
        try:
            async for fragment in stream:
                if not fragment:
                    continue
                fragments.append(fragment)
                delivered = await sink.write(fragment)
                if not delivered or sink.closed:
                    logger.info(
                        "Client disconnected, stopping relay",
                        extra={"cache_key": cache_key, "fragments": len(fragments)},
                    )
                    return None
        finally:
            await _aclose(stream)

        if fragments:
            full_text = "".join(fragments)
        else:
            logger.warning("Upstream returned no fragments", extra={"cache_key": cache_key})
            full_text = self._messages.fallback
            await sink.write(full_text)

        self._cache.set(cache_key, full_text)
        logger.info(
            "Relay completed",
            extra={
                "cache_key": cache_key,
                "fragments": len(fragments),
                "length": len(full_text),
            },
        )
        return full_text

    def _error_message(self, error: UpstreamError) -> str:
        if isinstance(error, UpstreamQuotaExceededError):
            return self._messages.quota_error
        return self._messages.upstream_error


async def _aclose(stream: AsyncIterator[str]) -> None:
    """업스트림 async generator 정리."""
    aclose = getattr(stream, "aclose", None)
    if aclose is not None:
        await aclose()
