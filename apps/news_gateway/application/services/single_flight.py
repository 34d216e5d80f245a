"""Single-Flight Group.

동일 캐시 키에 대한 동시 캐시 미스 요청이 업스트림 호출 1회를 공유하도록 한다.
선행 요청(leader)이 결과를 확정하면 대기 중인 후속 요청(follower)이 같은 결과를 받는다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from news_gateway.application.exceptions import UpstreamError


@dataclass(frozen=True)
class FlightOutcome:
    """leader 요청의 최종 결과.

    text와 error가 모두 None이면 leader가 중단(클라이언트 이탈)된 것.
    """

    text: str | None = None
    error: UpstreamError | None = None

    @property
    def aborted(self) -> bool:
        return self.text is None and self.error is None


class SingleFlight:
    """키별 진행 중 호출 레지스트리.

    이벤트 루프 단일 스레드에서만 사용한다.
    Future에는 예외 대신 항상 FlightOutcome을 설정한다.
    """

    def __init__(self) -> None:
        self._flights: dict[str, asyncio.Future[FlightOutcome]] = {}

    def __len__(self) -> int:
        return len(self._flights)

    def pending(self, key: str) -> asyncio.Future[FlightOutcome] | None:
        """진행 중인 호출 조회."""
        return self._flights.get(key)

    def begin(self, key: str) -> asyncio.Future[FlightOutcome]:
        """leader로 등록."""
        if key in self._flights:
            raise RuntimeError(f"Flight already in progress for key: {key}")
        future: asyncio.Future[FlightOutcome] = asyncio.get_running_loop().create_future()
        self._flights[key] = future
        return future

    def finish(self, key: str, outcome: FlightOutcome) -> None:
        """결과 확정 및 등록 해제."""
        future = self._flights.pop(key, None)
        if future is not None and not future.done():
            future.set_result(outcome)
