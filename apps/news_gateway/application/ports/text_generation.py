"""Text Generation Port - 생성형 텍스트 API 호출.

책임:
- 텍스트 생성 (generate)
- 스트리밍 생성 (generate_stream)

포함하지 않는 것:
- 캐싱, 레이트리밋 (Gateway 담당)
- 타임아웃 정책 (구현체 SDK 담당)
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class TextGenerationPort(ABC):
    """생성형 텍스트 포트.

    Gemini 등 구현체를 DI로 주입.
    구현체는 할당량 초과 시 UpstreamQuotaExceededError,
    그 외 실패 시 UpstreamFailureError를 발생시킨다.
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_instruction: str | None = None,
    ) -> str:
        """텍스트 생성.

        Args:
            prompt: 사용자 프롬프트
            system_instruction: 시스템 지시문

        Returns:
            생성된 전체 텍스트
        """
        pass

    @abstractmethod
    def generate_stream(
        self,
        prompt: str,
        system_instruction: str | None = None,
    ) -> AsyncIterator[str]:
        """스트리밍 텍스트 생성.

        Args:
            prompt: 사용자 프롬프트
            system_instruction: 시스템 지시문

        Yields:
            도착 순서대로의 텍스트 조각
        """
        pass
