"""Response Cache Port.

정규화된 요청 키 → 응답 페이로드 캐시 인터페이스.
캐시는 권고용이므로 어떤 연산도 요청을 실패시키지 않는다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ResponseCachePort(ABC):
    """응답 캐시 포트."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """캐시 조회 (없거나 만료되었으면 None)."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """캐시 저장 (항상 덮어쓰고 저장 시각을 갱신)."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """단일 키 삭제."""
        pass

    @abstractmethod
    def clear(self) -> int:
        """전체 삭제.

        Returns:
            삭제된 엔트리 수
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """저장된 엔트리 수 (만료 여부 무관)."""
        pass

    def sweep(self) -> int:
        """만료 엔트리 정리 (optional).

        Returns:
            정리된 엔트리 수
        """
        return 0
