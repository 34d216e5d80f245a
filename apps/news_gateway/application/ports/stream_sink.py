"""Stream Sink Port.

클라이언트 방향 텍스트 스트림 출력 인터페이스.
"""

from abc import ABC, abstractmethod


class StreamSinkPort(ABC):
    """스트림 싱크 포트.

    순서가 보장된 텍스트 조각을 받아 클라이언트로 전달한다.
    클라이언트 연결이 끊기면 closed가 True가 되고 이후 write는 무시된다.
    """

    @property
    @abstractmethod
    def closed(self) -> bool:
        """클라이언트 측 종료 여부."""
        pass

    @abstractmethod
    def open(self) -> None:
        """점진 전송 모드로 전환 (첫 조각 이전에 호출)."""
        pass

    @abstractmethod
    async def write(self, fragment: str) -> bool:
        """조각 전달.

        Returns:
            전달 여부 (싱크가 닫혔으면 False)
        """
        pass

    @abstractmethod
    async def complete(self) -> None:
        """스트림 종료 신호 (여러 번 호출해도 안전)."""
        pass
