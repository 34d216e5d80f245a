"""업스트림(생성 서비스, 뉴스 피드) 관련 예외."""

from news_gateway.application.exceptions.base import ApplicationError


class UpstreamError(ApplicationError):
    """업스트림 호출 실패 베이스."""


class UpstreamQuotaExceededError(UpstreamError):
    """업스트림 할당량/레이트리밋 초과 (재시도 권장)."""

    def __init__(self, message: str = "Upstream quota exceeded") -> None:
        super().__init__(message)


class UpstreamFailureError(UpstreamError):
    """일반 업스트림 오류."""

    def __init__(self, message: str = "Upstream call failed") -> None:
        super().__init__(message)


class FeedFetchError(UpstreamError):
    """피드 조회/파싱 실패."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        detail = f"Failed to fetch feed: {url}"
        if reason:
            detail = f"{detail} ({reason})"
        super().__init__(detail)


class EmptySourceError(ApplicationError):
    """피드 또는 생성 결과가 비어 있음."""

    def __init__(self, message: str = "Sin noticias disponibles") -> None:
        super().__init__(message)
