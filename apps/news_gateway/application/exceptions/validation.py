"""요청 검증/제한 관련 예외."""

from news_gateway.application.exceptions.base import ApplicationError


class InvalidInputError(ApplicationError):
    """비어 있거나 공백뿐인 요청 텍스트."""

    def __init__(self, message: str = "Pregunta vacía") -> None:
        super().__init__(message)


class RateLimitedError(ApplicationError):
    """클라이언트 요청 한도 초과."""

    def __init__(
        self,
        retry_after_seconds: int,
        message: str = "Demasiadas peticiones, intenta más tarde",
    ) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(message)
