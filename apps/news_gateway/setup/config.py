"""News Gateway Configuration."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_INSTRUCTION = """
Eres un verificador de noticias profesional.
Responde de forma clara, neutral y basada en hechos actuales.
Fecha de hoy: {today}
"""

DEFAULT_NEWS_FEED_URL = "https://news.google.com/rss?hl=es-419&gl=MX&ceid=MX:es-419"


class Settings(BaseSettings):
    """News Gateway 설정.

    프롬프트 문구, 피드 소스, 수치 제한값은 모두 설정으로 관리한다.
    """

    app_name: str = "News Gateway"

    # Environment
    environment: str = Field(
        "local",
        validation_alias=AliasChoices("GATEWAY_ENVIRONMENT", "ENVIRONMENT"),
    )
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(
        3000,
        validation_alias=AliasChoices("GATEWAY_PORT", "PORT"),
    )

    # CORS
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # 응답 캐시
    cache_ttl_seconds: float = 900.0  # 15분
    cache_max_entries: int = 1024
    cache_sweep_interval_seconds: float = 60.0

    # 클라이언트별 Rate Limit
    rate_limit_requests: int = 50
    rate_limit_window_seconds: float = 60.0
    rate_limit_max_clients: int = 10_000
    trust_forwarded_headers: bool = False  # 프록시 뒤에서만 활성화

    # Gemini
    gemini_api_key: str | None = Field(
        None,
        validation_alias=AliasChoices("GATEWAY_GEMINI_API_KEY", "GEMINI_API_KEY"),
    )
    gemini_model: str = "gemini-2.5-flash"
    gemini_use_search: bool = True

    # 프롬프트
    system_instruction: str = DEFAULT_SYSTEM_INSTRUCTION
    question_prompt_template: str = 'Investiga en Google: "{question}"'

    # 뉴스 피드
    feed_provider: str = "rss"  # "rss" | "newsapi"
    news_feed_url: str = DEFAULT_NEWS_FEED_URL
    news_category_feeds: dict[str, str] = Field(
        default_factory=dict,
        description="카테고리 → 피드 URL (비어 있으면 단일 피드 모드)",
    )
    news_max_items: int = 5
    news_cache_per_day: bool = False
    newsapi_key: str | None = None
    newsapi_url: str = "https://newsapi.org/v2/top-headlines"
    feed_timeout_seconds: float = 10.0
    feed_user_agent: str = "Mozilla/5.0 (NewsBot)"

    # 날짜 표기
    locale_timezone: str = "America/Mexico_City"

    # 스트리밍
    stream_queue_size: int = 64
    stream_write_timeout_seconds: float = 30.0

    # 사용자 노출 메시지
    fallback_message: str = "No encontré información suficiente para responder."
    quota_error_message: str = (
        "\nLa IA alcanzó su límite de uso. Intenta nuevamente en unos minutos."
    )
    upstream_error_message: str = "\nError al consultar la IA"
    rate_limited_message: str = "Demasiadas peticiones, intenta más tarde"
    empty_question_message: str = "Pregunta vacía"

    model_config = SettingsConfigDict(
        env_prefix="GATEWAY_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def has_upstream_credential(self) -> bool:
        """Gemini API 키 설정 여부."""
        return bool(self.gemini_api_key)


@lru_cache
def get_settings() -> Settings:
    """설정 싱글톤."""
    return Settings()
