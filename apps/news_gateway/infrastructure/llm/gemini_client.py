"""Google Gemini Client - TextGenerationPort 구현체.

순수 생성 API 호출만 담당합니다.
캐싱, 레이트리밋, 싱크 전달은 Application Layer에서 담당.

Port: application/ports/text_generation.py

Grounding (Google Search) 지원:
- https://ai.google.dev/gemini-api/docs/grounding
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from news_gateway.application.exceptions import (
    UpstreamError,
    UpstreamFailureError,
    UpstreamQuotaExceededError,
)
from news_gateway.application.ports.text_generation import TextGenerationPort

logger = logging.getLogger(__name__)

QUOTA_STATUS_CODES = frozenset({429})
QUOTA_STATUS_NAMES = frozenset({"RESOURCE_EXHAUSTED"})


class GeminiTextGenerator(TextGenerationPort):
    """Google Gemini 생성 클라이언트.

    API 키가 없어도 앱은 기동되며, 첫 호출 시점에 실패로 보고한다.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-flash",
        use_search: bool = True,
    ):
        """초기화.

        Args:
            api_key: Gemini API 키 (None이면 호출 시 UpstreamFailureError)
            model: 모델 이름
            use_search: Google Search grounding 도구 사용 여부
        """
        self._api_key = api_key
        self._model = model
        self._use_search = use_search
        self._client: genai.Client | None = None
        logger.info(
            "GeminiTextGenerator initialized",
            extra={"model": model, "use_search": use_search, "has_key": bool(api_key)},
        )

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise UpstreamFailureError("Gemini API key is not configured")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def _build_config(self, system_instruction: str | None) -> types.GenerateContentConfig:
        tools = [types.Tool(google_search=types.GoogleSearch())] if self._use_search else None
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            tools=tools,
        )

    async def generate(
        self,
        prompt: str,
        system_instruction: str | None = None,
    ) -> str:
        """텍스트 생성."""
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=self._build_config(system_instruction),
            )
        except Exception as e:
            raise _translate_error(e) from e
        return response.text or ""

    async def generate_stream(
        self,
        prompt: str,
        system_instruction: str | None = None,
    ) -> AsyncIterator[str]:
        """스트리밍 텍스트 생성."""
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content_stream(
                model=self._model,
                contents=prompt,
                config=self._build_config(system_instruction),
            )
            async for chunk in response:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            raise _translate_error(e) from e


def _translate_error(error: Exception) -> UpstreamError:
    """SDK 예외를 업스트림 예외로 분류."""
    if isinstance(error, UpstreamError):
        return error
    if isinstance(error, genai_errors.APIError):
        if error.code in QUOTA_STATUS_CODES or error.status in QUOTA_STATUS_NAMES:
            logger.warning(
                "Gemini quota exceeded",
                extra={"code": error.code, "status": error.status},
            )
            return UpstreamQuotaExceededError(str(error))
        logger.error(
            "Gemini API error",
            extra={"code": error.code, "status": error.status},
        )
        return UpstreamFailureError(str(error))
    logger.error("Gemini call failed: %s", error)
    return UpstreamFailureError(str(error))
