"""Prompt Builder.

설정된 템플릿으로 업스트림 프롬프트/시스템 지시문을 만든다.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone, tzinfo

from news_gateway.application.services.news_renderer import format_short_date


class PromptBuilder:
    """프롬프트 빌더.

    - question_template: ``{question}`` 플레이스홀더
    - system_template: ``{today}`` 플레이스홀더 (로컬 날짜)
    """

    def __init__(
        self,
        question_template: str,
        system_template: str,
        tz: tzinfo = timezone.utc,
        now: Callable[[], datetime] | None = None,
    ):
        self._question_template = question_template
        self._system_template = system_template
        self._tz = tz
        self._now = now or (lambda: datetime.now(self._tz))

    def build_prompt(self, question: str) -> str:
        return self._question_template.replace("{question}", question.strip())

    def build_system_instruction(self) -> str:
        today = format_short_date(self._now().date())
        return self._system_template.replace("{today}", today)
