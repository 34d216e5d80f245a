"""Cache Key Normalization."""

from __future__ import annotations

import re
from datetime import date

from news_gateway.domain.constants import (
    NEWS_DAILY_KEY_PREFIX,
    NEWS_KEY,
    QUESTION_KEY_PREFIX,
)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_question(text: str) -> str:
    """질문 텍스트 정규화 (trim, 소문자, 연속 공백 축약)."""
    return _WHITESPACE_RE.sub(" ", text.strip()).lower()


def question_key(text: str) -> str:
    """질문 캐시 키."""
    return f"{QUESTION_KEY_PREFIX}{normalize_question(text)}"


def news_key(day: date | None = None) -> str:
    """뉴스 캐시 키.

    Args:
        day: 일자별 키를 쓸 경우 기준 날짜 (None이면 고정 키)
    """
    if day is None:
        return NEWS_KEY
    return f"{NEWS_DAILY_KEY_PREFIX}{day.isoformat()}"
