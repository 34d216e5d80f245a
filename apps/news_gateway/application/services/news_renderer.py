"""News Card Renderer.

집계된 피드 항목을 프론트엔드가 그대로 삽입하는 HTML 카드로 변환한다.
모든 텍스트는 HTML 이스케이프 처리.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from html import escape

from news_gateway.domain.constants import (
    DEFAULT_SOURCE_NAME,
    DEFAULT_SUMMARY,
    SPANISH_MONTHS,
    SPANISH_WEEKDAYS,
    SUMMARY_MAX_LENGTH,
)
from news_gateway.domain.entities import FeedItem

ERROR_CARD_HTML = """<div class="error-card">
  <h3>Noticias no disponibles</h3>
  <p>Intenta nuevamente en unos minutos.</p>
</div>"""


def summarize(text: str, max_length: int = SUMMARY_MAX_LENGTH) -> str:
    """요약 잘라내기 (비어 있으면 기본 문구)."""
    text = text.strip()
    if not text:
        return DEFAULT_SUMMARY
    if len(text) <= max_length:
        return text
    return text[:max_length] + "…"


def render_news_card(item: FeedItem) -> str:
    """단일 뉴스 카드."""
    source = item.source_name or DEFAULT_SOURCE_NAME
    return f"""
<article class="news-card">
  <div class="news-body">
    <h3 class="news-title">{escape(item.title)}</h3>
    <p class="news-summary">{escape(summarize(item.summary))}</p>
    <div class="news-footer">
      <span class="news-source">{escape(source)}</span>
      <a href="{escape(item.link, quote=True)}" target="_blank" rel="noopener" class="news-link">
        Leer →
      </a>
    </div>
  </div>
</article>"""


def render_unavailable_card(category: str) -> str:
    """조회 실패 카테고리용 카드."""
    return f"""
<article class="news-card news-card--unavailable">
  <div class="news-body">
    <h3 class="news-title">{escape(category)}</h3>
    <p class="news-summary">Sección no disponible por el momento.</p>
  </div>
</article>"""


def render_news_cards(
    items: Iterable[FeedItem],
    unavailable_categories: Iterable[str] = (),
) -> str:
    """뉴스 카드 목록 렌더링."""
    cards = [render_news_card(item) for item in items]
    cards.extend(render_unavailable_card(c) for c in unavailable_categories)
    return "".join(cards)


def format_long_date(day: date) -> str:
    """긴 날짜 표기 (예: "lunes, 19 de octubre")."""
    weekday = SPANISH_WEEKDAYS[day.weekday()]
    month = SPANISH_MONTHS[day.month - 1]
    return f"{weekday}, {day.day} de {month}"


def format_short_date(day: date) -> str:
    """짧은 날짜 표기 (예: "19/10/2026")."""
    return f"{day.day}/{day.month}/{day.year}"
