"""Domain Constants.

도메인 레이어의 상수 정의.
"""

# 캐시 키 프리픽스
QUESTION_KEY_PREFIX = "question:"
NEWS_KEY = "news:today:v2"
NEWS_DAILY_KEY_PREFIX = "news:today:"

# 뉴스 카드 렌더링
SUMMARY_MAX_LENGTH = 140
DEFAULT_SUMMARY = "Noticia reciente del día"
DEFAULT_SOURCE_NAME = "Google News"

# 요일/월 이름 (OS 로케일에 의존하지 않기 위해 직접 정의)
SPANISH_WEEKDAYS = (
    "lunes",
    "martes",
    "miércoles",
    "jueves",
    "viernes",
    "sábado",
    "domingo",
)
SPANISH_MONTHS = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)
