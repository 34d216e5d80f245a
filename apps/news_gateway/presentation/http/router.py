"""HTTP Router.

FastAPI 라우터 설정.
헬스체크를 제외한 모든 엔드포인트는 Rate Limit 게이트를 통과한다.
"""

from fastapi import APIRouter, Depends

from news_gateway.presentation.http.controllers.admin_controller import (
    router as admin_router,
)
from news_gateway.presentation.http.controllers.health_controller import (
    router as health_router,
)
from news_gateway.presentation.http.controllers.news_controller import (
    router as news_router,
)
from news_gateway.presentation.http.controllers.question_controller import (
    router as question_router,
)
from news_gateway.presentation.http.middleware import enforce_rate_limit

router = APIRouter()

# 제한 대상
gated = APIRouter(dependencies=[Depends(enforce_rate_limit)])
gated.include_router(question_router)
gated.include_router(news_router)
gated.include_router(admin_router)

router.include_router(gated)
router.include_router(health_router)
