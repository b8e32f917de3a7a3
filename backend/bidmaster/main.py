import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bidmaster.api.router import api_router
from bidmaster.config import settings


def _setup_logging() -> None:
    """애플리케이션 로깅을 설정한다."""
    log_format = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
    date_format = "%H:%M:%S"
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    # 외부 라이브러리 로그는 WARNING 이상만, 앱 로그만 상세 출력
    logging.getLogger().setLevel(logging.WARNING)
    logging.getLogger("bidmaster").setLevel(level)


_setup_logging()


app = FastAPI(
    title="Bid Master 경매 엔진",
    description="경매 물건의 가치평가, 권리분석, 총인수금액, 안전마진, 입찰 전략을 계산합니다.",
    version="0.2.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")
