"""경매 엔진 실행 엔드포인트 (저장 없음, 요청마다 독립 실행)."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from bidmaster.engine.errors import EngineInputError
from bidmaster.engine.layers.competitor_bids import generate_competitor_bids
from bidmaster.engine.pipeline import run_engine
from bidmaster.schemas.request import CompetitorRequest, EngineRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/evaluate")
async def evaluate(body: EngineRequest) -> dict:
    """물건 스냅샷과 입찰가로 타당성 리포트를 계산합니다.

    가치평가, 권리분석, 총인수금액, 안전마진, 3단계 입찰 전략을 반환하며
    options.simulate_competitors가 켜져 있으면 경쟁자 입찰가도 포함합니다.
    """
    try:
        output = run_engine(body.to_engine_input())
    except EngineInputError as exc:
        logger.warning("엔진 입력 거부: case=%s, %s", body.snapshot.case_id, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return asdict(output)


@router.post("/competitors")
async def competitors(body: CompetitorRequest) -> dict:
    """경쟁자 입찰가를 오름차순으로 생성합니다."""
    bids = generate_competitor_bids(
        n=body.n,
        fmv=body.fmv,
        appraisal=body.appraisal,
        lowest_bid=body.lowest_bid,
        user_bid=body.user_bid,
        difficulty=body.difficulty,
        overheat_score=body.overheat_score,
        tick=body.tick,
    )
    return {"bids": bids}
