"""경매 엔진 파이프라인 - 단일 진입점

가치평가 → 권리분석 → 점유 리스크 → 비용 → 수익성 순으로 실행하고, 입찰 정책 상한과
과열 점수로 3단계 입찰 전략을, 목표 안전마진으로 권장 입찰가 범위를 만든 뒤,
필요하면 경쟁자 입찰을 시뮬레이션한다.
각 호출은 독립적이며 공유 상태가 없다.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Any

from bidmaster.config import settings
from bidmaster.engine.errors import EngineInputError
from bidmaster.engine.layers.bid_policy import cap_bid_price
from bidmaster.engine.layers.competitor_bids import generate_competitor_bids
from bidmaster.engine.layers.costs import calc_costs
from bidmaster.engine.layers.overheat import compute_overheat
from bidmaster.engine.layers.profit import build_safety_block, evaluate_profit
from bidmaster.engine.layers.recommended_bid import recommend_bid_range
from bidmaster.engine.layers.rights_analysis import classify_rights
from bidmaster.engine.layers.tenant_risk import assess_tenant_risk
from bidmaster.engine.layers.valuation import resolve_valuation
from bidmaster.schemas.engine import (
    BidLadder,
    BidLadderRung,
    BidStage,
    EngineInput,
    EngineMeta,
    EngineOutput,
)
from bidmaster.schemas.property import BiddingOutcome

logger = logging.getLogger(__name__)

STAGE_LABELS: dict[BidStage, str] = {
    BidStage.CONSERVATIVE: "보수적",
    BidStage.BALANCED: "중립",
    BidStage.AGGRESSIVE: "공격적",
}


def _trace(verbose: bool, msg: str, *args: Any) -> None:
    """verbose 옵션이 켜져 있으면 INFO, 아니면 DEBUG로 남긴다."""
    logger.log(logging.INFO if verbose else logging.DEBUG, msg, *args)


# ---------------------------------------------------------------------------
# 1. 입력 검증
# ---------------------------------------------------------------------------


def validate_engine_input(engine_input: EngineInput) -> None:
    """구조적으로 잘못된 입력을 파이프라인 진입 전에 거부한다."""
    snapshot = engine_input.snapshot
    errors: list[str] = []

    if engine_input.user_bid_price <= 0:
        errors.append(f"입찰가는 양수여야 합니다: {engine_input.user_bid_price}")

    for name in ("appraisal", "min_bid", "fmv_hint"):
        value = getattr(snapshot, name)
        if value is not None and value <= 0:
            errors.append(f"{name}은(는) 양수여야 합니다: {value}")

    if engine_input.exit_price_hint is not None and engine_input.exit_price_hint <= 0:
        errors.append(f"exit_price_hint는 양수여야 합니다: {engine_input.exit_price_hint}")
    if engine_input.kappa_override is not None and engine_input.kappa_override <= 0:
        errors.append(f"kappa_override는 양수여야 합니다: {engine_input.kappa_override}")
    if engine_input.market_signals and any(v <= 0 for v in engine_input.market_signals.values()):
        errors.append("market_signals 값은 양수여야 합니다")

    for right in snapshot.rights:
        if right.amount is not None and right.amount < 0:
            errors.append(f"권리 #{right.id} 금액이 음수입니다: {right.amount}")
    for tenant in snapshot.tenants:
        if tenant.deposit < 0:
            errors.append(f"임차인 #{tenant.id} 보증금이 음수입니다: {tenant.deposit}")
        if tenant.priority_payment < 0:
            errors.append(f"임차인 #{tenant.id} 최우선변제액이 음수입니다: {tenant.priority_payment}")

    options = engine_input.options
    if options.competitor_count is not None and options.competitor_count < 0:
        errors.append(f"경쟁자 수는 0 이상이어야 합니다: {options.competitor_count}")
    if options.tick is not None and options.tick <= 0:
        errors.append(f"입찰 단위는 양수여야 합니다: {options.tick}")

    if errors:
        raise EngineInputError("; ".join(errors))


# ---------------------------------------------------------------------------
# 2. 3단계 입찰 전략
# ---------------------------------------------------------------------------


def build_bid_ladder(fmv: int, appraisal: int, min_bid: int, tick: int) -> BidLadder:
    """최저가(하한)와 정책 상한 사이에서 보수적/중립/공격적 입찰가를 만든다.

    정책 상한은 어떤 단계에서도 넘지 않는다. 상한이 최저가보다 낮으면
    세 단계 모두 상한으로 두고 notes에 남긴다.
    """
    cap = cap_bid_price(fmv, min_bid)
    notes: list[str] = [f"정책 상한 {cap:,}원 = min(FMV×0.95, 최저가×1.05)"]

    if cap < min_bid:
        notes.append(f"정책 상한이 최저가({min_bid:,}원)보다 낮음 → 입찰 비권장")
        prices = {stage: cap for stage in BidStage}
    else:
        midpoint = min_bid + (cap - min_bid) // 2
        balanced = max(min_bid, midpoint // tick * tick)
        prices = {
            BidStage.CONSERVATIVE: min_bid,
            BidStage.BALANCED: balanced,
            BidStage.AGGRESSIVE: cap,
        }

    rungs = {
        stage: BidLadderRung(
            stage=stage,
            label=STAGE_LABELS[stage],
            price=price,
            overheat=compute_overheat(price, fmv, appraisal),
        )
        for stage, price in prices.items()
    }
    return BidLadder(
        conservative=rungs[BidStage.CONSERVATIVE],
        balanced=rungs[BidStage.BALANCED],
        aggressive=rungs[BidStage.AGGRESSIVE],
        policy_floor=min_bid,
        policy_cap=cap,
        notes=notes,
    )


# ---------------------------------------------------------------------------
# 3. 엔진 실행
# ---------------------------------------------------------------------------


def run_engine(engine_input: EngineInput, rng: random.Random | None = None) -> EngineOutput:
    """경매 엔진을 실행한다.

    처리 흐름:
    1. 입력 검증 (EngineInputError)
    2. 가치평가: FMV/감정가/최저가
    3. 권리분석: 말소기준권리, 인수/소멸/위험, 임차인 대항력
    4. 점유 리스크: 임차인 점유 점수, 명도비용 범위 (유찰 이력 반영)
    5. 비용: 세금, 명도비, 기타비용, 총인수금액
    6. 수익성: FMV/Exit 안전마진, 손익분기점
    7. 과열 점수, 3단계 입찰 전략, 목표 마진 권장 입찰가, (옵션) 경쟁자 입찰 시뮬레이션
    """
    validate_engine_input(engine_input)

    snapshot = engine_input.snapshot
    options = engine_input.options
    bid = engine_input.user_bid_price
    verbose = options.verbose
    tick = options.tick or settings.bid_tick

    _trace(verbose, "경매 엔진 실행 시작: case=%s, 유형=%s, 입찰가=%s원", snapshot.case_id, snapshot.property_type, f"{bid:,}")

    valuation = resolve_valuation(
        appraisal=snapshot.appraisal,
        min_bid=snapshot.min_bid,
        fmv_hint=snapshot.fmv_hint,
        property_type=snapshot.property_type,
        market_signals=engine_input.market_signals,
        kappa_override=engine_input.kappa_override,
        min_bid_ratio=settings.min_bid_ratio,
        fallback_fmv=settings.fallback_fmv,
        default_kappa=settings.default_kappa,
    )
    _trace(verbose, "가치평가 완료: FMV=%s원, 감정가=%s원, 최저가=%s원", f"{valuation.fmv:,}", f"{valuation.appraisal:,}", f"{valuation.min_bid:,}")

    rights = classify_rights(snapshot.rights, snapshot.tenants, snapshot.dividend_deadline)
    _trace(verbose, "권리분석 완료: 인수총액=%s원, 위험배지=%s", f"{rights.total_assumed_amount:,}", [f.value for f in rights.risk_flags])

    failed_rounds = sum(1 for r in snapshot.bidding_history if r.outcome is BiddingOutcome.FAILED)
    tenant_risk = assess_tenant_risk(rights.tenant_findings, rights.base_right, snapshot.dividend_deadline, failed_rounds)
    _trace(verbose, "점유 리스크: %d점 (%s)", tenant_risk.score, tenant_risk.label.value)

    costs = calc_costs(
        bid_price=bid,
        assumed_amount=rights.total_assumed_amount,
        property_type=snapshot.property_type,
        risk_flags=rights.risk_flags,
        overrides=engine_input.cost_overrides,
    )
    _trace(verbose, "비용 계산 완료: 총인수금액=%s원", f"{costs.total_acquisition:,}")

    profit = evaluate_profit(valuation.fmv, costs.total_acquisition, engine_input.exit_price_hint)
    safety = build_safety_block(profit, valuation.fmv, bid)
    _trace(verbose, "수익성 평가 완료: FMV 마진=%s원 (%.2f%%)", f"{profit.margin_vs_fmv:,}", profit.margin_rate_vs_fmv * 100)

    overheat = compute_overheat(bid, valuation.fmv, valuation.appraisal)
    ladder = build_bid_ladder(valuation.fmv, valuation.appraisal, valuation.min_bid, tick)
    _trace(verbose, "입찰 전략: %s, 과열 점수=%.2f", [r.price for r in ladder.rungs], overheat)

    recommended = recommend_bid_range(
        valuation.fmv,
        rights.total_assumed_amount,
        snapshot.property_type,
        rights.risk_flags,
        engine_input.cost_overrides,
        floor=valuation.min_bid,
        cap=ladder.policy_cap,
        tick=tick,
    )
    _trace(verbose, "권장 입찰가 (마진 20/15/10%%): %s", [t.price for t in recommended.targets])

    competitor_bids: list[int] | None = None
    count = options.competitor_count if options.competitor_count is not None else settings.default_competitor_count
    if options.simulate_competitors:
        competitor_bids = generate_competitor_bids(
            n=count,
            fmv=valuation.fmv,
            appraisal=valuation.appraisal,
            lowest_bid=valuation.min_bid,
            user_bid=bid,
            difficulty=options.difficulty,
            overheat_score=overheat,
            tick=tick,
            rng=rng,
        )
        _trace(verbose, "경쟁자 입찰 %d건 생성", len(competitor_bids))

    notes = [f"[가치평가] {n}" for n in valuation.notes]
    if failed_rounds:
        notes.append(f"[가치평가] 유찰 {failed_rounds}회 이력")
    notes += [f"[권리분석] {n}" for n in rights.notes]
    notes += [f"[비용] {n}" for n in costs.notes]
    notes += [f"[수익성] {n}" for n in profit.notes]
    notes += [f"[점유리스크] {n}" for n in tenant_risk.notes]
    notes += [f"[입찰전략] {n}" for n in ladder.notes]
    notes += [f"[권장입찰가] {n}" for n in recommended.notes]
    if safety.over_fmv:
        notes.append(f"[입찰전략] 입찰가가 FMV를 {bid - valuation.fmv:,}원 초과")
    if competitor_bids == [] and count > 0:
        notes.append("[경쟁자] 허용 구간이 없어 경쟁 입찰을 생성하지 않음")

    logger.info(
        "경매 엔진 완료: case=%s, 총인수금액=%s원, FMV 마진=%s원",
        snapshot.case_id,
        f"{costs.total_acquisition:,}",
        f"{profit.margin_vs_fmv:,}",
    )

    return EngineOutput(
        valuation=valuation,
        rights=rights,
        costs=costs,
        profit=profit,
        safety=safety,
        bid_ladder=ladder,
        recommended_range=recommended,
        tenant_risk=tenant_risk,
        overheat_score=overheat,
        risk_flags=list(rights.risk_flags),
        meta=EngineMeta(engine_version=settings.engine_version, generated_at=datetime.now(timezone.utc)),
        competitor_bids=competitor_bids,
        notes=notes,
    )
