"""수익성 레이어 - FMV/Exit 기준 안전마진과 손익분기점"""

from __future__ import annotations

import logging

from bidmaster.schemas.profit import ProfitResult, SafetyBlock, SafetyMargin

logger = logging.getLogger(__name__)


def _safe_rate(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def evaluate_profit(
    fmv: int,
    total_acquisition: int,
    exit_price: int | None = None,
) -> ProfitResult:
    """FMV와 매도가(Exit) 기준으로 안전마진을 계산한다.

    Exit 가정이 없으면 FMV를 쓴다. 손익분기 매도가는 총인수금액이며
    매도 시 세금·중개보수는 반영하지 않는다.
    """
    exit_value = exit_price if exit_price is not None else fmv

    margin_fmv = fmv - total_acquisition
    rate_fmv = _safe_rate(margin_fmv, fmv)
    margin_exit = exit_value - total_acquisition
    rate_exit = _safe_rate(margin_exit, exit_value)

    notes = [
        f"손익분기점(매도기준): {total_acquisition:,}원",
        f"FMV 대비 마진: {margin_fmv:,}원 ({rate_fmv * 100:.2f}%)",
        f"Exit 대비 마진: {margin_exit:,}원 ({rate_exit * 100:.2f}%)",
    ]
    if exit_price is None:
        notes.append("Exit 가정 없음 → FMV를 매도가로 사용")

    return ProfitResult(
        margin_vs_fmv=margin_fmv,
        margin_rate_vs_fmv=rate_fmv,
        margin_vs_exit=margin_exit,
        margin_rate_vs_exit=rate_exit,
        exit_price=exit_value,
        be_point=total_acquisition,
        notes=notes,
    )


def build_safety_block(profit: ProfitResult, fmv: int, user_bid_price: int) -> SafetyBlock:
    """리포트용 안전마진 묶음. 입찰가 기준 마진은 FMV - 입찰가."""
    user_margin = fmv - user_bid_price
    return SafetyBlock(
        fmv=SafetyMargin(amount=profit.margin_vs_fmv, rate=profit.margin_rate_vs_fmv),
        exit=SafetyMargin(amount=profit.margin_vs_exit, rate=profit.margin_rate_vs_exit),
        user_bid=SafetyMargin(amount=user_margin, rate=_safe_rate(user_margin, fmv)),
        over_fmv=user_bid_price > fmv,
    )
