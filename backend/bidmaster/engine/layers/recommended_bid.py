"""목표 안전마진 권장 입찰가

세금·인수금액·명도비를 모두 반영한 총인수금액 기준으로, FMV 대비 안전마진이
목표율(20%/15%/10%) 이상 남는 최대 입찰가를 찾는다. 탐색 구간은 최저가 ~ 정책 상한이다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bidmaster.engine.layers.costs import calc_costs
from bidmaster.engine.layers.profit import evaluate_profit
from bidmaster.engine.rules import (
    DEFAULT_COST_TYPE,
    MARGIN_TARGET_HIGH,
    MARGIN_TARGET_LOW,
    MARGIN_TARGET_OPTIMAL,
    resolve_property_type,
)
from bidmaster.schemas.cost import CostOverrides
from bidmaster.schemas.profit import MarginTargetBid, RecommendedBidRange
from bidmaster.schemas.property import RiskFlag

logger = logging.getLogger(__name__)


def margin_rate_at(
    bid_price: int,
    fmv: int,
    assumed_amount: int,
    property_type: str,
    risk_flags: Iterable[RiskFlag] = (),
    overrides: CostOverrides | None = None,
) -> float:
    """입찰가 하나에 대한 FMV 대비 안전마진율."""
    costs = calc_costs(bid_price, assumed_amount, property_type, risk_flags, overrides)
    return evaluate_profit(fmv, costs.total_acquisition).margin_rate_vs_fmv


def find_max_bid_for_margin(
    target_rate: float,
    fmv: int,
    assumed_amount: int,
    property_type: str,
    risk_flags: Iterable[RiskFlag] = (),
    overrides: CostOverrides | None = None,
    *,
    floor: int,
    cap: int,
    tick: int,
) -> MarginTargetBid:
    """[floor, cap] 안의 틱 배수 중 안전마진율이 target_rate 이상인 최대 입찰가.

    총인수금액은 입찰가에 대해 단조 증가하므로 틱 단위 이분 탐색으로 찾는다.
    최저가에서도 목표에 못 미치면 price=None.
    """
    flags = list(risk_flags)

    def rate(k: int) -> float:
        return margin_rate_at(k * tick, fmv, assumed_amount, property_type, flags, overrides)

    lo = -(-floor // tick)
    hi = cap // tick
    if lo > hi or rate(lo) < target_rate:
        return MarginTargetBid(target_rate=target_rate, price=None, margin_rate=None)

    while lo < hi:
        mid = (lo + hi + 1) // 2
        if rate(mid) >= target_rate:
            lo = mid
        else:
            hi = mid - 1

    return MarginTargetBid(target_rate=target_rate, price=lo * tick, margin_rate=rate(lo))


def recommend_bid_range(
    fmv: int,
    assumed_amount: int,
    property_type: str,
    risk_flags: Iterable[RiskFlag] = (),
    overrides: CostOverrides | None = None,
    *,
    floor: int,
    cap: int,
    tick: int,
) -> RecommendedBidRange:
    """마진 20%/15%/10% 기준 최대 입찰가로 권장 범위(하단/최적/상단)를 만든다."""
    # 미등록 유형은 calc_costs와 같은 기준으로 한 번만 치환해 탐색 중 반복 로그를 막는다
    cost_type = property_type if resolve_property_type(property_type) is not None else DEFAULT_COST_TYPE.value
    flags = list(risk_flags)

    low, optimal, high = (
        find_max_bid_for_margin(
            target, fmv, assumed_amount, cost_type, flags, overrides, floor=floor, cap=cap, tick=tick
        )
        for target in (MARGIN_TARGET_LOW, MARGIN_TARGET_OPTIMAL, MARGIN_TARGET_HIGH)
    )

    notes: list[str] = []
    if cap < floor:
        notes.append(f"정책 상한({cap:,}원)이 최저가({floor:,}원)보다 낮아 권장 범위 없음")
    for item in (low, optimal, high):
        if item.price is None:
            notes.append(f"안전마진 {item.target_rate * 100:.0f}%: 최저가에서도 충족 불가")
        else:
            notes.append(
                f"안전마진 {item.target_rate * 100:.0f}% 기준 최대 입찰가 {item.price:,}원"
                f" (실제 {item.margin_rate * 100:.2f}%)"
            )

    logger.debug("권장 입찰가: %s", [item.price for item in (low, optimal, high)])

    return RecommendedBidRange(low=low, optimal=optimal, high=high, notes=notes)
