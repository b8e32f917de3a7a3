"""입찰 정책 상한"""

from __future__ import annotations

from bidmaster.engine.rules import POLICY_CAP_FMV_PCT, POLICY_CAP_LOWEST_PCT


def cap_bid_price(fmv: int, lowest_bid: int) -> int:
    """권장/시뮬레이션 입찰가의 절대 상한.

    min(floor(FMV × 0.95), ceil(최저가 × 1.05)). 부동소수 오차 없이 정수 연산으로 계산한다.
    """
    cap_by_fmv = fmv * POLICY_CAP_FMV_PCT // 100
    cap_by_lowest = -(-lowest_bid * POLICY_CAP_LOWEST_PCT // 100)
    return min(cap_by_fmv, cap_by_lowest)
