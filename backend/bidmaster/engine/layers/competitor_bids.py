"""경쟁자 입찰가 시뮬레이션

FMV를 중심으로 난이도·과열도에 따라 평균과 분산이 움직이는 절단 정규분포에서
경쟁 입찰가 N개를 뽑는다. 시드를 고정하지 않으므로 실행마다 값은 달라지고,
분포의 형태(구간·평균·분산)만 보장된다. 경쟁자 입찰가는 사용자 입찰가에
도달하지 않는다.
"""

from __future__ import annotations

import logging
import random

from bidmaster.engine.rules import (
    BASE_SPREAD_RATIO,
    COMPETITOR_MAX_DRAWS,
    DEFAULT_BID_TICK,
    DIFFICULTY_MEAN_BIAS,
    DIFFICULTY_SPREAD_ADD,
    HEAT_MEAN_LIFT,
    HEAT_SPREAD_ADD,
    HEATED_TAIL_FRACTION,
    IRWIN_HALL_TERMS,
    round_won,
)
from bidmaster.schemas.engine import Difficulty

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1. 분포 파라미터
# ---------------------------------------------------------------------------


def competitor_mean(fmv: int, difficulty: Difficulty, overheat_score: float) -> float:
    """FMV에 난이도 편향(-2%/0/+3%)과 과열 가산(최대 +3%)을 적용한 평균."""
    return fmv * (1 + DIFFICULTY_MEAN_BIAS[difficulty] + HEAT_MEAN_LIFT * overheat_score)


def competitor_spread(fmv: int, difficulty: Difficulty, overheat_score: float) -> float:
    """표준편차: FMV의 5~7%."""
    return fmv * (BASE_SPREAD_RATIO + HEAT_SPREAD_ADD * overheat_score + DIFFICULTY_SPREAD_ADD[difficulty])


def competitor_bounds(fmv: int, appraisal: int, lowest_bid: int, user_bid: int) -> tuple[int, int]:
    """경쟁 입찰가 허용 구간.

    하한 = max(최저가 × 1.02, FMV × 0.85)
    상한 = min(FMV × 1.05, 감정가 × 0.99, 사용자 입찰가 × 0.985)
    """
    lower = max(-(-lowest_bid * 102 // 100), -(-fmv * 85 // 100))
    upper = min(fmv * 105 // 100, appraisal * 99 // 100, user_bid * 985 // 1000)
    return lower, upper


# ---------------------------------------------------------------------------
# 2. 샘플링
# ---------------------------------------------------------------------------


def _standard_normal(rng: random.Random) -> float:
    """균등분포 합으로 근사한 표준정규 난수."""
    return sum(rng.random() for _ in range(IRWIN_HALL_TERMS)) - IRWIN_HALL_TERMS / 2


def sample_truncated(
    rng: random.Random,
    mean: float,
    spread: float,
    lower: int,
    upper: int,
    max_draws: int = COMPETITOR_MAX_DRAWS,
) -> float:
    """[lower, upper] 안의 값이 나올 때까지 재추출한다.

    한도 내에 실패하면 구간으로 자른 평균을 반환한다 (구간이 좁으면 평균 쪽으로 약간 쏠린다).
    """
    for _ in range(max_draws):
        value = mean + spread * _standard_normal(rng)
        if lower <= value <= upper:
            return value
    return min(max(mean, lower), upper)


def _snap(value: float, tick: int) -> int:
    return round_won(value / tick) * tick


# ---------------------------------------------------------------------------
# 3. 레이어 진입점
# ---------------------------------------------------------------------------


def generate_competitor_bids(
    n: int,
    fmv: int,
    appraisal: int,
    lowest_bid: int,
    user_bid: int,
    difficulty: Difficulty = Difficulty.NORMAL,
    overheat_score: float = 0.0,
    tick: int = DEFAULT_BID_TICK,
    rng: random.Random | None = None,
) -> list[int]:
    """경쟁자 입찰가 n개를 오름차순으로 반환한다.

    구간이 비어 있으면 (예: 사용자 입찰가가 최저가에 너무 가까움) 빈 리스트를 반환한다.
    """
    if n <= 0:
        return []

    rng = rng or random.Random()
    heat = max(0.0, min(1.0, overheat_score))

    mean = competitor_mean(fmv, difficulty, heat)
    spread = competitor_spread(fmv, difficulty, heat)
    lower, upper = competitor_bounds(fmv, appraisal, lowest_bid, user_bid)

    lo_tick = -(-lower // tick) * tick
    # 틱 격자 위에서 사용자 입찰가보다 엄격히 낮은 최대 금액까지만 허용
    hi_tick = min(upper // tick * tick, (user_bid - 1) // tick * tick)
    if lo_tick > hi_tick:
        logger.warning(
            "경쟁자 입찰 구간 없음: 하한=%s원 > 상한=%s원 (사용자 입찰가 %s원)",
            f"{lower:,}",
            f"{upper:,}",
            f"{user_bid:,}",
        )
        return []

    bids: list[int] = []
    seen: set[int] = set()
    for i in range(n):
        raw = sample_truncated(rng, mean, spread, lower, upper)
        value = min(max(_snap(raw, tick), lo_tick), hi_tick)
        if value in seen:
            # 같은 금액이 몰리지 않도록 한 틱씩 번갈아 비켜 놓는다
            nudged = value + (tick if i % 2 == 0 else -tick)
            if lo_tick <= nudged <= hi_tick:
                value = nudged
        seen.add(value)
        bids.append(value)

    # 과열 상단 꼬리: 일부 표본을 분산에 비례해 끌어올린다 (최대 n/3개)
    boost_count = min(n // 3, round_won(n * HEATED_TAIL_FRACTION * heat))
    for idx in rng.sample(range(n), boost_count):
        lift = _snap(spread * (0.5 + 0.5 * rng.random()), tick)
        bids[idx] = min(bids[idx] + lift, hi_tick)

    bids.sort()
    logger.debug(
        "경쟁자 %d명 생성: 평균=%s원, 표준편차=%s원, 구간=[%s, %s]",
        n,
        f"{mean:,.0f}",
        f"{spread:,.0f}",
        f"{lo_tick:,}",
        f"{hi_tick:,}",
    )
    return bids
