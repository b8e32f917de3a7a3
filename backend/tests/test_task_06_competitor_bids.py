"""Task-06: 경쟁자 입찰 시뮬레이션 테스트

난수 시드를 바꿔 가며 분포의 형태(구간, 정렬, 사용자 입찰가 미만)를 검증한다.
"""

from __future__ import annotations

import random
from statistics import mean

import pytest

from bidmaster.engine.layers.competitor_bids import (
    competitor_bounds,
    competitor_mean,
    competitor_spread,
    generate_competitor_bids,
    sample_truncated,
)
from bidmaster.schemas.engine import Difficulty

FMV = 500_000_000
APPRAISAL = 550_000_000
LOWEST = 400_000_000
USER_BID = 600_000_000  # 최저가 × 1.5


# ---------------------------------------------------------------------------
# T-1: 분포 파라미터
# ---------------------------------------------------------------------------


def test_mean_bias_by_difficulty_and_heat():
    assert competitor_mean(1_000, Difficulty.EASY, 0.0) == pytest.approx(980)
    assert competitor_mean(1_000, Difficulty.NORMAL, 0.0) == pytest.approx(1_000)
    assert competitor_mean(1_000, Difficulty.HARD, 0.0) == pytest.approx(1_030)
    assert competitor_mean(1_000, Difficulty.NORMAL, 1.0) == pytest.approx(1_030)


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("heat", [0.0, 0.5, 1.0])
def test_spread_within_five_to_seven_percent(difficulty: Difficulty, heat: float):
    ratio = competitor_spread(FMV, difficulty, heat) / FMV

    assert 0.05 - 1e-9 <= ratio <= 0.07 + 1e-9


def test_bounds():
    lower, upper = competitor_bounds(FMV, APPRAISAL, LOWEST, USER_BID)

    assert lower == 425_000_000  # max(최저가×1.02, FMV×0.85)
    assert upper == 525_000_000  # min(FMV×1.05, 감정가×0.99, 입찰가×0.985)


def test_sample_falls_back_to_clamped_mean():
    value = sample_truncated(random.Random(0), mean=1_000, spread=1, lower=100, upper=101)

    assert value == 101


# ---------------------------------------------------------------------------
# T-2: 입찰가 생성
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_bids_stay_in_window_and_below_user_bid(difficulty: Difficulty):
    lower, upper = competitor_bounds(FMV, APPRAISAL, LOWEST, USER_BID)

    for seed in range(100):
        bids = generate_competitor_bids(
            n=5,
            fmv=FMV,
            appraisal=APPRAISAL,
            lowest_bid=LOWEST,
            user_bid=USER_BID,
            difficulty=difficulty,
            overheat_score=(seed % 5) / 4,
            rng=random.Random(seed),
        )
        assert len(bids) == 5
        assert bids == sorted(bids)
        assert all(lower <= b <= upper for b in bids)
        assert all(b < USER_BID for b in bids)
        assert all(b % 1_000 == 0 for b in bids)


def test_user_bid_limits_upper_bound():
    user_bid = 450_000_000  # 상한 = 입찰가 × 0.985

    for seed in range(50):
        bids = generate_competitor_bids(10, FMV, APPRAISAL, LOWEST, user_bid, rng=random.Random(seed))
        assert all(b <= 443_250_000 for b in bids)


def test_custom_tick():
    bids = generate_competitor_bids(20, FMV, APPRAISAL, LOWEST, USER_BID, tick=10_000, rng=random.Random(7))

    assert all(b % 10_000 == 0 for b in bids)


def test_zero_competitors():
    assert generate_competitor_bids(0, FMV, APPRAISAL, LOWEST, USER_BID) == []


def test_empty_window_returns_empty(caplog):
    """입찰가가 최저가에 너무 가까우면 구간이 비어 빈 리스트."""
    bids = generate_competitor_bids(5, FMV, APPRAISAL, LOWEST, 410_000_000, rng=random.Random(1))

    assert bids == []
    assert "경쟁자 입찰 구간 없음" in caplog.text


def test_overheat_pushes_bids_up():
    def average(heat: float) -> float:
        samples: list[int] = []
        for seed in range(40):
            samples += generate_competitor_bids(
                30, FMV, APPRAISAL, LOWEST, USER_BID, overheat_score=heat, rng=random.Random(seed)
            )
        return mean(samples)

    assert average(1.0) > average(0.0)


def test_competitor_count_matches_request(rng):
    bids = generate_competitor_bids(12, FMV, APPRAISAL, LOWEST, USER_BID, rng=rng)

    assert len(bids) == 12
    assert max(bids) < USER_BID


# ---------------------------------------------------------------------------
# T-3: 틱 단위로 나누어떨어지지 않는 사용자 입찰가
# ---------------------------------------------------------------------------


def test_unaligned_user_bid_keeps_bids_on_grid_and_in_bounds():
    """틱이 입찰가의 1.5%보다 크고 입찰가가 틱 배수가 아니어도 하한 아래로 떨어지지 않는다."""
    fmv, appraisal, lowest, user_bid, tick = 10_000, 10_200, 9_608, 10_500, 1_000
    lower, upper = competitor_bounds(fmv, appraisal, lowest, user_bid)

    for seed in range(30):
        bids = generate_competitor_bids(3, fmv, appraisal, lowest, user_bid, tick=tick, rng=random.Random(seed))
        assert len(bids) == 3
        assert all(lower <= b <= upper for b in bids)
        assert all(b % tick == 0 for b in bids)
        assert all(b < user_bid for b in bids)


def test_unaligned_user_bid_without_grid_point_returns_empty():
    """하한 이상이면서 입찰가 미만인 틱 배수가 없으면 표본을 뽑지 않는다."""
    bids = generate_competitor_bids(3, 10_000, 10_200, 9_608, 10_050, tick=1_000, rng=random.Random(1))

    assert bids == []
