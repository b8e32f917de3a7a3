"""Task-04: 수익성 레이어 단위 테스트"""

from __future__ import annotations

import pytest

from bidmaster.engine.layers.profit import build_safety_block, evaluate_profit


def test_margin_against_fmv():
    profit = evaluate_profit(fmv=500_000_000, total_acquisition=450_000_000)

    assert profit.margin_vs_fmv == 50_000_000
    assert profit.margin_rate_vs_fmv == pytest.approx(0.1)
    assert profit.exit_price == 500_000_000
    assert profit.margin_vs_exit == profit.margin_vs_fmv


def test_margin_against_exit_price():
    profit = evaluate_profit(fmv=500_000_000, total_acquisition=450_000_000, exit_price=550_000_000)

    assert profit.margin_vs_exit == 100_000_000
    assert profit.margin_rate_vs_exit == pytest.approx(100 / 550)


def test_negative_margin():
    profit = evaluate_profit(fmv=300_000_000, total_acquisition=330_000_000)

    assert profit.margin_vs_fmv == -30_000_000
    assert profit.margin_rate_vs_fmv == pytest.approx(-0.1)


@pytest.mark.parametrize("total", [0, 1, 123_456_789, 999_999_999])
def test_break_even_equals_total_acquisition(total: int):
    assert evaluate_profit(fmv=400_000_000, total_acquisition=total).be_point == total


def test_zero_fmv_rate_is_zero():
    profit = evaluate_profit(fmv=0, total_acquisition=100_000_000)

    assert profit.margin_rate_vs_fmv == 0.0
    assert profit.margin_rate_vs_exit == 0.0


def test_safety_block():
    profit = evaluate_profit(fmv=500_000_000, total_acquisition=520_000_000)

    safety = build_safety_block(profit, fmv=500_000_000, user_bid_price=510_000_000)

    assert safety.fmv.amount == -20_000_000
    assert safety.user_bid.amount == -10_000_000
    assert safety.user_bid.rate == pytest.approx(-0.02)
    assert safety.over_fmv is True
