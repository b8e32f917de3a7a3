"""Task-10: 점유 리스크 레이어 테스트"""

from __future__ import annotations

from datetime import date

import pytest

from bidmaster.engine.layers.rights_analysis import classify_rights
from bidmaster.engine.layers.tenant_risk import assess_tenant_risk, estimate_eviction_range, risk_label
from bidmaster.schemas.property import RegisteredRight, RightType, Tenant
from bidmaster.schemas.rights import TenantRiskLabel

DEADLINE = date(2023, 1, 1)


@pytest.fixture
def mortgage() -> RegisteredRight:
    return RegisteredRight(
        id="m1", right_type=RightType.MORTGAGE, registration_date=date(2020, 5, 1), amount=200_000_000
    )


def _assess(rights, tenants, failed_rounds=0):
    analysis = classify_rights(rights, tenants, DEADLINE)
    return assess_tenant_risk(analysis.tenant_findings, analysis.base_right, DEADLINE, failed_rounds)


# ---------------------------------------------------------------------------
# T-1: 항목별 점수
# ---------------------------------------------------------------------------


def test_mixed_tenants_score(mortgage):
    tenants = [
        Tenant(id="t1", deposit=50_000_000, move_in_date=date(2019, 1, 1), fixed_date=date(2019, 1, 1)),
        Tenant(id="t2", deposit=30_000_000, move_in_date=date(2019, 6, 1)),
        Tenant(id="t3", deposit=20_000_000, move_in_date=date(2021, 1, 1), fixed_date=date(2021, 1, 1)),
    ]

    result = _assess([mortgage], tenants, failed_rounds=2)

    assert result.details.confirmation == 13  # 대항력 2명 중 1명 확정일자 → 12.5
    assert result.details.move_in == 17  # 3명 중 2명 선순위 → 16.7
    assert result.details.dividend == 20
    assert result.details.precedent == 15
    assert result.details.persistence == 6
    assert result.score == 71
    assert result.label is TenantRiskLabel.HIGH
    assert result.qualified_tenants == 1
    assert result.dividend_shortfall is True
    assert (result.eviction_cost_min, result.eviction_cost_max) == (3_591_000, 8_000_000)


def test_no_tenants_only_failed_rounds_count(mortgage):
    result = _assess([mortgage], [], failed_rounds=1)

    assert result.score == 3
    assert result.label is TenantRiskLabel.LOW
    assert (result.eviction_cost_min, result.eviction_cost_max) == (2_000_000, 2_884_000)


def test_persistence_capped():
    assert _assess([], [], failed_rounds=10).details.persistence == 15


def test_fully_covered_small_tenant_has_no_shortfall(mortgage):
    tenants = [
        Tenant(
            id="s1",
            deposit=20_000_000,
            move_in_date=date(2019, 1, 1),
            fixed_date=date(2019, 1, 1),
            is_small_tenant=True,
            priority_payment=25_000_000,
        )
    ]

    result = _assess([mortgage], tenants)

    assert result.dividend_shortfall is False
    assert result.details.dividend == 0
    assert result.details.precedent == 8
    assert result.score == 58
    assert result.label is TenantRiskLabel.MEDIUM


def test_fixed_date_after_deadline_not_qualified(mortgage):
    tenants = [Tenant(id="t", deposit=10_000_000, move_in_date=date(2019, 1, 1), fixed_date=date(2023, 6, 1))]

    result = _assess([mortgage], tenants)

    assert result.qualified_tenants == 0
    assert result.details.confirmation == 0


def test_no_base_right_treats_tenants_as_senior():
    tenants = [Tenant(id="t", deposit=10_000_000, move_in_date=date(2022, 1, 1), fixed_date=date(2022, 1, 1))]

    result = _assess([], tenants)

    assert result.details.move_in == 25
    assert any("말소기준권리 없음" in n for n in result.notes)


# ---------------------------------------------------------------------------
# T-2: 라벨 / 명도비용 범위
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("score", "label"),
    [(0, TenantRiskLabel.LOW), (39, TenantRiskLabel.LOW), (40, TenantRiskLabel.MEDIUM), (70, TenantRiskLabel.HIGH)],
)
def test_risk_label(score: int, label: TenantRiskLabel):
    assert risk_label(score) is label


@pytest.mark.parametrize("tenant_count", [0, 1, 5, 20])
@pytest.mark.parametrize("score", [0, 50, 100])
def test_eviction_range_within_limits(tenant_count: int, score: int):
    low, high = estimate_eviction_range(tenant_count, score)

    assert 2_000_000 <= low <= high <= 8_000_000
