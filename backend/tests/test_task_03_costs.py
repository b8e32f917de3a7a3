"""Task-03: 비용 레이어 단위 테스트"""

from __future__ import annotations

from bidmaster.engine.layers.costs import calc_costs, calculate_taxes, estimate_eviction_cost
from bidmaster.schemas.cost import CostOverrides
from bidmaster.schemas.property import RiskFlag


# ---------------------------------------------------------------------------
# T-1: 세금
# ---------------------------------------------------------------------------


def test_apartment_taxes():
    taxes = calculate_taxes(500_000_000, 0.011)

    assert taxes.acquisition_tax == 5_500_000
    assert taxes.education_tax == 500_000
    assert taxes.special_tax == 1_000_000
    assert taxes.total_tax == 7_000_000


def test_officetel_uses_higher_acquisition_rate():
    costs = calc_costs(bid_price=200_000_000, assumed_amount=0, property_type="오피스텔")

    assert costs.taxes.acquisition_tax == 9_200_000


# ---------------------------------------------------------------------------
# T-2: 총인수금액
# ---------------------------------------------------------------------------


def test_total_acquisition_without_risk():
    costs = calc_costs(bid_price=500_000_000, assumed_amount=0, property_type="아파트")

    assert costs.eviction_cost == 3_000_000
    assert costs.misc_cost == 1_000_000
    assert costs.total_acquisition == 511_000_000


def test_total_is_sum_of_components():
    costs = calc_costs(
        bid_price=321_456_789,
        assumed_amount=45_000_000,
        property_type="다가구주택",
        risk_flags=[RiskFlag.MULTIPLE_TENANTS],
    )

    assert costs.total_acquisition == (
        costs.bid_price + costs.assumed_amount + costs.taxes.total_tax + costs.eviction_cost + costs.misc_cost
    )
    assert costs.eviction_cost == 6_000_000  # 500만 + 임차다수 100만


def test_risk_flags_raise_eviction_and_misc():
    costs = calc_costs(
        bid_price=300_000_000,
        assumed_amount=0,
        property_type="아파트",
        risk_flags=[RiskFlag.LIEN, RiskFlag.OWNERSHIP_DISPUTE],
    )

    assert costs.eviction_cost == 5_000_000
    assert costs.misc_cost == 2_000_000
    assert any("위험 가산" in n for n in costs.notes)


def test_duplicate_flags_counted_once():
    assert estimate_eviction_cost(3_000_000, [RiskFlag.LIEN, RiskFlag.LIEN]) == 5_000_000


# ---------------------------------------------------------------------------
# T-3: 미등록 유형 / 사용자 지정 비용
# ---------------------------------------------------------------------------


def test_unknown_type_falls_back_to_apartment():
    unknown = calc_costs(bid_price=100_000_000, assumed_amount=0, property_type="공장")
    apartment = calc_costs(bid_price=100_000_000, assumed_amount=0, property_type="아파트")

    assert unknown.total_acquisition == apartment.total_acquisition
    assert any("미등록 물건유형" in n for n in unknown.notes)


def test_cost_overrides():
    overrides = CostOverrides(acquisition_tax_rate=0.04, eviction_base=10_000_000, misc_base=0)

    costs = calc_costs(
        bid_price=100_000_000,
        assumed_amount=0,
        property_type="아파트",
        risk_flags=[RiskFlag.COMMERCIAL_TENANCY],
        overrides=overrides,
    )

    assert costs.taxes.acquisition_tax == 4_000_000
    assert costs.eviction_cost == 11_000_000
    assert costs.misc_cost == 0
