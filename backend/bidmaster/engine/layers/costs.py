"""비용 레이어 - 세금·명도비·기타비용 산출 후 총인수금액 계산"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bidmaster.engine.rules import (
    ACQ_TAX_RATE_BY_TYPE,
    BASE_EVICTION_BY_TYPE,
    BASE_MISC_COST,
    DEFAULT_COST_TYPE,
    EDU_TAX_RATE,
    RISK_EVICTION_ADD,
    RISK_MISC_ADD,
    SPC_TAX_RATE,
    resolve_property_type,
    round_won,
)
from bidmaster.schemas.cost import CostBreakdown, CostOverrides, TaxBreakdown
from bidmaster.schemas.property import RiskFlag

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1. 세금
# ---------------------------------------------------------------------------


def calculate_taxes(
    bid_price: int,
    acquisition_rate: float,
    education_rate: float = EDU_TAX_RATE,
    special_rate: float = SPC_TAX_RATE,
) -> TaxBreakdown:
    """취득세·교육세·농특세를 입찰가 기준으로 각각 산출한다."""
    acquisition_tax = round_won(bid_price * acquisition_rate)
    education_tax = round_won(bid_price * education_rate)
    special_tax = round_won(bid_price * special_rate)
    return TaxBreakdown(
        acquisition_tax=acquisition_tax,
        education_tax=education_tax,
        special_tax=special_tax,
        total_tax=acquisition_tax + education_tax + special_tax,
    )


# ---------------------------------------------------------------------------
# 2. 명도비 / 기타비용
# ---------------------------------------------------------------------------


def estimate_eviction_cost(base: int, risk_flags: Iterable[RiskFlag]) -> int:
    """기본 명도비에 위험 배지별 가산액을 더한다."""
    return base + sum(RISK_EVICTION_ADD.get(flag, 0) for flag in set(risk_flags))


def estimate_misc_cost(base: int, risk_flags: Iterable[RiskFlag]) -> int:
    """법무/등기 기본비용에 위험 배지별 가산액을 더한다."""
    return base + sum(RISK_MISC_ADD.get(flag, 0) for flag in set(risk_flags))


# ---------------------------------------------------------------------------
# 3. 레이어 진입점
# ---------------------------------------------------------------------------


def calc_costs(
    bid_price: int,
    assumed_amount: int,
    property_type: str,
    risk_flags: Iterable[RiskFlag] = (),
    overrides: CostOverrides | None = None,
) -> CostBreakdown:
    """총인수금액을 계산한다.

    총인수금액 = 입찰가 + 인수금액 + 세금 합계 + 명도비 + 기타비용
    미등록 물건유형은 아파트 세율/명도비로 계산하고 notes에 기록한다.
    """
    notes: list[str] = []
    overrides = overrides or CostOverrides()
    flags = list(risk_flags)

    ptype = resolve_property_type(property_type)
    if ptype is None:
        ptype = DEFAULT_COST_TYPE
        notes.append(f"미등록 물건유형({property_type or '미지정'}) → {DEFAULT_COST_TYPE.value} 세율/명도비 적용")
        logger.info("미등록 물건유형 %r → %s 기준 적용", property_type, DEFAULT_COST_TYPE.value)

    acq_rate = overrides.acquisition_tax_rate
    if acq_rate is None:
        acq_rate = ACQ_TAX_RATE_BY_TYPE[ptype]
    edu_rate = overrides.education_tax_rate if overrides.education_tax_rate is not None else EDU_TAX_RATE
    spc_rate = overrides.special_tax_rate if overrides.special_tax_rate is not None else SPC_TAX_RATE

    taxes = calculate_taxes(bid_price, acq_rate, edu_rate, spc_rate)
    notes.append(f"세율: 취득 {acq_rate * 100:.2f}%, 교육 {edu_rate * 100:.2f}%, 농특 {spc_rate * 100:.2f}%")

    eviction_base = overrides.eviction_base if overrides.eviction_base is not None else BASE_EVICTION_BY_TYPE[ptype]
    misc_base = overrides.misc_base if overrides.misc_base is not None else BASE_MISC_COST
    eviction = estimate_eviction_cost(eviction_base, flags)
    misc = estimate_misc_cost(misc_base, flags)
    if eviction != eviction_base or misc != misc_base:
        notes.append(
            f"위험 가산: 명도비 +{eviction - eviction_base:,}원, 기타비용 +{misc - misc_base:,}원"
        )

    total = bid_price + assumed_amount + taxes.total_tax + eviction + misc
    notes.append(
        f"총인수금액 {total:,}원 = 입찰가 {bid_price:,} + 인수 {assumed_amount:,} + 세금 {taxes.total_tax:,}"
        f" + 명도 {eviction:,} + 기타 {misc:,}"
    )

    logger.debug("비용 계산 완료: 총인수금액=%s원", f"{total:,}")

    return CostBreakdown(
        bid_price=bid_price,
        assumed_amount=assumed_amount,
        taxes=taxes,
        eviction_cost=eviction,
        misc_cost=misc,
        total_acquisition=total,
        notes=notes,
    )
