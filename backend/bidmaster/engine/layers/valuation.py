"""가치평가 레이어 - FMV(공정시세)·감정가·최저가 산출

주어진 값(감정가/최저가/FMV 힌트)의 조합에서 나머지를 역산한다.
어떤 조합이 들어와도 예외 없이 결과를 반환하고, 추정 과정은 notes에 남긴다.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from bidmaster.engine.rules import (
    DEFAULT_KAPPA,
    FALLBACK_FMV,
    FMV_KAPPA_BY_TYPE,
    MARKET_FACTOR_MAX,
    MARKET_FACTOR_MIN,
    MINBID_ALPHA_DEFAULT,
    resolve_property_type,
    round_won,
)
from bidmaster.schemas.valuation import ValuationResult

logger = logging.getLogger(__name__)


def kappa_for(property_type: str, default_kappa: float = DEFAULT_KAPPA) -> float:
    """물건유형별 FMV 보정계수 κ. 미등록 유형은 default_kappa."""
    ptype = resolve_property_type(property_type)
    if ptype is None:
        return default_kappa
    return FMV_KAPPA_BY_TYPE[ptype]


def market_factor(signals: Mapping[str, float] | None) -> float | None:
    """시장 지표(1.0 기준) 평균을 [0.9, 1.1]로 제한한 보정 배수. 지표가 없으면 None."""
    if not signals:
        return None
    avg = sum(signals.values()) / len(signals)
    return max(MARKET_FACTOR_MIN, min(MARKET_FACTOR_MAX, avg))


def resolve_valuation(
    appraisal: int | None = None,
    min_bid: int | None = None,
    fmv_hint: int | None = None,
    property_type: str = "",
    market_signals: Mapping[str, float] | None = None,
    kappa_override: float | None = None,
    *,
    min_bid_ratio: float = MINBID_ALPHA_DEFAULT,
    fallback_fmv: int = FALLBACK_FMV,
    default_kappa: float = DEFAULT_KAPPA,
) -> ValuationResult:
    """FMV/감정가/최저가를 결정한다.

    규칙 (우선순위 순):
    - 감정가·최저가 모두 없음: FMV 힌트(없으면 기본 FMV)로 감정가 = FMV / κ, 최저가 = 감정가 × α
    - 감정가만 있음: 최저가 = 감정가 × α
    - 최저가만 있음: 감정가 = 최저가 / α
    - FMV 미정: FMV = 감정가 × κ
    - 시장 지표가 있으면 평균(±10% 캡)을 FMV에 곱한다
    """
    notes: list[str] = []

    if kappa_override is not None:
        kappa = kappa_override
        notes.append(f"κ 강제 적용: {kappa:.3f}")
    else:
        kappa = kappa_for(property_type, default_kappa)
        if resolve_property_type(property_type) is None:
            notes.append(f"미등록 물건유형({property_type or '미지정'}) → 기본 κ={kappa:.2f} 적용")

    fmv = fmv_hint

    if appraisal is None and min_bid is None:
        if fmv is None:
            fmv = fallback_fmv
            notes.append(f"FMV 힌트 부재 → 교육용 기본 FMV {fallback_fmv:,}원 사용")
        appraisal = round_won(fmv / kappa)
        min_bid = round_won(appraisal * min_bid_ratio)
        notes.append(f"감정가/최저가 부재 → FMV로 역산 (감정가 {appraisal:,}원, 최저가 {min_bid:,}원)")
    elif min_bid is None:
        min_bid = round_won(appraisal * min_bid_ratio)
        notes.append(f"최저가 부재 → 감정가×{min_bid_ratio}로 산출 ({min_bid:,}원)")
    elif appraisal is None:
        appraisal = round_won(min_bid / min_bid_ratio)
        notes.append(f"감정가 부재 → 최저가/{min_bid_ratio}로 산출 ({appraisal:,}원)")

    if fmv is None:
        fmv = round_won(appraisal * kappa)
        notes.append(f"FMV 부재 → 감정가 기반 κ={kappa:.2f} 적용 ({fmv:,}원)")

    factor = market_factor(market_signals)
    if factor is not None:
        before = fmv
        fmv = round_won(fmv * factor)
        notes.append(f"시장보정 적용 (factor={factor:.3f}, {before:,}원 → {fmv:,}원)")

    logger.debug("가치평가 완료: FMV=%s원, 감정가=%s원, 최저가=%s원", f"{fmv:,}", f"{appraisal:,}", f"{min_bid:,}")

    return ValuationResult(
        fmv=fmv,
        appraisal=appraisal,
        min_bid=min_bid,
        kappa=kappa,
        market_factor=factor if factor is not None else 1.0,
        notes=notes,
    )
