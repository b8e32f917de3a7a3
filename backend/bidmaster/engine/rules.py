"""경매 엔진 기준표 (교육용 기본값, 실제 세율·판례와 다를 수 있음)

권리 유형별 판정 규칙, 물건 유형별 계수/세율/명도비, 위험 가산비용,
경쟁자 분포 파라미터를 데이터로 정의한다. 각 레이어는 이 표를 해석만 한다.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from bidmaster.schemas.engine import Difficulty
from bidmaster.schemas.property import (
    AmountPolicy,
    Disposition,
    PropertyType,
    RightType,
    RiskFlag,
    TenantKind,
)

# ---------------------------------------------------------------------------
# 가치평가
# ---------------------------------------------------------------------------

MINBID_ALPHA_DEFAULT = 0.8
FALLBACK_FMV = 500_000_000
DEFAULT_KAPPA = 0.90

# 감정가 × κ ≈ FMV
FMV_KAPPA_BY_TYPE: dict[PropertyType, float] = {
    PropertyType.APARTMENT: 0.91,
    PropertyType.OFFICETEL: 0.88,
    PropertyType.DETACHED_HOUSE: 0.87,
    PropertyType.VILLA: 0.89,
    PropertyType.STUDIO: 0.88,
    PropertyType.HOUSE: 0.90,
    PropertyType.MULTI_FAMILY: 0.87,
    PropertyType.MIXED_USE: 0.86,
    PropertyType.URBAN_HOUSING: 0.90,
}

# 시장 지표 평균 보정 범위 (±10%)
MARKET_FACTOR_MIN = 0.9
MARKET_FACTOR_MAX = 1.1

# ---------------------------------------------------------------------------
# 권리분석
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RightRule:
    default_disposition: Disposition
    amount_policy: AmountPolicy
    risk_flags: tuple[RiskFlag, ...] = ()
    note: str = ""


RIGHT_RULES: dict[RightType, RightRule] = {
    RightType.MORTGAGE: RightRule(Disposition.EXTINGUISHED, AmountPolicy.NO_AMOUNT, note="말소기준보다 선순위면 인수 전환"),
    RightType.REGISTERED_MORTGAGE: RightRule(Disposition.EXTINGUISHED, AmountPolicy.NO_AMOUNT, note="근저당권과 동일"),
    RightType.SEIZURE: RightRule(Disposition.EXTINGUISHED, AmountPolicy.NO_AMOUNT, (RiskFlag.OWNERSHIP_DISPUTE,)),
    RightType.PROVISIONAL_SEIZURE: RightRule(Disposition.EXTINGUISHED, AmountPolicy.NO_AMOUNT),
    RightType.SECURITY_PROVISIONAL_REGISTRATION: RightRule(Disposition.ASSUMED, AmountPolicy.FULL_AMOUNT),
    RightType.TRANSFER_CLAIM_PROVISIONAL_REGISTRATION: RightRule(
        Disposition.AT_RISK, AmountPolicy.MARKET_DISCOUNTED, (RiskFlag.OWNERSHIP_DISPUTE,)
    ),
    RightType.PROVISIONAL_REGISTRATION: RightRule(
        Disposition.AT_RISK, AmountPolicy.MARKET_DISCOUNTED, (RiskFlag.OWNERSHIP_DISPUTE,)
    ),
    RightType.ADVANCE_NOTICE_REGISTRATION: RightRule(
        Disposition.AT_RISK, AmountPolicy.NO_AMOUNT, (RiskFlag.OWNERSHIP_DISPUTE,)
    ),
    RightType.LEASEHOLD: RightRule(Disposition.ASSUMED, AmountPolicy.FULL_AMOUNT),
    RightType.RESIDENTIAL_TENANCY: RightRule(Disposition.ASSUMED, AmountPolicy.ESTIMATED),
    RightType.COMMERCIAL_TENANCY: RightRule(
        Disposition.ASSUMED, AmountPolicy.ESTIMATED, (RiskFlag.COMMERCIAL_TENANCY,)
    ),
    RightType.PROVISIONAL_DISPOSITION: RightRule(
        Disposition.EXTINGUISHED, AmountPolicy.NO_AMOUNT, (RiskFlag.OWNERSHIP_DISPUTE,)
    ),
    RightType.LIEN: RightRule(Disposition.AT_RISK, AmountPolicy.ESTIMATED, (RiskFlag.LIEN,)),
    RightType.STATUTORY_SUPERFICIES: RightRule(
        Disposition.AT_RISK, AmountPolicy.MARKET_DISCOUNTED, (RiskFlag.STATUTORY_SUPERFICIES,)
    ),
    RightType.GRAVE_USAGE: RightRule(Disposition.AT_RISK, AmountPolicy.MARKET_DISCOUNTED, (RiskFlag.GRAVE_USAGE,)),
}

TENANT_RISK_FLAGS: dict[TenantKind, tuple[RiskFlag, ...]] = {
    TenantKind.RESIDENTIAL: (),
    TenantKind.COMMERCIAL: (RiskFlag.COMMERCIAL_TENANCY,),
    TenantKind.OTHER: (),
}

# 임차인이 이 수 이상이면 임차다수
MULTIPLE_TENANTS_THRESHOLD = 3

# ---------------------------------------------------------------------------
# 비용
# ---------------------------------------------------------------------------

ACQ_TAX_RATE_BY_TYPE: dict[PropertyType, float] = {
    PropertyType.APARTMENT: 0.011,
    PropertyType.OFFICETEL: 0.046,  # 주거·업무 혼재 가정
    PropertyType.DETACHED_HOUSE: 0.012,
    PropertyType.VILLA: 0.012,
    PropertyType.STUDIO: 0.012,
    PropertyType.HOUSE: 0.012,
    PropertyType.MULTI_FAMILY: 0.013,
    PropertyType.MIXED_USE: 0.020,  # 상가요소 반영
    PropertyType.URBAN_HOUSING: 0.013,
}

EDU_TAX_RATE = 0.001
SPC_TAX_RATE = 0.002

BASE_EVICTION_BY_TYPE: dict[PropertyType, int] = {
    PropertyType.APARTMENT: 3_000_000,
    PropertyType.OFFICETEL: 3_500_000,
    PropertyType.DETACHED_HOUSE: 4_000_000,
    PropertyType.VILLA: 3_500_000,
    PropertyType.STUDIO: 3_000_000,
    PropertyType.HOUSE: 3_000_000,
    PropertyType.MULTI_FAMILY: 5_000_000,  # 임차 다수
    PropertyType.MIXED_USE: 5_000_000,  # 상가 세입자
    PropertyType.URBAN_HOUSING: 3_500_000,
}

BASE_MISC_COST = 1_000_000  # 법무/등기

# 미등록 유형은 아파트 기준으로 계산
DEFAULT_COST_TYPE = PropertyType.APARTMENT

RISK_EVICTION_ADD: dict[RiskFlag, int] = {
    RiskFlag.LIEN: 2_000_000,
    RiskFlag.STATUTORY_SUPERFICIES: 1_500_000,
    RiskFlag.GRAVE_USAGE: 2_000_000,
    RiskFlag.COMMERCIAL_TENANCY: 1_000_000,
    RiskFlag.MULTIPLE_TENANTS: 1_000_000,
}

RISK_MISC_ADD: dict[RiskFlag, int] = {
    RiskFlag.OWNERSHIP_DISPUTE: 1_000_000,
    RiskFlag.UNCLEAR_DIVIDEND: 500_000,
}

# ---------------------------------------------------------------------------
# 목표 안전마진 권장 입찰가 (FMV 대비)
# ---------------------------------------------------------------------------

MARGIN_TARGET_LOW = 0.20  # 권장 범위 하단
MARGIN_TARGET_OPTIMAL = 0.15
MARGIN_TARGET_HIGH = 0.10  # 권장 범위 상단

# ---------------------------------------------------------------------------
# 점유 리스크 (0~100점)
# ---------------------------------------------------------------------------

TENANT_RISK_CONFIRMATION_MAX = 25
TENANT_RISK_MOVE_IN_MAX = 25
TENANT_RISK_DIVIDEND = 20
TENANT_RISK_PRECEDENT_SHORTFALL = 15
TENANT_RISK_PRECEDENT_QUALIFIED = 8
TENANT_RISK_PER_FAILED_ROUND = 3
TENANT_RISK_PERSISTENCE_MAX = 15
TENANT_RISK_MEDIUM_FROM = 40
TENANT_RISK_HIGH_FROM = 70

EVICTION_RANGE_BASE = 2_000_000
EVICTION_RANGE_PER_TENANT = 500_000
EVICTION_RANGE_FLOOR = 2_000_000
EVICTION_RANGE_CEILING = 8_000_000
EVICTION_RANGE_LOW_PCT = 60
EVICTION_RANGE_HIGH_PCT = 140

# ---------------------------------------------------------------------------
# 입찰 정책 / 과열 / 경쟁자 분포
# ---------------------------------------------------------------------------

POLICY_CAP_FMV_PCT = 95  # 상한: FMV의 95%
POLICY_CAP_LOWEST_PCT = 105  # 상한: 최저가의 105%

OVERHEAT_FMV_START = 0.95
OVERHEAT_FMV_WINDOW = 0.10
OVERHEAT_APPRAISAL_START = 0.90
OVERHEAT_APPRAISAL_WINDOW = 0.12

DIFFICULTY_MEAN_BIAS: dict[Difficulty, float] = {
    Difficulty.EASY: -0.02,
    Difficulty.NORMAL: 0.0,
    Difficulty.HARD: 0.03,
}

DIFFICULTY_SPREAD_ADD: dict[Difficulty, float] = {
    Difficulty.EASY: 0.0,
    Difficulty.NORMAL: 0.005,
    Difficulty.HARD: 0.01,
}

DIFFICULTY_WEIGHTS: dict[Difficulty, float] = {
    Difficulty.EASY: 0.6,
    Difficulty.NORMAL: 0.3,
    Difficulty.HARD: 0.1,
}

HEAT_MEAN_LIFT = 0.03  # 과열 1.0일 때 평균 +3%
BASE_SPREAD_RATIO = 0.05
HEAT_SPREAD_ADD = 0.01


def resolve_property_type(value: str) -> PropertyType | None:
    """물건유형 문자열을 PropertyType으로 변환한다. 미등록 유형이면 None."""
    try:
        return PropertyType(value)
    except ValueError:
        return None


def round_won(value: float) -> int:
    """원 단위 사사오입."""
    return int(math.floor(value + 0.5))


# 경쟁자 시뮬레이션 샘플링
DEFAULT_BID_TICK = 1_000
IRWIN_HALL_TERMS = 12  # 균등분포 12개 합 - 6 ≈ 표준정규
COMPETITOR_MAX_DRAWS = 10  # 구간 밖 표본 재추출 한도
HEATED_TAIL_FRACTION = 0.2  # 과열 1.0일 때 상단 꼬리로 끌어올리는 표본 비율


def draw_difficulty(rand: float) -> Difficulty:
    """[0, 1) 난수로 시나리오 난이도를 뽑는다 (쉬움 60%, 보통 30%, 어려움 10%)."""
    cumulative = 0.0
    for difficulty, weight in DIFFICULTY_WEIGHTS.items():
        cumulative += weight
        if rand < cumulative:
            return difficulty
    return Difficulty.HARD
