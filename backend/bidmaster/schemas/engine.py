"""엔진 입출력 스키마"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from bidmaster.schemas.cost import CostBreakdown, CostOverrides
from bidmaster.schemas.profit import ProfitResult, RecommendedBidRange, SafetyBlock
from bidmaster.schemas.property import PropertySnapshot, RiskFlag
from bidmaster.schemas.rights import RightsAnalysisResult, TenantRiskResult
from bidmaster.schemas.valuation import ValuationResult


class Difficulty(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class BidStage(str, Enum):
    CONSERVATIVE = "conservative"  # 보수적
    BALANCED = "balanced"  # 중립
    AGGRESSIVE = "aggressive"  # 공격적


@dataclass(frozen=True)
class EngineOptions:
    verbose: bool = False  # 레이어별 트레이스 로그를 INFO로 출력
    difficulty: Difficulty = Difficulty.NORMAL
    simulate_competitors: bool = False
    competitor_count: int | None = None  # None이면 settings 기본값
    tick: int | None = None  # 입찰 금액 단위


@dataclass(frozen=True)
class EngineInput:
    snapshot: PropertySnapshot
    user_bid_price: int
    exit_price_hint: int | None = None
    market_signals: dict[str, float] | None = None  # 1.0 기준 외부 지표
    kappa_override: float | None = None
    cost_overrides: CostOverrides | None = None
    options: EngineOptions = field(default_factory=EngineOptions)


@dataclass(frozen=True)
class BidLadderRung:
    stage: BidStage
    label: str  # 보수적/중립/공격적
    price: int
    overheat: float  # 해당 가격의 과열 점수


@dataclass(frozen=True)
class BidLadder:
    """3단계 입찰 전략 (최저가 ~ 정책 상한)"""

    conservative: BidLadderRung
    balanced: BidLadderRung
    aggressive: BidLadderRung
    policy_floor: int
    policy_cap: int
    notes: list[str] = field(default_factory=list)

    @property
    def rungs(self) -> list[BidLadderRung]:
        return [self.conservative, self.balanced, self.aggressive]


@dataclass(frozen=True)
class EngineMeta:
    engine_version: str
    generated_at: datetime


@dataclass(frozen=True)
class EngineOutput:
    valuation: ValuationResult
    rights: RightsAnalysisResult
    costs: CostBreakdown
    profit: ProfitResult
    safety: SafetyBlock
    bid_ladder: BidLadder
    recommended_range: RecommendedBidRange  # 목표 안전마진 기반 권장 입찰가
    tenant_risk: TenantRiskResult  # 점유 리스크
    overheat_score: float  # 사용자 입찰가의 과열 점수
    risk_flags: list[RiskFlag]
    meta: EngineMeta
    competitor_bids: list[int] | None = None
    notes: list[str] = field(default_factory=list)  # 전체 레이어 메모 (감사 추적용)
