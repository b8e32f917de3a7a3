"""수익성·안전마진 스키마"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProfitResult:
    margin_vs_fmv: int  # FMV - 총인수금액
    margin_rate_vs_fmv: float
    margin_vs_exit: int  # Exit - 총인수금액
    margin_rate_vs_exit: float
    exit_price: int
    be_point: int  # 손익분기 매도가 (= 총인수금액)
    notes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SafetyMargin:
    amount: int
    rate: float


@dataclass(frozen=True)
class SafetyBlock:
    """리포트용 통합 안전마진"""

    fmv: SafetyMargin
    exit: SafetyMargin
    user_bid: SafetyMargin  # FMV - 입찰가
    over_fmv: bool  # 입찰가가 FMV를 초과하는지


@dataclass(frozen=True)
class MarginTargetBid:
    target_rate: float  # 목표 FMV 대비 안전마진율
    price: int | None  # 목표를 지키는 최대 입찰가 (최저가에서도 미달이면 None)
    margin_rate: float | None  # 해당 입찰가의 실제 안전마진율


@dataclass(frozen=True)
class RecommendedBidRange:
    """목표 안전마진 기반 권장 입찰가 (최저가 ~ 정책 상한)"""

    low: MarginTargetBid  # 마진 20%
    optimal: MarginTargetBid  # 마진 15%
    high: MarginTargetBid  # 마진 10%
    notes: list[str] = field(default_factory=list)

    @property
    def targets(self) -> list[MarginTargetBid]:
        return [self.low, self.optimal, self.high]
