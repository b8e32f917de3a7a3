"""HTTP 요청 모델 (pydantic) - 엔진 입력으로 변환되기 전 경계 검증"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from bidmaster.config import settings
from bidmaster.schemas.cost import CostOverrides
from bidmaster.schemas.engine import Difficulty, EngineInput, EngineOptions
from bidmaster.schemas.property import (
    BiddingOutcome,
    BiddingRound,
    PropertySnapshot,
    RegisteredRight,
    RightType,
    Tenant,
    TenantKind,
)


class RegisteredRightIn(BaseModel):
    id: str
    right_type: RightType = Field(description="권리 유형 (근저당권, 전세권 등 15종)")
    registration_date: date = Field(description="설정일 (YYYY-MM-DD)")
    amount: int | None = Field(default=None, ge=0, description="채권액/보증금 (원)")
    holder: str = Field(default="", description="권리자")

    def to_domain(self) -> RegisteredRight:
        return RegisteredRight(
            id=self.id,
            right_type=self.right_type,
            registration_date=self.registration_date,
            amount=self.amount,
            holder=self.holder,
        )


class TenantIn(BaseModel):
    id: str
    deposit: int = Field(ge=0, description="임차보증금 (원)")
    move_in_date: date | None = Field(default=None, description="전입일")
    fixed_date: date | None = Field(default=None, description="확정일자")
    is_small_tenant: bool = Field(default=False, description="소액임차인 여부")
    priority_payment: int = Field(default=0, ge=0, description="최우선변제 금액 (원)")
    kind: TenantKind = TenantKind.RESIDENTIAL
    name: str = ""

    def to_domain(self) -> Tenant:
        return Tenant(
            id=self.id,
            deposit=self.deposit,
            move_in_date=self.move_in_date,
            fixed_date=self.fixed_date,
            is_small_tenant=self.is_small_tenant,
            priority_payment=self.priority_payment,
            kind=self.kind,
            name=self.name,
        )


class BiddingRoundIn(BaseModel):
    round: int = Field(ge=1, description="회차")
    auction_date: date = Field(description="매각기일")
    minimum_price: int = Field(gt=0, description="최저매각가격 (원)")
    outcome: BiddingOutcome = BiddingOutcome.PENDING


class PropertySnapshotIn(BaseModel):
    case_id: str = Field(description="사건번호")
    property_type: str = Field(description="물건종류 (아파트, 오피스텔 등)")
    appraisal: int | None = Field(default=None, gt=0, description="감정가 (원)")
    min_bid: int | None = Field(default=None, gt=0, description="최저매각가격 (원)")
    fmv_hint: int | None = Field(default=None, gt=0, description="FMV 힌트 (원)")
    rights: list[RegisteredRightIn] = Field(default_factory=list)
    tenants: list[TenantIn] = Field(default_factory=list)
    dividend_deadline: date | None = Field(default=None, description="배당요구종기일")
    bidding_history: list[BiddingRoundIn] = Field(default_factory=list)

    def to_domain(self) -> PropertySnapshot:
        return PropertySnapshot(
            case_id=self.case_id,
            property_type=self.property_type,
            appraisal=self.appraisal,
            min_bid=self.min_bid,
            fmv_hint=self.fmv_hint,
            rights=[r.to_domain() for r in self.rights],
            tenants=[t.to_domain() for t in self.tenants],
            dividend_deadline=self.dividend_deadline,
            bidding_history=[BiddingRound(**b.model_dump()) for b in self.bidding_history],
        )


class CostOverridesIn(BaseModel):
    acquisition_tax_rate: float | None = Field(default=None, ge=0)
    education_tax_rate: float | None = Field(default=None, ge=0)
    special_tax_rate: float | None = Field(default=None, ge=0)
    eviction_base: int | None = Field(default=None, ge=0)
    misc_base: int | None = Field(default=None, ge=0)


class EngineOptionsIn(BaseModel):
    verbose: bool = False
    difficulty: Difficulty = Field(default_factory=lambda: Difficulty(settings.default_difficulty))
    simulate_competitors: bool = False
    competitor_count: int | None = Field(default=None, ge=0, le=100)
    tick: int | None = Field(default=None, gt=0)


class EngineRequest(BaseModel):
    snapshot: PropertySnapshotIn
    user_bid_price: int = Field(gt=0, description="사용자 입찰가 (원)")
    exit_price_hint: int | None = Field(default=None, gt=0, description="보수적 처분가 (원)")
    market_signals: dict[str, float] | None = Field(default=None, description="1.0 기준 시장 지표")
    kappa_override: float | None = Field(default=None, gt=0)
    cost_overrides: CostOverridesIn | None = None
    options: EngineOptionsIn = Field(default_factory=EngineOptionsIn)

    def to_engine_input(self) -> EngineInput:
        return EngineInput(
            snapshot=self.snapshot.to_domain(),
            user_bid_price=self.user_bid_price,
            exit_price_hint=self.exit_price_hint,
            market_signals=self.market_signals,
            kappa_override=self.kappa_override,
            cost_overrides=CostOverrides(**self.cost_overrides.model_dump()) if self.cost_overrides else None,
            options=EngineOptions(**self.options.model_dump()),
        )


class CompetitorRequest(BaseModel):
    n: int = Field(ge=0, le=100, description="경쟁자 수")
    fmv: int = Field(gt=0)
    appraisal: int = Field(gt=0)
    lowest_bid: int = Field(gt=0, description="최저매각가격 (원)")
    user_bid: int = Field(gt=0)
    difficulty: Difficulty = Field(default_factory=lambda: Difficulty(settings.default_difficulty))
    overheat_score: float = Field(default=0.0, ge=0.0, le=1.0)
    tick: int = Field(default_factory=lambda: settings.bid_tick, gt=0)
