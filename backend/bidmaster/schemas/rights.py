"""권리분석 결과 스키마"""

from dataclasses import dataclass, field
from enum import Enum

from bidmaster.schemas.property import (
    AmountPolicy,
    Disposition,
    RegisteredRight,
    RiskFlag,
    Tenant,
)


@dataclass(frozen=True)
class RightFinding:
    """등기 권리별 판정"""

    right: RegisteredRight
    priority_rank: int  # 1부터 시작, 설정일 오름차순 (동일자는 입력 순서)
    disposition: Disposition
    amount_policy: AmountPolicy
    amount_assumed: int
    is_base: bool = False  # 말소기준권리 여부
    reason: str = ""


@dataclass(frozen=True)
class TenantFinding:
    """임차인별 판정"""

    tenant: Tenant
    has_standing: bool  # 대항력
    is_assumed: bool
    deposit_assumed: int  # 소액임차인 최우선변제액 차감 후 인수 보증금
    reason: str = ""


@dataclass(frozen=True)
class RightsAnalysisResult:
    """권리분석 결과"""

    base_right: RegisteredRight | None  # 말소기준권리
    assumed_rights: list[RightFinding] = field(default_factory=list)
    extinguished_rights: list[RightFinding] = field(default_factory=list)
    at_risk_rights: list[RightFinding] = field(default_factory=list)
    assumed_tenants: list[TenantFinding] = field(default_factory=list)
    released_tenants: list[TenantFinding] = field(default_factory=list)  # 대항력 없음 → 배당으로 소멸
    risk_flags: list[RiskFlag] = field(default_factory=list)
    total_assumed_amount: int = 0  # 인수 권리 금액 + 인수 임차보증금
    notes: list[str] = field(default_factory=list)

    @property
    def right_findings(self) -> list[RightFinding]:
        """우선순위 순서로 정렬된 전체 권리 판정"""
        findings = self.assumed_rights + self.extinguished_rights + self.at_risk_rights
        return sorted(findings, key=lambda f: f.priority_rank)

    @property
    def tenant_findings(self) -> list[TenantFinding]:
        return self.assumed_tenants + self.released_tenants


class TenantRiskLabel(str, Enum):
    LOW = "낮음"
    MEDIUM = "중간"
    HIGH = "높음"


@dataclass(frozen=True)
class TenantRiskDetails:
    confirmation: int = 0  # 확정일자 (0~25)
    move_in: int = 0  # 전입 선순위 (0~25)
    dividend: int = 0  # 배당 미회수 보증금 (0~20)
    precedent: int = 0  # 판례 리스크 (0~15)
    persistence: int = 0  # 유찰 횟수 기반 점유 지속 (0~15)


@dataclass(frozen=True)
class TenantRiskResult:
    """점유 리스크 평가"""

    score: int  # 0~100
    label: TenantRiskLabel
    eviction_cost_min: int  # 예상 명도비용 하단 (원)
    eviction_cost_max: int  # 예상 명도비용 상단 (원)
    dividend_shortfall: bool  # 배당으로 회수되지 않는 인수 보증금이 있는지
    qualified_tenants: int  # 대항력 + 종기일 내 확정일자를 갖춘 임차인 수
    details: TenantRiskDetails = field(default_factory=TenantRiskDetails)
    notes: list[str] = field(default_factory=list)
