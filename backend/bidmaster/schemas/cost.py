"""총인수금액 산출 스키마"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CostOverrides:
    """세율·비용 기본값 대체 (None이면 유형별 기본값 사용)"""

    acquisition_tax_rate: float | None = None
    education_tax_rate: float | None = None
    special_tax_rate: float | None = None
    eviction_base: int | None = None  # 위험 가산 전 명도비
    misc_base: int | None = None  # 위험 가산 전 법무/등기 비용


@dataclass(frozen=True)
class TaxBreakdown:
    acquisition_tax: int = 0  # 취득세
    education_tax: int = 0  # 지방교육세
    special_tax: int = 0  # 농어촌특별세
    total_tax: int = 0


@dataclass(frozen=True)
class CostBreakdown:
    """비용 내역"""

    bid_price: int
    assumed_amount: int
    taxes: TaxBreakdown = field(default_factory=TaxBreakdown)
    eviction_cost: int = 0
    misc_cost: int = 0
    total_acquisition: int = 0  # 입찰가 + 인수금액 + 세금 + 명도비 + 기타
    notes: list[str] = field(default_factory=list)
