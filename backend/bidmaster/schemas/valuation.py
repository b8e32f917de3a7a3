"""가치평가(FMV·감정가·최저가) 결과 스키마"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValuationResult:
    """FMV/감정가/최저가 산출 결과"""

    fmv: int
    appraisal: int
    min_bid: int
    kappa: float  # 감정가 × κ ≈ FMV
    market_factor: float = 1.0  # 시장 지표 보정 배수 (0.9~1.1)
    notes: list[str] = field(default_factory=list)
