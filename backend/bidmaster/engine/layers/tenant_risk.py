"""점유 리스크 레이어 - 임차인 점유로 인한 명도 난이도 점수와 명도비용 범위"""

from __future__ import annotations

import logging
from datetime import date

from bidmaster.engine.rules import (
    EVICTION_RANGE_BASE,
    EVICTION_RANGE_CEILING,
    EVICTION_RANGE_FLOOR,
    EVICTION_RANGE_HIGH_PCT,
    EVICTION_RANGE_LOW_PCT,
    EVICTION_RANGE_PER_TENANT,
    TENANT_RISK_CONFIRMATION_MAX,
    TENANT_RISK_DIVIDEND,
    TENANT_RISK_HIGH_FROM,
    TENANT_RISK_MEDIUM_FROM,
    TENANT_RISK_MOVE_IN_MAX,
    TENANT_RISK_PER_FAILED_ROUND,
    TENANT_RISK_PERSISTENCE_MAX,
    TENANT_RISK_PRECEDENT_QUALIFIED,
    TENANT_RISK_PRECEDENT_SHORTFALL,
    round_won,
)
from bidmaster.schemas.property import RegisteredRight, Tenant
from bidmaster.schemas.rights import TenantFinding, TenantRiskDetails, TenantRiskLabel, TenantRiskResult

logger = logging.getLogger(__name__)


def _has_valid_fixed_date(tenant: Tenant, dividend_deadline: date | None) -> bool:
    if tenant.fixed_date is None:
        return False
    return dividend_deadline is None or tenant.fixed_date <= dividend_deadline


def risk_label(score: int) -> TenantRiskLabel:
    if score < TENANT_RISK_MEDIUM_FROM:
        return TenantRiskLabel.LOW
    if score < TENANT_RISK_HIGH_FROM:
        return TenantRiskLabel.MEDIUM
    return TenantRiskLabel.HIGH


def estimate_eviction_range(tenant_count: int, score: int) -> tuple[int, int]:
    """(기본 200만 + 임차인당 50만) × (1 + 점수/100)의 60%~140%, 200만~800만원 범위."""
    weighted = (EVICTION_RANGE_BASE + EVICTION_RANGE_PER_TENANT * tenant_count) * (100 + score)
    high = min(EVICTION_RANGE_CEILING, weighted * EVICTION_RANGE_HIGH_PCT // 10_000)
    low = min(max(EVICTION_RANGE_FLOOR, weighted * EVICTION_RANGE_LOW_PCT // 10_000), high)
    return low, high


def assess_tenant_risk(
    findings: list[TenantFinding],
    base_right: RegisteredRight | None,
    dividend_deadline: date | None = None,
    failed_rounds: int = 0,
) -> TenantRiskResult:
    """점유 리스크를 0~100점으로 평가한다.

    항목별 배점:
    - 확정일자 (25): 대항력 임차인 중 종기일 내 확정일자를 갖춘 비율
    - 전입 선순위 (25): 전체 임차인 중 대항력 임차인 비율
    - 배당 미회수 (20): 배당으로 회수되지 않는 인수 보증금이 있으면
    - 판례 리스크 (15): 미회수 보증금이 있으면 15, 확정일자 갖춘 대항력 임차인만 있으면 8
    - 점유 지속 (15): 유찰 1회당 3점
    """
    notes: list[str] = []
    standing = [f for f in findings if f.has_standing]
    qualified = [f for f in standing if _has_valid_fixed_date(f.tenant, dividend_deadline)]

    confirmation = round_won(len(qualified) / len(standing) * TENANT_RISK_CONFIRMATION_MAX) if standing else 0
    move_in = round_won(len(standing) / len(findings) * TENANT_RISK_MOVE_IN_MAX) if findings else 0

    shortfall = any(f.deposit_assumed > 0 for f in standing)
    dividend = TENANT_RISK_DIVIDEND if shortfall else 0
    if shortfall:
        precedent = TENANT_RISK_PRECEDENT_SHORTFALL
    elif qualified:
        precedent = TENANT_RISK_PRECEDENT_QUALIFIED
    else:
        precedent = 0
    persistence = min(max(failed_rounds, 0) * TENANT_RISK_PER_FAILED_ROUND, TENANT_RISK_PERSISTENCE_MAX)

    details = TenantRiskDetails(
        confirmation=confirmation,
        move_in=move_in,
        dividend=dividend,
        precedent=precedent,
        persistence=persistence,
    )
    score = min(100, confirmation + move_in + dividend + precedent + persistence)
    label = risk_label(score)
    eviction_min, eviction_max = estimate_eviction_range(len(findings), score)

    if base_right is None and findings:
        notes.append("말소기준권리 없음 → 임차인 전원 선순위로 평가")
    notes.append(
        f"점유 리스크 {score}점({label.value}): 확정일자 {confirmation} + 전입 {move_in} + 배당 {dividend}"
        f" + 판례 {precedent} + 유찰 {persistence}"
    )
    notes.append(f"예상 명도비용 {eviction_min:,}원 ~ {eviction_max:,}원")

    logger.debug("점유 리스크 평가 완료: %d점, 유찰 %d회", score, failed_rounds)

    return TenantRiskResult(
        score=score,
        label=label,
        eviction_cost_min=eviction_min,
        eviction_cost_max=eviction_max,
        dividend_shortfall=shortfall,
        qualified_tenants=len(qualified),
        details=details,
        notes=notes,
    )
