"""권리분석 레이어 - 말소기준권리, 인수/소멸/위험 판정, 임차인 대항력 분석"""

from __future__ import annotations

import logging
from datetime import date

from bidmaster.engine.rules import MULTIPLE_TENANTS_THRESHOLD, RIGHT_RULES, TENANT_RISK_FLAGS
from bidmaster.schemas.property import Disposition, RegisteredRight, RiskFlag, Tenant
from bidmaster.schemas.rights import RightFinding, RightsAnalysisResult, TenantFinding

logger = logging.getLogger(__name__)


def _format_right(right: RegisteredRight) -> str:
    amount_str = f" {right.amount:,}원" if right.amount else ""
    return f"#{right.id} {right.right_type.value} ({right.registration_date.isoformat()}{amount_str})"


# ---------------------------------------------------------------------------
# 1. 순위 정렬 / 말소기준권리 판단
# ---------------------------------------------------------------------------


def order_rights(rights: list[RegisteredRight]) -> list[tuple[int, RegisteredRight]]:
    """설정일 오름차순으로 순위를 매긴다.

    설정일이 같으면 입력 순서가 앞선 권리가 선순위다 (정렬 안정성에 기대지 않고
    입력 인덱스를 정렬 키에 명시한다). 순위는 1부터 시작한다.
    """
    indexed = sorted(enumerate(rights), key=lambda pair: (pair[1].registration_date, pair[0]))
    return [(rank, right) for rank, (_, right) in enumerate(indexed, start=1)]


def determine_base_right(
    ordered: list[tuple[int, RegisteredRight]],
    dividend_deadline: date | None = None,
) -> tuple[int, RegisteredRight] | None:
    """말소기준권리를 판단한다.

    기본 판정이 '소멸'인 권리 유형 중 최선순위 권리. 배당요구종기일이 주어지면
    그 이전(당일 포함)에 설정된 권리만 후보가 된다.

    Returns:
        (순위, 권리). 해당 없으면 None
    """
    for rank, right in ordered:
        if RIGHT_RULES[right.right_type].default_disposition is not Disposition.EXTINGUISHED:
            continue
        if dividend_deadline is not None and right.registration_date > dividend_deadline:
            continue
        return rank, right
    return None


# ---------------------------------------------------------------------------
# 2. 권리 인수/소멸/위험 판별
# ---------------------------------------------------------------------------


def classify_right(
    rank: int,
    right: RegisteredRight,
    base: tuple[int, RegisteredRight] | None,
) -> RightFinding:
    """말소기준권리 대비 순위로 권리 하나를 판정한다."""
    rule = RIGHT_RULES[right.right_type]
    default = rule.default_disposition

    if base is None:
        disposition = default
        reason = f"말소기준권리 없음 → 유형 기본 판정({default.value})"
    elif rank == base[0]:
        disposition = Disposition.EXTINGUISHED
        reason = "말소기준권리 → 소멸"
    elif default is Disposition.AT_RISK:
        # 비금전·분쟁성 권리는 순위로 소멸 여부가 결정되지 않는다
        disposition = Disposition.AT_RISK
        reason = "순위와 무관한 특수권리 → 위험"
    elif default is Disposition.ASSUMED and rank < base[0]:
        disposition = Disposition.ASSUMED
        reason = "말소기준권리보다 선순위 → 인수"
    else:
        disposition = Disposition.EXTINGUISHED
        reason = "말소기준권리 이후 또는 소멸 대상 권리 → 소멸"

    amount = (right.amount or 0) if disposition is Disposition.ASSUMED else 0

    return RightFinding(
        right=right,
        priority_rank=rank,
        disposition=disposition,
        amount_policy=rule.amount_policy,
        amount_assumed=amount,
        is_base=base is not None and rank == base[0],
        reason=reason,
    )


# ---------------------------------------------------------------------------
# 3. 임차인 분석
# ---------------------------------------------------------------------------


def has_standing(tenant: Tenant, base_right: RegisteredRight | None) -> bool:
    """대항력: 전입일이 말소기준권리 설정일보다 앞서야 한다. 말소기준권리가 없으면 항상 인정."""
    if base_right is None:
        return True
    return tenant.move_in_date is not None and tenant.move_in_date < base_right.registration_date


def analyze_tenant(tenant: Tenant, base_right: RegisteredRight | None) -> TenantFinding:
    """임차인 한 명의 대항력과 인수 보증금을 판정한다.

    대항력 있는 임차인의 보증금은 인수된다. 최우선변제 대상 소액임차인은
    배당으로 회수되는 금액을 뺀 나머지만 인수한다.
    """
    standing = has_standing(tenant, base_right)
    if not standing:
        return TenantFinding(
            tenant=tenant,
            has_standing=False,
            is_assumed=False,
            deposit_assumed=0,
            reason="대항력 없음 → 배당으로 소멸",
        )

    if tenant.is_small_tenant and tenant.priority_payment > 0:
        net = max(0, tenant.deposit - tenant.priority_payment)
        reason = f"대항력 있음, 소액임차인 최우선변제 {tenant.priority_payment:,}원 차감 → {net:,}원 인수"
    else:
        net = tenant.deposit
        reason = "대항력 있음 → 보증금 전액 인수"

    return TenantFinding(
        tenant=tenant,
        has_standing=True,
        is_assumed=True,
        deposit_assumed=net,
        reason=reason,
    )


def _dividend_unclear(finding: TenantFinding, dividend_deadline: date | None) -> bool:
    """대항력 임차인이 확정일자를 갖추지 못했거나 종기일 이후에 갖춘 경우."""
    if not finding.has_standing:
        return False
    fixed = finding.tenant.fixed_date
    if fixed is None:
        return True
    return dividend_deadline is not None and fixed > dividend_deadline


# ---------------------------------------------------------------------------
# 4. 위험 배지 집계
# ---------------------------------------------------------------------------


def collect_risk_flags(
    rights: list[RegisteredRight],
    tenant_findings: list[TenantFinding],
    base_right: RegisteredRight | None,
    dividend_deadline: date | None = None,
) -> list[RiskFlag]:
    """권리·임차인 유형별 위험 배지를 모아 RiskFlag 선언 순서로 반환한다."""
    found: set[RiskFlag] = set()

    for right in rights:
        found.update(RIGHT_RULES[right.right_type].risk_flags)

    for finding in tenant_findings:
        found.update(TENANT_RISK_FLAGS[finding.tenant.kind])
        if _dividend_unclear(finding, dividend_deadline):
            found.add(RiskFlag.UNCLEAR_DIVIDEND)

    if len(tenant_findings) >= MULTIPLE_TENANTS_THRESHOLD:
        found.add(RiskFlag.MULTIPLE_TENANTS)

    if base_right is None and (rights or tenant_findings):
        found.add(RiskFlag.UNCLEAR_DIVIDEND)

    return [flag for flag in RiskFlag if flag in found]


# ---------------------------------------------------------------------------
# 5. 레이어 진입점
# ---------------------------------------------------------------------------


def classify_rights(
    rights: list[RegisteredRight],
    tenants: list[Tenant],
    dividend_deadline: date | None = None,
) -> RightsAnalysisResult:
    """권리분석을 수행한다.

    처리 흐름:
    1. 설정일 순으로 순위 정렬 (동일자는 입력 순서)
    2. 말소기준권리 판단
    3. 각 권리 인수/소멸/위험 판정
    4. 임차인 대항력·인수 보증금 판정
    5. 위험 배지 집계, 인수 총액 합산
    """
    notes: list[str] = []

    ordered = order_rights(rights)
    base = determine_base_right(ordered, dividend_deadline)
    base_right = base[1] if base else None

    if base_right is not None:
        notes.append(f"말소기준권리: {_format_right(base_right)}")
        logger.debug("말소기준권리: %s", _format_right(base_right))
    else:
        notes.append("말소기준권리 판별 불가 → 권리별 기본 판정 적용, 임차인 대항력 전부 인정")
        logger.debug("말소기준권리 없음 (권리 %d건)", len(rights))

    assumed: list[RightFinding] = []
    extinguished: list[RightFinding] = []
    at_risk: list[RightFinding] = []
    buckets = {
        Disposition.ASSUMED: assumed,
        Disposition.EXTINGUISHED: extinguished,
        Disposition.AT_RISK: at_risk,
    }
    for rank, right in ordered:
        finding = classify_right(rank, right, base)
        buckets[finding.disposition].append(finding)

    tenant_findings = [analyze_tenant(t, base_right) for t in tenants]
    assumed_tenants = [f for f in tenant_findings if f.is_assumed]
    released_tenants = [f for f in tenant_findings if not f.is_assumed]

    rights_sum = sum(f.amount_assumed for f in assumed)
    tenants_sum = sum(f.deposit_assumed for f in assumed_tenants)
    total = rights_sum + tenants_sum

    risk_flags = collect_risk_flags(rights, tenant_findings, base_right, dividend_deadline)

    notes.append(
        f"판정: 인수 {len(assumed)}건, 소멸 {len(extinguished)}건, 위험 {len(at_risk)}건, "
        f"인수 임차인 {len(assumed_tenants)}명"
    )
    notes.append(f"인수 합계: 등기권리 {rights_sum:,}원 + 임차 {tenants_sum:,}원 = {total:,}원")
    if risk_flags:
        notes.append("위험 배지: " + ", ".join(f.value for f in risk_flags))

    logger.debug(
        "권리분석 완료: 인수총액=%s원, 위험배지=%s",
        f"{total:,}",
        [f.value for f in risk_flags],
    )

    return RightsAnalysisResult(
        base_right=base_right,
        assumed_rights=assumed,
        extinguished_rights=extinguished,
        at_risk_rights=at_risk,
        assumed_tenants=assumed_tenants,
        released_tenants=released_tenants,
        risk_flags=risk_flags,
        total_assumed_amount=total,
        notes=notes,
    )
