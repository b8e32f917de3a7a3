"""물건 스냅샷 스키마 (감정가, 등기 권리, 임차인, 매각 이력)"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class PropertyType(str, Enum):
    APARTMENT = "아파트"
    OFFICETEL = "오피스텔"
    DETACHED_HOUSE = "단독주택"
    VILLA = "빌라"  # 다세대/연립
    STUDIO = "원룸"
    HOUSE = "주택"
    MULTI_FAMILY = "다가구주택"
    MIXED_USE = "근린주택"
    URBAN_HOUSING = "도시형생활주택"


class RightType(str, Enum):
    """등기부 권리 유형 (15종)"""

    MORTGAGE = "근저당권"
    REGISTERED_MORTGAGE = "저당권"
    SEIZURE = "압류"
    PROVISIONAL_SEIZURE = "가압류"
    SECURITY_PROVISIONAL_REGISTRATION = "담보가등기"
    TRANSFER_CLAIM_PROVISIONAL_REGISTRATION = "소유권이전청구권가등기"
    PROVISIONAL_REGISTRATION = "가등기"
    ADVANCE_NOTICE_REGISTRATION = "예고등기"
    LEASEHOLD = "전세권"
    RESIDENTIAL_TENANCY = "주택임차권"
    COMMERCIAL_TENANCY = "상가임차권"
    PROVISIONAL_DISPOSITION = "가처분"
    LIEN = "유치권"
    STATUTORY_SUPERFICIES = "법정지상권"
    GRAVE_USAGE = "분묘기지권"


class Disposition(str, Enum):
    EXTINGUISHED = "소멸"
    ASSUMED = "인수"
    AT_RISK = "위험"  # 비금전·불확실 권리 (순위로 판정 불가)


class AmountPolicy(str, Enum):
    FULL_AMOUNT = "금액전액"
    NO_AMOUNT = "금액없음"
    ESTIMATED = "추정"
    MARKET_DISCOUNTED = "시세감액"


class RiskFlag(str, Enum):
    OWNERSHIP_DISPUTE = "소유권분쟁"
    COMMERCIAL_TENANCY = "상가임차"
    LIEN = "유치권"
    STATUTORY_SUPERFICIES = "법정지상권"
    GRAVE_USAGE = "분묘"
    UNCLEAR_DIVIDEND = "배당불명확"
    MULTIPLE_TENANTS = "임차다수"


class TenantKind(str, Enum):
    RESIDENTIAL = "주택임차권"
    COMMERCIAL = "상가임차권"
    OTHER = "기타"


class BiddingOutcome(str, Enum):
    FAILED = "유찰"
    SOLD = "낙찰"
    PENDING = "진행"


@dataclass(frozen=True)
class RegisteredRight:
    """등기부 권리 항목"""

    id: str
    right_type: RightType
    registration_date: date  # 설정일 (접수일)
    amount: int | None = None  # 채권최고액/보증금, 금전채권이 없는 권리는 None
    holder: str = ""


@dataclass(frozen=True)
class Tenant:
    """임차인 정보"""

    id: str
    deposit: int
    move_in_date: date | None = None  # 전입일
    fixed_date: date | None = None  # 확정일자
    is_small_tenant: bool = False  # 소액임차인 여부
    priority_payment: int = 0  # 최우선변제 금액
    kind: TenantKind = TenantKind.RESIDENTIAL
    name: str = ""


@dataclass(frozen=True)
class BiddingRound:
    """회차별 매각 이력"""

    round: int
    auction_date: date
    minimum_price: int
    outcome: BiddingOutcome = BiddingOutcome.PENDING


@dataclass(frozen=True)
class PropertySnapshot:
    """엔진 1회 실행 동안 읽기 전용으로 쓰이는 물건 스냅샷"""

    case_id: str
    property_type: str  # PropertyType 값 또는 미등록 유형 문자열
    appraisal: int | None = None  # 감정가
    min_bid: int | None = None  # 최저매각가격
    fmv_hint: int | None = None
    rights: list[RegisteredRight] = field(default_factory=list)
    tenants: list[Tenant] = field(default_factory=list)
    dividend_deadline: date | None = None  # 배당요구종기일
    bidding_history: list[BiddingRound] = field(default_factory=list)
