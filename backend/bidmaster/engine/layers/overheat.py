"""입찰가 과열 점수"""

from __future__ import annotations

from bidmaster.engine.rules import (
    OVERHEAT_APPRAISAL_START,
    OVERHEAT_APPRAISAL_WINDOW,
    OVERHEAT_FMV_START,
    OVERHEAT_FMV_WINDOW,
)


def compute_overheat(bid_price: int, fmv: int, appraisal: int) -> float:
    """입찰가가 FMV·감정가를 얼마나 넘어서는지 0~1로 환산한다.

    FMV 95%~105% 구간, 감정가 90%~102% 구간을 각각 0~1로 스케일하고
    더 큰 값을 쓴다. 기준가가 0 이하이면 해당 항목은 0으로 본다.
    """
    r_fmv = max(0.0, bid_price / fmv - OVERHEAT_FMV_START) / OVERHEAT_FMV_WINDOW if fmv > 0 else 0.0
    r_appraisal = (
        max(0.0, bid_price / appraisal - OVERHEAT_APPRAISAL_START) / OVERHEAT_APPRAISAL_WINDOW
        if appraisal > 0
        else 0.0
    )
    return max(0.0, min(1.0, max(r_fmv, r_appraisal)))
