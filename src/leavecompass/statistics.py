from collections import Counter, defaultdict
from datetime import date
from typing import Dict, List, Tuple

from leavecompass.calendar_logic import each_day
from leavecompass.models import Entitlement, LeaveRequest


def summarize_usage(ent: Entitlement) -> Dict[str, float]:
    """
    Übersicht über den Urlaubsanspruch:
      booked        : gebuchte Tage
      xmas          : verpflichtende Weihnachtstage
      carry_forward : Übertrag aus dem Vorjahr
      remaining     : Resturlaub laut API
      total_used    : booked + xmas
      entitlement   : Gesamtanspruch
    """
    booked = ent.total_booked_holiday
    xmas = ent.total_mandatory_xmas_holiday
    return {
        'booked': booked,
        'xmas': xmas,
        'carry_forward': ent.holiday_balance_carried_forward,
        'remaining': ent.remaining_holiday,
        'total_used': booked + xmas,
        'entitlement': ent.holiday_entitlement,
    }


def count_requests_by_status(requests: List[LeaveRequest]) -> Dict[str, int]:
    return dict(Counter(r.status for r in requests))


def days_by_month(requests: List[LeaveRequest]) -> Dict[Tuple[int, int], int]:
    """Kalendertage je (Jahr, Monat), die von Anträgen belegt sind."""
    per_month = defaultdict(set)
    for r in requests:
        lo, hi = min(r.start, r.end), max(r.start, r.end)
        for d in each_day(lo, hi):
            per_month[(d.year, d.month)].add(d)
    return {k: len(per_month[k]) for k in sorted(per_month)}


def remaining_after(remaining: float, effective_days: float) -> float:
    return remaining - effective_days


def upcoming_requests(requests: List[LeaveRequest], today: date) -> List[LeaveRequest]:
    return sorted((r for r in requests if r.end >= today), key=lambda r: r.start)
