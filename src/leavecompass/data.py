import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from leavecompass.calendar_logic import format_dd_mm_yyyy, parse_dd_mm_yyyy, parse_flexible_date, to_date_set
from leavecompass.config import DEFAULT_CONFIG
from leavecompass.models import DayPart, Entitlement, HolidayYear, LeaveRequest, SelectionResult, WorkingPattern

START_KEYS = ("start_date", "date_from", "from", "date")
END_KEYS = ("end_date", "date_till", "till", "date")


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Zahlen kommen von der API meist als String ('12.50')."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logging.warning(f"Kein numerischer Wert: {value!r}, nutze {default}")
        return default


def working_pattern_from_workhours(workhours: Optional[Iterable[dict]]) -> WorkingPattern:
    """
    Arbeitsmuster aus `workhours: [{day_id: 1..7}]`.
    Fehlt das Feld ganz, gilt Mo–Fr; eine leere Liste heißt: kein Arbeitstag.
    """
    if workhours is None:
        return WorkingPattern()
    days = set()
    for wh in workhours:
        raw = wh.get("day_id") if isinstance(wh, dict) else None
        try:
            day_id = int(raw)
        except (TypeError, ValueError):
            logging.warning(f"Ungültige day_id verworfen: {raw!r}")
            continue
        if not 1 <= day_id <= 7:
            logging.warning(f"day_id außerhalb 1..7 verworfen: {day_id}")
            continue
        days.add(day_id)
    return WorkingPattern(frozenset(days))


def entitlement_from_record(record: Optional[Dict[str, Any]]) -> Entitlement:
    rec = record or {}
    return Entitlement(
        holiday_entitlement=coerce_number(rec.get("holiday_entitlement")),
        total_booked_holiday=coerce_number(rec.get("total_booked_holiday")),
        total_mandatory_xmas_holiday=coerce_number(rec.get("total_mandatory_xmas_holiday")),
        holiday_balance_carried_forward=coerce_number(rec.get("holiday_balance_carried_forward")),
        remaining_holiday=coerce_number(rec.get("remaining_holiday")),
        holiday_cycle_start=str(rec.get("holiday_cycle_start") or ""),
        holiday_cycle_end=str(rec.get("holiday_cycle_end") or ""),
        working_pattern=working_pattern_from_workhours(rec.get("workhours")),
        booked_dates=to_date_set(rec.get("holiday_dates")),
        public_holiday_dates=to_date_set(rec.get("public_and_xmas_holiday_dates")),
    )


def first_present(record: Dict[str, Any], keys: Sequence[str]) -> Any:
    """Erster nicht-leerer Wert aus einer geordneten Liste von Feldnamen."""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def normalize_history(history: Optional[Iterable[Dict[str, Any]]],
                      booked_dates: Iterable = ()) -> List[LeaveRequest]:
    """
    Antrags-Historie vereinheitlichen. Einträge ohne lesbares Startdatum
    fallen weg. Ist die Historie leer, wird jeder gebuchte Tag als
    genehmigter Ein-Tages-Antrag dargestellt.
    """
    requests = []
    for h in history or ():
        if not isinstance(h, dict):
            logging.warning(f"Historien-Eintrag ist kein Objekt, verworfen: {h!r}")
            continue
        start = parse_flexible_date(first_present(h, START_KEYS))
        if start is None:
            logging.debug(f"Historien-Eintrag ohne Startdatum verworfen: {h!r}")
            continue
        end = parse_flexible_date(first_present(h, END_KEYS)) or start
        requests.append(LeaveRequest(
            start=start,
            end=end,
            days=coerce_number(h.get("days"), 1) or 1,
            type=first_present(h, ("holiday_type", "type")) or "Annual Leave",
            status=first_present(h, ("request_status", "status")) or "Pending",
            raw=dict(h),
        ))
    if requests:
        return requests

    fallback = []
    for value in booked_dates or ():
        d = parse_flexible_date(value)
        if d is None:
            continue
        fallback.append(LeaveRequest(
            start=d, end=d, days=1, type="Annual Leave", status="Approved",
            raw={"source": "fallback_booked_dates", "date": value},
        ))
    return sorted(fallback, key=lambda r: r.start)


def public_holiday_list(values: Iterable[str]) -> List[Tuple]:
    out = []
    for v in values or ():
        d = parse_dd_mm_yyyy(v) or parse_flexible_date(v)
        if d is not None:
            out.append((d, v))
    return sorted(out, key=lambda item: item[0])


def build_submission_payload(
    selection: SelectionResult,
    leave_type: str,
    notes: Optional[str],
    holiday_year,
    employee_id,
    portal_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Antrag im Format der API. Ein Überziehen des Saldos blockiert hier nicht."""
    if not selection.has_selection or selection.start is None or selection.end is None:
        raise ValueError("No range selected")
    year = holiday_year.year if isinstance(holiday_year, HolidayYear) else int(holiday_year)
    payload = {
        "start_date": format_dd_mm_yyyy(selection.start),
        "end_date": format_dd_mm_yyyy(selection.end),
        "holiday_year": year,
        "type": leave_type,
        "employee_id": employee_id,
        "portal_id": portal_id or DEFAULT_CONFIG["portal_id"],
        "start_day_part": DayPart.from_code(selection.start_part).value,
        "end_day_part": DayPart.from_code(selection.end_part).value,
        "duration_days": float(selection.effective_days),
    }
    if notes:
        payload["note"] = notes
    return payload
