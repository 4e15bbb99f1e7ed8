import logging
from datetime import date, datetime, timedelta
from typing import FrozenSet, Iterable, List, Optional

from dateutil.parser import isoparse

from .models import (
    CandidateRange, DayPart, HolidayYear, SelectionResult, ValidationResult,
    ValidationStatus, WorkingPattern,
)

OUTSIDE_HOLIDAY_YEAR = "Outside holiday year"
NON_WORKING_DAY = "Non-working day selected"


# --- Datums-Normalisierung ---

def parse_dd_mm_yyyy(raw) -> Optional[date]:
    """'DD/MM/YYYY' (optional gefolgt von ' <Uhrzeit>') -> date, sonst None."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    token = raw.strip().split(" ")[0]
    parts = token.split("/")
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        return None
    try:
        dd, mm, yyyy = (int(p) for p in parts)
        return date(yyyy, mm, dd)
    except (ValueError, OverflowError):
        # 31/02/2025, 99999999/1/1 & Co.
        return None


def parse_flexible_date(raw) -> Optional[date]:
    """
    Akzeptiert ISO-8601-Strings und 'DD/MM/YYYY'-Tokens.
    Liefert nie eine Exception, sondern None für nicht lesbare Werte.
    Zeitzonen werden ignoriert, es zählt nur das Kalenderdatum.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return isoparse(raw.strip()).date()
    except (ValueError, OverflowError):
        pass
    return parse_dd_mm_yyyy(raw)


def format_dd_mm_yyyy(d: date) -> str:
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def to_date_set(values: Optional[Iterable]) -> FrozenSet[date]:
    """Gemischte Datumswerte auf eine Menge von Kalendertagen normalisieren."""
    out = set()
    for v in values or ():
        d = parse_flexible_date(v)
        if d is None:
            logging.debug(f"Datum verworfen: {v!r}")
            continue
        out.add(d)
    return frozenset(out)


# --- Prädikate ---

def is_working_day(d: date, pattern: WorkingPattern) -> bool:
    # isoweekday(): 1=Montag … 7=Sonntag, wie day_id der API
    return pattern.contains(d.isoweekday())


def is_public_holiday(d: date, public_holidays: Iterable) -> bool:
    return d in _as_date_set(public_holidays)


def is_booked(d: date, booked: Iterable) -> bool:
    return d in _as_date_set(booked)


def _as_date_set(values) -> FrozenSet[date]:
    # Mengen gelten als bereits normalisiert (z. B. Entitlement.public_holiday_dates)
    if isinstance(values, (set, frozenset)):
        return values
    return to_date_set(values)


# --- Urlaubsjahr ---

def holiday_year_for(today: date, config: Optional[dict] = None) -> int:
    """Urlaubsjahr, in das `today` fällt (Dezember gehört zum Folgejahr)."""
    year = today.year
    if today > HolidayYear.for_year(year, config).end:
        return year + 1
    return year


def calculate_holiday_cycle(year: int, config: Optional[dict] = None) -> dict:
    hy = HolidayYear.for_year(year, config)
    return {
        "holiday_cycle_start": format_dd_mm_yyyy(hy.start),
        "holiday_cycle_end": format_dd_mm_yyyy(hy.end),
    }


def year_tabs(year: int) -> List[int]:
    return [year - 1, year, year + 1]


# --- Bereichsauswahl ---

def each_day(start: date, end: date) -> List[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def validate_range(
    candidate: CandidateRange,
    holiday_year: HolidayYear,
    pattern: WorkingPattern,
    previous: Optional[CandidateRange] = None,
) -> ValidationResult:
    """
    Prüft einen neu gewählten Zeitraum, erste Verletzung gewinnt:
      - fehlende Endpunkte: neutraler Zustand (IDLE/SELECTING)
      - außerhalb des Urlaubsjahres
      - Start/Ende kein vertraglicher Arbeitstag
    Tage dazwischen dürfen Wochenenden sein, sie werden nur nicht gezählt.
    """
    if candidate.start is None and candidate.end is None:
        return ValidationResult(ValidationStatus.IDLE)
    if not candidate.is_complete:
        return ValidationResult(ValidationStatus.SELECTING, candidate=candidate)

    rng = candidate.ordered()
    if rng.start < holiday_year.start or rng.end > holiday_year.end:
        return ValidationResult(
            ValidationStatus.REJECTED,
            reason=OUTSIDE_HOLIDAY_YEAR,
            detail=(f"Please select dates between {format_dd_mm_yyyy(holiday_year.start)} "
                    f"and {format_dd_mm_yyyy(holiday_year.end)}."),
        )
    if not is_working_day(rng.start, pattern) or not is_working_day(rng.end, pattern):
        return ValidationResult(
            ValidationStatus.REJECTED,
            reason=NON_WORKING_DAY,
            detail=("Start and end dates must be your contracted working days. "
                    "Weekends in the middle are allowed and will be excluded automatically."),
        )

    # Neuer Starttag: alte Halbtags-Auswahl ist hinfällig
    prev = previous.ordered() if previous is not None else None
    if prev is None or not prev.is_complete or prev.start != rng.start:
        rng = CandidateRange(rng.start, rng.end, DayPart.FULL_DAY, DayPart.FULL_DAY)
    else:
        rng = CandidateRange(rng.start, rng.end, prev.start_part, prev.end_part)
    return ValidationResult(ValidationStatus.VALIDATED, candidate=rng)


def chargeable_days(start: date, end: date, pattern: WorkingPattern,
                    public_holidays: Iterable = ()) -> List[date]:
    """Arbeitstage im Zeitraum ohne Feiertage, aufsteigend sortiert."""
    holidays = _as_date_set(public_holidays)
    return [d for d in each_day(start, end)
            if is_working_day(d, pattern) and d not in holidays]


def compute_selection(
    candidate: Optional[CandidateRange],
    pattern: WorkingPattern,
    public_holidays: Iterable = (),
    start_part: Optional[DayPart] = None,
    end_part: Optional[DayPart] = None,
) -> SelectionResult:
    """
    Reduziert einen Zeitraum auf die anrechenbaren Urlaubstage.
    Halbtage gibt es nur am ersten und letzten anrechenbaren Tag,
    alle Tage dazwischen zählen voll.
    """
    if candidate is None or not candidate.is_complete:
        return SelectionResult()

    rng = candidate.ordered()
    start_part = DayPart.from_code(start_part or rng.start_part)
    end_part = DayPart.from_code(end_part or rng.end_part)

    days = chargeable_days(rng.start, rng.end, pattern, public_holidays)
    if not days:
        return SelectionResult(False, rng.start, rng.end, 0, 0.0, start_part, end_part)

    first, last = days[0], days[-1]
    if first == last:
        return SelectionResult(True, first, last, 1, start_part.weight, start_part, end_part)

    middle = max(len(days) - 2, 0)
    effective = start_part.weight + middle + end_part.weight
    return SelectionResult(True, first, last, len(days), effective, start_part, end_part)


def would_exceed_balance(effective_days: float, remaining_balance: float) -> bool:
    """Nur ein Hinweis, die Einreichung wird dadurch nicht blockiert."""
    return effective_days > remaining_balance
