from dataclasses import dataclass
from datetime import date
from typing import Optional

from .calendar_logic import calculate_holiday_cycle, parse_dd_mm_yyyy


@dataclass(frozen=True)
class RequestCheck:
    success: bool
    error: Optional[str] = None
    start: Optional[date] = None
    end: Optional[date] = None


def validate_holiday_request(start_date: Optional[str], end_date: Optional[str],
                             holiday_year: Optional[int], config: Optional[dict] = None) -> RequestCheck:
    """
    Vorab-Prüfung eines Antrags im Format der API (DD/MM/YYYY),
    analog zur serverseitigen Validierung vor dem Absenden.
    """
    if not start_date or not end_date or not holiday_year:
        return RequestCheck(False, "Missing required fields: start_date, end_date, or holiday_year")

    start = parse_dd_mm_yyyy(start_date)
    end = parse_dd_mm_yyyy(end_date)
    if start is None or end is None:
        return RequestCheck(False, "Invalid date format. Expected format: dd/mm/YYYY")

    if end < start:
        return RequestCheck(False, "Date Till must be after or equal to Date From")

    try:
        year = int(holiday_year)
    except (TypeError, ValueError, OverflowError):
        return RequestCheck(False, f"Invalid holiday year: {holiday_year!r}")

    cycle = calculate_holiday_cycle(year, config)
    cycle_start = parse_dd_mm_yyyy(cycle["holiday_cycle_start"])
    cycle_end = parse_dd_mm_yyyy(cycle["holiday_cycle_end"])
    if start < cycle_start or end > cycle_end:
        return RequestCheck(
            False,
            "Selected dates must fall within the holiday year "
            f"({cycle['holiday_cycle_start']} - {cycle['holiday_cycle_end']})",
        )

    return RequestCheck(True, start=start, end=end)
