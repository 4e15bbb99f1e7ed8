# src/leavecompass/main.py

import json
import logging
from datetime import date
from typing import Optional

from .calendar_logic import (
    compute_selection, format_dd_mm_yyyy, holiday_year_for, parse_flexible_date,
    to_date_set, validate_range, would_exceed_balance,
)
from .config import load_config
from .data import build_submission_payload, coerce_number
from .models import CandidateRange, DayPart, HolidayYear, WorkingPattern

PAYLOAD_FILE = "leavecompass_request.json"


def input_date(prompt: str) -> Optional[date]:
    while True:
        raw = input(prompt).strip()
        if not raw:
            return None
        d = parse_flexible_date(raw)
        if d is not None:
            return d
        print("  Unreadable date, please use DD/MM/YYYY.")


def input_working_pattern(default) -> WorkingPattern:
    days_str = input(f"  Working days (1=Mon … 7=Sun), comma separated [{','.join(map(str, default))}]: ")
    days = [int(x) for x in days_str.split(",") if x.strip().isascii() and x.strip().isdigit() and 1 <= int(x) <= 7]
    return WorkingPattern(frozenset(days or default))


def input_day_part(prompt: str) -> DayPart:
    raw = input(prompt).strip() or "FD"
    try:
        return DayPart.from_code(raw)
    except ValueError:
        print("  Unknown day part, using FD.")
        return DayPart.FULL_DAY


def run_wizard(today: Optional[date] = None):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    cfg = load_config()
    today = today or date.today()

    print("LeaveCompass holiday calculator")
    year_str = input(f"Holiday year [{holiday_year_for(today, cfg)}]: ").strip()
    year = int(year_str) if year_str.isdigit() else holiday_year_for(today, cfg)
    hy = HolidayYear.for_year(year, cfg)
    print(f"  Holiday year {year}: {format_dd_mm_yyyy(hy.start)} - {format_dd_mm_yyyy(hy.end)}")

    # 1) Arbeitsmuster und Feiertage
    pattern = input_working_pattern(cfg.get('default_working_days') or [1, 2, 3, 4, 5])
    holidays_str = input("  Public holidays (DD/MM/YYYY, comma separated): ")
    public_holidays = to_date_set(x.strip() for x in holidays_str.split(",") if x.strip())

    # 2) Zeitraum wählen und prüfen
    start = input_date("  First day (DD/MM/YYYY): ")
    end = input_date("  Last day (DD/MM/YYYY) [same day]: ") or start
    result = validate_range(CandidateRange(start, end), hy, pattern)
    if not result.is_valid:
        if result.reason:
            print(f"\n{result.reason}: {result.detail}")
        else:
            print("\nNo range selected.")
        return

    # 3) Halbtage, Berechnung
    start_part = input_day_part("  First day part (FD/AM/PM) [FD]: ")
    end_part = DayPart.FULL_DAY
    if result.candidate.start != result.candidate.end:
        end_part = input_day_part("  Last day part (FD/AM/PM) [FD]: ")
    selection = compute_selection(result.candidate, pattern, public_holidays, start_part, end_part)
    if not selection.has_selection:
        print("\nThe selection contains no chargeable days.")
        return

    print(f"\n{format_dd_mm_yyyy(selection.start)} - {format_dd_mm_yyyy(selection.end)}: "
          f"{selection.working_day_count} working day(s), {selection.effective_days:.2f} day(s) requested")

    remaining = coerce_number(input("  Remaining balance [0]: ").strip())
    if would_exceed_balance(selection.effective_days, remaining):
        print(f"  Warning: request exceeds the remaining balance of {remaining:.2f} days.")

    # 4) Antrag speichern
    if input("\nSave request payload? (y/n) ").lower() == "y":
        employee_id = input("  Employee id: ").strip()
        notes = input("  Note: ").strip()
        payload = build_submission_payload(
            selection, cfg.get('default_leave_type', 'annual'), notes, hy,
            employee_id, cfg.get('portal_id'),
        )
        with open(PAYLOAD_FILE, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        print(f"Payload saved to {PAYLOAD_FILE}.")


if __name__ == "__main__":
    run_wizard()
