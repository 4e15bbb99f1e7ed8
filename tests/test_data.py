from datetime import date
import pytest

from leavecompass.calendar_logic import compute_selection, would_exceed_balance
from leavecompass.data import (
    build_submission_payload, coerce_number, entitlement_from_record, first_present,
    normalize_history, public_holiday_list, working_pattern_from_workhours,
)
from leavecompass.models import CandidateRange, DayPart, HolidayYear, SelectionResult, WorkingPattern

ENTITLEMENT_RECORD = {
    "workhours": [{"day_id": "1"}, {"day_id": 2}, {"day_id": 3}, {"day_id": 4}],
    "holiday_dates": ["05/03/2025", "06/03/2025", "kaputt"],
    "public_and_xmas_holiday_dates": ["25/12/2024", "2024-12-26"],
    "holiday_entitlement": "28.00",
    "total_booked_holiday": "6.5",
    "total_mandatory_xmas_holiday": "3",
    "holiday_balance_carried_forward": "",
    "remaining_holiday": "18.5",
    "holiday_cycle_start": "01/12/2024",
    "holiday_cycle_end": "30/11/2025",
}


def test_coerce_number():
    assert coerce_number("12.50") == 12.5
    assert coerce_number(None) == 0.0
    assert coerce_number("") == 0.0
    assert coerce_number("n/a", 1) == 1
    assert coerce_number(3) == 3.0


def test_workhours_default_and_empty():
    assert working_pattern_from_workhours(None) == WorkingPattern()
    assert working_pattern_from_workhours([]).is_empty


def test_invalid_day_ids_are_dropped():
    pat = working_pattern_from_workhours([{"day_id": "1"}, {"day_id": "x"}, {"day_id": 9}, {"day_id": 6}, {}])
    assert pat.days == {1, 6}


def test_entitlement_from_record():
    ent = entitlement_from_record(ENTITLEMENT_RECORD)
    assert ent.holiday_entitlement == 28.0
    assert ent.total_booked_holiday == 6.5
    assert ent.holiday_balance_carried_forward == 0.0
    assert ent.remaining_holiday == 18.5
    assert ent.working_pattern.days == {1, 2, 3, 4}
    assert ent.booked_dates == {date(2025, 3, 5), date(2025, 3, 6)}
    assert ent.public_holiday_dates == {date(2024, 12, 25), date(2024, 12, 26)}


def test_entitlement_from_empty_record():
    ent = entitlement_from_record(None)
    assert ent.remaining_holiday == 0.0
    assert ent.working_pattern == WorkingPattern()


def test_first_present_uses_order():
    rec = {"start_date": "", "date_from": "01/03/2025", "date": "02/03/2025"}
    assert first_present(rec, ("start_date", "date_from", "from", "date")) == "01/03/2025"
    assert first_present({}, ("a", "b")) is None


def test_normalize_history_fallback_chain():
    history = [
        {"date_from": "03/03/2025", "date_till": "2025-03-07", "days": "5",
         "holiday_type": "Annual Leave", "request_status": "Approved"},
        {"date": "10/03/2025", "type": "Sick"},
        {"start_date": "garbage"},
        {"note": "no dates at all"},
    ]
    reqs = normalize_history(history)
    assert len(reqs) == 2
    first, second = reqs
    assert (first.start, first.end) == (date(2025, 3, 3), date(2025, 3, 7))
    assert first.days == 5
    assert first.status == "Approved"
    # einzelnes 'date' gilt für Start und Ende
    assert second.start == second.end == date(2025, 3, 10)
    assert second.days == 1
    assert second.type == "Sick"
    assert second.status == "Pending"


def test_normalize_history_end_defaults_to_start():
    reqs = normalize_history([{"start_date": "03/03/2025", "end_date": "bad"}])
    assert reqs[0].end == date(2025, 3, 3)


def test_normalize_history_falls_back_to_booked_dates():
    reqs = normalize_history([], ["06/03/2025", "bad", "03/03/2025"])
    assert [r.start for r in reqs] == [date(2025, 3, 3), date(2025, 3, 6)]
    assert all(r.status == "Approved" and r.days == 1 for r in reqs)
    assert reqs[0].raw == {"source": "fallback_booked_dates", "date": "03/03/2025"}


def test_public_holiday_list_sorted():
    out = public_holiday_list(["26/12/2025", "nope", "25/12/2025"])
    assert out == [(date(2025, 12, 25), "25/12/2025"), (date(2025, 12, 26), "26/12/2025")]


def test_payload_is_built_even_when_balance_exceeded():
    sel = compute_selection(CandidateRange(date(2025, 3, 3), date(2025, 3, 7)), WorkingPattern())
    assert sel.effective_days == 5
    assert would_exceed_balance(sel.effective_days, 3.0)
    payload = build_submission_payload(sel, "annual", "", HolidayYear.for_year(2025), 42)
    assert payload == {
        "start_date": "03/03/2025",
        "end_date": "07/03/2025",
        "holiday_year": 2025,
        "type": "annual",
        "employee_id": 42,
        "portal_id": "employee",
        "start_day_part": "FD",
        "end_day_part": "FD",
        "duration_days": 5,
    }


def test_payload_half_days_and_note():
    sel = SelectionResult(True, date(2025, 3, 3), date(2025, 3, 4), 2, 1.0,
                          DayPart.AFTERNOON, DayPart.MORNING)
    payload = build_submission_payload(sel, "annual", "Dentist", 2025, "E7", portal_id="manager")
    assert payload["start_day_part"] == "PM"
    assert payload["end_day_part"] == "AM"
    assert payload["duration_days"] == 1.0
    assert payload["note"] == "Dentist"
    assert payload["portal_id"] == "manager"


def test_payload_requires_selection():
    with pytest.raises(ValueError):
        build_submission_payload(SelectionResult(), "annual", None, 2025, 1)


def test_non_dict_history_entries_are_skipped():
    reqs = normalize_history(["03/03/2025", None, 42, {"date": "10/03/2025"}])
    assert [r.start for r in reqs] == [date(2025, 3, 10)]


def test_bad_public_holiday_strings_do_not_break_entitlement():
    ent = entitlement_from_record({"public_and_xmas_holiday_dates": ["²/01/2025", "25/12/2024"]})
    assert ent.public_holiday_dates == {date(2024, 12, 25)}
