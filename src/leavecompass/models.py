# src/leavecompass/models.py
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional


class DayPart(Enum):
    """Tagesanteil am ersten bzw. letzten Tag eines Antrags."""
    FULL_DAY = "FD"
    MORNING = "AM"
    AFTERNOON = "PM"

    @property
    def weight(self) -> float:
        return 1.0 if self is DayPart.FULL_DAY else 0.5

    @classmethod
    def from_code(cls, code) -> "DayPart":
        if isinstance(code, DayPart):
            return code
        try:
            return cls(str(code).strip().upper())
        except ValueError:
            raise ValueError(f"Unbekannter Tagesanteil: {code!r}") from None


DEFAULT_WORKING_DAYS = frozenset({1, 2, 3, 4, 5})


@dataclass(frozen=True)
class WorkingPattern:
    """Vertragliche Arbeitstage, 1=Montag … 7=Sonntag."""
    days: FrozenSet[int] = DEFAULT_WORKING_DAYS

    def __post_init__(self):
        object.__setattr__(self, "days", frozenset(self.days))

    def contains(self, day_id: int) -> bool:
        return day_id in self.days

    @property
    def is_empty(self) -> bool:
        return not self.days


@dataclass(frozen=True)
class HolidayYear:
    """Urlaubsjahr, z. B. 2025 = 01.12.2024 bis 30.11.2025."""
    year: int
    start: date
    end: date

    @classmethod
    def for_year(cls, year: int, config: Optional[dict] = None) -> "HolidayYear":
        from .config import holiday_year_boundary
        (s_day, s_month), (e_day, e_month) = holiday_year_boundary(config)
        # Beginnt das Jahr nach dem Ende (Dez vs. Nov), liegt der Start im Vorjahr
        start_year = year - 1 if (s_month, s_day) > (e_month, e_day) else year
        return cls(year, date(start_year, s_month, s_day), date(year, e_month, e_day))

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


@dataclass(frozen=True)
class CandidateRange:
    """Vom Nutzer gewählter Zeitraum, Reihenfolge der Klicks beliebig."""
    start: Optional[date] = None
    end: Optional[date] = None
    start_part: DayPart = DayPart.FULL_DAY
    end_part: DayPart = DayPart.FULL_DAY

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def ordered(self) -> "CandidateRange":
        if self.is_complete and self.start > self.end:
            return replace(self, start=self.end, end=self.start)
        return self


@dataclass(frozen=True)
class SelectionResult:
    has_selection: bool = False
    start: Optional[date] = None
    end: Optional[date] = None
    working_day_count: int = 0
    effective_days: float = 0.0
    start_part: DayPart = DayPart.FULL_DAY
    end_part: DayPart = DayPart.FULL_DAY


class ValidationStatus(Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    VALIDATED = "validated"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ValidationResult:
    status: ValidationStatus
    reason: Optional[str] = None
    detail: Optional[str] = None
    candidate: Optional[CandidateRange] = None

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.VALIDATED


@dataclass
class Entitlement:
    """Urlaubsanspruch eines Mitarbeiters, wie ihn die API liefert."""
    holiday_entitlement: float = 0.0
    total_booked_holiday: float = 0.0
    total_mandatory_xmas_holiday: float = 0.0
    holiday_balance_carried_forward: float = 0.0
    remaining_holiday: float = 0.0
    holiday_cycle_start: str = ""
    holiday_cycle_end: str = ""
    working_pattern: WorkingPattern = field(default_factory=WorkingPattern)
    booked_dates: FrozenSet[date] = frozenset()
    public_holiday_dates: FrozenSet[date] = frozenset()


@dataclass
class LeaveRequest:
    """Ein Eintrag der Antrags-Historie."""
    start: date
    end: date
    days: float = 1
    type: str = "Annual Leave"
    status: str = "Pending"
    raw: Dict[str, Any] = field(default_factory=dict)
