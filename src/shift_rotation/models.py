"""
Data models for the shift rotation system.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import List, Optional, Tuple


class Location(Enum):
    """Work location tag carried by every shift."""

    GUARDIA = "Guardia"
    VALLE = "Valle"
    MITRAS = "Mitras"
    DESCANSO = "Descanso"
    VACATION = "VACACIONES"

    @classmethod
    def parse(cls, raw: "str | Location") -> "Location":
        """Parse a location from its value or member name (case-insensitive)."""
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip().upper()
        if text == "REST":
            return cls.DESCANSO
        for member in cls:
            if text in (member.name, member.value.upper()):
                return member
        raise ValueError(
            f"Unknown location '{raw}'. "
            f"Valid locations: {', '.join(m.value for m in cls)}"
        )


class ShiftSource(Enum):
    """Which precedence rule produced an effective shift."""

    MANUAL = "manual"
    VACATION = "vacation"
    SWAP = "swap"
    ROTATION = "rotation"


REST_LABEL = "Descanso"
VACATION_LABEL = "VACACIONES"


@dataclass(frozen=True)
class Shift:
    """A single day's slot inside a weekly template."""

    day_index: int  # 0=Mon, 6=Sun
    label: str
    location: Location

    def __post_init__(self):
        if not 0 <= self.day_index <= 6:
            raise ValueError(
                f"Day index must be between 0 (Mon) and 6 (Sun), got {self.day_index}"
            )

    @property
    def is_rest(self) -> bool:
        return self.location == Location.DESCANSO


@dataclass(frozen=True)
class ScheduleTemplate:
    """A named weekly pattern: one shift per day of the week."""

    id: int
    name: str
    shifts: Tuple[Shift, ...]

    def __post_init__(self):
        if len(self.shifts) != 7:
            raise ValueError(
                f"Template {self.id} must have exactly 7 shifts, got {len(self.shifts)}"
            )
        for index, shift in enumerate(self.shifts):
            if shift.day_index != index:
                raise ValueError(
                    f"Template {self.id} has shift for day {shift.day_index} "
                    f"at position {index}"
                )

    def shift_for_day(self, day_index: int) -> Optional[Shift]:
        """Shift for a day of the week, or None if the index is out of range."""
        if 0 <= day_index < len(self.shifts):
            return self.shifts[day_index]
        return None


@dataclass(frozen=True)
class Employee:
    """An employee anchored to a base template at week 0."""

    id: str
    name: str
    base_schedule_id: int

    def __post_init__(self):
        if isinstance(self.base_schedule_id, bool) or not isinstance(
            self.base_schedule_id, int
        ):
            raise ValueError(
                f"Base schedule must be an integer, got {self.base_schedule_id!r}"
            )
        if not 1 <= self.base_schedule_id <= 7:
            raise ValueError(
                f"Base schedule must be between 1 and 7, got {self.base_schedule_id}"
            )

    @property
    def first_name(self) -> str:
        """First whitespace-delimited token of the name."""
        parts = self.name.split()
        return parts[0] if parts else ""


@dataclass(frozen=True)
class SwapRequest:
    """Week-scoped exchange of rotated templates between two employees."""

    id: str
    week_number: int
    requester_id: str  # leaves their schedule
    target_id: str  # covers it
    reason: str = ""

    def __post_init__(self):
        if self.requester_id == self.target_id:
            raise ValueError(
                f"Swap requester and target must differ, got '{self.requester_id}' twice"
            )

    def involves(self, employee_id: str) -> bool:
        return employee_id in (self.requester_id, self.target_id)

    def partner_of(self, employee_id: str) -> str:
        """The other party of the swap."""
        if employee_id == self.requester_id:
            return self.target_id
        return self.requester_id


def _as_instant(moment: "date | datetime") -> datetime:
    if isinstance(moment, datetime):
        # Compare on local wall time, like the date-only rules
        return moment.replace(tzinfo=None)
    return datetime.combine(moment, time.min)


@dataclass(frozen=True)
class Vacation:
    """Inclusive vacation range, normalized to whole local days."""

    id: str
    employee_id: str
    start: datetime
    end: datetime

    def __post_init__(self):
        # Normalize to 00:00:00 of the first day and 23:59:59 of the last one
        start = datetime.combine(_as_instant(self.start).date(), time.min)
        end = datetime.combine(_as_instant(self.end).date(), time(23, 59, 59))
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)
        if self.end < self.start:
            raise ValueError(
                f"End date {self.end.date()} cannot be before start date {self.start.date()}"
            )

    def contains(self, moment: "date | datetime") -> bool:
        """Check if a date (or instant) falls within this vacation."""
        return self.start <= _as_instant(moment) <= self.end

    @property
    def duration_days(self) -> int:
        """Number of days in this vacation (inclusive)."""
        return (self.end.date() - self.start.date()).days + 1


@dataclass(frozen=True)
class ShiftOverride:
    """One-day manual relocation of an employee."""

    id: str
    employee_id: str
    date: date
    location: Location
    reason: str = ""


@dataclass(frozen=True)
class EffectiveShift:
    """The precedence-resolved shift for one employee on one date."""

    label: str
    location: Location
    source_tag: str
    source: ShiftSource
    day_index: int
    template_id: Optional[int] = None

    @property
    def is_working(self) -> bool:
        return self.location not in (Location.DESCANSO, Location.VACATION)


@dataclass(frozen=True)
class RosterSnapshot:
    """Immutable view of the four collections consulted by the resolver."""

    employees: Tuple[Employee, ...] = ()
    swaps: Tuple[SwapRequest, ...] = ()
    vacations: Tuple[Vacation, ...] = ()
    overrides: Tuple[ShiftOverride, ...] = ()

    def employee(self, employee_id: str) -> Optional[Employee]:
        """Look up an employee by id, None if unknown."""
        for emp in self.employees:
            if emp.id == employee_id:
                return emp
        return None

    def vacations_for(self, employee_id: str) -> List[Vacation]:
        return [vac for vac in self.vacations if vac.employee_id == employee_id]

    def swaps_in_week(self, week_number: int) -> List[SwapRequest]:
        return [swap for swap in self.swaps if swap.week_number == week_number]


@dataclass(frozen=True)
class WeekRange:
    """Monday and Sunday (inclusive) of a week."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass
class EmployeeWeek:
    """One roster row: an employee and their 7 effective shifts."""

    employee: Employee
    shifts: List[Optional[EffectiveShift]] = field(default_factory=list)

    @property
    def working_days(self) -> int:
        return sum(1 for s in self.shifts if s is not None and s.is_working)


@dataclass
class WeekRoster:
    """Resolved shifts for every employee over one week."""

    week_index: int
    week_range: WeekRange
    rows: List[EmployeeWeek]
    snapshot: RosterSnapshot

    @property
    def dates(self) -> List[date]:
        return [self.week_range.start + timedelta(days=k) for k in range(7)]

    @property
    def week_label(self) -> int:
        """1-based week number shown to users."""
        return self.week_index + 1

    def get_row(self, employee_id: str) -> EmployeeWeek:
        """Get the roster row of a specific employee."""
        for row in self.rows:
            if row.employee.id == employee_id:
                return row
        raise ValueError(f"Employee '{employee_id}' not found in roster")
