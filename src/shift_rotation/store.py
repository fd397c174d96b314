"""
In-memory owner of the roster collections.

The store is the only writer of employees, swaps, vacations and overrides.
Readers never see it directly: they receive an immutable RosterSnapshot,
refreshed after every mutation.
"""

import logging
import uuid
from datetime import date, datetime
from typing import Dict, Optional

from .models import (
    Employee,
    Location,
    RosterSnapshot,
    ShiftOverride,
    SwapRequest,
    Vacation,
)
from .weeks import WeekIndexer, as_date

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class RosterStore:
    """Mutable collections of roster records, keyed by record id."""

    def __init__(self, indexer: Optional[WeekIndexer] = None):
        self.indexer = indexer or WeekIndexer()
        self._employees: Dict[str, Employee] = {}
        self._swaps: Dict[str, SwapRequest] = {}
        self._vacations: Dict[str, Vacation] = {}
        self._overrides: Dict[str, ShiftOverride] = {}
        self._snapshot: Optional[RosterSnapshot] = None

    def snapshot(self) -> RosterSnapshot:
        """Current immutable view, in insertion order."""
        if self._snapshot is None:
            self._snapshot = RosterSnapshot(
                employees=tuple(self._employees.values()),
                swaps=tuple(self._swaps.values()),
                vacations=tuple(self._vacations.values()),
                overrides=tuple(self._overrides.values()),
            )
        return self._snapshot

    def _changed(self) -> None:
        self._snapshot = None

    def add_employee(
        self, name: str, base_schedule_id: int, employee_id: Optional[str] = None
    ) -> Employee:
        """Register an employee anchored to a base template."""
        employee = Employee(
            id=employee_id or _new_id(),
            name=name,
            base_schedule_id=base_schedule_id,
        )
        self._check_unique(self._employees, employee.id, "Employee")
        self._employees[employee.id] = employee
        self._changed()
        return employee

    def add_swap(
        self,
        requester_id: str,
        target_id: str,
        reason: str = "",
        on_date: "date | datetime | None" = None,
        week_number: Optional[int] = None,
        swap_id: Optional[str] = None,
    ) -> SwapRequest:
        """
        Record a swap between two employees.

        The week is fixed at creation, either given directly or computed from
        ``on_date``; it is never re-derived afterwards.

        Raises:
            ValueError: If neither or both of on_date and week_number are given
        """
        if (on_date is None) == (week_number is None):
            raise ValueError("Provide exactly one of on_date or week_number")
        if week_number is None:
            week_number = self.indexer.weeks_passed(on_date)

        swap = SwapRequest(
            id=swap_id or _new_id(),
            week_number=int(week_number),
            requester_id=requester_id,
            target_id=target_id,
            reason=reason,
        )
        self._check_unique(self._swaps, swap.id, "Swap")
        self._swaps[swap.id] = swap
        self._changed()
        return swap

    def add_vacation(
        self,
        employee_id: str,
        start: "date | datetime",
        end: "date | datetime",
        vacation_id: Optional[str] = None,
    ) -> Vacation:
        """Record an inclusive vacation covering whole days."""
        vacation = Vacation(
            id=vacation_id or _new_id(),
            employee_id=employee_id,
            start=start,
            end=end,
        )
        self._check_unique(self._vacations, vacation.id, "Vacation")
        self._vacations[vacation.id] = vacation
        self._changed()
        return vacation

    def add_override(
        self,
        employee_id: str,
        day: "date | datetime",
        location: "Location | str",
        reason: str = "",
        override_id: Optional[str] = None,
    ) -> ShiftOverride:
        """Record a one-day manual relocation."""
        override = ShiftOverride(
            id=override_id or _new_id(),
            employee_id=employee_id,
            date=as_date(day),
            location=Location.parse(location),
            reason=reason,
        )
        self._check_unique(self._overrides, override.id, "Override")
        self._overrides[override.id] = override
        self._changed()
        return override

    def remove_employee(self, employee_id: str) -> bool:
        # Exceptions pointing at the employee stay; the resolver skips them
        return self._remove(self._employees, employee_id)

    def remove_swap(self, swap_id: str) -> bool:
        return self._remove(self._swaps, swap_id)

    def remove_vacation(self, vacation_id: str) -> bool:
        return self._remove(self._vacations, vacation_id)

    def remove_override(self, override_id: str) -> bool:
        return self._remove(self._overrides, override_id)

    def reset_all(self) -> None:
        """Clear all four collections."""
        for collection in (
            self._employees,
            self._swaps,
            self._vacations,
            self._overrides,
        ):
            collection.clear()
        logger.info("Roster store reset")
        self._changed()

    def _remove(self, collection: Dict, record_id: str) -> bool:
        if record_id not in collection:
            return False
        del collection[record_id]
        self._changed()
        return True

    @staticmethod
    def _check_unique(collection: Dict, record_id: str, kind: str) -> None:
        if record_id in collection:
            raise ValueError(f"{kind} id '{record_id}' already exists")
