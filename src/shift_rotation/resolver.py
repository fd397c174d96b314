"""
Effective shift resolution.

Combines the base rotation with the three kinds of exceptions. Rules are
evaluated in priority order and the first one that yields a shift wins:

    1. manual override for that exact date
    2. vacation covering the date
    3. swap active in the date's week
    4. the employee's own rotation
"""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Sequence, Tuple

from .catalog import TemplateCatalog, label_for_location
from .models import (
    EffectiveShift,
    Employee,
    EmployeeWeek,
    Location,
    RosterSnapshot,
    ShiftSource,
    SwapRequest,
    VACATION_LABEL,
    WeekRoster,
)
from .rotation import schedule_for_week
from .weeks import WeekIndexer, as_date

logger = logging.getLogger(__name__)

Rule = Callable[[Employee, "date | datetime", int, int], Optional[EffectiveShift]]


def find_active_swap(
    swaps: Sequence[SwapRequest], employee_id: str, week_index: int
) -> Optional[SwapRequest]:
    """
    First swap in stream order involving an employee in a given week.

    More than one match is a data inconsistency; it is tolerated and the
    first record wins.
    """
    matches = [
        swap
        for swap in swaps
        if swap.week_number == week_index and swap.involves(employee_id)
    ]
    if len(matches) > 1:
        logger.debug(
            "Employee %s has %d swaps in week %d, using %s",
            employee_id,
            len(matches),
            week_index,
            matches[0].id,
        )
    return matches[0] if matches else None


class ShiftResolver:
    """Resolves effective shifts against one immutable roster snapshot."""

    def __init__(
        self,
        catalog: TemplateCatalog,
        indexer: WeekIndexer,
        snapshot: RosterSnapshot,
    ):
        self.catalog = catalog
        self.indexer = indexer
        self.snapshot = snapshot
        self.rules: Tuple[Rule, ...] = (
            self._manual_override,
            self._vacation,
            self._swap,
            self._base_rotation,
        )

    def weeks_passed(self, day: "date | datetime") -> int:
        return self.indexer.weeks_passed(day)

    def effective_shift(
        self,
        employee_id: str,
        day: "date | datetime",
        day_index: Optional[int] = None,
    ) -> Optional[EffectiveShift]:
        """
        Final shift an employee works on a date.

        Args:
            employee_id: Id of the employee
            day: Calendar date (a datetime is truncated to its date for
                week and override matching)
            day_index: Day of the week, 0=Mon; defaults to the date's weekday

        Returns:
            EffectiveShift, or None when the employee, template or day slot
            cannot be resolved
        """
        employee = self.snapshot.employee(employee_id)
        if employee is None:
            return None
        return self.resolve(employee, day, day_index)

    def resolve(
        self,
        employee: Employee,
        day: "date | datetime",
        day_index: Optional[int] = None,
    ) -> Optional[EffectiveShift]:
        """Run the rule chain for an employee object."""
        if day_index is None:
            day_index = as_date(day).weekday()
        week_index = self.indexer.weeks_passed(day)

        for rule in self.rules:
            shift = rule(employee, day, day_index, week_index)
            if shift is not None:
                return shift
        return None

    def _manual_override(self, employee, day, day_index, week_index):
        target = as_date(day)
        for override in self.snapshot.overrides:
            if override.employee_id == employee.id and override.date == target:
                return EffectiveShift(
                    label=label_for_location(override.location),
                    location=override.location,
                    source_tag="MANUAL",
                    source=ShiftSource.MANUAL,
                    day_index=day_index,
                )
        return None

    def _vacation(self, employee, day, day_index, week_index):
        for vacation in self.snapshot.vacations_for(employee.id):
            if vacation.contains(day):
                return EffectiveShift(
                    label=VACATION_LABEL,
                    location=Location.VACATION,
                    source_tag="VAC",
                    source=ShiftSource.VACATION,
                    day_index=day_index,
                )
        return None

    def _swap(self, employee, day, day_index, week_index):
        swap = find_active_swap(self.snapshot.swaps, employee.id, week_index)
        if swap is None:
            return None

        partner = self.snapshot.employee(swap.partner_of(employee.id))
        if partner is None:
            logger.debug(
                "Swap %s references unknown employee %s, skipping",
                swap.id,
                swap.partner_of(employee.id),
            )
            return None

        # The whole week is exchanged, not just the queried day
        return self._from_rotation(
            partner.base_schedule_id,
            week_index,
            day_index,
            source_tag=f"↔ {partner.first_name}",
            source=ShiftSource.SWAP,
        )

    def _base_rotation(self, employee, day, day_index, week_index):
        return self._from_rotation(
            employee.base_schedule_id,
            week_index,
            day_index,
            source_tag=f"H-{employee.base_schedule_id}",
            source=ShiftSource.ROTATION,
        )

    def _from_rotation(
        self,
        base_schedule_id: int,
        week_index: int,
        day_index: int,
        source_tag: str,
        source: ShiftSource,
    ) -> Optional[EffectiveShift]:
        template = schedule_for_week(self.catalog, base_schedule_id, week_index)
        if template is None:
            return None
        shift = template.shift_for_day(day_index)
        if shift is None:
            return None
        return EffectiveShift(
            label=shift.label,
            location=shift.location,
            source_tag=source_tag,
            source=source,
            day_index=day_index,
            template_id=template.id,
        )

    def employee_week(
        self, employee_id: str, day: "date | datetime"
    ) -> List[Optional[EffectiveShift]]:
        """Effective shifts, Monday first, for the week containing a date."""
        return [
            self.effective_shift(employee_id, d, k)
            for k, d in enumerate(self.indexer.week_dates(day))
        ]

    def week_roster(self, day: "date | datetime") -> WeekRoster:
        """Resolve every employee over the week containing a date."""
        dates = self.indexer.week_dates(day)
        rows = [
            EmployeeWeek(
                employee=emp,
                shifts=[self.resolve(emp, d, k) for k, d in enumerate(dates)],
            )
            for emp in self.snapshot.employees
        ]
        return WeekRoster(
            week_index=self.indexer.weeks_passed(day),
            week_range=self.indexer.week_range(day),
            rows=rows,
            snapshot=self.snapshot,
        )
