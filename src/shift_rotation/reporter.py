"""
Reporting and output formatting for weekly rosters.
"""

import pandas as pd
from typing import Optional

from .models import EffectiveShift, Location, ShiftSource, WeekRoster

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def format_cell(shift: Optional[EffectiveShift]) -> str:
    """Compact text for one roster cell."""
    if shift is None:
        return "-"
    if shift.is_working:
        text = f"{shift.location.value} {shift.label}"
    else:
        text = shift.label
    if shift.source != ShiftSource.ROTATION:
        text += f" [{shift.source_tag}]"
    return text


class ScheduleReporter:
    """Formats and displays a resolved week."""

    def __init__(self, roster: WeekRoster):
        self.roster = roster

    def print_report(self, quiet: bool) -> None:
        """Print complete weekly report."""
        self._print_header()

        if not self.roster.rows:
            print("\nNo employees in the roster.")
            return

        self._print_roster()

        if not quiet:
            self._print_location_summary()
            self._print_exceptions()

    def _print_title(self, title: str) -> None:
        print("=" * 80)
        print(title)
        print("=" * 80)

    def _column_names(self) -> list[str]:
        return [
            f"{DAY_NAMES[k]} {d.strftime('%d/%m')}"
            for k, d in enumerate(self.roster.dates)
        ]

    def _print_header(self) -> None:
        """Print report header."""
        week = self.roster.week_range
        self._print_title(f"WEEK {self.roster.week_label} ROSTER")

        print(f"\nWeek index: {self.roster.week_index}")
        print(f"Period: {week.start} to {week.end}")
        print(f"Employees: {len(self.roster.rows)}")
        print()

    def to_dataframe(self) -> pd.DataFrame:
        """Roster as a table: one row per employee, one column per day."""
        data = []
        for row in self.roster.rows:
            record = {"Employee": row.employee.name}
            for column, shift in zip(self._column_names(), row.shifts):
                record[column] = format_cell(shift)
            data.append(record)

        df = pd.DataFrame(data, columns=["Employee"] + self._column_names())
        return df.set_index("Employee")

    def location_counts(self) -> pd.DataFrame:
        """Number of employees per working location for each day."""
        locations = [Location.GUARDIA, Location.VALLE, Location.MITRAS]
        data = []
        for location in locations:
            record = {"Location": location.value}
            for k, column in enumerate(self._column_names()):
                record[column] = sum(
                    1
                    for row in self.roster.rows
                    if row.shifts[k] is not None and row.shifts[k].location == location
                )
            data.append(record)
        return pd.DataFrame(data).set_index("Location")

    def _print_roster(self) -> None:
        """Print the employee by day grid."""
        self._print_title("ROSTER")
        with pd.option_context("display.width", 200, "display.max_columns", None):
            print(self.to_dataframe().to_string())
        print()

    def _print_location_summary(self) -> None:
        self._print_title("STAFF PER LOCATION")
        print(self.location_counts().to_string())
        print()

    def _print_exceptions(self) -> None:
        """Print the swaps, vacations and overrides that touch this week."""
        self._print_title("EXCEPTIONS THIS WEEK")
        snapshot = self.roster.snapshot
        week = self.roster.week_range

        def name_of(employee_id: str) -> str:
            emp = snapshot.employee(employee_id)
            return emp.name if emp is not None else f"<unknown {employee_id}>"

        swaps = snapshot.swaps_in_week(self.roster.week_index)
        vacations = [
            vac
            for vac in snapshot.vacations
            if vac.start.date() <= week.end and vac.end.date() >= week.start
        ]
        overrides = [ov for ov in snapshot.overrides if week.contains(ov.date)]

        if not (swaps or vacations or overrides):
            print("\n  No exceptions this week")
            print()
            return

        for swap in swaps:
            reason = f" ({swap.reason})" if swap.reason else ""
            print(
                f"  Swap: {name_of(swap.requester_id)} ↔ "
                f"{name_of(swap.target_id)}{reason}"
            )
        for vac in vacations:
            print(
                f"  Vacation: {name_of(vac.employee_id)} "
                f"{vac.start.strftime('%Y-%m-%d (%a)')} to "
                f"{vac.end.strftime('%Y-%m-%d (%a)')} ({vac.duration_days} days)"
            )
        for ov in overrides:
            reason = f" ({ov.reason})" if ov.reason else ""
            print(
                f"  Manual move: {name_of(ov.employee_id)} on "
                f"{ov.date.strftime('%Y-%m-%d (%a)')} to {ov.location.value}{reason}"
            )
        print()

    def print_employee_week(self, employee_id: str) -> None:
        """Print one employee's week, one line per day."""
        row = self.roster.get_row(employee_id)
        self._print_title(f"SCHEDULE FOR {row.employee.name.upper()}")

        for k, (day, shift) in enumerate(zip(self.roster.dates, row.shifts)):
            tag = shift.source_tag if shift is not None else ""
            print(
                f"{DAY_NAMES[k]} {day.strftime('%Y-%m-%d')}: "
                f"{format_cell(shift):45s} {tag}"
            )
        print(f"\nWorking days: {row.working_days}")
        print()

