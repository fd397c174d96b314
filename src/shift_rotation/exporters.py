"""
Export strategies for weekly roster data.

This module implements the Strategy Pattern for exporting a resolved week
to various formats. Each exporter encapsulates a specific output format.
"""

import csv
from abc import ABC, abstractmethod
from datetime import date

from .models import EmployeeWeek, WeekRoster


class ExportStrategy(ABC):
    """Abstract base class for roster export strategies.

    Subclasses implement specific export formats. Common helper methods
    for data transformation are provided here.
    """

    def __init__(self, roster: WeekRoster):
        """Initialize the export strategy.

        Args:
            roster: The resolved week to export
        """
        self.roster = roster

    @abstractmethod
    def export(self, filepath: str) -> None:
        """Export roster to the specified file.

        Args:
            filepath: Path to the output file
        """
        pass

    def _get_date_range(self) -> list[date]:
        """Get ordered list of the 7 dates of the week, Monday first."""
        return self.roster.dates

    def _sorted_rows(self) -> list[EmployeeWeek]:
        """Roster rows sorted alphabetically by employee name."""
        return sorted(self.roster.rows, key=lambda row: row.employee.name)


class SimpleCSVExporter(ExportStrategy):
    """Exports roster as a long CSV.

    Output format: Date, Day_of_Week, Employee, Location, Label, Source
    One row per employee per day.
    """

    FIELDNAMES = ["Date", "Day_of_Week", "Employee", "Location", "Label", "Source"]

    def export(self, filepath: str) -> None:
        """Export roster to CSV file in long format.

        Args:
            filepath: Path to the output CSV file
        """
        rows: list[dict[str, str]] = []
        dates = self._get_date_range()

        for row in self._sorted_rows():
            for day, shift in zip(dates, row.shifts):
                rows.append(
                    {
                        "Date": day.isoformat(),
                        "Day_of_Week": day.strftime("%a"),
                        "Employee": row.employee.name,
                        "Location": shift.location.value if shift else "",
                        "Label": shift.label if shift else "",
                        "Source": shift.source_tag if shift else "",
                    }
                )

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=self.FIELDNAMES)
            writer.writeheader()
            writer.writerows(rows)

        print(f"\n✓ Roster exported to {filepath}")


class MatrixCSVExporter(ExportStrategy):
    """Exports roster as an employee by date matrix.

    Output format:
    - First column: Employee name
    - Subsequent columns: One per date
    - Cells hold the location of working days and the label otherwise
    - A WORKING row at the bottom counts staff on duty per date
    """

    def __init__(self, roster: WeekRoster, show_labels: bool = False):
        """Initialize the matrix CSV exporter.

        Args:
            roster: The resolved week to export
            show_labels: Write the time label instead of the location
        """
        super().__init__(roster)
        self.show_labels = show_labels

    def export(self, filepath: str) -> None:
        """Export roster to CSV file in matrix format.

        Args:
            filepath: Path to the output CSV file
        """
        dates = self._get_date_range()
        rows: list[list[str]] = [self._build_header_row(dates)]

        for roster_row in self._sorted_rows():
            row = [roster_row.employee.name]
            for shift in roster_row.shifts:
                row.append(self._cell(shift))
            rows.append(row)

        rows.append(self._build_total_row())

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerows(rows)

        print(f"\n✓ Roster exported to {filepath} (matrix format)")

    def _cell(self, shift) -> str:
        if shift is None:
            return ""
        if shift.is_working and not self.show_labels:
            return shift.location.value
        return shift.label

    def _build_header_row(self, dates: list[date]) -> list[str]:
        """Build the header row with Employee column and date columns.

        Args:
            dates: List of dates for column headers

        Returns:
            List of header strings
        """
        header = ["Employee"]
        for d in dates:
            header.append(f"{d.strftime('%Y-%m-%d')} {d.strftime('%a')}")
        return header

    def _build_total_row(self) -> list[str]:
        """Build the WORKING row with the number of staff on duty per date."""
        total_row = ["WORKING"]
        for k in range(len(self.roster.dates)):
            on_duty = sum(
                1
                for row in self.roster.rows
                if row.shifts[k] is not None and row.shifts[k].is_working
            )
            total_row.append(str(on_duty))
        return total_row
