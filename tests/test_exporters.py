"""Tests for roster export strategies."""

import csv
import pytest
from datetime import date

from shift_rotation.exporters import (
    ExportStrategy,
    MatrixCSVExporter,
    SimpleCSVExporter,
)
from shift_rotation.models import WeekRoster
from shift_rotation.store import RosterStore


@pytest.fixture
def week_roster(store: RosterStore, make_resolver) -> WeekRoster:
    """Week 2 with a vacation and a manual move."""
    store.add_vacation("ana", date(2026, 1, 12), date(2026, 1, 13))
    store.add_override("beto", date(2026, 1, 14), "Valle")
    return make_resolver(store).week_roster(date(2026, 1, 12))


def read_rows(filepath) -> list[list[str]]:
    with open(filepath, encoding="utf-8") as f:
        return list(csv.reader(f))


class TestExportStrategyBase:
    """Tests for the ExportStrategy abstract base class."""

    def test_cannot_instantiate_abstract_class(self, week_roster: WeekRoster):
        with pytest.raises(TypeError):
            ExportStrategy(week_roster)

    def test_get_date_range(self, week_roster: WeekRoster):
        dates = SimpleCSVExporter(week_roster)._get_date_range()
        assert len(dates) == 7
        assert dates[0] == date(2026, 1, 12)
        assert dates[-1] == date(2026, 1, 18)

    def test_rows_sorted_by_name(self, week_roster: WeekRoster):
        rows = SimpleCSVExporter(week_roster)._sorted_rows()
        names = [row.employee.name for row in rows]
        assert names == sorted(names)


class TestSimpleCSVExporter:
    """Tests for SimpleCSVExporter."""

    def test_headers_and_row_count(self, week_roster: WeekRoster, tmp_path):
        filepath = tmp_path / "roster.csv"
        SimpleCSVExporter(week_roster).export(str(filepath))

        rows = read_rows(filepath)
        assert rows[0] == SimpleCSVExporter.FIELDNAMES
        # 3 employees x 7 days
        assert len(rows) == 1 + 21

    def test_exception_sources_written(self, week_roster: WeekRoster, tmp_path):
        filepath = tmp_path / "roster.csv"
        SimpleCSVExporter(week_roster).export(str(filepath))

        with open(filepath, encoding="utf-8") as f:
            records = list(csv.DictReader(f))

        ana_monday = next(
            r for r in records if r["Employee"] == "Ana López" and r["Date"] == "2026-01-12"
        )
        assert ana_monday["Location"] == "VACACIONES"
        assert ana_monday["Source"] == "VAC"

        beto_wednesday = next(
            r for r in records if r["Employee"] == "Alberto Ruiz" and r["Date"] == "2026-01-14"
        )
        assert beto_wednesday["Location"] == "Valle"
        assert beto_wednesday["Label"] == "10:00 AM - 07:00 PM"
        assert beto_wednesday["Source"] == "MANUAL"

    def test_export_empty_roster(self, catalog, indexer, make_resolver, tmp_path):
        roster = make_resolver(RosterStore(indexer)).week_roster(date(2026, 1, 12))
        filepath = tmp_path / "empty.csv"
        SimpleCSVExporter(roster).export(str(filepath))

        rows = read_rows(filepath)
        assert rows == [SimpleCSVExporter.FIELDNAMES]


class TestMatrixCSVExporter:
    """Tests for MatrixCSVExporter."""

    def test_header_row(self, week_roster: WeekRoster, tmp_path):
        filepath = tmp_path / "matrix.csv"
        MatrixCSVExporter(week_roster).export(str(filepath))

        header = read_rows(filepath)[0]
        assert header[0] == "Employee"
        assert header[1] == "2026-01-12 Mon"
        assert len(header) == 8

    def test_cells_and_total_row(self, week_roster: WeekRoster, tmp_path):
        filepath = tmp_path / "matrix.csv"
        MatrixCSVExporter(week_roster).export(str(filepath))

        rows = read_rows(filepath)
        by_name = {row[0]: row[1:] for row in rows[1:]}

        # Carla works template 5 (Valle) in week 2
        assert by_name["Carla Méndez"][:5] == ["Valle"] * 5
        assert by_name["Carla Méndez"][5:] == ["Descanso", "Descanso"]
        assert by_name["Ana López"][0] == "VACACIONES"

        # Monday: Ana on vacation, Beto (Guardia) and Carla working
        assert by_name["WORKING"][0] == "2"
        # Saturday: only Beto's Guardia template works
        assert by_name["WORKING"][5] == "1"

    def test_show_labels(self, week_roster: WeekRoster, tmp_path):
        filepath = tmp_path / "matrix.csv"
        MatrixCSVExporter(week_roster, show_labels=True).export(str(filepath))

        by_name = {row[0]: row[1:] for row in read_rows(filepath)[1:]}
        assert by_name["Carla Méndez"][0] == "10:00 AM - 07:00 PM"
