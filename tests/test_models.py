"""Tests for data models."""

import pytest
from datetime import date, datetime, timezone

from shift_rotation.models import (
    EffectiveShift,
    Employee,
    Location,
    RosterSnapshot,
    ScheduleTemplate,
    Shift,
    ShiftSource,
    SwapRequest,
    Vacation,
)


class TestLocation:
    """Tests for parsing location tags."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Guardia", Location.GUARDIA),
            ("guardia", Location.GUARDIA),
            ("VALLE", Location.VALLE),
            ("mitras", Location.MITRAS),
            ("Descanso", Location.DESCANSO),
            ("rest", Location.DESCANSO),
            ("VACACIONES", Location.VACATION),
            ("vacation", Location.VACATION),
        ],
    )
    def test_parse_accepts_values_and_names(self, raw: str, expected: Location):
        """Values and member names parse case-insensitively."""
        assert Location.parse(raw) == expected

    def test_parse_unknown_raises_error(self):
        """Unknown locations are rejected with the list of valid ones."""
        with pytest.raises(ValueError, match="Unknown location"):
            Location.parse("Office")

    def test_parse_passes_through_members(self):
        assert Location.parse(Location.VALLE) is Location.VALLE


class TestEmployee:
    """Tests for Employee validation."""

    @pytest.mark.parametrize("invalid_base", [0, 8, -1])
    def test_base_schedule_out_of_range_raises_error(self, invalid_base: int):
        """Base schedule must be one of the 7 template ids."""
        with pytest.raises(ValueError, match="between 1 and 7"):
            Employee(id="x", name="X", base_schedule_id=invalid_base)

    @pytest.mark.parametrize("invalid_base", [True, False, "1", 1.0])
    def test_non_integer_base_schedule_raises_error(self, invalid_base):
        """Booleans are not template ids even though they are ints."""
        with pytest.raises(ValueError, match="must be an integer"):
            Employee(id="x", name="X", base_schedule_id=invalid_base)

    @pytest.mark.parametrize(
        "name,first",
        [("Ana López", "Ana"), ("  Beto   Ruiz ", "Beto"), ("Carla", "Carla"), ("", "")],
    )
    def test_first_name_is_first_token(self, name: str, first: str):
        emp = Employee(id="x", name=name, base_schedule_id=1)
        assert emp.first_name == first


class TestSwapRequest:
    """Tests for SwapRequest pairing."""

    def test_same_employee_twice_raises_error(self):
        """A swap needs two distinct employees."""
        with pytest.raises(ValueError, match="must differ"):
            SwapRequest(id="s", week_number=0, requester_id="ana", target_id="ana")

    def test_partner_of_each_side(self):
        swap = SwapRequest(id="s", week_number=0, requester_id="ana", target_id="beto")
        assert swap.partner_of("ana") == "beto"
        assert swap.partner_of("beto") == "ana"

    def test_involves(self):
        swap = SwapRequest(id="s", week_number=0, requester_id="ana", target_id="beto")
        assert swap.involves("ana")
        assert swap.involves("beto")
        assert not swap.involves("carla")


class TestVacation:
    """Tests for Vacation normalization and boundaries."""

    def test_end_before_start_raises_error(self):
        """Vacation end date cannot be before start date."""
        with pytest.raises(ValueError, match="cannot be before start date"):
            Vacation(id="v", employee_id="ana", start=date(2026, 1, 10), end=date(2026, 1, 5))

    def test_bounds_normalized_to_whole_days(self):
        """Start is 00:00:00 of the first day, end 23:59:59 of the last one."""
        vac = Vacation(
            id="v",
            employee_id="ana",
            start=datetime(2026, 1, 5, 14, 30),
            end=date(2026, 1, 9),
        )
        assert vac.start == datetime(2026, 1, 5, 0, 0, 0)
        assert vac.end == datetime(2026, 1, 9, 23, 59, 59)

    @pytest.mark.parametrize(
        "moment,expected",
        [
            (date(2026, 1, 4), False),  # Before
            (date(2026, 1, 5), True),  # Start
            (date(2026, 1, 7), True),  # Middle
            (date(2026, 1, 9), True),  # End
            (datetime(2026, 1, 9, 23, 0), True),  # Late on the last day
            (datetime(2026, 1, 7, 12, tzinfo=timezone.utc), True),  # Aware
            (datetime(2026, 1, 10, 0, 30, tzinfo=timezone.utc), False),
            (date(2026, 1, 10), False),  # After
        ],
    )
    def test_contains_checks_inclusive_boundaries(self, moment, expected: bool):
        vac = Vacation(id="v", employee_id="ana", start=date(2026, 1, 5), end=date(2026, 1, 9))
        assert vac.contains(moment) == expected

    def test_duration_is_inclusive(self):
        vac = Vacation(id="v", employee_id="ana", start=date(2026, 1, 5), end=date(2026, 1, 9))
        assert vac.duration_days == 5


class TestScheduleTemplate:
    """Tests for template shape validation."""

    def _shifts(self, count: int):
        return tuple(
            Shift(day_index=k, label="Descanso", location=Location.DESCANSO)
            for k in range(count)
        )

    def test_requires_seven_shifts(self):
        with pytest.raises(ValueError, match="exactly 7 shifts"):
            ScheduleTemplate(id=1, name="Short", shifts=self._shifts(6))

    def test_shifts_must_be_in_day_order(self):
        shifts = list(self._shifts(7))
        shifts[0], shifts[1] = shifts[1], shifts[0]
        with pytest.raises(ValueError, match="at position 0"):
            ScheduleTemplate(id=1, name="Shuffled", shifts=tuple(shifts))

    def test_shift_for_day_miss_returns_none(self):
        template = ScheduleTemplate(id=1, name="Rest", shifts=self._shifts(7))
        assert template.shift_for_day(6).day_index == 6
        assert template.shift_for_day(7) is None

    @pytest.mark.parametrize("invalid_day", [-1, 7])
    def test_shift_day_index_range(self, invalid_day: int):
        with pytest.raises(ValueError, match="between 0"):
            Shift(day_index=invalid_day, label="x", location=Location.VALLE)


class TestEffectiveShift:
    @pytest.mark.parametrize(
        "location,working",
        [
            (Location.GUARDIA, True),
            (Location.MITRAS, True),
            (Location.DESCANSO, False),
            (Location.VACATION, False),
        ],
    )
    def test_is_working(self, location: Location, working: bool):
        shift = EffectiveShift(
            label="x",
            location=location,
            source_tag="H-1",
            source=ShiftSource.ROTATION,
            day_index=0,
        )
        assert shift.is_working == working


class TestRosterSnapshot:
    def test_employee_lookup_miss_returns_none(self):
        snapshot = RosterSnapshot(employees=(Employee(id="ana", name="Ana", base_schedule_id=1),))
        assert snapshot.employee("ana").name == "Ana"
        assert snapshot.employee("ghost") is None

    def test_snapshot_is_immutable(self):
        snapshot = RosterSnapshot()
        with pytest.raises(AttributeError):
            snapshot.employees = ()
