"""
The catalog of the 7 weekly shift templates employees rotate through.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .models import Location, REST_LABEL, ScheduleTemplate, Shift

ROTATION_LENGTH = 7

# Canonical label used when an administrator relocates someone for a day
LOCATION_LABELS: Dict[Location, str] = {
    Location.GUARDIA: "05:30 PM - 09:00 PM",
    Location.VALLE: "10:00 AM - 07:00 PM",
    Location.MITRAS: "08:30 AM - 05:30 PM",
}


def label_for_location(location: Location) -> str:
    """Canonical display label for a location; rest for anything unlisted."""
    return LOCATION_LABELS.get(location, REST_LABEL)


def make_shift(day_index: int, start: str, end: str, location: Location) -> Shift:
    """Build a shift from start/end times, or a rest day when start is 'OFF'."""
    if start == "OFF":
        return Shift(day_index=day_index, label=REST_LABEL, location=location)
    return Shift(day_index=day_index, label=f"{start} - {end}", location=location)


def _guardia_week(template_id: int) -> ScheduleTemplate:
    g = Location.GUARDIA
    return ScheduleTemplate(
        id=template_id,
        name=f"Horario {template_id} (Guardia)",
        shifts=(
            make_shift(0, "05:30 PM", "09:00 PM", g),
            make_shift(1, "05:30 PM", "09:00 PM", g),
            make_shift(2, "05:30 PM", "09:00 PM", g),
            make_shift(3, "05:30 PM", "09:00 PM", g),
            make_shift(4, "05:00 PM", "09:00 PM", g),  # Friday starts earlier
            make_shift(5, "10:00 AM", "09:00 PM", g),
            make_shift(6, "10:00 AM", "09:00 PM", g),
        ),
    )


def _weekday_template(
    template_id: int, location: Location, start: str, end: str
) -> ScheduleTemplate:
    """Monday-Friday at one location, weekend off."""
    weekdays = [make_shift(k, start, end, location) for k in range(5)]
    weekend = [make_shift(k, "OFF", "OFF", Location.DESCANSO) for k in (5, 6)]
    return ScheduleTemplate(
        id=template_id,
        name=f"Horario {template_id} ({location.value})",
        shifts=tuple(weekdays + weekend),
    )


def default_templates() -> List[ScheduleTemplate]:
    """The built-in rotation of 7 templates."""
    return [
        _guardia_week(1),
        _weekday_template(2, Location.VALLE, "10:00 AM", "07:00 PM"),
        _weekday_template(3, Location.MITRAS, "10:00 AM", "07:00 PM"),
        _guardia_week(4),
        _weekday_template(5, Location.VALLE, "10:00 AM", "07:00 PM"),
        _weekday_template(6, Location.MITRAS, "08:30 AM", "05:30 PM"),
        _weekday_template(7, Location.MITRAS, "08:30 AM", "05:30 PM"),
    ]


@dataclass(frozen=True)
class TemplateCatalog:
    """Immutable, id-ordered set of exactly 7 schedule templates.

    The modulo-7 rotation is only sound over a full catalog, so an incomplete
    or inconsistent set of templates is rejected at construction.
    """

    templates: Tuple[ScheduleTemplate, ...]

    def __post_init__(self):
        ordered = tuple(sorted(self.templates, key=lambda t: t.id))
        if len(ordered) != ROTATION_LENGTH:
            raise ValueError(
                f"Template catalog must contain exactly {ROTATION_LENGTH} templates, "
                f"got {len(ordered)}"
            )
        ids = [t.id for t in ordered]
        expected = list(range(1, ROTATION_LENGTH + 1))
        if ids != expected:
            raise ValueError(
                f"Template ids must be {expected}, got {ids}"
            )
        object.__setattr__(self, "templates", ordered)

    @classmethod
    def default(cls) -> "TemplateCatalog":
        return cls(templates=tuple(default_templates()))

    def __len__(self) -> int:
        return len(self.templates)

    def __iter__(self) -> Iterator[ScheduleTemplate]:
        return iter(self.templates)

    def at_position(self, index: int) -> ScheduleTemplate:
        """Template at a 0-based rotation position."""
        return self.templates[index]

    def get(self, template_id: int) -> Optional[ScheduleTemplate]:
        """Look up a template by id, None if there is no such template."""
        for template in self.templates:
            if template.id == template_id:
                return template
        return None
