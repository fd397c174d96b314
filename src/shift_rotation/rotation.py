"""
Weekly rotation of an employee's template through the catalog.
"""

from typing import Optional

from .catalog import ROTATION_LENGTH, TemplateCatalog
from .models import ScheduleTemplate


def rotation_index(base_schedule_id: int, weeks_passed: int) -> int:
    """
    0-based catalog position active in a given week.

    The rotation advances one template per week and repeats every 7 weeks.
    Python's % takes the sign of the divisor, so the result stays in 0..6
    for negative week offsets too.
    """
    return (base_schedule_id - 1 + weeks_passed) % ROTATION_LENGTH


def schedule_for_week(
    catalog: TemplateCatalog, base_schedule_id: int, weeks_passed: int
) -> Optional[ScheduleTemplate]:
    """
    Template an employee works in a given week.

    Args:
        catalog: The 7-template rotation catalog
        base_schedule_id: Template id (1..7) the employee holds in week 0
        weeks_passed: Week index relative to the epoch, may be negative

    Returns:
        The rotated template, or None if the base id is not a valid template id
    """
    if isinstance(base_schedule_id, bool) or not isinstance(base_schedule_id, int):
        return None
    if not 1 <= base_schedule_id <= ROTATION_LENGTH:
        return None
    return catalog.at_position(rotation_index(base_schedule_id, weeks_passed))
