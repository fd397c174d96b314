"""
Shift Rotation - Weekly rotating shift resolution with swaps, vacations and manual moves.
"""

__version__ = "0.1.0"

from .catalog import TemplateCatalog, label_for_location
from .config import (
    ConfigLoader,
    ConfigurationError,
    InvalidDateFormatError,
    ScheduleConfig,
)
from .models import (
    EffectiveShift,
    Employee,
    EmployeeWeek,
    Location,
    RosterSnapshot,
    ScheduleTemplate,
    Shift,
    ShiftOverride,
    ShiftSource,
    SwapRequest,
    Vacation,
    WeekRange,
    WeekRoster,
)
from .reporter import ScheduleReporter
from .resolver import ShiftResolver, find_active_swap
from .rotation import schedule_for_week
from .store import RosterStore
from .weeks import WeekIndexer

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "InvalidDateFormatError",
    "ScheduleConfig",
    "TemplateCatalog",
    "label_for_location",
    "Location",
    "Shift",
    "ScheduleTemplate",
    "Employee",
    "SwapRequest",
    "Vacation",
    "ShiftOverride",
    "EffectiveShift",
    "ShiftSource",
    "RosterSnapshot",
    "WeekRange",
    "EmployeeWeek",
    "WeekRoster",
    "WeekIndexer",
    "schedule_for_week",
    "find_active_swap",
    "ShiftResolver",
    "RosterStore",
    "ScheduleReporter",
]
