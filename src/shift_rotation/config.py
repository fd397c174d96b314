"""
Configuration loader for parsing YAML rotation configuration.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .catalog import TemplateCatalog
from .models import Location, ScheduleTemplate, Shift
from .resolver import ShiftResolver
from .store import RosterStore
from .weeks import DEFAULT_EPOCH, WeekIndexer

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Custom exception for configuration errors."""

    pass


class InvalidDateFormatError(ConfigurationError):
    """Raised when a date is not in ISO 8601 format (YYYY-MM-DD)."""

    pass


@dataclass
class ScheduleConfig:
    """Complete configuration: epoch, template catalog and roster data."""

    epoch: date
    catalog: TemplateCatalog
    store: RosterStore
    warnings: List[str] = field(default_factory=list)

    @property
    def indexer(self) -> WeekIndexer:
        return self.store.indexer

    def resolver(self) -> ShiftResolver:
        """Resolver bound to the store's current snapshot."""
        return ShiftResolver(self.catalog, self.indexer, self.store.snapshot())


class ConfigLoader:
    """Loads and validates rotation configuration from YAML files."""

    def __init__(self, config_path: str | Path):
        """
        Initialize the ConfigLoader with a configuration file path.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        self.config_path = Path(config_path)

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        self._raw_config: Dict[str, Any] | None = None
        self._config: ScheduleConfig | None = None

    def load(self) -> ScheduleConfig:
        """
        Load and parse the configuration file.

        Returns:
            ScheduleConfig object with all parsed data

        Raises:
            InvalidDateFormatError: If dates are not in ISO 8601 format
            ConfigurationError: If configuration is invalid
        """
        with open(self.config_path, "r") as f:
            self._raw_config = yaml.safe_load(f) or {}

        if not isinstance(self._raw_config, dict):
            raise ConfigurationError(
                f"Top level of {self.config_path} must be a mapping"
            )

        self._config = self._parse_config()
        self._check_references()

        return self._config

    def reload(self) -> ScheduleConfig:
        """Reload the configuration from the file."""
        return self.load()

    @property
    def config(self) -> ScheduleConfig:
        """
        Get the loaded configuration.

        Raises:
            RuntimeError: If load() hasn't been called yet
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    @property
    def raw_config(self) -> Dict[str, Any]:
        """
        Get the raw configuration dictionary.

        Raises:
            RuntimeError: If load() hasn't been called yet
        """
        if self._raw_config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._raw_config

    def _parse_config(self) -> ScheduleConfig:
        """Parse raw YAML data into ScheduleConfig object."""
        raw = self._raw_config

        rotation = raw.get("rotation") or {}
        epoch = rotation.get("epoch", DEFAULT_EPOCH)
        epoch = self._require_date(epoch, "rotation.epoch", "2025-12-29")

        try:
            indexer = WeekIndexer(epoch)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        catalog = self._parse_catalog(raw.get("templates"))

        store = RosterStore(indexer)
        try:
            self._parse_employees(raw.get("employees") or [], store)
            self._parse_swaps(raw.get("swaps") or [], store)
            self._parse_vacations(raw.get("vacations") or [], store)
            self._parse_overrides(raw.get("overrides") or [], store)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(str(e)) from e

        return ScheduleConfig(epoch=epoch, catalog=catalog, store=store)

    @staticmethod
    def _require_date(value: Any, where: str, example: str) -> date:
        if not isinstance(value, date):
            raise InvalidDateFormatError(
                f"{where} must be in ISO 8601 format (YYYY-MM-DD), got: {value}. "
                f"Example: {example}"
            )
        return value

    def _parse_catalog(self, templates_raw: List[Dict[str, Any]] | None) -> TemplateCatalog:
        """Parse the template catalog, falling back to the built-in one."""
        if templates_raw is None:
            return TemplateCatalog.default()

        try:
            templates = [self._parse_template(t) for t in templates_raw]
            return TemplateCatalog(templates=tuple(templates))
        except (ValueError, TypeError, KeyError) as e:
            raise ConfigurationError(f"Invalid template catalog: {e}") from e

    def _parse_template(self, template_raw: Dict[str, Any]) -> ScheduleTemplate:
        template_id = template_raw["id"]
        shifts_raw = template_raw.get("shifts", [])
        shifts = tuple(
            Shift(
                day_index=index,
                label=str(shift_raw["label"]),
                location=Location.parse(shift_raw["location"]),
            )
            for index, shift_raw in enumerate(shifts_raw)
        )
        return ScheduleTemplate(
            id=int(template_id),
            name=template_raw.get("name", f"Horario {template_id}"),
            shifts=shifts,
        )

    def _parse_employees(self, employees_raw: List[Dict[str, Any]], store: RosterStore) -> None:
        for emp_data in employees_raw:
            name = emp_data.get("name")
            base = emp_data.get("base_schedule")
            if not name:
                raise ConfigurationError(f"Employee entry without a name: {emp_data}")
            if isinstance(base, bool) or not isinstance(base, int):
                raise ConfigurationError(
                    f"Employee '{name}' needs an integer base_schedule (1-7), got: {base}"
                )
            store.add_employee(
                name=name,
                base_schedule_id=base,
                employee_id=self._optional_id(emp_data),
            )

    def _parse_swaps(self, swaps_raw: List[Dict[str, Any]], store: RosterStore) -> None:
        for swap_data in swaps_raw:
            week = swap_data.get("week")
            on_date = swap_data.get("date")
            if on_date is not None:
                on_date = self._require_date(on_date, "Swap date", "2026-01-12")
            store.add_swap(
                requester_id=self._require_ref(swap_data, "requester", "Swap"),
                target_id=self._require_ref(swap_data, "target", "Swap"),
                reason=swap_data.get("reason", ""),
                on_date=on_date,
                week_number=week,
                swap_id=self._optional_id(swap_data),
            )

    def _parse_vacations(self, vacations_raw: List[Dict[str, Any]], store: RosterStore) -> None:
        for vac_data in vacations_raw:
            employee_id = self._require_ref(vac_data, "employee", "Vacation")
            start = self._require_date(
                vac_data.get("start"), f"Vacation start date for {employee_id}", "2026-01-05"
            )
            end = self._require_date(
                vac_data.get("end"), f"Vacation end date for {employee_id}", "2026-01-09"
            )
            store.add_vacation(
                employee_id=employee_id,
                start=start,
                end=end,
                vacation_id=self._optional_id(vac_data),
            )

    def _parse_overrides(self, overrides_raw: List[Dict[str, Any]], store: RosterStore) -> None:
        for ov_data in overrides_raw:
            employee_id = self._require_ref(ov_data, "employee", "Override")
            day = self._require_date(
                ov_data.get("date"), f"Override date for {employee_id}", "2026-01-14"
            )
            store.add_override(
                employee_id=employee_id,
                day=day,
                location=ov_data.get("location", ""),
                reason=ov_data.get("reason", ""),
                override_id=self._optional_id(ov_data),
            )

    @staticmethod
    def _require_ref(data: Dict[str, Any], key: str, kind: str) -> str:
        value = data.get(key)
        if value is None or value == "":
            raise ConfigurationError(f"{kind} entry without {key}: {data}")
        return str(value)

    @staticmethod
    def _optional_id(data: Dict[str, Any]) -> str | None:
        record_id = data.get("id")
        return None if record_id is None else str(record_id)

    def _check_references(self) -> None:
        """Warn about exception records pointing at unknown employees.

        Such records are kept: the resolver skips them, the same way it treats
        records left behind when an employee is deleted.
        """
        config = self._config
        snapshot = config.store.snapshot()
        known = {emp.id for emp in snapshot.employees}

        for swap in snapshot.swaps:
            for emp_id in (swap.requester_id, swap.target_id):
                if emp_id not in known:
                    config.warnings.append(
                        f"Swap {swap.id} references unknown employee '{emp_id}'"
                    )
        for vac in snapshot.vacations:
            if vac.employee_id not in known:
                config.warnings.append(
                    f"Vacation {vac.id} references unknown employee '{vac.employee_id}'"
                )
        for ov in snapshot.overrides:
            if ov.employee_id not in known:
                config.warnings.append(
                    f"Override {ov.id} references unknown employee '{ov.employee_id}'"
                )

        for warning in config.warnings:
            logger.warning(warning)

    def get_summary(self) -> str:
        """
        Get a summary of the loaded configuration.

        Raises:
            RuntimeError: If load() hasn't been called yet
        """
        config = self.config
        snapshot = config.store.snapshot()

        lines = [
            f"Configuration from: {self.config_path}",
            f"Rotation epoch: {config.epoch} (week 1)",
            f"Templates: {len(config.catalog)}",
        ]
        for template in config.catalog:
            lines.append(f"  - {template.id}: {template.name}")

        lines.append(f"Employees: {len(snapshot.employees)}")
        lines.append(
            f"Exceptions: {len(snapshot.swaps)} swaps, "
            f"{len(snapshot.vacations)} vacations, "
            f"{len(snapshot.overrides)} overrides"
        )

        return "\n".join(lines)
