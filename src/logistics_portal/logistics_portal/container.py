from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .attendance.factory import DayStatusStrategyFactory
from .attendance.importer import AttendanceImporter
from .attendance.service import AttendanceService
from .layout.service import DocumentLayoutService
from .payroll.calculator.standard_calculator import NoStatutoryDeductions, StandardPayrollCalculator
from .payroll.service import PayrollService
from .storage.json_repositories import (
    JsonAttendanceConfigRepository,
    JsonAttendanceRepository,
    JsonEmployeeRepository,
    JsonHolidayRepository,
    JsonMoneyPresetRepository,
)
from .storage.json_store import JsonDataStore


@dataclass(frozen=True)
class Container:
    store: JsonDataStore

    employees_repo: JsonEmployeeRepository
    attendance_repo: JsonAttendanceRepository
    config_repo: JsonAttendanceConfigRepository
    holidays_repo: JsonHolidayRepository
    presets_repo: JsonMoneyPresetRepository

    layout_service: DocumentLayoutService
    attendance_service: AttendanceService
    payroll_service: PayrollService


def build_container(*, data_root: Union[str, Path]) -> Container:
    store = JsonDataStore(data_root)
    store.ensure_directories()

    employees_repo = JsonEmployeeRepository(store)
    attendance_repo = JsonAttendanceRepository(store)
    config_repo = JsonAttendanceConfigRepository(store)
    holidays_repo = JsonHolidayRepository(store)
    presets_repo = JsonMoneyPresetRepository(store)

    layout_service = DocumentLayoutService()
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        config_repo,
        holidays_repo,
        strategy_factory=DayStatusStrategyFactory(),
        importer=AttendanceImporter(),
    )
    payroll_service = PayrollService(
        employees_repo,
        attendance_service,
        presets_repo,
        calculator=StandardPayrollCalculator(),
        tax_policy=NoStatutoryDeductions(),
    )

    return Container(
        store=store,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        config_repo=config_repo,
        holidays_repo=holidays_repo,
        presets_repo=presets_repo,
        layout_service=layout_service,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
    )
