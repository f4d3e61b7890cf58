from __future__ import annotations

import io
import logging
from typing import Any, Mapping, Optional, Sequence

import pandas as pd

from ..attendance.service import AttendanceService, GridRow
from ..core.enums import MoneyPresetType
from ..users.model import Employee
from ..users.repository import EmployeeRepository
from .calculator.base import PayrollCalculator, TaxPolicy
from .calculator.standard_calculator import NoStatutoryDeductions, StandardPayrollCalculator
from .model import MoneyPreset, MoneyPresetBook, PayrollInput, PayrollLine
from .repository import MoneyPresetRepository

logger = logging.getLogger(__name__)

EXCEL_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Column order of the exported payroll sheet.
PAYROLL_COLUMNS = [
    ("name", "Họ Tên"),
    ("role", "Chức vụ"),
    ("basic", "Lương CB"),
    ("workDays", "Ngày công"),
    ("timeSalary", "Lương thời gian"),
    ("kpiCurrent", "Khoán tháng này"),
    ("kpiHold", "Giữ T.Này"),
    ("kpiReturn", "Trả T.Trước"),
    ("bonus", "Thưởng"),
    ("salary13", "Lương T13"),
    ("parking", "Gửi xe"),
    ("totalIncome", "Tổng số"),
    ("advance", "Tạm ứng / Trừ"),
    ("insuranceBase", "Lương BH"),
    ("employeeBhxh", "BHXH (NV)"),
    ("employeeBhyt", "BHYT (NV)"),
    ("employeeBhtn", "BHTN (NV)"),
    ("companyFund", "Quỹ Cty"),
    ("pit", "Thuế TNCN"),
    ("totalDeductions", "Cộng khấu trừ"),
    ("familyDeduction", "Giảm trừ gia cảnh"),
    ("assessableIncome", "Thu nhập tính thuế"),
    ("netSalary", "Thực lĩnh"),
    ("employerBhxh", "BHXH (Cty)"),
    ("employerBhyt", "BHYT (Cty)"),
    ("employerBhtn", "BHTN (Cty)"),
    ("holidayBonus", "Thưởng lễ"),
    ("note", "Ghi chú"),
]


class PayrollService:
    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceService,
        presets: MoneyPresetRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        tax_policy: Optional[TaxPolicy] = None,
    ):
        self._employees = employees
        self._attendance = attendance
        self._presets = presets
        self._calculator = calculator or StandardPayrollCalculator()
        self._tax = tax_policy or NoStatutoryDeductions()

    def compute_line(self, employee: Employee, inputs: PayrollInput, work_days: int) -> PayrollLine:
        c = self._calculator
        time_salary = c.time_salary(inputs, work_days)
        total_income = c.total_income(inputs, time_salary)
        employee_ins = c.employee_insurance(inputs)
        tax = self._tax.assess(inputs, total_income, employee_ins)
        return PayrollLine(
            user_id=employee.user_id,
            name=employee.name,
            role=employee.role,
            inputs=inputs,
            work_days=work_days,
            time_salary=time_salary,
            total_income=total_income,
            net_salary=total_income - inputs.advance,
            employee_insurance=employee_ins,
            employer_insurance=c.employer_insurance(inputs),
            pit=tax.pit,
            total_deductions=tax.total_deductions,
            assessable_income=tax.assessable_income,
            statutory_deductions_applied=tax.statutory_deductions_applied,
        )

    def build_month(
        self,
        year: int,
        month: int,
        inputs: Mapping[Any, Any],
        *,
        role: Optional[str] = None,
        search: str = "",
    ) -> list[PayrollLine]:
        """Bảng lương tháng cho mọi nhân viên (trừ khách hàng).

        ``inputs`` maps user id (int or str) to a PayrollInput or its JSON dict;
        employees without inputs get ``PayrollInput.default()``.
        """
        term = (search or "").strip().lower()
        lines = []
        for emp in self._employees.list_all():
            if emp.is_customer:
                continue
            if role and role != "All" and emp.role != role:
                continue
            if term and term not in emp.name.lower():
                continue
            raw = inputs.get(emp.user_id, inputs.get(str(emp.user_id)))
            if raw is None:
                data = PayrollInput.default()
            elif isinstance(raw, PayrollInput):
                data = raw
            else:
                data = PayrollInput.from_dict(raw)
            work_days = self._attendance.calculate_work_days(emp.user_id, month, year)
            lines.append(self.compute_line(emp, data, work_days))
        logger.debug("Payroll %02d/%d: %d lines", month, year, len(lines))
        return lines

    # --- money presets ---------------------------------------------------

    def _book(self) -> MoneyPresetBook:
        return MoneyPresetBook(self._presets.list_all())

    def list_presets(self) -> list[MoneyPreset]:
        return self._book().all()

    def add_preset(self, *, type: str, amount: Any, month: int, year: int, name: str = "", changed_by: str = "") -> MoneyPreset:
        book = self._book()
        preset = book.add(type=type, amount=amount, month=month, year=year, name=name)
        self._presets.save_all(book.all(), changed_by=changed_by)
        return preset

    def remove_preset(self, preset_id: int, *, changed_by: str = "") -> None:
        book = self._book()
        book.remove(preset_id)
        self._presets.save_all(book.all(), changed_by=changed_by)

    def apply_preset(self, inputs: PayrollInput, type: MoneyPresetType | str, *, month: int, year: int) -> PayrollInput:
        return self._book().apply(inputs, type, month=month, year=year)

    # --- export ----------------------------------------------------------

    def export_excel(self, lines: Sequence[PayrollLine]) -> bytes:
        rows = []
        for i, line in enumerate(lines, start=1):
            d = line.to_dict()
            row = {"STT": i}
            row.update({label: d[key] for key, label in PAYROLL_COLUMNS})
            rows.append(row)
        df = pd.DataFrame(rows, columns=["STT"] + [label for _, label in PAYROLL_COLUMNS])
        return _to_xlsx(df, "BangLuong")

    def export_grid_excel(self, rows: Sequence[GridRow], *, year: int, month: int) -> bytes:
        data = []
        for i, row in enumerate(rows, start=1):
            item = {"STT": i, "Họ Tên": row.employee.name, "Chức vụ": row.employee.role}
            for cell in row.cells:
                item[str(cell.day.day)] = cell.classification.symbol
            item["Công"] = row.total_present
            item["Phép"] = row.total_leave
            item["Không lương"] = row.total_unpaid
            item["Ghi chú"] = row.employee.employment.note
            data.append(item)
        df = pd.DataFrame(data)
        return _to_xlsx(df, f"ChamCong_{month:02d}_{year}")


def _to_xlsx(df: pd.DataFrame, sheet_name: str) -> bytes:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return out.getvalue()
