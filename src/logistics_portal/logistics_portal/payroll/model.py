from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from ..common.validators import to_amount
from ..core.constants import DEFAULT_FAMILY_DEDUCTION
from ..core.enums import MoneyPresetType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PayrollInput:
    """Các khoản nhập tay cho bảng lương một nhân viên trong tháng (VND)."""

    basic: int = 0
    kpi_current: int = 0
    kpi_hold: int = 0
    kpi_return: int = 0
    bonus: int = 0
    salary13: int = 0
    parking: int = 0
    advance: int = 0
    insurance_base: int = 0
    company_fund: int = 0
    family_deduction: int = DEFAULT_FAMILY_DEDUCTION
    holiday_bonus: int = 0
    union_fee: int = 0
    note: str = ""
    contract_signed: bool = True

    @classmethod
    def default(cls) -> "PayrollInput":
        """Values a new employee's payroll row starts with."""
        return cls(basic=5_000_000, parking=150_000, insurance_base=5_000_000, company_fund=50_000)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PayrollInput":
        base = cls.default()
        values = {}
        for f in fields(cls):
            key = _CAMEL.get(f.name, f.name)
            if key not in data:
                continue
            raw = data[key]
            if f.name == "note":
                values[f.name] = str(raw or "")
            elif f.name == "contract_signed":
                values[f.name] = bool(raw)
            else:
                values[f.name] = to_amount(raw)
        return replace(base, **values)

    def to_dict(self) -> dict:
        return {_CAMEL.get(k, k): v for k, v in asdict(self).items()}


_CAMEL = {
    "kpi_current": "kpiCurrent",
    "kpi_hold": "kpiHold",
    "kpi_return": "kpiReturn",
    "insurance_base": "insuranceBase",
    "company_fund": "companyFund",
    "family_deduction": "familyDeduction",
    "holiday_bonus": "holidayBonus",
    "union_fee": "unionFee",
    "contract_signed": "isContractSigned",
}


@dataclass(frozen=True)
class Insurance:
    bhxh: Decimal
    bhyt: Decimal
    bhtn: Decimal

    @property
    def total(self) -> Decimal:
        return self.bhxh + self.bhyt + self.bhtn


@dataclass(frozen=True)
class PayrollLine:
    """Dòng bảng lương tính ra từ PayrollInput + ngày công; không lưu trữ."""

    user_id: int
    name: str
    role: str
    inputs: PayrollInput
    work_days: int
    time_salary: Decimal
    total_income: Decimal
    net_salary: Decimal
    employee_insurance: Insurance
    employer_insurance: Insurance
    pit: Decimal
    total_deductions: Decimal
    assessable_income: Decimal
    statutory_deductions_applied: bool

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "name": self.name,
            "role": self.role,
            **self.inputs.to_dict(),
            "workDays": self.work_days,
            "timeSalary": float(self.time_salary),
            "totalIncome": float(self.total_income),
            "netSalary": float(self.net_salary),
            "employeeBhxh": float(self.employee_insurance.bhxh),
            "employeeBhyt": float(self.employee_insurance.bhyt),
            "employeeBhtn": float(self.employee_insurance.bhtn),
            "employerBhxh": float(self.employer_insurance.bhxh),
            "employerBhyt": float(self.employer_insurance.bhyt),
            "employerBhtn": float(self.employer_insurance.bhtn),
            "pit": float(self.pit),
            "totalDeductions": float(self.total_deductions),
            "assessableIncome": float(self.assessable_income),
            "statutoryDeductionsApplied": self.statutory_deductions_applied,
        }


# PayrollInput field filled by each preset type.
PRESET_FIELDS = {
    MoneyPresetType.PARKING: "parking",
    MoneyPresetType.BONUS: "bonus",
    MoneyPresetType.SALARY13: "salary13",
    MoneyPresetType.HOLIDAY_BONUS: "holiday_bonus",
}


@dataclass(frozen=True)
class MoneyPreset:
    """Khoản tiền cấu hình sẵn cho một tháng (phụ cấp gửi xe, thưởng, lương T13, thưởng lễ)."""

    preset_id: int
    type: MoneyPresetType
    amount: int
    month: int
    year: int
    name: str = ""

    def __post_init__(self):
        if self.amount <= 0:
            raise ValidationError("Số tiền phải lớn hơn 0")


class MoneyPresetBook:
    def __init__(self, presets: Iterable[MoneyPreset] = ()):
        self._presets = list(presets)

    def all(self) -> list[MoneyPreset]:
        return list(self._presets)

    def add(self, *, type: MoneyPresetType | str, amount: Any, month: int, year: int, name: str = "") -> MoneyPreset:
        try:
            kind = MoneyPresetType(type)
        except ValueError:
            raise ValidationError(f"Loại khoản tiền không hợp lệ: {type}")
        next_id = max((p.preset_id for p in self._presets), default=0) + 1
        preset = MoneyPreset(preset_id=next_id, type=kind, amount=to_amount(amount), month=month, year=year, name=name)
        self._presets.append(preset)
        return preset

    def remove(self, preset_id: int) -> None:
        self._presets = [p for p in self._presets if p.preset_id != preset_id]

    def find(self, type: MoneyPresetType, month: int, year: int) -> Optional[MoneyPreset]:
        for p in self._presets:
            if p.type == type and p.month == month and p.year == year:
                return p
        return None

    def apply(self, inputs: PayrollInput, type: MoneyPresetType | str, *, month: int, year: int) -> PayrollInput:
        try:
            kind = MoneyPresetType(type)
        except ValueError:
            raise ValidationError(f"Loại khoản tiền không hợp lệ: {type}")
        preset = self.find(kind, month, year)
        if preset is None:
            raise ValidationError(f"Chưa có cấu hình khoản tiền cho Tháng {month}/{year}.")
        return replace(inputs, **{PRESET_FIELDS[kind]: preset.amount})
