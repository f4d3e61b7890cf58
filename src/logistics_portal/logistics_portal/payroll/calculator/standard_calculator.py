from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import (
    EMPLOYEE_BHTN_RATE,
    EMPLOYEE_BHXH_RATE,
    EMPLOYEE_BHYT_RATE,
    EMPLOYER_BHTN_RATE,
    EMPLOYER_BHXH_RATE,
    EMPLOYER_BHYT_RATE,
    STANDARD_WORK_DAYS,
)
from ..model import Insurance, PayrollInput
from .base import PayrollCalculator, TaxPolicy, TaxResult

_CENT = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: basic / 26 * work days, plus KPI, bonus and parking allowance."""

    def time_salary(self, inputs: PayrollInput, work_days: int) -> Decimal:
        return money(Decimal(inputs.basic) / STANDARD_WORK_DAYS * Decimal(work_days))

    def total_income(self, inputs: PayrollInput, time_salary: Decimal) -> Decimal:
        return money(
            time_salary
            + Decimal(inputs.kpi_current)
            + Decimal(inputs.kpi_return)
            + Decimal(inputs.bonus)
            + Decimal(inputs.parking)
        )

    def _insurance(self, base: int, bhxh: str, bhyt: str, bhtn: str) -> Insurance:
        b = Decimal(base)
        return Insurance(
            bhxh=money(b * Decimal(bhxh)),
            bhyt=money(b * Decimal(bhyt)),
            bhtn=money(b * Decimal(bhtn)),
        )

    def employee_insurance(self, inputs: PayrollInput) -> Insurance:
        return self._insurance(inputs.insurance_base, EMPLOYEE_BHXH_RATE, EMPLOYEE_BHYT_RATE, EMPLOYEE_BHTN_RATE)

    def employer_insurance(self, inputs: PayrollInput) -> Insurance:
        return self._insurance(inputs.insurance_base, EMPLOYER_BHXH_RATE, EMPLOYER_BHYT_RATE, EMPLOYER_BHTN_RATE)


class NoStatutoryDeductions(TaxPolicy):
    """PIT, total deductions and assessable income are reported as 0.

    Lines are flagged ``statutory_deductions_applied=False``.
    TODO: replace with the progressive PIT schedule once payroll confirms the formula.
    """

    def assess(self, inputs: PayrollInput, total_income: Decimal, employee_insurance: Insurance) -> TaxResult:
        zero = Decimal("0.00")
        return TaxResult(pit=zero, total_deductions=zero, assessable_income=zero, statutory_deductions_applied=False)
