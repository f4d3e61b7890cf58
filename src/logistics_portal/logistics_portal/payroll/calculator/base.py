from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ..model import Insurance, PayrollInput


@dataclass(frozen=True)
class TaxResult:
    pit: Decimal
    total_deductions: Decimal
    assessable_income: Decimal
    statutory_deductions_applied: bool


class TaxPolicy(ABC):
    """Strategy for personal income tax and statutory deductions."""

    @abstractmethod
    def assess(self, inputs: PayrollInput, total_income: Decimal, employee_insurance: Insurance) -> TaxResult:
        raise NotImplementedError


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def time_salary(self, inputs: PayrollInput, work_days: int) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def total_income(self, inputs: PayrollInput, time_salary: Decimal) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def employee_insurance(self, inputs: PayrollInput) -> Insurance:
        raise NotImplementedError

    @abstractmethod
    def employer_insurance(self, inputs: PayrollInput) -> Insurance:
        raise NotImplementedError
