from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .employment import EmploymentStatus
from .model import Employee


class EmployeeRepository(Protocol):
    """Giao diện repository cho Employee.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp kho lưu trữ cụ thể.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def set_employment(self, user_id: int, employment: EmploymentStatus, *, changed_by: str = "") -> bool:
        raise NotImplementedError
