from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .employment import NORMAL, EmploymentStatus


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên / tài khoản cổng thông tin.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập lưu trữ).
    """

    user_id: int
    name: str
    role: str
    email: str = ""
    english_name: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    status: str = "Active"
    employment: EmploymentStatus = field(default=NORMAL)

    @property
    def is_customer(self) -> bool:
        return self.role.lower() == "customer"
