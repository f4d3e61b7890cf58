from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò người dùng cổng thông tin, dùng cho phân quyền."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    CUSTOMER = "customer"


class AttendanceStatus(str, Enum):
    """Trạng thái chấm công lưu trong bản ghi."""

    PRESENT = "Present"
    LATE = "Late"
    ON_LEAVE = "On Leave"
    UNPAID_LEAVE = "Unpaid Leave"
    ABSENT = "Absent"

    @property
    def is_leave(self) -> bool:
        return self in (AttendanceStatus.ON_LEAVE, AttendanceStatus.UNPAID_LEAVE)


class LeavePeriod(str, Enum):
    ALL_DAY = "All Day"
    MORNING = "Morning"
    AFTERNOON = "Afternoon"


class DayStatus(str, Enum):
    """Trạng thái hiển thị của một ô (nhân viên, ngày) sau khi phân loại."""

    PRESENT = "Present"
    LATE = "Late"
    ON_LEAVE = "On Leave"
    UNPAID_LEAVE = "Unpaid Leave"
    ABSENT = "Absent"
    HOLIDAY = "Holiday"
    LOCKED = "Locked"
    NO_DATA = "No Data"
    BLANK = "Blank"


class EmploymentType(str, Enum):
    NORMAL = "Normal"
    MATERNITY = "Maternity"
    RESIGNATION = "Resignation"


class DocumentType(str, Enum):
    CONTRACT = "contract"
    QUOTATION = "quotation"
    REPORT = "report"


class MoneyPresetType(str, Enum):
    PARKING = "parking"
    BONUS = "bonus"
    SALARY13 = "salary13"
    HOLIDAY_BONUS = "holidayBonus"


class BlockKind(str, Enum):
    """Loại khối nội dung dùng cho dàn trang."""

    HEADER = "header"
    CONTINUATION_HEADER = "continuation-header"
    SECTION_TITLE = "section-title"
    SUBSECTION_TITLE = "subsection-title"
    LINE = "line"
    TEXT_BLOCK = "text-block"
    TABLE_HEADER = "table-header"
    TABLE_ROW = "table-row"
    TABLE_TOTAL = "table-total"
    SIGNATURE_BLOCK = "signature-block"

    @property
    def is_table_body(self) -> bool:
        return self in (BlockKind.TABLE_ROW, BlockKind.TABLE_TOTAL)
