"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

LATE_GRACE_MINUTES = 15
DEFAULT_START_TIME = time(8, 0)

# Standard working days per month used by the salary formula (not calendar based).
STANDARD_WORK_DAYS = 26
ANNUAL_LEAVE_DAYS = 12
DEFAULT_FAMILY_DEDUCTION = 11_000_000

EMPLOYEE_BHXH_RATE = "0.08"
EMPLOYEE_BHYT_RATE = "0.015"
EMPLOYEE_BHTN_RATE = "0.01"
EMPLOYER_BHXH_RATE = "0.175"
EMPLOYER_BHYT_RATE = "0.03"
EMPLOYER_BHTN_RATE = "0.01"

HOLIDAY_TITLE_PATTERN = r"nghỉ lễ|tết|holiday|giỗ|quốc khánh|thống nhất|hùng vương"

IMPORT_MIN_ROWS = 2
IMPORT_MIN_DAY_COLUMNS = 7

PLACEHOLDER_TEXT = "................................"

STORAGE_DIRS = (
    "Database",
    "History",
    "GUQ",
    "CVHC",
    "CVHT",
    "BBDC",
    "SALARY",
    "THONGBAO",
    "NGHIDINH",
    "LIBRARY",
)
