from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ...core.enums import BlockKind
from ..model import ContentBlock
from .base import DocumentBuilder, as_int, as_items, as_number, text_or_placeholder

EXISTING_TABLE = "existing-customers"
NEW_TABLE = "new-customers"


@dataclass(frozen=True)
class ExistingCustomer:
    company_name: str
    profit: float = 0
    com: float = 0
    status: str = ""


@dataclass(frozen=True)
class NewCustomer:
    company_name: str
    shipment_info: str = ""
    contact: str = ""
    status: str = ""
    classification: str = ""


@dataclass(frozen=True)
class WeeklyReport:
    """Báo cáo tuần của nhân viên kinh doanh."""

    reporter: str = ""
    week: Any = "All"
    month: int = 1
    year: int = 2024
    existing_customers: tuple[ExistingCustomer, ...] = field(default_factory=tuple)
    new_customers: tuple[NewCustomer, ...] = field(default_factory=tuple)
    difficulties: str = ""
    lost_customers: str = ""
    feedback: str = ""
    suggestions: str = ""


class WeeklyReportBuilder(DocumentBuilder):
    title = "BÁO CÁO CÔNG VIỆC TUẦN"
    record_type = WeeklyReport

    def parse(self, data: Mapping[str, Any]) -> WeeklyReport:
        existing = tuple(
            ExistingCustomer(
                company_name=str(c.get("companyName") or ""),
                profit=as_number(c.get("profit")),
                com=as_number(c.get("com")),
                status=str(c.get("status") or ""),
            )
            for c in as_items(data.get("existingCustomers"))
        )
        new = tuple(
            NewCustomer(
                company_name=str(c.get("companyName") or ""),
                shipment_info=str(c.get("shipmentInfo") or ""),
                contact=str(c.get("contact") or ""),
                status=str(c.get("status") or ""),
                classification=str(c.get("classification") or ""),
            )
            for c in as_items(data.get("customers"))
        )
        inputs = data.get("inputs")
        if not isinstance(inputs, Mapping):
            inputs = {}
        return WeeklyReport(
            reporter=str(data.get("reporter") or ""),
            week=data.get("week", "All"),
            month=as_int(data.get("month"), 1),
            year=as_int(data.get("year"), 2024),
            existing_customers=existing,
            new_customers=new,
            difficulties=str(inputs.get("difficulties") or ""),
            lost_customers=str(inputs.get("lostCustomers") or ""),
            feedback=str(inputs.get("feedback") or ""),
            suggestions=str(inputs.get("suggestions") or ""),
        )

    def header(self, report: WeeklyReport) -> ContentBlock:
        period = f"Tháng {report.month}/{report.year}"
        if report.week != "All":
            period = f"Tuần {report.week} - {period}"
        return ContentBlock(
            BlockKind.HEADER,
            {"title": self.title, "period": period, "reporter": text_or_placeholder(report.reporter)},
        )

    def blocks(self, report: WeeklyReport) -> list[ContentBlock]:
        out: list[ContentBlock] = []

        # Title, table header and first row travel together.
        out.append(ContentBlock(BlockKind.SECTION_TITLE, {"text": "1. Khách hàng hiện hữu"}, keep_with_next=2))
        out.append(
            ContentBlock(
                BlockKind.TABLE_HEADER,
                {"columns": ["STT", "Khách hàng", "Lợi nhuận", "Com", "Trạng thái"]},
                table=EXISTING_TABLE,
                keep_with_next=1,
            )
        )
        for idx, c in enumerate(report.existing_customers, start=1):
            out.append(
                ContentBlock(
                    BlockKind.TABLE_ROW,
                    {"cells": [idx, c.company_name, c.profit, c.com, c.status]},
                    table=EXISTING_TABLE,
                )
            )
        if report.existing_customers:
            out.append(
                ContentBlock(
                    BlockKind.TABLE_TOTAL,
                    {
                        "label": "TỔNG",
                        "profit": sum(c.profit for c in report.existing_customers),
                        "com": sum(c.com for c in report.existing_customers),
                    },
                    table=EXISTING_TABLE,
                )
            )
        else:
            out.append(ContentBlock(BlockKind.LINE, {"text": "Không có dữ liệu."}))

        out.append(ContentBlock(BlockKind.SECTION_TITLE, {"text": "2. Khách hàng mới"}, keep_with_next=2))
        out.append(
            ContentBlock(
                BlockKind.TABLE_HEADER,
                {"columns": ["STT", "Khách hàng", "Thông tin lô hàng", "Liên hệ", "Trạng thái", "Phân loại"]},
                table=NEW_TABLE,
                keep_with_next=1,
            )
        )
        for idx, c in enumerate(report.new_customers, start=1):
            out.append(
                ContentBlock(
                    BlockKind.TABLE_ROW,
                    {"cells": [idx, c.company_name, c.shipment_info, c.contact, c.status, c.classification]},
                    table=NEW_TABLE,
                )
            )
        if not report.new_customers:
            out.append(ContentBlock(BlockKind.LINE, {"text": "Không có dữ liệu."}))

        sections = (
            ("3. Khó khăn & Các bộ phận liên quan", report.difficulties),
            ("4. Khách hàng bị mất", report.lost_customers),
            ("5. Phản ánh", report.feedback),
            ("6. Đề xuất", report.suggestions),
        )
        for title, value in sections:
            out.append(ContentBlock(BlockKind.TEXT_BLOCK, {"title": title, "text": value.strip() or "Không có."}))

        out.append(
            ContentBlock(
                BlockKind.SIGNATURE_BLOCK,
                {
                    "left": {"label": "TRƯỞNG BỘ PHẬN", "name": "...................."},
                    "right": {"label": "NGƯỜI BÁO CÁO", "name": text_or_placeholder(report.reporter, "....................")},
                },
            )
        )
        return out
