import pytest

from src.logistics_portal.logistics_portal.core.constants import PLACEHOLDER_TEXT
from src.logistics_portal.logistics_portal.core.enums import BlockKind, DocumentType
from src.logistics_portal.logistics_portal.core.exceptions import ValidationError
from src.logistics_portal.logistics_portal.layout.documents.contract import ContractBuilder
from src.logistics_portal.logistics_portal.layout.documents.quotation import QuotationBuilder
from src.logistics_portal.logistics_portal.layout.documents.weekly_report import WeeklyReportBuilder
from src.logistics_portal.logistics_portal.layout.service import DocumentLayoutService


def _blocks(doc):
    return [b for p in doc.pages for b in p.content]


def test_contract_fills_expiry_date_and_placeholders():
    record = {
        "contractNo": "01/2025/HĐDV",
        "date": "2025-03-05",
        "expiryDate": "2025-12-31",
        "article1": ["Bên B cung cấp dịch vụ vận chuyển quốc tế cho bên A."],
        "article5": ["Hợp đồng có hiệu lực đến hết ngày [EXPIRY_DATE]."],
    }

    doc = DocumentLayoutService().layout(DocumentType.CONTRACT, record)
    blocks = _blocks(doc)

    lines = [b.payload["text"] for b in blocks if b.kind == BlockKind.LINE]
    assert "Hợp đồng có hiệu lực đến hết ngày 31/12/2025." in lines
    parties = blocks[0]
    assert parties.kind == BlockKind.TEXT_BLOCK
    assert parties.payload["party_a"]["name"] == PLACEHOLDER_TEXT
    header = doc.pages[0].blocks[0]
    assert "ngày 5 tháng 3 năm 2025" in header.payload["intro"]
    assert blocks[-1].kind == BlockKind.SIGNATURE_BLOCK


def test_contract_subsections_follow_articles():
    builder = ContractBuilder()
    blocks = builder.blocks(builder.parse({}))

    keys = [b.payload["key"] for b in blocks if b.kind in (BlockKind.SECTION_TITLE, BlockKind.SUBSECTION_TITLE)]
    assert keys == ["art1", "art2", "art3", "art3.1", "art3.2", "art4", "art4.1", "art4.2", "art5"]


def test_quotation_rows_totals_and_notes():
    builder = QuotationBuilder()
    record = builder.parse({"rows": [{"cost": "O/F", "qty": 2, "price": 100, "vat": 10}] * 2})

    blocks = builder.blocks(record)

    assert record.rows[0].amount == 200
    assert record.rows[0].total == pytest.approx(220)
    total = [b for b in blocks if b.kind == BlockKind.TABLE_TOTAL][0]
    assert total.payload["value"] == "440.00"
    notes = [b for b in blocks if b.kind == BlockKind.TEXT_BLOCK][0]
    assert notes.payload["text"] == "Không có ghi chú thêm."


def test_long_quotation_repeats_table_header_on_each_page():
    rows = [{"cost": f"Phí {i}", "qty": 1, "price": 10} for i in range(40)]

    doc = DocumentLayoutService().layout("quotation", {"rows": rows})

    assert doc.page_count == 3
    for page in doc.pages[1:]:
        assert page.blocks[0].kind == BlockKind.CONTINUATION_HEADER
        if page.content[0].kind == BlockKind.TABLE_ROW:
            assert page.blocks[1].kind == BlockKind.TABLE_HEADER
            assert page.blocks[1].synthetic
    assert len([b for b in _blocks(doc) if b.kind == BlockKind.TABLE_ROW]) == 40
    assert doc.to_dict()["pages"][2]["label"] == "- Trang 3 / 3 -"


def test_empty_weekly_report_renders_placeholders():
    doc = DocumentLayoutService().layout("report", {"reporter": "Nguyễn Văn A", "month": 3, "year": 2025})
    blocks = _blocks(doc)

    placeholders = [b for b in blocks if b.kind == BlockKind.LINE and b.payload["text"] == "Không có dữ liệu."]
    assert len(placeholders) == 2
    texts = [b.payload["text"] for b in blocks if b.kind == BlockKind.TEXT_BLOCK]
    assert texts == ["Không có."] * 4


def test_weekly_report_section_title_keeps_table_header_and_first_row():
    customers = [{"companyName": f"KH {i}", "profit": 100, "com": 10} for i in range(3)]
    doc = DocumentLayoutService().layout("report", {"existingCustomers": customers})

    first = doc.pages[0].content
    assert [b.kind for b in first[:3]] == [BlockKind.SECTION_TITLE, BlockKind.TABLE_HEADER, BlockKind.TABLE_ROW]
    total = [b for b in _blocks(doc) if b.kind == BlockKind.TABLE_TOTAL][0]
    assert total.payload["profit"] == 300


def test_unknown_document_type_is_rejected():
    with pytest.raises(ValidationError):
        DocumentLayoutService().layout("invoice", {})


@pytest.mark.parametrize("month, year", [("NaN", "1e400"), ("inf", None), ([3], {"y": 1})])
def test_weekly_report_period_falls_back_on_unusable_numbers(month, year):
    builder = WeeklyReportBuilder()

    report = builder.parse({"month": month, "year": year})

    assert (report.month, report.year) == (1, 2024)
    assert builder.header(report).payload["period"] == "Tháng 1/2024"


def test_non_finite_amounts_count_as_zero():
    report = WeeklyReportBuilder().parse({"existingCustomers": [{"companyName": "KH", "profit": "NaN", "com": "1e400"}]})

    assert (report.existing_customers[0].profit, report.existing_customers[0].com) == (0, 0)


@pytest.mark.parametrize("doc_type, record", [("quotation", {"rows": 5}), ("report", {"customers": "abc"}), ("contract", [1, 2])])
def test_malformed_records_still_paginate(doc_type, record):
    doc = DocumentLayoutService().layout(doc_type, record)

    assert doc.page_count >= 1
    assert not [b for b in _blocks(doc) if b.kind == BlockKind.TABLE_ROW]
