from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ...core.enums import BlockKind
from ..model import ContentBlock
from .base import DocumentBuilder, as_items, as_number, text_or_placeholder

COST_TABLE = "costs"
VALIDITY_CLAUSE = (
    "Báo giá có hiệu lực trong vòng 15 ngày kể từ ngày phát hành. "
    "Chưa bao gồm thuế VAT (nếu không được chỉ định)."
)
COLUMNS = ("STT", "Chi phí", "Đơn vị", "Số lượng", "Đơn giá", "VAT (%)", "Tiền tệ", "Thành tiền")


@dataclass(frozen=True)
class QuoteRow:
    cost: str
    unit: str = "Lô"
    qty: float = 1
    price: float = 0
    vat: float = 10
    currency: str = "USD"

    @property
    def amount(self) -> float:
        return self.qty * self.price

    @property
    def total(self) -> float:
        return self.amount + self.amount * (self.vat / 100)


@dataclass(frozen=True)
class QuotationRecord:
    """Báo giá cước vận chuyển (import/export)."""

    quote_type: str = "import"
    region: str = "Hồ Chí Minh"
    pickup: str = ""
    place_of_receipt: str = ""
    aod: str = ""
    term: str = "FOB"
    weight: str = ""
    volume: str = ""
    unit: str = "CBM"
    commodity: str = ""
    note: str = ""
    saler_name: str = ""
    saler_phone: str = ""
    saler_email: str = ""
    rows: tuple[QuoteRow, ...] = field(default_factory=tuple)

    @property
    def grand_total(self) -> float:
        return sum(r.total for r in self.rows)


def _money(value: float) -> str:
    return f"{value:,.2f}"


class QuotationBuilder(DocumentBuilder):
    title = "BẢNG BÁO GIÁ"
    record_type = QuotationRecord

    def parse(self, data: Mapping[str, Any]) -> QuotationRecord:
        rows = []
        for r in as_items(data.get("rows")):
            rows.append(
                QuoteRow(
                    cost=str(r.get("cost") or ""),
                    unit=str(r.get("unit") or "Lô"),
                    qty=as_number(r.get("qty", 1)),
                    price=as_number(r.get("price", 0)),
                    vat=as_number(r.get("vat", 0)),
                    currency=str(r.get("currency") or "USD"),
                )
            )
        return QuotationRecord(
            quote_type=str(data.get("quoteType") or "import"),
            region=str(data.get("region") or "Hồ Chí Minh"),
            pickup=str(data.get("pickup") or ""),
            place_of_receipt=str(data.get("placeOfReceipt") or ""),
            aod=str(data.get("aod") or ""),
            term=str(data.get("term") or "FOB"),
            weight=str(data.get("weight") or ""),
            volume=str(data.get("volume") or ""),
            unit=str(data.get("unit") or "CBM"),
            commodity=str(data.get("commodity") or ""),
            note=str(data.get("note") or ""),
            saler_name=str(data.get("salerName") or ""),
            saler_phone=str(data.get("salerPhone") or ""),
            saler_email=str(data.get("salerEmail") or ""),
            rows=tuple(rows),
        )

    def header(self, record: QuotationRecord) -> ContentBlock:
        info = {
            "term": record.term,
            "pickup": text_or_placeholder(record.pickup),
            "aod": text_or_placeholder(record.aod),
            "weight": record.weight,
            "volume": f"{record.volume} {record.unit}".strip(),
            "commodity": text_or_placeholder(record.commodity),
            "sales": {"name": record.saler_name, "phone": record.saler_phone, "email": record.saler_email},
        }
        if record.quote_type == "export" and record.place_of_receipt:
            info["place_of_receipt"] = record.place_of_receipt
        return ContentBlock(
            BlockKind.HEADER,
            {"title": f"{self.title} ({record.quote_type.upper()})", "letterhead": True, "info": info},
        )

    def continuation(self, record: QuotationRecord) -> ContentBlock:
        return ContentBlock(BlockKind.CONTINUATION_HEADER, {"title": f"{self.title} (tiếp theo)"})

    def blocks(self, record: QuotationRecord) -> list[ContentBlock]:
        out = [ContentBlock(BlockKind.TABLE_HEADER, {"columns": list(COLUMNS)}, table=COST_TABLE, keep_with_next=1)]
        for idx, row in enumerate(record.rows, start=1):
            out.append(
                ContentBlock(
                    BlockKind.TABLE_ROW,
                    {
                        "cells": [
                            idx,
                            row.cost,
                            row.unit,
                            row.qty,
                            _money(row.price),
                            row.vat,
                            row.currency,
                            _money(row.total),
                        ]
                    },
                    table=COST_TABLE,
                )
            )
        out.append(
            ContentBlock(
                BlockKind.TABLE_TOTAL,
                {"label": "TỔNG CỘNG", "value": _money(record.grand_total)},
                table=COST_TABLE,
            )
        )
        out.append(
            ContentBlock(
                BlockKind.TEXT_BLOCK,
                {"title": "Ghi chú", "text": record.note.strip() or "Không có ghi chú thêm.", "validity": VALIDITY_CLAUSE},
            )
        )
        out.append(
            ContentBlock(
                BlockKind.SIGNATURE_BLOCK,
                {"right": {"label": "NGƯỜI BÁO GIÁ", "name": text_or_placeholder(record.saler_name, "....................")}},
            )
        )
        return out
