from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ...common.datetime_utils import format_vn_date, format_vn_long_date
from ...core.enums import BlockKind
from ..model import ContentBlock
from .base import DocumentBuilder, as_date, as_lines, text_or_placeholder

EXPIRY_PLACEHOLDER = "[EXPIRY_DATE]"

PARTY_B = {
    "name": "CÔNG TY TNHH TIẾP VẬN VÀ VẬN TẢI QUỐC TẾ LONG HOÀNG",
    "address": "132 - 134 Nguyễn Gia Trí, Phường Thanh Mỹ Tây, TP Hồ Chí Minh, Việt Nam",
    "phone": "028 7303 2677",
    "tax_id": "0316113070",
    "representative": "NGUYỄN THỊ KIỀU DIỄM",
    "position": "Giám đốc",
}

LEGAL_BASES = (
    "- Căn cứ Bộ Luật dân sự số 91/2015/QH13 ngày 24/11/2015 và các văn bản hướng dẫn thi hành;",
    "- Căn cứ Luật thương mại số 36/2005/QH11 ngày 14/06/2005 và các văn bản hướng dẫn thi hành;",
    "- Căn cứ Bộ luật Hàng hải Việt Nam số 95/2015/QH13 ngày 25/11/2015 và các văn bản hướng dẫn thi hành;",
    "- Căn cứ khả năng thực tế và nhu cầu của các bên liên quan.",
)


@dataclass(frozen=True)
class ContractRecord:
    """Hợp đồng dịch vụ vận chuyển quốc tế."""

    contract_no: str = ""
    contract_date: Optional[date] = None
    expiry_date: Optional[date] = None
    customer_name: str = ""
    customer_address: str = ""
    customer_tax_id: str = ""
    customer_rep: str = ""
    customer_position: str = ""
    article1: tuple[str, ...] = field(default_factory=tuple)
    article2: tuple[str, ...] = field(default_factory=tuple)
    article3_1: tuple[str, ...] = field(default_factory=tuple)
    article3_2: tuple[str, ...] = field(default_factory=tuple)
    article4_1: tuple[str, ...] = field(default_factory=tuple)
    article4_2: tuple[str, ...] = field(default_factory=tuple)
    article5: tuple[str, ...] = field(default_factory=tuple)


class ContractBuilder(DocumentBuilder):
    title = "HỢP ĐỒNG DỊCH VỤ VẬN CHUYỂN QUỐC TẾ"
    record_type = ContractRecord

    def parse(self, data: Mapping[str, Any]) -> ContractRecord:
        return ContractRecord(
            contract_no=str(data.get("contractNo") or ""),
            contract_date=as_date(data.get("date")),
            expiry_date=as_date(data.get("expiryDate")),
            customer_name=str(data.get("customerName") or ""),
            customer_address=str(data.get("customerAddress") or ""),
            customer_tax_id=str(data.get("customerTaxId") or ""),
            customer_rep=str(data.get("customerRep") or ""),
            customer_position=str(data.get("customerPosition") or ""),
            article1=tuple(as_lines(data.get("article1"))),
            article2=tuple(as_lines(data.get("article2"))),
            article3_1=tuple(as_lines(data.get("article3_1"))),
            article3_2=tuple(as_lines(data.get("article3_2"))),
            article4_1=tuple(as_lines(data.get("article4_1"))),
            article4_2=tuple(as_lines(data.get("article4_2"))),
            article5=tuple(as_lines(data.get("article5"))),
        )

    def header(self, record: ContractRecord) -> ContentBlock:
        today = f"Hôm nay, {format_vn_long_date(record.contract_date)}" if record.contract_date else "Hôm nay"
        return ContentBlock(
            BlockKind.HEADER,
            {
                "motto": ["Cộng Hòa Xã Hội Chủ Nghĩa Việt Nam", "Độc lập - Tự do - Hạnh phúc"],
                "title": self.title,
                "number": f"Số: {record.contract_no}",
                "legal_bases": list(LEGAL_BASES),
                "intro": f"{today}, tại {PARTY_B['address']}. Chúng tôi gồm có:",
            },
        )

    def continuation(self, record: ContractRecord) -> ContentBlock:
        return ContentBlock(BlockKind.CONTINUATION_HEADER, {"title": self.title, "number": record.contract_no})

    def _parties(self, record: ContractRecord) -> ContentBlock:
        party_a = {
            "name": text_or_placeholder(record.customer_name.upper()),
            "address": text_or_placeholder(record.customer_address),
            "tax_id": text_or_placeholder(record.customer_tax_id),
            "representative": text_or_placeholder(record.customer_rep.upper()),
            "position": text_or_placeholder(record.customer_position),
            "role": "Là bên Sử dụng dịch vụ",
        }
        party_b = dict(PARTY_B, role="Là bên Cung ứng dịch vụ")
        return ContentBlock(BlockKind.TEXT_BLOCK, {"party_a": party_a, "party_b": party_b})

    @staticmethod
    def _section(key: str, text: str) -> ContentBlock:
        return ContentBlock(BlockKind.SECTION_TITLE, {"key": key, "text": text}, keep_with_next=1)

    @staticmethod
    def _subsection(key: str, text: str) -> ContentBlock:
        return ContentBlock(BlockKind.SUBSECTION_TITLE, {"key": key, "text": text}, keep_with_next=1)

    @staticmethod
    def _lines(lines) -> list[ContentBlock]:
        return [ContentBlock(BlockKind.LINE, {"text": line}) for line in lines]

    def blocks(self, record: ContractRecord) -> list[ContentBlock]:
        expiry = format_vn_date(record.expiry_date) if record.expiry_date else ""
        article5 = [line.replace(EXPIRY_PLACEHOLDER, expiry) for line in record.article5]

        out: list[ContentBlock] = [self._parties(record)]
        out.append(self._section("art1", "ĐIỀU 1: MỤC ĐÍCH CỦA HỢP ĐỒNG"))
        out += self._lines(record.article1)
        out.append(self._section("art2", "ĐIỀU 2: THÔNG TIN VỀ HÀNG HÓA"))
        out += self._lines(record.article2)
        out.append(self._section("art3", "ĐIỀU 3: TRÁCH NHIỆM CỦA MỖI BÊN"))
        out.append(self._subsection("art3.1", "3.1 Trách nhiệm bên A:"))
        out += self._lines(record.article3_1)
        out.append(self._subsection("art3.2", "3.2 Trách nhiệm bên B:"))
        out += self._lines(record.article3_2)
        out.append(self._section("art4", "ĐIỀU 4: GIÁ TRỊ HỢP ĐỒNG VÀ ĐIỀU KHOẢN THANH TOÁN"))
        out.append(self._subsection("art4.1", "4.1 Giá trị hợp đồng:"))
        out += self._lines(record.article4_1)
        out.append(self._subsection("art4.2", "4.2 Điều khoản thanh toán:"))
        out += self._lines(record.article4_2)
        out.append(self._section("art5", "ĐIỀU 5: ĐIỀU KHOẢN CHUNG"))
        out += self._lines(article5)
        out.append(
            ContentBlock(
                BlockKind.SIGNATURE_BLOCK,
                {
                    "left": {"label": "ĐẠI DIỆN BÊN A", "name": text_or_placeholder(record.customer_rep.upper(), "....................")},
                    "right": {"label": "ĐẠI DIỆN BÊN B", "name": PARTY_B["representative"]},
                },
            )
        )
        return out
