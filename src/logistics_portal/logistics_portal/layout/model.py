from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.enums import BlockKind, DocumentType


@dataclass(frozen=True)
class ContentBlock:
    """Khối nội dung bất biến, đơn vị đầu vào của bộ dàn trang."""

    kind: BlockKind
    payload: Mapping[str, Any] = field(default_factory=dict)
    estimated_height: Optional[float] = None
    table: Optional[str] = None
    keep_with_next: int = 0
    synthetic: bool = False

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "payload": dict(self.payload),
            "table": self.table,
            "synthetic": self.synthetic,
        }


@dataclass(frozen=True)
class Page:
    index: int
    blocks: tuple[ContentBlock, ...]
    height: float

    @property
    def content(self) -> tuple[ContentBlock, ...]:
        """Blocks that came from the input (engine-inserted headers excluded)."""
        return tuple(b for b in self.blocks if not b.synthetic)


@dataclass(frozen=True)
class PageProfile:
    """Height budget and per-kind unit heights for one document type."""

    name: str
    page_height: float
    first_header_height: float
    continuation_header_height: float
    section_title_height: float
    subsection_title_height: float
    table_header_height: float
    table_row_height: float
    table_total_height: float
    text_block_height: float
    signature_height: float
    line_unit_height: float = 30
    chars_per_line: int = 80


@dataclass(frozen=True)
class PaginatedDocument:
    doc_type: DocumentType
    title: str
    pages: tuple[Page, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def to_dict(self) -> dict:
        total = len(self.pages)
        return {
            "doc_type": self.doc_type.value,
            "title": self.title,
            "page_count": total,
            "pages": [
                {
                    "index": p.index,
                    "label": f"- Trang {p.index} / {total} -",
                    "height": p.height,
                    "blocks": [b.to_dict() for b in p.blocks],
                }
                for p in self.pages
            ],
        }
