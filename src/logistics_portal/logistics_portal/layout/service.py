from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.enums import DocumentType
from ..core.exceptions import ValidationError
from .documents.base import DocumentBuilder
from .documents.contract import ContractBuilder
from .documents.quotation import QuotationBuilder
from .documents.weekly_report import WeeklyReportBuilder
from .estimators.base import HeightEstimator
from .model import PaginatedDocument
from .paginator import Paginator
from .profiles import profile_for


class DocumentLayoutService:
    """Use case: reflow a contract / quotation / weekly report into A4 pages."""

    def __init__(
        self,
        *,
        builders: Optional[Mapping[DocumentType, DocumentBuilder]] = None,
        estimator: Optional[HeightEstimator] = None,
    ):
        self._builders = dict(
            builders
            or {
                DocumentType.CONTRACT: ContractBuilder(),
                DocumentType.QUOTATION: QuotationBuilder(),
                DocumentType.REPORT: WeeklyReportBuilder(),
            }
        )
        self._estimator = estimator

    def _builder(self, doc_type: DocumentType) -> DocumentBuilder:
        builder = self._builders.get(doc_type)
        if builder is None:
            raise ValidationError(f"Loại tài liệu không hỗ trợ: {doc_type.value}")
        return builder

    def layout(self, doc_type: DocumentType | str, record: Any) -> PaginatedDocument:
        try:
            doc_type = DocumentType(doc_type)
        except ValueError:
            raise ValidationError(f"Loại tài liệu không hỗ trợ: {doc_type}")

        builder = self._builder(doc_type)
        if not isinstance(record, builder.record_type):
            record = builder.parse(record if isinstance(record, Mapping) else {})

        profile = profile_for(doc_type)
        paginator = Paginator(profile, estimator=self._estimator)
        pages = paginator.paginate(
            builder.blocks(record),
            header=builder.header(record),
            continuation=builder.continuation(record),
        )
        return PaginatedDocument(doc_type=doc_type, title=builder.title, pages=tuple(pages))
