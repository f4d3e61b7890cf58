"""Page budgets per document type (A4, units approximate rendered pixels)."""

from __future__ import annotations

from ..core.enums import DocumentType
from .model import PageProfile

CONTRACT_PROFILE = PageProfile(
    name="contract",
    page_height=1100,
    first_header_height=380,
    continuation_header_height=40,
    section_title_height=50,
    subsection_title_height=40,
    table_header_height=45,
    table_row_height=40,
    table_total_height=50,
    text_block_height=400,
    signature_height=300,
)

QUOTATION_PROFILE = PageProfile(
    name="quotation",
    page_height=960,
    first_header_height=420,
    continuation_header_height=100,
    section_title_height=50,
    subsection_title_height=40,
    table_header_height=45,
    table_row_height=40,
    table_total_height=50,
    text_block_height=160,
    signature_height=180,
)

REPORT_PROFILE = PageProfile(
    name="report",
    page_height=950,
    first_header_height=120,
    continuation_header_height=40,
    section_title_height=50,
    subsection_title_height=40,
    table_header_height=40,
    table_row_height=45,
    table_total_height=50,
    text_block_height=120,
    signature_height=200,
)

PROFILES = {
    DocumentType.CONTRACT: CONTRACT_PROFILE,
    DocumentType.QUOTATION: QUOTATION_PROFILE,
    DocumentType.REPORT: REPORT_PROFILE,
}


def profile_for(doc_type: DocumentType) -> PageProfile:
    return PROFILES[DocumentType(doc_type)]
