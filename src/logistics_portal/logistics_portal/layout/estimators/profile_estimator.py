from __future__ import annotations

import math

from ...core.enums import BlockKind
from ..model import ContentBlock, PageProfile
from .base import HeightEstimator


class ProfileHeightEstimator(HeightEstimator):
    """Standard rule: explicit height wins, else fixed unit per kind.

    Free-text lines wrap at ``chars_per_line``: ceil(len / chars_per_line) * line unit.
    """

    def __init__(self, profile: PageProfile):
        self._profile = profile

    def estimate(self, block: ContentBlock) -> float:
        if block.estimated_height is not None:
            return block.estimated_height

        p = self._profile
        if block.kind == BlockKind.LINE:
            text = str(block.payload.get("text") or "")
            return math.ceil(len(text) / p.chars_per_line) * p.line_unit_height

        return {
            BlockKind.HEADER: p.first_header_height,
            BlockKind.CONTINUATION_HEADER: p.continuation_header_height,
            BlockKind.SECTION_TITLE: p.section_title_height,
            BlockKind.SUBSECTION_TITLE: p.subsection_title_height,
            BlockKind.TEXT_BLOCK: p.text_block_height,
            BlockKind.TABLE_HEADER: p.table_header_height,
            BlockKind.TABLE_ROW: p.table_row_height,
            BlockKind.TABLE_TOTAL: p.table_total_height,
            BlockKind.SIGNATURE_BLOCK: p.signature_height,
        }.get(block.kind, 0)
