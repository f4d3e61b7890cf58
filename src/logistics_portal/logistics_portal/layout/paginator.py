from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import BlockKind
from .estimators.base import HeightEstimator
from .estimators.profile_estimator import ProfileHeightEstimator
from .model import ContentBlock, Page, PageProfile

logger = logging.getLogger(__name__)


class Paginator:
    """Flow layout over fixed-height pages.

    Single forward pass. A block is never split; when it does not fit, the page is
    flushed and a continuation page starts (reissuing the open table header when
    the block is a row of that table). A block that cannot fit even a fresh page is
    emitted anyway so every input block is placed exactly once.
    """

    def __init__(self, profile: PageProfile, *, estimator: Optional[HeightEstimator] = None):
        self._profile = profile
        self._estimator = estimator or ProfileHeightEstimator(profile)

    @property
    def profile(self) -> PageProfile:
        return self._profile

    def height_of(self, block: ContentBlock) -> float:
        try:
            h = float(self._estimator.estimate(block))
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(h) or h < 0:
            return 0.0
        return h

    def paginate(
        self,
        blocks: Sequence[ContentBlock],
        *,
        header: Optional[ContentBlock] = None,
        continuation: Optional[ContentBlock] = None,
    ) -> list[Page]:
        blocks = list(blocks)
        heights = [self.height_of(b) for b in blocks]
        budget = self._profile.page_height

        header = replace(header or ContentBlock(BlockKind.HEADER), synthetic=True)
        continuation = replace(
            continuation
            or ContentBlock(BlockKind.CONTINUATION_HEADER, {"title": header.payload.get("title", "")}),
            synthetic=True,
        )
        continuation_height = self.height_of(continuation)

        pages: list[Page] = []
        current: list[ContentBlock] = [header]
        height = self.height_of(header)
        has_content = False
        open_table: Optional[ContentBlock] = None

        for i, block in enumerate(blocks):
            h = heights[i]
            follow = max(int(block.keep_with_next or 0), 0)
            needed = h + sum(heights[i + 1 : i + 1 + follow])

            if height + needed > budget:
                reissue = None
                if block.kind.is_table_body and open_table is not None and open_table.table == block.table:
                    reissue = open_table
                fresh = continuation_height + (self.height_of(reissue) if reissue else 0)

                if has_content or (height > fresh and fresh + h <= budget):
                    pages.append(Page(index=len(pages) + 1, blocks=tuple(current), height=height))
                    current = [continuation]
                    height = continuation_height
                    if reissue is not None:
                        current.append(replace(reissue, synthetic=True))
                        height += self.height_of(reissue)
                    has_content = False

            current.append(block)
            height += h
            has_content = True

            if block.kind == BlockKind.TABLE_HEADER:
                open_table = block
            elif not block.kind.is_table_body:
                open_table = None

        pages.append(Page(index=len(pages) + 1, blocks=tuple(current), height=height))
        logger.debug("Paginated %d blocks into %d %s page(s)", len(blocks), len(pages), self._profile.name)
        return pages
