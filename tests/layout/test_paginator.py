import math

from src.logistics_portal.logistics_portal.core.enums import BlockKind
from src.logistics_portal.logistics_portal.layout.model import ContentBlock, PageProfile
from src.logistics_portal.logistics_portal.layout.paginator import Paginator

PROFILE = PageProfile(
    name="test",
    page_height=100,
    first_header_height=30,
    continuation_header_height=10,
    section_title_height=10,
    subsection_title_height=10,
    table_header_height=10,
    table_row_height=20,
    table_total_height=10,
    text_block_height=40,
    signature_height=30,
)

HEADER = ContentBlock(BlockKind.HEADER, {"title": "T"}, estimated_height=30)
CONTINUATION = ContentBlock(BlockKind.CONTINUATION_HEADER, {"title": "T (tiếp theo)"}, estimated_height=10)


def _line(h, text="x"):
    return ContentBlock(BlockKind.LINE, {"text": text}, estimated_height=h)


def _paginate(blocks):
    return Paginator(PROFILE).paginate(blocks, header=HEADER, continuation=CONTINUATION)


def _content(pages):
    return [b for p in pages for b in p.content]


def test_concatenated_page_content_reproduces_input():
    blocks = [_line(h, f"l{i}") for i, h in enumerate([25, 40, 10, 60, 5, 90, 30, 15, 70, 0, 45])]

    pages = _paginate(blocks)

    assert _content(pages) == blocks
    assert len(pages) > 1


def test_pages_with_several_blocks_stay_within_budget():
    blocks = [_line(h, f"l{i}") for i, h in enumerate([25, 40, 10, 60, 5, 90, 30, 15, 70, 0, 45, 120, 35])]

    for page in _paginate(blocks):
        if len(page.content) > 1:
            assert page.height <= PROFILE.page_height


def test_same_input_gives_same_pages():
    blocks = [_line(h, f"l{i}") for i, h in enumerate([50, 50, 50, 50, 50])]

    assert _paginate(blocks) == _paginate(blocks)


def test_empty_input_gives_one_page_with_header_only():
    pages = _paginate([])

    assert len(pages) == 1
    assert pages[0].content == ()
    assert pages[0].blocks[0].kind == BlockKind.HEADER
    assert pages[0].blocks[0].synthetic is True


def test_oversized_block_gets_its_own_page():
    big = _line(500, "big")
    pages = _paginate([_line(20, "a"), big, _line(20, "b")])

    assert _content(pages) == [_line(20, "a"), big, _line(20, "b")]
    holder = [p for p in pages if big in p.content][0]
    assert holder.content == (big,)


def test_bad_heights_are_treated_as_zero():
    paginator = Paginator(PROFILE)
    for bad in (-50, float("nan"), float("inf"), "abc"):
        assert paginator.height_of(_line(bad)) == 0.0

    pages = _paginate([_line(-50), _line(float("nan"))])
    assert len(pages) == 1
    assert not math.isnan(pages[0].height)


def test_section_title_moves_with_its_first_line():
    title = ContentBlock(BlockKind.SECTION_TITLE, {"text": "ĐIỀU 1"}, estimated_height=10, keep_with_next=1)
    first = _line(30, "first")
    second = _line(50, "second")

    pages = _paginate([first, title, second])

    assert pages[0].content == (first,)
    assert pages[1].content == (title, second)


def test_table_header_is_reissued_on_continuation_page():
    th = ContentBlock(BlockKind.TABLE_HEADER, {"columns": ["A"]}, table="t", keep_with_next=1)
    rows = [ContentBlock(BlockKind.TABLE_ROW, {"cells": [i]}, table="t") for i in range(6)]

    pages = _paginate([th] + rows)

    assert len(pages) == 2
    assert pages[0].content == (th, rows[0], rows[1], rows[2])
    assert pages[1].blocks[0].kind == BlockKind.CONTINUATION_HEADER
    reissued = pages[1].blocks[1]
    assert reissued.kind == BlockKind.TABLE_HEADER and reissued.table == "t" and reissued.synthetic
    assert pages[1].content == tuple(rows[3:])
    assert pages[1].height == 10 + 10 + 3 * 20


def test_rows_of_a_closed_table_do_not_reissue_header():
    th = ContentBlock(BlockKind.TABLE_HEADER, {"columns": ["A"]}, table="t", keep_with_next=1)
    row = ContentBlock(BlockKind.TABLE_ROW, {"cells": [1]}, table="t")
    filler = _line(40)
    late_row = ContentBlock(BlockKind.TABLE_ROW, {"cells": [2]}, table="t")

    pages = _paginate([th, row, filler, late_row])

    assert pages[-1].content[-1] == late_row
    assert [b for b in pages[-1].blocks if b.synthetic and b.kind == BlockKind.TABLE_HEADER] == []


def test_long_line_height_follows_wrapping():
    paginator = Paginator(PROFILE)
    block = ContentBlock(BlockKind.LINE, {"text": "a" * 161})

    assert paginator.height_of(block) == 3 * PROFILE.line_unit_height
