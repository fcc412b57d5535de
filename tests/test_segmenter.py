from coursecatalog.segmenter import CatalogBlock, segment_blocks


def test_blocks_in_input_order(sample_catalog):
    codes = [b.course_code for b in segment_blocks(sample_catalog)]
    assert codes == ["CS 1101", "CS 2201", "CS 3250", "MATH 2410", "CS 3251"]


def test_block_is_code_title_body_triple(sample_catalog):
    block = list(segment_blocks(sample_catalog))[2]
    code, title, body = block[:3]
    assert code == "CS 3250"
    assert title == "Algorithms"
    assert body == "Study of algorithms. Prerequisite: CS 2201, CS 2212. FALL, SPRING. [3]"
    assert block.index == 2
    assert not block.malformed


def test_course_description_label_dropped(sample_catalog):
    for block in segment_blocks(sample_catalog):
        assert not block.body.startswith("Course Description")


def test_last_block_runs_to_end_of_input():
    text = "CS 1101 - Intro\nFirst line.\nSecond line.\n\nTrailing paragraph."
    (block,) = list(segment_blocks(text))
    assert block.body.endswith("Trailing paragraph.")
    assert "Second line." in block.body


def test_restartable(sample_catalog):
    blocks = segment_blocks(sample_catalog)
    first = list(blocks)
    second = list(blocks)
    assert first == second
    assert len(first) == 5


def test_independent_iterators_do_not_share_position(sample_catalog):
    blocks = segment_blocks(sample_catalog)
    a, b = iter(blocks), iter(blocks)
    assert next(a).course_code == "CS 1101"
    assert next(a).course_code == "CS 2201"
    assert next(b).course_code == "CS 1101"


def test_unspaced_header_and_dash_variants():
    text = "CS3250 - Algorithms\nBody one. [3]\nMATH 1300L – Calculus Lab\nBody two. [1]\n"
    blocks = list(segment_blocks(text))
    assert [b.course_code for b in blocks] == ["CS 3250", "MATH 1300L"]
    assert blocks[1].title == "Calculus Lab"


def test_preamble_paragraphs_are_skipped_regions(sample_catalog):
    regions = segment_blocks(sample_catalog).skipped_regions()
    assert len(regions) == 2
    assert regions[0].startswith("VANDERBILT UNIVERSITY")


def test_text_without_headers_yields_nothing():
    blocks = segment_blocks("Just some prose.\n\nAnd another paragraph.")
    assert list(blocks) == []
    assert len(blocks.skipped_regions()) == 2


def test_term_year_line_is_not_a_header():
    text = "CS 1101 - Intro\nBody.\nFALL 2024 - schedule notes\nMore body. [3]\n"
    blocks = list(segment_blocks(text))
    assert len(blocks) == 1
    assert "FALL 2024" in blocks[0].body


def test_malformed_block_forwarded():
    text = "CS 4999 -\nCS 1101 - Intro\nIntroduction. [3]\n"
    blocks = list(segment_blocks(text))
    assert blocks[0] == CatalogBlock("CS 4999", "", "", 0, True)
    assert not blocks[1].malformed


def test_crlf_line_endings():
    text = "Preamble.\r\n\r\nCS 3250 - Algorithms\r\nCourse Description\r\nStudy of algorithms. [3]\r\n"
    blocks = segment_blocks(text)
    (block,) = list(blocks)
    assert block.title == "Algorithms"
    assert block.body == "Study of algorithms. [3]"
    assert blocks.skipped_regions() == ["Preamble."]
