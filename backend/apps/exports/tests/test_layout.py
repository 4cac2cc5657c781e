from __future__ import annotations

from django.test import SimpleTestCase

from apps.exports.services.document import DocumentModel, build_document, export_filename, split_paragraphs
from apps.exports.services.layout import (
    BODY,
    MARGIN,
    PAGE_HEIGHT,
    STYLE_LABEL,
    SUBTITLE,
    TITLE,
    DrawInstruction,
    build_instructions,
    paginate,
    wrap_text,
)

SAMPLE_TEXT = (
    "I was born in a small coastal town where the fog rolled in every morning and the "
    "fishing boats left before dawn. My grandmother taught me to read the tides, and my "
    "father taught me to mend nets with patience. Years later, in a crowded city office, "
    "I still found myself counting waves in the hum of the air conditioning."
)


class ParagraphSplitterTests(SimpleTestCase):
    def test_empty_draft_yields_no_paragraphs(self):
        self.assertEqual(split_paragraphs(""), [])

    def test_two_or_more_newlines_separate_paragraphs(self):
        self.assertEqual(split_paragraphs("A\n\nB\n\n\nC"), ["A", "B", "C"])

    def test_chunks_are_trimmed_and_blank_chunks_dropped(self):
        self.assertEqual(split_paragraphs("\n\n  first  \n\n   \n\nsecond\n"), ["first", "second"])

    def test_single_newline_stays_inside_a_paragraph(self):
        self.assertEqual(split_paragraphs("line one\nline two"), ["line one\nline two"])


class LineWrapperTests(SimpleTestCase):
    def test_lines_never_exceed_width(self):
        for width in (8, 25, 70):
            lines = wrap_text(SAMPLE_TEXT, width)
            self.assertTrue(lines)
            for line in lines:
                if len(line) > width:
                    self.assertNotIn(" ", line)
                else:
                    self.assertLessEqual(len(line), width)

    def test_rejoined_lines_preserve_word_sequence(self):
        lines = wrap_text(SAMPLE_TEXT, 30)
        self.assertEqual(" ".join(lines).split(), SAMPLE_TEXT.split())

    def test_overlong_word_gets_its_own_line_unsplit(self):
        word = "supercalifragilisticexpialidocious"
        lines = wrap_text(f"a {word} b", 10)
        self.assertEqual(lines, ["a", word, "b"])

    def test_packs_greedily_up_to_exact_width(self):
        self.assertEqual(wrap_text("aaaa bbbb cccc", 9), ["aaaa bbbb", "cccc"])

    def test_newlines_are_ordinary_whitespace(self):
        self.assertEqual(wrap_text("one\ntwo\n\nthree", 70), ["one two three"])

    def test_blank_text_yields_no_lines(self):
        self.assertEqual(wrap_text("", 70), [])
        self.assertEqual(wrap_text("   \n ", 70), [])


class PaginatorTests(SimpleTestCase):
    def _body(self, count: int):
        return [DrawInstruction(f"line {i}", BODY) for i in range(count)]

    def test_short_input_fits_on_one_page(self):
        pages = paginate(self._body(5))
        self.assertEqual(len(pages), 1)
        self.assertEqual(pages[0].number, 1)
        self.assertEqual(pages[0].runs[0].y, PAGE_HEIGHT - MARGIN)

    def test_long_input_spills_onto_new_pages(self):
        pages = paginate(self._body(100))
        self.assertEqual([len(page.runs) for page in pages], [42, 42, 16])
        self.assertEqual([page.number for page in pages], [1, 2, 3])
        drawn = [run.text for page in pages for run in page.runs]
        self.assertEqual(drawn, [f"line {i}" for i in range(100)])

    def test_cursor_strictly_decreases_within_a_page(self):
        pages = paginate(self._body(150))
        for page in pages:
            ys = [run.y for run in page.runs]
            self.assertEqual(ys[0], PAGE_HEIGHT - MARGIN)
            self.assertEqual(len(ys), len(set(ys)))
            self.assertTrue(all(a > b for a, b in zip(ys, ys[1:])))
            self.assertTrue(all(y > MARGIN for y in ys))

    def test_block_kinds_advance_by_size_plus_gap(self):
        instructions = [
            DrawInstruction("Title", TITLE),
            DrawInstruction("Subtitle", SUBTITLE),
            DrawInstruction("Writing style: simple", STYLE_LABEL),
            DrawInstruction("Body", BODY),
        ]
        runs = paginate(instructions)[0].runs
        top = PAGE_HEIGHT - MARGIN
        for run, offset in zip(runs, [0, 32, 58, 78]):
            self.assertAlmostEqual(run.y, top - offset)
        self.assertEqual([run.size for run in runs], [22, 14, 10, 12])
        self.assertEqual(runs[0].font_role, "bold")
        self.assertTrue(all(run.x == MARGIN for run in runs))
        self.assertTrue(all(run.color == (0.2, 0.2, 0.2) for run in runs))

    def test_empty_input_yields_a_single_empty_page(self):
        pages = paginate([])
        self.assertEqual(len(pages), 1)
        self.assertEqual(pages[0].runs, [])


class DocumentModelTests(SimpleTestCase):
    def test_build_instructions_orders_header_blocks_before_body(self):
        document = DocumentModel(
            title="My Life",
            subtitle="A journey",
            style_label="Writing style: poetic",
            body="Para one.\n\nPara two.",
        )
        instructions = build_instructions(document)
        self.assertEqual(
            [(i.text, i.style) for i in instructions],
            [
                ("My Life", TITLE),
                ("A journey", SUBTITLE),
                ("Writing style: poetic", STYLE_LABEL),
                ("Para one. Para two.", BODY),
            ],
        )

    def test_title_is_not_wrapped(self):
        long_title = "A " * 60
        document = DocumentModel(title=long_title, subtitle=None, style_label="Writing style: simple", body="x")
        instructions = build_instructions(document)
        self.assertEqual(instructions[0].text, long_title)
        self.assertEqual(len(instructions), 3)

    def test_title_falls_back_to_full_name_then_default(self):
        named = build_document({"customization": {"title": ""}, "personal": {"fullName": "Ada"}}, "x", "simple")
        anonymous = build_document({"customization": {}, "personal": {}}, "x", "simple")
        self.assertEqual(named.title, "Ada")
        self.assertEqual(anonymous.title, "Autobiography")
        self.assertIsNone(anonymous.subtitle)

    def test_export_filename_is_lowercased_and_hyphenated(self):
        self.assertEqual(export_filename({"customization": {"title": "My  Life\tStory"}}, "pdf"), "my-life-story.pdf")
        self.assertEqual(export_filename({"customization": {"title": ""}}, "docx"), "autobiography.docx")
