"""Tests for the flat tag tokenizer."""

import time
import unittest

from tagparser.tokenizer import ascii_lower, tokenize


class TestTokenizer(unittest.TestCase):
    def test_records_in_document_order(self):
        records = tokenize("<html><p>one</p><p>two</p></html>")
        assert [(r.is_closing, r.tag_name) for r in records] == [
            (False, "html"),
            (False, "p"),
            (True, "p"),
            (False, "p"),
            (True, "p"),
            (True, "html"),
        ]

    def test_trailing_text_runs_to_next_tag(self):
        records = tokenize("<p>Hello <b>world</b>!\n</p>")
        assert [r.trailing_text for r in records] == ["Hello ", "world", "!\n", ""]

    def test_text_before_first_tag_is_discarded(self):
        records = tokenize("leading text<p>x</p>")
        assert records[0].tag_name == "p"
        assert records[0].trailing_text == "x"

    def test_tag_names_are_lower_cased(self):
        records = tokenize('<DIV CLASS="Big">x</Div>')
        assert records[0].tag_name == "div"
        assert records[1].tag_name == "div"
        # Attribute text is left exactly as written.
        assert records[0].raw_attributes == ' CLASS="Big"'

    def test_raw_attributes(self):
        records = tokenize("<p><a href='x.html' title=\"a > b\">link</a>")
        assert records[0].raw_attributes is None
        assert records[1].raw_attributes == " href='x.html' title=\"a > b\""
        assert records[1].trailing_text == "link"

    def test_closing_tag_has_no_raw_attributes(self):
        records = tokenize("<p>x</p >")
        assert records[1].is_closing
        assert records[1].raw_attributes is None

    def test_self_closing_keeps_trailing_slash(self):
        records = tokenize('<br/><img src="a.png" />')
        assert records[0].raw_attributes == "/"
        assert records[0].is_self_closing
        assert records[1].raw_attributes == ' src="a.png" /'
        assert records[1].is_self_closing

    def test_comments_and_doctype_produce_no_records(self):
        records = tokenize("<!DOCTYPE html><html><!-- a <b>comment</b> --><p>x</p></html>")
        assert [r.tag_name for r in records] == ["html", "p", "p", "html"]

    def test_text_after_comment_is_dropped(self):
        records = tokenize("<p>before<!-- note -->after</p>")
        assert records[0].trailing_text == "before"
        assert len(records) == 2

    def test_unterminated_tag_is_skipped(self):
        records = tokenize('<p>ok</p><a href="x')
        assert [r.tag_name for r in records] == ["p", "p"]

    def test_stray_less_than_does_not_stop_scan(self):
        records = tokenize("<p>1 < 2</p><i>x</i>")
        assert [r.tag_name for r in records] == ["p", "p", "i", "i"]
        assert records[0].trailing_text == "1 "

    def test_plain_text_yields_nothing(self):
        assert tokenize("just some text") == []
        assert tokenize("") == []

    def test_bom_is_discarded(self):
        records = tokenize("\ufeff<p>x</p>")
        assert records[0].tag_name == "p"

    def test_ascii_lower_leaves_non_ascii_alone(self):
        assert ascii_lower("DIV") == "div"
        assert ascii_lower("ÄB-X") == "Äb-x"
        assert tokenize("<ÄB>x</ÄB>")[0].tag_name == "Äb"

    def test_long_text_without_tags_is_linear(self):
        start = time.perf_counter()
        assert tokenize("y" * 200_000) == []
        assert time.perf_counter() - start < 2.0

    def test_long_text_after_stray_angle_bracket_is_linear(self):
        html = "<p>x</p>if a < b then " + "y" * 200_000
        start = time.perf_counter()
        records = tokenize(html)
        assert time.perf_counter() - start < 2.0
        assert [(r.is_closing, r.tag_name) for r in records] == [(False, "p"), (True, "p")]
        assert records[1].trailing_text == "if a "

    def test_many_stray_angle_brackets(self):
        html = "<p>" + "a < b " * 40_000 + "</p>"
        start = time.perf_counter()
        records = tokenize(html)
        assert time.perf_counter() - start < 2.0
        assert [r.tag_name for r in records] == ["p", "p"]

    def test_memo_fields_start_empty(self):
        record = tokenize("<p>x</p>")[0]
        assert record.parsed_attributes is None
        assert record.cached_inner_text is None


if __name__ == "__main__":
    unittest.main()
