"""Tests for the command line entry point."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from tagparser import parse
from tagparser.__main__ import format_element, main

PAGE = '<html><a href="/one" class="nav">One</a><a href="/two">Two</a><img src="x.png"/><p id="p1">Para</p></html>'


def _run(*argv):
    out = io.StringIO()
    err = io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        status = main(list(argv))
    return status, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def test_format_element(self):
        doc = parse(PAGE)
        assert format_element(doc.get_element_by_tag_name("a")) == '<a class="nav" href="/one">One</a>'
        assert format_element(doc.get_element_by_tag_name("img")) == '<img /="/" src="x.png" />'

    def test_list_by_tag(self):
        status, out, _ = _run(PAGE, "a")
        assert status == 0
        assert out.splitlines() == ['<a class="nav" href="/one">One</a>', '<a href="/two">Two</a>']

    def test_by_id(self):
        status, out, _ = _run(PAGE, "--id", "p1")
        assert status == 0
        assert out == '<p id="p1">Para</p>\n'

    def test_by_attribute(self):
        status, out, _ = _run(PAGE, "--attr", "href", "/two")
        assert status == 0
        assert out == '<a href="/two">Two</a>\n'

    def test_plain_text_reports_error(self):
        status, out, err = _run("<!-- only a comment -->")
        assert status == 1
        assert out == ""
        assert "Null HTML document" in err

    def test_unrecognised_source(self):
        status, _, err = _run("nothing here")
        assert status == 1
        assert "nothing to parse" in err


if __name__ == "__main__":
    unittest.main()
