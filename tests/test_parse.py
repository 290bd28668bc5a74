"""Tests for acceptance_runner/engine/parse.py."""

import pytest

from acceptance_runner.engine.parse import Parse, ParseError

DOCUMENT = (
    "<html><body><h1>Title</h1>\n"
    '<table border="1">\n'
    "  <tr><td>Fixture</td></tr>\n"
    "  <TR><TD>a &amp; b</TD><td> <b>bold</b>&nbsp;</td></TR>\n"
    "</table>\n"
    "<p>between</p>\n"
    "<table><tr><td>Second</td></tr></table>\n"
    "</body></html>"
)


class TestParse:
    def test_print_reproduces_input(self):
        assert Parse(DOCUMENT).print() == DOCUMENT

    def test_structure(self):
        tables = Parse(DOCUMENT).tables
        assert len(tables) == 2
        assert len(tables[0].parts) == 2
        assert [c.text() for c in tables[0].parts[1].parts] == ["a & b", "bold"]
        assert tables[1].parts[0].parts[0].text() == "Second"

    def test_annotations_survive_printing(self):
        parse = Parse(DOCUMENT)
        cell = parse.tables[1].parts[0].parts[0]
        cell.add_to_tag(' class="pass"')
        cell.add_to_body(" ok")
        assert '<td class="pass">Second ok</td>' in parse.print()

    def test_does_not_confuse_similar_tags(self):
        parse = Parse("<table><tbody><tr><td>x</td><tdx></tdx></tr></tbody></table>")
        assert len(parse.tables[0].parts[0].parts) == 1

    def test_unterminated_table(self):
        with pytest.raises(ParseError):
            Parse("<table><tr><td>x</td></tr>")

    def test_row_without_cells(self):
        with pytest.raises(ParseError):
            Parse("<table><tr></tr></table>")

    def test_at(self):
        row = Parse("<table><tr><td>a</td></tr></table>").tables[0].parts[0]
        assert row.at(0).text() == "a"
        assert row.at(1) is None
