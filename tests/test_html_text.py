"""Tests for XHTML text extraction."""

from __future__ import annotations

import warnings

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from epubparse.html_text import get_named_anchor, html_to_text, parse_xhtml

CHAPTER = """<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
  <head><title>Ignored title</title><style>p { color: red; }</style></head>
  <body>
    <h1>Chapter One</h1>
    <p>Opening paragraph.</p>
    <p id="start">Mr. Bingley had soon made himself <i>acquainted</i> with all.</p>
    <!-- a comment -->
    <p>Middle paragraph.</p>
    <a name="end"></a>
    <p>Closing paragraph.</p>
  </body>
</html>
"""


class TestHtmlToText:
    """Tests for html_to_text."""

    def test_no_anchors(self) -> None:
        """Without anchors the whole body text is returned."""
        text = html_to_text(parse_xhtml(CHAPTER))

        assert text.startswith("Chapter One Opening paragraph.")
        assert text.endswith("Closing paragraph.")
        assert "Ignored title" not in text
        assert "color" not in text
        assert "comment" not in text

    def test_start_and_stop_anchor(self) -> None:
        text = html_to_text(parse_xhtml(CHAPTER), "start", "end")

        assert text == "Mr. Bingley had soon made himself acquainted with all. Middle paragraph."

    def test_start_anchor_only(self) -> None:
        text = html_to_text(parse_xhtml(CHAPTER), "start")

        assert text.startswith("Mr. Bingley")
        assert text.endswith("Closing paragraph.")

    def test_stop_anchor_only(self) -> None:
        text = html_to_text(parse_xhtml(CHAPTER), None, "end")

        assert text.startswith("Chapter One")
        assert text.endswith("Middle paragraph.")

    def test_missing_start_anchor(self, caplog) -> None:
        """An unknown start anchor yields no text and a warning."""
        text = html_to_text(parse_xhtml(CHAPTER), "nowhere")

        assert text == ""
        assert "nowhere" in caplog.text

    def test_unicode_text(self) -> None:
        soup = parse_xhtml('<html><body><p id="卷一-考城隍">卷一 考城隍</p><p>我姐夫的祖父</p></body></html>')

        assert html_to_text(soup, "卷一-考城隍") == "卷一 考城隍 我姐夫的祖父"


class TestGetNamedAnchor:
    """Tests for get_named_anchor."""

    def test_id_attribute(self) -> None:
        soup = parse_xhtml('<p id="x">a</p>')

        assert get_named_anchor(soup.find("p")) == "x"

    def test_name_on_link(self) -> None:
        soup = parse_xhtml('<a name="n" id="i">a</a>')

        assert get_named_anchor(soup.find("a")) == "n"

    def test_no_anchor(self) -> None:
        soup = parse_xhtml("<p>a</p>")

        assert get_named_anchor(soup.find("p")) is None


class TestParseXhtml:
    """Tests for parse_xhtml."""

    XML_MARKUP = '<?xml version="1.0" encoding="utf-8"?><section><p>Text</p></section>'

    def test_leaves_global_filters_untouched(self) -> None:
        before = list(warnings.filters)

        parse_xhtml(CHAPTER)

        assert warnings.filters == before

    def test_suppresses_xml_warning_only_while_parsing(self) -> None:
        """Callers parsing XML-looking markup themselves still get the warning."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            soup = parse_xhtml(self.XML_MARKUP)
            BeautifulSoup(self.XML_MARKUP, "lxml")

        categories = [warning.category for warning in caught]
        assert categories.count(XMLParsedAsHTMLWarning) == 1
        assert html_to_text(soup) == "Text"
