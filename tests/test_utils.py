"""Tests for Milky utility modules."""

from hypothesis import given
from hypothesis import strategies as st


class TestEscapeHtml:
    """Tests for escape_html function."""

    def test_special_characters(self) -> None:
        from milky.utils.text import escape_html

        assert escape_html("<a href=\"x\">'&'</a>") == (
            "&lt;a href=&quot;x&quot;&gt;&#x27;&amp;&#x27;&lt;/a&gt;"
        )

    def test_empty_string(self) -> None:
        from milky.utils.text import escape_html

        assert escape_html("") == ""

    def test_already_escaped_is_escaped_again(self) -> None:
        from milky.utils.text import escape_html

        assert escape_html("&amp;") == "&amp;amp;"

    @given(st.text().filter(lambda s: not set(s) & set("<>&\"'")))
    def test_plain_text_unchanged(self, text: str) -> None:
        from milky.utils.text import escape_html

        assert escape_html(text) == text

    @given(st.text())
    def test_no_raw_markup_survives(self, text: str) -> None:
        from milky.utils.text import escape_html

        escaped = escape_html(text)
        assert "<" not in escaped
        assert ">" not in escaped
        assert '"' not in escaped


class TestDecodeUrl:
    """Tests for decode_url function."""

    def test_percent_escapes(self) -> None:
        from milky.utils.text import decode_url

        assert decode_url("images/my%20cat.png") == "images/my cat.png"

    def test_unicode(self) -> None:
        from milky.utils.text import decode_url

        assert decode_url("caf%C3%A9.png") == "café.png"

    def test_plain_path_unchanged(self) -> None:
        from milky.utils.text import decode_url

        assert decode_url("a/b.png") == "a/b.png"


class TestLogger:
    """Tests for get_logger function."""

    def test_prefix_added(self) -> None:
        from milky.utils.logger import get_logger

        assert get_logger("mymodule").name == "milky.mymodule"

    def test_package_names_kept(self) -> None:
        from milky.utils.logger import get_logger

        assert get_logger("milky.parser").name == "milky.parser"
        assert get_logger("milky").name == "milky"


class TestStringBuilder:
    """Tests for StringBuilder."""

    def test_build(self) -> None:
        from milky.stringbuilder import StringBuilder

        sb = StringBuilder()
        sb.append("<p>").append("x").append_line("</p>")
        assert sb.build() == "<p>x</p>\n"

    def test_empty_parts_skipped(self) -> None:
        from milky.stringbuilder import StringBuilder

        sb = StringBuilder()
        sb.append("").append("x").append("")
        assert sb.build() == "x"

    def test_append_line_without_text(self) -> None:
        from milky.stringbuilder import StringBuilder

        assert StringBuilder().append_line().build() == "\n"
