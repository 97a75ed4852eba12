"""Tests for the text and file-name helpers."""

from datetime import datetime

from pagevault.models import PageCapture
from pagevault.utils import (
    TRUNCATION_MARKER,
    clean_content,
    clean_title,
    extract_domain,
    format_file_name,
    normalize_folder,
    truncate_text,
)


class TestTruncateText:
    def test_short_text_is_unchanged(self) -> None:
        result = truncate_text("hello", 10)
        assert result.text == "hello"
        assert result.truncated is False

    def test_text_at_limit_is_unchanged(self) -> None:
        result = truncate_text("x" * 10, 10)
        assert result.text == "x" * 10
        assert result.truncated is False

    def test_long_text_is_cut_and_marked(self) -> None:
        result = truncate_text("abcdefghij" * 5, 12)
        assert result.truncated is True
        assert len(result.text) == 12 + len(TRUNCATION_MARKER)
        assert result.text.startswith("abcdefghijab")
        assert result.text.endswith(TRUNCATION_MARKER)


class TestCleanContent:
    def test_collapses_blank_lines_and_spaces(self) -> None:
        text = "  Title\n\n\n\n\nBody \t  text  \n"
        assert clean_content(text) == "Title\n\nBody text"


class TestCleanTitle:
    def test_replaces_illegal_characters(self) -> None:
        assert clean_title('A/B: "C"?') == "A-B- -C--"

    def test_limits_length(self) -> None:
        assert len(clean_title("x" * 300)) == 100


class TestFormatFileName:
    def _page(self, title="My Page", url="https://example.com/a/b") -> PageCapture:
        return PageCapture(
            title=title,
            url=url,
            content="text",
            captured_at=datetime(2024, 5, 1, 9, 30, 15),
        )

    def test_default_template(self) -> None:
        assert format_file_name("{{title}} - {{date}}", self._page()) == "My Page - 2024-05-01.md"

    def test_time_placeholder(self) -> None:
        assert format_file_name("{{date}} {{time}}", self._page()) == "2024-05-01 09-30-15.md"

    def test_url_is_made_path_safe(self) -> None:
        assert format_file_name("{{url}}", self._page()) == "example.com-a-b.md"

    def test_url_keeps_query_without_illegal_characters(self) -> None:
        page = self._page(url="http://example.com/search?q=a|b/")
        assert format_file_name("{{url}}", page) == "example.com-search-q=a-b.md"

    def test_title_is_cleaned(self) -> None:
        assert format_file_name("{{title}}", self._page(title="What? Why/How")) == "What- Why-How.md"

    def test_existing_extension_is_kept(self) -> None:
        assert format_file_name("{{title}}.md", self._page()) == "My Page.md"

    def test_empty_result_falls_back(self) -> None:
        assert format_file_name("", self._page()) == "untitled.md"


class TestNormalizeFolder:
    def test_strips_relative_segments(self) -> None:
        assert normalize_folder("/Inbox//Web/") == "Inbox/Web"
        assert normalize_folder("../Inbox/./Web") == "Inbox/Web"
        assert normalize_folder("Inbox\\Web") == "Inbox/Web"

    def test_empty_folder_is_vault_root(self) -> None:
        assert normalize_folder("") == ""


def test_extract_domain_strips_www() -> None:
    assert extract_domain("https://www.example.com/page") == "example.com"
