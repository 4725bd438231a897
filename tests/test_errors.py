"""Tests for error codes, compact formatting and terminal colors."""

import pytest

from partialkit import (
    ErrorCode,
    InvalidCollection,
    InvalidTemplateName,
    PartialDepthError,
    PartialError,
    resolve,
    resolve_collection,
)
from partialkit import terminal


class TestErrorCodes:
    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (ErrorCode.EMPTY_NAME, "name"),
            (ErrorCode.INVALID_ALIAS, "name"),
            (ErrorCode.UNORDERED_COLLECTION, "collection"),
            (ErrorCode.PARTIAL_DEPTH, "runtime"),
        ],
    )
    def test_category(self, code, category):
        assert code.category == category

    def test_codes_unique(self):
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))

    def test_hierarchy(self):
        assert issubclass(InvalidTemplateName, PartialError)
        assert issubclass(InvalidCollection, PartialError)
        assert issubclass(PartialDepthError, PartialError)
        assert issubclass(PartialDepthError, RuntimeError)


class TestFormatCompact:
    def test_name_error(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        with pytest.raises(InvalidTemplateName) as exc_info:
            resolve("users//row")
        assert exc_info.value.format_compact() == (
            "P-NAM-002: Invalid partial name 'users//row': empty path segment\n"
            "  Hint: Write 'users/row'"
        )

    def test_empty_name_without_hint(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        with pytest.raises(InvalidTemplateName) as exc_info:
            resolve("")
        assert exc_info.value.format_compact() == "P-NAM-001: Invalid partial name '': name is empty"

    def test_collection_error(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        with pytest.raises(InvalidCollection) as exc_info:
            resolve_collection("item", {3, 1})
        compact = exc_info.value.format_compact()
        assert compact.startswith(
            "P-COL-002: Collection for partial 'item' must be ordered, got set"
        )
        assert "Hint: Pass sorted(collection) or a list" in compact

    def test_colored_code(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        with pytest.raises(InvalidTemplateName) as exc_info:
            resolve("")
        compact = exc_info.value.format_compact()
        assert "\033[91m" in compact
        assert terminal.strip_colors(compact).startswith("P-NAM-001: ")

    def test_base_error_without_code(self):
        assert PartialError("boom").format_compact() == "boom"


class TestTerminal:
    def test_colorize_plain_when_disabled(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        assert terminal.colorize("Error", "bright_red", "bold") == "Error"
        assert not terminal.supports_color()

    def test_colorize_when_enabled(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        result = terminal.colorize("Error", "bright_red", "bold")
        assert result == "\033[91m\033[1mError\033[0m"

    def test_no_colors_requested(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        assert terminal.colorize("Error") == "Error"

    def test_strip_colors(self):
        assert terminal.strip_colors("\033[36mheader\033[0m") == "header"

    def test_force_color_wins(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert terminal._should_use_colors()

    def test_no_color(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setenv("NO_COLOR", "1")
        assert not terminal._should_use_colors()


class TestDepthErrorOutput:
    """Colors belong to format_compact(); the exception message stays plain."""

    def test_message_plain_with_colors_enabled(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        error = PartialDepthError("c", ("a", "b"), 2)
        assert "\033[" not in str(error)
        assert str(error) == (
            "Maximum partial depth (2) exceeded rendering 'c'\n"
            "  Partial chain: a -> b -> c"
        )

    def test_compact_colored(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        compact = PartialDepthError("c", ("a", "b"), 2).format_compact()
        assert "\033[36mc\033[0m" in compact
        assert terminal.strip_colors(compact) == (
            "P-RUN-001: Maximum partial depth (2) exceeded rendering 'c'\n"
            "  Partial chain: a -> b -> c\n"
            "  Hint: Check for a partial that renders itself"
        )

    def test_compact_plain(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        compact = PartialDepthError("c", ("a",), 1).format_compact()
        assert "\033[" not in compact
        assert compact.startswith("P-RUN-001: ")


def test_terminal_helpers_in_use():
    assert not hasattr(terminal, "suggestion")
    assert "bright_green" not in terminal._COLORS
