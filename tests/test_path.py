"""Tests for jsonstore.core.path.

Tests cover:
- normalize(): dotted text, segment lists, bracket pass-through, root
- Truncation at the first empty segment
- Idempotence of normalize()
- parse_segments() on bracket text
- JsonPath helpers
"""

import pytest

from jsonstore.core.path import (
    JsonPath,
    format_segment,
    is_bracket_form,
    normalize,
    parse_segments,
)


class TestNormalize:
    """Tests for normalize()."""

    def test_segment_list(self) -> None:
        assert normalize(["a", "b", 0]) == "['a']['b'][0]"

    def test_dotted_text(self) -> None:
        assert normalize("a.b.0") == "['a']['b'][0]"

    @pytest.mark.parametrize("path", ["", [], (), None, "."], ids=["empty-str", "empty-list", "empty-tuple", "none", "dot"])
    def test_root(self, path) -> None:
        assert normalize(path) == "."

    def test_bracket_text_passes_through_unchanged(self) -> None:
        assert normalize("['a'][3]") == "['a'][3]"
        assert normalize('["a"]') == '["a"]'
        assert normalize("[a][b]") == "[a][b]"

    def test_digit_text_in_list_is_index(self) -> None:
        assert normalize(["items", "12"]) == "['items'][12]"

    def test_negative_index_is_quoted_name(self) -> None:
        assert normalize(["items", -1]) == "['items']['-1']"

    def test_bool_segment_is_name(self) -> None:
        assert normalize([True]) == "['True']"

    def test_name_with_single_quote_uses_double_quotes(self) -> None:
        assert normalize(["it's"]) == "[\"it's\"]"

    def test_name_with_both_quotes_is_escaped(self) -> None:
        canonical = normalize(["a'b\"c"])
        assert canonical == '["a\'b\\"c"]'
        assert parse_segments(canonical) == ("a'b\"c",)

    def test_backslash_is_escaped(self) -> None:
        canonical = normalize(["back\\slash"])
        assert canonical == '["back\\\\slash"]'
        assert parse_segments(canonical) == ("back\\slash",)

    def test_name_with_dot_from_list(self) -> None:
        assert normalize(["a.b", "c"]) == "['a.b']['c']"


class TestEmptySegmentTruncation:
    """A path is cut at its first empty segment."""

    @pytest.mark.parametrize(
        "path, truncated",
        [
            ("a..b", "a"),
            ("a.b.", "a.b"),
            ("a.b..c.d", "a.b"),
            (["a", "", "b"], ["a"]),
            (["a", None, "b"], ["a"]),
        ],
        ids=["embedded", "trailing", "middle", "list-empty-str", "list-none"],
    )
    def test_truncates_at_first_empty(self, path, truncated) -> None:
        assert normalize(path) == normalize(truncated)

    def test_leading_root_dot_is_dropped(self) -> None:
        assert normalize(".a.b") == "['a']['b']"
        assert normalize(".a") == "['a']"

    def test_empty_after_leading_dot_truncates(self) -> None:
        assert normalize("..a") == "."
        assert normalize(".a..b") == "['a']"


class TestIdempotence:
    """normalize(normalize(p)) == normalize(p)."""

    @pytest.mark.parametrize(
        "path",
        [
            "a.b.c",
            ["a", "b", 0],
            "",
            ".",
            "a..b",
            ["it's", 1],
            ["a'b\"c"],
            ["back\\slash"],
            ".a.b",
            ["a]b", "c"],
            ["x[0]"],
            "['already'][0]",
            "1.2.3",
        ],
    )
    def test_idempotent(self, path) -> None:
        once = normalize(path)
        assert normalize(once) == once


class TestParseSegments:
    """Tests for parse_segments()."""

    def test_dotted(self) -> None:
        assert parse_segments("a.0.b") == ("a", 0, "b")

    def test_bracket_quoted_and_index(self) -> None:
        assert parse_segments("['a'][\"b\"][2]") == ("a", "b", 2)

    def test_bracket_quoted_digits_stay_names(self) -> None:
        assert parse_segments("['0']") == ("0",)

    def test_bracket_empty_group_truncates(self) -> None:
        assert parse_segments("['a']['']['b']") == ("a",)

    def test_root(self) -> None:
        assert parse_segments(".") == ()
        assert parse_segments(None) == ()

    def test_round_trip_through_canonical(self) -> None:
        segments = ("user", "tags", 3, "name")
        assert parse_segments(normalize(list(segments))) == segments


class TestBracketForm:
    def test_detects_bracket_text(self) -> None:
        assert is_bracket_form("['a'][0]")
        assert is_bracket_form("['a]b']")

    def test_rejects_mixed_text(self) -> None:
        assert not is_bracket_form("a[0]")
        assert not is_bracket_form("['a'].b")
        assert not is_bracket_form("")

    def test_format_segment(self) -> None:
        assert format_segment(0) == "[0]"
        assert format_segment("name") == "['name']"


class TestJsonPath:
    """Tests for the JsonPath value type."""

    def test_parse_and_canonical(self) -> None:
        path = JsonPath.parse("a.b.0")
        assert path.segments == ("a", "b", 0)
        assert path.canonical == "['a']['b'][0]"
        assert str(path) == "['a']['b'][0]"
        assert len(path) == 3

    def test_parent(self) -> None:
        path = JsonPath.parse(["a", "b"])
        assert path.parent == JsonPath(("a",))
        assert path.parent.parent.is_root

    def test_root(self) -> None:
        root = JsonPath()
        assert root.is_root
        assert root.canonical == "."
        assert root.parent == root

    def test_immutable(self) -> None:
        path = JsonPath.parse("a")
        with pytest.raises(AttributeError):
            path.segments = ("b",)  # type: ignore[misc]

    def test_normalize_accepts_jsonpath(self) -> None:
        assert normalize(JsonPath.parse("a.b")) == "['a']['b']"
