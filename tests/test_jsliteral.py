"""Tests for the restricted object-literal parser."""

import math

import pytest

from admanifest.jsliteral import ParseError, parse_object_literal, tokenize


class TestScalars:
    def test_double_and_single_quoted_strings(self):
        assert parse_object_literal('"a"') == "a"
        assert parse_object_literal("'b'") == "b"

    def test_string_escapes(self):
        assert parse_object_literal(r'"line\nbreak \"q\" \'s\' \\ \/"') == "line\nbreak \"q\" 's' \\ /"

    def test_unicode_and_hex_escapes(self):
        assert parse_object_literal(r'"\u00e9\x41"') == "\u00e9A"

    def test_surrogate_pair_escape(self):
        assert parse_object_literal(r'"\ud83d\ude00"') == "\U0001F600"

    def test_integers_and_floats(self):
        assert parse_object_literal("42") == 42
        assert isinstance(parse_object_literal("42"), int)
        assert parse_object_literal("1.5") == 1.5
        assert parse_object_literal(".5") == 0.5
        assert parse_object_literal("-2e3") == -2000.0

    def test_hex_number(self):
        assert parse_object_literal("0xFF") == 255

    def test_keywords(self):
        assert parse_object_literal("true") is True
        assert parse_object_literal("false") is False
        assert parse_object_literal("null") is None
        assert parse_object_literal("undefined") is None
        assert math.isnan(parse_object_literal("NaN"))
        assert parse_object_literal("-Infinity") == float("-inf")


class TestContainers:
    def test_unquoted_keys(self):
        assert parse_object_literal("{a: 1, $b: 2, _c: 3}") == {"a": 1, "$b": 2, "_c": 3}

    def test_mixed_key_quoting(self):
        assert parse_object_literal("""{"a": 1, 'b': 2, c: 3}""") == {"a": 1, "b": 2, "c": 3}

    def test_numeric_keys_become_strings(self):
        assert parse_object_literal("{1: 'x', 2.5: 'y'}") == {"1": "x", "2.5": "y"}

    def test_trailing_commas(self):
        assert parse_object_literal("{a: [1, 2,], b: {c: 3,},}") == {"a": [1, 2], "b": {"c": 3}}

    def test_empty_containers(self):
        assert parse_object_literal("{a: {}, b: []}") == {"a": {}, "b": []}

    def test_comments_are_ignored(self):
        text = """{
          // line comment
          a: 1, /* block
          comment */ b: 2
        }"""
        assert parse_object_literal(text) == {"a": 1, "b": 2}

    def test_nested(self):
        value = parse_object_literal("{layers: [{name: 'logo', pos: {x: -1.5, y: 2}}]}")
        assert value["layers"][0]["pos"] == {"x": -1.5, "y": 2}


class TestRejects:
    def test_function_call(self):
        with pytest.raises(ParseError):
            parse_object_literal("{a: alert(1)}")

    def test_expression(self):
        with pytest.raises(ParseError):
            parse_object_literal("{a: 1 + 2}")

    def test_template_string(self):
        with pytest.raises(ParseError, match="Unexpected character"):
            parse_object_literal("{a: `x`}")

    def test_unknown_identifier_value(self):
        with pytest.raises(ParseError, match="Unexpected ident"):
            parse_object_literal("{a: window}")

    def test_missing_colon(self):
        with pytest.raises(ParseError, match="Expected ':'"):
            parse_object_literal("{a 1}")

    def test_missing_comma(self):
        with pytest.raises(ParseError, match="Expected ','"):
            parse_object_literal("{a: 1 b: 2}")

    def test_unterminated_string(self):
        with pytest.raises(ParseError, match="Unterminated string"):
            parse_object_literal('{a: "oops}')

    def test_unclosed_object(self):
        with pytest.raises(ParseError, match="end of input"):
            parse_object_literal("{a: 1,")

    def test_trailing_content(self):
        with pytest.raises(ParseError, match="after value"):
            parse_object_literal("{a: 1} {b: 2}")

    def test_error_reports_line_and_column(self):
        with pytest.raises(ParseError) as exc_info:
            parse_object_literal("{\n  a: 1,\n  b: ?\n}")
        assert exc_info.value.line == 3
        assert exc_info.value.column == 6

    def test_parse_error_is_value_error(self):
        assert issubclass(ParseError, ValueError)


class TestTokenize:
    def test_ends_with_eof(self):
        tokens = tokenize("{a: 1}")
        assert [t.kind for t in tokens] == ["{", "ident", ":", "number", "}", "eof"]


class TestLimits:
    def test_code_point_past_unicode_range(self):
        with pytest.raises(ParseError, match="Invalid Unicode escape") as exc_info:
            parse_object_literal("{a: '\\u{110000}'}")
        assert exc_info.value.line == 1
        assert exc_info.value.column == 5

    def test_huge_code_point_escape(self):
        with pytest.raises(ParseError):
            parse_object_literal("{a: '\\u{FFFFFFFFFFFFFFFFFFFFFF}'}")

    def test_highest_code_point_accepted(self):
        assert parse_object_literal("'\\u{10FFFF}'") == "\U0010FFFF"

    def test_deep_nesting_rejected(self):
        with pytest.raises(ParseError, match="Nesting deeper"):
            parse_object_literal("[" * 5000 + "]" * 5000)

    def test_moderate_nesting_accepted(self):
        value = parse_object_literal("[" * 50 + "]" * 50)
        for _ in range(49):
            value = value[0]
        assert value == []

    def test_manifest_with_bad_escape(self):
        from admanifest.manifest import parse_manifest

        with pytest.raises(ParseError):
            parse_manifest("window.manifest = {a: '\\u{110000}'};")
