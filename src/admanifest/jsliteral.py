"""Restricted JavaScript object-literal parser.

Manifest files are authored as JavaScript, not JSON: keys may be unquoted
or single-quoted, and the export tool leaves trailing commas and comments
behind. This module decodes exactly that object-literal subset with a
small tokenizer and a recursive-descent parser. Nothing is evaluated, so
function calls, expressions, and template strings are rejected.

Accepted values:
  - objects with identifier, string, or numeric keys (trailing comma ok)
  - arrays (trailing comma ok)
  - "double" or 'single' quoted strings with JS escapes
  - numbers: decimal, leading '.', exponent, 0x hex, leading sign
  - true, false, null, undefined (→ None), NaN, Infinity
"""

import re
from typing import Any, NamedTuple


class ParseError(ValueError):
    """Raised when manifest text is not a well-formed object literal."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class Token(NamedTuple):
    kind: str       # "{", "}", "[", "]", ":", ",", "string", "number", "ident", "eof"
    value: Any
    pos: int


# ── Tokenizer ──────────────────────────────────────────────────────

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+|//[^\n]*|/\*[\s\S]*?\*/)
    | (?P<punct>[{}\[\]:,])
    | (?P<string>"[^"\\\n]*(?:\\[\s\S][^"\\\n]*)*"|'[^'\\\n]*(?:\\[\s\S][^'\\\n]*)*')
    | (?P<number>[+-]?(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))
    | (?P<ident>[+-]?Infinity\b|[A-Za-z_$][\w$]*)
    """,
    re.VERBOSE,
)

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")

MAX_CODE_POINT = 0x10FFFF

_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v",
    "0": "\0", "\n": "", "\r": "", "\r\n": "", "\u2028": "", "\u2029": "",
}


def _line_col(text: str, pos: int) -> tuple[int, int]:
    line = text.count("\n", 0, pos) + 1
    column = pos - (text.rfind("\n", 0, pos) + 1) + 1
    return line, column


def _unescape(body: str) -> str:
    """Decode JS string escapes in the body of a quoted string.

    Raises:
        ParseError: A \\u{...} escape names a code point past U+10FFFF.
    """
    def _replace(match):
        esc = match.group(1)
        if esc.startswith("u{"):
            code = int(esc[2:-1], 16)
            if code > MAX_CODE_POINT:
                raise ParseError(f"Invalid Unicode escape \\{esc}")
            return chr(code)
        if len(esc) == 5 and esc[0] == "u":
            return chr(int(esc[1:], 16))
        if len(esc) == 3 and esc[0] == "x":
            return chr(int(esc[1:], 16))
        return _SIMPLE_ESCAPES.get(esc, esc)

    if "\\" not in body:
        return body
    decoded = _ESCAPE_RE.sub(_replace, body)
    # Astral characters arrive as \uD83D\uDE00 surrogate pairs.
    if any("\ud800" <= c <= "\udfff" for c in decoded):
        try:
            decoded = decoded.encode("utf-16", "surrogatepass").decode("utf-16")
        except UnicodeDecodeError:
            pass
    return decoded


def _parse_number(raw: str) -> int | float:
    sign = -1 if raw.startswith("-") else 1
    digits = raw.lstrip("+-")
    if digits[:2] in ("0x", "0X"):
        return sign * int(digits, 16)
    if any(c in digits for c in ".eE"):
        return sign * float(digits)
    return sign * int(digits)


def tokenize(text: str) -> list[Token]:
    """Split object-literal text into tokens, skipping whitespace and comments."""
    tokens = []
    pos = 0
    end = len(text)
    while pos < end:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            line, col = _line_col(text, pos)
            char = text[pos]
            if char in "\"'":
                raise ParseError("Unterminated string literal", line, col)
            raise ParseError(f"Unexpected character {char!r}", line, col)

        kind = match.lastgroup
        raw = match.group(kind)
        if kind == "punct":
            tokens.append(Token(raw, raw, pos))
        elif kind == "string":
            try:
                value = _unescape(raw[1:-1])
            except ParseError as e:
                line, col = _line_col(text, pos)
                raise ParseError(e.args[0], line, col) from None
            tokens.append(Token("string", value, pos))
        elif kind == "number":
            tokens.append(Token("number", _parse_number(raw), pos))
        elif kind == "ident":
            tokens.append(Token("ident", raw, pos))
        pos = match.end()

    tokens.append(Token("eof", None, end))
    return tokens


# ── Parser ─────────────────────────────────────────────────────────

# Deepest allowed nesting of objects and arrays.
MAX_DEPTH = 200

_KEYWORDS = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
    "NaN": float("nan"),
    "Infinity": float("inf"),
    "+Infinity": float("inf"),
    "-Infinity": float("-inf"),
}


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0
        self.depth = 0

    def _next(self) -> Token:
        tok = self.tokens[self.index]
        if tok.kind != "eof":
            self.index += 1
        return tok

    def _error(self, message: str, tok: Token) -> ParseError:
        line, col = _line_col(self.text, tok.pos)
        return ParseError(message, line, col)

    def _describe(self, tok: Token) -> str:
        if tok.kind == "eof":
            return "end of input"
        if tok.kind in ("string", "number", "ident"):
            return f"{tok.kind} {tok.value!r}"
        return f"'{tok.kind}'"

    def parse(self) -> Any:
        value = self._value()
        tok = self._next()
        if tok.kind != "eof":
            raise self._error(f"Unexpected {self._describe(tok)} after value", tok)
        return value

    def _value(self) -> Any:
        tok = self._next()
        if tok.kind in ("{", "["):
            if self.depth >= MAX_DEPTH:
                raise self._error(f"Nesting deeper than {MAX_DEPTH} levels", tok)
            self.depth += 1
            value = self._object() if tok.kind == "{" else self._array()
            self.depth -= 1
            return value
        if tok.kind in ("string", "number"):
            return tok.value
        if tok.kind == "ident" and tok.value in _KEYWORDS:
            return _KEYWORDS[tok.value]
        raise self._error(f"Unexpected {self._describe(tok)}", tok)

    def _object(self) -> dict:
        result = {}
        while True:
            tok = self._next()
            if tok.kind == "}":
                return result
            if tok.kind == "string":
                key = tok.value
            elif tok.kind == "ident":
                key = tok.value
            elif tok.kind == "number":
                # JS converts numeric keys to their canonical string form.
                number = tok.value
                key = str(int(number)) if float(number).is_integer() else repr(number)
            else:
                raise self._error(f"Expected object key, got {self._describe(tok)}", tok)

            colon = self._next()
            if colon.kind != ":":
                raise self._error(
                    f"Expected ':' after key {key!r}, got {self._describe(colon)}", colon,
                )
            result[key] = self._value()

            sep = self._next()
            if sep.kind == "}":
                return result
            if sep.kind != ",":
                raise self._error(
                    f"Expected ',' or '}}' in object, got {self._describe(sep)}", sep,
                )

    def _array(self) -> list:
        result = []
        while True:
            if self.tokens[self.index].kind == "]":
                self._next()
                return result
            result.append(self._value())

            sep = self._next()
            if sep.kind == "]":
                return result
            if sep.kind != ",":
                raise self._error(
                    f"Expected ',' or ']' in array, got {self._describe(sep)}", sep,
                )


def parse_object_literal(text: str) -> Any:
    """Parse a JavaScript object-literal value into Python data.

    Raises:
        ParseError: The text is not a single well-formed literal.
    """
    return _Parser(text).parse()
