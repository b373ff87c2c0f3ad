"""Read and write release configs authored as JavaScript modules.

Only the static subset used by configuration files is understood:

    'use strict';
    const assets = ['Cargo.toml', 'CHANGELOG.md'];
    module.exports = { branches: ['main'], plugins: [...] };

Object/array literals, quoted strings, numbers, booleans, null, comments,
trailing commas and references to earlier `const`/`let`/`var` literals are
accepted. Anything that needs a JS runtime (calls, `require`, spread,
interpolated template literals) is rejected with a position.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Literal

from relcfg.core.result import Err, Ok, Result

__all__ = [
    "JsSyntaxError",
    "JsModule",
    "JsModuleStyle",
    "parse_js_config",
    "parse_js_module",
    "render_js_module",
]

JsModuleStyle = Literal["cjs", "esm"]

_IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*")
_NUMBER_RE = re.compile(
    r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)
_PUNCT = "{}[]:,;=.()+-"
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_INLINE_WIDTH = 80


@dataclass(frozen=True, slots=True)
class JsSyntaxError:
    message: str
    line: int
    column: int

    def pretty(self) -> str:
        return f"line {self.line}, column {self.column}: {self.message}"


@dataclass(frozen=True, slots=True)
class _Token:
    kind: Literal["punct", "string", "number", "ident", "spread", "eof"]
    value: str
    line: int
    column: int


class _Failure(Exception):
    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(message)
        self.error = JsSyntaxError(message, line, column)


class _Lexer:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.line_start = 0

    @property
    def column(self) -> int:
        return self.pos - self.line_start + 1

    def fail(self, message: str) -> _Failure:
        return _Failure(message, self.line, self.column)

    def _advance(self, n: int = 1) -> None:
        for _ in range(n):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.line_start = self.pos + 1
            self.pos += 1

    def _skip_trivia(self) -> None:
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace():
                self._advance()
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self._advance((len(text) if end == -1 else end) - self.pos)
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                if end == -1:
                    raise self.fail("unterminated block comment")
                self._advance(end + 2 - self.pos)
            else:
                return

    def tokens(self) -> list[_Token]:
        out: list[_Token] = []
        while True:
            self._skip_trivia()
            line, column = self.line, self.column
            if self.pos >= len(self.text):
                out.append(_Token("eof", "", line, column))
                return out

            ch = self.text[self.pos]
            if ch in "'\"`":
                out.append(_Token("string", self._string(ch), line, column))
            elif self.text.startswith("...", self.pos):
                out.append(_Token("spread", "...", line, column))
                self._advance(3)
            elif ch.isdigit() or (ch == "." and self._peek_char(1).isdigit()):
                match = _NUMBER_RE.match(self.text, self.pos)
                if match is None:
                    raise self.fail(f"invalid number near {ch!r}")
                out.append(_Token("number", match.group(0), line, column))
                self._advance(match.end() - self.pos)
            elif ch in _PUNCT:
                out.append(_Token("punct", ch, line, column))
                self._advance()
            else:
                match = _IDENT_RE.match(self.text, self.pos)
                if match is None:
                    raise self.fail(f"unexpected character {ch!r}")
                out.append(_Token("ident", match.group(0), line, column))
                self._advance(match.end() - self.pos)

    def _peek_char(self, offset: int) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def _string(self, quote: str) -> str:
        self._advance()
        chars: list[str] = []
        while True:
            if self.pos >= len(self.text):
                raise self.fail("unterminated string")
            ch = self.text[self.pos]
            if ch == quote:
                self._advance()
                return "".join(chars)
            if ch == "\n" and quote != "`":
                raise self.fail("newline in string literal")
            if quote == "`" and self.text.startswith("${", self.pos):
                raise self.fail("template literal interpolation needs a JS runtime")
            if ch == "\\":
                chars.append(self._escape())
                continue
            chars.append(ch)
            self._advance()

    def _escape(self) -> str:
        self._advance()
        if self.pos >= len(self.text):
            raise self.fail("unterminated escape sequence")
        ch = self.text[self.pos]
        if ch == "\n":
            self._advance()
            return ""
        if ch in _SIMPLE_ESCAPES:
            self._advance()
            return _SIMPLE_ESCAPES[ch]
        if ch == "x":
            return self._hex_escape(2)
        if ch == "u":
            if self._peek_char(1) == "{":
                end = self.text.find("}", self.pos)
                if end == -1:
                    raise self.fail("unterminated unicode escape")
                digits = self.text[self.pos + 2 : end]
                self._advance(end + 1 - self.pos)
                return self._codepoint(digits)
            return self._hex_escape(4)
        self._advance()
        return ch

    def _hex_escape(self, width: int) -> str:
        digits = self.text[self.pos + 1 : self.pos + 1 + width]
        self._advance(1 + len(digits))
        if len(digits) != width:
            raise self.fail("truncated escape sequence")
        return self._codepoint(digits)

    def _codepoint(self, digits: str) -> str:
        try:
            return chr(int(digits, 16))
        except ValueError:
            raise self.fail(f"invalid escape digits {digits!r}") from None


class _Parser:
    def __init__(self, tokens: list[_Token]) -> None:
        self.tokens = tokens
        self.index = 0
        self.bindings: dict[str, object] = {}
        self.style: JsModuleStyle = "cjs"

    @property
    def current(self) -> _Token:
        return self.tokens[self.index]

    def fail(self, message: str, token: _Token | None = None) -> _Failure:
        tok = token or self.current
        return _Failure(message, tok.line, tok.column)

    def next(self) -> _Token:
        tok = self.tokens[self.index]
        if tok.kind != "eof":
            self.index += 1
        return tok

    def at(self, kind: str, value: str | None = None) -> bool:
        tok = self.current
        return tok.kind == kind and (value is None or tok.value == value)

    def expect(self, kind: str, value: str | None = None) -> _Token:
        if not self.at(kind, value):
            wanted = value or kind
            found = self.current.value or self.current.kind
            raise self.fail(f"expected {wanted!r}, found {found!r}")
        return self.next()

    def skip_semicolons(self) -> None:
        while self.at("punct", ";"):
            self.next()

    def module(self) -> object:
        self.skip_semicolons()
        if self.at("string", "use strict"):
            self.next()
            self.skip_semicolons()

        exported: object = None
        found = False
        while not self.at("eof"):
            if self.at("ident", "const") or self.at("ident", "let") or self.at("ident", "var"):
                self._declaration()
            elif self.at("ident", "module"):
                if found:
                    raise self.fail("config is exported more than once")
                self.next()
                self.expect("punct", ".")
                self.expect("ident", "exports")
                self.expect("punct", "=")
                exported, found = self.value(), True
            elif self.at("ident", "export"):
                if found:
                    raise self.fail("config is exported more than once")
                self.next()
                self.expect("ident", "default")
                self.style = "esm"
                exported, found = self.value(), True
            else:
                raise self.fail(f"unsupported statement starting with {self.current.value!r}")
            self.skip_semicolons()

        if not found:
            raise self.fail("no 'module.exports =' or 'export default' found")
        return exported

    def _declaration(self) -> None:
        self.next()
        while True:
            name = self.expect("ident")
            self.expect("punct", "=")
            self.bindings[name.value] = self.value()
            if not self.at("punct", ","):
                return
            self.next()

    def value(self) -> object:
        tok = self.current
        if tok.kind == "punct" and tok.value == "{":
            return self._object()
        if tok.kind == "punct" and tok.value == "[":
            return self._array()
        if tok.kind == "string":
            self.next()
            return tok.value
        if tok.kind == "number" or (tok.kind == "punct" and tok.value in "+-"):
            return self._number()
        if tok.kind == "spread":
            raise self.fail("spread syntax needs a JS runtime")
        if tok.kind == "ident":
            return self._identifier()
        raise self.fail(f"unexpected {tok.value or tok.kind!r}")

    def _identifier(self) -> object:
        tok = self.next()
        match tok.value:
            case "true":
                return True
            case "false":
                return False
            case "null":
                return None
        if self.at("punct", "(") or self.at("punct", "."):
            raise self.fail(f"'{tok.value}' expression needs a JS runtime", tok)
        if tok.value in self.bindings:
            return self.bindings[tok.value]
        raise self.fail(f"unknown identifier {tok.value!r}", tok)

    def _number(self) -> int | float:
        sign = 1
        while self.at("punct", "+") or self.at("punct", "-"):
            if self.next().value == "-":
                sign = -sign
        tok = self.expect("number")
        text = tok.value.lower()
        if text.startswith(("0x", "0o", "0b")):
            return sign * int(text, 0)
        if re.fullmatch(r"\d+", text):
            return sign * int(text)
        return sign * float(text)

    def _array(self) -> list[object]:
        self.expect("punct", "[")
        items: list[object] = []
        while not self.at("punct", "]"):
            items.append(self.value())
            if not self.at("punct", ","):
                break
            self.next()
        self.expect("punct", "]")
        return items

    def _object(self) -> dict[str, object]:
        self.expect("punct", "{")
        out: dict[str, object] = {}
        while not self.at("punct", "}"):
            key_tok = self.next()
            if key_tok.kind in ("ident", "string"):
                key = key_tok.value
            elif key_tok.kind == "number":
                key = key_tok.value
            elif key_tok.kind == "spread":
                raise self.fail("spread syntax needs a JS runtime", key_tok)
            else:
                raise self.fail(f"invalid object key {key_tok.value!r}", key_tok)

            if key_tok.kind == "ident" and (self.at("punct", ",") or self.at("punct", "}")):
                if key not in self.bindings:
                    raise self.fail(f"unknown identifier {key!r}", key_tok)
                out[key] = self.bindings[key]
            else:
                if self.at("punct", "("):
                    raise self.fail("methods need a JS runtime")
                self.expect("punct", ":")
                out[key] = self.value()

            if not self.at("punct", ","):
                break
            self.next()
        self.expect("punct", "}")
        return out


@dataclass(frozen=True, slots=True)
class JsModule:
    """Exported literal plus the export form it was written with."""

    value: object
    style: JsModuleStyle


def parse_js_config(text: str) -> Result[JsModule, JsSyntaxError]:
    try:
        parser = _Parser(_Lexer(text).tokens())
        value = parser.module()
    except _Failure as e:
        return Err(e.error)
    return Ok(JsModule(value=value, style=parser.style))


def parse_js_module(text: str) -> Result[object, JsSyntaxError]:
    """Evaluate the exported literal of a static JS config module."""
    return parse_js_config(text).map(lambda module: module.value)


def _quote(value: str, quote: str) -> str:
    out: list[str] = [quote]
    for ch in value:
        if ch == "\\":
            out.append("\\\\")
        elif ch == quote:
            out.append("\\" + ch)
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ord(ch) < 0x20 or ch in "\u2028\u2029":
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    out.append(quote)
    return "".join(out)


def _key(key: object, quote: str) -> str:
    text = str(key)
    if _IDENT_RE.fullmatch(text):
        return text
    return _quote(text, quote)


def _scalar(value: object, quote: str) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"cannot render non-finite number: {value}")
        return json.dumps(value)
    if isinstance(value, str):
        return _quote(value, quote)
    raise ValueError(f"cannot render {type(value).__name__} as a JS literal")


def _render(value: object, level: int, indent: int, quote: str) -> str:
    pad = " " * (indent * (level + 1))
    end_pad = " " * (indent * level)

    if isinstance(value, dict):
        if not value:
            return "{}"
        lines = [
            f"{pad}{_key(k, quote)}: {_render(v, level + 1, indent, quote)},"
            for k, v in value.items()
        ]
        return "{\n" + "\n".join(lines) + f"\n{end_pad}}}"

    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        if all(not isinstance(item, (dict, list, tuple)) for item in value):
            inline = "[" + ", ".join(_scalar(item, quote) for item in value) + "]"
            if len(pad) + len(inline) <= _INLINE_WIDTH:
                return inline
        lines = [f"{pad}{_render(item, level + 1, indent, quote)}," for item in value]
        return "[\n" + "\n".join(lines) + f"\n{end_pad}]"

    return _scalar(value, quote)


def render_js_module(
    value: object,
    *,
    style: JsModuleStyle = "cjs",
    indent: int = 2,
    quote: str = "'",
) -> str:
    """Render value as a JS config module.

    Raises:
        ValueError: If value contains something that has no JS literal form.
    """
    head = "module.exports = " if style == "cjs" else "export default "
    return f"{head}{_render(value, 0, indent, quote)};\n"
