"""Static test declaration scanner for JavaScript/TypeScript sources.

Finds ``test('title', ...)`` style declarations without evaluating the file.
Sources are parsed with Tree-sitter, so declarations inside comments,
strings, template literals or regex literals are never reported.

Recognized forms:
- test('title', fn) / it('title', fn)
- test.only / test.skip / test.fixme / test.fail with a literal title

Ignored: test.describe, hooks, test.use, test.step, and any call whose first
argument is not a string literal (e.g. ``test.skip(({ browserName }) => ...)``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from traceproject.core.errors import ScanError

TEST_FUNCTIONS = frozenset({"test", "it"})
TEST_MODIFIERS = frozenset({"only", "skip", "fixme", "fail"})

# Extension -> grammar name
_GRAMMARS = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}
_DEFAULT_GRAMMAR = "javascript"

_ESCAPE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)",
    re.DOTALL,
)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})
_SURROGATE_PAIR = re.compile("[\ud800-\udbff][\udc00-\udfff]")

_languages: dict[str, Any] = {}


@dataclass
class SourceLocation:
    """1-based position of a declaration. line is None when unknown."""

    file: str
    line: int | None = None
    column: int | None = None


@dataclass
class ParsedTest:
    """A test declaration found by the scanner."""

    title: str
    location: SourceLocation


@dataclass
class ParsedFile:
    """Scanner output for one source file."""

    path: str
    test_id_attribute: str
    tests: list[ParsedTest] = field(default_factory=list)


def _get_language(grammar: str) -> Any:
    if grammar not in _languages:
        if grammar == "typescript":
            handle = tree_sitter_typescript.language_typescript()
        elif grammar == "tsx":
            handle = tree_sitter_typescript.language_tsx()
        else:
            handle = tree_sitter_javascript.language()
        _languages[grammar] = tree_sitter.Language(handle)
    return _languages[grammar]


def _grammar_for(file_path: str) -> str:
    return _GRAMMARS.get(PurePosixPath(file_path).suffix.lower(), _DEFAULT_GRAMMAR)


def _decode_escape(match: re.Match[str]) -> str:
    seq = match.group(1)
    if seq in _LINE_CONTINUATIONS:
        return ""
    if seq.startswith("u{"):
        code = int(seq[2:-1], 16)
        return chr(code) if code <= 0x10FFFF else "\ufffd"
    if seq[0] in "ux" and len(seq) > 1:
        return chr(int(seq[1:], 16))
    return _SIMPLE_ESCAPES.get(seq, seq)


def _join_surrogates(match: re.Match[str]) -> str:
    high, low = (ord(ch) for ch in match.group(0))
    return chr(0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00))


def decode_string_literal(raw: str) -> str:
    """Decode the body of a JS string literal (quotes already stripped).

    ``\\uXXXX`` surrogate pairs are joined into a single code point; lone
    surrogates are kept as-is.
    """
    text = _ESCAPE.sub(_decode_escape, raw)
    return _SURROGATE_PAIR.sub(_join_surrogates, text)


def _node_text(node: Any) -> str:
    return node.text.decode("utf-8") if node.text else ""


def _first_error(node: Any) -> Any:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            return _first_error(child)
    return node


def _is_test_callee(node: Any) -> bool:
    if node.type == "identifier":
        return _node_text(node) in TEST_FUNCTIONS
    if node.type != "member_expression":
        return False
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    return (
        obj is not None
        and prop is not None
        and obj.type == "identifier"
        and _node_text(obj) in TEST_FUNCTIONS
        and _node_text(prop) in TEST_MODIFIERS
    )


def _literal_title(call: Any) -> str | None:
    """Return the decoded first argument of call if it is a plain string literal."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return None
    args = [c for c in arguments.named_children if c.type != "comment"]
    if not args:
        return None
    first = args[0]
    if first.type == "template_string":
        if any(c.type == "template_substitution" for c in first.named_children):
            return None
    elif first.type != "string":
        return None
    return decode_string_literal(_node_text(first)[1:-1])


def parse(source: str, file_path: str, test_id_attribute: str) -> ParsedFile:
    """Scan source text for test declarations.

    Args:
        source: Full file text
        file_path: Logical path, recorded in every location
        test_id_attribute: DOM attribute used by test-id locators in this project

    Returns:
        ParsedFile with tests in source order

    Raises:
        ScanError: If the source does not parse as JavaScript/TypeScript
    """
    content = source.encode("utf-8")
    parser = tree_sitter.Parser()
    parser.language = _get_language(_grammar_for(file_path))
    tree = parser.parse(content)

    if tree.root_node.has_error:
        error = _first_error(tree.root_node)
        reason = f"missing {error.type}" if error.is_missing else "syntax error"
        raise ScanError.syntax_error(file_path, error.start_point[0] + 1, reason)

    tests: list[ParsedTest] = []
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "call_expression":
            callee = node.child_by_field_name("function")
            title = _literal_title(node) if callee is not None and _is_test_callee(callee) else None
            if title is not None:
                row, byte_col = node.start_point
                line_start = node.start_byte - byte_col
                column = len(content[line_start : node.start_byte].decode("utf-8")) + 1
                tests.append(
                    ParsedTest(
                        title=title,
                        location=SourceLocation(file=file_path, line=row + 1, column=column),
                    )
                )
        stack.extend(reversed(node.children))

    return ParsedFile(path=file_path, test_id_attribute=test_id_attribute, tests=tests)
