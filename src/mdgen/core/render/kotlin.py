"""Kotlin source text helpers: string literals and block layout"""

import textwrap


INDENT = "    "

_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '$': '\\$',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}


def kotlin_string(text: str) -> str:
    """Return text as a double-quoted Kotlin string literal ('$' is escaped to block templates)."""
    return '"' + ''.join(_ESCAPES.get(ch, ch) for ch in text) + '"'


def indent(text: str) -> str:
    return textwrap.indent(text, INDENT)


def block(head: str, body: str) -> str:
    """Wrap body in a trailing-lambda call: 'head {\\n    body\\n}'."""
    if not body:
        return f"{head} {{}}"
    return f"{head} {{\n{indent(body)}\n}}"
