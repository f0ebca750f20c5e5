"""
Inline markup helpers for groff man output.

Descriptions may use the `name' convention to mark words that should
be emphasized; format_for_man() turns those spans into bold runs.
"""

from typing import Iterable, TextIO

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def man_quote(s: str) -> str:
    """Escape the groff escape character."""
    return s.replace("\\", "\\\\")


def format_for_man(wr: TextIO, s: str) -> None:
    """Write s to wr, rendering `span' pairs as bold runs.

    Each plain or bold segment is escaped on its own. An opening backtick
    without a closing apostrophe is written out literally.
    """
    while True:
        idx = s.find("`")
        if idx < 0:
            wr.write(man_quote(s))
            return

        wr.write(man_quote(s[:idx]))
        s = s[idx:]

        end = s.find("'", 1)
        if end < 0:
            wr.write(man_quote(s))
            return

        wr.write(f"\\fB{man_quote(s[1:end])}\\fP")
        s = s[end + 1:]


def quote_value(value: str) -> str:
    """Quote a value as a double-quoted string literal.

    Printable characters pass through; quotes, backslashes and control
    characters are backslash-escaped.
    """
    out = ['"']
    for ch in value:
        if ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    out.append('"')
    return "".join(out)


def join_quoted(values: Iterable[str]) -> str:
    """Quote every value and join them with ", "."""
    return ", ".join(quote_value(v) for v in values)
