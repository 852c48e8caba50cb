"""
C-style quoting of path names, compatible with git's quote.c

A name that contains control characters, a double quote, a backslash, DEL
or any byte >= 0x80 is written between double quotes with those bytes
escaped. `\\a \\b \\t \\n \\v \\f \\r \\" \\\\` are used where they exist,
everything else becomes a three digit octal escape. Names that need no
escaping are written as-is.

Everything here works on bytes: paths come from os.fsencode so that file
names which are not valid UTF-8 survive unchanged.
"""
from typing import Dict

DOUBLE_QUOTE = ord('"')
BACKSLASH = ord("\\")

_ESCAPES: Dict[int, bytes] = {
    0x07: b"a",
    0x08: b"b",
    0x09: b"t",
    0x0A: b"n",
    0x0B: b"v",
    0x0C: b"f",
    0x0D: b"r",
    DOUBLE_QUOTE: b'"',
    BACKSLASH: b"\\",
}
_UNESCAPES: Dict[int, int] = {code[0]: byte for byte, code in _ESCAPES.items()}
_OCTAL_DIGITS = b"01234567"


def needs_quoting(byte: int) -> bool:
    return byte < 0x20 or byte == DOUBLE_QUOTE or byte == BACKSLASH or byte >= 0x7F


def quote_c_style(name: bytes, *, always: bool = False) -> bytes:
    """
    Quote `name` if any of its bytes needs it

    With always=True the result is wrapped in double quotes even when no
    byte had to be escaped.
    """
    if not always and not any(needs_quoting(byte) for byte in name):
        return name

    out = bytearray(b'"')
    for byte in name:
        if not needs_quoting(byte):
            out.append(byte)
        elif byte in _ESCAPES:
            out += b"\\" + _ESCAPES[byte]
        else:
            out += b"\\%03o" % byte
    out.append(DOUBLE_QUOTE)
    return bytes(out)


def write_name_quoted(name: bytes, terminator: bytes) -> bytes:
    """
    A record holding a single name: C-quoted when the record is newline
    terminated, raw when it is NUL terminated
    """
    if terminator == b"\0":
        return name + terminator
    return quote_c_style(name) + terminator


def unquote_c_style(quoted: bytes) -> bytes:
    """
    Decode a C-quoted name

    `quoted` must start with a double quote. Anything following the closing
    quote is ignored. Raises ValueError on a missing closing quote or an
    unknown escape sequence.
    """
    if not quoted.startswith(b'"'):
        raise ValueError("quoted name must start with a double quote")

    out = bytearray()
    i = 1
    end = len(quoted)
    while i < end:
        byte = quoted[i]
        if byte == DOUBLE_QUOTE:
            return bytes(out)
        if byte != BACKSLASH:
            out.append(byte)
            i += 1
            continue

        i += 1
        if i >= end:
            break
        escape = quoted[i]
        if escape in _UNESCAPES:
            out.append(_UNESCAPES[escape])
            i += 1
        elif escape in b"0123":
            digits = quoted[i : i + 3]
            if len(digits) != 3 or any(d not in _OCTAL_DIGITS for d in digits):
                raise ValueError(f"bad octal escape at offset {i}")
            out.append(int(digits, 8))
            i += 3
        else:
            raise ValueError(f"unknown escape '\\{chr(escape)}' at offset {i}")

    raise ValueError("missing closing double quote")
