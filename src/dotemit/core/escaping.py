"""Identifier classification and string quoting for the DOT language."""

from __future__ import annotations

import re
import unicodedata
from enum import Enum
from typing import Any

from .errors import InvalidIdentifier
from .models import Arrow, Style

DOT_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})

_BARE_ID_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMERAL_RE = re.compile(r"-?(\.[0-9]+|[0-9]+(\.[0-9]*)?)")
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_ESC_TOKEN_RE = re.compile(r'\\[^\r\n]|\\|"|\r\n|\r|\n|[^\\"\r\n]+')


def is_bare_id(text: str) -> bool:
    """Check whether text may be written as an unquoted DOT identifier.

    Only the ASCII grammar is accepted; anything else (including
    non-ASCII letters and HTML-looking text) gets quoted.
    """
    if text.lower() in DOT_KEYWORDS:
        return False
    return bool(_BARE_ID_RE.fullmatch(text) or _NUMERAL_RE.fullmatch(text))


def check_text(text: str, identifier: bool = True) -> None:
    """Raise InvalidIdentifier if text has no valid quoted DOT form.

    Labels only need to be free of NUL; identifiers must also be non-empty
    and contain something other than control characters.
    """
    if "\x00" in text:
        raise InvalidIdentifier(text, "contains a NUL character")
    if not identifier:
        return
    if not text:
        raise InvalidIdentifier(text, "identifier is empty")
    if all(unicodedata.category(c) == "Cc" for c in text):
        raise InvalidIdentifier(text, "contains only control characters")


def _escape_newlines(text: str) -> str:
    return _NEWLINE_RE.sub(r"\\n", text)


def escape_string(text: str) -> str:
    """Escape arbitrary text for use inside a double-quoted DOT string."""
    return _escape_newlines(text.replace("\\", "\\\\").replace('"', '\\"'))


def escape_esc_string(text: str) -> str:
    """Escape text that may already contain DOT backslash escapes.

    A backslash followed by any character is kept as an escape pair; a lone
    trailing backslash is doubled so it cannot swallow the closing quote.
    """
    out = []
    for match in _ESC_TOKEN_RE.finditer(text):
        token = match.group()
        if token == "\\":
            out.append("\\\\")
        elif token == '"':
            out.append('\\"')
        elif token in ("\r\n", "\r", "\n"):
            out.append("\\n")
        else:
            out.append(token)
    return "".join(out)


def quote(text: str) -> str:
    return f'"{escape_string(text)}"'


def quote_id(text: str) -> str:
    """Return text as a DOT identifier token, quoting only when required."""
    check_text(text)
    if is_bare_id(text):
        return text
    return quote(text)


def quote_value(text: str) -> str:
    """Return text as an attribute value token.

    Values may be empty or contain only whitespace, unlike identifiers.
    """
    check_text(text, identifier=False)
    if is_bare_id(text):
        return text
    return quote(text)


def escape_html(text: str) -> str:
    """Escape the characters that are special inside HTML-like labels."""
    return (
        text.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


class Id:
    """A validated DOT identifier.

    The quoting decision is made once, on construction.
    """

    __slots__ = ("name", "token")

    def __init__(self, name: str):
        if isinstance(name, Id):
            name = name.name
        self.name = str(name)
        self.token = quote_id(self.name)

    @property
    def is_bare(self) -> bool:
        return self.token == self.name

    def __str__(self) -> str:
        return self.token

    def __repr__(self) -> str:
        return f"Id({self.name!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Id) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)


class LabelKind(str, Enum):
    """How label text is written."""

    LABEL = "label"
    ESCAPED = "escaped"
    HTML = "html"


class LabelText:
    """Text for a label-like attribute.

    ``LabelText.label`` quotes everything, so backslashes show up literally.
    ``LabelText.escaped`` keeps backslashes, so Graphviz escapes such as
    ``\\l`` or ``\\N`` are interpreted. ``LabelText.html`` is written between
    angle brackets without any processing.
    """

    __slots__ = ("kind", "text")

    def __init__(self, text: str, kind: LabelKind = LabelKind.LABEL):
        self.text = text
        self.kind = kind

    @classmethod
    def label(cls, text: str) -> LabelText:
        return cls(text, LabelKind.LABEL)

    @classmethod
    def escaped(cls, text: str) -> LabelText:
        return cls(text, LabelKind.ESCAPED)

    @classmethod
    def html(cls, text: str) -> LabelText:
        return cls(text, LabelKind.HTML)

    @classmethod
    def coerce(cls, value: Any) -> LabelText:
        if isinstance(value, LabelText):
            return value
        return cls.label(str(value))

    def to_dot_string(self) -> str:
        check_text(self.text, identifier=False)
        if self.kind is LabelKind.HTML:
            return f"<{self.text}>"
        if self.kind is LabelKind.ESCAPED:
            return f'"{escape_esc_string(self.text)}"'
        return quote(self.text)

    def _pre_escaped(self) -> str:
        if self.kind is LabelKind.LABEL:
            return self.text.replace("\\", "\\\\")
        return self.text

    def suffix_line(self, suffix: LabelText) -> LabelText:
        """Append suffix below this label, separated by a blank line."""
        return LabelText.escaped(self._pre_escaped() + "\\n\\n" + suffix._pre_escaped())

    def prefix_line(self, prefix: LabelText) -> LabelText:
        return prefix.suffix_line(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabelText):
            return NotImplemented
        return (self.kind, self.text) == (other.kind, other.text)

    def __hash__(self) -> int:
        return hash((self.kind, self.text))

    def __repr__(self) -> str:
        return f"LabelText.{self.kind.value}({self.text!r})"


def format_value(value: Any) -> str | None:
    """Format an attribute value as a DOT token.

    Returns None when the attribute should be left out.
    """
    if value is None:
        return None
    if isinstance(value, LabelText):
        return value.to_dot_string()
    if isinstance(value, Arrow):
        return None if value.is_default else quote(value.to_dot_string())
    if isinstance(value, Style):
        return value.value or None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, Id):
        return value.token
    return quote_value(str(value))


def check_key(key: str) -> str:
    """Validate an attribute name; DOT attribute names are plain identifiers."""
    if not isinstance(key, str) or not _BARE_ID_RE.fullmatch(key):
        raise InvalidIdentifier(str(key), "attribute names must be plain identifiers")
    if key.lower() in DOT_KEYWORDS:
        raise InvalidIdentifier(key, "DOT keywords cannot be used as attribute names")
    return key
