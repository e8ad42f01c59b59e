"""
S-expression reader for KiCad custom DRC rule files.

Supports:
- Nested lists with a leading symbol as the list name
- Quoted strings with backslash escapes
- ``#`` line comments and arbitrary whitespace
- Multiple top-level forms (``(version 1)`` followed by ``(rule ...)``)

Atoms are kept as text: rule values such as ``0.127mm`` carry unit
suffixes and are interpreted by the rule builder, not the reader.

Usage::

    from gerber_drc.sexp import parse_all

    for node in parse_all(text):
        if node.name == "rule":
            print(node.first_atom)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..exceptions import ParseError

_ATOM_TERMINATORS = frozenset(' \t\n\r()"')


@dataclass
class SExp:
    """
    S-expression node.

    Either an atom (``value`` set, no name) or a list. A list whose first
    element is an unquoted atom uses that atom as its ``name``.

    Examples:
        (constraint track_width (min 0.127mm))
        -> SExp(name="constraint", children=[SExp(value="track_width"), SExp(name="min", ...)])

        "A.Type == 'track'"
        -> SExp(value="A.Type == 'track'", quoted=True)
    """

    name: Optional[str] = None
    children: list[SExp] = field(default_factory=list)
    value: Optional[str] = None
    quoted: bool = False
    line: int = 0

    @property
    def is_atom(self) -> bool:
        """True if this is a leaf node."""
        return self.value is not None

    @property
    def is_list(self) -> bool:
        """True if this is a list node."""
        return self.value is None

    @property
    def atoms(self) -> list[str]:
        """Atom values of the direct children, in order."""
        return [c.value for c in self.children if c.value is not None]

    @property
    def first_atom(self) -> Optional[str]:
        """The first atom child, or None."""
        for c in self.children:
            if c.value is not None:
                return c.value
        return None

    def get(self, name: str) -> Optional[SExp]:
        """First child list with the given name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def find_all(self, name: str) -> list[SExp]:
        """Direct child lists with the given name."""
        return [c for c in self.children if c.name == name]

    def iter_lists(self) -> Iterator[SExp]:
        """Iterate over the child lists, skipping atoms."""
        return (c for c in self.children if c.is_list)

    def to_string(self) -> str:
        """Serialize back to compact S-expression text."""
        if self.is_atom:
            return _format_atom(self.value, self.quoted)
        parts = [] if self.name is None else [self.name]
        parts.extend(child.to_string() for child in self.children)
        return "(" + " ".join(parts) + ")"

    def __repr__(self) -> str:
        if self.is_atom:
            return f"SExp(value={self.value!r})"
        return f"SExp(name={self.name!r}, children=[{len(self.children)} items])"

    # Convenience constructors
    @classmethod
    def atom(cls, value: str, quoted: bool = False) -> SExp:
        """Create an atom node."""
        return cls(value=value, quoted=quoted)

    @classmethod
    def list(cls, name: str, *children: SExp | str) -> SExp:
        """Create a list node; plain strings become unquoted atoms."""
        node = cls(name=name)
        for child in children:
            node.children.append(child if isinstance(child, SExp) else cls(value=child))
        return node


def _format_atom(value: str, quoted: bool) -> str:
    if quoted or not value or any(c in _ATOM_TERMINATORS for c in value) or "#" in value:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


class Parser:
    """S-expression parser for rule files."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def parse_all(self) -> list[SExp]:
        """Parse every top-level list.

        Reading stops at the first top-level token that does not open a
        list.
        """
        nodes: list[SExp] = []
        while True:
            self._skip_whitespace()
            if self.pos >= self.length or self.text[self.pos] != "(":
                break
            nodes.append(self._parse_list())
        return nodes

    def _error(self, message: str) -> ParseError:
        line = self.text.count("\n", 0, self.pos) + 1
        column = self.pos - (self.text.rfind("\n", 0, self.pos) + 1) + 1
        return ParseError(message, line=line, column=column)

    def _current_line(self) -> int:
        return self.text.count("\n", 0, self.pos) + 1

    def _parse_expr(self) -> SExp:
        """Parse a single S-expression."""
        self._skip_whitespace()

        if self.pos >= self.length:
            raise self._error("Unexpected end of input")

        char = self.text[self.pos]
        if char == "(":
            return self._parse_list()
        if char == '"':
            return SExp(value=self._parse_string(), quoted=True)
        if char == ")":
            raise self._error("Unexpected ')'")
        return SExp(value=self._parse_atom())

    def _parse_list(self) -> SExp:
        """Parse a list (name children...)."""
        node = SExp(line=self._current_line())
        self.pos += 1

        self._skip_whitespace()
        if self.pos < self.length and self.text[self.pos] not in '()"':
            node.name = self._parse_atom()

        while True:
            self._skip_whitespace()

            if self.pos >= self.length:
                raise self._error("Unexpected end of input, expected ')'")

            if self.text[self.pos] == ")":
                self.pos += 1
                return node

            node.children.append(self._parse_expr())

    def _parse_string(self) -> str:
        """Parse a quoted string; a backslash takes the next character literally."""
        start = self.pos
        self.pos += 1

        result = []
        while self.pos < self.length:
            char = self.text[self.pos]

            if char == '"':
                self.pos += 1
                return "".join(result)
            if char == "\\":
                self.pos += 1
                if self.pos >= self.length:
                    break
                result.append(self.text[self.pos])
            else:
                result.append(char)

            self.pos += 1

        self.pos = start
        raise self._error("Unterminated quoted string")

    def _parse_atom(self) -> str:
        """Parse an unquoted atom."""
        start = self.pos
        while self.pos < self.length and self.text[self.pos] not in _ATOM_TERMINATORS:
            self.pos += 1
        return self.text[start : self.pos]

    def _skip_whitespace(self) -> None:
        """Skip whitespace and comments."""
        while self.pos < self.length:
            char = self.text[self.pos]

            if char in " \t\n\r":
                self.pos += 1
            elif char == "#":
                while self.pos < self.length and self.text[self.pos] != "\n":
                    self.pos += 1
            else:
                break


def parse_all(text: str) -> list[SExp]:
    """Parse all top-level S-expressions in a string."""
    return Parser(text).parse_all()


def parse_string(text: str) -> SExp:
    """Parse a single S-expression list.

    Raises:
        ParseError: If the text holds no list
    """
    nodes = parse_all(text)
    if not nodes:
        raise ParseError("Expected '(' at start of input", line=1, column=1)
    return nodes[0]
