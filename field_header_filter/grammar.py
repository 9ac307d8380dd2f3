"""Parser for the inclusion/exclusion field list grammar.

Both the `Attributes` and the `Attributes-Excluded` headers use the same
notation. Fields are written in dot notation (`a.b, a.c`), in parenthesized
set notation (`a(b, c)`), or any mix of the two. A `*` inside parentheses
selects every field at that level, e.g. `a(x(*))`.

    field-list      ::= field (',' field)*
    field           ::= name ('.' field | field-set)?
    field-set       ::= '(' field-set-list ')'
    field-set-list  ::= '*' (',' field)* | field (',' field)*

`*` is never accepted as a top-level selector: at least one named field has
to come first.
"""
from __future__ import annotations

from typing import List, Optional

from .errors import FieldListSyntaxError
from .paths import WILDCARD, FieldPath

_DELIMITERS = frozenset('.,()')


def parse_field_list(text: Optional[str]) -> List[FieldPath]:
    """Parse a field list into an ordered list of field paths.

    Set notation is expanded with its enclosing prefix, so `a(b, c)` yields
    `[('a', 'b'), ('a', 'c')]`. Duplicates are kept. Blank input yields `[]`.

    Raises FieldListSyntaxError on any grammar violation; positions are UTF-8
    byte offsets into the trimmed input.
    """
    if text is None:
        return []
    trimmed = text.strip()
    if not trimmed:
        return []

    parser = _FieldListParser(trimmed)
    try:
        return parser.parse()
    except RecursionError:
        raise parser._error(f"Field list nested too deeply at position {parser._offset()}") from None


class _FieldListParser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def parse(self) -> List[FieldPath]:
        paths: List[FieldPath] = []
        self._collect_field((), paths)
        while self._peek() == ',':
            self._advance()
            self._collect_field((), paths)

        if self._peek() is not None:
            raise self._error(f"Unexpected character '{self.text[self.pos]}' at position {self._offset()}")
        return paths

    def _collect_field(self, prefix: FieldPath, out: List[FieldPath]) -> None:
        """field ::= name ('.' field | field-set)?

        Dotted segments are read in a loop; only a field-set recurses. One
        field may expand to several paths when it ends in a field-set.
        """
        path = prefix
        while True:
            self._skip_whitespace()
            start = self.pos
            name = self._parse_name()

            if name == WILDCARD:
                if not path:
                    raise FieldListSyntaxError(
                        f"'*' wildcard not allowed as a top-level selector (position {self._offset(start)}). "
                        "Name a field first, e.g. A(*).",
                        self._offset(start),
                        WILDCARD,
                        self.text,
                    )
                if self._peek() in ('.', '('):
                    raise self._error(f"'*' must be the last segment of a field (position {self._offset()})")
                out.append(path + (WILDCARD,))
                return

            path = path + (name,)
            if self._peek() != '.':
                break
            self._advance()

        if self._peek() == '(':
            self._advance()
            self._collect_field_set(path, out)
            self._expect(')')
        else:
            out.append(path)

    def _collect_field_set(self, prefix: FieldPath, out: List[FieldPath]) -> None:
        """field-set-list ::= '*' (',' field)* | field (',' field)*"""
        self._collect_field(prefix, out)
        while self._peek() == ',':
            self._advance()
            self._collect_field(prefix, out)

    def _parse_name(self) -> str:
        self._skip_whitespace()
        start = self.pos
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch.isspace() or ch in _DELIMITERS:
                break
            self.pos += 1

        if self.pos == start:
            raise self._error(f"Expected field name at position {self._offset()}, got {self._describe_current()}")
        return self.text[start:self.pos]

    # Lexer helpers

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _peek(self) -> Optional[str]:
        self._skip_whitespace()
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def _advance(self) -> None:
        self._skip_whitespace()
        self.pos += 1

    def _expect(self, ch: str) -> None:
        if self._peek() != ch:
            raise self._error(f"Expected '{ch}' at position {self._offset()}, got {self._describe_current()}")
        self.pos += 1

    def _offset(self, pos: Optional[int] = None) -> int:
        """UTF-8 byte offset of a character index."""
        if pos is None:
            pos = self.pos
        return len(self.text[:pos].encode('utf-8', 'surrogatepass'))

    def _describe_current(self) -> str:
        if self.pos < len(self.text):
            return f"'{self.text[self.pos]}'"
        return 'end of input'

    def _error(self, message: str) -> FieldListSyntaxError:
        current = self.text[self.pos] if self.pos < len(self.text) else None
        return FieldListSyntaxError(message, self._offset(), current, self.text)
