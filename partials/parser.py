# =============================================================================
# partials/parser.py - Path Expression Parser
# =============================================================================
# Parses directive strings into Selectors.
#
# Grammar:
#   selector := segment ('.' segment)*
#   segment  := identifier | '*' | '{' identifier (',' identifier)* '}'
#
# Examples:
#   "name"                 -> [name]
#   "songs.{name,artist}"  -> [songs] [name|artist]
#   "songs.*"              -> [songs] [*]
#
# Parsing is pure, results are cached per distinct input string.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from partials.exceptions import ParseError


class SegmentKind(str, Enum):
    NAME = "name"
    WILDCARD = "wildcard"
    GROUP = "group"


@dataclass(frozen=True)
class Segment:
    """One level of a selector."""
    kind: SegmentKind
    names: tuple[str, ...] = ()

    @property
    def is_wildcard(self) -> bool:
        return self.kind == SegmentKind.WILDCARD

    def matches(self, name: str) -> bool:
        return self.is_wildcard or name in self.names

    def __str__(self) -> str:
        if self.kind == SegmentKind.WILDCARD:
            return "*"
        if self.kind == SegmentKind.GROUP:
            return "{" + ",".join(self.names) + "}"
        return self.names[0]


@dataclass(frozen=True)
class Selector:
    """
    A parsed directive.

    Example:
        parse("songs.{name,artist}").segments
        # (Segment(NAME, ('songs',)), Segment(GROUP, ('name', 'artist')))
    """
    segments: tuple[Segment, ...]

    @property
    def head(self) -> Segment:
        return self.segments[0]

    @property
    def tail(self) -> Selector | None:
        if len(self.segments) == 1:
            return None
        return Selector(self.segments[1:])

    def __str__(self) -> str:
        return ".".join(str(s) for s in self.segments)


# =============================================================================
# Parsing
# =============================================================================

def _split_outside_braces(expression: str, separator: str) -> list[str]:
    """Split on separator, ignoring separators inside brace groups."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0

    for char in expression:
        if char == "{":
            if depth > 0:
                raise ParseError(expression, "nested brace groups are not supported")
            depth += 1
        elif char == "}":
            if depth == 0:
                raise ParseError(expression, "unbalanced '}'")
            depth -= 1
        elif char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    if depth != 0:
        raise ParseError(expression, "unbalanced '{'")

    parts.append("".join(current))
    return parts


def _parse_identifier(expression: str, raw: str) -> str:
    name = raw.strip()
    if not name:
        raise ParseError(expression, "empty segment")
    if "*" in name:
        raise ParseError(expression, f"wildcard must stand alone, got '{name}'")
    if "," in name:
        raise ParseError(expression, f"unexpected ',' in '{name}', use a brace group")
    return name


def _parse_segment(expression: str, raw: str) -> Segment:
    text = raw.strip()

    if text == "*":
        return Segment(SegmentKind.WILDCARD)

    if text.startswith("{"):
        if not text.endswith("}"):
            raise ParseError(expression, f"brace group '{text}' must close the segment")
        inner = text[1:-1]
        names = tuple(_parse_identifier(expression, part) for part in inner.split(","))
        # de-duplicate, keep first occurrence order
        return Segment(SegmentKind.GROUP, tuple(dict.fromkeys(names)))

    if "{" in text or "}" in text:
        raise ParseError(expression, f"brace group must form a whole segment, got '{text}'")

    return Segment(SegmentKind.NAME, (_parse_identifier(expression, text),))


@lru_cache(maxsize=1024)
def parse(expression: str) -> Selector:
    """
    Parse a directive string into a Selector.

    Raises:
        ParseError: on an empty expression or segment, unbalanced or nested
            braces, or a misplaced wildcard
    """
    if not expression or not expression.strip():
        raise ParseError(expression, "empty expression")

    raw_segments = _split_outside_braces(expression.strip(), ".")
    return Selector(tuple(_parse_segment(expression, raw) for raw in raw_segments))


def parse_many(*expressions: str) -> list[Selector]:
    """Parse every expression before returning, so a bad one applies nothing."""
    return [parse(expression) for expression in expressions]


def split_directives(raw: str | None) -> list[str]:
    """
    Split a request value such as "name,songs.{name,artist}" into expressions.

    Commas inside brace groups do not split. Empty entries are dropped.
    """
    if not raw:
        return []

    parts: list[str] = []
    current: list[str] = []
    depth = 0

    for char in raw:
        if char == "{":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    parts.append("".join(current).strip())
    return [part for part in parts if part]
