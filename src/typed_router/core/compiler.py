"""Template compiler for typed routing.

Converts path patterns into regular expression matchers:
- literal        -> escaped verbatim
- :placeholder   -> (?P<pN>fragment) using the placeholder codec's fragment

The generated expression must match the whole candidate, so segment
boundaries always line up. Placeholders are positional; their names are
kept for descriptions only.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from typed_router.core.codec import PlaceholderCodec
from typed_router.core.path import SEPARATOR
from typed_router.exceptions import TemplateError

logger = logging.getLogger(__name__)

PLACEHOLDER_MARKER = ":"


class SegmentType(Enum):
    """Type of a template segment."""

    LITERAL = "literal"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class TemplateSegment:
    """A parsed template segment with type and name."""

    name: str
    segment_type: SegmentType
    original: str

    @property
    def is_placeholder(self) -> bool:
        return self.segment_type == SegmentType.PLACEHOLDER

    def to_pattern_segment(self) -> str:
        """Convert this segment back to template syntax.

        Examples:
            LITERAL "users" -> "users"
            PLACEHOLDER "id" -> ":id"
        """
        match self.segment_type:
            case SegmentType.LITERAL:
                return self.name
            case SegmentType.PLACEHOLDER:
                return f"{PLACEHOLDER_MARKER}{self.name}"


def parse_segment(segment: str) -> TemplateSegment:
    """Parse a single template segment.

    Raises:
        TemplateError: If the segment is a placeholder marker with no name.

    Examples:
        "users" -> TemplateSegment(name="users", segment_type=LITERAL, ...)
        ":id"   -> TemplateSegment(name="id", segment_type=PLACEHOLDER, ...)
        ""      -> TemplateSegment(name="", segment_type=LITERAL, ...)
    """
    if segment.startswith(PLACEHOLDER_MARKER):
        name = segment[len(PLACEHOLDER_MARKER) :]
        if not name:
            raise TemplateError(f"Placeholder segment '{segment}' is missing a name")
        return TemplateSegment(name=name, segment_type=SegmentType.PLACEHOLDER, original=segment)

    return TemplateSegment(name=segment, segment_type=SegmentType.LITERAL, original=segment)


def parse_template(pattern: str) -> tuple[TemplateSegment, ...]:
    """Parse a pattern into its segments, empty segments included.

    Examples:
        "users/:id" -> (LITERAL("users"), PLACEHOLDER("id"))
        "/home"     -> (LITERAL(""), LITERAL("home"))
    """
    return tuple(parse_segment(part) for part in pattern.split(SEPARATOR))


def placeholder_count(pattern: str) -> int:
    """Return the number of placeholder segments in *pattern*."""
    return sum(1 for segment in parse_template(pattern) if segment.is_placeholder)


def segments_to_pattern(segments: Sequence[TemplateSegment]) -> str:
    """Join segments back into a pattern string."""
    return SEPARATOR.join(segment.to_pattern_segment() for segment in segments)


def _group_name(index: int) -> str:
    return f"p{index}"


def build_expression(
    segments: Sequence[TemplateSegment],
    codecs: Sequence[PlaceholderCodec],
) -> str:
    """Build the regular expression source for parsed segments.

    Each placeholder is replaced, in order, by the fragment of the codec
    at the same position.
    """
    parts: list[str] = []
    index = 0
    for segment in segments:
        if segment.is_placeholder:
            parts.append(f"(?P<{_group_name(index)}>{codecs[index].pattern})")
            index += 1
        else:
            parts.append(re.escape(segment.name))
    return SEPARATOR.join(parts)


class CompiledMatcher:
    """A compiled pattern that validates candidates and extracts typed values.

    If the expression fails to compile the matcher is kept but never
    matches, so one bad template cannot take a whole router down.
    """

    __slots__ = ("_regex", "codecs", "pattern", "segments")

    def __init__(
        self,
        pattern: str,
        segments: tuple[TemplateSegment, ...],
        codecs: tuple[PlaceholderCodec, ...],
        regex: re.Pattern[str] | None,
    ) -> None:
        self.pattern = pattern
        self.segments = segments
        self.codecs = codecs
        self._regex = regex

    @property
    def arity(self) -> int:
        return len(self.codecs)

    @property
    def is_valid(self) -> bool:
        """False when the expression could not be compiled."""
        return self._regex is not None

    @property
    def expression(self) -> str | None:
        return self._regex.pattern if self._regex is not None else None

    @property
    def signature(self) -> str:
        """Human-readable ``pattern (type, ...)`` text."""
        types = ", ".join(codec.type_name for codec in self.codecs)
        return f"{self.pattern} ({types})"

    def match(self, candidate: str) -> tuple[Any, ...] | None:
        """Return the decoded placeholder values, or None if *candidate* doesn't match.

        A decode failure in any placeholder fails the whole match.
        """
        if self._regex is None:
            return None

        found = self._regex.fullmatch(candidate)
        if found is None:
            return None

        values: list[Any] = []
        for index, codec in enumerate(self.codecs):
            try:
                values.append(codec.decode(found.group(_group_name(index))))
            except ValueError:
                return None
        return tuple(values)

    def __repr__(self) -> str:
        return f"CompiledMatcher({self.signature!r})"


def compile_pattern(
    pattern: str,
    codecs: Sequence[PlaceholderCodec],
    *,
    case_sensitive: bool = False,
) -> CompiledMatcher:
    """Compile *pattern* into a matcher using one codec per placeholder.

    Args:
        pattern: Template pattern, e.g. ``"product/:id"``.
        codecs: Codecs for the placeholders, in pattern order.
        case_sensitive: Match literal segments case-sensitively.

    Returns:
        A CompiledMatcher. If the generated expression is invalid a warning
        is logged and the matcher never matches.

    Raises:
        TemplateError: If the placeholder count differs from the number of
            codecs, or a placeholder has no name.
    """
    segments = parse_template(pattern)
    codecs = tuple(codecs)

    count = sum(1 for segment in segments if segment.is_placeholder)
    if count != len(codecs):
        raise TemplateError(
            f"Template '{pattern}' has {count} placeholder(s) "
            f"but {len(codecs)} type(s) were given"
        )

    expression = build_expression(segments, codecs)
    flags = 0 if case_sensitive else re.IGNORECASE

    try:
        regex: re.Pattern[str] | None = re.compile(expression, flags)
    except re.error as exc:
        logger.warning(
            "Could not create matcher expression",
            extra={"pattern": pattern, "expression": expression, "error": str(exc)},
        )
        regex = None

    return CompiledMatcher(pattern, segments, codecs, regex)
