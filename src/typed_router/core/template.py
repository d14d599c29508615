"""Compiled, typed path templates.

A Template couples a pattern such as ``"product/:category/:id"`` with the
types of its placeholders. It can match candidate paths, producing a tuple
of typed values, and generate paths from typed values.

The placeholder types are a PEP 646 type variable tuple, so
``Template[str, int]`` matches into ``tuple[str, int]`` and generates
paths from ``(str, int)``.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVarTuple, Unpack

from typed_router.core.codec import codec_for
from typed_router.core.compiler import CompiledMatcher, compile_pattern
from typed_router.core.path import SEPARATOR, Path

logger = logging.getLogger(__name__)

Ts = TypeVarTuple("Ts")


class Template(Generic[Unpack[Ts]]):
    """An immutable compiled path template.

    Usage::

        template = Template[str, int]("product/:category/:id", str, int)
        template.match("product/hats/42")  # ("hats", 42)
        template.path("boots", 7)          # Path("product/boots/7")

    Raises:
        TemplateError: If the number of types differs from the number of
            placeholders in the pattern.
    """

    __slots__ = ("_matcher", "case_sensitive", "pattern", "types")

    def __init__(self, pattern: str, *types: type, case_sensitive: bool = False) -> None:
        self.pattern = pattern
        self.types: tuple[type, ...] = types
        self.case_sensitive = case_sensitive
        self._matcher: CompiledMatcher = compile_pattern(
            pattern,
            [codec_for(value_type) for value_type in types],
            case_sensitive=case_sensitive,
        )

    @property
    def arity(self) -> int:
        return len(self.types)

    @property
    def matcher(self) -> CompiledMatcher:
        return self._matcher

    @property
    def signature(self) -> str:
        return self._matcher.signature

    def match(self, candidate: Path | str) -> tuple[Unpack[Ts]] | None:
        """Return the typed placeholder values if *candidate* matches, else None."""
        return self._matcher.match(str(candidate))  # type: ignore[return-value]

    def matches(self, candidate: Path | str) -> bool:
        return self.match(candidate) is not None

    def path(self, *values: Unpack[Ts]) -> Path:
        """Generate a path by substituting *values* into the placeholders.

        Values are encoded with each placeholder's codec, left to right.
        Surplus values are ignored. With too few values a warning is logged
        and the empty path is returned.
        """
        if len(values) < self.arity:
            logger.warning(
                "Not enough values to form path from template",
                extra={"pattern": self.pattern, "expected": self.arity, "given": len(values)},
            )
            return Path("")

        parts: list[str] = []
        index = 0
        for segment in self._matcher.segments:
            if segment.is_placeholder:
                value: Any = values[index]
                parts.append(self._matcher.codecs[index].encode(value))
                index += 1
            else:
                parts.append(segment.name)
        return Path(SEPARATOR.join(parts))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Template):
            return NotImplemented
        return (self.pattern, self.types, self.case_sensitive) == (
            other.pattern,
            other.types,
            other.case_sensitive,
        )

    def __hash__(self) -> int:
        return hash((self.pattern, self.types, self.case_sensitive))

    def __repr__(self) -> str:
        return f"Template({self.signature!r})"
