"""Incremental, typed template builder.

Builds a Template one segment at a time while tracking the placeholder
types. Every ``placeholder`` call returns a builder whose type parameters
grow by one, so the final ``template()`` is statically typed::

    template = (
        TemplateBuilder.start()
        .path("product", "list")
        .placeholder("category", str)
        .placeholder("page", int)
        .template()
    )
    # template: Template[str, int]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, TypeVarTuple, Unpack

from typed_router.core.compiler import PLACEHOLDER_MARKER
from typed_router.core.path import SEPARATOR
from typed_router.core.template import Template

Ts = TypeVarTuple("Ts")
T = TypeVar("T")


@dataclass(frozen=True)
class TemplateBuilder(Generic[Unpack[Ts]]):
    """An immutable builder holding the segments and types gathered so far.

    Attributes:
        components: Pattern segments in order, placeholders as ``:name``.
        types: Placeholder types in order.
    """

    components: tuple[str, ...] = ()
    types: tuple[type, ...] = ()

    @staticmethod
    def start() -> "TemplateBuilder[()]":
        """Return an empty builder (no segments, no placeholders)."""
        return TemplateBuilder()

    @property
    def arity(self) -> int:
        return len(self.types)

    @property
    def pattern(self) -> str:
        return SEPARATOR.join(self.components)

    def path(self, *segments: str) -> "TemplateBuilder[Unpack[Ts]]":
        """Append literal segments."""
        return TemplateBuilder(self.components + segments, self.types)

    def placeholder(self, name: str, value_type: type[T]) -> "TemplateBuilder[Unpack[Ts], T]":
        """Append a placeholder segment named *name* of type *value_type*."""
        return TemplateBuilder(
            self.components + (f"{PLACEHOLDER_MARKER}{name}",),
            self.types + (value_type,),
        )

    def template(self, *, case_sensitive: bool = False) -> Template[Unpack[Ts]]:
        """Compile the accumulated segments into a Template."""
        return Template(self.pattern, *self.types, case_sensitive=case_sensitive)

    def __repr__(self) -> str:
        if not self.components:
            return "TemplateBuilder()"
        return f'TemplateBuilder(path: "{self.pattern}")'


def start() -> "TemplateBuilder[()]":
    """Shortcut for ``TemplateBuilder.start()``."""
    return TemplateBuilder.start()
