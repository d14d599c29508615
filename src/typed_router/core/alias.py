"""Aliases and the alias table.

An alias is a symbolic identifier that a registered mapper turns into a
Path, optionally using a typed context value. Only one mapper can exist per
identifier: registering it again replaces the earlier mapper.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from typed_router.core.path import Path
from typed_router.core.route import type_name
from typed_router.exceptions import AliasValidationError

logger = logging.getLogger(__name__)

C = TypeVar("C")


class AliasMatchError(Enum):
    """Why an alias could not be turned into a path."""

    NOT_FOUND = "not_found"
    CONTEXT_RETURNED_NONE = "context_returned_none"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Alias(Generic[C]):
    """A symbolic route identifier carrying the type of its context.

    ``context_type=None`` declares a context-free alias whose mapper takes
    no arguments.

    Example:
        PRODUCT = Alias("product.details", Product)
        HOME = Alias("home")
    """

    identifier: str
    context_type: type[C] | None = None

    @property
    def has_context(self) -> bool:
        return self.context_type is not None

    @property
    def description(self) -> str:
        if self.context_type is None:
            return self.identifier
        return f"{self.identifier}<{type_name(self.context_type)}>"


def _accepts(context_type: Any, context: Any) -> bool:
    """Return True if *context* is an instance of *context_type*.

    Parameterized generics (``list[int]``) are checked against their origin.
    """
    if context_type is None:
        return context is None
    if context_type is Any:
        return True
    origin = typing.get_origin(context_type) or context_type
    try:
        return isinstance(context, origin)
    except TypeError:
        return False


class AliasEntry:
    """A registered alias with its mapper, erased to ``apply(context)``."""

    __slots__ = ("alias", "mapper")

    def __init__(self, alias: Alias[Any], mapper: Callable[..., Path | str | None]) -> None:
        if not callable(mapper):
            raise AliasValidationError(
                f"Mapper for alias '{alias.identifier}' must be callable, "
                f"got {type(mapper).__name__}"
            )
        self.alias = alias
        self.mapper = mapper

    @property
    def identifier(self) -> str:
        return self.alias.identifier

    @property
    def description(self) -> str:
        return self.alias.description

    def accepts(self, context: Any) -> bool:
        return _accepts(self.alias.context_type, context)

    def apply(self, context: Any = None) -> Path | AliasMatchError:
        """Run the mapper for *context*.

        Returns:
            The mapped Path, ``NOT_FOUND`` if the context has the wrong type,
            or ``CONTEXT_RETURNED_NONE`` if the mapper produced no path.
        """
        if not self.accepts(context):
            logger.debug(
                "Alias context has unexpected type",
                extra={
                    "identifier": self.identifier,
                    "expected": type_name(self.alias.context_type),
                    "received": type(context).__name__,
                },
            )
            return AliasMatchError.NOT_FOUND

        mapped = self.mapper() if self.alias.context_type is None else self.mapper(context)
        if mapped is None:
            return AliasMatchError.CONTEXT_RETURNED_NONE
        return Path.of(mapped)

    def __repr__(self) -> str:
        return f"AliasEntry({self.description!r})"


def _identifier(alias: Alias[Any] | str) -> str:
    return alias.identifier if isinstance(alias, Alias) else alias


class AliasTable:
    """Registered aliases keyed by identifier, kept in registration order."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, AliasEntry] = {}

    def register(self, alias: Alias[Any], mapper: Callable[..., Path | str | None]) -> AliasEntry:
        """Register *mapper* for *alias*, replacing any entry with the same identifier.

        The replacement moves to the end of the registration order.

        Raises:
            AliasValidationError: If *mapper* is not callable.
        """
        entry = AliasEntry(alias, mapper)
        replaced = self._entries.pop(alias.identifier, None)
        self._entries[alias.identifier] = entry
        logger.debug(
            "Registered alias",
            extra={"alias": entry.description, "replaced": replaced is not None},
        )
        return entry

    @property
    def aliases(self) -> tuple[AliasEntry, ...]:
        """Registered entries in registration order."""
        return tuple(self._entries.values())

    @property
    def descriptions(self) -> tuple[str, ...]:
        return tuple(entry.description for entry in self._entries.values())

    def get(self, alias: Alias[Any] | str) -> AliasEntry | None:
        return self._entries.get(_identifier(alias))

    def can_match(self, alias: Alias[Any] | str) -> bool:
        """True if an entry exists for the identifier. The mapper is not run."""
        return _identifier(alias) in self._entries

    def resolve(self, alias: Alias[Any] | str, context: Any = None) -> Path | AliasMatchError:
        """Map *alias* and *context* to a path.

        Returns:
            The mapped Path, or an AliasMatchError describing the failure.
        """
        entry = self.get(alias)
        if entry is None:
            return AliasMatchError.NOT_FOUND
        return entry.apply(context)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AliasEntry]:
        return iter(self._entries.values())
