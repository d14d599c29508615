"""The not-found result returned when nothing matches.

Resolving a path or alias that matches nothing is not an error. The
router hands a NotFoundResult to its not-found factory and returns
whatever the factory produces. The default factory returns the
NotFoundResult unchanged, so callers can detect it with ``is_not_found``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NotFoundResult:
    """Diagnostics for a failed resolution.

    Exactly one of ``path`` and ``alias`` is set.

    Attributes:
        path: The path that matched no route.
        alias: The alias identifier that could not be mapped to a path.
        routes: Descriptions of the routes registered at the time.
        aliases: Descriptions of the aliases registered at the time.
    """

    path: str | None = None
    alias: str | None = None
    routes: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if (self.path is None) == (self.alias is None):
            raise ValueError("NotFoundResult needs exactly one of path or alias")

    @property
    def target(self) -> str:
        """The failed path or alias identifier."""
        return self.path if self.path is not None else self.alias  # type: ignore[return-value]

    @property
    def title(self) -> str:
        if self.path is not None:
            return "no route matches path"
        return "no route matches alias"

    def render(self) -> str:
        """Plain-text rendering listing the known routes and aliases."""
        lines = ["404: Not Found", self.title, self.target, "", "Known Routes"]
        lines.extend(self.routes)
        lines.extend(["", "Known Aliases"])
        lines.extend(self.aliases)
        return "\n".join(lines)

    def __str__(self) -> str:
        return f"404: {self.title} '{self.target}'"


NotFoundFactory = Callable[[NotFoundResult], Any]


def default_not_found(result: NotFoundResult) -> NotFoundResult:
    return result


def is_not_found(result: Any) -> bool:
    """Return True if *result* came from a failed resolution."""
    return isinstance(result, NotFoundResult)
