"""Router delegate hooks.

A delegate observes every resolution the router performs. For each call
the router sends exactly one ``will_match_*`` followed by exactly one of
``did_match_*`` or ``failed_to_match_*``. Durations are in seconds.

The router holds its delegate weakly: keep a reference to it yourself.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typed_router.core.alias import AliasMatchError
    from typed_router.core.path import Path
    from typed_router.router import Router

logger = logging.getLogger(__name__)


class RouterDelegate:
    """Base delegate. Every hook is a no-op; override the ones you need."""

    def will_match_path(self, router: Router, path: Path) -> None:
        pass

    def did_match_path(self, router: Router, path: Path, duration: float) -> None:
        pass

    def failed_to_match_path(self, router: Router, path: Path, duration: float) -> None:
        pass

    def will_match_alias(self, router: Router, identifier: str) -> None:
        pass

    def did_match_alias(
        self, router: Router, identifier: str, path: Path, duration: float
    ) -> None:
        pass

    def failed_to_match_alias(
        self, router: Router, identifier: str, reason: AliasMatchError, duration: float
    ) -> None:
        pass


class DebuggingRouterDelegate(RouterDelegate):
    """Delegate that logs every event, then forwards it to *wrapping*.

    Usage::

        debugging = DebuggingRouterDelegate(my_delegate, prefix="[nav]")
        router.delegate = debugging
    """

    def __init__(
        self,
        wrapping: RouterDelegate | None = None,
        *,
        prefix: str = "[router]",
        level: int = logging.INFO,
    ) -> None:
        self.wrapping = wrapping
        self.prefix = prefix
        self.level = level

    def _output(self, router: Router, message: str) -> None:
        logger.log(self.level, "%s %s %s", self.prefix, router, message)

    def will_match_path(self, router: Router, path: Path) -> None:
        self._output(router, f"will match path {path}")
        if self.wrapping is not None:
            self.wrapping.will_match_path(router, path)

    def did_match_path(self, router: Router, path: Path, duration: float) -> None:
        self._output(router, f"did match path {path} in {duration:.4f}s")
        if self.wrapping is not None:
            self.wrapping.did_match_path(router, path, duration)

    def failed_to_match_path(self, router: Router, path: Path, duration: float) -> None:
        self._output(router, f"failed to match path {path} in {duration:.4f}s")
        if self.wrapping is not None:
            self.wrapping.failed_to_match_path(router, path, duration)

    def will_match_alias(self, router: Router, identifier: str) -> None:
        self._output(router, f"will match alias {identifier}")
        if self.wrapping is not None:
            self.wrapping.will_match_alias(router, identifier)

    def did_match_alias(
        self, router: Router, identifier: str, path: Path, duration: float
    ) -> None:
        self._output(router, f"did match alias {identifier} to path {path} in {duration:.4f}s")
        if self.wrapping is not None:
            self.wrapping.did_match_alias(router, identifier, path, duration)

    def failed_to_match_alias(
        self, router: Router, identifier: str, reason: AliasMatchError, duration: float
    ) -> None:
        self._output(
            router, f"failed to match alias {identifier} because {reason} in {duration:.4f}s"
        )
        if self.wrapping is not None:
            self.wrapping.failed_to_match_alias(router, identifier, reason, duration)
