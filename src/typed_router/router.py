"""Router facade.

Owns a route table and an alias table, resolves paths and aliases against
them, times each attempt and reports it to an optional delegate.
"""

from __future__ import annotations

import functools
import inspect
import logging
import time
import typing
import weakref
from collections.abc import Callable, Sequence
from typing import Any, TypeVar, TypeVarTuple, Unpack

from typed_router.config import RouterConfig
from typed_router.core.alias import Alias, AliasEntry, AliasMatchError, AliasTable
from typed_router.core.compiler import placeholder_count
from typed_router.core.path import Path
from typed_router.core.route import Route, RouteTable
from typed_router.core.template import Template
from typed_router.delegate import RouterDelegate
from typed_router.not_found import NotFoundFactory, NotFoundResult, default_not_found

logger = logging.getLogger(__name__)

Ts = TypeVarTuple("Ts")
R = TypeVar("R")
H = TypeVar("H", bound=Callable[..., Any])
M = TypeVar("M", bound=Callable[..., Any])

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _annotation_globals(handler: Callable[..., Any]) -> dict[str, Any]:
    """Module globals that string annotations of *handler* are evaluated in."""
    target: Any = handler
    while isinstance(target, functools.partial):
        target = target.func
    if inspect.isclass(target):
        target = target.__init__
    elif not inspect.isroutine(target):
        target = getattr(type(target), "__call__", target)
    return getattr(inspect.unwrap(target), "__globals__", {})


def _handler_signature(handler: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(handler, eval_str=True)
    except (NameError, AttributeError, SyntaxError, TypeError) as exc:
        # Annotations stay strings and are resolved per parameter below
        logger.debug("Could not evaluate handler annotations", extra={"error": str(exc)})
    except ValueError:
        return None

    try:
        return inspect.signature(handler)
    except (TypeError, ValueError):
        return None


def _resolve_annotation(annotation: Any, globalns: dict[str, Any]) -> Any:
    if annotation is inspect.Parameter.empty or annotation is Any:
        return str
    if not isinstance(annotation, str):
        return annotation

    try:
        resolved = eval(annotation, globalns)  # noqa: S307
    except (NameError, AttributeError, SyntaxError, TypeError):
        logger.debug("Unresolved placeholder annotation", extra={"annotation": annotation})
        return str
    return str if resolved is Any else resolved


def infer_placeholder_types(handler: Callable[..., Any], count: int) -> tuple[type, ...]:
    """Read placeholder types from the annotations of *handler*'s positional parameters.

    Works for functions, classes (their ``__init__`` parameters),
    ``functools.partial`` objects and callable instances. Each parameter is
    resolved on its own: unannotated parameters, parameters annotated with
    ``Any``, annotations that can't be resolved and missing parameters
    default to ``str``.

    Examples:
        def show(category: str, page: int): ...   -> (str, int)
        lambda a, b: ...                          -> (str, str)
        class Page: def __init__(self, n: int)    -> (int,)
    """
    signature = _handler_signature(handler)
    if signature is None:
        return (str,) * count

    parameters = [p for p in signature.parameters.values() if p.kind in _POSITIONAL_KINDS]
    globalns = _annotation_globals(handler)

    types: list[type] = []
    for index in range(count):
        annotation: Any = inspect.Parameter.empty
        if index < len(parameters):
            annotation = parameters[index].annotation
        types.append(_resolve_annotation(annotation, globalns))
    return tuple(types)


class Router:
    """Typed route registration and dispatch.

    Usage::

        router = Router("main")
        router.add("home", lambda: "Home")
        router.add("product/:category/:page", show_products)  # (str, int) from annotations
        router.alias(Alias("alias.home"), lambda: Path("home"))

        router.resolve("product/hats/2")
        router.resolve(Alias("alias.home"))

    Resolution never raises for unmatched input: the router returns the
    product of its not-found factory instead.
    """

    def __init__(
        self,
        identifier: str | None = None,
        *,
        config: RouterConfig | None = None,
        delegate: RouterDelegate | None = None,
        not_found: NotFoundFactory | None = None,
    ) -> None:
        self.identifier = identifier
        self.config = config or RouterConfig()
        self.not_found: NotFoundFactory = not_found or default_not_found
        self._routes = RouteTable()
        self._aliases = AliasTable()
        self._delegate: weakref.ref[RouterDelegate] | None = None
        self.delegate = delegate

    # -- delegate -------------------------------------------------------

    @property
    def delegate(self) -> RouterDelegate | None:
        """The delegate, or None if unset or already garbage collected."""
        if self._delegate is None:
            return None
        return self._delegate()

    @delegate.setter
    def delegate(self, delegate: RouterDelegate | None) -> None:
        self._delegate = weakref.ref(delegate) if delegate is not None else None

    # -- registration ---------------------------------------------------

    def add(
        self,
        template: Template[Unpack[Ts]] | str,
        handler: Callable[[Unpack[Ts]], R],
        *,
        types: Sequence[type] | None = None,
    ) -> Route[Unpack[Ts], R]:
        """Register *handler* for *template*.

        Args:
            template: A compiled Template, or a pattern string.
            handler: Called with the typed placeholder values on a match.
            types: Placeholder types for a pattern string. When omitted they
                are read from the handler's annotations (``str`` by default).

        Returns:
            The registered Route.

        Raises:
            TemplateError: If *types* doesn't agree with the pattern.
            HandlerArityError: If the handler can't take the template's values.
        """
        if not isinstance(template, Template):
            if types is None:
                types = infer_placeholder_types(handler, placeholder_count(template))
            template = Template(template, *types, case_sensitive=self.config.case_sensitive)
        elif types is not None:
            raise TypeError("types can only be given together with a pattern string")

        return self._routes.register(
            template, handler, check_arity=self.config.check_handler_arity
        )

    def route(
        self,
        template: Template | str,
        *,
        types: Sequence[type] | None = None,
    ) -> Callable[[H], H]:
        """Decorator form of ``add``.

        Example:
            @router.route("users/:id")
            def show_user(user_id: int) -> str:
                return f"user {user_id}"
        """

        def decorator(handler: H) -> H:
            self.add(template, handler, types=types)
            return handler

        return decorator

    @typing.overload
    def alias(self, alias: Alias[Any], mapper: None = None) -> Callable[[M], M]: ...

    @typing.overload
    def alias(self, alias: Alias[Any], mapper: M) -> AliasEntry: ...

    def alias(self, alias: Alias[Any], mapper: M | None = None) -> AliasEntry | Callable[[M], M]:
        """Register *mapper* for *alias*, replacing any earlier mapper.

        Context-free aliases take a mapper with no arguments; others take
        the context value. The mapper returns a Path (or str), or None when
        the context can't be mapped. Without *mapper* this is a decorator.

        Raises:
            AliasValidationError: If *mapper* is not callable.
        """
        if mapper is None:

            def decorator(function: M) -> M:
                self._aliases.register(alias, function)
                return function

            return decorator

        return self._aliases.register(alias, mapper)

    # -- queries --------------------------------------------------------

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes.routes

    @property
    def aliases(self) -> tuple[AliasEntry, ...]:
        return self._aliases.aliases

    def can_match(self, target: Path | str | Alias[Any]) -> bool:
        """True if *target* would resolve. No handler or mapper is run."""
        if isinstance(target, Alias):
            return self._aliases.can_match(target)
        return self._routes.can_match(Path.of(target))

    def path_for(self, alias: Alias[Any], context: Any = None) -> Path | AliasMatchError:
        """Map *alias* to a path without resolving it or notifying the delegate."""
        return self._aliases.resolve(alias, context)

    # -- resolution -----------------------------------------------------

    def resolve(self, target: Path | str | Alias[Any], context: Any = None) -> Any:
        """Resolve a path or an alias to its handler's result.

        Args:
            target: A Path, a path string or an Alias.
            context: Context value for an alias. Ignored for paths.

        Returns:
            The matching handler's result, or the not-found factory's result.
        """
        if isinstance(target, Alias):
            return self._resolve_alias(target, context)
        return self._resolve_path(Path.of(target))

    view = resolve

    def _resolve_path(self, path: Path) -> Any:
        delegate = self.delegate
        if delegate is not None:
            delegate.will_match_path(self, path)

        start = time.perf_counter()
        match = self._routes.resolve(path)
        duration = time.perf_counter() - start

        if match is None:
            if self.config.warn_on_unmatched:
                logger.warning(
                    "Failed to match path",
                    extra={"path": path.path, "router": self.identifier},
                )
            if delegate is not None:
                delegate.failed_to_match_path(self, path, duration)
            return self._not_found(path=path.path)

        logger.debug(
            "Matched path",
            extra={"path": path.path, "route": match.route.description, "duration": duration},
        )
        if delegate is not None:
            delegate.did_match_path(self, path, duration)
        return match.result

    def _resolve_alias(self, alias: Alias[Any], context: Any) -> Any:
        identifier = alias.identifier
        delegate = self.delegate
        if delegate is not None:
            delegate.will_match_alias(self, identifier)

        start = time.perf_counter()
        mapped = self._aliases.resolve(alias, context)
        duration = time.perf_counter() - start

        if isinstance(mapped, AliasMatchError):
            if self.config.warn_on_unmatched:
                logger.warning(
                    "Failed to match alias",
                    extra={"alias": identifier, "reason": mapped.value, "router": self.identifier},
                )
            if delegate is not None:
                delegate.failed_to_match_alias(self, identifier, mapped, duration)
            return self._not_found(alias=identifier)

        if delegate is not None:
            delegate.did_match_alias(self, identifier, mapped, duration)
        return self._resolve_path(mapped)

    def _not_found(self, *, path: str | None = None, alias: str | None = None) -> Any:
        return self.not_found(
            NotFoundResult(
                path=path,
                alias=alias,
                routes=self._routes.descriptions,
                aliases=self._aliases.descriptions,
            )
        )

    # -- debugging ------------------------------------------------------

    @property
    def debug_routes(self) -> str:
        """One route description per line, in registration order."""
        return "\n".join(self._routes.descriptions)

    @property
    def debug_aliases(self) -> str:
        """One alias description per line, in registration order."""
        return "\n".join(self._aliases.descriptions)

    def debug_description(self) -> str:
        """All route descriptions followed by all alias descriptions."""
        return "\n".join(self._routes.descriptions + self._aliases.descriptions)

    def __str__(self) -> str:
        if self.identifier is None:
            return "Router()"
        return f"Router({self.identifier})"

    def __repr__(self) -> str:
        return (
            f"Router(identifier={self.identifier!r}, routes={len(self._routes)}, "
            f"aliases={len(self._aliases)})"
        )
