"""Routes and the route table.

A Route binds a Template to a handler accepting the template's values.
The RouteTable keeps routes in registration order and resolves paths
against them, most recently registered first.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, TypeVarTuple, Unpack

from typed_router.core.path import Path
from typed_router.core.template import Template
from typed_router.exceptions import HandlerArityError, RouteValidationError

logger = logging.getLogger(__name__)

Ts = TypeVarTuple("Ts")
R = TypeVar("R")

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def type_name(annotation: Any) -> str:
    """Render a type or annotation for descriptions.

    Examples:
        str                      -> "str"
        list[int]                -> "list[int]"
        "Widget" (string form)   -> "Widget"
        inspect.Signature.empty  -> "Any"
    """
    if annotation is inspect.Signature.empty:
        return "Any"
    if annotation is None:
        return "None"
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, type) and not getattr(annotation, "__args__", None):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def validate_handler(handler: Callable[..., Any], template: Template[Unpack[Ts]]) -> None:
    """Check that *handler* can be called with the template's values.

    Handlers whose signature cannot be inspected (some builtins) are
    accepted as-is.

    Raises:
        RouteValidationError: If the handler is not callable.
        HandlerArityError: If the handler can't take exactly ``template.arity``
            positional arguments.
    """
    if not callable(handler):
        raise RouteValidationError(
            f"Route handler for '{template.pattern}' must be callable, "
            f"got {type(handler).__name__}"
        )

    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        return

    parameters = list(signature.parameters.values())
    positional = [p for p in parameters if p.kind in _POSITIONAL_KINDS]
    required = [p for p in positional if p.default is inspect.Parameter.empty]
    has_var_positional = any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in parameters)
    required_keyword_only = [
        p
        for p in parameters
        if p.kind == inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty
    ]

    too_many_required = len(required) > template.arity
    too_few_accepted = not has_var_positional and len(positional) < template.arity

    if too_many_required or too_few_accepted or required_keyword_only:
        handler_name = getattr(handler, "__name__", type(handler).__name__)
        raise HandlerArityError(
            f"Handler '{handler_name}' for template '{template.pattern}' must accept "
            f"{template.arity} positional argument(s), but its signature is {signature}"
        )


def _result_annotation(handler: Callable[..., Any]) -> Any:
    # Calling a class produces an instance of it, whatever __init__ returns
    if inspect.isclass(handler):
        return handler
    try:
        return inspect.signature(handler).return_annotation
    except (TypeError, ValueError):
        return inspect.Signature.empty


class Route(Generic[Unpack[Ts], R]):
    """A template bound to a typed handler.

    Usage::

        route = Route(Template("users/:id", int), lambda user_id: f"user {user_id}")
        route.matches("users/7")  # True
        route.resolve("users/7")  # RouteMatch(route, (7,), "user 7")
    """

    __slots__ = ("description", "handler", "template")

    def __init__(
        self,
        template: Template[Unpack[Ts]],
        handler: Callable[[Unpack[Ts]], R],
        *,
        check_arity: bool = True,
    ) -> None:
        if check_arity:
            validate_handler(handler, template)
        elif not callable(handler):
            raise RouteValidationError(
                f"Route handler for '{template.pattern}' must be callable, "
                f"got {type(handler).__name__}"
            )

        self.template = template
        self.handler = handler
        arguments = ", ".join(type_name(value_type) for value_type in template.types)
        result = type_name(_result_annotation(handler))
        self.description = f"{template.pattern} ({arguments}) -> {result}"

    @property
    def pattern(self) -> str:
        return self.template.pattern

    def match(self, candidate: Path | str) -> tuple[Unpack[Ts]] | None:
        """Return the decoded values if *candidate* matches. Never calls the handler."""
        return self.template.match(candidate)

    def matches(self, candidate: Path | str) -> bool:
        return self.template.matches(candidate)

    def invoke(self, values: tuple[Unpack[Ts]]) -> R:
        return self.handler(*values)

    def resolve(self, candidate: Path | str) -> "RouteMatch | None":
        """Match *candidate* and, on success, call the handler once."""
        values = self.match(candidate)
        if values is None:
            return None
        return RouteMatch(route=self, values=values, result=self.invoke(values))

    def __repr__(self) -> str:
        return f"Route({self.description!r})"


@dataclass(frozen=True)
class RouteMatch:
    """Result of a successful route resolution.

    Attributes:
        route: The route that matched.
        values: Typed values extracted from the path.
        result: Whatever the route's handler returned.
    """

    route: Route
    values: tuple[Any, ...]
    result: Any


class RouteTable:
    """Ordered collection of routes with most-recent-first lookup.

    Registering the same pattern twice keeps both routes; the later one
    shadows the earlier one.
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[Route] = []

    def register(
        self,
        template: Template[Unpack[Ts]],
        handler: Callable[[Unpack[Ts]], R],
        *,
        check_arity: bool = True,
    ) -> Route[Unpack[Ts], R]:
        """Append a route for *template* and *handler*.

        Raises:
            HandlerArityError: If the handler can't take the template's values.
        """
        route = Route(template, handler, check_arity=check_arity)
        self._routes.append(route)
        logger.debug("Registered route", extra={"route": route.description})
        return route

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in registration order."""
        return tuple(self._routes)

    @property
    def descriptions(self) -> tuple[str, ...]:
        return tuple(route.description for route in self._routes)

    def find(self, path: Path | str) -> tuple[Route, tuple[Any, ...]] | None:
        """Return the winning route and its values without calling the handler."""
        candidate = str(path)
        for route in reversed(self._routes):
            values = route.match(candidate)
            if values is not None:
                return route, values
        return None

    def can_match(self, path: Path | str) -> bool:
        return self.find(path) is not None

    def resolve(self, path: Path | str) -> RouteMatch | None:
        """Call the handler of the most recently registered matching route.

        Returns:
            RouteMatch for the winning route, or None if no route matches.
        """
        found = self.find(path)
        if found is None:
            return None
        route, values = found
        return RouteMatch(route=route, values=values, result=route.invoke(values))

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)
