"""Exception hierarchy for typed routing errors.

Only registration-time programming errors are raised. Failing to match a
path or an alias is an expected outcome and is reported as a value, never
as one of these exceptions.
"""


class TypedRouterError(Exception):
    """Base exception for all typed routing errors.

    Catching this exception will catch every error raised by the
    typed-router package.

    Example:
        try:
            router.add("users/:id", lambda: None)
        except TypedRouterError as e:
            logger.error(f"Failed to register route: {e}")
    """


class TemplateError(TypedRouterError):
    """Raised when a template cannot be built from its pattern and types.

    Examples of invalid templates:
        - Pattern "users/:id" declared with two placeholder types
        - Pattern "users/:id/:tab" declared with a single placeholder type
        - A placeholder segment with no name: "users/:"

    Example:
        TemplateError("Template 'users/:id' has 1 placeholder(s) but 2 type(s) were given")
    """


class UnsupportedPlaceholderTypeError(TemplateError):
    """Raised when a placeholder is declared with something that is not a type.

    Example:
        UnsupportedPlaceholderTypeError("Placeholder type must be a class, got 'int'")
    """


class RouteValidationError(TypedRouterError):
    """Raised when a route cannot be registered.

    Example:
        RouteValidationError("Route handler for 'home' must be callable, got str")
    """


class HandlerArityError(RouteValidationError):
    """Raised when a handler cannot accept the values its template extracts.

    The check happens once, at registration, so a mismatch never surfaces
    while resolving a path.

    Example:
        HandlerArityError(
            "Handler 'show_user' for template 'users/:id' must accept 1 "
            "positional argument(s), but its signature is (user_id, tab)"
        )
    """


class AliasValidationError(TypedRouterError):
    """Raised when an alias cannot be registered.

    Example:
        AliasValidationError("Mapper for alias 'alias.home' must be callable, got NoneType")
    """
