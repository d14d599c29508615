"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, no
string-key lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(case_sensitive=True)
        router = Router(config=config)
    """

    # Matching mode for templates compiled from pattern strings by Router.add
    case_sensitive: bool = False

    # Log a warning whenever a path or alias fails to resolve
    warn_on_unmatched: bool = True

    # Inspect handler signatures at registration
    check_handler_arity: bool = True
