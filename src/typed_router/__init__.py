"""Typed route registration and dispatch."""

# Primary API: the main entry point
from typed_router.config import RouterConfig
from typed_router.router import Router

# Core types: templates, routes and aliases
from typed_router.core.alias import Alias, AliasEntry, AliasMatchError, AliasTable
from typed_router.core.builder import TemplateBuilder, start
from typed_router.core.codec import PlaceholderCodec, UInt, codec_for, register_codec
from typed_router.core.compiler import SegmentType, TemplateSegment
from typed_router.core.path import Path
from typed_router.core.route import Route, RouteMatch, RouteTable
from typed_router.core.template import Template

# Observation and not-found handling
from typed_router.delegate import DebuggingRouterDelegate, RouterDelegate
from typed_router.not_found import NotFoundResult, is_not_found

# Exceptions: for error handling
from typed_router.exceptions import (
    AliasValidationError,
    HandlerArityError,
    RouteValidationError,
    TemplateError,
    TypedRouterError,
    UnsupportedPlaceholderTypeError,
)

__all__ = [
    # Primary API
    "Router",
    "RouterConfig",
    # Core types
    "Alias",
    "AliasEntry",
    "AliasMatchError",
    "AliasTable",
    "Path",
    "PlaceholderCodec",
    "Route",
    "RouteMatch",
    "RouteTable",
    "SegmentType",
    "Template",
    "TemplateBuilder",
    "TemplateSegment",
    "UInt",
    "codec_for",
    "register_codec",
    "start",
    # Observation and not-found handling
    "DebuggingRouterDelegate",
    "NotFoundResult",
    "RouterDelegate",
    "is_not_found",
    # Exceptions
    "AliasValidationError",
    "HandlerArityError",
    "RouteValidationError",
    "TemplateError",
    "TypedRouterError",
    "UnsupportedPlaceholderTypeError",
]

__version__ = "1.0.0"
