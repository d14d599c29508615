"""Tests for the Router facade."""

import functools
import logging
from dataclasses import dataclass
from typing import Any

import pytest

from typed_router import (
    Alias,
    AliasMatchError,
    HandlerArityError,
    NotFoundResult,
    Path,
    Router,
    RouterConfig,
    Template,
    TemplateError,
    UInt,
    is_not_found,
    start,
)
from typed_router.router import infer_placeholder_types


@dataclass
class Context:
    value: str


ALIAS_HOME = Alias("alias.home", Context)


class ProductPage:
    def __init__(self, page: int) -> None:
        self.page = page


class QuotedProductPage:
    def __init__(self, category: "str", page: "int") -> None:
        self.category = category
        self.page = page


class Pager:
    def __call__(self, page: int) -> str:
        return f"page {page}"


def paged(category: str, page: int) -> tuple:
    return (category, page)


def show_unknown_widget(category: str, page: int) -> "UndefinedWidget":  # noqa: F821
    return (category, page)


class TestInferPlaceholderTypes:
    def test_reads_annotations(self):
        def show(category: str, page: int):
            return None

        assert infer_placeholder_types(show, 2) == (str, int)

    def test_unannotated_defaults_to_str(self):
        assert infer_placeholder_types(lambda a, b: None, 2) == (str, str)

    def test_any_defaults_to_str(self):
        def show(value: Any):
            return None

        assert infer_placeholder_types(show, 1) == (str,)

    def test_var_positional_defaults_to_str(self):
        assert infer_placeholder_types(lambda *values: None, 3) == (str, str, str)

    def test_ignores_return_annotation(self):
        def home() -> int:
            return 1

        assert infer_placeholder_types(home, 0) == ()

    def test_class_uses_init_parameters(self):
        assert infer_placeholder_types(ProductPage, 1) == (int,)

    def test_class_with_string_annotations(self):
        assert infer_placeholder_types(QuotedProductPage, 2) == (str, int)

    def test_partial_uses_remaining_parameters(self):
        assert infer_placeholder_types(functools.partial(paged, "hats"), 1) == (int,)

    def test_callable_instance(self):
        assert infer_placeholder_types(Pager(), 1) == (int,)

    def test_unresolvable_return_keeps_parameter_types(self):
        assert infer_placeholder_types(show_unknown_widget, 2) == (str, int)

    def test_unresolvable_parameter_only_affects_itself(self):
        def show(page: int, tab: "Missing"):  # noqa: F821
            return None

        assert infer_placeholder_types(show, 2) == (int, str)

    def test_string_annotation_resolved_in_module(self):
        def show(page: "int", ratio: "float"):
            return None

        assert infer_placeholder_types(show, 2) == (int, float)


class TestTypedHandlers:
    def test_class_handler_receives_decoded_values(self, router):
        router.add("products/:page", ProductPage)

        page = router.resolve("products/2")
        assert isinstance(page, ProductPage)
        assert page.page == 2
        assert is_not_found(router.resolve("products/abc"))
        assert router.debug_routes == "products/:page (int) -> ProductPage"

    def test_unresolvable_return_annotation_keeps_typed_matching(self, router):
        router.add("list/:category/:page", show_unknown_widget)

        assert router.resolve("list/hats/2") == ("hats", 2)
        assert is_not_found(router.resolve("list/hats/abc"))

    def test_partial_handler(self, router):
        router.add("p/:page", functools.partial(paged, "x"))

        assert router.resolve("p/2") == ("x", 2)
        assert is_not_found(router.resolve("p/two"))

    def test_callable_instance_handler(self, router):
        pager = Pager()
        router.add("pages/:page", pager)

        assert router.resolve("pages/3") == "page 3"
        assert is_not_found(router.resolve("pages/x"))


class TestScenarios:
    def test_literal_route(self, router):
        router.add("home", lambda: "Home")

        assert router.resolve("home") == "Home"
        assert is_not_found(router.resolve("hom"))
        assert is_not_found(router.resolve("home/"))

    def test_two_string_placeholders(self, router):
        router.add("path/:p1/:p2", lambda p1, p2: (p1, p2))

        assert router.resolve("path/hats/boots") == ("hats", "boots")
        assert is_not_found(router.resolve("path/hats"))

    def test_integer_decode_failure_is_not_found(self, router):
        def products(category: str, num: int):
            return (category, num)

        router.add("product/list/:category/:num", products)

        assert router.resolve("product/list/hats/12") == ("hats", 12)
        assert is_not_found(router.resolve("product/list/hats/abc"))

    def test_alias_with_context(self, router):
        router.alias(ALIAS_HOME, lambda context: Path(context.value))
        router.add("home", lambda: "Home")

        assert router.resolve(ALIAS_HOME, Context("home")) == "Home"

        result = router.resolve(ALIAS_HOME, Context("nope"))
        assert is_not_found(result)
        assert result.path == "nope"
        assert result.alias is None

    def test_empty_segments_cannot_match(self, router):
        router.add("a/b/:c", lambda c: c)

        assert router.can_match("a/b/") is False
        assert router.can_match("a/b") is False
        assert router.can_match("a//c") is False
        assert router.can_match("a/b/c") is True


class TestRegistration:
    def test_add_returns_route(self, router):
        route = router.add("users/:id", lambda user_id: user_id, types=[int])
        assert router.routes == (route,)
        assert route.template == Template("users/:id", int)

    def test_add_with_template(self, router):
        template = start().path("users").placeholder("id", UInt).template()
        router.add(template, lambda user_id: user_id * 2)

        assert router.resolve("users/21") == 42
        assert is_not_found(router.resolve("users/-1"))

    def test_types_with_template_is_rejected(self, router):
        with pytest.raises(TypeError, match="pattern string"):
            router.add(Template("home"), lambda: None, types=[])

    def test_explicit_types_override_annotations(self, router):
        def show(value: int):
            return value

        router.add("value/:v", show, types=[str])
        assert router.resolve("value/12") == "12"

    def test_wrong_type_count(self, router):
        with pytest.raises(TemplateError):
            router.add("users/:id", lambda user_id: user_id, types=[int, int])

    def test_handler_arity_checked(self, router):
        with pytest.raises(HandlerArityError):
            router.add("users/:id", lambda: None)
        assert router.routes == ()

    def test_route_decorator(self, router):
        @router.route("users/:id")
        def show_user(user_id: int) -> str:
            return f"user {user_id}"

        assert show_user(3) == "user 3"
        assert router.resolve("users/3") == "user 3"
        assert router.routes[0].description == "users/:id (int) -> str"

    def test_alias_returns_entry(self, router):
        entry = router.alias(Alias("home"), lambda: "home")
        assert router.aliases == (entry,)

    def test_alias_decorator(self, router):
        @router.alias(ALIAS_HOME)
        def home_alias(context: Context) -> Path:
            return Path(context.value)

        router.add("home", lambda: "Home")

        assert home_alias(Context("x")) == Path("x")
        assert router.resolve(ALIAS_HOME, Context("home")) == "Home"

    def test_most_recent_route_wins(self, router):
        router.add("home", lambda: "first")
        router.add("home", lambda: "second")

        assert router.resolve("home") == "second"

    def test_alias_override_keeps_one_entry(self, router):
        router.alias(Alias("home"), lambda: Path("first"))
        router.alias(Alias("home"), lambda: Path("second"))

        assert len(router.aliases) == 1
        assert router.can_match(Alias("home")) is True
        assert router.path_for(Alias("home")) == Path("second")


class TestResolution:
    def test_accepts_path_objects(self, router):
        router.add("home", lambda: "Home")
        assert router.resolve(Path("home")) == "Home"

    def test_view_is_resolve(self, router):
        router.add("home", lambda: "Home")
        assert router.view("home") == "Home"

    def test_handler_called_once_per_resolution(self, router):
        calls = []
        router.add("users/:id", lambda user_id: calls.append(user_id), types=[int])

        router.resolve("users/1")
        router.resolve("users/2")
        assert calls == [1, 2]

    def test_not_found_lists_known_routes_and_aliases(self, router):
        router.add("home", lambda: "Home")
        router.alias(ALIAS_HOME, lambda context: Path(context.value))

        result = router.resolve("missing")

        assert isinstance(result, NotFoundResult)
        assert result.path == "missing"
        assert result.routes == ("home () -> Any",)
        assert result.aliases == ("alias.home<Context>",)

    def test_unknown_alias_is_tagged_with_identifier(self, router):
        result = router.resolve(Alias("nowhere"))

        assert is_not_found(result)
        assert result.alias == "nowhere"
        assert result.path is None

    def test_mapper_returning_none(self, router):
        router.alias(ALIAS_HOME, lambda context: None)

        result = router.resolve(ALIAS_HOME, Context("home"))
        assert is_not_found(result)
        assert result.alias == "alias.home"

    def test_context_of_wrong_type(self, router):
        router.alias(ALIAS_HOME, lambda context: Path(context.value))
        router.add("home", lambda: "Home")

        assert is_not_found(router.resolve(ALIAS_HOME, "home"))

    def test_context_ignored_for_paths(self, router):
        router.add("home", lambda: "Home")
        assert router.resolve("home", Context("ignored")) == "Home"

    def test_custom_not_found_factory(self):
        router = Router("custom", not_found=lambda result: f"missing: {result.target}")
        assert router.resolve("nowhere") == "missing: nowhere"

    def test_unmatched_path_logs_warning(self, router, caplog):
        with caplog.at_level(logging.WARNING, logger="typed_router.router"):
            router.resolve("nowhere")

        assert "Failed to match path" in caplog.text
        assert caplog.records[0].path == "nowhere"
        assert caplog.records[0].router == router.identifier

    def test_unmatched_alias_logs_warning(self, router, caplog):
        with caplog.at_level(logging.WARNING, logger="typed_router.router"):
            router.resolve(Alias("nowhere"))

        assert "Failed to match alias" in caplog.text
        assert caplog.records[0].reason == "not_found"

    def test_matched_path_logs_at_debug(self, router, caplog):
        router.add("home", lambda: "Home")

        with caplog.at_level(logging.DEBUG, logger="typed_router.router"):
            router.resolve("home")

        assert [record.getMessage() for record in caplog.records] == ["Matched path"]


class TestQueries:
    def test_can_match_runs_no_handler(self, router):
        calls = []
        router.add("users/:id", lambda user_id: calls.append(user_id), types=[int])

        assert router.can_match("users/4") is True
        assert router.can_match(Path("users/x")) is False
        assert calls == []

    def test_can_match_agrees_with_resolve(self, router):
        router.add("home", lambda: "Home")
        router.add("users/:id", lambda user_id: user_id, types=[int])

        for candidate in ["home", "hom", "users/1", "users/x", "users/1/2", ""]:
            resolved = not is_not_found(router.resolve(candidate))
            assert router.can_match(candidate) is resolved

    def test_can_match_alias_runs_no_mapper(self, router):
        calls = []
        router.alias(ALIAS_HOME, calls.append)

        assert router.can_match(ALIAS_HOME) is True
        assert router.can_match(Alias("other")) is False
        assert calls == []

    def test_path_for(self, router):
        router.alias(ALIAS_HOME, lambda context: Path(context.value))

        assert router.path_for(ALIAS_HOME, Context("home")) == Path("home")
        assert router.path_for(Alias("other")) is AliasMatchError.NOT_FOUND


class TestConfig:
    def test_case_insensitive_by_default(self, router):
        router.add("Home", lambda: "Home")
        assert router.resolve("HOME") == "Home"

    def test_case_sensitive(self):
        router = Router(config=RouterConfig(case_sensitive=True))
        router.add("Home", lambda: "Home")

        assert router.resolve("Home") == "Home"
        assert is_not_found(router.resolve("home"))

    def test_explicit_template_keeps_its_own_mode(self):
        router = Router(config=RouterConfig(case_sensitive=True))
        router.add(Template("Home"), lambda: "Home")

        assert router.resolve("home") == "Home"

    def test_warnings_can_be_disabled(self, caplog):
        router = Router(config=RouterConfig(warn_on_unmatched=False))

        with caplog.at_level(logging.WARNING, logger="typed_router.router"):
            router.resolve("nowhere")
            router.resolve(Alias("nowhere"))

        assert caplog.records == []

    def test_arity_check_can_be_disabled(self):
        router = Router(config=RouterConfig(check_handler_arity=False))
        route = router.add("users/:id", lambda user_id, extra: None)
        assert route in router.routes


class TestDebugListing:
    def test_empty_router(self, router):
        assert router.debug_routes == ""
        assert router.debug_aliases == ""
        assert router.debug_description() == ""

    def test_listing_in_registration_order(self, router):
        def show(category: str, page: int) -> str:
            return category

        router.add("home", lambda: "Home")
        router.add("product/:category/:page", show)
        router.alias(Alias("alias.home"), lambda: Path("home"))
        router.alias(ALIAS_HOME, lambda context: Path(context.value))

        assert router.debug_routes == "home () -> Any\nproduct/:category/:page (str, int) -> str"
        assert router.debug_aliases == "alias.home<Context>"
        assert router.debug_description() == (
            "home () -> Any\nproduct/:category/:page (str, int) -> str\nalias.home<Context>"
        )

    def test_str(self):
        assert str(Router()) == "Router()"
        assert str(Router("main")) == "Router(main)"

    def test_repr(self, router):
        router.add("home", lambda: "Home")
        assert repr(router) == f"Router(identifier={router.identifier!r}, routes=1, aliases=0)"
