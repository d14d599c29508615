"""Shared pytest fixtures for typed-router tests."""

import uuid
from dataclasses import dataclass, field
from typing import Any

import pytest

from typed_router import Router, RouterDelegate


@dataclass
class RecordingDelegate(RouterDelegate):
    """Delegate that records every event it receives, in order.

    Each event is a tuple of the hook name followed by its arguments
    (the router argument is left out; durations are kept).
    """

    events: list[tuple[Any, ...]] = field(default_factory=list)

    def will_match_path(self, router, path):
        self.events.append(("will_match_path", path))

    def did_match_path(self, router, path, duration):
        self.events.append(("did_match_path", path, duration))

    def failed_to_match_path(self, router, path, duration):
        self.events.append(("failed_to_match_path", path, duration))

    def will_match_alias(self, router, identifier):
        self.events.append(("will_match_alias", identifier))

    def did_match_alias(self, router, identifier, path, duration):
        self.events.append(("did_match_alias", identifier, path, duration))

    def failed_to_match_alias(self, router, identifier, reason, duration):
        self.events.append(("failed_to_match_alias", identifier, reason, duration))

    @property
    def names(self) -> list[str]:
        return [event[0] for event in self.events]


@pytest.fixture
def router() -> Router:
    """Return an empty router with a unique identifier."""
    return Router(f"TestRouter-{uuid.uuid4()}")


@pytest.fixture
def recording_delegate(router: Router) -> RecordingDelegate:
    """Return a RecordingDelegate already attached to ``router``.

    The fixture keeps the delegate alive for the duration of the test,
    since the router only holds it weakly.
    """
    delegate = RecordingDelegate()
    router.delegate = delegate
    return delegate
