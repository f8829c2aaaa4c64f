"""Unit tests for attribute helpers and isolation markers."""

from __future__ import annotations

import pytest

from proto_mox import attributes
from proto_mox.attributes import IsolationMarkers
from proto_mox.syntax import Attribute

ATTRS = (Attribute("MainActor"), Attribute("discardableResult"), Attribute("objc"))


def test_contains_matches_exact_names() -> None:
    """Presence checks compare the full attribute name."""
    assert attributes.contains(ATTRS, "MainActor")
    assert not attributes.contains(ATTRS, "Main")


def test_removing_filters_named_attributes() -> None:
    """Named attributes are dropped and order is kept."""
    remaining = attributes.removing(ATTRS, {"MainActor", "objc"})
    assert remaining == (Attribute("discardableResult"),)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("MainActor", True),
        ("DatabaseActor", True),
        ("Sendable", False),
        ("actor", False),
    ],
)
def test_is_global_actor(name: str, expected: bool) -> None:  # noqa: FBT001
    """Global domains are ``MainActor`` or names ending in ``Actor``."""
    assert attributes.is_global_actor(name) is expected


def test_markers_from_attributes() -> None:
    """Markers are derived from ``@concurrent`` and ``@MainActor``."""
    markers = IsolationMarkers.from_attributes(
        (Attribute("concurrent"), Attribute("Sendable"))
    )
    assert markers == IsolationMarkers(exempt=True, main_actor=False)
    assert IsolationMarkers.from_attributes(ATTRS).main_actor


def test_unavailable_attribute_carries_message() -> None:
    """The interceptor guard is a deprecated availability attribute."""
    attribute = attributes.unavailable("Use given(_ service:) instead.")
    assert attribute.name == "available"
    assert attribute.arguments == (
        "*",
        "deprecated",
        'message: "Use given(_ service:) instead."',
    )
