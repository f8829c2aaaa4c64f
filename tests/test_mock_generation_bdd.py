"""Behavioural tests for mock generation using pytest-bdd."""

from __future__ import annotations

from pathlib import Path

from pytest_bdd import scenario

from tests.steps import *  # noqa: F403 - re-export pytest-bdd steps

FEATURES_DIR = Path(__file__).resolve().parent.parent / "features"
FEATURE = str(FEATURES_DIR / "mock_generation.feature")


@scenario(FEATURE, "plain interface keeps its modifiers")
def test_plain_interface() -> None:
    """Scenario: no concurrency facts leave modifiers unchanged."""
    pass


@scenario(FEATURE, "interface with exempt members exempts everything")
def test_exempt_members() -> None:
    """Scenario: exempt members make every generated member exempt."""
    pass


@scenario(FEATURE, "actor interface keeps its initializer isolated")
def test_actor_interface() -> None:
    """Scenario: actors exempt members but not the default initializer."""
    pass


@scenario(FEATURE, "empty interface still gets scaffolding")
def test_empty_interface() -> None:
    """Scenario: the fixed members exist without interface members."""
    pass


@scenario(FEATURE, "main actor function opts out on an actor")
def test_main_actor_override() -> None:
    """Scenario: a per-member marker overrides the interface rule."""
    pass


@scenario(FEATURE, "malformed member aborts generation")
def test_malformed_member() -> None:
    """Scenario: a bad member name stops generation."""
    pass
