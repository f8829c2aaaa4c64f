"""Factories for requirements used across the unit tests."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from proto_mox.requirements import (
    FunctionRequirement,
    InitializerRequirement,
    Requirements,
    VariableRequirement,
)
from proto_mox.syntax import Attribute, ModifierSet, Parameter, TypeRef


def make_requirements(**overrides: t.Any) -> Requirements:  # noqa: ANN401
    """Return a public ``Service`` interface with *overrides* applied."""
    base = Requirements(
        name="Service",
        mock_type=TypeRef("MockService"),
        modifiers=ModifierSet.of("public"),
    )
    return dc.replace(base, **overrides)


def fetch(*attribute_names: str, **overrides: t.Any) -> FunctionRequirement:  # noqa: ANN401
    """Return ``func fetch(id: Int) -> String`` with optional attributes."""
    base = FunctionRequirement(
        name="fetch",
        parameters=(Parameter(label="id", type=TypeRef("Int")),),
        returns=TypeRef("String"),
        attributes=tuple(Attribute(name) for name in attribute_names),
    )
    return dc.replace(base, **overrides)


def title(*attribute_names: str, **overrides: t.Any) -> VariableRequirement:  # noqa: ANN401
    """Return ``var title: String { get }`` with optional attributes."""
    base = VariableRequirement(
        name="title",
        type=TypeRef("String"),
        attributes=tuple(Attribute(name) for name in attribute_names),
    )
    return dc.replace(base, **overrides)


def named_init(**overrides: t.Any) -> InitializerRequirement:  # noqa: ANN401
    """Return ``init(name: String)``."""
    base = InitializerRequirement(
        parameters=(Parameter(label="name", type=TypeRef("String")),),
    )
    return dc.replace(base, **overrides)


__all__ = ["fetch", "make_requirements", "named_init", "title"]
