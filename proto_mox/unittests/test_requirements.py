"""Unit tests for the requirements model and its mapping form."""

from __future__ import annotations

import typing as t

import pytest

from proto_mox.attributes import IsolationMarkers
from proto_mox.errors import RequirementsError
from proto_mox.requirements import InitializerRequirement, Requirements
from proto_mox.syntax import Attribute, FunctionType, ModifierSet, Parameter, TypeRef
from proto_mox.unittests._factories import fetch, make_requirements, title

SERVICE: dict[str, t.Any] = {
    "name": "WeatherService",
    "mock_type": "MockWeatherService",
    "modifiers": ["public"],
    "attributes": ["@MainActor"],
    "functions": [
        {
            "name": "forecast",
            "parameters": [
                {"label": "for", "name": "city", "type": "String"},
                {
                    "label": "_",
                    "name": "completion",
                    "type": {"parameters": ["Int"], "returns": "Void"},
                },
            ],
            "returns": {"name": "Array", "arguments": ["Double"]},
            "is_async": True,
            "is_throwing": True,
            "attributes": ["concurrent"],
        }
    ],
    "variables": [{"name": "unit", "type": "String", "is_settable": True}],
    "initializers": [{"parameters": [{"label": "apiKey", "type": "String"}]}],
}


def test_from_mapping_builds_members() -> None:
    """Members, parameters and types are parsed from the mapping."""
    requirements = Requirements.from_mapping(SERVICE)
    assert requirements.mock_type == TypeRef("MockWeatherService")
    assert requirements.modifiers == ModifierSet.of("public")
    (function,) = requirements.functions
    assert function.parameters[0] == Parameter(
        label="for", name="city", type=TypeRef("String")
    )
    assert function.parameters[1].type == FunctionType(
        (TypeRef("Int"),), TypeRef("Void")
    )
    assert function.returns == TypeRef("Array", (TypeRef("Double"),))
    assert requirements.variables[0].is_settable
    assert requirements.initializers[0].parameters[0].label == "apiKey"


def test_from_mapping_derives_concurrency_facts() -> None:
    """Unstated facts are derived from interface and member attributes."""
    requirements = Requirements.from_mapping(SERVICE)
    assert requirements.attributes == (Attribute("MainActor"),)
    assert requirements.has_global_isolation_attribute
    assert requirements.has_isolation_exempt_members
    assert not requirements.is_actor


def test_from_mapping_prefers_stated_facts() -> None:
    """Explicit facts from the front-end win over derivation."""
    data = {
        **SERVICE,
        "has_global_isolation_attribute": False,
        "has_isolation_exempt_members": False,
        "is_actor": True,
    }
    requirements = Requirements.from_mapping(data)
    assert not requirements.has_global_isolation_attribute
    assert not requirements.has_isolation_exempt_members
    assert requirements.is_actor


def test_mapping_round_trip() -> None:
    """``to_dict`` produces a mapping ``from_mapping`` accepts unchanged."""
    requirements = Requirements.from_mapping(SERVICE)
    assert Requirements.from_mapping(requirements.to_dict()) == requirements


@pytest.mark.parametrize(
    ("data", "fragment"),
    [
        ({"mock_type": "MockX"}, "missing required key 'name'"),
        ({"name": "X"}, "missing required key 'mock_type'"),
        ({"name": 3, "mock_type": "MockX"}, "'name' must be a string"),
        (
            {"name": "X", "mock_type": "MockX", "modifiers": [1]},
            "expected a string",
        ),
        (
            {"name": "X", "mock_type": "MockX", "functions": [{"parameters": []}]},
            "missing required key 'name'",
        ),
        (
            {"name": "X", "mock_type": "MockX", "is_actor": "false"},
            "'is_actor' must be a boolean",
        ),
        (
            {
                "name": "X",
                "mock_type": "MockX",
                "variables": [{"name": "v", "type": "Int", "is_settable": 1}],
            },
            "'is_settable' must be a boolean",
        ),
    ],
    ids=[
        "no-name",
        "no-mock-type",
        "bad-name",
        "bad-modifier",
        "nameless-function",
        "string-flag",
        "integer-flag",
    ],
)
def test_from_mapping_rejects_malformed_input(
    data: dict[str, t.Any], fragment: str
) -> None:
    """Structural problems surface as :class:`RequirementsError`."""
    with pytest.raises(RequirementsError, match=fragment):
        Requirements.from_mapping(data)


def test_members_compute_markers_once() -> None:
    """Markers are derived from attributes when a member is constructed."""
    function = fetch("concurrent", "MainActor")
    assert function.markers == IsolationMarkers(exempt=True, main_actor=True)
    assert title("MainActor").markers.main_actor
    assert fetch().markers == IsolationMarkers()


def test_initializer_name() -> None:
    """Initializers share the ``init`` name used in diagnostics."""
    assert InitializerRequirement().name == "init"


def test_member_identities_number_functions_then_variables() -> None:
    """Ordinals run over functions first, then continue over variables."""
    requirements = make_requirements(
        functions=(fetch(), fetch(name="store")),
        variables=(title(), title(name="count")),
    )
    assert [i for i, _ in requirements.numbered_functions()] == [
        "m1_fetch",
        "m2_store",
    ]
    assert [i for i, _ in requirements.numbered_variables()] == [
        "m3_title",
        "m4_count",
    ]
