"""Example tests demonstrating mock generation from a front-end description."""

from __future__ import annotations

import typing as t

from proto_mox import BuilderKind, GeneratorConfig, MockGenerator, Requirements
from proto_mox.syntax import FunctionDecl, VariableDecl

pytest_plugins = ("proto_mox.pytest_plugin",)

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from pathlib import Path


WEATHER_SERVICE: dict[str, t.Any] = {
    "name": "WeatherService",
    "mock_type": "MockWeatherService",
    "modifiers": ["public"],
    "attributes": ["MainActor"],
    "functions": [
        {
            "name": "forecast",
            "parameters": [{"label": "for", "name": "city", "type": "String"}],
            "returns": {"name": "Array", "arguments": ["Double"]},
            "is_async": True,
            "is_throwing": True,
        },
    ],
    "variables": [{"name": "unit", "type": "String", "is_settable": True}],
}


def test_global_actor_service_is_exempt(proto_mox: MockGenerator) -> None:
    """A ``@MainActor`` service gets a mock usable from any context."""
    module = proto_mox.generate(Requirements.from_mapping(WEATHER_SERVICE))

    forecast = next(
        m for m in module.mock_members if isinstance(m, FunctionDecl) and m.name == "forecast"
    )
    assert list(forecast.modifiers) == ["public", "nonisolated"]
    assert forecast.is_async
    assert forecast.is_throwing


def test_builders_expose_every_member(proto_mox: MockGenerator) -> None:
    """Stub, action and verify builders mirror the service."""
    module = proto_mox.generate(Requirements.from_mapping(WEATHER_SERVICE))

    for kind, struct in zip(BuilderKind, module.builders, strict=True):
        assert struct.name == kind.type_name
        unit, forecast = struct.members[2:]
        assert isinstance(unit, VariableDecl)
        assert isinstance(forecast, FunctionDecl)
        assert forecast.returns is not None
        assert forecast.returns.spelled.startswith(
            f"Mockable.ThrowingFunction{kind.family}Builder<MockWeatherService"
        )


def test_snapshot_round_trip(tmp_path: Path) -> None:
    """Generated modules can be written to disk for review."""
    generator = MockGenerator(GeneratorConfig(snapshot_dir=tmp_path))
    module = generator.generate(Requirements.from_mapping(WEATHER_SERVICE))

    snapshot = generator.snapshot_path("WeatherService")
    assert snapshot.read_text(encoding="utf-8") == module.to_json()
