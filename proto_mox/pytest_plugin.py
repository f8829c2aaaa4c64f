"""Pytest plugin providing the ``proto_mox`` fixture."""

from __future__ import annotations

import logging
import typing as t
from pathlib import Path

import pytest

from .generator import GeneratorConfig, MockGenerator

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("proto_mox")
    group.addoption(
        "--proto-mox-check-determinism",
        action="store_true",
        dest="proto_mox_check_determinism",
        default=None,
        help=(
            "Generate every mock twice and fail when the runs differ. "
            "Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-proto-mox-check-determinism",
        action="store_false",
        dest="proto_mox_check_determinism",
        default=None,
        help="Disable the determinism check. Overrides the pytest.ini setting.",
    )
    group.addoption(
        "--proto-mox-snapshot-dir",
        action="store",
        dest="proto_mox_snapshot_dir",
        default=None,
        help="Write a JSON snapshot of every generated mock into this directory.",
    )
    parser.addini(
        "proto_mox_check_determinism",
        "Generate every mock twice and fail when the runs differ.",
        type="bool",
        default=False,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "proto_mox(check_determinism: bool = False): override the "
            "determinism check for a single test."
        ),
    )


def _check_determinism_enabled(
    request: pytest.FixtureRequest, env_config: GeneratorConfig
) -> bool:
    """Return whether the fixture should double-check generation."""
    # Priority order: marker > CLI option > INI setting > environment

    marker = request.node.get_closest_marker("proto_mox")
    if marker is not None and "check_determinism" in marker.kwargs:
        return bool(marker.kwargs["check_determinism"])

    config = request.config
    cli_value = config.getoption("proto_mox_check_determinism")
    if cli_value is not None:
        return bool(cli_value)

    if config.getini("proto_mox_check_determinism"):
        return True
    return env_config.check_determinism


def _snapshot_dir(
    request: pytest.FixtureRequest, env_config: GeneratorConfig
) -> Path | None:
    """Return the snapshot directory from the CLI, falling back to the environment."""
    raw = request.config.getoption("proto_mox_snapshot_dir")
    if raw:
        return Path(raw)
    return env_config.snapshot_dir


@pytest.fixture
def proto_mox(request: pytest.FixtureRequest) -> t.Generator[MockGenerator, None, None]:
    """Provide a :class:`MockGenerator` configured from pytest options."""
    env_config = GeneratorConfig.from_env()
    config = GeneratorConfig(
        check_determinism=_check_determinism_enabled(request, env_config),
        snapshot_dir=_snapshot_dir(request, env_config),
    )
    generator = MockGenerator(config)
    yield generator
    logger.debug(
        "proto_mox fixture generated %d module(s) in %s",
        len(generator.generated),
        request.node.nodeid,
    )
