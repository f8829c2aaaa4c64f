"""Global test configuration and shared fixtures."""

from __future__ import annotations

import typing as t

import pytest

from proto_mox.generator import PROTOMOX_CHECK_DETERMINISM_ENV, PROTOMOX_SNAPSHOT_DIR_ENV

pytest_plugins = ("proto_mox.pytest_plugin", "pytester")


@pytest.fixture(autouse=True)
def isolate_generator_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> t.Generator[None, None, None]:
    """Keep the developer's ``PROTOMOX_*`` settings out of the test run."""
    monkeypatch.delenv(PROTOMOX_CHECK_DETERMINISM_ENV, raising=False)
    monkeypatch.delenv(PROTOMOX_SNAPSHOT_DIR_ENV, raising=False)
    yield
