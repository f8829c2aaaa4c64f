"""Entry points turning :class:`Requirements` into a generated mock module."""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import os
import typing as t
from pathlib import Path

from .builder_types import build_builders
from .errors import NondeterministicOutputError, ProtoMoxError
from .isolation import matched_rule
from .mock_type import build_mock_members
from .syntax import StructDecl, to_dict

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .requirements import Requirements
    from .syntax import Decl

logger = logging.getLogger(__name__)

PROTOMOX_CHECK_DETERMINISM_ENV = "PROTOMOX_CHECK_DETERMINISM"
PROTOMOX_SNAPSHOT_DIR_ENV = "PROTOMOX_SNAPSHOT_DIR"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})


@dc.dataclass(frozen=True, slots=True)
class GeneratedModule:
    """The generated mock: its own members and the three builder structs.

    The builder structs are meant to be nested inside the mock type, where
    the ``Mocker`` alias they reference is declared.
    """

    interface: str
    mock_members: tuple[Decl, ...]
    builders: tuple[StructDecl, StructDecl, StructDecl]

    def to_dict(self) -> dict[str, t.Any]:
        """Return a JSON-serializable mapping of both declaration lists."""
        return {
            "interface": self.interface,
            "mock_members": to_dict(self.mock_members),
            "builders": to_dict(self.builders),
        }

    def to_json(self) -> str:
        """Return the module as indented JSON."""
        return json.dumps(self.to_dict(), indent=2) + "\n"

    def save(self, path: Path) -> None:
        """Write the module to *path* as JSON, creating directories as needed."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")


def generate(requirements: Requirements) -> GeneratedModule:
    """Generate the mock module for *requirements*.

    Raises
    ------
    MalformedMemberError
        If a member cannot be mapped to a declaration. No partial module is
        produced.
    """
    logger.debug(
        "Generating mock for %s: %d initializers, %d functions, %d variables, "
        "isolation rule %s",
        requirements.name,
        len(requirements.initializers),
        len(requirements.functions),
        len(requirements.variables),
        matched_rule(requirements),
    )
    try:
        mock_members = build_mock_members(requirements)
        builders = build_builders(requirements)
    except ProtoMoxError as exc:
        logger.debug("Generation for %s failed: %s", requirements.name, exc)
        raise
    return GeneratedModule(
        interface=requirements.name,
        mock_members=mock_members,
        builders=builders,
    )


def _parse_bool(raw: str, env_name: str) -> bool:
    value = raw.strip().casefold()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    msg = f"{env_name} must be a boolean flag, got {raw!r}"
    raise ValueError(msg)


@dc.dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """
    Options for :class:`MockGenerator`.

    Attributes
    ----------
    check_determinism : bool
        Generate every module twice and fail when the runs differ.
    snapshot_dir : Path | None
        Directory receiving a ``<Interface>.json`` snapshot per module.

    Raises
    ------
    ValueError
        If *snapshot_dir* exists and is not a directory.
    """

    check_determinism: bool = False
    snapshot_dir: Path | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.snapshot_dir is not None and self.snapshot_dir.exists():
            if not self.snapshot_dir.is_dir():
                msg = f"Snapshot path is not a directory: {self.snapshot_dir}"
                raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: t.Mapping[str, str] | None = None) -> GeneratorConfig:
        """Build a configuration from ``PROTOMOX_*`` environment variables."""
        env = os.environ if environ is None else environ
        raw_check = env.get(PROTOMOX_CHECK_DETERMINISM_ENV)
        raw_dir = env.get(PROTOMOX_SNAPSHOT_DIR_ENV)
        return cls(
            check_determinism=(
                False
                if raw_check is None
                else _parse_bool(raw_check, PROTOMOX_CHECK_DETERMINISM_ENV)
            ),
            snapshot_dir=Path(raw_dir) if raw_dir else None,
        )


class MockGenerator:
    """Generate mock modules according to a :class:`GeneratorConfig`."""

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self.config = config if config is not None else GeneratorConfig()
        self.generated: list[GeneratedModule] = []

    def generate(self, requirements: Requirements) -> GeneratedModule:
        """Generate, optionally double-check and snapshot one module."""
        module = generate(requirements)
        if self.config.check_determinism:
            self._check_determinism(requirements, module)
        if self.config.snapshot_dir is not None:
            path = self.snapshot_path(requirements.name)
            module.save(path)
            logger.debug("Wrote mock snapshot for %s to %s", requirements.name, path)
        self.generated.append(module)
        return module

    def snapshot_path(self, interface: str) -> Path:
        """Return where the snapshot for *interface* is written.

        Raises
        ------
        RuntimeError
            If no snapshot directory is configured.
        ValueError
            If *interface* is not an identifier, so it cannot name a file
            inside the snapshot directory.
        """
        if self.config.snapshot_dir is None:
            msg = "snapshot_dir is not configured"
            raise RuntimeError(msg)
        if not interface.isidentifier():
            msg = f"Interface name is not a valid identifier: {interface!r}"
            raise ValueError(msg)
        return self.config.snapshot_dir / f"{interface}.json"

    @staticmethod
    def _check_determinism(
        requirements: Requirements, module: GeneratedModule
    ) -> None:
        again = generate(requirements)
        if again.to_json() != module.to_json():
            msg = f"Generating {requirements.name!r} twice produced different output"
            raise NondeterministicOutputError(msg)
