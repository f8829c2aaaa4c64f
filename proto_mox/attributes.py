"""Attribute queries and the isolation markers derived from them."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from . import naming
from .syntax import Attribute


def contains(attributes: t.Iterable[Attribute], name: str) -> bool:
    """Return ``True`` if an attribute called *name* is present."""
    return any(attribute.name == name for attribute in attributes)


def removing(
    attributes: t.Iterable[Attribute], names: t.AbstractSet[str]
) -> tuple[Attribute, ...]:
    """Return *attributes* without those whose name is in *names*."""
    return tuple(attribute for attribute in attributes if attribute.name not in names)


def is_global_actor(name: str) -> bool:
    """Return ``True`` when *name* denotes a global execution domain."""
    return name == naming.MAIN_ACTOR_ATTRIBUTE or name.endswith(
        naming.GLOBAL_ACTOR_SUFFIX
    )


def has_global_actor(attributes: t.Iterable[Attribute]) -> bool:
    """Return ``True`` if any attribute confines to a global domain."""
    return any(is_global_actor(attribute.name) for attribute in attributes)


@dc.dataclass(frozen=True, slots=True)
class IsolationMarkers:
    """Per-member isolation flags, computed once from raw attributes."""

    exempt: bool = False
    main_actor: bool = False

    @classmethod
    def from_attributes(cls, attributes: t.Iterable[Attribute]) -> IsolationMarkers:
        """Scan *attributes* for the recognised isolation markers."""
        attrs = tuple(attributes)
        return cls(
            exempt=contains(attrs, naming.CONCURRENT_ATTRIBUTE),
            main_actor=contains(attrs, naming.MAIN_ACTOR_ATTRIBUTE),
        )


NO_MARKERS = IsolationMarkers()


def unavailable(message: str) -> Attribute:
    """Return ``@available(*, deprecated, message: "...")``."""
    return Attribute(
        naming.AVAILABLE_ATTRIBUTE,
        ("*", "deprecated", f'message: "{message}"'),
    )
