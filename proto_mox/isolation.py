"""Isolation rules deciding which generated declarations are ``nonisolated``.

Every generated member asks :func:`resolve` for its modifiers; no caller
adds or removes the isolation-exempt keyword on its own. The rules, in
precedence order:

1. Actor interfaces, and interfaces with individually exempt members, make
   every generated member exempt so the shared engine is reachable from any
   context.
2. Interfaces confined to a global actor make every generated member exempt.
3. Otherwise the interface modifiers are used unchanged.
4. A member marked ``@concurrent`` is exempt, and a member marked
   ``@MainActor`` is never exempt, whatever rules 1 to 3 decided.
5. The default initializer of an actor never becomes exempt; it keeps the
   interface modifiers verbatim.
"""

from __future__ import annotations

import enum
import typing as t

from . import naming
from .attributes import NO_MARKERS, IsolationMarkers
from .syntax import ModifierSet

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .requirements import Requirements


class IsolationRule(enum.StrEnum):
    """Which interface-wide rule produced the default member modifiers."""

    ACTOR = "actor"
    EXEMPT_MEMBERS = "exempt-members"
    GLOBAL_ACTOR = "global-actor"
    NONE = "none"


class Surface(enum.StrEnum):
    """Kinds of generated declarations with distinct isolation handling."""

    MEMBER = "member"
    DEFAULT_INITIALIZER = "default-initializer"


def matched_rule(requirements: Requirements) -> IsolationRule:
    """Return the first interface-wide rule that applies to *requirements*."""
    if requirements.is_actor:
        return IsolationRule.ACTOR
    if requirements.has_isolation_exempt_members:
        return IsolationRule.EXEMPT_MEMBERS
    if requirements.has_global_isolation_attribute:
        return IsolationRule.GLOBAL_ACTOR
    return IsolationRule.NONE


def resolve(
    requirements: Requirements,
    markers: IsolationMarkers = NO_MARKERS,
    *,
    surface: Surface = Surface.MEMBER,
) -> ModifierSet:
    """Return the modifiers for one generated declaration.

    Parameters
    ----------
    requirements:
        The interface being mocked.
    markers:
        Isolation markers of the member the declaration stands for. Builder
        plumbing and interface-level members pass none.
    surface:
        :attr:`Surface.DEFAULT_INITIALIZER` for the mock's default
        initializer, which an actor may not exempt.
    """
    if surface is Surface.DEFAULT_INITIALIZER and requirements.is_actor:
        return requirements.modifiers

    modifiers = requirements.modifiers
    if matched_rule(requirements) is not IsolationRule.NONE:
        modifiers = modifiers.adding(naming.NONISOLATED)
    if markers.exempt:
        modifiers = modifiers.adding(naming.NONISOLATED)
    if markers.main_actor:
        modifiers = modifiers.removing(naming.NONISOLATED)
    return modifiers


def is_exempt(modifiers: ModifierSet) -> bool:
    """Return ``True`` if *modifiers* carry the isolation-exempt keyword."""
    return naming.NONISOLATED in modifiers


def type_modifiers(requirements: Requirements) -> ModifierSet:
    """Return modifiers for generated type declarations.

    Types cannot be ``nonisolated``, so only the interface's other modifiers
    carry over.
    """
    return requirements.modifiers.removing(naming.NONISOLATED)


def storage_modifiers(member_modifiers: ModifierSet) -> ModifierSet:
    """Return modifiers for the private engine field given *member_modifiers*."""
    return ModifierSet((naming.PRIVATE, *member_modifiers.without_visibility()))
