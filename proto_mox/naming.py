"""Reserved identifiers shared between generated code and the mocking engine.

The engine recognises these names verbatim, so changing any of them breaks
every previously generated mock.
"""

from __future__ import annotations

import typing as t

# Engine namespace and types
MOCKABLE: t.Final = "Mockable"
MOCKER: t.Final = "Mocker"
BUILDER: t.Final = "Builder"
MOCKER_SCOPE: t.Final = "MockerScope"
MOCKER_POLICY: t.Final = "MockerPolicy"
PARAMETER: t.Final = "Parameter"

# Engine members and labels
MOCKER_FIELD: t.Final = "mocker"
RESET: t.Final = "reset"
SCOPES: t.Final = "scopes"
ALL_SCOPES: t.Final = "all"
POLICY: t.Final = "policy"
KIND_LABEL: t.Final = "kind"
SET_KIND_LABEL: t.Final = "setKind"
MOCK: t.Final = "mock"
MOCK_THROWING: t.Final = "mockThrowing"
ADD_INVOCATION: t.Final = "addInvocation"
INVOCATION_LABEL: t.Final = "for"
VALUE_MATCHER: t.Final = "value"
ANY_MATCHER: t.Final = "any"
NEW_VALUE: t.Final = "newValue"
INIT: t.Final = "init"
SET: t.Final = "Set"

# Generated member identity suffixes
GETTER_SUFFIX: t.Final = "_get"
SETTER_SUFFIX: t.Final = "_set"

# Modifier keywords
NONISOLATED: t.Final = "nonisolated"
PRIVATE: t.Final = "private"
VISIBILITY_KEYWORDS: t.Final = frozenset(
    {"open", "public", "package", "internal", "fileprivate", "private"}
)

# Attribute names
CONCURRENT_ATTRIBUTE: t.Final = "concurrent"
MAIN_ACTOR_ATTRIBUTE: t.Final = "MainActor"
GLOBAL_ACTOR_SUFFIX: t.Final = "Actor"
AVAILABLE_ATTRIBUTE: t.Final = "available"

GIVEN_MESSAGE: t.Final = "Use given(_ service:) instead."
WHEN_MESSAGE: t.Final = "Use when(_ service:) instead."
VERIFY_MESSAGE: t.Final = "Use verify(_ service:) instead."


def member_identity(ordinal: int, name: str) -> str:
    """Return the engine-facing case name for the member at *ordinal*."""
    if ordinal < 1:
        msg = f"member ordinal must be >= 1, got {ordinal}"
        raise ValueError(msg)
    return f"m{ordinal}_{name}"
