"""Assemble the ``ReturnBuilder``, ``ActionBuilder`` and ``VerifyBuilder`` structs."""

from __future__ import annotations

import typing as t

from . import naming
from .builder_kind import BuilderKind
from .emitters import builder
from .isolation import resolve, storage_modifiers, type_modifiers
from .syntax import (
    Assign,
    InitializerDecl,
    MemberAccess,
    Name,
    Parameter,
    StructDecl,
    TypeRef,
    VariableDecl,
    engine_type,
)

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .requirements import Requirements
    from .syntax import Decl, ModifierSet


def build_builders(
    requirements: Requirements,
) -> tuple[StructDecl, StructDecl, StructDecl]:
    """Return one builder struct per :class:`BuilderKind`, in enum order."""
    ret, action, verify = (_builder_struct(kind, requirements) for kind in BuilderKind)
    return ret, action, verify


def _builder_struct(kind: BuilderKind, requirements: Requirements) -> StructDecl:
    member_modifiers = resolve(requirements)
    return StructDecl(
        name=kind.type_name,
        members=(
            _mocker_field(member_modifiers),
            _initializer(member_modifiers),
            *accessors(kind, requirements, member_modifiers),
        ),
        modifiers=type_modifiers(requirements),
        inherits=(engine_type(naming.BUILDER),),
    )


def accessors(
    kind: BuilderKind, requirements: Requirements, member_modifiers: ModifierSet
) -> tuple[Decl, ...]:
    """Return the *kind* accessors for every variable, then every function.

    Variables share *member_modifiers*; each function resolves its own so a
    ``@MainActor`` or ``@concurrent`` function keeps its isolation in every
    builder.
    """
    return (
        *(
            builder(variable, kind, requirements, identity, member_modifiers)
            for identity, variable in requirements.numbered_variables()
        ),
        *(
            builder(
                function,
                kind,
                requirements,
                identity,
                resolve(requirements, function.markers),
            )
            for identity, function in requirements.numbered_functions()
        ),
    )


def _mocker_field(member_modifiers: ModifierSet) -> VariableDecl:
    return VariableDecl(
        name=naming.MOCKER_FIELD,
        type=TypeRef(naming.MOCKER),
        modifiers=storage_modifiers(member_modifiers),
        binding="let",
    )


def _initializer(member_modifiers: ModifierSet) -> InitializerDecl:
    return InitializerDecl(
        parameters=(Parameter(label=naming.MOCKER_FIELD, type=TypeRef(naming.MOCKER)),),
        body=(
            Assign(
                MemberAccess(Name("self"), naming.MOCKER_FIELD),
                Name(naming.MOCKER_FIELD),
            ),
        ),
        modifiers=member_modifiers,
    )
