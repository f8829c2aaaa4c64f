"""Assemble the member list of the generated mock type."""

from __future__ import annotations

import typing as t

from . import attributes, naming
from .builder_kind import BuilderKind
from .emitters import implement
from .isolation import Surface, resolve, storage_modifiers, type_modifiers
from .syntax import (
    Accessor,
    Argument,
    Assign,
    FunctionDecl,
    IfLet,
    InitializerDecl,
    MemberAccess,
    Name,
    NilLiteral,
    Parameter,
    Return,
    TypeAliasDecl,
    TypeRef,
    VariableDecl,
    call,
    engine_type,
    implicit,
)

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .requirements import Requirements
    from .syntax import Decl, ModifierSet

_MOCKER = Name(naming.MOCKER_FIELD)


def build_mock_members(requirements: Requirements) -> tuple[Decl, ...]:
    """Return the mock type's members in their fixed order.

    Engine alias, engine field, the three interceptors, ``reset``, the
    default initializer, then conformances for initializers, functions and
    variables in source order.

    Raises
    ------
    MalformedMemberError
        If any member cannot be implemented; nothing is returned then.
    """
    member_modifiers = resolve(requirements)
    return (
        _mocker_alias(requirements),
        _mocker_field(member_modifiers),
        *(_interceptor(kind, member_modifiers) for kind in BuilderKind),
        _reset(member_modifiers),
        _default_init(requirements),
        *conformances(requirements),
    )


def conformances(requirements: Requirements) -> tuple[Decl, ...]:
    """Return implementations of every interface member."""
    return (
        *(implement(i, requirements) for i in requirements.initializers),
        *(
            implement(function, requirements, identity)
            for identity, function in requirements.numbered_functions()
        ),
        *(
            implement(variable, requirements, identity)
            for identity, variable in requirements.numbered_variables()
        ),
    )


def _mocker_alias(requirements: Requirements) -> TypeAliasDecl:
    return TypeAliasDecl(
        name=naming.MOCKER,
        value=engine_type(naming.MOCKER, requirements.mock_type),
        modifiers=type_modifiers(requirements),
    )


def _mocker_field(member_modifiers: ModifierSet) -> VariableDecl:
    return VariableDecl(
        name=naming.MOCKER_FIELD,
        type=None,
        modifiers=storage_modifiers(member_modifiers),
        binding="let",
        initializer=call(naming.MOCKER),
    )


def _interceptor(kind: BuilderKind, member_modifiers: ModifierSet) -> VariableDecl:
    """Return the deprecated ``_given``-style property for *kind*.

    The property is never meant to be read: the free ``given``/``when``/
    ``verify`` functions reach builders through it, and direct use produces
    a compile-time diagnostic naming the replacement.
    """
    return VariableDecl(
        name=kind.interceptor,
        type=TypeRef(kind.type_name),
        modifiers=member_modifiers,
        attributes=(attributes.unavailable(kind.message),),
        binding="var",
        accessors=(
            Accessor(
                "get",
                (
                    Return(
                        call(
                            implicit(naming.INIT),
                            Argument(naming.MOCKER_FIELD, _MOCKER),
                        )
                    ),
                ),
            ),
        ),
    )


def _reset(member_modifiers: ModifierSet) -> FunctionDecl:
    scopes = Parameter(
        label="_",
        name=naming.SCOPES,
        type=TypeRef(naming.SET, (engine_type(naming.MOCKER_SCOPE),)),
        default=implicit(naming.ALL_SCOPES),
    )
    return FunctionDecl(
        name=naming.RESET,
        parameters=(scopes,),
        returns=None,
        body=(
            call(
                MemberAccess(_MOCKER, naming.RESET),
                Argument(naming.SCOPES, Name(naming.SCOPES)),
            ),
        ),
        modifiers=member_modifiers,
    )


def _default_init(requirements: Requirements) -> InitializerDecl:
    policy = Parameter(
        label=naming.POLICY,
        type=engine_type(naming.MOCKER_POLICY, optional=True),
        default=NilLiteral(),
    )
    return InitializerDecl(
        parameters=(policy,),
        body=(
            IfLet(
                naming.POLICY,
                (
                    Assign(
                        MemberAccess(_MOCKER, naming.POLICY),
                        Name(naming.POLICY),
                    ),
                ),
            ),
        ),
        modifiers=resolve(requirements, surface=Surface.DEFAULT_INITIALIZER),
    )
