"""Per-member emitters: conformance implementations and builder accessors."""

from __future__ import annotations

import typing as t

from . import naming
from .errors import MalformedMemberError
from .isolation import resolve
from .requirements import (
    FunctionRequirement,
    InitializerRequirement,
    VariableRequirement,
)
from .syntax import (
    VOID,
    Accessor,
    Argument,
    Call,
    FunctionDecl,
    FunctionType,
    InitializerDecl,
    MemberAccess,
    Name,
    Parameter,
    Return,
    Try,
    TypeLike,
    TypeRef,
    VariableDecl,
    call,
    engine_type,
    implicit,
)

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .builder_kind import BuilderKind
    from .requirements import Member, Requirements
    from .syntax import Decl, Expr, ModifierSet, Stmt

_MOCKER = Name(naming.MOCKER_FIELD)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate(member: Member) -> None:
    """Raise :class:`MalformedMemberError` if *member* cannot be generated."""
    match member:
        case FunctionRequirement():
            _check_name(member.name)
            _check_parameters(member.name, member.parameters)
            if len(set(member.generic_parameters)) != len(member.generic_parameters):
                raise MalformedMemberError(member.name, "duplicate generic parameter")
        case VariableRequirement():
            _check_name(member.name)
            if member.type is None:
                raise MalformedMemberError(member.name, "property has no type")
            if member.is_settable and (member.is_async or member.is_throwing):
                raise MalformedMemberError(
                    member.name, "settable properties cannot be async or throwing"
                )
        case InitializerRequirement():
            _check_parameters(naming.INIT, member.parameters)
        case _:
            raise MalformedMemberError(
                repr(member), f"unsupported member kind {type(member).__name__}"
            )


def _check_name(name: str) -> None:
    if not name or not name.isidentifier():
        raise MalformedMemberError(name, "member name is not a valid identifier")


def _check_parameters(owner: str, parameters: tuple[Parameter, ...]) -> None:
    seen: set[str] = set()
    for parameter in parameters:
        local = parameter.local_name
        if local == "_" or not local.isidentifier():
            raise MalformedMemberError(
                owner, f"parameter local name {local!r} is not a usable identifier"
            )
        if parameter.type is None:
            raise MalformedMemberError(owner, f"parameter {local!r} has no type")
        if parameter.inout:
            raise MalformedMemberError(
                owner, f"inout parameter {local!r} cannot be matched by builders"
            )
        if local in seen:
            raise MalformedMemberError(owner, f"duplicate parameter name {local!r}")
        seen.add(local)


# ---------------------------------------------------------------------------
# Conformance implementations
# ---------------------------------------------------------------------------


def implement(
    member: Member, requirements: Requirements, identity: str | None = None
) -> Decl:
    """Return the mock's implementation of *member*.

    *identity* is the engine-facing member name and is required for
    functions and variables.
    """
    validate(member)
    modifiers = resolve(requirements, member.markers)
    match member:
        case FunctionRequirement():
            return _implement_function(member, _require(identity, member), modifiers)
        case VariableRequirement():
            return _implement_variable(member, _require(identity, member), modifiers)
        case InitializerRequirement():
            return InitializerDecl(
                parameters=_mirror(member.parameters),
                body=(),
                modifiers=modifiers,
                is_failable=member.is_failable,
                is_async=member.is_async,
                is_throwing=member.is_throwing,
            )
    msg = f"unreachable member kind {type(member).__name__}"  # pragma: no cover
    raise AssertionError(msg)  # pragma: no cover


def _require(identity: str | None, member: Member) -> str:
    if identity is None:
        raise MalformedMemberError(member.name, "member identity is required")
    return identity


def _mirror(parameters: tuple[Parameter, ...]) -> tuple[Parameter, ...]:
    """Copy *parameters* without defaults, as conformances require."""
    return tuple(
        Parameter(
            label=p.label,
            type=p.type,
            name=p.name,
            variadic=p.variadic,
        )
        for p in parameters
    )


def _wrap_value(expression: Expr) -> Call:
    return call(implicit(naming.VALUE_MATCHER), Argument(None, expression))


def _engine_lookup(identity: Expr, *, throwing: bool) -> Expr:
    entry = naming.MOCK_THROWING if throwing else naming.MOCK
    lookup = call(MemberAccess(_MOCKER, entry), Argument(None, identity))
    return Try(lookup) if throwing else lookup


def _is_void(returns: TypeLike | None) -> bool:
    return returns is None or returns == VOID


def _implement_function(
    function: FunctionRequirement, identity: str, modifiers: ModifierSet
) -> FunctionDecl:
    recorded = call(
        implicit(identity),
        *(
            Argument(p.local_name, _wrap_value(Name(p.local_name)))
            for p in function.parameters
        ),
    )
    lookup = _engine_lookup(recorded, throwing=function.is_throwing)
    body: tuple[Stmt, ...] = (
        (lookup,) if _is_void(function.returns) else (Return(lookup),)
    )
    return FunctionDecl(
        name=function.name,
        parameters=_mirror(function.parameters),
        returns=function.returns,
        body=body,
        modifiers=modifiers,
        generic_parameters=function.generic_parameters,
        is_async=function.is_async,
        is_throwing=function.is_throwing,
    )


def _implement_variable(
    variable: VariableRequirement, identity: str, modifiers: ModifierSet
) -> VariableDecl:
    getter = Accessor(
        "get",
        (
            Return(
                _engine_lookup(
                    implicit(identity + naming.GETTER_SUFFIX),
                    throwing=variable.is_throwing,
                )
            ),
        ),
        is_async=variable.is_async,
        is_throwing=variable.is_throwing,
    )
    accessors: tuple[Accessor, ...] = (getter,)
    if variable.is_settable:
        recorded = call(
            implicit(identity + naming.SETTER_SUFFIX),
            Argument(None, _wrap_value(Name(naming.NEW_VALUE))),
        )
        setter = Accessor(
            "set",
            (
                call(
                    MemberAccess(_MOCKER, naming.ADD_INVOCATION),
                    Argument(naming.INVOCATION_LABEL, recorded),
                ),
            ),
        )
        accessors = (getter, setter)
    return VariableDecl(
        name=variable.name,
        type=variable.type,
        modifiers=modifiers,
        binding="var",
        accessors=accessors,
    )


# ---------------------------------------------------------------------------
# Builder accessors
# ---------------------------------------------------------------------------


def builder(
    member: Member,
    kind: BuilderKind,
    requirements: Requirements,
    identity: str,
    modifiers: ModifierSet,
) -> Decl:
    """Return the *kind* builder accessor for *member*.

    *modifiers* are the already resolved modifiers for this accessor.
    Initializers have no builder accessors and are rejected.
    """
    validate(member)
    match member:
        case FunctionRequirement():
            return _function_builder(member, kind, requirements, identity, modifiers)
        case VariableRequirement():
            return _variable_builder(member, kind, requirements, identity, modifiers)
        case _:
            raise MalformedMemberError(member.name, "initializers have no builders")


def _value_type(parameter: Parameter) -> TypeLike:
    """Return the type a parameter has inside the body; variadics are arrays."""
    assert parameter.type is not None  # noqa: S101 - checked by validate()
    if parameter.variadic:
        return TypeRef("Array", (parameter.type,))
    return parameter.type


def _matcher_type(parameter: Parameter) -> TypeRef:
    """Return ``Mockable.Parameter<T>`` for *parameter*."""
    return engine_type(naming.PARAMETER, _value_type(parameter))


def _init_handle(*arguments: Argument) -> Return:
    return Return(
        call(implicit(naming.INIT), Argument(None, _MOCKER), *arguments)
    )


def _function_builder(
    function: FunctionRequirement,
    kind: BuilderKind,
    requirements: Requirements,
    identity: str,
    modifiers: ModifierSet,
) -> FunctionDecl:
    returns = VOID if function.returns is None else function.returns
    signature = FunctionType(
        parameters=tuple(_value_type(p) for p in function.parameters),
        returns=returns,
        is_async=function.is_async,
        is_throwing=function.is_throwing,
    )
    handle = engine_type(
        kind.function_handle(throwing=function.is_throwing),
        requirements.mock_type,
        TypeRef(kind.type_name),
        returns,
        signature,
    )
    parameters = tuple(
        Parameter(label=p.label, type=_matcher_type(p), name=p.name)
        for p in function.parameters
    )
    scoped = call(
        implicit(identity),
        *(Argument(p.local_name, Name(p.local_name)) for p in function.parameters),
    )
    return FunctionDecl(
        name=function.name,
        parameters=parameters,
        returns=handle,
        body=(_init_handle(Argument(naming.KIND_LABEL, scoped)),),
        modifiers=modifiers,
        generic_parameters=function.generic_parameters,
    )


def _variable_builder(
    variable: VariableRequirement,
    kind: BuilderKind,
    requirements: Requirements,
    identity: str,
    modifiers: ModifierSet,
) -> VariableDecl:
    assert variable.type is not None  # noqa: S101 - checked by validate()
    handle = engine_type(
        kind.property_handle(),
        requirements.mock_type,
        TypeRef(kind.type_name),
        variable.type,
    )
    arguments = [Argument(naming.KIND_LABEL, implicit(identity + naming.GETTER_SUFFIX))]
    if variable.is_settable:
        arguments.append(
            Argument(
                naming.SET_KIND_LABEL,
                call(
                    implicit(identity + naming.SETTER_SUFFIX),
                    Argument(None, implicit(naming.ANY_MATCHER)),
                ),
            )
        )
    return VariableDecl(
        name=variable.name,
        type=handle,
        modifiers=modifiers,
        binding="var",
        accessors=(Accessor("get", (_init_handle(*arguments),)),),
    )
