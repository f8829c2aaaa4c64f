"""Immutable declaration tree handed to the source back-end.

The nodes mirror the small subset of declaration syntax a generated mock
needs: type aliases, stored and computed properties, functions,
initializers and structs, plus the handful of expressions their bodies use.
Every node is a frozen dataclass, so trees can be shared and compared
freely.
"""

from __future__ import annotations

import dataclasses as dc
import typing as t

from . import naming


@dc.dataclass(frozen=True, slots=True)
class ModifierSet:
    """Ordered, duplicate-free set of declaration modifier keywords."""

    items: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Drop repeated keywords, keeping the first occurrence."""
        object.__setattr__(self, "items", tuple(dict.fromkeys(self.items)))

    @classmethod
    def of(cls, *keywords: str) -> ModifierSet:
        """Build a set from *keywords* in the given order."""
        return cls(tuple(keywords))

    def __contains__(self, keyword: object) -> bool:
        return keyword in self.items

    def __iter__(self) -> t.Iterator[str]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def adding(self, keyword: str) -> ModifierSet:
        """Return a copy with *keyword* appended unless already present."""
        if keyword in self.items:
            return self
        return ModifierSet((*self.items, keyword))

    def removing(self, *keywords: str) -> ModifierSet:
        """Return a copy without any of *keywords*."""
        return ModifierSet(tuple(k for k in self.items if k not in keywords))

    def without_visibility(self) -> ModifierSet:
        """Return a copy with access-level keywords stripped."""
        return self.removing(*naming.VISIBILITY_KEYWORDS)


@dc.dataclass(frozen=True, slots=True)
class Attribute:
    """An attribute such as ``@MainActor`` or ``@available(*, deprecated)``."""

    name: str
    arguments: tuple[str, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class TypeRef:
    """A nominal type reference, optionally generic and optional."""

    name: str
    arguments: tuple[TypeLike, ...] = ()
    optional: bool = False

    @property
    def spelled(self) -> str:
        """Return the conventional source spelling, for messages and tests."""
        text = self.name
        if self.arguments:
            text += "<" + ", ".join(arg.spelled for arg in self.arguments) + ">"
        return f"{text}?" if self.optional else text


@dc.dataclass(frozen=True, slots=True)
class FunctionType:
    """A function type used as a generic argument of builder handles."""

    parameters: tuple[TypeLike, ...]
    returns: TypeLike
    is_async: bool = False
    is_throwing: bool = False

    @property
    def spelled(self) -> str:
        """Return the conventional source spelling."""
        effects = ""
        if self.is_async:
            effects += " async"
        if self.is_throwing:
            effects += " throws"
        params = ", ".join(p.spelled for p in self.parameters)
        return f"({params}){effects} -> {self.returns.spelled}"


TypeLike: t.TypeAlias = TypeRef | FunctionType

VOID = TypeRef("Void")


# ---------------------------------------------------------------------------
# Expressions and statements
# ---------------------------------------------------------------------------


@dc.dataclass(frozen=True, slots=True)
class Name:
    """Reference to a declaration by name."""

    identifier: str


@dc.dataclass(frozen=True, slots=True)
class MemberAccess:
    """``base.name``; a ``None`` base denotes an implicit member (``.all``)."""

    base: Expr | None
    name: str


@dc.dataclass(frozen=True, slots=True)
class Argument:
    """A call argument with an optional label."""

    label: str | None
    value: Expr


@dc.dataclass(frozen=True, slots=True)
class Call:
    """A function call expression."""

    callee: Expr
    arguments: tuple[Argument, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Try:
    """A ``try`` marked expression."""

    expression: Expr


@dc.dataclass(frozen=True, slots=True)
class NilLiteral:
    """The ``nil`` literal."""


Expr: t.TypeAlias = Name | MemberAccess | Call | Try | NilLiteral


@dc.dataclass(frozen=True, slots=True)
class Assign:
    """Assignment statement."""

    target: Expr
    value: Expr


@dc.dataclass(frozen=True, slots=True)
class Return:
    """Return statement."""

    value: Expr | None = None


@dc.dataclass(frozen=True, slots=True)
class IfLet:
    """Run *body* when the optional named *name* holds a value."""

    name: str
    body: tuple[Stmt, ...]


Stmt: t.TypeAlias = Expr | Assign | Return | IfLet


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dc.dataclass(frozen=True, slots=True)
class Parameter:
    """A function or initializer parameter.

    ``label`` is the argument label (``"_"`` for none) and ``name`` the local
    name when it differs from the label.
    """

    label: str
    type: TypeLike | None
    name: str | None = None
    default: Expr | None = None
    variadic: bool = False
    inout: bool = False

    @property
    def local_name(self) -> str:
        """Return the name the parameter is bound to inside the body."""
        return self.name if self.name is not None else self.label

    @property
    def call_label(self) -> str | None:
        """Return the label used at call sites, or ``None`` for ``_``."""
        return None if self.label == "_" else self.label


@dc.dataclass(frozen=True, slots=True)
class TypeAliasDecl:
    """``typealias name = value``."""

    name: str
    value: TypeRef
    modifiers: ModifierSet = ModifierSet()


@dc.dataclass(frozen=True, slots=True)
class Accessor:
    """A ``get`` or ``set`` accessor of a computed property."""

    kind: t.Literal["get", "set"]
    body: tuple[Stmt, ...]
    is_async: bool = False
    is_throwing: bool = False


@dc.dataclass(frozen=True, slots=True)
class VariableDecl:
    """A stored (``initializer``) or computed (``accessors``) property."""

    name: str
    type: TypeLike | None
    modifiers: ModifierSet = ModifierSet()
    attributes: tuple[Attribute, ...] = ()
    binding: t.Literal["let", "var"] = "var"
    initializer: Expr | None = None
    accessors: tuple[Accessor, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class FunctionDecl:
    """A function declaration."""

    name: str
    parameters: tuple[Parameter, ...]
    returns: TypeLike | None
    body: tuple[Stmt, ...]
    modifiers: ModifierSet = ModifierSet()
    attributes: tuple[Attribute, ...] = ()
    generic_parameters: tuple[str, ...] = ()
    is_async: bool = False
    is_throwing: bool = False


@dc.dataclass(frozen=True, slots=True)
class InitializerDecl:
    """An initializer declaration."""

    parameters: tuple[Parameter, ...]
    body: tuple[Stmt, ...]
    modifiers: ModifierSet = ModifierSet()
    attributes: tuple[Attribute, ...] = ()
    is_failable: bool = False
    is_async: bool = False
    is_throwing: bool = False


@dc.dataclass(frozen=True, slots=True)
class StructDecl:
    """A struct declaration with its member list."""

    name: str
    members: tuple[Decl, ...]
    modifiers: ModifierSet = ModifierSet()
    inherits: tuple[TypeRef, ...] = ()


Decl: t.TypeAlias = TypeAliasDecl | VariableDecl | FunctionDecl | InitializerDecl | StructDecl


def to_dict(node: object) -> t.Any:  # noqa: ANN401 - recursive JSON value
    """Return a JSON-compatible representation of *node*.

    Dataclass nodes become mappings tagged with their class name under
    ``"node"``; field order follows the dataclass definition, so the output
    is stable for identical trees.
    """
    if isinstance(node, ModifierSet):
        return list(node.items)
    if isinstance(node, tuple):
        return [to_dict(item) for item in node]
    if dc.is_dataclass(node) and not isinstance(node, type):
        data: dict[str, t.Any] = {"node": type(node).__name__}
        for field in dc.fields(node):
            data[field.name] = to_dict(getattr(node, field.name))
        return data
    return node


def implicit(name: str) -> MemberAccess:
    """Return the implicit member expression ``.name``."""
    return MemberAccess(None, name)


def call(callee: Expr | str, *arguments: Argument) -> Call:
    """Build a call, accepting a plain name for *callee*."""
    target = Name(callee) if isinstance(callee, str) else callee
    return Call(target, arguments)


def engine_type(name: str, *arguments: TypeLike, optional: bool = False) -> TypeRef:
    """Return ``Mockable.<name>`` with *arguments*."""
    return TypeRef(f"{naming.MOCKABLE}.{name}", arguments, optional)
