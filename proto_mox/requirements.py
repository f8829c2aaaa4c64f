"""Normalized description of one interface to be mocked.

The front-end resolves every signature and normalizes the concurrency
attributes before handing a :class:`Requirements` value to the generator.
:meth:`Requirements.from_mapping` accepts the JSON-compatible form of that
description and fills in the derived concurrency facts when the caller does
not state them.
"""

from __future__ import annotations

import dataclasses as dc
import typing as t

from . import attributes as attrs
from . import naming
from .errors import RequirementsError
from .syntax import Attribute, FunctionType, ModifierSet, Parameter, TypeLike, TypeRef


def _markers_field() -> t.Any:  # noqa: ANN401 - dataclass field factory
    return dc.field(init=False, default=attrs.NO_MARKERS, repr=False, compare=False)


@dc.dataclass(frozen=True, slots=True)
class FunctionRequirement:
    """A method declared by the interface."""

    name: str
    parameters: tuple[Parameter, ...] = ()
    returns: TypeLike | None = None
    is_async: bool = False
    is_throwing: bool = False
    generic_parameters: tuple[str, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    markers: attrs.IsolationMarkers = _markers_field()

    def __post_init__(self) -> None:
        """Derive isolation markers from the raw attributes."""
        markers = attrs.IsolationMarkers.from_attributes(self.attributes)
        object.__setattr__(self, "markers", markers)


@dc.dataclass(frozen=True, slots=True)
class VariableRequirement:
    """A property declared by the interface."""

    name: str
    type: TypeLike | None
    is_settable: bool = False
    is_async: bool = False
    is_throwing: bool = False
    attributes: tuple[Attribute, ...] = ()
    markers: attrs.IsolationMarkers = _markers_field()

    def __post_init__(self) -> None:
        """Derive isolation markers from the raw attributes."""
        markers = attrs.IsolationMarkers.from_attributes(self.attributes)
        object.__setattr__(self, "markers", markers)


@dc.dataclass(frozen=True, slots=True)
class InitializerRequirement:
    """An initializer declared by the interface."""

    parameters: tuple[Parameter, ...] = ()
    is_failable: bool = False
    is_async: bool = False
    is_throwing: bool = False
    attributes: tuple[Attribute, ...] = ()
    markers: attrs.IsolationMarkers = _markers_field()

    def __post_init__(self) -> None:
        """Derive isolation markers from the raw attributes."""
        markers = attrs.IsolationMarkers.from_attributes(self.attributes)
        object.__setattr__(self, "markers", markers)

    @property
    def name(self) -> str:
        """Return ``init``, the name every initializer shares."""
        return naming.INIT


Member: t.TypeAlias = FunctionRequirement | VariableRequirement | InitializerRequirement


@dc.dataclass(frozen=True, slots=True)
class Requirements:
    """Everything the generator needs to know about one interface."""

    name: str
    mock_type: TypeRef
    modifiers: ModifierSet = ModifierSet()
    attributes: tuple[Attribute, ...] = ()
    is_actor: bool = False
    has_isolation_exempt_members: bool = False
    has_global_isolation_attribute: bool = False
    functions: tuple[FunctionRequirement, ...] = ()
    variables: tuple[VariableRequirement, ...] = ()
    initializers: tuple[InitializerRequirement, ...] = ()

    def numbered_functions(self) -> t.Iterator[tuple[str, FunctionRequirement]]:
        """Yield ``(identity, function)`` pairs in source order."""
        for ordinal, function in enumerate(self.functions, start=1):
            yield naming.member_identity(ordinal, function.name), function

    def numbered_variables(self) -> t.Iterator[tuple[str, VariableRequirement]]:
        """Yield ``(identity, variable)`` pairs; ordinals continue after functions."""
        start = len(self.functions) + 1
        for ordinal, variable in enumerate(self.variables, start=start):
            yield naming.member_identity(ordinal, variable.name), variable

    # ------------------------------------------------------------------
    # Mapping form
    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, data: t.Mapping[str, t.Any]) -> Requirements:
        """Construct from the JSON-compatible front-end description.

        ``has_global_isolation_attribute`` defaults to whether any interface
        attribute names a global actor, and ``has_isolation_exempt_members``
        to whether any function carries ``@concurrent``.

        Raises
        ------
        RequirementsError
            If required keys are missing or values have the wrong shape.
        """
        try:
            interface_attributes = _attributes_from(data.get("attributes", ()))
            functions = tuple(_function_from(f) for f in data.get("functions", ()))
            variables = tuple(_variable_from(v) for v in data.get("variables", ()))
            initializers = tuple(
                _initializer_from(i) for i in data.get("initializers", ())
            )
            global_default = attrs.has_global_actor(interface_attributes)
            exempt_default = any(f.markers.exempt for f in functions)
            return cls(
                name=_require_str(data, "name"),
                mock_type=_type_from(data["mock_type"]),
                modifiers=ModifierSet(tuple(_strings(data.get("modifiers", ())))),
                attributes=interface_attributes,
                is_actor=_flag(data, "is_actor", default=False),
                has_isolation_exempt_members=_flag(
                    data, "has_isolation_exempt_members", default=exempt_default
                ),
                has_global_isolation_attribute=_flag(
                    data, "has_global_isolation_attribute", default=global_default
                ),
                functions=functions,
                variables=variables,
                initializers=initializers,
            )
        except KeyError as exc:
            msg = f"Requirements mapping is missing required key {exc.args[0]!r}"
            raise RequirementsError(msg) from exc
        except (TypeError, AttributeError) as exc:
            msg = f"Requirements mapping is malformed: {exc}"
            raise RequirementsError(msg) from exc

    def to_dict(self) -> dict[str, t.Any]:
        """Return the mapping form accepted by :meth:`from_mapping`."""
        return {
            "name": self.name,
            "mock_type": _type_to(self.mock_type),
            "modifiers": list(self.modifiers),
            "attributes": [_attribute_to(a) for a in self.attributes],
            "is_actor": self.is_actor,
            "has_isolation_exempt_members": self.has_isolation_exempt_members,
            "has_global_isolation_attribute": self.has_global_isolation_attribute,
            "functions": [
                {
                    "name": f.name,
                    "parameters": [_parameter_to(p) for p in f.parameters],
                    "returns": None if f.returns is None else _type_to(f.returns),
                    "is_async": f.is_async,
                    "is_throwing": f.is_throwing,
                    "generic_parameters": list(f.generic_parameters),
                    "attributes": [_attribute_to(a) for a in f.attributes],
                }
                for f in self.functions
            ],
            "variables": [
                {
                    "name": v.name,
                    "type": None if v.type is None else _type_to(v.type),
                    "is_settable": v.is_settable,
                    "is_async": v.is_async,
                    "is_throwing": v.is_throwing,
                    "attributes": [_attribute_to(a) for a in v.attributes],
                }
                for v in self.variables
            ],
            "initializers": [
                {
                    "parameters": [_parameter_to(p) for p in i.parameters],
                    "is_failable": i.is_failable,
                    "is_async": i.is_async,
                    "is_throwing": i.is_throwing,
                    "attributes": [_attribute_to(a) for a in i.attributes],
                }
                for i in self.initializers
            ],
        }


# ---------------------------------------------------------------------------
# Mapping helpers
# ---------------------------------------------------------------------------


def _require_str(data: t.Mapping[str, t.Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        msg = f"{key!r} must be a string, got {type(value).__name__}"
        raise TypeError(msg)
    return value


def _flag(data: t.Mapping[str, t.Any], key: str, *, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        msg = f"{key!r} must be a boolean, got {type(value).__name__}"
        raise TypeError(msg)
    return value


def _strings(values: t.Iterable[t.Any]) -> t.Iterator[str]:
    for value in values:
        if not isinstance(value, str):
            msg = f"expected a string, got {type(value).__name__}"
            raise TypeError(msg)
        yield value


def _type_from(raw: t.Any) -> TypeRef:  # noqa: ANN401 - untyped JSON input
    """Parse a type given as a plain name or a ``{"name": ...}`` mapping."""
    parsed = _type_like_from(raw)
    if not isinstance(parsed, TypeRef):
        msg = "expected a nominal type"
        raise TypeError(msg)
    return parsed


def _type_like_from(raw: t.Any) -> TypeLike:  # noqa: ANN401 - untyped JSON input
    if isinstance(raw, str):
        return TypeRef(raw)
    if "returns" in raw:
        return FunctionType(
            parameters=tuple(_type_like_from(p) for p in raw.get("parameters", ())),
            returns=_type_like_from(raw["returns"]),
            is_async=_flag(raw, "is_async", default=False),
            is_throwing=_flag(raw, "is_throwing", default=False),
        )
    return TypeRef(
        name=_require_str(raw, "name"),
        arguments=tuple(_type_like_from(a) for a in raw.get("arguments", ())),
        optional=_flag(raw, "optional", default=False),
    )


def _type_to(value: TypeLike) -> t.Any:  # noqa: ANN401 - JSON output
    if isinstance(value, FunctionType):
        return {
            "parameters": [_type_to(p) for p in value.parameters],
            "returns": _type_to(value.returns),
            "is_async": value.is_async,
            "is_throwing": value.is_throwing,
        }
    if not value.arguments and not value.optional:
        return value.name
    return {
        "name": value.name,
        "arguments": [_type_to(a) for a in value.arguments],
        "optional": value.optional,
    }


def _attributes_from(raw: t.Iterable[t.Any]) -> tuple[Attribute, ...]:
    result: list[Attribute] = []
    for item in raw:
        if isinstance(item, str):
            result.append(Attribute(item.removeprefix("@")))
        else:
            result.append(
                Attribute(
                    _require_str(item, "name").removeprefix("@"),
                    tuple(_strings(item.get("arguments", ()))),
                )
            )
    return tuple(result)


def _attribute_to(attribute: Attribute) -> t.Any:  # noqa: ANN401 - JSON output
    if not attribute.arguments:
        return attribute.name
    return {"name": attribute.name, "arguments": list(attribute.arguments)}


def _parameter_from(raw: t.Mapping[str, t.Any]) -> Parameter:
    raw_type = raw.get("type")
    return Parameter(
        label=_require_str(raw, "label"),
        name=raw.get("name"),
        type=None if raw_type is None else _type_like_from(raw_type),
        variadic=_flag(raw, "variadic", default=False),
        inout=_flag(raw, "inout", default=False),
    )


def _parameter_to(parameter: Parameter) -> dict[str, t.Any]:
    return {
        "label": parameter.label,
        "name": parameter.name,
        "type": None if parameter.type is None else _type_to(parameter.type),
        "variadic": parameter.variadic,
        "inout": parameter.inout,
    }


def _function_from(raw: t.Mapping[str, t.Any]) -> FunctionRequirement:
    returns = raw.get("returns")
    return FunctionRequirement(
        name=_require_str(raw, "name"),
        parameters=tuple(_parameter_from(p) for p in raw.get("parameters", ())),
        returns=None if returns is None else _type_like_from(returns),
        is_async=_flag(raw, "is_async", default=False),
        is_throwing=_flag(raw, "is_throwing", default=False),
        generic_parameters=tuple(_strings(raw.get("generic_parameters", ()))),
        attributes=_attributes_from(raw.get("attributes", ())),
    )


def _variable_from(raw: t.Mapping[str, t.Any]) -> VariableRequirement:
    raw_type = raw.get("type")
    return VariableRequirement(
        name=_require_str(raw, "name"),
        type=None if raw_type is None else _type_like_from(raw_type),
        is_settable=_flag(raw, "is_settable", default=False),
        is_async=_flag(raw, "is_async", default=False),
        is_throwing=_flag(raw, "is_throwing", default=False),
        attributes=_attributes_from(raw.get("attributes", ())),
    )


def _initializer_from(raw: t.Mapping[str, t.Any]) -> InitializerRequirement:
    return InitializerRequirement(
        parameters=tuple(_parameter_from(p) for p in raw.get("parameters", ())),
        is_failable=_flag(raw, "is_failable", default=False),
        is_async=_flag(raw, "is_async", default=False),
        is_throwing=_flag(raw, "is_throwing", default=False),
        attributes=_attributes_from(raw.get("attributes", ())),
    )
