"""Mock synthesis for abstract interfaces.

Given a :class:`Requirements` description of an interface, proto-mox builds
the declaration tree of a mock type that delegates to a recording engine,
together with ``ReturnBuilder``, ``ActionBuilder`` and ``VerifyBuilder``
companions for stubbing, side effects and verification.
"""

from __future__ import annotations

from .builder_kind import BuilderKind
from .builder_types import build_builders
from .errors import (
    MalformedMemberError,
    NondeterministicOutputError,
    ProtoMoxError,
    RequirementsError,
)
from .generator import GeneratedModule, GeneratorConfig, MockGenerator, generate
from .isolation import IsolationRule, Surface, matched_rule, resolve
from .mock_type import build_mock_members
from .requirements import (
    FunctionRequirement,
    InitializerRequirement,
    Member,
    Requirements,
    VariableRequirement,
)
from .syntax import Attribute, ModifierSet, Parameter, TypeRef

__all__ = [
    "Attribute",
    "BuilderKind",
    "FunctionRequirement",
    "GeneratedModule",
    "GeneratorConfig",
    "InitializerRequirement",
    "IsolationRule",
    "MalformedMemberError",
    "Member",
    "MockGenerator",
    "ModifierSet",
    "NondeterministicOutputError",
    "Parameter",
    "ProtoMoxError",
    "Requirements",
    "RequirementsError",
    "Surface",
    "TypeRef",
    "VariableRequirement",
    "build_builders",
    "build_mock_members",
    "generate",
    "matched_rule",
    "resolve",
]
