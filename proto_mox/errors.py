"""Custom exceptions raised by proto-mox."""

from __future__ import annotations


class ProtoMoxError(Exception):
    """Base class for proto-mox errors."""


class MalformedMemberError(ProtoMoxError, ValueError):
    """Raised when a member cannot be mapped to a generated declaration."""

    def __init__(self, member: str, reason: str) -> None:
        self.member = member
        self.reason = reason
        super().__init__(f"Cannot generate mock for member {member!r}: {reason}")


class RequirementsError(ProtoMoxError, ValueError):
    """Raised when a requirements mapping is incomplete or has wrong types."""


class NondeterministicOutputError(ProtoMoxError, AssertionError):
    """Raised when two generation runs over the same input disagree."""
