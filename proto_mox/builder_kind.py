"""The three builder flavours generated for every mocked interface."""

from __future__ import annotations

import enum

from . import naming


class BuilderKind(enum.StrEnum):
    """Companion builder types, in the order they are emitted."""

    RETURN = "ReturnBuilder"
    ACTION = "ActionBuilder"
    VERIFY = "VerifyBuilder"

    @property
    def type_name(self) -> str:
        """Return the generated struct name."""
        return self.value

    @property
    def family(self) -> str:
        """Return the engine handle family, e.g. ``Return`` or ``Verify``."""
        return self.value.removesuffix("Builder")

    @property
    def interceptor(self) -> str:
        """Return the name of the unavailable interceptor on the mock type."""
        return _INTERCEPTORS[self]

    @property
    def message(self) -> str:
        """Return the diagnostic naming the supported replacement."""
        return _MESSAGES[self]

    def function_handle(self, *, throwing: bool) -> str:
        """Return the engine handle type for a function accessor."""
        prefix = "Throwing" if throwing else ""
        return f"{prefix}Function{self.family}Builder"

    def property_handle(self) -> str:
        """Return the engine handle type for a property accessor."""
        return f"Property{self.family}Builder"


_INTERCEPTORS: dict[BuilderKind, str] = {
    BuilderKind.RETURN: "_given",
    BuilderKind.ACTION: "_when",
    BuilderKind.VERIFY: "_verify",
}

_MESSAGES: dict[BuilderKind, str] = {
    BuilderKind.RETURN: naming.GIVEN_MESSAGE,
    BuilderKind.ACTION: naming.WHEN_MESSAGE,
    BuilderKind.VERIFY: naming.VERIFY_MESSAGE,
}
