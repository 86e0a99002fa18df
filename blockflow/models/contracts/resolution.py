"""
Resolution result contracts.

A resolution produces either ResolvedParameters (tool id + typed payload) or
a list of ResolutionError values. Errors are returned, not raised, so a
caller can present every problem at once.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Mapping

from blockflow.models.enums import ResolutionErrorCode


@dataclass(frozen=True)
class ResolvedParameters:
    """Final call payload for the tool invoker."""

    tool_id: str
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Detach from the caller's dict and expose it read-only
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def to_dict(self) -> dict[str, Any]:
        return {"tool_id": self.tool_id, "parameters": dict(self.parameters)}


@dataclass(frozen=True)
class ResolutionError:
    """Field-scoped problem found while resolving a block."""

    message: str
    field_keys: tuple[str, ...] = ()

    code: ClassVar[ResolutionErrorCode]

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "field_keys": list(self.field_keys),
        }


@dataclass(frozen=True)
class CoercionError(ResolutionError):
    """An active field's raw value could not be converted to its declared type."""

    code: ClassVar[ResolutionErrorCode] = ResolutionErrorCode.COERCION


@dataclass(frozen=True)
class MissingRequiredFieldError(ResolutionError):
    """An active required field (or its alias group) has no usable value."""

    code: ClassVar[ResolutionErrorCode] = ResolutionErrorCode.MISSING_REQUIRED_FIELD


@dataclass(frozen=True)
class UnresolvedOperationError(ResolutionError):
    """The discriminator value does not map to a known tool."""

    value: Any = None

    code: ClassVar[ResolutionErrorCode] = ResolutionErrorCode.UNRESOLVED_OPERATION

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["value"] = self.value
        return data


@dataclass(frozen=True)
class CoercionResult:
    """Outcome of coercing one raw value."""

    ok: bool
    value: Any = None
    error: CoercionError | None = None

    @classmethod
    def success(cls, value: Any) -> "CoercionResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: CoercionError) -> "CoercionResult":
        return cls(ok=False, error=error)
