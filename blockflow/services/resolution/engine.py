"""
Resolution engine facade over an injected block registry.

The workflow executor calls resolve() right before invoking a backend tool;
the UI layer calls active_fields() to decide what to render. Both go through
the same schema and the same visibility rules.
"""

from typing import TYPE_CHECKING, Mapping

from blockflow.models.contracts.blocks import FieldSchema, RawValue
from blockflow.models.contracts.resolution import ResolutionError, ResolvedParameters
from blockflow.services.resolution.builder import active_field_schemas, resolve

if TYPE_CHECKING:
    from blockflow.services.block_registry import BlockRegistry


class ResolutionEngine:
    """Resolves block invocations by block type."""

    def __init__(self, registry: "BlockRegistry"):
        self.registry = registry

    def resolve(
        self, block_type: str, raw_inputs: Mapping[str, RawValue]
    ) -> ResolvedParameters | list[ResolutionError]:
        """
        Resolve raw form inputs for a registered block.

        Raises:
            BlockNotFoundError: If the block type is not registered
        """
        return resolve(self.registry.get(block_type), raw_inputs)

    def active_fields(self, block_type: str, values: Mapping[str, RawValue]) -> list[FieldSchema]:
        """
        Fields to render for the current form state, in declaration order.

        Defaults are applied before conditions are checked, matching what
        resolve() does.
        """
        return active_field_schemas(self.registry.get(block_type), values)
