"""
Core Exceptions

Custom exceptions for the block resolution engine. Field-level problems are
returned as ResolutionError values (see blockflow.models.contracts.resolution);
only schema authoring problems and registry misses are raised.
"""


class SchemaConfigurationError(Exception):
    """
    Raised when a block schema is internally inconsistent.

    Surfaces at registration/load time, e.g. a visibility condition that
    references a nonexistent field or a discriminator option with no tool.

    Usage:
        registry.register(schema)
        # Raises SchemaConfigurationError listing every problem found
    """

    def __init__(
        self,
        message: str = "Invalid block schema",
        block_type: str | None = None,
        problems: list[str] | None = None,
    ):
        self.message = message
        self.block_type = block_type
        self.problems = list(problems or [])
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = f"[{self.block_type}] " if self.block_type else ""
        if not self.problems:
            return f"{prefix}{self.message}"
        details = "; ".join(self.problems)
        return f"{prefix}{self.message}: {details}"


class BlockNotFoundError(KeyError):
    """Raised when the registry holds no schema for a block type."""

    def __init__(self, block_type: str):
        self.block_type = block_type
        self.message = f"No block schema registered for '{block_type}'"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
