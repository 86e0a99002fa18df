"""
Block Registry Service

Holds the block schemas known to a process, keyed by block type. Schemas
are registered once (usually at startup, from *.block.yaml / *.block.json
files) and are read-only afterwards, so a registry can be shared between
concurrent resolutions without locking.

The registry is passed explicitly to whatever needs it; tests build their
own isolated instances.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterator

import yaml
from pydantic import ValidationError

from blockflow.config import Settings, get_settings
from blockflow.core.exceptions import BlockNotFoundError, SchemaConfigurationError
from blockflow.models.contracts.blocks import BlockSchema
from blockflow.services.schema_validation import validate_block_schema

logger = logging.getLogger(__name__)

BLOCK_FILE_SUFFIXES = (".block.yaml", ".block.yml", ".block.json")


def _format_validation_error(error: ValidationError) -> list[str]:
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        message = detail.get("msg", "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return problems


def is_block_file(path: Path) -> bool:
    """Check whether a path names a block definition file."""
    return path.name.lower().endswith(BLOCK_FILE_SUFFIXES)


def parse_block_file(path: Path, content: bytes) -> dict[str, Any]:
    """
    Parse a block definition file into a plain dict.

    Args:
        path: File path (the suffix selects the parser)
        content: Raw file bytes

    Returns:
        Parsed definition

    Raises:
        SchemaConfigurationError: If the content is not UTF-8, is not valid
            YAML/JSON, or is not a mapping
    """
    try:
        text = content.decode("utf-8")
        if path.name.lower().endswith(".json"):
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaConfigurationError(f"Could not parse block file {path}", problems=[str(e)]) from e

    if not isinstance(data, dict):
        raise SchemaConfigurationError(
            f"Block file {path} must contain a mapping, got {type(data).__name__}"
        )
    return data


class BlockRegistry:
    """
    Registry of block schemas.

    Features:
    - Static validation of every schema on registration
    - Loading definitions from YAML or JSON files
    - Directory scanning with strict or lenient error handling
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize an empty registry.

        Args:
            settings: Settings used for directory loading. Defaults to the
                cached application settings.
        """
        self._settings = settings
        self._schemas: dict[str, BlockSchema] = {}

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def register(self, schema: BlockSchema) -> BlockSchema:
        """
        Validate and register a block schema.

        Args:
            schema: Block schema

        Returns:
            The registered schema

        Raises:
            SchemaConfigurationError: If the schema is inconsistent or its
                block type is already registered
        """
        if schema.block_type in self._schemas:
            raise SchemaConfigurationError(
                "Block type is already registered", block_type=schema.block_type
            )

        problems = validate_block_schema(schema)
        if problems:
            raise SchemaConfigurationError(
                "Invalid block schema", block_type=schema.block_type, problems=problems
            )

        self._schemas[schema.block_type] = schema
        logger.debug(f"Registered block '{schema.block_type}' ({len(schema.fields)} fields)")
        return schema

    def register_dict(self, data: dict[str, Any]) -> BlockSchema:
        """
        Build a schema from a plain definition and register it.

        Raises:
            SchemaConfigurationError: If the definition does not match the
                schema model or fails validation
        """
        try:
            schema = BlockSchema.model_validate(data)
        except ValidationError as e:
            raise SchemaConfigurationError(
                "Invalid block definition",
                block_type=data.get("block_type") if isinstance(data, dict) else None,
                problems=_format_validation_error(e),
            ) from e
        return self.register(schema)

    def load_file(self, path: str | Path) -> BlockSchema:
        """
        Load and register one block definition file.

        Args:
            path: Path to a *.block.yaml, *.block.yml or *.block.json file

        Returns:
            The registered schema
        """
        path = Path(path)
        data = parse_block_file(path, path.read_bytes())
        schema = self.register_dict(data)
        logger.info(f"Loaded block '{schema.block_type}' from {path}")
        return schema

    def load_directory(self, path: str | Path | None = None) -> list[BlockSchema]:
        """
        Load every block definition file under a directory.

        With strict_registration enabled the first invalid file raises;
        otherwise invalid files are logged and skipped.

        Args:
            path: Directory to scan. Defaults to the configured blocks_dir.

        Returns:
            Schemas registered by this call, in file path order

        Raises:
            SchemaConfigurationError: If no directory is given or configured,
                or (strict mode) a file is invalid
        """
        directory = Path(path) if path is not None else self.settings.blocks_path
        if directory is None:
            raise SchemaConfigurationError("No blocks directory given and BLOCKFLOW_BLOCKS_DIR is not set")
        if not directory.is_dir():
            raise SchemaConfigurationError(f"Blocks directory does not exist: {directory}")

        loaded: list[BlockSchema] = []
        skipped = 0
        for file_path in sorted(p for p in directory.rglob("*") if p.is_file() and is_block_file(p)):
            try:
                loaded.append(self.load_file(file_path))
            except SchemaConfigurationError as e:
                if self.settings.strict_registration:
                    raise
                skipped += 1
                logger.warning(f"Skipping invalid block file {file_path}: {e}")

        logger.info(f"Loaded {len(loaded)} block(s) from {directory} ({skipped} skipped)")
        return loaded

    def get(self, block_type: str) -> BlockSchema:
        """
        Get the schema for a block type.

        Raises:
            BlockNotFoundError: If no schema is registered under block_type
        """
        try:
            return self._schemas[block_type]
        except KeyError:
            raise BlockNotFoundError(block_type) from None

    def block_types(self) -> list[str]:
        return sorted(self._schemas)

    def __contains__(self, block_type: object) -> bool:
        return block_type in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[BlockSchema]:
        return iter(self._schemas.values())
