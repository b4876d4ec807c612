"""Shared value types for batl configuration models."""

from enum import Enum
from typing import Annotated, Any

import semver
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class ResourceKind(Enum):
    """The two kinds of Battalion resources."""

    REPOSITORY = "repository"
    WORKSPACE = "workspace"


class _SemVerAnnotation:
    """Pydantic adapter for semver.Version (validated from and dumped as str)."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            parse_version,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


def parse_version(value: object) -> semver.Version:
    """Coerce a string (or Version) into a semantic version.

    Args:
        value: Version string such as "0.1.0" or an existing Version.

    Returns:
        Parsed semver.Version.

    Raises:
        ValueError: If the value is not a valid semantic version.
    """
    if isinstance(value, semver.Version):
        return value
    if isinstance(value, str):
        return semver.Version.parse(value)
    msg = f"Version must be a string, got {type(value).__name__}"
    raise ValueError(msg)


# Semantic version field type used by every schema version
SemVer = Annotated[semver.Version, _SemVerAnnotation]
