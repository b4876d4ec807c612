"""Resource names and their filesystem encoding.

A resource name is a slash-separated hierarchy such as ``team/project/lib``.
On disk every segment but the last becomes an ``@``-prefixed namespace
directory, and the last segment is the resource directory itself:

    team/project/lib  <->  @team/@project/lib
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

# Separator between segments in the display form
NAME_SEPARATOR = "/"

# Prefix marking a namespace directory on disk
NAMESPACE_PREFIX = "@"


@dataclass(frozen=True, slots=True)
class ResourceName:
    """Immutable, hashable name of a repository, workspace, or archive.

    Attributes:
        segments: Ordered name segments, outermost namespace first.
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate the segment sequence after initialization."""
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))
        if not self.segments:
            msg = "Resource name must have at least one segment"
            raise ValueError(msg)

    @classmethod
    def parse(cls, value: str) -> ResourceName:
        """Build a name by splitting a string on '/'.

        Syntax is not checked here; the CLI validates raw input first.

        Args:
            value: Display form of the name (e.g. "team/project/lib").

        Returns:
            The parsed ResourceName.
        """
        return cls(tuple(value.split(NAME_SEPARATOR)))

    @classmethod
    def from_path(cls, path: str | PurePath) -> ResourceName:
        """Decode a name from an encoded resource path.

        The final component is the leaf segment. Walking from the leaf upward,
        every ancestor starting with '@' contributes an earlier segment; other
        ancestors (such as the root directories) are ignored. A final component
        that itself starts with '@' is kept literally.

        Args:
            path: Path produced by to_path(), optionally under a root directory.

        Returns:
            The decoded ResourceName.

        Raises:
            ValueError: If the path has no components.
        """
        parts = PurePath(path).parts
        if not parts:
            msg = f"Cannot decode a resource name from empty path: {path!r}"
            raise ValueError(msg)

        leaf, *ancestors = reversed(parts)
        segments = [leaf]
        for part in ancestors:
            if part.startswith(NAMESPACE_PREFIX):
                segments.append(part[len(NAMESPACE_PREFIX) :])

        return cls(tuple(reversed(segments)))

    def to_path(self) -> PurePath:
        """Encode the name as a relative path.

        Returns:
            Relative path such as ``@team/@project/lib``.
        """
        *namespaces, leaf = self.segments
        return PurePath(*(f"{NAMESPACE_PREFIX}{ns}" for ns in namespaces), leaf)

    @property
    def leaf(self) -> str:
        """The final segment, naming the resource itself."""
        return self.segments[-1]

    @property
    def namespaces(self) -> tuple[str, ...]:
        """All segments except the leaf."""
        return self.segments[:-1]

    def startswith(self, prefix: str) -> bool:
        """Check whether the display form starts with a string prefix."""
        return str(self).startswith(prefix)

    def __str__(self) -> str:
        return NAME_SEPARATOR.join(self.segments)

    @classmethod
    def _validate(cls, value: object) -> ResourceName:
        if isinstance(value, ResourceName):
            return value
        if isinstance(value, str):
            if not value:
                msg = "Resource name cannot be empty"
                raise ValueError(msg)
            return cls.parse(value)
        msg = f"Resource name must be a string, got {type(value).__name__}"
        raise ValueError(msg)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate from the display string and serialize back to it."""
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )
