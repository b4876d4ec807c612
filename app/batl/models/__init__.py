"""Data models for batl.

This module exports the value types shared by the schema and core layers.
"""

from batl.models.batlrc import ApiSettings, BatlRc
from batl.models.name import ResourceName
from batl.models.types import ResourceKind, SemVer, parse_version

__all__ = [
    "ApiSettings",
    "BatlRc",
    "ResourceKind",
    "ResourceName",
    "SemVer",
    "parse_version",
]
