"""Model for the Battalion root settings file (.batlrc).

The presence of .batlrc marks a directory as the Battalion root. Its
content holds API credentials for the package registry.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Placeholder written by setup until the user configures a real key
DEFAULT_CREDENTIALS = "YOUR-KEY-GOES-HERE"


class ApiSettings(BaseModel):
    """The [api] section of .batlrc.

    Attributes:
        credentials: API key for the package registry.
    """

    model_config = ConfigDict(extra="forbid")

    credentials: Annotated[str, Field(description="Registry API key")] = DEFAULT_CREDENTIALS


class BatlRc(BaseModel):
    """Complete .batlrc document."""

    model_config = ConfigDict(extra="forbid")

    api: Annotated[ApiSettings, Field(default_factory=ApiSettings, description="API settings")]
