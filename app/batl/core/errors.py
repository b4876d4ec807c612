"""Exception hierarchy for batl.

Config-level errors describe what went wrong with a single batl.toml.
Resource-level errors describe the outcome of a resource lookup or
mutation. ``resource_error_from_config`` is the only bridge between the two.
"""

from errno import ENOENT
from pathlib import Path


class BatlError(Exception):
    """Base exception for all batl errors."""


# =============================================================================
# Config file errors
# =============================================================================


class ConfigError(BatlError):
    """Base exception for config file errors."""


class ConfigIOError(ConfigError):
    """Raised when a config file cannot be read or written.

    Attributes:
        path: Path of the config file.
        error: The underlying OS error.
    """

    def __init__(self, path: Path, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Cannot access {path}: {error.strerror or error}")

    @property
    def errno(self) -> int | None:
        """OS error number of the underlying failure."""
        return self.error.errno

    @property
    def not_found(self) -> bool:
        """True if the file does not exist."""
        return isinstance(self.error, FileNotFoundError) or self.error.errno == ENOENT


class ConfigFormatError(ConfigError):
    """Raised when a config file exists but no known schema version parses it."""


# =============================================================================
# Resource errors
# =============================================================================


class ResourceError(BatlError):
    """Base exception for resource lookup and lifecycle errors."""


class ResourceNotFoundError(ResourceError):
    """Raised when a resource (or one of its entries) does not exist."""


class ResourceInvalidError(ResourceError):
    """Raised when a resource exists but its config is invalid or corrupted."""


class ResourceExistsError(ResourceError):
    """Raised when creating something whose target is already populated."""


class ResourceIOError(ResourceError):
    """Raised when a filesystem operation on a resource fails."""


class NotSetupError(ResourceError):
    """Raised when no Battalion root can be resolved."""

    def __init__(self, message: str = "Battalion is not set up. Run 'batl setup' first.") -> None:
        super().__init__(message)


def resource_error_from_config(error: ConfigError) -> ResourceError:
    """Map a config error to the matching resource error.

    A missing file becomes ResourceNotFoundError, any other I/O failure
    becomes ResourceIOError, and an unparseable file becomes
    ResourceInvalidError. A corrupt file is never reported as missing.

    Args:
        error: The config error to convert.

    Returns:
        The equivalent ResourceError (the caller raises it).
    """
    if isinstance(error, ConfigIOError):
        if error.not_found:
            return ResourceNotFoundError(f"Resource does not exist: {error.path.parent}")
        return ResourceIOError(str(error))
    if isinstance(error, ConfigFormatError):
        return ResourceInvalidError(f"Resource invalid/corrupted: {error}")
    return ResourceError(str(error))
