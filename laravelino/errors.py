"""
Error and warning taxonomy.

Errors derived from LaravelinoError are fatal and abort the run. Warnings
derived from LaravelinoWarning are advisory: they are collected on results and
logged, never raised out of the core.
"""

from pathlib import Path
from typing import Optional, Union


class LaravelinoError(Exception):
    """Base exception for all fatal configuration errors."""

    pass


class PrivilegeError(LaravelinoError):
    """Raised when the process lacks root privileges."""

    pass


class ResolutionError(LaravelinoError):
    """Raised when the actual user or their home directory cannot be determined."""

    pass


class WriteError(LaravelinoError):
    """Raised when a configuration target cannot be created or written."""

    def __init__(self, path: Union[str, Path], message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class LaravelinoWarning(Exception):
    """Base class for non-fatal outcomes."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class OwnershipWarning(LaravelinoWarning):
    """Assigning ownership of a user file failed."""

    pass


class SourceWarning(LaravelinoWarning):
    """Re-sourcing a shell config into the current session failed."""

    pass
