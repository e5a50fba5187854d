# prodaccess/services/errors.py

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories reported by activators."""
    IO = "IOError"
    KEY_READ = "KeyReadError"
    TOOL_NOT_FOUND = "ToolNotFoundError"
    TOOL_EXECUTION = "ToolExecutionError"
    CLEANUP = "CleanupError"
    INVALID_CONFIG = "ConfigError"


class MaterializeError(Exception):
    """Base class for credential materialization errors."""
    kind: ErrorKind = ErrorKind.IO


class MaterialIOError(MaterializeError):
    """A file could not be read, written or removed."""
    kind = ErrorKind.IO


class KeyReadError(MaterialIOError):
    """The SSH public key is missing or unreadable."""
    kind = ErrorKind.KEY_READ


class ToolNotFoundError(MaterializeError):
    """A required executable is not on PATH."""
    kind = ErrorKind.TOOL_NOT_FOUND


class ToolExecutionError(MaterializeError):
    """An external tool could not be started, timed out, or exited non-zero."""
    kind = ErrorKind.TOOL_EXECUTION

    def __init__(self, message: str, *, returncode: int | None = None,
                 stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class CleanupError(MaterialIOError):
    """An ephemeral file could not be deleted."""
    kind = ErrorKind.CLEANUP


class ConfigError(MaterializeError):
    """The configuration could not be built."""
    kind = ErrorKind.INVALID_CONFIG
