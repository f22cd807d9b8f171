from __future__ import annotations

"""
Domain Error Hierarchy.

Every failure raised by the generation pipeline derives from ProtocrateError.
All of them are fatal: the engine stops at the first one and reports it.
"""

from typing import Optional

# -----------------------------------------------------------------------------
# BASE
# -----------------------------------------------------------------------------

class ProtocrateError(Exception):
    """Root of all expected generation failures."""


# -----------------------------------------------------------------------------
# FILESYSTEM
# -----------------------------------------------------------------------------

class FileSystemError(ProtocrateError):
    """
    Raised when a directory or file cannot be read, created, moved or written.

    Attributes:
        path: Filesystem path involved in the failed operation.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class DestinationExistsError(FileSystemError):
    """Raised when a relocation target is already occupied."""


# -----------------------------------------------------------------------------
# NAMING
# -----------------------------------------------------------------------------

class ParseError(ProtocrateError):
    """
    Raised when a generated file stem cannot be turned into package segments.

    Attributes:
        stem: The offending file stem.
    """

    def __init__(self, message: str, stem: str = "") -> None:
        super().__init__(message)
        self.stem = stem


class NameCollisionError(ProtocrateError):
    """
    Raised when two different names map to the same identifier in one scope.

    Attributes:
        identifier: The escaped identifier both names resolve to.
        existing: Raw name already registered under the identifier.
        incoming: Raw name that attempted to reuse it.
    """

    def __init__(self, identifier: str, existing: str, incoming: Optional[str] = None) -> None:
        incoming = existing if incoming is None else incoming
        if existing == incoming:
            message = f"Identifier '{identifier}' is declared twice in the same module scope."
        else:
            message = (
                f"Names '{existing}' and '{incoming}' both resolve to identifier "
                f"'{identifier}' in the same module scope."
            )
        super().__init__(message)
        self.identifier = identifier
        self.existing = existing
        self.incoming = incoming


# -----------------------------------------------------------------------------
# EXTERNAL TOOLS AND CONFIGURATION
# -----------------------------------------------------------------------------

class ToolchainError(ProtocrateError):
    """
    Raised when the external code generator is missing or exits with an error.

    Attributes:
        command: Argument vector that was executed.
        stderr: Captured diagnostic output of the tool.
    """

    def __init__(self, message: str, command: Optional[list] = None, stderr: str = "") -> None:
        super().__init__(message)
        self.command = list(command or [])
        self.stderr = stderr


class ConfigError(ProtocrateError):
    """Raised when a required configuration value is missing or unusable."""
