"""Exceptions raised by the scaffolding engine.

Resolution helpers raise these directly to their caller.  The generators
catch them per artifact and record a failure in the ledger instead, so one
bad artifact never aborts its siblings.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for every engine error."""

    code = "error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(ScaffoldError):
    """A required configuration value (base path, base namespace) is missing."""

    code = "configuration"


class UnknownKind(ScaffoldError):
    """No relative path is configured for the requested component kind."""

    code = "unknown_kind"

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"No path configured for component kind '{kind}'")


class InvalidName(ScaffoldError):
    """The requested component or module name is empty or malformed."""

    code = "invalid_name"

    def __init__(self, name: str, reason: str = "name is empty") -> None:
        self.name = name
        super().__init__(f"Invalid name '{name}': {reason}")


class StubNotFound(ScaffoldError):
    """A stub identifier has no backing file."""

    code = "stub_not_found"

    def __init__(self, stub_id: str, detail: str = "") -> None:
        self.stub_id = stub_id
        message = f"Stub not found: {stub_id}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class WriteFailure(ScaffoldError):
    """An I/O error occurred while creating directories or writing a file."""

    code = "write_failure"

    def __init__(self, path: object, error: BaseException) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Could not write {path}: {error}")
