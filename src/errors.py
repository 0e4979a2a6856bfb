#!/usr/bin/env python3
"""
Error types for the catlink driver.

Errors raised from the public service surface derive from CatError and carry
the operation (op) that raised them. Transport errors are raised by the port
adapter and are absorbed by the worker threads.
"""

from typing import Any, Dict, Optional


class CatError(Exception):
    """Base class for errors surfaced to callers of the CAT service."""

    def __init__(self, op: str, msg: str = ""):
        self.op = op
        self.msg = msg
        super().__init__(f"{op}: {msg}" if msg else op)


class MissingDependency(CatError):
    """A required collaborator (config or logging) was not supplied."""


class InvalidRigID(CatError):
    """No valid default rig is configured."""


class InvalidConfig(CatError):
    """The rig configuration failed structural validation."""

    def __init__(self, op: str, msg: str = "", errors: Optional[Dict[str, Any]] = None):
        self.errors = errors or {}
        super().__init__(op, msg)


class EmptyStatePrefix(CatError):
    """A state definition has a blank prefix."""


class NotInitialized(CatError):
    pass


class NotStarted(CatError):
    pass


class TransportOpenFailed(CatError):
    pass


class TransportCloseFailed(CatError):
    pass


class CommandNotFound(CatError):
    pass


class ArityMismatch(CatError):
    """Parameter count does not match the command template placeholders."""

    def __init__(self, op: str, expected: int, provided: int):
        self.expected = expected
        self.provided = provided
        super().__init__(
            op, f"Command parameter validation failed: expected {expected} parameters, got {provided}"
        )


class QueueFull(CatError):
    pass


class QueueClosed(CatError):
    pass


class ConfigError(Exception):
    """Raised by the configuration collaborator."""


class TransportError(Exception):
    """Base class for serial transport failures."""


class TransportTimeout(TransportError):
    """A bounded read returned no complete line in time."""


class TransportReadError(TransportError):
    pass


class TransportWriteError(TransportError):
    pass
