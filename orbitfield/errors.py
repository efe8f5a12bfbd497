from __future__ import annotations


class OrbitFieldError(Exception):
    """Base class for errors raised by orbitfield."""


class ConfigurationError(OrbitFieldError, ValueError):
    """A precondition on construction or configuration was violated."""
