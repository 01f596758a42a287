"""
Error taxonomy.

Errors travel as values inside Result; none of them is fatal.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationError(Exception):
    """Malformed input. Recoverable by correcting the input."""

    field: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class RemoteWriteError(Exception):
    """Persistence or quote provider failure. Local state is left unchanged."""

    operation: str
    message: str

    def __str__(self) -> str:
        return f"{self.operation}: {self.message}"


@dataclass(frozen=True, slots=True)
class NotFoundError(Exception):
    entity: str
    id: str

    def __str__(self) -> str:
        return f"{self.entity}:{self.id} not found"


__all__ = ("ValidationError", "RemoteWriteError", "NotFoundError")
