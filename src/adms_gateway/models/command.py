"""Command queue entries and device command reports."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandEntry:
    """A command waiting in a device queue.

    Attributes:
        id: Process-wide unique identifier, strictly increasing in enqueue order.
        command: Raw command text sent to the device after the ``C:<id>:`` prefix.
    """

    id: int
    command: str


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result a device reports after executing a command.

    Every field except ``raw`` may be missing; reports are logged, never
    correlated back into the queue.
    """

    id: int | None
    return_code: str | None
    command: str | None
    raw: str
