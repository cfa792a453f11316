"""Command contracts.

A command wraps an action to be executed now or later, possibly several times.
Commands can run directly or through an ``Invoker``; only the invoker keeps
undo/redo history. Optional capabilities are opted into by subclassing:

- ``UndoCommand``: can revert its execution.
- ``DisposableCommand``: owns resources released once the invoker drops it.
- ``CombinableCommand``: merges consecutive executions of the same command type
  into one history entry (e.g. dragging a slider only keeps the first and last value).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Command(ABC):
    @abstractmethod
    def execute(self) -> bool:
        """Run the command; True when it succeeded.

        When run through an Invoker, an UndoCommand is only recorded for undo if this returns True.
        """
        raise NotImplementedError


class UndoCommand(Command):
    @abstractmethod
    def undo(self) -> bool:
        """Revert a previous execute(); True when it succeeded."""
        raise NotImplementedError


class DisposableCommand(Command):
    @abstractmethod
    def dispose(self) -> None:
        raise NotImplementedError


class CombinableCommand(Command):
    @abstractmethod
    def combine(self, other: "CombinableCommand") -> bool:
        """
        Fold ``other`` (about to run) into this already executed command.

        Implementations execute ``other`` themselves and return True when it ran
        successfully and was absorbed.
        """
        raise NotImplementedError
