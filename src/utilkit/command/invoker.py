from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from utilkit.command.base import CombinableCommand, Command, DisposableCommand, UndoCommand
from utilkit.command.delimiter import DelimiterCommand
from utilkit.core.exceptions import InvokerError
from utilkit.core.logger import get_logger, scoped


@dataclass
class _HistoryEntry:
    command: UndoCommand
    chained: bool = False


class Invoker:
    """
    Executes commands and keeps undo/redo history.

    Only UndoCommands are recorded. A command executed with ``chained=True`` is
    undone and redone together with the entry below it, so a run of commands
    started unchained and continued chained behaves as one step. Consecutive
    CombinableCommands of the same class are merged into the entry already on
    the undo stack. DisposableCommands are disposed as soon as the invoker no
    longer holds them.

    Usage:
        >>> invoker = Invoker(scope="level-editor")
        >>> invoker.execute(SetValue(slider, 10))
        >>> invoker.undo()
        >>> invoker.redo()
    """

    def __init__(self, scope: Optional[str] = None):
        self._undo: List[_HistoryEntry] = []
        self._redo: List[_HistoryEntry] = []
        self.scope = scope  # Log scope label applied while commands run
        self.log = get_logger(__name__)

    # --- History inspection ---
    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    # --- Clearing ---
    def clear(self) -> None:
        """Clear both stacks."""
        self.clear_undo()
        self.clear_redo()

    def clear_undo(self) -> None:
        self._drop_all(self._undo)

    def clear_redo(self) -> None:
        self._drop_all(self._redo)

    def _drop_all(self, stack: List[_HistoryEntry]) -> None:
        for entry in stack:
            self._dispose(entry.command)
        stack.clear()

    def _dispose(self, command: Command) -> None:
        if isinstance(command, DisposableCommand):
            self.log.debug(f"Disposing {type(command).__name__}")
            command.dispose()

    # --- Execution ---
    def execute(self, command: Command, chained: bool = False) -> bool:
        """
        Execute ``command`` and record it for undo when it is an UndoCommand that succeeded.

        Args:
            command: Command to run
            chained: Set for every command after the first of a group that should
                undo/redo as one step; the first command of the group stays unchained.

        Returns:
            True if the command executed (or was combined into the previous one) successfully

        Raises:
            InvokerError: If ``command`` is not a Command
        """
        with scoped(self.scope):
            return self._execute(command, chained)

    def _execute(self, command: Command, chained: bool) -> bool:
        if not isinstance(command, Command):
            raise InvokerError(f"Expected a Command, got {type(command).__name__}")

        if isinstance(command, CombinableCommand) and self.can_undo():
            previous = self._undo[-1].command
            if type(previous) is type(command) and previous.combine(command):
                self.log.debug(f"Combined {type(command).__name__} into previous entry")
                return True

        success = command.execute()
        if not success:
            self.log.warning(f"{type(command).__name__} failed to execute")
            self._dispose(command)
        elif isinstance(command, UndoCommand):
            self._undo.append(_HistoryEntry(command, chained))
            self.clear_redo()
            self.log.debug(f"Recorded {type(command).__name__} (chained={chained})")
        else:
            self._dispose(command)
        return success

    def push_delimiter(self, name: str = "") -> None:
        """
        Push a delimiter onto the undo stack.

        Separates two CombinableCommands, or marks a named point for undo_to_delimiter().
        The delimiter itself is never chained; the command after it usually should not be either.
        """
        self._undo.append(_HistoryEntry(DelimiterCommand(name), chained=False))

    # --- Undo / redo ---
    def undo(self, add_to_redo: bool = True) -> None:
        """Undo the last command, together with every command chained onto it."""
        with scoped(self.scope):
            self._undo_chain(add_to_redo)

    def _undo_chain(self, add_to_redo: bool) -> None:
        next_is_chained = True
        while self.can_undo() and next_is_chained:
            entry = self._undo_top(add_to_redo)
            next_is_chained = entry.chained

    def undo_to_delimiter(self, name: str, add_to_redo: bool = True) -> None:
        """Undo every entry down to and including the delimiter called ``name``."""
        with scoped(self.scope):
            self._undo_until(name, add_to_redo)

    def _undo_until(self, name: str, add_to_redo: bool) -> None:
        while self.can_undo():
            entry = self._undo_top(add_to_redo)
            if isinstance(entry.command, DelimiterCommand) and entry.command.name == name:
                return
        self.log.debug(f"Delimiter {name!r} not found; undo stack emptied")

    def _undo_top(self, add_to_redo: bool) -> _HistoryEntry:
        # Pop only after undo() returns so a raising command stays on the stack
        entry = self._undo[-1]
        success = entry.command.undo()
        self._undo.pop()
        if add_to_redo and success:
            self._redo.append(entry)
        else:
            if not success:
                self.log.warning(f"{type(entry.command).__name__} failed to undo")
            self._dispose(entry.command)
        return entry

    def redo(self) -> None:
        """Redo the last undone command, together with every command chained after it."""
        with scoped(self.scope):
            self._redo_chain()

    def _redo_chain(self) -> None:
        next_is_chained = True
        while self.can_redo() and next_is_chained:
            entry = self._redo[-1]
            success = entry.command.execute()
            self._redo.pop()
            if success:
                self._undo.append(entry)
            else:
                self.log.warning(f"{type(entry.command).__name__} failed to redo")
                self._dispose(entry.command)
            if self.can_redo():
                next_is_chained = self._redo[-1].chained
