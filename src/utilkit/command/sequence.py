from __future__ import annotations

from typing import Tuple

from utilkit.command.base import Command, UndoCommand


class SequenceCommand(UndoCommand):
    """Runs several commands in order as one history entry."""

    def __init__(self, *commands: Command):
        self.commands: Tuple[Command, ...] = commands

    def execute(self) -> bool:
        for command in self.commands:
            if not command.execute():
                return False
        return True

    def undo(self) -> bool:
        # Reverse order; commands without undo support are skipped
        for command in reversed(self.commands):
            if isinstance(command, UndoCommand) and not command.undo():
                return False
        return True
