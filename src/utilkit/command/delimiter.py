from __future__ import annotations

from utilkit.command.base import UndoCommand


class DelimiterCommand(UndoCommand):
    """
    No-op history entry separating two commands.

    Lets a caller undo back to a named point, and stops two CombinableCommands
    on either side of it from merging. A delimiter is never chained.
    """

    def __init__(self, name: str = ""):
        self.name = name

    def execute(self) -> bool:
        return True

    def undo(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"DelimiterCommand(name={self.name!r})"
