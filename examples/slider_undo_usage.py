"""
Example: undo/redo for a slider whose range is held in a MutablePair.

Shows combining consecutive drags into one history entry, delimiting
separate gestures, and chaining commands that must undo together.
"""

from utilkit import CombinableCommand, Invoker, MutablePair, UndoCommand


class MoveUpper(UndoCommand, CombinableCommand):
    def __init__(self, slider_range: MutablePair, value: int):
        self.slider_range = slider_range
        self.value = value
        self.start = None

    def execute(self) -> bool:
        self.start = self.slider_range.second
        self.slider_range.second = self.value
        return True

    def undo(self) -> bool:
        self.slider_range.second = self.start
        return True

    def combine(self, other: "MoveUpper") -> bool:
        if not other.execute():
            return False
        self.value = other.value
        return True


slider_range = MutablePair(0, 100)
invoker = Invoker()

# =============================================================================
# One drag gesture: many moves, one undo step
# =============================================================================
for value in (90, 80, 70):
    invoker.execute(MoveUpper(slider_range, value))
print(f"After drag: {slider_range}")       # (0, 70)

invoker.undo()
print(f"After undo: {slider_range}")       # (0, 100)

invoker.redo()
print(f"After redo: {slider_range}")       # (0, 70)

# =============================================================================
# Second gesture, separated by a named delimiter
# =============================================================================
invoker.push_delimiter("second-drag")
invoker.execute(MoveUpper(slider_range, 50))
invoker.undo_to_delimiter("second-drag")
print(f"Back to delimiter: {slider_range}")  # (0, 70)
