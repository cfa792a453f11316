import logging

import pytest

from utilkit.command.base import CombinableCommand, Command, DisposableCommand, UndoCommand
from utilkit.command.invoker import Invoker
from utilkit.core.exceptions import InvokerError
from utilkit.core.logger import current_scope, push_scope, reset_scope
from utilkit.models.settings import UtilkitSettings, set_settings
from utilkit.tuples import MutablePair


class SetFirst(UndoCommand):
    """Sets pair.first, remembering the previous value."""

    def __init__(self, target: MutablePair, value):
        self.target = target
        self.value = value
        self.previous = None

    def execute(self) -> bool:
        self.previous = self.target.first
        self.target.first = self.value
        return True

    def undo(self) -> bool:
        self.target.first = self.previous
        return True


class Slide(UndoCommand, CombinableCommand):
    def __init__(self, target: MutablePair, value):
        self.target = target
        self.value = value
        self.start = None

    def execute(self) -> bool:
        self.start = self.target.second
        self.target.second = self.value
        return True

    def undo(self) -> bool:
        self.target.second = self.start
        return True

    def combine(self, other: "Slide") -> bool:
        other.execute()
        self.value = other.value
        return True


class Failing(UndoCommand, DisposableCommand):
    def __init__(self):
        self.disposed = False

    def execute(self) -> bool:
        return False

    def undo(self) -> bool:
        return True

    def dispose(self) -> None:
        self.disposed = True


class DisposableSet(SetFirst, DisposableCommand):
    def __init__(self, target, value):
        super().__init__(target, value)
        self.disposed = False

    def dispose(self) -> None:
        self.disposed = True


class FireAndForget(DisposableCommand):
    def __init__(self):
        self.ran = False
        self.disposed = False

    def execute(self) -> bool:
        self.ran = True
        return True

    def dispose(self) -> None:
        self.disposed = True


class Exploding(UndoCommand):
    def execute(self) -> bool:
        return True

    def undo(self) -> bool:
        raise RuntimeError("boom")


def setup_function() -> None:
    set_settings(UtilkitSettings())


def teardown_function() -> None:
    set_settings(None)


def test_execute_records_undo_command():
    p = MutablePair(0, 0)
    invoker = Invoker()

    assert invoker.execute(SetFirst(p, 1)) is True
    assert p.first == 1
    assert invoker.can_undo()
    assert not invoker.can_redo()


def test_undo_and_redo_round_trip():
    p = MutablePair(0, 0)
    invoker = Invoker()
    invoker.execute(SetFirst(p, 1))
    invoker.execute(SetFirst(p, 2))

    invoker.undo()
    assert p.first == 1
    assert invoker.can_redo()

    invoker.undo()
    assert p.first == 0
    assert not invoker.can_undo()

    invoker.redo()
    assert p.first == 1
    invoker.redo()
    assert p.first == 2
    assert not invoker.can_redo()


def test_undo_without_redo_discards_command():
    p = MutablePair(0, 0)
    invoker = Invoker()
    command = DisposableSet(p, 1)
    invoker.execute(command)

    invoker.undo(add_to_redo=False)

    assert p.first == 0
    assert not invoker.can_redo()
    assert command.disposed


def test_new_execution_clears_redo_stack_and_disposes():
    p = MutablePair(0, 0)
    invoker = Invoker()
    undone = DisposableSet(p, 1)
    invoker.execute(undone)
    invoker.undo()

    invoker.execute(SetFirst(p, 5))

    assert not invoker.can_redo()
    assert undone.disposed


def test_chained_commands_undo_and_redo_as_one_step():
    p = MutablePair(0, 0)
    invoker = Invoker()
    invoker.execute(SetFirst(p, 1))
    invoker.execute(SetFirst(p, 2))
    invoker.execute(SetFirst(p, 3), chained=True)
    invoker.execute(SetFirst(p, 4), chained=True)

    invoker.undo()
    assert p.first == 1

    invoker.redo()
    assert p.first == 4

    invoker.undo()
    invoker.undo()
    assert p.first == 0


def test_redo_stops_at_unchained_entry():
    p = MutablePair(0, 0)
    invoker = Invoker()
    invoker.execute(SetFirst(p, 1))
    invoker.execute(SetFirst(p, 2))
    invoker.undo()
    invoker.undo()

    invoker.redo()
    assert p.first == 1
    assert invoker.can_redo()


def test_combinable_commands_merge_into_one_entry():
    p = MutablePair(0, 0)
    invoker = Invoker()
    invoker.execute(Slide(p, 10))
    invoker.execute(Slide(p, 20))
    invoker.execute(Slide(p, 30))
    assert p.second == 30

    invoker.undo()
    assert p.second == 0
    assert not invoker.can_undo()


def test_delimiter_separates_combinable_commands():
    p = MutablePair(0, 0)
    invoker = Invoker()
    invoker.execute(Slide(p, 10))
    invoker.push_delimiter()
    invoker.execute(Slide(p, 20))

    invoker.undo()
    assert p.second == 10


def test_undo_to_named_delimiter():
    p = MutablePair(0, 0)
    invoker = Invoker()
    invoker.execute(SetFirst(p, 1))
    invoker.push_delimiter("edit")
    invoker.execute(SetFirst(p, 2))
    invoker.execute(SetFirst(p, 3))

    invoker.undo_to_delimiter("edit")

    assert p.first == 1
    assert invoker.can_undo()


def test_undo_to_missing_delimiter_empties_stack():
    p = MutablePair(0, 0)
    invoker = Invoker()
    invoker.push_delimiter("other")
    invoker.execute(SetFirst(p, 1))

    invoker.undo_to_delimiter("missing", add_to_redo=False)

    assert p.first == 0
    assert not invoker.can_undo()
    assert not invoker.can_redo()


def test_failed_command_is_not_recorded_and_is_disposed():
    invoker = Invoker()
    command = Failing()

    assert invoker.execute(command) is False
    assert not invoker.can_undo()
    assert command.disposed


def test_non_undoable_disposable_command_is_disposed_after_success():
    invoker = Invoker()
    command = FireAndForget()

    assert invoker.execute(command) is True
    assert command.ran
    assert command.disposed
    assert not invoker.can_undo()


def test_clear_disposes_everything():
    p = MutablePair(0, 0)
    invoker = Invoker()
    kept = DisposableSet(p, 1)
    undone = DisposableSet(p, 2)
    invoker.execute(kept)
    invoker.execute(undone)
    invoker.undo()

    invoker.clear()

    assert kept.disposed and undone.disposed
    assert not invoker.can_undo()
    assert not invoker.can_redo()


def test_execute_rejects_non_command():
    with pytest.raises(InvokerError, match="Expected a Command"):
        Invoker().execute(lambda: True)


def test_raising_undo_keeps_entry_on_stack():
    invoker = Invoker()
    invoker.execute(Exploding())

    with pytest.raises(RuntimeError, match="boom"):
        invoker.undo()
    assert invoker.can_undo()


def test_commands_run_directly_without_invoker():
    p = MutablePair(0, 0)
    command = SetFirst(p, 3)
    assert isinstance(command, Command)
    assert command.execute()
    assert command.undo()
    assert p.first == 0


def test_invoker_logs_failures_and_debug_decisions(caplog):
    set_settings(UtilkitSettings(log_level="DEBUG"))
    p = MutablePair(0, 0)
    invoker = Invoker()

    with caplog.at_level(logging.DEBUG, logger="utilkit"):
        invoker.execute(SetFirst(p, 1))
        invoker.execute(Failing())

    messages = [r.getMessage() for r in caplog.records]
    assert "Recorded SetFirst (chained=False)" in messages
    assert "Failing failed to execute" in messages


class Recorder(UndoCommand, DisposableCommand):
    """Appends its value on execute and ``u<value>`` on undo."""

    def __init__(self, log: list, value, undo_ok: bool = True, runs_allowed: int = -1):
        self.log = log
        self.value = value
        self.undo_ok = undo_ok
        self.runs_allowed = runs_allowed
        self.disposed = False

    def execute(self) -> bool:
        if self.runs_allowed == 0:
            return False
        self.runs_allowed -= 1
        self.log.append(self.value)
        return True

    def undo(self) -> bool:
        self.log.append(f"u{self.value}")
        return self.undo_ok

    def dispose(self) -> None:
        self.disposed = True


def test_failed_undo_is_disposed_and_not_redoable():
    log = []
    invoker = Invoker()
    command = Recorder(log, 1, undo_ok=False)
    invoker.execute(command)

    invoker.undo()

    assert log == [1, "u1"]
    assert command.disposed
    assert not invoker.can_undo()
    assert not invoker.can_redo()


def test_failed_redo_is_disposed():
    log = []
    invoker = Invoker()
    command = Recorder(log, 1, runs_allowed=1)
    invoker.execute(command)
    invoker.undo()
    assert invoker.can_redo()

    invoker.redo()

    assert log == [1, "u1"]
    assert command.disposed
    assert not invoker.can_undo()
    assert not invoker.can_redo()


def test_chain_with_failed_undo_in_the_middle_skips_it_on_redo():
    log = []
    invoker = Invoker()
    middle = Recorder(log, 2, undo_ok=False)
    invoker.execute(Recorder(log, 1))
    invoker.execute(middle, chained=True)
    invoker.execute(Recorder(log, 3), chained=True)

    invoker.undo()
    invoker.redo()

    assert log == [1, 2, 3, "u3", "u2", "u1", 1, 3]
    assert middle.disposed
    assert invoker.can_undo()
    assert not invoker.can_redo()


class ScopeRecorder(UndoCommand):
    def __init__(self, seen: list):
        self.seen = seen

    def execute(self) -> bool:
        self.seen.append(current_scope())
        return True

    def undo(self) -> bool:
        self.seen.append(current_scope())
        return True


def test_invoker_scope_applies_while_commands_run():
    seen = []
    invoker = Invoker(scope="level-editor")
    invoker.execute(ScopeRecorder(seen))
    invoker.undo()
    invoker.redo()

    assert seen == ["level-editor"] * 3
    assert current_scope() == "-"


def test_invoker_without_scope_keeps_outer_scope():
    seen = []
    token = push_scope("outer")
    try:
        Invoker().execute(ScopeRecorder(seen))
    finally:
        reset_scope(token)

    assert seen == ["outer"]
