"""utilkit.

Small in-process utilities: mutable pair/triple value types, copyable and
id/search store contracts, a process-wide event bus and
an undo/redo command framework.

Public API for clients of the library.
"""

from utilkit.command.base import CombinableCommand, Command, DisposableCommand, UndoCommand
from utilkit.command.delimiter import DelimiterCommand
from utilkit.command.invoker import Invoker
from utilkit.command.sequence import SequenceCommand
from utilkit.core.copyable import Copyable
from utilkit.core.events import (
    AnyThreadEnforcer,
    EventBus,
    MainThreadEnforcer,
    get_event_bus,
    set_thread_enforcer,
)
from utilkit.core.exceptions import (
    EventBusError,
    HeterogeneousTupleError,
    InvokerError,
    SettingsError,
    UtilkitException,
)
from utilkit.core.stores import IdStore, SearchStore
from utilkit.models.settings import UtilkitSettings, get_settings, set_settings
from utilkit.tuples import MutablePair, MutableTriple, dict_of_pairs, pair, to, to_list, triple

__version__ = "0.1.0"

__all__ = [
    "MutablePair",
    "MutableTriple",
    "pair",
    "to",
    "triple",
    "to_list",
    "dict_of_pairs",
    "Copyable",
    "IdStore",
    "SearchStore",
    "EventBus",
    "AnyThreadEnforcer",
    "MainThreadEnforcer",
    "get_event_bus",
    "set_thread_enforcer",
    "Command",
    "UndoCommand",
    "DisposableCommand",
    "CombinableCommand",
    "DelimiterCommand",
    "SequenceCommand",
    "Invoker",
    "UtilkitException",
    "HeterogeneousTupleError",
    "InvokerError",
    "EventBusError",
    "SettingsError",
    "UtilkitSettings",
    "get_settings",
    "set_settings",
]
