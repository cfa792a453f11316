"""Undoable command framework.

Commands are plain objects; the Invoker owns history, chaining, combining and disposal.
"""
