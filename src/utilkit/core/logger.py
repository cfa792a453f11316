import logging
import sys
import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional

# Context variable carrying a caller-chosen scope label (e.g. an editor session)
_SCOPE: contextvars.ContextVar[str] = contextvars.ContextVar("scope", default="-")


class _ScopeFilter(logging.Filter):
    """Logging filter that injects the current scope label from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.scope = current_scope()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | scope=%(scope)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def configure_root_logger(level: str = "INFO") -> None:
    """
    Configure the root handler and the utilkit logger.

    The root handler stays at INFO so other libraries do not get noisier;
    only the ``utilkit`` namespace follows the requested level.

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    root = logging.getLogger()
    utilkit_logger = logging.getLogger("utilkit")

    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _ScopeFilter) for f in h.filters):
            # Already configured; just update the utilkit level
            utilkit_logger.setLevel(_level(level))
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_ScopeFilter())
    handler.setLevel(logging.DEBUG)
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > logging.INFO:
        root.setLevel(logging.INFO)

    utilkit_logger.setLevel(_level(level))


def get_logger(name: str = "utilkit", level: Optional[str] = None) -> logging.Logger:
    """
    Get a namespaced logger. When ``level`` is omitted the configured settings decide it.
    """
    if level is None:
        from utilkit.models.settings import get_settings

        level = get_settings().log_level
    configure_root_logger(level)
    logger = logging.getLogger(name)
    logger.setLevel(_level(level))
    return logger


def push_scope(scope: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current scope label and return a token for later reset."""
    if not scope:
        return None
    return _SCOPE.set(scope)


def reset_scope(token: Optional[contextvars.Token]) -> None:
    """Reset the scope label using the provided token (if any)."""
    if token is None:
        return
    _SCOPE.reset(token)


def current_scope() -> str:
    return _SCOPE.get()


@contextmanager
def scoped(scope: Optional[str]) -> Iterator[None]:
    """Run a block with ``scope`` as the log scope label; a falsy scope leaves the current one."""
    token = push_scope(scope)
    try:
        yield
    finally:
        reset_scope(token)
