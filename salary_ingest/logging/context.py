"""Scoped log context carried through contextvars.

Fields bound here (run_id, source_id, post_id) are copied onto every log
record emitted inside the scope by ContextualFilter.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator

_current_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields bound in the current scope."""
    return dict(_current_context.get())


def clear_log_context() -> None:
    """Drop every bound field. Intended for tests."""
    _current_context.set({})


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Bind fields for the duration of a with block.

    Nested scopes inherit the outer fields and may override them. The
    previous context is restored on exit, including when the block raises.

    Example:
        >>> with log_context(run_id="r-1", source_id="BESalary"):
        ...     logger.info("Fetching posts")
    """
    token = _current_context.set({**_current_context.get(), **fields})
    try:
        yield get_log_context()
    finally:
        _current_context.reset(token)
