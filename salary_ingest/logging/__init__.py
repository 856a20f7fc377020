"""Structured logging helpers for the salary ingestion pipeline."""

import logging
from typing import Optional, Union


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter stamping a component name onto every record.

    Extra fields passed at the call site win over the adapter's own.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Return a module logger, optionally tagged with a component.

    Example:
        >>> logger = get_logger(__name__, component="comments")
        >>> logger.debug("Orphan dropped", extra={"event": "comments.tree.orphan_dropped"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger


__all__ = ["ComponentLoggerAdapter", "get_logger"]
