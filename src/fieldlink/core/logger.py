import logging
import sys
import contextvars
from typing import Optional

# Context variable to carry the graph currently being checked across the call chain
_GRAPH_ID: contextvars.ContextVar[str] = contextvars.ContextVar("graph_id", default="-")


class _GraphContextFilter(logging.Filter):
    """Logging filter that injects the graph_id from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.graph_id = _GRAPH_ID.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | graph=%(graph_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_root_logger(level: Optional[str] = None) -> None:
    """
    Configure root logger and fieldlink-specific logger.

    Root logger stays at INFO so host applications (the editor backend, test
    runners) keep their own noise level. Only the fieldlink namespace follows
    the requested level.

    Args:
        level: Log level for fieldlink logs (DEBUG, INFO, WARNING, ERROR).
               None keeps the current level (INFO on first configuration).

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    root = logging.getLogger()

    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _GraphContextFilter) for f in h.filters):
            if level is not None:
                set_log_level(level)
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_GraphContextFilter())
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > logging.INFO:
        root.setLevel(logging.INFO)

    set_log_level(level or "INFO")


def get_logger(name: str = "fieldlink", level: Optional[str] = None) -> logging.Logger:
    """
    Get a module-specific logger writing to stdout with the graph id in context.
    """
    configure_root_logger()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def set_log_level(level: str) -> None:
    """Change the level of the whole fieldlink namespace (e.g. for ``--verbose``)."""
    logging.getLogger("fieldlink").setLevel(getattr(logging, level.upper(), logging.INFO))


def current_graph_id() -> str:
    return _GRAPH_ID.get()


def push_graph_id(graph_id: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current graph id in context and return a token for later reset."""
    if not graph_id:
        return None
    return _GRAPH_ID.set(graph_id)


def reset_graph_id(token: Optional[contextvars.Token]) -> None:
    """Reset the graph id context using the provided token (if any)."""
    if token is None:
        return
    _GRAPH_ID.reset(token)
