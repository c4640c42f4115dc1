"""Context-local overrides for process environment variables.

Re-exports public symbols so callers can write::

    from ctxenv import background, getenv, setenv
"""

from ctxenv.context import Context, ContextError, ContextKey, background
from ctxenv.environ import clearenv, environ, getenv, setenv, with_environ
from ctxenv.logging import LogEntry, Logger, LogLevel, logger_from, with_logger
from ctxenv.scope import activate, current
from ctxenv.table import EnvironTable, find_in_environ

__all__ = [
    "Context",
    "ContextError",
    "ContextKey",
    "EnvironTable",
    "LogEntry",
    "LogLevel",
    "Logger",
    "activate",
    "background",
    "clearenv",
    "current",
    "environ",
    "find_in_environ",
    "getenv",
    "logger_from",
    "setenv",
    "with_environ",
    "with_logger",
]
