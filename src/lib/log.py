"""
Verbosity-gated logging for the fusemods CLI and its library modules.

The CLI connects its ProgramState once, in main(); from then on every
LOG() call in the same context compares its level against the -v count:

    1   stage progress of the CLI pipeline (reading, decorating, writing)
    2   input/output paths, theme file, decoration and status tag counts,
        stylesheet injection
    3   per-decode trace, each unrecognized code passed through verbatim,
        the highlighted message source, status watcher registration

The rescan scheduler also logs a pass that raised (level 1) before arming the
next one, so a failing pass never goes unreported under the CLI.

When fusemods is imported as a library nothing is connected and LOG() is
silent; callers wanting output connect their own object with a `verbosity`
attribute:

    from fusemods.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Decorated 3 message container(s)", level=2)
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger

# State whose verbosity gates LOG(); None keeps the library silent
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{name}:{function}</cyan>:<cyan>{line}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Make state's verbosity gate LOG() in the current context

    Args:
        state: Object with an integer `verbosity` attribute, normally the
               CLI's ProgramState
    """
    _program_state.set(state)


def state_disconnectFromLogger() -> None:
    """Detach whatever state is connected, silencing LOG() in this context."""
    _program_state.set(None)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when nothing is connected"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit message when the connected verbosity is at least level

    Args:
        message: Text to log
        level: Minimum -v count required (see the module docstring)
        **kwargs: Passed to loguru for message formatting
    """
    if verbosity_get() >= level:
        # depth=1 reports the caller's function/line, not LOG itself
        logger.opt(depth=1).debug(message, **kwargs)
