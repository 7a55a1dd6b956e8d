"""
Logging for the conversion pipeline, built on Loguru.

LOG() respects the verbosity of the ProgramState connected to the current
context, so engine internals can trace their decisions without being handed
the state explicitly. With no state connected (library use, tests) LOG() is
silent.

Usage:
    from mdplayscript.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)

    LOG("Converting play.md", level=1)
    LOG("Paragraph split into 3 lines", level=2)
    LOG("Directive playscript-off: PLAYSCRIPT -> OFF", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# ProgramState of the running conversion, if any
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: ProgramState instance with a verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Wrote figaro.html", level=1)
        LOG("Mode changed to MONOLOGUE", level=3)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        # depth=1 reports the caller, not this helper
        logger.opt(depth=1).debug(message, **kwargs)
