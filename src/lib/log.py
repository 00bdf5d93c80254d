"""
Generator logging through loguru, gated by the pipeline's verbosity.

The renderers log from deep inside pure functions (rule counts, resolved
prefixes, option fallbacks), so the verbosity is not passed around. The
command line pipeline connects its ProgramState once; LOG() reads the
verbosity from that context. Library callers that never connect a state get
no output at all.

Verbosity levels and the loguru severity each one is written with:
    1  INFO   stage progress ("Generating navigation code...")
    2  DEBUG  resolved context, per-artifact sizes, fallbacks
    3  TRACE  rule counts, dropped orphans

Usage:
    from etchnav.lib.log import LOG, state_connectToLogger

    token = state_connectToLogger(state)
    try:
        LOG("Rendering stylesheet", level=2)
    finally:
        state_disconnectFromLogger(token)
"""

from contextvars import ContextVar, Token
from typing import Any, Optional
import sys

from loguru import logger

# ProgramState of the running pipeline, None for library use
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

LEVEL_NAMES = {1: "INFO", 2: "DEBUG", 3: "TRACE"}

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>.<cyan>{function: <20}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="TRACE")


def state_connectToLogger(state: Any) -> Token:
    """
    Make a ProgramState's verbosity govern LOG() in the current context.

    Returns:
        Token for state_disconnectFromLogger
    """
    return _program_state.set(state)


def state_disconnectFromLogger(token: Token) -> None:
    """Restore the logging context that was active before the connect"""
    _program_state.reset(token)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log a message when the connected state's verbosity is at least `level`.

    Levels beyond 3 are written as TRACE.
    """
    state = _program_state.get()

    if state is not None and getattr(state, 'verbosity', 0) >= level:
        severity = LEVEL_NAMES.get(level, "TRACE")
        logger.opt(depth=1).log(severity, message, **kwargs)
