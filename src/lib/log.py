"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current ProgramState's
verbosity level without requiring explicit state passing.

Features:
- Context-aware logging tied to ProgramState verbosity
- Rich formatting with timestamps, colors, and metadata
- Indentation by template recursion depth
- Thread-safe using contextvars

Usage:
    from lib.log import LOG, state_connectToLogger

    # At start of pipeline function:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("This message appears if verbosity >= 1", level=1)
    LOG("Parsing 'page.html'", level=2, depth=1)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar, Token
import sys

from ..config import appsettings

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Configure loguru with staplegun-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> Token:
    """
    Connect a ProgramState to the logging context.

    Call this at the start of a run to make the state's verbosity setting
    available to LOG() calls throughout that context.

    Args:
        state: ProgramState instance with verbosity attribute

    Returns:
        Token restoring the previously connected state when passed to
        state_disconnectFromLogger()
    """
    return _program_state.set(state)


def state_disconnectFromLogger(token: Token) -> None:
    """
    Restore the state that was connected before state_connectToLogger().

    Example:
        token = state_connectToLogger(state)
        try:
            ...
        finally:
            state_disconnectFromLogger(token)
    """
    _program_state.reset(token)


def LOG(message: str, level: int = 1, depth: int = 0, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        depth: Template recursion depth, each step indents the message once
        **kwargs: Additional loguru metadata

    Example:
        LOG("Wrote page.html", level=2)
        LOG("Extracted 3 blocks.", level=2, depth=2)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(appsettings.log_indent * depth + message, **kwargs)
