"""
staplegun - Template inheritance preprocessor

Parent documents define blocks and import child documents; staplegun
flattens them into plain output files.
"""

__version__ = "1.0.0"

from .lib import (
    TemplateParser,
    Stapler,
    process,
    DirectiveRegistry,
    StaplegunError,
    LOG,
    state_connectToLogger,
    state_disconnectFromLogger,
)

__all__ = [
    "TemplateParser",
    "Stapler",
    "process",
    "DirectiveRegistry",
    "StaplegunError",
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "__version__",
]
