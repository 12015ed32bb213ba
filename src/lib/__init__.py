"""
staplegun - Template inheritance preprocessor

Resolves parent/child text templates into flattened documents.
"""

__version__ = "1.0.0"

from .parser import TemplateParser
from .stapler import Stapler, process
from .directives import DirectiveRegistry
from .errors import StaplegunError
from .log import LOG, state_connectToLogger, state_disconnectFromLogger

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
