"""
Models package for staplegun

Contains data structures and type definitions for the stapling pipeline.
"""

from .state import ProgramState, StapleResult, pipeline
from .directives import DirectiveSpec, DirectiveKind, DIRECTIVE_SPECS
from .parser import DirectiveMatch, ExtractedBlocks, ParsedTemplate

__all__ = [
    "ProgramState",
    "StapleResult",
    "pipeline",
    "DirectiveSpec",
    "DirectiveKind",
    "DIRECTIVE_SPECS",
    "DirectiveMatch",
    "ExtractedBlocks",
    "ParsedTemplate",
]
