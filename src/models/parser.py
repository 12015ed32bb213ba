"""
Parser-specific data models

Type-safe structures for parser operations and return values.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .directives import DirectiveKind


@dataclass
class DirectiveMatch:
    """
    Result of classifying one line as a directive

    Returned by DirectiveRegistry.line_classify() when a line consists of
    a single staplegun directive.

    Attributes:
        kind: The directive kind
        indent: Leading whitespace of the line, reused as indentation for
                substituted content
        argument: Block name or file path, None for directives without one

    Example:
        For the line "  {{ staplegun insert_block greet }}":
        DirectiveMatch(kind=DirectiveKind.INSERT_BLOCK, indent="  ", argument="greet")
    """
    kind: DirectiveKind
    indent: str = ""
    argument: Optional[str] = None


@dataclass
class ExtractedBlocks:
    """
    Result of the block extraction pass

    Attributes:
        blocks: Block name mapped to its captured lines
        lines: Document lines with the block definition regions removed
    """
    blocks: Dict[str, List[str]]
    lines: List[str]


@dataclass
class ParsedTemplate:
    """
    Result of parsing one document

    Attributes:
        isParent: First line is the parent marker
        isChild: First line is the child marker
        lines: Resolved output lines (empty for non-staplegun documents)
    """
    isParent: bool = False
    isChild: bool = False
    lines: List[str] = field(default_factory=list)

    @property
    def isStaplegun(self) -> bool:
        """True if the document is under staplegun control"""
        return self.isParent or self.isChild
