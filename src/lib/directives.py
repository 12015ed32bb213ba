"""
Directive registry for staplegun

Maps each directive kind to its compiled whole-line pattern and classifies
raw template lines. A directive must occupy its line alone; only the leading
whitespace is kept (as indentation for substituted content).
"""

from typing import Dict, List, Optional, Pattern

from ..models.directives import DirectiveSpec, DirectiveKind, DIRECTIVE_SPECS
from ..models.parser import DirectiveMatch


class DirectiveRegistry:
    """
    Registry of compiled directive patterns
    """

    def __init__(self, specs: Optional[List[DirectiveSpec]] = None) -> None:
        """Initialize the registry with the built-in directives"""
        self.patterns: Dict[DirectiveKind, Pattern[str]] = {}
        for spec in specs if specs is not None else DIRECTIVE_SPECS:
            self.register(spec)

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive specification"""
        self.patterns[spec.kind] = spec.pattern_compile()

    def line_match(self, line: str, kind: DirectiveKind) -> Optional[DirectiveMatch]:
        """
        Match a line against a single directive kind

        Args:
            line: Raw template line
            kind: Directive kind to test

        Returns:
            DirectiveMatch if the whole line is that directive, None otherwise
        """
        pattern = self.patterns.get(kind)
        if pattern is None:
            return None
        match = pattern.match(line)
        if not match:
            return None
        argument = match.group(2) if pattern.groups >= 2 else None
        return DirectiveMatch(kind=kind, indent=match.group(1), argument=argument)

    def line_classify(self, line: str) -> Optional[DirectiveMatch]:
        """
        Classify a raw line as one of the registered directives

        Args:
            line: Raw template line

        Returns:
            DirectiveMatch for the first kind that matches, None for content lines

        Example:
            >>> DirectiveRegistry().line_classify("  {{ staplegun insert_block nav }}")
            DirectiveMatch(kind=<DirectiveKind.INSERT_BLOCK: 'insert_block'>, indent='  ', argument='nav')
            >>> DirectiveRegistry().line_classify("<p>{{ staplegun end }}</p>") is None
            True
        """
        for kind in self.patterns:
            found = self.line_match(line, kind)
            if found is not None:
                return found
        return None

    def document_classify(self, first_line: str) -> Optional[DirectiveKind]:
        """
        Classify a document by its first line

        The parent marker is tested before the child marker.

        Returns:
            DirectiveKind.PARENT, DirectiveKind.CHILD, or None
        """
        for kind in (DirectiveKind.PARENT, DirectiveKind.CHILD):
            if self.line_match(first_line, kind) is not None:
                return kind
        return None
