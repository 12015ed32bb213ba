"""
Directive specification and metadata models

Defines the kinds of staplegun directives and the whole-line patterns
that recognise them.
"""

import re
from enum import Enum
from dataclasses import dataclass
from typing import List, Optional, Pattern


class DirectiveKind(Enum):
    """
    Kinds of staplegun directives

    PARENT and CHILD are only meaningful on the first line of a document.
    """
    PARENT = "parent"              # {{ staplegun parent }}
    CHILD = "child"                # {{ staplegun child }}
    DEFINE_BLOCK = "define_block"  # {{ staplegun define_block NAME }}
    END = "end"                    # {{ staplegun end }}
    INSERT_BLOCK = "insert_block"  # {{ staplegun insert_block NAME }}
    IMPORT_FILE = "import_file"    # {{ staplegun import_file PATH }}


@dataclass
class DirectiveSpec:
    """
    Specification for a staplegun directive

    Attributes:
        kind: Directive kind
        argument: Regex fragment for the directive argument, or None if the
                  directive takes no argument
    """
    kind: DirectiveKind
    argument: Optional[str] = None

    def pattern_compile(self) -> Pattern[str]:
        """
        Build the whole-line pattern for this directive

        Group 1 always captures the leading whitespace of the line; group 2
        captures the argument for directives that take one. Whitespace inside
        the braces and after them is insignificant, anything else on the line
        prevents a match. Whitespace and word characters are ASCII only, so
        a non-breaking space or an accented block name is plain content.

        Returns:
            Compiled regular expression
        """
        body = rf"staplegun\s+{self.kind.value}"
        if self.argument is not None:
            body += rf"\s+({self.argument})"
        return re.compile(rf"^(\s*)\{{\{{\s*{body}\s*\}}\}}\s*$", re.ASCII)


DIRECTIVE_SPECS: List[DirectiveSpec] = [
    DirectiveSpec(kind=DirectiveKind.PARENT),
    DirectiveSpec(kind=DirectiveKind.CHILD),
    DirectiveSpec(kind=DirectiveKind.DEFINE_BLOCK, argument=r"\w+"),
    DirectiveSpec(kind=DirectiveKind.END),
    DirectiveSpec(kind=DirectiveKind.INSERT_BLOCK, argument=r"\w+"),
    DirectiveSpec(kind=DirectiveKind.IMPORT_FILE, argument=r"\S+"),
]
