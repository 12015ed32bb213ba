"""
Parser for staplegun template documents

Resolves the directives of one document into a flattened line sequence.

The parser works on whole lines and runs three passes per document:
1. Block extraction: capture define_block/end regions into a block map
2. Import resolution: replace import_file lines with the recursively
   parsed content of the referenced file
3. Block insertion: replace insert_block lines with captured block content

Each import_file triggers a fresh parse of the referenced document, one
recursion level deeper. Paths are always resolved against the source root
the parser was created with, never against the importing document.

Example:
    >>> parser = TemplateParser("templates/")
    >>> result = parser.parse("templates/index.html")
    >>> result.isParent
    True
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..config import appsettings, AppSettings
from ..models.directives import DirectiveKind
from ..models.parser import ExtractedBlocks, ParsedTemplate
from .directives import DirectiveRegistry
from .errors import (
    CircularImportError,
    NestedBlockError,
    UndefinedBlockError,
    UnclosedBlockError,
    UnopenedBlockEndError,
)
from .log import LOG


class TemplateParser:
    """
    Recursive parser for parent and child template documents

    Handles:
    - parent/child classification from the first line
    - Block capture (one level, no nesting)
    - Nested import_file resolution with circular import detection
    - insert_block substitution, deferred in child documents
    - Indentation of substituted content and marker comments
    """

    def __init__(
        self,
        source_root: Union[str, Path],
        settings: Optional[AppSettings] = None,
        registry: Optional[DirectiveRegistry] = None,
    ) -> None:
        """
        Initialize parser for one top-level run

        Args:
            source_root: Directory import_file paths are resolved against
            settings: Marker and encoding configuration (defaults to appsettings)
            registry: Optional DirectiveRegistry used to classify lines

        Attributes:
            importStack: Resolved paths of the documents currently being parsed,
                         outermost first
        """
        self.source_root = Path(source_root)
        self.settings = settings if settings is not None else appsettings
        self.registry = registry if registry is not None else DirectiveRegistry()
        self.importStack: List[Path] = []

    def parse(self, path: Union[str, Path], depth: int = 1) -> ParsedTemplate:
        """
        Parse a template file into its resolved output

        Main entry point. Reads the file and resolves all of its directives,
        recursing into imported files.

        Args:
            path: Template file to parse
            depth: Recursion depth (1 for top-level documents)

        Returns:
            ParsedTemplate with classification flags and resolved lines.
            Documents that are empty, single-line, or do not start with a
            parent/child marker yield an empty ParsedTemplate.

        Raises:
            CircularImportError: If path is already being parsed further up
                                 the import chain
            BlockStructureError: On malformed define_block/end structure
            UndefinedBlockError: If a non-child document inserts an
                                 undefined block
            OSError: If the file (or any imported file) cannot be read
        """
        path = Path(path)
        resolved = path.resolve()
        if resolved in self.importStack:
            raise CircularImportError(self.importStack + [resolved])

        LOG(f"Parsing {str(path)!r}", level=2, depth=depth)
        self.importStack.append(resolved)
        try:
            with open(
                path, "r", encoding=self.settings.encoding, errors="surrogateescape", newline=""
            ) as f:
                text = f.read()
            return self.source_parse(text, depth=depth, path=path)
        finally:
            self.importStack.pop()

    def source_parse(
        self, text: str, depth: int = 1, path: Optional[Path] = None
    ) -> ParsedTemplate:
        """
        Parse template text that has already been read

        Args:
            text: Full document text
            depth: Recursion depth used for nested imports and log indentation
            path: Originating file, used in error messages

        Returns:
            ParsedTemplate with classification flags and resolved lines
        """
        lines = text.split("\n")
        if len(lines) < 2:
            return ParsedTemplate()

        kind = self.registry.document_classify(lines[0])
        if kind is None:
            return ParsedTemplate()
        isParent = kind == DirectiveKind.PARENT
        isChild = kind == DirectiveKind.CHILD

        extracted = self.blocks_extract(lines[1:], path)
        LOG(f"Extracted {len(extracted.blocks)} blocks.", level=2, depth=depth + 1)

        resolved = self.fileImports_resolve(extracted.lines, depth)

        # Child documents rarely define the blocks they insert; an undefined
        # insert_block there is kept for whichever document imports the child.
        resolved = self.blockInserts_resolve(
            resolved, extracted.blocks, ignoreUndefined=isChild, depth=depth, path=path
        )

        return ParsedTemplate(isParent=isParent, isChild=isChild, lines=resolved)

    def blocks_extract(
        self, lines: List[str], path: Optional[Path] = None
    ) -> ExtractedBlocks:
        """
        Capture define_block/end regions into a block map

        Lines between a define_block and its end are moved into the block;
        all other lines are kept, in order, as the residual document. The
        define_block and end lines themselves are dropped.

        Args:
            lines: Document lines after the parent/child marker
            path: Originating file, used in error messages

        Returns:
            ExtractedBlocks with the block map and residual lines

        Raises:
            NestedBlockError: define_block while another block is open
            UnopenedBlockEndError: end while no block is open
            UnclosedBlockError: block still open at end of document
        """
        blocks: Dict[str, List[str]] = {}
        residual: List[str] = []
        currentBlock: Optional[str] = None
        currentLines: List[str] = []

        for line in lines:
            define = self.registry.line_match(line, DirectiveKind.DEFINE_BLOCK)
            if define is not None:
                if currentBlock is not None:
                    raise NestedBlockError(currentBlock, path)
                currentBlock = define.argument
                currentLines = []
                continue

            if self.registry.line_match(line, DirectiveKind.END) is not None:
                if currentBlock is None:
                    raise UnopenedBlockEndError(path)
                blocks[currentBlock] = currentLines
                currentBlock = None
                currentLines = []
                continue

            if currentBlock is not None:
                currentLines.append(line)
            else:
                residual.append(line)

        if currentBlock is not None:
            raise UnclosedBlockError(currentBlock, path)

        return ExtractedBlocks(blocks=blocks, lines=residual)

    def fileImports_resolve(self, lines: List[str], depth: int) -> List[str]:
        """
        Replace import_file lines with the resolved content of the file

        The imported document's own parent/child classification is ignored;
        only its resolved lines are used.

        Args:
            lines: Residual lines from the block extraction pass
            depth: Recursion depth of the importing document

        Returns:
            Lines with every import_file directive substituted
        """
        linesOut: List[str] = []
        for line in lines:
            found = self.registry.line_match(line, DirectiveKind.IMPORT_FILE)
            if found is None:
                linesOut.append(line)
                continue

            imported = self.parse(self.source_root / found.argument, depth + 1)
            linesOut.extend(
                self.substitution_wrap("file", found.argument, found.indent, imported.lines)
            )
        return linesOut

    def blockInserts_resolve(
        self,
        lines: List[str],
        blocks: Dict[str, List[str]],
        ignoreUndefined: bool = False,
        depth: int = 1,
        path: Optional[Path] = None,
    ) -> List[str]:
        """
        Replace insert_block lines with the content of the named block

        Args:
            lines: Lines from the import resolution pass
            blocks: Block map from the extraction pass
            ignoreUndefined: Keep insert_block lines whose block is undefined
                             instead of failing (used for child documents)
            depth: Recursion depth, for log indentation
            path: Originating file, used in error messages

        Returns:
            Lines with every resolvable insert_block directive substituted

        Raises:
            UndefinedBlockError: Block undefined and ignoreUndefined is False
        """
        linesOut: List[str] = []
        for line in lines:
            found = self.registry.line_match(line, DirectiveKind.INSERT_BLOCK)
            if found is None:
                linesOut.append(line)
                continue

            name = found.argument
            if name not in blocks:
                if not ignoreUndefined:
                    raise UndefinedBlockError(name, path)
                linesOut.append(line)
                LOG(
                    f"Retained insert_block of {name!r} for resolution by some parent",
                    level=2,
                    depth=depth + 1,
                )
                continue

            linesOut.extend(self.substitution_wrap("block", name, found.indent, blocks[name]))
        return linesOut

    def substitution_wrap(
        self, kind: str, name: str, indent: str, lines: List[str]
    ) -> List[str]:
        """
        Bracket substituted lines with start/end markers, all indented

        Example:
            >>> TemplateParser(".").substitution_wrap("block", "greet", "  ", ["Hello"])
            ['  <!-- sg:block:start:greet -->', '  Hello', '  <!-- sg:block:end:greet -->']
        """
        wrapped = [indent + self.settings.marker_make(kind, "start", name)]
        wrapped.extend(indent + line for line in lines)
        wrapped.append(indent + self.settings.marker_make(kind, "end", name))
        return wrapped
