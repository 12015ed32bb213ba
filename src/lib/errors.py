"""
Exception taxonomy for staplegun

Every failure raised by the parser or the directory driver derives from
StaplegunError. Read/write failures are not wrapped: the underlying
OSError reaches the caller unchanged.
"""

from pathlib import Path
from typing import List, Optional


class StaplegunError(Exception):
    """Base class for all staplegun errors"""
    pass


class DirectoryError(StaplegunError):
    """Raised when a source or destination path is not a directory"""

    def __init__(self, path: Path, role: str) -> None:
        self.path = Path(path)
        super().__init__(f"{role} {str(self.path)!r} is not a directory")


class SourceDirectoryError(DirectoryError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, "Source")


class DestinationDirectoryError(DirectoryError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, "Destination")


class BlockStructureError(StaplegunError):
    """
    Raised for malformed define_block/end structure

    Attributes:
        block: Name of the offending block, if any
        path: Document being parsed when the error was found
    """

    def __init__(self, message: str, block: Optional[str] = None, path: Optional[Path] = None) -> None:
        self.block = block
        self.path = path
        if path is not None:
            message = f"{message} (in {str(path)!r})"
        super().__init__(message)


class NestedBlockError(BlockStructureError):
    def __init__(self, block: str, path: Optional[Path] = None) -> None:
        super().__init__(
            f"found start of block when a previous block {block!r} was not closed",
            block=block,
            path=path,
        )


class UnopenedBlockEndError(BlockStructureError):
    def __init__(self, path: Optional[Path] = None) -> None:
        super().__init__("found end of block when no block was started", path=path)


class UnclosedBlockError(BlockStructureError):
    def __init__(self, block: str, path: Optional[Path] = None) -> None:
        super().__init__(f"block {block!r} was not closed", block=block, path=path)


class TemplateReferenceError(StaplegunError):
    """Raised when a directive refers to something that cannot be resolved"""
    pass


class UndefinedBlockError(TemplateReferenceError):
    def __init__(self, block: str, path: Optional[Path] = None) -> None:
        self.block = block
        self.path = path
        message = f"insert_block target {block!r} not defined"
        if path is not None:
            message = f"{message} (in {str(path)!r})"
        super().__init__(message)


class CircularImportError(TemplateReferenceError):
    """
    Raised when import_file re-enters a document that is still being parsed

    Attributes:
        chain: Paths from the outermost document to the repeated import
    """

    def __init__(self, chain: List[Path]) -> None:
        self.chain = list(chain)
        super().__init__(
            "circular import_file: " + " -> ".join(str(p) for p in self.chain)
        )
