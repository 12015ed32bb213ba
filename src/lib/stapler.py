"""
Directory driver for staplegun

Parses every file directly inside a source directory and writes the
resolved output of each parent document to a destination directory.
"""

from pathlib import Path
from typing import Optional, Union

from ..config import appsettings, AppSettings
from ..models.state import ProgramState, StapleResult
from .errors import SourceDirectoryError, DestinationDirectoryError
from .log import LOG, state_connectToLogger, state_disconnectFromLogger
from .parser import TemplateParser


class Stapler:
    """
    Resolves a directory of templates into a directory of output documents

    Responsibilities:
    - Validate the source and destination directories
    - Parse each regular file in the source directory (non-recursive)
    - Skip child and non-staplegun documents
    - Write resolved parent documents under the same basename

    The run stops at the first error. A document that fails to parse is
    never written.
    """

    def __init__(
        self,
        source_dir: Union[str, Path],
        dest_dir: Union[str, Path],
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Initialize the driver

        Args:
            source_dir: Directory holding parent and child templates
            dest_dir: Directory receiving resolved parent documents
            settings: Marker and encoding configuration (defaults to appsettings)
        """
        self.source_dir = Path(source_dir)
        self.dest_dir = Path(dest_dir)
        self.settings = settings if settings is not None else appsettings

    def dirs_validate(self) -> None:
        """
        Check that both directories exist

        Raises:
            SourceDirectoryError: source_dir missing or not a directory
            DestinationDirectoryError: dest_dir missing or not a directory
        """
        if not self.source_dir.is_dir():
            raise SourceDirectoryError(self.source_dir)
        if not self.dest_dir.is_dir():
            raise DestinationDirectoryError(self.dest_dir)

    def staple(self) -> StapleResult:
        """
        Resolve all templates of the source directory

        Returns:
            StapleResult listing written and skipped basenames

        Raises:
            StaplegunError: First validation, structure or reference error
            OSError: First read or write failure
        """
        LOG("staplegun: resolving templates", level=2)
        self.dirs_validate()

        result = StapleResult()
        parser = TemplateParser(self.source_dir, settings=self.settings)

        for source_file in sorted(self.source_dir.iterdir()):
            if source_file.is_dir():
                continue

            name = source_file.name
            parsed = parser.parse(source_file, depth=1)

            if parsed.isChild:
                LOG(f"IGNORED {name!r} because it is a child document.", level=2)
                result.skippedChildren.append(name)
                continue
            if not parsed.isParent:
                LOG(f"IGNORED {name!r} because it is not a staplegun document.", level=2)
                result.skippedPlain.append(name)
                continue

            out_file = self.dest_dir / name
            with open(
                out_file, "w", encoding=self.settings.encoding, errors="surrogateescape", newline=""
            ) as f:
                f.write("\n".join(parsed.lines))
            LOG(f"WROTE parsed {name!r} -> {str(out_file)!r}", level=2)
            result.written.append(name)

        return result


def process(
    source_dir: Union[str, Path],
    dest_dir: Union[str, Path],
    verbose: bool = False,
    settings: Optional[AppSettings] = None,
) -> StapleResult:
    """
    Resolve a template directory into a destination directory.

    Convenience wrapper around Stapler for library callers. Connects a
    ProgramState to the logger for the duration of the run and restores
    the previously connected state afterwards.

    Args:
        source_dir: Directory holding parent and child templates
        dest_dir: Existing directory receiving resolved parent documents
        verbose: Emit per-file diagnostics
        settings: Optional configuration override

    Returns:
        StapleResult listing written and skipped basenames

    Example:
        >>> process("templates/", "public/")
        StapleResult(written=['index.html'], skippedChildren=['nav.html'], skippedPlain=[])
    """
    state = ProgramState(
        inputdir=Path(source_dir),
        outputdir=Path(dest_dir),
        verbosity=2 if verbose else 1,
    )
    token = state_connectToLogger(state)
    try:
        return Stapler(source_dir, dest_dir, settings=settings).staple()
    finally:
        state_disconnectFromLogger(token)
