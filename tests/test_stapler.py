"""
Directory driver tests

Tests the directory-level contract: validation, which files are written,
fail-fast behaviour and verbose diagnostics.
"""

import pytest
from pathlib import Path
from loguru import logger

from staplegun.lib.stapler import Stapler, process
from staplegun.lib.log import LOG, _program_state, state_connectToLogger, state_disconnectFromLogger
from staplegun.models.state import ProgramState
from staplegun.lib.errors import (
    DestinationDirectoryError,
    SourceDirectoryError,
    UnclosedBlockError,
    UnopenedBlockEndError,
)


def template_write(directory: Path, name: str, *lines: str) -> Path:
    """Write a template file made of the given lines"""
    path = directory / name
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


@pytest.fixture
def dirs(tmp_path):
    source = tmp_path / "src"
    dest = tmp_path / "out"
    source.mkdir()
    dest.mkdir()
    return source, dest


class TestDirectoryContract:
    """Only parent documents are written, under their own basename"""

    def test_parent_written_child_skipped(self, dirs):
        source, dest = dirs
        template_write(source, "nav.html", "{{ staplegun child }}", "<nav/>")
        template_write(
            source,
            "index.html",
            "{{ staplegun parent }}",
            "<body>",
            "  {{ staplegun import_file nav.html }}",
            "</body>",
            "",
        )

        result = process(source, dest)

        assert sorted(p.name for p in dest.iterdir()) == ["index.html"]
        assert result.written == ["index.html"]
        assert result.skippedChildren == ["nav.html"]
        assert (dest / "index.html").read_text(encoding="utf-8") == "\n".join(
            [
                "<body>",
                "  <!-- sg:file:start:nav.html -->",
                "  <nav/>",
                "  <!-- sg:file:end:nav.html -->",
                "</body>",
                "",
            ]
        )

    def test_plain_files_skipped(self, dirs):
        source, dest = dirs
        template_write(source, "README.txt", "not a template", "at all")
        template_write(source, "empty.html")

        result = process(source, dest)

        assert list(dest.iterdir()) == []
        assert result.skippedPlain == ["README.txt", "empty.html"]

    def test_subdirectories_ignored(self, dirs):
        source, dest = dirs
        (source / "partials").mkdir()
        template_write(source / "partials", "deep.html", "{{ staplegun parent }}", "deep")
        template_write(source, "top.html", "{{ staplegun parent }}", "top")

        result = process(source, dest)

        assert result.written == ["top.html"]
        assert not (dest / "deep.html").exists()

    def test_existing_output_overwritten(self, dirs):
        source, dest = dirs
        (dest / "page.html").write_text("stale", encoding="utf-8")
        template_write(source, "page.html", "{{ staplegun parent }}", "fresh")

        process(source, dest)

        assert (dest / "page.html").read_text(encoding="utf-8") == "fresh"

    def test_binary_file_skipped(self, dirs):
        """Undecodable files are plain documents, not errors"""
        source, dest = dirs
        (source / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff\xfe")
        template_write(source, "index.html", "{{ staplegun parent }}", "hello")

        result = process(source, dest)

        assert result.skippedPlain == ["logo.png"]
        assert result.written == ["index.html"]
        assert (dest / "index.html").read_text(encoding="utf-8") == "hello"

    def test_undecodable_bytes_round_trip(self, dirs):
        """Latin-1 content of a parent reaches the output byte for byte"""
        source, dest = dirs
        (source / "page.html").write_bytes(b"{{ staplegun parent }}\ncaf\xe9\n\xff end")

        process(source, dest)

        assert (dest / "page.html").read_bytes() == b"caf\xe9\n\xff end"


class TestValidation:
    """Directories are checked before any parsing"""

    def test_missing_source(self, tmp_path):
        with pytest.raises(SourceDirectoryError, match="missing"):
            process(tmp_path / "missing", tmp_path)

    def test_destination_is_file(self, dirs):
        source, dest = dirs
        not_a_dir = dest / "file.txt"
        not_a_dir.write_text("x", encoding="utf-8")

        with pytest.raises(DestinationDirectoryError) as excinfo:
            Stapler(source, not_a_dir).staple()
        assert excinfo.value.path == not_a_dir


class TestFailFast:
    """The first error aborts the run and nothing partial is written"""

    def test_failing_parent_not_written(self, dirs):
        source, dest = dirs
        template_write(source, "a.html", "{{ staplegun parent }}", "{{ staplegun define_block x }}")
        template_write(source, "b.html", "{{ staplegun parent }}", "fine")

        with pytest.raises(UnclosedBlockError):
            process(source, dest)

        # a.html fails first in name order, b.html is never reached
        assert list(dest.iterdir()) == []

    def test_failing_child_aborts_run(self, dirs):
        source, dest = dirs
        template_write(source, "a.html", "{{ staplegun parent }}", "fine")
        template_write(source, "b.html", "{{ staplegun child }}", "{{ staplegun end }}")

        with pytest.raises(UnopenedBlockEndError):
            process(source, dest)

        assert [p.name for p in dest.iterdir()] == ["a.html"]


class TestVerbose:
    """Verbose diagnostics are emitted through loguru"""

    def test_verbose_messages(self, dirs):
        source, dest = dirs
        template_write(source, "nav.html", "{{ staplegun child }}", "<nav/>")
        template_write(source, "index.html", "{{ staplegun parent }}", "{{ staplegun import_file nav.html }}")

        messages = []
        handler_id = logger.add(messages.append, format="{message}")
        try:
            process(source, dest, verbose=True)
        finally:
            logger.remove(handler_id)

        text = "".join(messages)
        assert "IGNORED 'nav.html' because it is a child document." in text
        assert "WROTE parsed 'index.html'" in text
        assert "        Parsing" in text

    def test_quiet_by_default(self, dirs):
        source, dest = dirs
        template_write(source, "index.html", "{{ staplegun parent }}", "x")

        messages = []
        handler_id = logger.add(messages.append, format="{message}")
        try:
            process(source, dest)
        finally:
            logger.remove(handler_id)

        assert messages == []

    def test_logger_state_restored(self, dirs):
        """process() leaves the caller's logging context as it found it"""
        source, dest = dirs
        template_write(source, "index.html", "{{ staplegun parent }}", "x")
        caller_state = ProgramState(verbosity=1)

        token = state_connectToLogger(caller_state)
        try:
            process(source, dest, verbose=True)

            messages = []
            handler_id = logger.add(messages.append, format="{message}")
            try:
                LOG("after the run", level=2)
            finally:
                logger.remove(handler_id)

            assert _program_state.get() is caller_state
            assert messages == []
        finally:
            state_disconnectFromLogger(token)
