"""
Directive registry tests

Tests whole-line classification of every directive kind.
"""

import pytest

from staplegun.lib.directives import DirectiveRegistry
from staplegun.models.directives import DirectiveKind


@pytest.fixture
def registry():
    return DirectiveRegistry()


class TestLineClassify:
    """Each directive is recognised only when alone on its line"""

    @pytest.mark.parametrize(
        "line, kind, argument",
        [
            ("{{ staplegun parent }}", DirectiveKind.PARENT, None),
            ("{{ staplegun child }}", DirectiveKind.CHILD, None),
            ("{{ staplegun define_block head_1 }}", DirectiveKind.DEFINE_BLOCK, "head_1"),
            ("{{ staplegun end }}", DirectiveKind.END, None),
            ("{{ staplegun insert_block head_1 }}", DirectiveKind.INSERT_BLOCK, "head_1"),
            ("{{ staplegun import_file dir/file-1.html }}", DirectiveKind.IMPORT_FILE, "dir/file-1.html"),
        ],
    )
    def test_kinds(self, registry, line, kind, argument):
        found = registry.line_classify(line)
        assert found is not None
        assert found.kind == kind
        assert found.argument == argument

    def test_indent_captured(self, registry):
        found = registry.line_classify(" \t {{ staplegun insert_block nav }}")
        assert found.indent == " \t "

    def test_compact_spacing(self, registry):
        found = registry.line_classify("{{staplegun import_file a.html}}")
        assert found.kind == DirectiveKind.IMPORT_FILE
        assert found.argument == "a.html"

    def test_trailing_whitespace(self, registry):
        assert registry.line_classify("{{ staplegun end }}   \r") is not None

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "plain text",
            "x {{ staplegun end }}",
            "{{ staplegun end }} x",
            "{{ staplegun insert_block two words }}",
            "{{ staplegun define_block bad-name }}",
            "{{ staplegun insert_block }}",
            "{{ staplegun unknown }}",
            "{ staplegun end }",
        ],
    )
    def test_not_directives(self, registry, line):
        assert registry.line_classify(line) is None

    @pytest.mark.parametrize(
        "line",
        [
            "{{ staplegun define_block caf\u00e9 }}",
            "{{ staplegun insert_block na\u00efve }}",
            "\u00a0{{ staplegun end }}",
            "{{\u00a0staplegun end }}",
            "{{ staplegun end }}\u3000",
        ],
    )
    def test_non_ascii_is_content(self, registry, line):
        """Word and whitespace classes are ASCII only"""
        assert registry.line_classify(line) is None

    def test_line_match_other_kind(self, registry):
        assert registry.line_match("{{ staplegun end }}", DirectiveKind.PARENT) is None


class TestDocumentClassify:
    def test_parent(self, registry):
        assert registry.document_classify("{{ staplegun parent }}") == DirectiveKind.PARENT

    def test_child(self, registry):
        assert registry.document_classify("  {{ staplegun child }} ") == DirectiveKind.CHILD

    def test_other_directive_is_not_a_marker(self, registry):
        assert registry.document_classify("{{ staplegun end }}") is None
