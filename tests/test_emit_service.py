"""Tests for DOT emission and rendering."""

from unittest.mock import patch

import pydot
import pytest

from depgraph.domain import DependencyGraph
from depgraph.exit_codes import PARTIAL_SUCCESS, RenderError
from depgraph.services import EmitResult, GraphEmitter, quote_identifier


@pytest.fixture
def graph():
    return DependencyGraph(
        root="dev-lang/python",
        nodes=["dev-lang/python", "sys-libs/zlib", "dev-libs/openssl"],
        edges=[("dev-lang/python", "sys-libs/zlib"), ("dev-lang/python", "dev-libs/openssl")],
        depth_max=3,
    )


def statement_lines(text):
    return [line.strip() for line in text.splitlines() if line.strip()]


class TestQuoteIdentifier:
    """Tests for quote_identifier."""

    def test_plain(self):
        assert quote_identifier("dev-lang/python") == '"dev-lang/python"'

    def test_escapes_quotes(self):
        assert quote_identifier('a"b') == '"a\\"b"'

    def test_escapes_backslash(self):
        assert quote_identifier('a\\b') == '"a\\\\b"'


class TestEmit:
    """Tests for GraphEmitter.emit and serialize."""

    def test_undirected_by_default(self, graph):
        emitter = GraphEmitter()
        dot = emitter.emit(graph.root, graph.nodes, graph.edges)
        assert dot.get_type() == 'graph'
        text = emitter.serialize(dot)
        assert text.lstrip().startswith('graph "dev-lang/python"')
        assert '"dev-lang/python" -- "sys-libs/zlib"' in text

    def test_directed(self, graph):
        emitter = GraphEmitter(directed=True)
        dot = emitter.emit(graph.root, graph.nodes, graph.edges)
        assert dot.get_type() == 'digraph'
        assert '"dev-lang/python" -> "sys-libs/zlib"' in emitter.serialize(dot)

    def test_nodes_before_edges_in_order(self, graph):
        emitter = GraphEmitter()
        lines = statement_lines(emitter.serialize(emitter.emit(graph.root, graph.nodes, graph.edges)))
        node_lines = [i for i, line in enumerate(lines) if line.startswith('"') and '--' not in line]
        edge_lines = [i for i, line in enumerate(lines) if '--' in line]
        assert len(node_lines) == 3
        assert len(edge_lines) == 2
        assert max(node_lines) < min(edge_lines)
        assert [lines[i] for i in node_lines] == ['"dev-lang/python";', '"sys-libs/zlib";', '"dev-libs/openssl";']

    def test_duplicate_edges_emitted(self):
        emitter = GraphEmitter()
        dot = emitter.emit("a/a", ["a/a", "b/b"], [("a/a", "b/b"), ("a/a", "b/b")])
        assert emitter.serialize(dot).count('"a/a" -- "b/b"') == 2

    def test_out_of_universe_edge_target(self):
        emitter = GraphEmitter()
        dot = emitter.emit("a/a", ["a/a"], [("a/a", "x/missing")])
        assert '"a/a" -- "x/missing"' in emitter.serialize(dot)


class TestRender:
    """Tests for GraphEmitter.render."""

    def test_unsupported_format(self, graph):
        emitter = GraphEmitter()
        with pytest.raises(RenderError):
            emitter.render(emitter.emit(graph.root, graph.nodes, graph.edges), "gif")

    def test_graphviz_missing(self, graph):
        emitter = GraphEmitter()
        dot = emitter.emit(graph.root, graph.nodes, graph.edges)
        with patch.object(pydot.Dot, 'create', side_effect=FileNotFoundError("dot")):
            with pytest.raises(RenderError) as exc_info:
                emitter.render(dot, "svg")
        assert exc_info.value.exit_code == PARTIAL_SUCCESS

    def test_render_calls_dot(self, graph):
        emitter = GraphEmitter()
        dot = emitter.emit(graph.root, graph.nodes, graph.edges)
        with patch.object(pydot.Dot, 'create', return_value=b"<svg/>") as create:
            assert emitter.render(dot, "png") == b"<svg/>"
        create.assert_called_once_with(prog='dot', format='png')


class TestWrite:
    """Tests for GraphEmitter.write."""

    def test_dot_only(self, graph, tmp_path):
        result = GraphEmitter().write(graph, tmp_path / "out", fmt=None)
        assert result.dot_path == tmp_path / "out" / "dev-lang-python.dot"
        assert result.image_path is None
        assert '"sys-libs/zlib"' in result.dot_path.read_text()

    def test_dot_and_image(self, graph, tmp_path):
        with patch.object(pydot.Dot, 'create', return_value=b"<svg/>"):
            result = GraphEmitter().write(graph, tmp_path)
        assert result.image_path == tmp_path / "dev-lang-python.svg"
        assert result.image_path.read_bytes() == b"<svg/>"
        assert result.dot_path.exists()

    def test_render_failure_keeps_dot(self, graph, tmp_path):
        with patch.object(pydot.Dot, 'create', side_effect=AssertionError("dot exited with 1")):
            with pytest.raises(RenderError) as exc_info:
                GraphEmitter().write(graph, tmp_path)
        dot_path = tmp_path / "dev-lang-python.dot"
        assert dot_path.exists()
        assert exc_info.value.dot_path == str(dot_path)
        assert not (tmp_path / "dev-lang-python.svg").exists()

    def test_result_to_dict(self, tmp_path):
        result = EmitResult(dot_path=tmp_path / "a.dot")
        assert result.to_dict() == {'dot': str(tmp_path / "a.dot"), 'image': None}
