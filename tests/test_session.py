"""Tests for jsonsplice.session and jsonsplice.store: the editing round trip."""

import json

import pytest

from jsonsplice.config import PatchConfig
from jsonsplice.path import MISSING
from jsonsplice.protocols import DocumentHolder, GraphHolder, SelectedNodeProvider
from jsonsplice.rows import NodeRow
from jsonsplice.session import EditSession
from jsonsplice.store import EditorContext, JsonGraph, SelectedNode, TextDocument

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class RecordingDocument:
    """DocumentHolder that records every write."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.writes: list[tuple[str, bool]] = []

    def get_text(self) -> str:
        return self.text

    def set_text(self, text: str, clean: bool) -> None:
        self.writes.append((text, clean))
        self.text = text


class RecordingGraph:
    """GraphHolder that records refreshes and clears."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None]] = []

    def set_from_text(self, text: str) -> None:
        self.calls.append(("set", text))

    def clear(self) -> None:
        self.calls.append(("clear", None))


SOURCE = '{"user": {"name": "ada", "age": 36, "langs": ["en"]}, "count": 2}'


@pytest.fixture
def context() -> EditorContext:
    ctx = EditorContext(TextDocument(), JsonGraph())
    ctx.load(SOURCE)
    return ctx


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class TestTextDocument:
    def test_clean_write(self) -> None:
        doc = TextDocument()
        doc.set_text("{}", clean=True)
        assert doc.get_text() == "{}"
        assert doc.has_changes is False

    def test_dirty_write(self) -> None:
        doc = TextDocument()
        doc.set_text("{}", clean=False)
        assert doc.has_changes is True


class TestJsonGraph:
    def test_parses_text(self) -> None:
        graph = JsonGraph()
        graph.set_from_text('{"a": 1}')
        assert graph.value == {"a": 1}
        assert graph.refreshes == 1
        assert not graph.is_empty

    def test_invalid_text_empties_graph(self) -> None:
        graph = JsonGraph()
        graph.set_from_text('{"a": 1}')
        graph.set_from_text("{oops")
        assert graph.is_empty
        assert graph.refreshes == 2

    def test_non_finite_text_empties_graph(self) -> None:
        graph = JsonGraph()
        graph.set_from_text("[NaN, 1e400]")
        assert graph.is_empty

    def test_clear(self) -> None:
        graph = JsonGraph()
        graph.set_from_text("[]")
        graph.clear()
        assert graph.value is MISSING

    def test_node_at(self) -> None:
        graph = JsonGraph()
        graph.set_from_text('{"a": {"b": 1, "c": []}}')
        node = graph.node_at(["a"])
        assert node == SelectedNode(
            rows=(NodeRow("b", 1, "number"), NodeRow("c", [], "array")),
            path=("a",),
        )
        assert graph.node_at(("missing",)) is None


class TestEditorContext:
    def test_load_pretty_prints_editor_text(self, context: EditorContext) -> None:
        assert context.json_text == SOURCE
        assert context.document.get_text() == json.dumps(json.loads(SOURCE), indent=2)

    def test_load_invalid_keeps_raw_text(self) -> None:
        ctx = EditorContext(TextDocument(), JsonGraph())
        ctx.load("{bad")
        assert ctx.document.get_text() == "{bad"

    def test_load_overflowing_number_keeps_raw_text(self) -> None:
        ctx = EditorContext(TextDocument(), JsonGraph())
        ctx.load('{"a": 1e400}')
        assert ctx.document.get_text() == '{"a": 1e400}'
        assert ctx.graph.is_empty

    def test_load_honours_config(self) -> None:
        ctx = EditorContext(TextDocument(), JsonGraph(), config=PatchConfig(indent=4))
        ctx.load('{"a": 1}')
        assert ctx.document.get_text() == '{\n    "a": 1\n}'

    def test_clear(self) -> None:
        graph = RecordingGraph()
        ctx = EditorContext(RecordingDocument(), graph)
        ctx.clear()
        assert ctx.json_text == ""
        assert graph.calls == [("clear", None)]

    def test_commit_writes_once(self) -> None:
        document = RecordingDocument()
        graph = RecordingGraph()
        ctx = EditorContext(document, graph)
        ctx.commit('{"a": 1}')
        assert document.writes == [('{"a": 1}', True)]
        assert graph.calls == [("set", '{"a": 1}')]
        assert ctx.json_text == '{"a": 1}'


class TestProtocols:
    def test_in_memory_holders_satisfy_protocols(self) -> None:
        assert isinstance(TextDocument(), DocumentHolder)
        assert isinstance(JsonGraph(), GraphHolder)
        assert isinstance(SelectedNode(), SelectedNodeProvider)

    def test_recording_holders_satisfy_protocols(self) -> None:
        assert isinstance(RecordingDocument(), DocumentHolder)
        assert isinstance(RecordingGraph(), GraphHolder)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class TestSessionDisplay:
    def test_display_text_drops_containers(self, context: EditorContext) -> None:
        session = EditSession(context, context.graph.node_at(("user",)))
        assert json.loads(session.display_text) == {"name": "ada", "age": 36}

    def test_display_path(self, context: EditorContext) -> None:
        session = EditSession(context, context.graph.node_at(("user", "langs")))
        assert session.display_path == '$["user"]["langs"]'

    def test_leaf_node(self, context: EditorContext) -> None:
        session = EditSession(context, context.graph.node_at(("user", "name")))
        assert session.display_text == "ada"
        assert session.edited_text == "ada"

    def test_no_node(self, context: EditorContext) -> None:
        session = EditSession(context)
        assert session.display_text == "{}"
        assert session.display_path == "$"
        assert session.save() is None


class TestSessionState:
    def test_select_resets(self, context: EditorContext) -> None:
        session = EditSession(context, context.graph.node_at(("user",)))
        session.start_editing()
        session.update("[1]")
        session.select(context.graph.node_at(("count",)))
        assert session.editing is False
        assert session.edited_text == "2"
        assert session.error is None

    def test_cancel_restores_text(self, context: EditorContext) -> None:
        session = EditSession(context, context.graph.node_at(("user",)))
        session.start_editing()
        session.update("{broken")
        assert session.save() is None
        assert session.error is not None
        session.cancel()
        assert session.error is None
        assert session.editing is False
        assert session.edited_text == session.display_text


class TestSessionSave:
    def test_merges_and_commits(self, context: EditorContext) -> None:
        session = EditSession(context, context.graph.node_at(("user",)))
        session.start_editing()
        session.update('{"name": "grace", "age": 36}')
        result = session.save()

        assert result is not None
        assert result.strategy == "minimal"
        expected = {"name": "grace", "age": 36, "langs": ["en"]}
        assert json.loads(context.json_text)["user"] == expected
        assert context.document.get_text() == context.json_text
        assert context.graph.value["user"] == expected
        assert session.editing is False

    def test_minimal_edit_targets_editor_text(self, context: EditorContext) -> None:
        before = context.document.get_text()
        session = EditSession(context, context.graph.node_at(("count",)))
        session.update("3")
        session.save()
        assert context.document.get_text() == before.replace('"count": 2', '"count": 3')

    def test_empty_editor_text_uses_authoritative_text(self) -> None:
        document = RecordingDocument("")
        ctx = EditorContext(document, JsonGraph(), json_text='{"a": 1, "b": 2}')
        session = EditSession(ctx, SelectedNode(rows=(NodeRow(None, 1, "number"),), path=("a",)))
        session.update("5")
        result = session.save()
        assert result is not None
        assert result.strategy == "minimal"
        assert result.text == '{"a": 5, "b": 2}'

    def test_invalid_edit_never_writes(self) -> None:
        document = RecordingDocument(SOURCE)
        graph = RecordingGraph()
        ctx = EditorContext(document, graph, json_text=SOURCE)
        session = EditSession(ctx, SelectedNode(path=("user",)))
        session.update("{not json")

        assert session.save() is None
        assert session.error is not None
        assert "edited" in session.error
        assert document.writes == []
        assert graph.calls == []
        assert ctx.json_text == SOURCE

    def test_successful_save_writes_once_and_clean(self) -> None:
        document = RecordingDocument("garbage")
        graph = RecordingGraph()
        ctx = EditorContext(document, graph, json_text=SOURCE)
        session = EditSession(ctx, SelectedNode(path=("count",)))
        session.update("7")

        result = session.save()

        assert result is not None
        assert result.strategy == "rebuild"
        assert document.writes == [(result.text, True)]
        assert graph.calls == [("set", result.text)]
        assert json.loads(result.text)["count"] == 7

    def test_second_save_clears_previous_error(self, context: EditorContext) -> None:
        session = EditSession(context, context.graph.node_at(("count",)))
        session.update("nope")
        session.save()
        assert session.error
        session.update("4")
        assert session.save() is not None
        assert session.error is None

    def test_broken_authoritative_text_never_writes(self) -> None:
        document = RecordingDocument('{"a": 1}')
        graph = RecordingGraph()
        ctx = EditorContext(document, graph, json_text="{broken")
        session = EditSession(ctx, SelectedNode(rows=(NodeRow(None, 1, "number"),), path=("a",)))
        session.update("2")

        assert session.save() is None
        assert session.error is not None
        assert session.error.startswith("document:")
        assert document.writes == []
        assert graph.calls == []
        assert ctx.json_text == "{broken"
