"""Editor context and in-memory collaborators.

``EditorContext`` is owned by the application and passed explicitly to
whoever edits the document; there is no module-level "current document".
It pairs a document holder with a graph holder and keeps the
authoritative JSON text, which may differ from the editor-visible text
while the user is typing.

Example:
    >>> from jsonsplice.store import EditorContext, JsonGraph, TextDocument
    >>> ctx = EditorContext(TextDocument(), JsonGraph())
    >>> ctx.load('{"a":1}')
    >>> ctx.document.get_text()
    '{\\n  "a": 1\\n}'

Thread Safety:
    Not thread-safe. One context per editor; edits are serialized by the
    caller.

"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from jsonsplice.config import PatchConfig, resolve_config
from jsonsplice.engine import loads_strict
from jsonsplice.errors import InvalidInputError
from jsonsplice.path import MISSING, JsonPath, Segment, get_value_at_path, normalize_path
from jsonsplice.protocols import DocumentHolder, GraphHolder
from jsonsplice.rows import NodeRow, rows_from_value
from jsonsplice.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class TextDocument:
    """In-memory DocumentHolder with an unsaved-changes flag."""

    text: str = ""
    has_changes: bool = False

    def get_text(self) -> str:
        return self.text

    def set_text(self, text: str, clean: bool) -> None:
        self.text = text
        self.has_changes = not clean


@dataclass(frozen=True, slots=True)
class SelectedNode:
    """A selected graph node: its rows and its structural path."""

    rows: tuple[NodeRow, ...] = ()
    path: JsonPath = ()


@dataclass(slots=True)
class JsonGraph:
    """In-memory GraphHolder that keeps the parsed document.

    Text that does not parse leaves the graph empty, as a graph view
    shows nothing for invalid JSON.

    """

    value: Any = MISSING
    refreshes: int = 0

    def set_from_text(self, text: str) -> None:
        self.refreshes += 1
        try:
            self.value = loads_strict(text, source="document")
        except InvalidInputError:
            logger.debug("graph cleared: document text is not JSON")
            self.value = MISSING

    def clear(self) -> None:
        self.value = MISSING

    @property
    def is_empty(self) -> bool:
        return self.value is MISSING

    def node_at(self, path: Sequence[Segment] | None) -> SelectedNode | None:
        """Return the node at ``path`` with its rows, or None if absent."""
        value = get_value_at_path(self.value, path)
        if value is MISSING:
            return None
        return SelectedNode(rows=tuple(rows_from_value(value)), path=normalize_path(path))


@dataclass(slots=True)
class EditorContext:
    """Document holder, graph holder and the authoritative JSON text."""

    document: DocumentHolder
    graph: GraphHolder
    json_text: str = "{}"
    config: PatchConfig | None = None

    def load(self, text: str) -> None:
        """Replace the document with freshly loaded text.

        The editor receives the pretty-printed form when the text parses,
        the raw text otherwise.

        """
        config = resolve_config(self.config)
        self.json_text = text
        try:
            value = loads_strict(text, source="document")
        except InvalidInputError:
            pretty = text
        else:
            pretty = json.dumps(value, indent=config.dumps_indent, ensure_ascii=config.ensure_ascii)
        self.document.set_text(pretty, clean=True)
        self.graph.set_from_text(text)

    def commit(self, text: str) -> None:
        """Store the result of a patch: one document write, one graph refresh."""
        self.json_text = text
        self.document.set_text(text, clean=True)
        self.graph.set_from_text(text)

    def clear(self) -> None:
        self.json_text = ""
        self.graph.clear()
