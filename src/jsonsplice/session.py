"""Edit session for one selected node.

Drives the full round trip: rows are normalized into editable text, the
user edits it, and ``save`` patches the document and commits the result
through the ``EditorContext``. Selecting another node resets the session.

Example:
    >>> from jsonsplice.session import EditSession
    >>> from jsonsplice.store import EditorContext, JsonGraph, TextDocument
    >>> ctx = EditorContext(TextDocument(), JsonGraph())
    >>> ctx.load('{"user": {"name": "a", "tags": []}}')
    >>> session = EditSession(ctx, ctx.graph.node_at(("user",)))
    >>> session.display_path
    '$["user"]'
    >>> session.start_editing()
    >>> session.update('{"name": "b"}')
    >>> session.save().value
    {'name': 'b', 'tags': []}

"""

from __future__ import annotations

from jsonsplice.engine import PatchResult, apply_patch
from jsonsplice.errors import InvalidInputError
from jsonsplice.path import format_path
from jsonsplice.protocols import SelectedNodeProvider
from jsonsplice.rows import normalize_rows
from jsonsplice.store import EditorContext
from jsonsplice.utils.logger import get_logger

logger = get_logger(__name__)


class EditSession:
    """Edit state for the node currently shown in the editor dialog.

    Attributes:
        context: The editor context to read from and commit to
        node: The selected node, or None
        editing: True between ``start_editing`` and save/cancel
        edited_text: Text being edited
        error: Message of the last failed save, or None

    """

    __slots__ = ("context", "node", "editing", "edited_text", "error")

    def __init__(self, context: EditorContext, node: SelectedNodeProvider | None = None) -> None:
        self.context = context
        self.node: SelectedNodeProvider | None = None
        self.editing = False
        self.edited_text = "{}"
        self.error: str | None = None
        self.select(node)

    @property
    def display_text(self) -> str:
        """Normalized text of the selected node's rows."""
        rows = self.node.rows if self.node is not None else ()
        return normalize_rows(rows, config=self.context.config)

    @property
    def display_path(self) -> str:
        return format_path(self.node.path if self.node is not None else None)

    def select(self, node: SelectedNodeProvider | None) -> None:
        """Switch to ``node`` and drop any edit in progress."""
        self.node = node
        self._reset()

    def start_editing(self) -> None:
        self.editing = True

    def update(self, text: str) -> None:
        self.edited_text = text

    def cancel(self) -> None:
        self._reset()

    def save(self) -> PatchResult | None:
        """Patch the document with the edited text.

        Returns:
            The PatchResult, or None when no node is selected or the
            edited text was rejected (``error`` then holds the message).

        """
        self.error = None
        if self.node is None:
            return None

        document_text = self.context.json_text
        original_text = self.context.document.get_text() or document_text

        try:
            result = apply_patch(
                original_text,
                document_text,
                self.node.path,
                self.edited_text,
                config=self.context.config,
            )
        except InvalidInputError as exc:
            logger.debug("save rejected: %s", exc)
            self.error = str(exc) or "Invalid JSON"
            return None

        self.context.commit(result.text)
        self.editing = False
        return result

    def _reset(self) -> None:
        self.edited_text = self.display_text
        self.editing = False
        self.error = None
