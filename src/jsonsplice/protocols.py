"""Protocols for jsonsplice collaborators.

Defines the contracts for the document holder, the graph view and the
selected-node provider. The patch engine never calls these; the edit
session does, once per successful save.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from jsonsplice.path import Segment
from jsonsplice.rows import NodeRow


@runtime_checkable
class DocumentHolder(Protocol):
    """Owner of the editor-visible document text.

    The text is only ever replaced wholesale.

    """

    def get_text(self) -> str:
        """Return the current text."""
        ...

    def set_text(self, text: str, clean: bool) -> None:
        """Replace the text; ``clean`` clears the unsaved-changes flag."""
        ...


@runtime_checkable
class GraphHolder(Protocol):
    """Visual graph kept in sync with the document."""

    def set_from_text(self, text: str) -> None:
        """Rebuild the graph from document text."""
        ...

    def clear(self) -> None:
        """Drop the graph."""
        ...


@runtime_checkable
class SelectedNodeProvider(Protocol):
    """The node currently selected in the graph (read-only)."""

    @property
    def rows(self) -> Sequence[NodeRow]:
        ...

    @property
    def path(self) -> Sequence[Segment] | None:
        ...
