"""
jsonsplice: path-addressed JSON patching that keeps your formatting

Puts a new value at a structural path inside a JSON document. The
edit touches only the text of the value being replaced, so comments,
spacing and key order elsewhere survive. Object values are merged one
level deep with what is already there. When the formatted text cannot
be edited in place, the document is rebuilt from its parsed tree.

Quick Start:
    >>> from jsonsplice import apply_patch, format_path
    >>> text = '{\\n  "name": "demo",  // project\\n  "version": 1\\n}'
    >>> result = apply_patch(text, '{"name": "demo", "version": 1}', ("version",), "2")
    >>> print(result.text)
    {
      "name": "demo",  // project
      "version": 2
    }
    >>> format_path(("items", 2, "name"))
    '$["items"][2]["name"]'

Editing a selected node:
    >>> from jsonsplice import EditorContext, EditSession, JsonGraph, TextDocument
    >>> ctx = EditorContext(TextDocument(), JsonGraph())
    >>> ctx.load('{"a": {"x": 1}}')
    >>> session = EditSession(ctx, ctx.graph.node_at(("a",)))
    >>> session.update('{"y": 2}')
    >>> session.save().value
    {'x': 1, 'y': 2}
"""

from jsonsplice.config import (
    PatchConfig,
    get_patch_config,
    patch_config_context,
    reset_patch_config,
    set_patch_config,
)
from jsonsplice.edits import (
    EditApplied,
    EditResult,
    RebuildRequired,
    TextEdit,
    apply_edits,
    compute_edits,
    compute_minimal_edit,
)
from jsonsplice.engine import PatchResult, apply_patch, rebuild_document, shallow_merge
from jsonsplice.errors import EditComputationError, InvalidInputError, JsonSpliceError, PathError
from jsonsplice.location import SourceLocation
from jsonsplice.nodes import ArrayNode, ObjectNode, Property, ScalarNode
from jsonsplice.parser import parse_tree, to_value
from jsonsplice.path import (
    MISSING,
    JsonPath,
    format_path,
    get_value_at_path,
    set_value_at_path,
)
from jsonsplice.protocols import DocumentHolder, GraphHolder, SelectedNodeProvider
from jsonsplice.rows import NodeRow, normalize_rows, rows_from_value
from jsonsplice.session import EditSession
from jsonsplice.store import EditorContext, JsonGraph, SelectedNode, TextDocument

__version__ = "0.1.0"

__all__ = [
    # Engine
    "apply_patch",
    "PatchResult",
    "rebuild_document",
    "shallow_merge",
    # Minimal edits
    "compute_edits",
    "compute_minimal_edit",
    "apply_edits",
    "TextEdit",
    "EditApplied",
    "RebuildRequired",
    "EditResult",
    # Paths
    "JsonPath",
    "MISSING",
    "format_path",
    "get_value_at_path",
    "set_value_at_path",
    # Rows
    "NodeRow",
    "normalize_rows",
    "rows_from_value",
    # Located tree
    "parse_tree",
    "to_value",
    "SourceLocation",
    "ObjectNode",
    "ArrayNode",
    "Property",
    "ScalarNode",
    # Collaborators
    "DocumentHolder",
    "GraphHolder",
    "SelectedNodeProvider",
    "EditorContext",
    "EditSession",
    "JsonGraph",
    "SelectedNode",
    "TextDocument",
    # Configuration
    "PatchConfig",
    "get_patch_config",
    "set_patch_config",
    "reset_patch_config",
    "patch_config_context",
    # Errors
    "JsonSpliceError",
    "InvalidInputError",
    "PathError",
    "EditComputationError",
]
