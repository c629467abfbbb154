"""Minimal textual edits against formatted JSON text.

Given the original text, a structural path and a value, compute the one
edit that puts the value at the path while leaving every byte outside
the edited span untouched (comments, blank lines, odd spacing).

The outcome is a result type rather than an exception:

- ``EditApplied``: the new text and the edits that produced it.
- ``RebuildRequired``: the edit could not be computed; the caller
  should rebuild the document from its parsed tree instead.

Formatting:
    Values are serialized with the configured indent unit. Continuation
    lines are indented to match the line the value starts on. Members
    added to a multi-line container go on their own line at the
    indentation of their siblings; members added to a single-line
    container stay on that line in compact form. Empty containers are
    opened onto new lines.

Thread Safety:
    All functions are pure. Safe to call from any thread.

"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from jsonsplice.config import PatchConfig, resolve_config
from jsonsplice.errors import EditComputationError
from jsonsplice.nodes import ArrayNode, JsonNode, ObjectNode, ValueNode
from jsonsplice.parser import parse_tree, to_value
from jsonsplice.path import Segment, get_value_at_path, is_index, normalize_path
from jsonsplice.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``length`` characters at ``offset`` with ``content``."""

    offset: int
    length: int
    content: str

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True, slots=True)
class EditApplied:
    """Minimal edit succeeded."""

    text: str
    edits: tuple[TextEdit, ...]


@dataclass(frozen=True, slots=True)
class RebuildRequired:
    """Minimal edit was not possible; ``reason`` says why."""

    reason: str


EditResult: TypeAlias = EditApplied | RebuildRequired


def apply_edits(text: str, edits: Iterable[TextEdit]) -> str:
    """Apply non-overlapping edits to ``text``.

    Edits are applied from the end of the text backwards so that earlier
    offsets stay valid.

    Raises:
        EditComputationError: If two edits overlap or one falls outside
            the text.

    """
    result = text
    last_offset = len(text)
    for edit in sorted(edits, key=lambda e: e.offset, reverse=True):
        if edit.offset < 0 or edit.end > last_offset:
            raise EditComputationError("overlapping or out-of-range edit", edit.offset)
        result = result[: edit.offset] + edit.content + result[edit.end :]
        last_offset = edit.offset
    return result


def compute_edits(
    text: str,
    path: Sequence[Segment] | None,
    value: Any,
    *,
    config: PatchConfig | None = None,
) -> list[TextEdit]:
    """Compute the edits that set ``value`` at ``path`` inside ``text``.

    Missing trailing segments are folded into the written value: a
    missing key wraps it as ``{key: value}`` and a missing index as
    ``[value]``; the result is added to the deepest container that exists.

    Raises:
        EditComputationError: If ``text`` does not parse, or the deepest
            existing node on the path cannot hold the next segment.

    """
    config = resolve_config(config)
    root = parse_tree(text, config=config)
    segments = list(normalize_path(path))

    if not segments:
        return [_replace(text, root, value, None, config)]

    parent: ValueNode | None = None
    last: Segment | None = None
    while segments:
        last = segments.pop()
        parent = find_node(root, segments)
        if parent is not None:
            break
        value = [value] if is_index(last) else {str(last): value}

    match parent:
        case ObjectNode():
            key = str(last)
            existing = parent.get(key)
            if existing is not None:
                return [_replace(text, existing.value, value, parent, config)]
            member = f"{_dump_key(key, config)}: "
            return [_insert(text, parent, parent.properties, member, value, config)]
        case ArrayNode() if is_index(last) and last >= 0:
            if last < len(parent.items):
                return [_replace(text, parent.items[last], value, parent, config)]
            return [_insert(text, parent, parent.items, "", value, config)]
        case ArrayNode():
            raise EditComputationError(f"segment {last!r} cannot address an array", parent.location.offset)
        case _:
            raise EditComputationError(f"cannot set {last!r} inside a scalar", parent.location.offset)


def compute_minimal_edit(
    text: str,
    path: Sequence[Segment] | None,
    value: Any,
    *,
    config: PatchConfig | None = None,
) -> EditResult:
    """Compute and apply the minimal edit, or say why a rebuild is needed.

    With ``verify_edits`` on, the new text is parsed again and the value
    at ``path`` compared with ``value``.

    """
    config = resolve_config(config)
    try:
        edits = compute_edits(text, path, value, config=config)
        new_text = apply_edits(text, edits)
        if config.verify_edits:
            written = get_value_at_path(to_value(parse_tree(new_text, config=config)), path)
            if written != value:
                return RebuildRequired("edited text does not round-trip to the written value")
    except EditComputationError as exc:
        logger.debug("minimal edit failed: %s", exc)
        return RebuildRequired(str(exc))
    return EditApplied(text=new_text, edits=tuple(edits))


def find_node(root: ValueNode, path: Sequence[Segment]) -> ValueNode | None:
    """Return the located node at ``path``, or None if any step is missing.

    An index segment on an object looks up its decimal string key.

    """
    node: ValueNode = root
    for segment in path:
        match node:
            case ObjectNode():
                prop = node.get(str(segment))
                if prop is None:
                    return None
                node = prop.value
            case ArrayNode() if is_index(segment) and 0 <= segment < len(node.items):
                node = node.items[segment]
            case _:
                return None
    return node


# =============================================================================
# Edit builders
# =============================================================================


def _replace(
    text: str,
    node: JsonNode,
    value: Any,
    parent: ObjectNode | ArrayNode | None,
    config: PatchConfig,
) -> TextEdit:
    loc = node.location
    if parent is not None and _is_single_line(parent):
        content = _dump_compact(value, config)
    else:
        content = _dump(value, line_indent(text, loc.offset), config)
    return TextEdit(offset=loc.offset, length=loc.length, content=content)


def _insert(
    text: str,
    parent: ObjectNode | ArrayNode,
    members: Sequence[JsonNode],
    prefix: str,
    value: Any,
    config: PatchConfig,
) -> TextEdit:
    """Add a member after the last one (or into an empty container)."""
    loc = parent.location
    eol = config.eol

    if not members:
        parent_indent = line_indent(text, loc.offset)
        child_indent = parent_indent + config.indent_unit
        content = f"{eol}{child_indent}{prefix}{_dump(value, child_indent, config)}{eol}{parent_indent}"
        interior = text[loc.offset + 1 : loc.end_offset - 1]
        # Whitespace-only interiors are replaced; anything else (comments) is kept
        length = len(interior) if not interior.strip() else 0
        return TextEdit(offset=loc.offset + 1, length=length, content=content)

    previous = members[-1].location
    if _is_single_line(parent):
        content = f", {prefix}{_dump_compact(value, config)}"
    else:
        if previous.lineno == loc.lineno:
            indent = line_indent(text, loc.offset) + config.indent_unit
        else:
            indent = line_indent(text, previous.offset)
        content = f",{eol}{indent}{prefix}{_dump(value, indent, config)}"
    return TextEdit(offset=previous.end_offset, length=0, content=content)


# =============================================================================
# Formatting helpers
# =============================================================================


def line_indent(text: str, offset: int) -> str:
    """Leading whitespace of the line that contains ``offset``."""
    start = max(text.rfind("\n", 0, offset), text.rfind("\r", 0, offset)) + 1
    end = start
    while end < offset and text[end] in " \t":
        end += 1
    return text[start:end]


def _is_single_line(node: ObjectNode | ArrayNode) -> bool:
    loc = node.location
    return loc.end_lineno is None or loc.end_lineno == loc.lineno


def _dump(value: Any, base_indent: str, config: PatchConfig) -> str:
    rendered = _serialize(value, indent=config.dumps_indent, ensure_ascii=config.ensure_ascii)
    return rendered.replace("\n", config.eol + base_indent)


def _dump_compact(value: Any, config: PatchConfig) -> str:
    return _serialize(value, separators=(", ", ": "), ensure_ascii=config.ensure_ascii)


def _dump_key(key: str, config: PatchConfig) -> str:
    return json.dumps(key, ensure_ascii=config.ensure_ascii)


def _serialize(value: Any, **options: Any) -> str:
    """Strict JSON text for ``value``; NaN and infinities are refused."""
    try:
        return json.dumps(value, allow_nan=False, **options)
    except ValueError as exc:
        raise EditComputationError(str(exc)) from exc
