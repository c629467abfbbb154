"""Patch engine: put an edited value at a path in a JSON document.

``apply_patch`` runs the whole pipeline:

1. Parse the edited text (failure raises ``InvalidInputError``).
2. Parse the authoritative document and look up the existing value at
   the path (failure raises ``InvalidInputError``).
3. Shallow-merge when both existing and edited values are objects.
4. Try a minimal textual edit against the original formatted text.
5. Otherwise rebuild the document from its parsed tree.

The original text is what the user sees in the editor and may be stale;
the document text is authoritative. Step 4 only ever touches the
original text and step 5 only the document text.

Example:
    >>> from jsonsplice import apply_patch
    >>> original = '{\\n  "user": {"name": "a", "age": 1}\\n}'
    >>> result = apply_patch(original, original, ("user",), '{"age": 2}')
    >>> result.strategy, result.value
    ('minimal', {'name': 'a', 'age': 2})

Thread Safety:
    ``apply_patch`` is a pure function. It returns new text and never
    touches document or graph holders; callers commit the result.

"""

from __future__ import annotations

import copy
import json
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from jsonsplice.config import PatchConfig, resolve_config
from jsonsplice.edits import EditApplied, TextEdit, compute_minimal_edit
from jsonsplice.errors import InvalidInputError
from jsonsplice.path import JsonPath, Segment, get_value_at_path, normalize_path, set_value_at_path
from jsonsplice.utils.logger import get_logger

logger = get_logger(__name__)

Strategy: TypeAlias = Literal["minimal", "rebuild"]


@dataclass(frozen=True, slots=True)
class PatchResult:
    """Outcome of a successful patch.

    Attributes:
        text: The new document text
        value: The value now stored at ``path``
        path: The structural path that was written
        strategy: "minimal" if the original text was edited in place,
            "rebuild" if the document was re-serialized
        edits: The text edits applied (empty for a rebuild)

    """

    text: str
    value: Any
    path: JsonPath
    strategy: Strategy
    edits: tuple[TextEdit, ...] = ()


def loads_strict(text: str, *, source: str) -> Any:
    """Parse JSON, rejecting NaN, Infinity and numbers that overflow a float.

    Raises:
        InvalidInputError: With line and column of the decode failure.

    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(exc.msg, lineno=exc.lineno, col_offset=exc.colno, source=source) from exc
    except ValueError as exc:
        raise InvalidInputError(str(exc), source=source) from exc


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(literal: str) -> float:
    number = float(literal)
    if not math.isfinite(number):
        raise ValueError(f"number {literal} is out of range")
    return number


def shallow_merge(existing: Any, edited: Any) -> Any:
    """Combine ``existing`` and ``edited`` one level deep.

    Only when both are objects: every field of ``existing`` is kept and
    every field of ``edited`` overlays it. Anything else returns
    ``edited`` unchanged.

    Example:
        >>> shallow_merge({"a": 1, "b": 2}, {"b": 3, "c": 4})
        {'a': 1, 'b': 3, 'c': 4}
        >>> shallow_merge([1, 2, 3], [9])
        [9]

    """
    if isinstance(existing, dict) and isinstance(edited, dict):
        return {**existing, **edited}
    return edited


def rebuild_document(
    document_text: str,
    path: Sequence[Segment] | None,
    value: Any,
    *,
    config: PatchConfig | None = None,
) -> str:
    """Re-serialize the document with ``value`` written at ``path``.

    Raises:
        InvalidInputError: If the document does not parse.
        PathError: If the path cannot be written into the document.
        ValueError: If ``value`` holds NaN or an infinity.

    """
    config = resolve_config(config)
    root = copy.deepcopy(loads_strict(document_text, source="document"))
    root = set_value_at_path(root, path, value)
    return json.dumps(root, indent=config.dumps_indent, ensure_ascii=config.ensure_ascii, allow_nan=False)


def apply_patch(
    original_text: str,
    document_text: str,
    path: Sequence[Segment] | None,
    edited_text: str,
    *,
    config: PatchConfig | None = None,
) -> PatchResult:
    """Write the edited value at ``path`` and return the new document.

    Args:
        original_text: Formatted text shown in the editor; the target of
            the minimal edit.
        document_text: Authoritative document text; source of the
            existing value and of the fallback rebuild.
        path: Structural path of the edited node.
        edited_text: JSON text authored by the user.
        config: Optional override of the context configuration.

    Returns:
        PatchResult with the new text and the strategy used.

    Raises:
        InvalidInputError: If ``edited_text`` or ``document_text`` is not
            JSON. Nothing is computed from a broken document.
        PathError: If the rebuild cannot write ``path``.

    """
    config = resolve_config(config)
    segments = normalize_path(path)
    edited = loads_strict(edited_text, source="edited")

    existing = get_value_at_path(loads_strict(document_text, source="document"), segments)
    value = shallow_merge(existing, edited)

    outcome = compute_minimal_edit(original_text, segments, value, config=config)
    if isinstance(outcome, EditApplied):
        logger.debug("patched %r with a minimal edit", segments)
        return PatchResult(
            text=outcome.text,
            value=value,
            path=segments,
            strategy="minimal",
            edits=outcome.edits,
        )

    logger.debug("rebuilding document for %r: %s", segments, outcome.reason)
    text = rebuild_document(document_text, segments, edited, config=config)
    return PatchResult(text=text, value=edited, path=segments, strategy="rebuild")
