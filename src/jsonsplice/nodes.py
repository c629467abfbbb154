"""Located JSON syntax tree.

All nodes are frozen dataclasses with slots. Each node keeps the span it
occupies in the text it was parsed from, which is what lets an edit
replace one value while leaving every other byte alone.

Node Hierarchy:
JsonNode (base)
├── ScalarNode   string, number, true, false, null
├── ObjectNode   { properties }
├── ArrayNode    [ items ]
└── Property     "key": value (member of an ObjectNode)

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

from jsonsplice.location import SourceLocation


@dataclass(frozen=True, slots=True)
class JsonNode:
    """Base class for all located nodes."""

    location: SourceLocation


@dataclass(frozen=True, slots=True)
class ScalarNode(JsonNode):
    """A string, number, boolean or null.

    ``raw`` is the exact source text; ``value`` the decoded Python value.

    """

    value: Any
    raw: str


@dataclass(frozen=True, slots=True)
class Property(JsonNode):
    """One ``"key": value`` member of an object.

    ``location`` spans from the opening quote of the key to the end of
    the value.

    """

    key: str
    key_location: SourceLocation
    value: ValueNode


@dataclass(frozen=True, slots=True)
class ObjectNode(JsonNode):
    """A JSON object; ``location`` spans the braces."""

    properties: tuple[Property, ...]

    def get(self, key: str) -> Property | None:
        """Return the member for ``key``; the last one wins on duplicates."""
        for prop in reversed(self.properties):
            if prop.key == key:
                return prop
        return None


@dataclass(frozen=True, slots=True)
class ArrayNode(JsonNode):
    """A JSON array; ``location`` spans the brackets."""

    items: tuple[ValueNode, ...]


ValueNode: TypeAlias = ScalarNode | ObjectNode | ArrayNode
