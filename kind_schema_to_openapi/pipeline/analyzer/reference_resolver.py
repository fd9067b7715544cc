"""
Reference resolver for $ref resolution.

Checks that every $ref in a synthesized document points at something inside
that document. Resolution itself is delegated to ``referencing``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from referencing import Registry, Resource
from referencing.exceptions import Unresolvable

from ..errors import SchemaParseError

# URI the synthesized document is registered under
DOCUMENT_URI = ""

# Keywords holding a list of schemas
COMPOSITE_KEYWORDS = ("allOf", "anyOf", "oneOf")


class ReferenceResolver:
    """Resolves $ref pointers against a single in-memory document."""

    def __init__(self, document: Mapping[str, Any]):
        """
        Initialize the resolver.

        Args:
            document: The synthesized OpenAPI document
        """
        self.document = document
        registry = Registry().with_resource(DOCUMENT_URI, Resource.opaque(document))
        self._resolver = registry.resolver(base_uri=DOCUMENT_URI)

    def resolve(self, ref_path: str) -> Any:
        """
        Resolve a $ref to the schema it points at.

        Raises:
            SchemaParseError: If the reference cannot be resolved within the document
        """
        try:
            return self._resolver.lookup(ref_path).contents
        except Unresolvable as e:
            raise SchemaParseError(str(e)) from e

    def resolve_all(self) -> list[str]:
        """
        Resolve every $ref in the document.

        Returns:
            The distinct reference paths found, in document order
        """
        seen: list[str] = []
        for ref_path in self._iter_document_refs():
            if ref_path in seen:
                continue
            self.resolve(ref_path)
            seen.append(ref_path)
        return seen

    def _iter_document_refs(self) -> Iterator[str]:
        schemas = self.document.get("components", {}).get("schemas", {})
        for schema in schemas.values():
            yield from iter_refs(schema)


def iter_refs(schema: Any) -> Iterator[str]:
    """
    Yield every string-valued $ref reachable through schema positions.

    Only keywords holding schemas are walked, so literal values under
    default, enum, example or x-* extensions are never taken for references.
    A schema with a $ref only has its composition keywords walked.
    """
    if not isinstance(schema, Mapping):
        return

    ref = schema.get("$ref")
    if isinstance(ref, str):
        yield ref
    else:
        properties = schema.get("properties")
        if isinstance(properties, Mapping):
            for child in properties.values():
                yield from iter_refs(child)
        yield from iter_refs(schema.get("additionalProperties"))
        items = schema.get("items")
        for child in items if isinstance(items, list) else [items]:
            yield from iter_refs(child)

    for keyword in COMPOSITE_KEYWORDS:
        members = schema.get(keyword)
        if isinstance(members, list):
            for member in members:
                yield from iter_refs(member)
    yield from iter_refs(schema.get("not"))
