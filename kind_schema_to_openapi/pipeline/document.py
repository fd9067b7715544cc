"""
Dialect normalization and the schema document.

A kind version's schema may be supplied in three shapes:

1. CRD-embedded: {"openAPIV3Schema": {"properties": {<name>: <schema>, ...}}}
2. OpenAPI document: {"openapi": "3.0.0", "components": {"schemas": {<name>: <schema>}}}
3. Bare map: {<name>: <schema>, ...}

All three are reduced to the bare map of named schemas.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..utils import is_private
from .errors import MalformedDialectError, SchemaParseError
from .synthesizer import build_document

logger = logging.getLogger(__name__)

OPENAPI_KEY = "openapi"
CRD_SCHEMA_KEY = "openAPIV3Schema"


def normalize(raw: Mapping[str, Any]) -> dict[str, Any]:
    """
    Reduce a schema in any accepted dialect to the bare map of named schemas.

    Args:
        raw: Schema in CRD-embedded, OpenAPI document, or bare map form

    Returns:
        The canonical map of top-level schema names to schemas

    Raises:
        MalformedDialectError: If a dialect marker is present but its shape is wrong
    """
    if OPENAPI_KEY not in raw:
        if CRD_SCHEMA_KEY in raw:
            logger.debug("Normalizing CRD-embedded schema")
            return _normalize_crd(raw[CRD_SCHEMA_KEY])
        logger.debug("Schema is already a bare map of %d definitions", len(raw))
        return dict(raw)

    logger.debug("Normalizing OpenAPI document (openapi=%s)", raw[OPENAPI_KEY])
    if "components" not in raw:
        return {}
    components = raw["components"]
    if not isinstance(components, Mapping):
        raise MalformedDialectError("'components' in openapi document must be an object")
    if "schemas" not in components:
        return {}
    schemas = components["schemas"]
    if not isinstance(schemas, Mapping):
        raise MalformedDialectError("'components.schemas' in openapi document must be an object")
    # Everything outside components.schemas (info, paths, ...) is discarded
    return dict(schemas)


def _normalize_crd(crd_schema: Any) -> dict[str, Any]:
    if not isinstance(crd_schema, Mapping):
        raise MalformedDialectError(f"'{CRD_SCHEMA_KEY}' must be an object")
    if "properties" not in crd_schema:
        raise MalformedDialectError(f"'{CRD_SCHEMA_KEY}' must contain properties")
    properties = crd_schema["properties"]
    if not isinstance(properties, Mapping):
        raise MalformedDialectError(f"'{CRD_SCHEMA_KEY}' properties must be an object")
    return dict(properties)


class SchemaDocument:
    """The normalized schema of one kind version.

    Normalization happens once, in the constructor. The document is read-only
    afterward and safe to share between threads.
    """

    def __init__(self, raw: Mapping[str, Any]):
        """
        Initialize the document.

        Args:
            raw: Schema in any accepted dialect

        Raises:
            MalformedDialectError: If the dialect shape is violated
        """
        self._schemas: dict[str, Any] = copy.deepcopy(normalize(raw))

    @classmethod
    def from_map(cls, raw: Mapping[str, Any]) -> SchemaDocument:
        return cls(raw)

    @classmethod
    def from_bytes(cls, data: bytes | str) -> SchemaDocument:
        """
        Build a document from JSON-encoded bytes.

        Raises:
            SchemaParseError: If the data is not valid JSON
            MalformedDialectError: If the data is not a JSON object or its dialect shape is violated
        """
        try:
            raw = json.loads(data)
        except json.JSONDecodeError as e:
            raise SchemaParseError(str(e)) from e
        if not isinstance(raw, dict):
            raise MalformedDialectError("schema document must be a JSON object")
        return cls(raw)

    @property
    def raw(self) -> Mapping[str, Any]:
        """Read-only view of the canonical map."""
        return MappingProxyType(self._schemas)

    def names(self) -> list[str]:
        return list(self._schemas)

    def public_names(self) -> list[str]:
        return [name for name in self._schemas if not is_private(name)]

    def as_openapi3_schemas_map(self) -> dict[str, Any]:
        """Return a copy of the canonical map, suitable for components.schemas."""
        return copy.deepcopy(self._schemas)

    def as_openapi3_document(self) -> dict[str, Any]:
        """Return the canonical map wrapped in a minimal OpenAPI 3.0 document."""
        return build_document(self.as_openapi3_schemas_map())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaDocument):
            return NotImplemented
        return self._schemas == other._schemas

    def __repr__(self) -> str:
        return f"SchemaDocument(names={self.names()!r})"
