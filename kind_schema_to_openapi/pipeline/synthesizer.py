"""
Document synthesis.

Wraps the canonical map of named schemas in a minimal OpenAPI 3.0 document
and hands it to mature tooling: ``referencing`` resolves every $ref and
``jsonschema`` checks the document against the OpenAPI 3.0 schema shipped
with ``openapi-spec-validator``. Only then is the document parsed into an AST.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from jsonschema.exceptions import best_match
from jsonschema.validators import validator_for
from openapi_spec_validator.schemas import schema_v30

from .analyzer.reference_resolver import ReferenceResolver
from .config import PRESERVE_UNKNOWN_FIELDS_EXTENSION
from .errors import SchemaParseError
from .schema_ast import ParsedComponents, SchemaParser

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"
DOCUMENT_INFO = {"title": "kind schema", "version": "0.0.0"}


def build_document(schemas: Mapping[str, Any]) -> dict[str, Any]:
    """Wrap named schemas in the smallest document an OpenAPI 3.0 validator accepts."""
    return {
        "openapi": OPENAPI_VERSION,
        "info": dict(DOCUMENT_INFO),
        "paths": {},
        "components": {"schemas": dict(schemas)},
    }


def _definition_schema(schema: Mapping[str, Any]) -> dict[str, Any]:
    """A schema accepting exactly the values allowed in components.schemas."""
    return {
        "definitions": schema["definitions"],
        "oneOf": [{"$ref": "#/definitions/Schema"}, {"$ref": "#/definitions/Reference"}],
    }


def validate_document(document: Mapping[str, Any]) -> None:
    """
    Validate a document against the OpenAPI 3.0 schema.

    The OpenAPI 3.0 schema only checks components.schemas entries whose name
    matches ``^[a-zA-Z0-9.\\-_]+$``, so every named schema is also checked on
    its own, whatever its name.

    Raises:
        SchemaParseError: With the message of the most relevant validation error
    """
    schema = dict(schema_v30)
    validator_cls = validator_for(schema)
    error = best_match(validator_cls(schema).iter_errors(document))
    if error is not None:
        raise SchemaParseError(error.message) from error

    definition_validator = validator_cls(_definition_schema(schema))
    for name, definition in document.get("components", {}).get("schemas", {}).items():
        error = best_match(definition_validator.iter_errors(definition))
        if error is not None:
            logger.debug("Definition %s is not a valid schema", name)
            raise SchemaParseError(error.message) from error


def synthesize(
    schemas: Mapping[str, Any],
    validate: bool = True,
    preserve_unknown_fields_extension: str = PRESERVE_UNKNOWN_FIELDS_EXTENSION,
) -> ParsedComponents:
    """
    Synthesize, check and parse the OpenAPI document for a canonical schema map.

    Args:
        schemas: The canonical map of named schemas
        validate: Whether to validate the document against the OpenAPI 3.0 schema
        preserve_unknown_fields_extension: Extension that marks untyped schemas as objects

    Returns:
        ParsedComponents with the parsed top-level definitions

    Raises:
        SchemaParseError: If a reference does not resolve or the document is invalid
    """
    document = build_document(schemas)
    refs = ReferenceResolver(document).resolve_all()
    logger.debug("Resolved %d distinct references", len(refs))

    if validate:
        validate_document(document)

    parser = SchemaParser(preserve_unknown_fields_extension)
    parsed = parser.parse(document["components"]["schemas"], document)
    logger.debug("Synthesized %d definitions", len(parsed.definitions))
    return parsed
