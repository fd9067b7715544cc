"""
Schema parser that builds an AST.

Turns the validated components.schemas of a synthesized document into
SchemaNode trees, without resolving or rewriting references.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ...utils import COMPONENTS_SCHEMAS_PREFIX, is_private
from ..config import PRESERVE_UNKNOWN_FIELDS_EXTENSION
from ..errors import SchemaParseError
from .nodes import (
    AdditionalPropertiesAllowed,
    AdditionalPropertiesTyped,
    ArrayNode,
    CompositeNode,
    CompositeOp,
    ObjectNode,
    ParsedComponents,
    PrimitiveNode,
    RefNode,
    SchemaNode,
    TopLevelDefinition,
)

# Keywords that make an untyped schema an object
OBJECT_KEYWORDS = ("properties", "additionalProperties", "required", "minProperties", "maxProperties")

# Keywords that make an untyped schema an array
ARRAY_KEYWORDS = ("items", "minItems", "maxItems", "uniqueItems")

# Composition keywords, in the order they are applied
COMPOSITE_KEYWORDS = (CompositeOp.ALL_OF, CompositeOp.ANY_OF, CompositeOp.ONE_OF, CompositeOp.NOT)


class SchemaParser:
    """Parses named OpenAPI schemas into an AST."""

    def __init__(self, preserve_unknown_fields_extension: str = PRESERVE_UNKNOWN_FIELDS_EXTENSION):
        self.preserve_unknown_fields_extension = preserve_unknown_fields_extension

    def parse(self, schemas: Mapping[str, Any], document: dict[str, Any] | None = None) -> ParsedComponents:
        """
        Parse a map of named schemas into an AST.

        Args:
            schemas: The components.schemas map
            document: The synthesized document the schemas come from

        Returns:
            ParsedComponents with one definition per name, in map order
        """
        parsed = ParsedComponents(document=document or {})
        for name, schema in schemas.items():
            path = f"{COMPONENTS_SCHEMAS_PREFIX}{name}"
            parsed.definitions.append(
                TopLevelDefinition(
                    name=name,
                    node=self.parse_node(schema, path),
                    private=is_private(name),
                )
            )
        return parsed

    def parse_node(self, schema: Any, path: str = "#") -> SchemaNode:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary
            path: Current path in the document (for error messages)

        Returns:
            Appropriate SchemaNode subclass
        """
        if not isinstance(schema, Mapping):
            raise SchemaParseError(f"schema at {path} must be an object, got {type(schema).__name__}")

        if "$ref" in schema:
            node: SchemaNode = RefNode(target=schema["$ref"])
        else:
            node = self._parse_body(schema, path)

        node.source_path = path
        self._parse_facets(node, schema)
        if not isinstance(node, CompositeNode):
            node.compositions = self._parse_compositions(schema, path)
        return node

    def _parse_body(self, schema: Mapping[str, Any], path: str) -> SchemaNode:
        type_name = schema.get("type")

        if type_name == "array" or (type_name is None and any(keyword in schema for keyword in ARRAY_KEYWORDS)):
            return self._parse_array_node(schema, path)

        if type_name == "object" or (type_name is None and self._looks_like_object(schema)):
            return self._parse_object_node(schema, path)

        if type_name is None:
            ops = [op for op in COMPOSITE_KEYWORDS if op.value in schema]
            if ops:
                node = self._parse_composite_node(schema, ops[0], path)
                node.compositions = [self._parse_composite_node(schema, op, path) for op in ops[1:]]
                return node

        return self._parse_primitive_node(schema)

    def _looks_like_object(self, schema: Mapping[str, Any]) -> bool:
        return any(keyword in schema for keyword in OBJECT_KEYWORDS) or self.preserve_unknown_fields_extension in schema

    def _parse_facets(self, node: SchemaNode, schema: Mapping[str, Any]) -> None:
        """Copy the facets shared by every node kind."""
        node.type_name = schema.get("type")
        node.format = schema.get("format")
        node.title = schema.get("title")
        node.description = schema.get("description")
        if "default" in schema:
            node.default = schema["default"]
            node.has_default = True
        node.nullable = bool(schema.get("nullable", False))
        if "enum" in schema:
            node.enum = list(schema["enum"])
        node.extensions = {key: value for key, value in schema.items() if key.startswith("x-")}

    def _parse_compositions(self, schema: Mapping[str, Any], path: str) -> list[CompositeNode]:
        return [self._parse_composite_node(schema, op, path) for op in COMPOSITE_KEYWORDS if op.value in schema]

    def _parse_composite_node(self, schema: Mapping[str, Any], op: CompositeOp, path: str) -> CompositeNode:
        """Parse one composition keyword into a CompositeNode."""
        if op is CompositeOp.NOT:
            members = [self.parse_node(schema["not"], f"{path}/not")]
        else:
            members_schema = schema[op.value]
            if not isinstance(members_schema, list):
                raise SchemaParseError(f"{op.value} at {path} must be an array")
            members = [self.parse_node(member, f"{path}/{op.value}/{i}") for i, member in enumerate(members_schema)]
        return CompositeNode(op=op, members=members, source_path=f"{path}/{op.value}")

    def _parse_array_node(self, schema: Mapping[str, Any], path: str) -> ArrayNode:
        """Parse an array node; only the single-schema form of items is supported."""
        items = None
        if "items" in schema:
            items = self.parse_node(schema["items"], f"{path}/items")

        return ArrayNode(
            items=items,
            min_items=schema.get("minItems"),
            max_items=schema.get("maxItems"),
            unique_items=bool(schema.get("uniqueItems", False)),
        )

    def _parse_object_node(self, schema: Mapping[str, Any], path: str) -> ObjectNode:
        """Parse an object node."""
        properties_schema = schema.get("properties", {})
        if not isinstance(properties_schema, Mapping):
            raise SchemaParseError(f"properties at {path} must be an object")
        required = schema.get("required", [])
        if not isinstance(required, list):
            raise SchemaParseError(f"required at {path} must be an array")

        properties = {}
        for prop_name, prop_schema in properties_schema.items():
            properties[prop_name] = self.parse_node(prop_schema, f"{path}/properties/{prop_name}")

        additional_properties = None
        if "additionalProperties" in schema:
            value = schema["additionalProperties"]
            if isinstance(value, bool):
                additional_properties = AdditionalPropertiesAllowed(allows=value)
            else:
                additional_properties = AdditionalPropertiesTyped(schema=self.parse_node(value, f"{path}/additionalProperties"))

        return ObjectNode(
            properties=properties,
            additional_properties=additional_properties,
            required=list(required),
            min_properties=schema.get("minProperties"),
            max_properties=schema.get("maxProperties"),
        )

    def _parse_primitive_node(self, schema: Mapping[str, Any]) -> PrimitiveNode:
        """Parse a scalar (or untyped) node."""
        return PrimitiveNode(
            pattern=schema.get("pattern"),
            multiple_of=schema.get("multipleOf"),
            minimum=schema.get("minimum"),
            maximum=schema.get("maximum"),
            exclusive_minimum=bool(schema.get("exclusiveMinimum", False)),
            exclusive_maximum=bool(schema.get("exclusiveMaximum", False)),
            min_length=schema.get("minLength"),
            max_length=schema.get("maxLength"),
        )
