"""
AST (Abstract Syntax Tree) node definitions for kind schemas.

The same node types describe both the parsed input (references still point
at ``#/components/schemas/...``) and the compiled output (references point at
qualified definition names). ``to_dict`` renders a node in the JSON shape of
a kube-openapi schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CompositeOp(str, Enum):
    """Schema composition keywords."""

    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    NOT = "not"


@dataclass
class SchemaNode:
    """Base class for all AST nodes, holding the facets every schema may carry."""

    # Original location in the document (for error messages)
    source_path: str = field(default="", compare=False)

    type_name: str | None = None
    format: str | None = None
    title: str | None = None
    description: str | None = None
    default: Any = None
    has_default: bool = False
    nullable: bool = False
    enum: list[Any] | None = None

    # x-* vendor extensions
    extensions: dict[str, Any] = field(default_factory=dict)

    # Composition keywords found next to a typed body
    compositions: list[CompositeNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = self._facets_dict()
        out.update(self._body_dict())
        for composite in self.compositions:
            out.update(composite._body_dict())
        out.update(self.extensions)
        return out

    def _facets_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type_name is not None:
            out["type"] = self.type_name
        if self.format is not None:
            out["format"] = self.format
        if self.title is not None:
            out["title"] = self.title
        if self.description is not None:
            out["description"] = self.description
        if self.has_default:
            out["default"] = self.default
        if self.nullable:
            out["nullable"] = True
        if self.enum is not None:
            out["enum"] = list(self.enum)
        return out

    def _body_dict(self) -> dict[str, Any]:
        return {}


@dataclass
class RefNode(SchemaNode):
    """Represents a $ref."""

    target: str = ""  # "#/components/schemas/Foo" before compilation, "g/v1.Foo" after

    def _body_dict(self) -> dict[str, Any]:
        return {"$ref": self.target}


@dataclass
class PrimitiveNode(SchemaNode):
    """Represents a scalar schema (string, integer, number, boolean) or an untyped one."""

    pattern: str | None = None
    multiple_of: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    min_length: int | None = None
    max_length: int | None = None

    def _body_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.pattern is not None:
            out["pattern"] = self.pattern
        if self.multiple_of is not None:
            out["multipleOf"] = self.multiple_of
        if self.minimum is not None:
            out["minimum"] = self.minimum
        if self.exclusive_minimum:
            out["exclusiveMinimum"] = True
        if self.maximum is not None:
            out["maximum"] = self.maximum
        if self.exclusive_maximum:
            out["exclusiveMaximum"] = True
        if self.min_length is not None:
            out["minLength"] = self.min_length
        if self.max_length is not None:
            out["maxLength"] = self.max_length
        return out


@dataclass
class AdditionalPropertiesAllowed:
    """Boolean form of additionalProperties."""

    allows: bool = True

    def to_value(self) -> bool:
        return self.allows


@dataclass
class AdditionalPropertiesTyped:
    """Schema form of additionalProperties."""

    schema: SchemaNode | None = None

    def to_value(self) -> dict[str, Any]:
        return self.schema.to_dict() if self.schema is not None else {}


AdditionalProperties = AdditionalPropertiesAllowed | AdditionalPropertiesTyped


@dataclass
class ObjectNode(SchemaNode):
    """Represents an object schema."""

    properties: dict[str, SchemaNode] = field(default_factory=dict)
    additional_properties: AdditionalProperties | None = None
    required: list[str] = field(default_factory=list)
    min_properties: int | None = None
    max_properties: int | None = None

    def _body_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.properties:
            out["properties"] = {name: prop.to_dict() for name, prop in self.properties.items()}
        if self.additional_properties is not None:
            out["additionalProperties"] = self.additional_properties.to_value()
        if self.required:
            out["required"] = list(self.required)
        if self.min_properties is not None:
            out["minProperties"] = self.min_properties
        if self.max_properties is not None:
            out["maxProperties"] = self.max_properties
        return out


@dataclass
class ArrayNode(SchemaNode):
    """Represents an array schema with a single item schema."""

    items: SchemaNode | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool = False

    def _body_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.min_items is not None:
            out["minItems"] = self.min_items
        if self.max_items is not None:
            out["maxItems"] = self.max_items
        if self.unique_items:
            out["uniqueItems"] = True
        return out


@dataclass
class CompositeNode(SchemaNode):
    """Represents allOf/anyOf/oneOf (ordered members) or not (a single member)."""

    op: CompositeOp = CompositeOp.ALL_OF
    members: list[SchemaNode] = field(default_factory=list)

    def _body_dict(self) -> dict[str, Any]:
        if self.op is CompositeOp.NOT:
            return {"not": self.members[0].to_dict()} if self.members else {}
        return {self.op.value: [member.to_dict() for member in self.members]}


@dataclass
class TopLevelDefinition:
    """A named entry of the schema map."""

    name: str = ""
    node: SchemaNode | None = None

    # Private definitions (leading "#") are never exposed as Kind properties
    private: bool = False


@dataclass
class ParsedComponents:
    """Result of parsing a synthesized document: its top-level definitions, in document order."""

    definitions: list[TopLevelDefinition] = field(default_factory=list)

    # Synthesized OpenAPI document, for reference
    document: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> TopLevelDefinition | None:
        for definition in self.definitions:
            if definition.name == name:
                return definition
        return None

    def schemas(self) -> dict[str, SchemaNode]:
        return {definition.name: definition.node for definition in self.definitions}
