"""
Schema AST (Abstract Syntax Tree) module.

Contains the AST node definitions and parser for kind schemas.
"""

from __future__ import annotations

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
from .parser import SchemaParser

__all__ = [
    "SchemaNode",
    "RefNode",
    "PrimitiveNode",
    "ObjectNode",
    "ArrayNode",
    "CompositeNode",
    "CompositeOp",
    "AdditionalPropertiesAllowed",
    "AdditionalPropertiesTyped",
    "TopLevelDefinition",
    "ParsedComponents",
    "SchemaParser",
]
