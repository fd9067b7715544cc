"""
Schema tree compiler.

Rewrites parsed schema nodes into their namespaced form: every reference to
``#/components/schemas/X`` becomes a reference to ``<qualifier>.X``, and each
top-level definition records the qualified names it depends on directly.
"""

from __future__ import annotations

import copy
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Any

from ...utils import clamp_int64, qualify, ref_target_name
from ..config import PRESERVE_UNKNOWN_FIELDS_EXTENSION
from ..schema_ast.nodes import (
    AdditionalPropertiesAllowed,
    AdditionalPropertiesTyped,
    ArrayNode,
    CompositeNode,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaNode,
)

logger = logging.getLogger(__name__)


@dataclass
class CompiledDefinition:
    """A compiled definition and the qualified names it references directly."""

    schema: SchemaNode | None = None

    # Sorted and deduplicated; None when there are no dependencies
    dependencies: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"schema": self.schema.to_dict() if self.schema is not None else {}}
        if self.dependencies:
            out["dependencies"] = list(self.dependencies)
        return out


def sorted_dependencies(deps: set[str]) -> tuple[str, ...] | None:
    """Sort a dependency set, representing an empty set as absent."""
    if not deps:
        return None
    return tuple(sorted(deps))


class NodeCompiler:
    """Compiles one schema tree under a qualifier."""

    def __init__(self, qualifier: str, preserve_unknown_fields_extension: str = PRESERVE_UNKNOWN_FIELDS_EXTENSION):
        """
        Initialize the compiler.

        Args:
            qualifier: Namespace prefix for references, e.g. "g/v1"
            preserve_unknown_fields_extension: Extension that forces additionalProperties to true
        """
        self.qualifier = qualifier
        self.preserve_unknown_fields_extension = preserve_unknown_fields_extension

    def compile(self, node: SchemaNode) -> tuple[SchemaNode, set[str]]:
        """
        Compile a node and everything below it.

        Returns:
            The compiled node and the qualified names it references
        """
        deps: set[str] = set()

        if isinstance(node, RefNode):
            # Referenced definitions are compiled on their own, as top-level entries
            target = qualify(self.qualifier, ref_target_name(node.target))
            compiled: SchemaNode = replace(node, target=target)
            deps.add(target)
        elif isinstance(node, ObjectNode):
            compiled = self._compile_object(node, deps)
        elif isinstance(node, ArrayNode):
            compiled = self._compile_array(node, deps)
        elif isinstance(node, CompositeNode):
            compiled = replace(node, members=self._compile_all(node.members, deps))
        elif isinstance(node, PrimitiveNode):
            compiled = replace(
                node,
                min_length=clamp_int64(node.min_length),
                max_length=clamp_int64(node.max_length),
            )
        else:
            raise TypeError(f"Unsupported schema node {type(node).__name__} at {node.source_path}")

        compiled.compositions = [replace(c, members=self._compile_all(c.members, deps)) for c in node.compositions]
        if not isinstance(node, ObjectNode):
            compiled.extensions = copy.deepcopy(node.extensions)
        compiled.enum = copy.deepcopy(node.enum)
        compiled.default = copy.deepcopy(node.default)
        return compiled, deps

    def _compile_all(self, nodes: list[SchemaNode], deps: set[str]) -> list[SchemaNode]:
        compiled = []
        for member in nodes:
            member_node, member_deps = self.compile(member)
            compiled.append(member_node)
            deps |= member_deps
        return compiled

    def _compile_object(self, node: ObjectNode, deps: set[str]) -> ObjectNode:
        properties = {}
        for name, prop in node.properties.items():
            prop_node, prop_deps = self.compile(prop)
            properties[name] = prop_node
            deps |= prop_deps

        extensions = copy.deepcopy(node.extensions)
        preserve_unknown_fields = extensions.pop(self.preserve_unknown_fields_extension, None)

        additional_properties = node.additional_properties
        if preserve_unknown_fields is True:
            additional_properties = AdditionalPropertiesAllowed(allows=True)
        elif isinstance(additional_properties, AdditionalPropertiesTyped) and additional_properties.schema is not None:
            schema, schema_deps = self.compile(additional_properties.schema)
            additional_properties = AdditionalPropertiesTyped(schema=schema)
            deps |= schema_deps
        elif isinstance(additional_properties, AdditionalPropertiesAllowed):
            additional_properties = AdditionalPropertiesAllowed(allows=additional_properties.allows)

        return replace(
            node,
            properties=properties,
            additional_properties=additional_properties,
            required=list(node.required),
            min_properties=clamp_int64(node.min_properties),
            max_properties=clamp_int64(node.max_properties),
            extensions=extensions,
        )

    def _compile_array(self, node: ArrayNode, deps: set[str]) -> ArrayNode:
        items = None
        if node.items is not None:
            items, item_deps = self.compile(node.items)
            deps |= item_deps
        return replace(
            node,
            items=items,
            min_items=clamp_int64(node.min_items),
            max_items=clamp_int64(node.max_items),
        )


def compile_node(
    node: SchemaNode,
    qualifier: str,
    preserve_unknown_fields_extension: str = PRESERVE_UNKNOWN_FIELDS_EXTENSION,
) -> tuple[SchemaNode, set[str]]:
    """
    Compile a single schema node.

    Args:
        node: Parsed schema node
        qualifier: Namespace prefix for references, e.g. "g/v1"
        preserve_unknown_fields_extension: Extension that forces additionalProperties to true

    Returns:
        The compiled node and the set of qualified names it references
    """
    return NodeCompiler(qualifier, preserve_unknown_fields_extension).compile(node)


def compile_all(
    schemas: dict[str, SchemaNode],
    qualifier: str,
    preserve_unknown_fields_extension: str = PRESERVE_UNKNOWN_FIELDS_EXTENSION,
    max_workers: int = 1,
) -> dict[str, CompiledDefinition]:
    """
    Compile every top-level schema.

    Args:
        schemas: Top-level schema name -> parsed node
        qualifier: Namespace prefix, e.g. "g/v1"
        preserve_unknown_fields_extension: Extension that forces additionalProperties to true
        max_workers: Threads used to compile definitions; 1 compiles inline

    Returns:
        Qualified name -> compiled definition, in input order
    """

    def compile_one(node: SchemaNode) -> CompiledDefinition:
        compiled, deps = compile_node(node, qualifier, preserve_unknown_fields_extension)
        return CompiledDefinition(schema=compiled, dependencies=sorted_dependencies(deps))

    names = list(schemas)
    if max_workers > 1 and len(names) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(compile_one, [schemas[name] for name in names]))
    else:
        results = [compile_one(schemas[name]) for name in names]

    logger.debug("Compiled %d definitions under %s", len(results), qualifier)
    return {qualify(qualifier, name): result for name, result in zip(names, results)}
