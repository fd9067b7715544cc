"""
Pipeline generator.

Runs the phases in order:

1. Normalize: reduce the input dialect to a bare map of named schemas
2. Synthesize: wrap in an OpenAPI document, resolve references, validate, parse
3. Compile: namespace every top-level definition and collect its dependencies
4. Envelope: add the Kind and KindList definitions
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .analyzer import CompiledDefinition, compile_all
from .config import CompilerConfig
from .document import SchemaDocument
from .envelope import GroupVersionKind, build_envelopes
from .synthesizer import synthesize

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Compiles the schema of one kind version into namespaced definitions."""

    def __init__(
        self,
        schema: SchemaDocument | Mapping[str, Any],
        gvk: GroupVersionKind,
        package_prefix: str | None = None,
        config: CompilerConfig | None = None,
    ):
        """
        Initialize the generator.

        Args:
            schema: A SchemaDocument, or a raw schema in any accepted dialect
            gvk: Group, version and kind being compiled
            package_prefix: Qualifier for definition names (defaults to "<group>/<version>")
            config: Compiler configuration
        """
        self.document = schema if isinstance(schema, SchemaDocument) else SchemaDocument(schema)
        self.gvk = gvk
        self.package_prefix = package_prefix or gvk.group_version
        self.config = config or CompilerConfig()

    def compile(self) -> dict[str, CompiledDefinition]:
        """Compile the top-level definitions, without envelopes."""
        parsed = synthesize(
            self.document.raw,
            validate=self.config.validate_document,
            preserve_unknown_fields_extension=self.config.preserve_unknown_fields_extension,
        )
        return compile_all(
            parsed.schemas(),
            self.package_prefix,
            preserve_unknown_fields_extension=self.config.preserve_unknown_fields_extension,
            max_workers=self.config.max_workers,
        )

    def generate(self) -> dict[str, CompiledDefinition]:
        """
        Run the whole pipeline.

        Returns:
            Qualified name -> definition, including the Kind and KindList envelopes

        Raises:
            MalformedDialectError: If the input dialect shape is violated
            SchemaParseError: If the synthesized document is rejected
        """
        logger.debug("Compiling %s under %s", self.gvk.kind, self.package_prefix)
        return build_envelopes(
            self.compile(),
            self.gvk,
            self.package_prefix,
            object_meta_ref=self.config.object_meta_ref,
            list_meta_ref=self.config.list_meta_ref,
        )

    def generate_dict(self) -> dict[str, Any]:
        """Run the whole pipeline and return JSON-ready definitions."""
        return definitions_to_dict(self.generate())


def definitions_to_dict(definitions: Mapping[str, CompiledDefinition]) -> dict[str, Any]:
    """Serialize a definition map to the kube-openapi JSON shape."""
    return {name: definition.to_dict() for name, definition in definitions.items()}


def compile_kind_schema(
    schema: SchemaDocument | Mapping[str, Any],
    gvk: GroupVersionKind,
    package_prefix: str | None = None,
    config: CompilerConfig | None = None,
) -> dict[str, CompiledDefinition]:
    """Compile a kind schema in any accepted dialect into namespaced definitions."""
    return PipelineGenerator(schema, gvk, package_prefix, config).generate()
