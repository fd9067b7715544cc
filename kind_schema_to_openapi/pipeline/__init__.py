"""
Pipeline - kind schema to namespaced OpenAPI definitions.

This module provides a multi-phase architecture for compiling the schema of
a resource kind:

1. Phase 1 (Document): Normalize the input dialect to a bare map of named schemas
2. Phase 2 (Synthesizer): Wrap in an OpenAPI 3.0 document, resolve $refs, validate, parse into a Schema AST
3. Phase 3 (Analyzer): Rewrite references into the versioned namespace and collect dependencies
4. Phase 4 (Envelope): Add the Kind and KindList wrapper definitions
"""

from __future__ import annotations

from .analyzer import CompiledDefinition, compile_all, compile_node
from .config import CompilerConfig
from .document import SchemaDocument, normalize
from .envelope import GroupVersionKind, build_envelopes
from .errors import KindSchemaError, MalformedDialectError, SchemaParseError
from .generator import PipelineGenerator, compile_kind_schema, definitions_to_dict
from .synthesizer import synthesize

__all__ = [
    "PipelineGenerator",
    "CompilerConfig",
    "CompiledDefinition",
    "GroupVersionKind",
    "SchemaDocument",
    "KindSchemaError",
    "MalformedDialectError",
    "SchemaParseError",
    "normalize",
    "synthesize",
    "compile_all",
    "compile_node",
    "build_envelopes",
    "compile_kind_schema",
    "definitions_to_dict",
]
