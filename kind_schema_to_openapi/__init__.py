"""Kind Schema to OpenAPI

A Python package for compiling resource kind schemas into namespaced
OpenAPI definitions. Accepts CRD-embedded, OpenAPI document and bare map
schemas and produces Kind/KindList definitions with dependency lists.
"""

__version__ = "0.1.0"

from .pipeline import (
    CompiledDefinition,
    CompilerConfig,
    GroupVersionKind,
    KindSchemaError,
    MalformedDialectError,
    PipelineGenerator,
    SchemaDocument,
    SchemaParseError,
    compile_kind_schema,
)

__all__ = [
    "PipelineGenerator",
    "CompilerConfig",
    "CompiledDefinition",
    "GroupVersionKind",
    "SchemaDocument",
    "KindSchemaError",
    "MalformedDialectError",
    "SchemaParseError",
    "compile_kind_schema",
]
