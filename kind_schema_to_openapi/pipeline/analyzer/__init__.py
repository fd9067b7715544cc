"""
Analyzer module.

Resolves references and compiles parsed schemas into namespaced definitions.
"""

from __future__ import annotations

from .compiler import CompiledDefinition, NodeCompiler, compile_all, compile_node, sorted_dependencies
from .reference_resolver import ReferenceResolver, iter_refs

__all__ = [
    "CompiledDefinition",
    "NodeCompiler",
    "compile_all",
    "compile_node",
    "sorted_dependencies",
    "ReferenceResolver",
    "iter_refs",
]
