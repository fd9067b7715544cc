"""
Kind envelope construction.

Adds the synthetic ``<Kind>`` and ``<Kind>List`` definitions that wrap the
compiled top-level definitions in the shape of a Kubernetes resource.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..utils import is_private, qualify
from .analyzer.compiler import CompiledDefinition, sorted_dependencies
from .config import LIST_META_REF, OBJECT_META_REF
from .schema_ast.nodes import ArrayNode, ObjectNode, PrimitiveNode, RefNode, SchemaNode

logger = logging.getLogger(__name__)

KIND_DESCRIPTION = (
    "Kind is a string value representing the REST resource this object represents. "
    "Servers may infer this from the endpoint the client submits requests to. Cannot be updated. In CamelCase. "
    "More info: https://git.k8s.io/community/contributors/devel/sig-architecture/api-conventions.md#types-kinds"
)
API_VERSION_DESCRIPTION = (
    "APIVersion defines the versioned schema of this representation of an object. "
    "Servers should convert recognized schemas to the latest internal value, and may reject unrecognized values. "
    "More info: https://git.k8s.io/community/contributors/devel/sig-architecture/api-conventions.md#resources"
)

KIND_REQUIRED = ["kind", "apiVersion", "metadata"]
LIST_REQUIRED = ["metadata", "items"]


@dataclass(frozen=True)
class GroupVersionKind:
    """Identifies a kind within an API group version."""

    group: str
    version: str
    kind: str

    @property
    def group_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    @property
    def list_kind(self) -> str:
        return f"{self.kind}List"


def _type_meta_properties() -> dict[str, SchemaNode]:
    return {
        "kind": PrimitiveNode(type_name="string", description=KIND_DESCRIPTION),
        "apiVersion": PrimitiveNode(type_name="string", description=API_VERSION_DESCRIPTION),
    }


def _meta_ref(target: str) -> RefNode:
    return RefNode(target=target, default={}, has_default=True)


def build_kind(
    compiled: dict[str, CompiledDefinition],
    package_prefix: str,
    object_meta_ref: str = OBJECT_META_REF,
) -> CompiledDefinition:
    """
    Build the Kind definition.

    Every public top-level definition becomes a property referencing it;
    private ones ("#" prefix) are left out. Dependencies are direct only.
    """
    properties = _type_meta_properties()
    properties["metadata"] = _meta_ref(object_meta_ref)
    deps = {object_meta_ref}
    has_spec = False

    prefix = f"{package_prefix}."
    for qualified_name in compiled:
        if not qualified_name.startswith(prefix):
            continue
        name = qualified_name[len(prefix) :]
        if is_private(name):
            continue
        properties[name] = RefNode(target=qualified_name)
        deps.add(qualified_name)
        has_spec = has_spec or name == "spec"

    required = list(KIND_REQUIRED)
    if has_spec:
        required.append("spec")

    return CompiledDefinition(
        schema=ObjectNode(type_name="object", properties=properties, required=required),
        dependencies=sorted_dependencies(deps),
    )


def build_kind_list(
    kind_name: str,
    list_meta_ref: str = LIST_META_REF,
) -> CompiledDefinition:
    """Build the KindList definition whose items reference the Kind definition."""
    properties = _type_meta_properties()
    properties["metadata"] = _meta_ref(list_meta_ref)
    properties["items"] = ArrayNode(type_name="array", items=_meta_ref(kind_name))

    return CompiledDefinition(
        schema=ObjectNode(type_name="object", properties=properties, required=list(LIST_REQUIRED)),
        dependencies=sorted_dependencies({list_meta_ref, kind_name}),
    )


def build_envelopes(
    compiled: dict[str, CompiledDefinition],
    gvk: GroupVersionKind,
    package_prefix: str,
    object_meta_ref: str = OBJECT_META_REF,
    list_meta_ref: str = LIST_META_REF,
) -> dict[str, CompiledDefinition]:
    """
    Add the Kind and KindList envelopes to the compiled definitions.

    Args:
        compiled: Qualified name -> compiled top-level definition
        gvk: Group, version and kind being described
        package_prefix: Qualifier of the compiled definitions, e.g. "g/v1"
        object_meta_ref: Definition referenced by the Kind's metadata
        list_meta_ref: Definition referenced by the KindList's metadata

    Returns:
        A new map holding every compiled definition plus the two envelopes
    """
    kind_name = qualify(package_prefix, gvk.kind)
    list_name = qualify(package_prefix, gvk.list_kind)

    output = dict(compiled)
    output[kind_name] = build_kind(compiled, package_prefix, object_meta_ref)
    output[list_name] = build_kind_list(kind_name, list_meta_ref)
    logger.debug("Built envelopes %s and %s", kind_name, list_name)
    return output
