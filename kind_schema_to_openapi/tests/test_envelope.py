"""
Tests for the Kind and KindList envelopes.
"""

from __future__ import annotations

from kind_schema_to_openapi.pipeline import CompiledDefinition, GroupVersionKind, build_envelopes
from kind_schema_to_openapi.pipeline.config import LIST_META_REF, OBJECT_META_REF
from kind_schema_to_openapi.pipeline.envelope import API_VERSION_DESCRIPTION, KIND_DESCRIPTION
from kind_schema_to_openapi.pipeline.schema_ast import ArrayNode, ObjectNode, PrimitiveNode, RefNode

GVK = GroupVersionKind(group="g", version="v1", kind="Foo")
PREFIX = "g/v1"


def _definition(deps=None):
    return CompiledDefinition(schema=ObjectNode(type_name="object"), dependencies=deps)


class TestGroupVersionKind:
    def test_group_version(self):
        assert GVK.group_version == "g/v1"
        assert GroupVersionKind(group="", version="v1", kind="Pod").group_version == "v1"

    def test_list_kind(self):
        assert GVK.list_kind == "FooList"


class TestBuildEnvelopes:
    def test_empty(self):
        out = build_envelopes({}, GVK, PREFIX)
        assert list(out) == ["g/v1.Foo", "g/v1.FooList"]
        kind = out["g/v1.Foo"]
        assert kind.schema.required == ["kind", "apiVersion", "metadata"]
        assert list(kind.schema.properties) == ["kind", "apiVersion", "metadata"]
        assert kind.dependencies == (OBJECT_META_REF,)

    def test_type_meta_properties(self):
        kind = build_envelopes({}, GVK, PREFIX)["g/v1.Foo"]
        assert kind.schema.properties["kind"] == PrimitiveNode(type_name="string", description=KIND_DESCRIPTION)
        assert kind.schema.properties["apiVersion"] == PrimitiveNode(type_name="string", description=API_VERSION_DESCRIPTION)
        assert kind.schema.properties["metadata"] == RefNode(target=OBJECT_META_REF, default={}, has_default=True)

    def test_public_definitions_become_properties(self):
        compiled = {"g/v1.spec": _definition(), "g/v1.status": _definition(), "g/v1.#foo": _definition()}
        kind = build_envelopes(compiled, GVK, PREFIX)["g/v1.Foo"]
        assert kind.schema.properties["spec"] == RefNode(target="g/v1.spec")
        assert kind.schema.properties["status"] == RefNode(target="g/v1.status")
        assert "#foo" not in kind.schema.properties
        assert kind.dependencies == ("g/v1.spec", "g/v1.status", OBJECT_META_REF)

    def test_required_spec(self):
        kind = build_envelopes({"g/v1.spec": _definition()}, GVK, PREFIX)["g/v1.Foo"]
        assert kind.schema.required == ["kind", "apiVersion", "metadata", "spec"]

    def test_status_is_never_required(self):
        kind = build_envelopes({"g/v1.status": _definition()}, GVK, PREFIX)["g/v1.Foo"]
        assert kind.schema.required == ["kind", "apiVersion", "metadata"]

    def test_dependencies_are_direct_only(self):
        compiled = {"g/v1.spec": _definition(("g/v1.#foo",)), "g/v1.#foo": _definition()}
        kind = build_envelopes(compiled, GVK, PREFIX)["g/v1.Foo"]
        assert "g/v1.#foo" not in kind.dependencies

    def test_private_definitions_are_kept(self):
        compiled = {"g/v1.#foo": _definition()}
        out = build_envelopes(compiled, GVK, PREFIX)
        assert out["g/v1.#foo"] is compiled["g/v1.#foo"]

    def test_definitions_outside_the_prefix_are_not_properties(self):
        compiled = {"other/v1.spec": _definition()}
        out = build_envelopes(compiled, GVK, PREFIX)
        assert "other/v1.spec" in out
        assert "spec" not in out["g/v1.Foo"].schema.properties

    def test_input_is_not_modified(self):
        compiled = {"g/v1.spec": _definition()}
        build_envelopes(compiled, GVK, PREFIX)
        assert list(compiled) == ["g/v1.spec"]

    def test_kind_list(self):
        kind_list = build_envelopes({"g/v1.spec": _definition()}, GVK, PREFIX)["g/v1.FooList"]
        assert kind_list.schema.type_name == "object"
        assert kind_list.schema.required == ["metadata", "items"]
        assert kind_list.schema.properties["metadata"] == RefNode(target=LIST_META_REF, default={}, has_default=True)
        assert kind_list.schema.properties["items"] == ArrayNode(
            type_name="array", items=RefNode(target="g/v1.Foo", default={}, has_default=True)
        )
        assert kind_list.dependencies == ("g/v1.Foo", LIST_META_REF)

    def test_custom_meta_refs(self):
        out = build_envelopes({}, GVK, PREFIX, object_meta_ref="meta.Object", list_meta_ref="meta.List")
        assert out["g/v1.Foo"].dependencies == ("meta.Object",)
        assert out["g/v1.FooList"].dependencies == ("g/v1.Foo", "meta.List")

    def test_kind_to_dict(self):
        kind = build_envelopes({"g/v1.spec": _definition()}, GVK, PREFIX)["g/v1.Foo"]
        assert kind.to_dict() == {
            "schema": {
                "type": "object",
                "properties": {
                    "kind": {"type": "string", "description": KIND_DESCRIPTION},
                    "apiVersion": {"type": "string", "description": API_VERSION_DESCRIPTION},
                    "metadata": {"$ref": OBJECT_META_REF, "default": {}},
                    "spec": {"$ref": "g/v1.spec"},
                },
                "required": ["kind", "apiVersion", "metadata", "spec"],
            },
            "dependencies": ["g/v1.spec", OBJECT_META_REF],
        }
