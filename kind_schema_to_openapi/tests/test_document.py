"""
Tests for dialect normalization and SchemaDocument.
"""

from __future__ import annotations

import json

import pytest

from kind_schema_to_openapi.pipeline import MalformedDialectError, SchemaDocument, SchemaParseError, normalize

SPEC = {"type": "object", "properties": {"foo": {"type": "string"}}}


class TestNormalize:
    """Test reduction of each dialect to the bare map"""

    def test_bare_map_passes_through(self):
        raw = {"spec": SPEC, "#private": {"type": "string"}}
        assert normalize(raw) == raw

    def test_bare_map_contents_are_not_validated(self):
        raw = {"spec": "not a schema"}
        assert normalize(raw) == raw

    def test_empty_map(self):
        assert normalize({}) == {}

    def test_crd_properties_become_the_map(self):
        raw = {"openAPIV3Schema": {"type": "object", "properties": {"spec": SPEC}}}
        assert normalize(raw) == {"spec": SPEC}

    def test_crd_schema_must_be_an_object(self):
        with pytest.raises(MalformedDialectError, match="'openAPIV3Schema' must be an object"):
            normalize({"openAPIV3Schema": []})

    def test_crd_schema_must_contain_properties(self):
        with pytest.raises(MalformedDialectError, match="'openAPIV3Schema' must contain properties"):
            normalize({"openAPIV3Schema": {"notproperties": {}}})

    def test_crd_properties_must_be_an_object(self):
        with pytest.raises(MalformedDialectError, match="'openAPIV3Schema' properties must be an object"):
            normalize({"openAPIV3Schema": {"properties": "spec"}})

    def test_openapi_schemas_become_the_map(self):
        raw = {
            "openapi": "3.0.0",
            "info": {"title": "ignored", "version": "1"},
            "paths": {"/foos": {}},
            "components": {"schemas": {"spec": SPEC}, "parameters": {}},
        }
        assert normalize(raw) == {"spec": SPEC}

    def test_openapi_without_components(self):
        assert normalize({"openapi": "3.0.0"}) == {}

    def test_openapi_without_schemas(self):
        assert normalize({"openapi": "3.0.0", "components": {}}) == {}

    def test_openapi_components_must_be_an_object(self):
        with pytest.raises(MalformedDialectError, match="'components'.*must be an object"):
            normalize({"openapi": "3.0.0", "components": "nope"})

    def test_openapi_schemas_must_be_an_object(self):
        with pytest.raises(MalformedDialectError, match="'components.schemas'.*must be an object"):
            normalize({"openapi": "3.0.0", "components": {"schemas": ["spec"]}})

    def test_openapi_key_takes_precedence_over_crd_key(self):
        raw = {"openapi": "3.0.0", "openAPIV3Schema": "ignored", "components": {"schemas": {"spec": SPEC}}}
        assert normalize(raw) == {"spec": SPEC}

    @pytest.mark.parametrize(
        "raw",
        [
            {"spec": SPEC},
            {"openAPIV3Schema": {"properties": {"spec": SPEC, "#foo": {"type": "string"}}}},
            {"openapi": "3.0.0", "components": {"schemas": {"status": SPEC}}},
        ],
    )
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once


class TestSchemaDocument:
    """Test construction and read-only access"""

    def test_from_map(self):
        doc = SchemaDocument.from_map({"openAPIV3Schema": {"properties": {"spec": SPEC}}})
        assert dict(doc.raw) == {"spec": SPEC}

    def test_from_bytes(self):
        data = json.dumps({"openapi": "3.0.0", "components": {"schemas": {"spec": SPEC}}}).encode()
        assert SchemaDocument.from_bytes(data) == SchemaDocument.from_map({"spec": SPEC})

    def test_from_bytes_invalid_json(self):
        with pytest.raises(SchemaParseError) as exc_info:
            SchemaDocument.from_bytes(b"{not json")
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)
        assert str(exc_info.value) == str(exc_info.value.__cause__)

    def test_from_bytes_requires_an_object(self):
        with pytest.raises(MalformedDialectError, match="must be a JSON object"):
            SchemaDocument.from_bytes(b"[1, 2]")

    def test_malformed_dialect_fails_construction(self):
        with pytest.raises(MalformedDialectError):
            SchemaDocument({"openAPIV3Schema": {"notproperties": {}}})

    def test_raw_is_read_only(self):
        doc = SchemaDocument({"spec": SPEC})
        with pytest.raises(TypeError):
            doc.raw["status"] = SPEC

    def test_input_mutation_does_not_leak(self):
        raw = {"spec": {"type": "object", "properties": {}}}
        doc = SchemaDocument(raw)
        raw["spec"]["properties"]["foo"] = {"type": "string"}
        raw["status"] = SPEC
        assert doc.raw["spec"] == {"type": "object", "properties": {}}
        assert doc.names() == ["spec"]

    def test_as_openapi3_schemas_map_returns_a_copy(self):
        doc = SchemaDocument({"spec": SPEC})
        schemas = doc.as_openapi3_schemas_map()
        schemas["spec"]["type"] = "string"
        assert doc.raw["spec"]["type"] == "object"

    def test_public_names(self):
        doc = SchemaDocument({"#foo": {"type": "string"}, "spec": SPEC, "status": SPEC})
        assert doc.names() == ["#foo", "spec", "status"]
        assert doc.public_names() == ["spec", "status"]

    def test_as_openapi3_document(self):
        doc = SchemaDocument({"spec": SPEC})
        document = doc.as_openapi3_document()
        assert document["openapi"] == "3.0.0"
        assert document["components"] == {"schemas": {"spec": SPEC}}
