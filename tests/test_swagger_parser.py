from pathlib import Path

import pytest

from openapi_relations.parser.detect import detect_spec_version
from openapi_relations.parser.swagger import (
    MalformedSpecError,
    SpecNotFoundError,
    load_openapi,
    parse_document,
)

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectSpecVersion:
    def test_detect_openapi3(self):
        assert detect_spec_version({"openapi": "3.0.3"}) == "openapi3"

    def test_detect_swagger2(self):
        assert detect_spec_version({"swagger": "2.0"}) == "swagger2"

    def test_detect_unknown(self):
        assert detect_spec_version({"info": {}}) is None
        assert detect_spec_version(["not", "a", "mapping"]) is None


class TestLoadOpenApi:
    def test_load_store_fixture(self):
        doc = load_openapi(FIXTURES / "store.yaml")
        assert doc.title == "Store API"
        assert doc.version == "1.2.0"
        assert list(doc.schemas) == ["User", "Order", "Product", "Category", "Profile"]
        assert "/users/{id}/orders" in doc.paths

    def test_load_json_swagger2_still_parses(self):
        doc = load_openapi(FIXTURES / "swagger2.json")
        assert doc.title == "Legacy API"
        assert doc.version == "0.9"
        assert doc.paths["/pets/{petId}/owners"].operations[0].operation_id == "listPetOwners"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SpecNotFoundError):
            load_openapi(tmp_path / "missing.yaml")

    def test_unparsable_yaml(self, tmp_path):
        f = tmp_path / "broken.yaml"
        f.write_text("openapi: [3.0\n  paths: {", encoding="utf-8")
        with pytest.raises(MalformedSpecError):
            load_openapi(f)

    def test_non_mapping_top_level(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(MalformedSpecError):
            load_openapi(f)


class TestParseDocument:
    def test_non_mapping_document_is_empty(self):
        doc = parse_document("nonsense")
        assert doc.schemas == {}
        assert doc.paths == {}
        assert doc.title is None

    def test_property_shapes(self):
        doc = parse_document({
            "components": {"schemas": {"User": {"properties": {
                "orders": {"type": "array", "items": {"$ref": "#/components/schemas/Order"}},
                "profile": {"$ref": "#/components/schemas/Profile"},
                "owner": {"allOf": [{"$ref": "#/components/schemas/Owner"}, {"type": "object"}, "junk"]},
                "weird": 42,
            }}}},
        })
        props = doc.schemas["User"].properties
        assert props["orders"].is_array
        assert props["orders"].items_ref == "#/components/schemas/Order"
        assert props["profile"].ref == "#/components/schemas/Profile"
        assert props["owner"].all_of_refs == ["#/components/schemas/Owner"]
        assert props["weird"].ref is None and props["weird"].type is None

    def test_malformed_schema_keeps_name(self):
        doc = parse_document({"components": {"schemas": {"Broken": "oops", "NoProps": {"properties": []}}}})
        assert doc.schemas["Broken"].properties == {}
        assert doc.schemas["NoProps"].properties == {}

    def test_operations_filtered_and_described(self):
        doc = parse_document({
            "paths": {
                "/users": {
                    "get": {"operationId": "listUsers", "summary": "List users", "tags": ["users", 3]},
                    "post": {"description": "Create", "summary": "ignored"},
                    "trace": {"operationId": "traceUsers"},
                    "put": "not an operation",
                    "parameters": [],
                },
                "/broken": None,
            }
        })
        ops = doc.paths["/users"].operations
        assert [op.method for op in ops] == ["GET", "POST"]
        assert ops[0].description == "List users"
        assert ops[0].tags == ["users"]
        assert ops[1].description == "Create"
        assert doc.paths["/broken"].operations == []

    def test_numeric_version_becomes_string(self):
        doc = parse_document({"info": {"title": "T", "version": 2}})
        assert doc.version == "2"
