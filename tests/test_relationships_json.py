import json
from pathlib import Path

import pytest

from openapi_relations.analyzer.detector import analyze
from openapi_relations.analyzer.types import (
    ConfidenceLevel,
    DetectionSource,
    Endpoint,
    EntityNode,
    Relationship,
    RelationshipKind,
)
from openapi_relations.generator.relationships_json import (
    ExportValidationError,
    build_export,
    sort_relationships,
    write_relationships_json,
)
from openapi_relations.parser.swagger import load_openapi

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def graph():
    return analyze(load_openapi(FIXTURES / "store.yaml"))


class TestRelationshipsJson:
    def test_write_file(self, graph, tmp_path):
        output = write_relationships_json(graph, tmp_path / "out")
        assert output.name == "RELATIONSHIPS.json"

        data = json.loads(output.read_text(encoding="utf-8"))
        assert set(data) == {"metadata", "entities", "relationships"}
        assert data["metadata"]["specTitle"] == "Store API"
        assert data["metadata"]["exportVersion"] == "1.0.0"
        assert data["metadata"]["totalEntities"] == 5
        assert data["metadata"]["totalRelationships"] == 5

    def test_entities_sorted_by_name(self, graph):
        data = json.loads(build_export(graph).model_dump_json(by_alias=True))
        assert list(data["entities"]) == ["Category", "Order", "Product", "Profile", "User"]

    def test_relationships_sorted_and_camel_cased(self, graph):
        data = json.loads(build_export(graph).model_dump_json(by_alias=True))
        pairs = [(r["sourceEntity"], r["targetEntity"]) for r in data["relationships"]]
        assert pairs == sorted(pairs)

        first = data["relationships"][0]
        assert first["sourceEntity"] == "Order"
        assert first["type"] == "belongsTo"
        assert first["confidence"] == "high"
        assert first["detectedBy"] == ["schema_ref", "naming_pattern"]
        assert first["evidence"][0]["location"] == "components.schemas.Order.properties.userId"

    def test_endpoints_exported(self, graph):
        data = json.loads(build_export(graph).model_dump_json(by_alias=True))
        endpoints = data["entities"]["User"]["endpoints"]
        assert endpoints[0] == {
            "method": "GET",
            "path": "/users",
            "operationId": "listUsers",
            "description": "List all users",
        }

    def test_invalid_graph_is_rejected(self, graph):
        bad_endpoint = Endpoint(method="GET", path="")
        broken = graph.model_copy(update={"entities": {"User": EntityNode(name="User", endpoints=(bad_endpoint,))}})
        with pytest.raises(ExportValidationError):
            build_export(broken)

    def test_blank_entity_names_are_skipped(self, caplog):
        graph = analyze(load_openapi(FIXTURES / "blank_ids.yaml"))
        assert "" in graph.entities

        with caplog.at_level("WARNING"):
            data = json.loads(build_export(graph).model_dump_json(by_alias=True))

        assert list(data["entities"]) == ["User"]
        assert data["entities"]["User"]["relationships"] == []
        assert data["relationships"] == []
        assert data["metadata"]["totalEntities"] == 1
        assert data["metadata"]["totalRelationships"] == 0
        assert "Skipping entity with blank name" in caplog.text


def _relationship(source: str, target: str) -> Relationship:
    return Relationship(
        source_entity=source,
        target_entity=target,
        kind=RelationshipKind.HAS_ONE,
        confidence=ConfidenceLevel.MEDIUM,
        detected_by=(DetectionSource.NAMING_PATTERN,),
    )


class TestSortRelationships:
    def test_case_insensitive_order(self):
        rels = [
            _relationship("apiKey", "User"),
            _relationship("Zone", "Region"),
            _relationship("Account", "user"),
            _relationship("Account", "Tenant"),
        ]
        pairs = [(r.source_entity, r.target_entity) for r in sort_relationships(rels)]
        assert pairs == [
            ("Account", "Tenant"),
            ("Account", "user"),
            ("apiKey", "User"),
            ("Zone", "Region"),
        ]

    def test_exact_spelling_breaks_ties(self):
        rels = [_relationship("user", "Order"), _relationship("User", "Order")]
        assert [r.source_entity for r in sort_relationships(rels)] == ["User", "user"]
