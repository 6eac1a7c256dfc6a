"""RELATIONSHIPS.json exporter — a sorted, validated, machine-readable graph dump."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from openapi_relations.analyzer.types import EntityNode, Relationship, RelationshipGraph
from openapi_relations.config import EXPORT_VERSION, RELATIONSHIPS_FILENAME
from openapi_relations.generator.base import renderable_graph


class ExportValidationError(ValueError):
    """Raised when a graph cannot be turned into a valid export."""


class _ExportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class EvidenceDefinition(_ExportModel):
    source: Literal["schema_ref", "naming_pattern", "path_pattern"]
    location: str
    details: str


class RelationshipDefinition(_ExportModel):
    source_entity: str = Field(min_length=1)
    target_entity: str = Field(min_length=1)
    type: Literal["hasMany", "hasOne", "belongsTo"]
    confidence: Literal["high", "medium", "low"]
    detected_by: list[Literal["schema_ref", "naming_pattern", "path_pattern"]]
    evidence: list[EvidenceDefinition]


class EndpointDefinition(_ExportModel):
    method: Literal["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
    path: str = Field(min_length=1)
    operation_id: str | None = None
    description: str | None = None


class EntityDefinition(_ExportModel):
    name: str = Field(min_length=1)
    endpoints: list[EndpointDefinition]
    relationships: list[RelationshipDefinition]


class ExportMetadata(_ExportModel):
    spec_title: str | None = None
    spec_version: str | None = None
    generated_at: str = Field(min_length=1)  # ISO 8601
    total_entities: int = Field(ge=0)
    total_relationships: int = Field(ge=0)
    export_version: str = Field(pattern=r"^\d+\.\d+\.\d+$")


class RelationshipsExport(_ExportModel):
    metadata: ExportMetadata
    entities: dict[str, EntityDefinition]
    relationships: list[RelationshipDefinition]


def build_export(graph: RelationshipGraph) -> RelationshipsExport:
    """Convert a graph into the export model.

    Entities are keyed in name order and relationships sorted by source then
    target, so the same graph always produces the same file. Entities or
    relationships with a blank name are left out.
    """
    graph = renderable_graph(graph)
    meta = graph.metadata
    data = {
        "metadata": {
            "spec_title": meta.spec_title,
            "spec_version": meta.spec_version,
            "generated_at": meta.generated_at.isoformat(),
            "total_entities": meta.total_entities,
            "total_relationships": meta.total_relationships,
            "export_version": EXPORT_VERSION,
        },
        "entities": {
            name: _entity_data(graph.entities[name]) for name in sorted(graph.entities)
        },
        "relationships": [
            _relationship_data(r) for r in sort_relationships(graph.relationships)
        ],
    }
    try:
        return RelationshipsExport.model_validate(data)
    except ValidationError as e:
        raise ExportValidationError(f"Invalid {RELATIONSHIPS_FILENAME} structure:\n{e}") from e


def sort_relationships(relationships) -> list[Relationship]:
    """Sort by source then target, ignoring case; exact spelling breaks ties."""
    return sorted(
        relationships,
        key=lambda r: (
            r.source_entity.casefold(), r.source_entity,
            r.target_entity.casefold(), r.target_entity,
        ),
    )


def render_relationships_json(graph: RelationshipGraph) -> str:
    return build_export(graph).model_dump_json(by_alias=True, indent=2)


def write_relationships_json(graph: RelationshipGraph, output_dir: Path) -> Path:
    """Write RELATIONSHIPS.json into output_dir and return its path."""
    content = render_relationships_json(graph)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / RELATIONSHIPS_FILENAME
    output_file.write_text(content, encoding="utf-8")
    return output_file


def _entity_data(node: EntityNode) -> dict:
    return {
        "name": node.name,
        "endpoints": [ep.model_dump() for ep in node.endpoints],
        "relationships": [_relationship_data(r) for r in node.relationships],
    }


def _relationship_data(rel: Relationship) -> dict:
    return {
        "source_entity": rel.source_entity,
        "target_entity": rel.target_entity,
        "type": rel.kind.value,
        "confidence": rel.confidence.value,
        "detected_by": [s.value for s in rel.detected_by],
        "evidence": [
            {"source": ev.source.value, "location": ev.location, "details": ev.details}
            for ev in rel.evidence
        ],
    }
