"""Assemble the entity graph from a document and consolidated relationships."""

import logging
from datetime import datetime, timezone

from openapi_relations.parser.base import ApiDocument
from .naming import path_entity_segments, segment_to_entity
from .types import Endpoint, EntityNode, GraphMetadata, Relationship, RelationshipGraph

logger = logging.getLogger(__name__)


def collect_entity_names(document: ApiDocument, relationships: list[Relationship]) -> list[str]:
    """Union of schema names, relationship endpoints and path segment entities.

    Order is first appearance: schemas, then relationships, then paths.
    """
    names: dict[str, None] = {}

    for schema_name in document.schemas:
        names.setdefault(schema_name)

    for rel in relationships:
        names.setdefault(rel.source_entity)
        names.setdefault(rel.target_entity)

    for path in document.paths:
        for segment in path_entity_segments(path):
            names.setdefault(segment_to_entity(segment))

    return list(names)


def build_graph(document: ApiDocument, relationships: list[Relationship]) -> RelationshipGraph:
    """Build a RelationshipGraph; nodes are created once, fully populated."""
    names = collect_entity_names(document, relationships)
    endpoints: dict[str, list[Endpoint]] = {name: [] for name in names}
    owned: dict[str, list[Relationship]] = {name: [] for name in names}

    for path, item in document.paths.items():
        segments = path_entity_segments(path)
        entity_name = segment_to_entity(segments[0]) if segments else None
        if entity_name not in endpoints:
            logger.debug("No entity for %s, dropping %d operations", path, len(item.operations))
            continue

        for operation in item.operations:
            endpoints[entity_name].append(
                Endpoint(
                    method=operation.method,
                    path=path,
                    operation_id=operation.operation_id,
                    description=operation.description,
                )
            )

    for rel in relationships:
        if rel.source_entity not in owned:
            logger.debug("Relationship source %s is not an entity, skipping", rel.source_entity)
            continue
        owned[rel.source_entity].append(rel)

    entities = {
        name: EntityNode(name=name, endpoints=tuple(endpoints[name]), relationships=tuple(owned[name]))
        for name in names
    }

    metadata = GraphMetadata(
        spec_title=document.title,
        spec_version=document.version,
        generated_at=datetime.now(timezone.utc),
        total_entities=len(entities),
        total_relationships=len(relationships),
    )

    return RelationshipGraph(entities=entities, relationships=tuple(relationships), metadata=metadata)
