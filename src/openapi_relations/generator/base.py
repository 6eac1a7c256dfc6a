"""Shared helpers for the artifact generators."""

import logging

from openapi_relations.analyzer.types import RelationshipGraph

logger = logging.getLogger(__name__)


def renderable_graph(graph: RelationshipGraph) -> RelationshipGraph:
    """Return `graph` without entities or relationships that have a blank name.

    A property such as `_id` or `ID` derives an empty entity name. Such names
    cannot become a file name, a Mermaid node or an export key, so they are
    skipped with a warning. The input graph is returned unchanged when
    everything has a name.
    """
    blank = [name for name in graph.entities if not name.strip()]
    dropped = [
        r for r in graph.relationships
        if not r.source_entity.strip() or not r.target_entity.strip()
    ]
    if not blank and not dropped:
        return graph

    for name in blank:
        logger.warning("Skipping entity with blank name %r", name)
    for rel in dropped:
        logger.warning(
            "Skipping relationship %r %s %r: blank entity name",
            rel.source_entity, rel.kind.value, rel.target_entity,
        )

    relationships = tuple(r for r in graph.relationships if r not in dropped)
    entities = {
        name: node.model_copy(update={
            "relationships": tuple(r for r in node.relationships if r not in dropped),
        })
        for name, node in graph.entities.items()
        if name.strip()
    }
    metadata = graph.metadata.model_copy(update={
        "total_entities": len(entities),
        "total_relationships": len(relationships),
    })
    return RelationshipGraph(entities=entities, relationships=relationships, metadata=metadata)
