"""Relationship detection pipeline: three detectors, consolidation, graph assembly."""

import logging
from collections.abc import Mapping

from openapi_relations.parser.base import ApiDocument
from openapi_relations.parser.swagger import parse_document
from .consolidate import consolidate
from .graph_builder import build_graph
from .naming_pattern import detect_naming_pattern_relationships
from .path_pattern import detect_path_pattern_relationships
from .schema_ref import detect_schema_ref_relationships
from .types import RelationshipGraph

logger = logging.getLogger(__name__)


class RelationshipDetector:
    """Infers hasMany / hasOne / belongsTo relationships from an OpenAPI document."""

    def analyze(self, document: ApiDocument | Mapping) -> RelationshipGraph:
        """Analyze a document and return the complete relationship graph.

        Accepts either a normalized ApiDocument or the raw parsed mapping.
        Malformed fragments reduce the result; they never raise.
        """
        if not isinstance(document, ApiDocument):
            document = parse_document(document)

        candidates = [
            *detect_schema_ref_relationships(document),
            *detect_naming_pattern_relationships(document),
            *detect_path_pattern_relationships(document),
        ]
        relationships = consolidate(candidates)
        graph = build_graph(document, relationships)

        logger.info(
            "Analyzed %s: %d entities, %d relationships",
            document.title or "untitled document",
            graph.metadata.total_entities,
            graph.metadata.total_relationships,
        )
        return graph


def analyze(document: ApiDocument | Mapping) -> RelationshipGraph:
    """Shortcut for RelationshipDetector().analyze(document)."""
    return RelationshipDetector().analyze(document)
