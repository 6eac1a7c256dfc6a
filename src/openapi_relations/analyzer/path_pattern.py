"""Relationships implied by nested resource paths such as /users/{id}/orders."""

import logging
import re

from openapi_relations.parser.base import ApiDocument
from .naming import is_plural_segment, segment_to_entity
from .types import ConfidenceLevel, DetectionSource, Evidence, Relationship, RelationshipKind

logger = logging.getLogger(__name__)

# /parent[/{param}]/child[/{param}][/anything]
NESTED_PATH_RE = re.compile(r"^/([^/{\s]+)(?:/\{[^}]+\})?/([^/{\s]+)(?:/\{[^}]+\})?(?:/.*)?$")


def detect_path_pattern_relationships(document: ApiDocument) -> list[Relationship]:
    """Derive parent -> child relationships from nested path shapes.

    Only paths that carry a parameter placeholder count; a plural child
    segment means hasMany, a singular one hasOne.
    """
    relationships: list[Relationship] = []

    for path in document.paths:
        match = NESTED_PATH_RE.match(path)
        if not match:
            continue
        if "{" not in path or "}" not in path:
            continue

        parent_segment, child_segment = match.group(1), match.group(2)
        parent = segment_to_entity(parent_segment)
        child = segment_to_entity(child_segment)
        kind = RelationshipKind.HAS_MANY if is_plural_segment(child_segment) else RelationshipKind.HAS_ONE

        relationships.append(
            Relationship(
                source_entity=parent,
                target_entity=child,
                kind=kind,
                confidence=ConfidenceLevel.HIGH,
                detected_by=(DetectionSource.PATH_PATTERN,),
                evidence=(
                    Evidence(
                        source=DetectionSource.PATH_PATTERN,
                        location=f'paths."{path}"',
                        details=f"Nested path pattern: {parent} {kind.value} {child}",
                    ),
                ),
            )
        )

    logger.debug("Path patterns produced %d candidates", len(relationships))
    return relationships
