"""Relationships implied by the structure of component schemas.

- property ending in Id / _id / ID with a $ref or a type -> belongsTo (medium)
- array property whose items carry a $ref             -> hasMany (high)
- property carrying a direct $ref                      -> hasOne (high)
- allOf member carrying a $ref                         -> hasOne (medium)

The checks are independent; overlapping findings are merged by the consolidator.
"""

import logging

from openapi_relations.parser.base import ApiDocument, PropertyDefinition
from .naming import derive_entity_name, entity_from_ref
from .types import ConfidenceLevel, DetectionSource, Evidence, Relationship, RelationshipKind

logger = logging.getLogger(__name__)

SINGULAR_ID_SUFFIXES = ("Id", "_id", "ID")


def detect_schema_ref_relationships(document: ApiDocument) -> list[Relationship]:
    """Scan every schema property for reference pointers and id properties."""
    relationships: list[Relationship] = []
    for schema_name, schema in document.schemas.items():
        for prop in schema.properties.values():
            relationships.extend(_detect_for_property(schema_name, prop))

    logger.debug("Schema references produced %d candidates", len(relationships))
    return relationships


def _detect_for_property(schema_name: str, prop: PropertyDefinition) -> list[Relationship]:
    location = f"components.schemas.{schema_name}.properties.{prop.name}"
    found = []

    if prop.name.endswith(SINGULAR_ID_SUFFIXES) and (prop.ref or prop.type):
        target = derive_entity_name(prop.name)
        found.append(
            _relationship(
                schema_name,
                target,
                RelationshipKind.BELONGS_TO,
                ConfidenceLevel.MEDIUM,
                location,
                f'ID property pattern: "{prop.name}" derives entity "{target}"',
            )
        )

    if prop.is_array and prop.items_ref:
        target = entity_from_ref(prop.items_ref)
        found.append(
            _relationship(
                schema_name,
                target,
                RelationshipKind.HAS_MANY,
                ConfidenceLevel.HIGH,
                f"{location}.items",
                f'Array reference to "{target}"',
            )
        )

    if prop.ref and not prop.is_array:
        target = entity_from_ref(prop.ref)
        found.append(
            _relationship(
                schema_name,
                target,
                RelationshipKind.HAS_ONE,
                ConfidenceLevel.HIGH,
                location,
                f'Direct reference to "{target}"',
            )
        )

    for ref in prop.all_of_refs:
        target = entity_from_ref(ref)
        found.append(
            _relationship(
                schema_name,
                target,
                RelationshipKind.HAS_ONE,
                ConfidenceLevel.MEDIUM,
                f"{location}.allOf",
                f'Composition reference to "{target}"',
            )
        )

    return found


def _relationship(
    source: str,
    target: str,
    kind: RelationshipKind,
    confidence: ConfidenceLevel,
    location: str,
    details: str,
) -> Relationship:
    return Relationship(
        source_entity=source,
        target_entity=target,
        kind=kind,
        confidence=confidence,
        detected_by=(DetectionSource.SCHEMA_REF,),
        evidence=(Evidence(source=DetectionSource.SCHEMA_REF, location=location, details=details),),
    )
