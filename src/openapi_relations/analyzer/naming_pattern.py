"""Relationships implied by foreign-key style property names alone."""

import logging
import re

from openapi_relations.parser.base import ApiDocument
from .naming import capitalize, singularize
from .types import ConfidenceLevel, DetectionSource, Evidence, Relationship, RelationshipKind

logger = logging.getLogger(__name__)

SINGULAR_ID_RE = re.compile(r"^(.+?)(?:Id|_id|ID)$")
PLURAL_ID_RE = re.compile(r"^(.+?)(?:Ids|_ids|IDs)$")


def detect_naming_pattern_relationships(document: ApiDocument) -> list[Relationship]:
    """Match property names against singular and plural id conventions.

    userId, user_id, userID  -> belongsTo User
    categoryIds, tag_ids     -> hasMany Category / Tag
    """
    relationships: list[Relationship] = []

    for schema_name, schema in document.schemas.items():
        for prop_name in schema.properties:
            location = f"components.schemas.{schema_name}.properties.{prop_name}"

            plural = PLURAL_ID_RE.match(prop_name)
            singular = SINGULAR_ID_RE.match(prop_name)

            if singular and not plural:
                relationships.append(
                    _relationship(
                        schema_name,
                        capitalize(singular.group(1)),
                        RelationshipKind.BELONGS_TO,
                        location,
                        f'Foreign key pattern "{prop_name}" matches singular ID naming convention',
                    )
                )

            if plural:
                relationships.append(
                    _relationship(
                        schema_name,
                        capitalize(singularize(plural.group(1))),
                        RelationshipKind.HAS_MANY,
                        location,
                        f'Foreign key pattern "{prop_name}" matches plural ID naming convention',
                    )
                )

    logger.debug("Naming patterns produced %d candidates", len(relationships))
    return relationships


def _relationship(
    source: str, target: str, kind: RelationshipKind, location: str, details: str
) -> Relationship:
    return Relationship(
        source_entity=source,
        target_entity=target,
        kind=kind,
        confidence=ConfidenceLevel.MEDIUM,
        detected_by=(DetectionSource.NAMING_PATTERN,),
        evidence=(Evidence(source=DetectionSource.NAMING_PATTERN, location=location, details=details),),
    )
