"""Relationship graph data models.

Every model is frozen: relationships and entity nodes are built once per
analysis and handed to renderers read-only.
"""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from openapi_relations.parser.base import HttpMethod


class RelationshipKind(str, Enum):
    HAS_MANY = "hasMany"
    HAS_ONE = "hasOne"
    BELONGS_TO = "belongsTo"


class DetectionSource(str, Enum):
    SCHEMA_REF = "schema_ref"  # component schema $ref / id properties
    NAMING_PATTERN = "naming_pattern"  # userId, user_id, categoryIds
    PATH_PATTERN = "path_pattern"  # /users/{id}/orders


class ConfidenceLevel(str, Enum):
    """Coarse trust score, ordered LOW < MEDIUM < HIGH."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank >= other.rank


_CONFIDENCE_RANK = {
    ConfidenceLevel.LOW: 0,
    ConfidenceLevel.MEDIUM: 1,
    ConfidenceLevel.HIGH: 2,
}


class EntityNotFoundError(LookupError):
    """Raised when a caller asks for an entity the graph does not contain."""

    def __init__(self, name: str):
        super().__init__(f"Entity not found: {name}")
        self.name = name


class Evidence(BaseModel):
    """Where and why a detector saw a relationship."""

    model_config = ConfigDict(frozen=True)

    source: DetectionSource
    location: str  # components.schemas.User.properties.orders
    details: str


class Relationship(BaseModel):
    """A directed, typed connection between two entities."""

    model_config = ConfigDict(frozen=True)

    source_entity: str
    target_entity: str
    kind: RelationshipKind
    confidence: ConfidenceLevel
    detected_by: tuple[DetectionSource, ...]
    evidence: tuple[Evidence, ...] = ()

    @property
    def key(self) -> tuple[str, str, RelationshipKind]:
        return (self.source_entity, self.target_entity, self.kind)


class Endpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str
    operation_id: str | None = None
    description: str | None = None


class EntityNode(BaseModel):
    """An entity with the endpoints it serves and the relationships it owns."""

    model_config = ConfigDict(frozen=True)

    name: str
    endpoints: tuple[Endpoint, ...] = ()
    relationships: tuple[Relationship, ...] = ()


class GraphMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    spec_title: str | None = None
    spec_version: str | None = None
    generated_at: datetime
    total_entities: int
    total_relationships: int


class RelationshipGraph(BaseModel):
    """The complete result of one analysis.

    `entities` iterates in insertion order: schema names first, then
    relationship endpoints, then path segments. It is a read-only view.
    """

    model_config = ConfigDict(frozen=True)

    entities: Mapping[str, EntityNode]
    relationships: tuple[Relationship, ...]
    metadata: GraphMetadata

    @field_validator("entities", mode="after")
    @classmethod
    def _freeze_entities(cls, value: Mapping[str, EntityNode]) -> Mapping[str, EntityNode]:
        return MappingProxyType(dict(value))

    @field_serializer("entities")
    def _dump_entities(self, value: Mapping[str, EntityNode]) -> dict[str, EntityNode]:
        return dict(value)

    def entity(self, name: str) -> EntityNode:
        """Return the node called `name`, raising EntityNotFoundError if absent."""
        try:
            return self.entities[name]
        except KeyError:
            raise EntityNotFoundError(name) from None

    def incoming(self, name: str) -> list[Relationship]:
        """Relationships whose target is `name`."""
        return [r for r in self.relationships if r.target_entity == name]

    def has_reverse(self, rel: Relationship) -> bool:
        """True when some relationship points from rel's target back to its source."""
        return any(
            r.source_entity == rel.target_entity and r.target_entity == rel.source_entity
            for r in self.relationships
        )
