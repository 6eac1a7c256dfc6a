"""Normalized document models.

The loader converts a loosely-typed OpenAPI mapping into these models once,
so the detectors and the graph builder never re-check shapes themselves.
"""

from typing import Literal

from pydantic import BaseModel, field_validator

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]


class PropertyDefinition(BaseModel):
    """A single schema property, reduced to what relationship detection needs."""

    name: str
    ref: str | None = None  # direct $ref on the property
    type: str | None = None  # string / integer / array / object ...
    items_ref: str | None = None  # $ref of array items
    all_of_refs: list[str] = []  # $refs found in allOf members

    @property
    def is_array(self) -> bool:
        return self.type == "array"


class SchemaDefinition(BaseModel):
    """A named component schema and its properties."""

    name: str
    properties: dict[str, PropertyDefinition] = {}


class Operation(BaseModel):
    """A single HTTP operation on a path."""

    method: HttpMethod
    operation_id: str | None = None
    description: str | None = None
    tags: list[str] = []

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value):
        return value.upper() if isinstance(value, str) else value


class PathItem(BaseModel):
    """A path template and the operations declared on it."""

    path: str  # /users/{id}/orders
    operations: list[Operation] = []


class ApiDocument(BaseModel):
    """The parts of an OpenAPI document the analyzer reads."""

    title: str | None = None
    version: str | None = None
    paths: dict[str, PathItem] = {}
    schemas: dict[str, SchemaDefinition] = {}
