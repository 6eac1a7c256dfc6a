"""Per-entity context documents.

A context document describes one entity: its inferred role, the endpoints it
serves, its outgoing and incoming relationships, and a Mermaid subgraph of its
direct neighbours.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel

from openapi_relations.analyzer.types import (
    Endpoint,
    EntityNode,
    RelationshipGraph,
    RelationshipKind,
)
from openapi_relations.config import CONTEXT_DIRNAME
from openapi_relations.generator.base import renderable_graph

CENTER_STYLE = "fill:#E94B3C,stroke:#8B2F26,stroke-width:3px,color:#fff,font-weight:bold"
ENTITY_STYLE = "fill:#4A90E2,stroke:#2E5C8A,stroke-width:2px,color:#fff,font-weight:bold"

RELATIONSHIP_LABELS = {
    RelationshipKind.HAS_MANY: "has many",
    RelationshipKind.HAS_ONE: "has one",
    RelationshipKind.BELONGS_TO: "belongs to",
}

CARDINALITIES = {
    RelationshipKind.HAS_MANY: "1:N",
    RelationshipKind.HAS_ONE: "1:1",
    RelationshipKind.BELONGS_TO: "N:1",
}

Role = Literal["Primary", "Junction", "Lookup", "Entity"]


class RelationshipDetail(BaseModel):
    kind: RelationshipKind
    target_entity: str
    cardinality: str  # 1:N / 1:1 / N:1
    foreign_key: str
    access_path: str
    bidirectional: bool
    description: str


class IncomingRelationship(BaseModel):
    source_entity: str
    kind: RelationshipKind


class EntityContext(BaseModel):
    """Everything a context document says about one entity."""

    name: str
    role: Role
    description: str
    business_context: str
    endpoints: list[Endpoint]
    relationships: list[RelationshipDetail]
    incoming: list[IncomingRelationship]
    subgraph: str


def build_entity_context(graph: RelationshipGraph, name: str) -> EntityContext:
    """Build the context view for `name`.

    Raises EntityNotFoundError if the graph has no such entity.
    """
    entity = graph.entity(name)
    incoming = graph.incoming(name)
    role = infer_role(len(incoming), len(entity.relationships))

    descriptions = [ep.description for ep in entity.endpoints if ep.description]
    description = descriptions[0] if descriptions else (
        f"The {name} entity with {len(entity.endpoints)} endpoints"
    )

    details = [
        RelationshipDetail(
            kind=rel.kind,
            target_entity=rel.target_entity,
            cardinality=CARDINALITIES[rel.kind],
            foreign_key=f"{rel.target_entity.lower()}_id",
            access_path=f"/{name.lower()}/{{id}}/{rel.target_entity.lower()}",
            bidirectional=graph.has_reverse(rel),
            description=f"{name} {RELATIONSHIP_LABELS[rel.kind]} {rel.target_entity}",
        )
        for rel in entity.relationships
    ]

    return EntityContext(
        name=name,
        role=role,
        description=description,
        business_context=(
            f"{name} serves as a {role.lower()} entity in this API, with "
            f"{len(entity.endpoints)} endpoints and {len(entity.relationships)} defined relationships."
        ),
        endpoints=list(entity.endpoints),
        relationships=details,
        incoming=[IncomingRelationship(source_entity=r.source_entity, kind=r.kind) for r in incoming],
        subgraph=render_subgraph(graph, entity),
    )


def infer_role(incoming_count: int, outgoing_count: int) -> Role:
    if incoming_count == 0 and outgoing_count > 2:
        return "Primary"
    if incoming_count > 0 and outgoing_count > 0:
        return "Junction"
    if incoming_count > 0:
        return "Lookup"
    return "Entity"


def render_subgraph(graph: RelationshipGraph, entity: EntityNode) -> str:
    """Mermaid diagram of `entity` and its direct neighbours."""
    incoming = graph.incoming(entity.name)
    related = list(dict.fromkeys(
        [r.target_entity for r in entity.relationships] + [r.source_entity for r in incoming]
    ))

    lines = ["graph LR", "", f'  {entity.name}["{entity.name}"]:::centerStyle']
    if related:
        lines.append("")
        lines += [f'  {name}["{name}"]:::entityStyle' for name in related]
        lines.append("")

    lines += [f"  {entity.name} -->|{r.kind.value}| {r.target_entity}" for r in entity.relationships]
    lines += [f"  {r.source_entity} -->|{r.kind.value}| {entity.name}" for r in incoming]
    lines += [
        "",
        f"  classDef centerStyle {CENTER_STYLE}",
        f"  classDef entityStyle {ENTITY_STYLE}",
    ]
    return "\n".join(lines)


def render_entity_context(context: EntityContext) -> str:
    """Render an EntityContext as Markdown."""
    lines = [
        f"# {context.name}",
        "",
        f"**Role:** {context.role}",
        "",
        context.description,
        "",
        context.business_context,
        "",
        "## Relationship Subgraph",
        "",
        "```mermaid",
        context.subgraph,
        "```",
        "",
        "## Relationships",
        "",
    ]

    if context.relationships:
        lines += [
            "| Type | Target | Cardinality | Foreign Key | Access Path | Bidirectional |",
            "|------|--------|-------------|-------------|-------------|---------------|",
        ]
        for rel in context.relationships:
            lines.append(
                f"| {rel.kind.value} | {rel.target_entity} | {rel.cardinality} | "
                f"`{rel.foreign_key}` | `{rel.access_path}` | {'Yes' if rel.bidirectional else 'No'} |"
            )
    else:
        lines.append("_No outgoing relationships._")
    lines.append("")

    if context.incoming:
        lines += ["## Referenced By", ""]
        lines += [f"- {r.source_entity} ({r.kind.value})" for r in context.incoming]
        lines.append("")

    lines += ["## Endpoints", ""]
    if context.endpoints:
        for ep in context.endpoints:
            line = f"- `{ep.method} {ep.path}`"
            if ep.operation_id:
                line += f" ({ep.operation_id})"
            if ep.description:
                line += f": {ep.description}"
            lines.append(line)
    else:
        lines.append("_No endpoints._")
    lines.append("")

    return "\n".join(lines)


def write_context_files(graph: RelationshipGraph, output_dir: Path) -> list[Path]:
    """Write one `<Entity>.md` context file per entity under output_dir/context."""
    graph = renderable_graph(graph)
    context_dir = output_dir / CONTEXT_DIRNAME
    context_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name in graph.entities:
        file_path = context_dir / f"{name}.md"
        file_path.write_text(render_entity_context(build_entity_context(graph, name)), encoding="utf-8")
        written.append(file_path)
    return written
