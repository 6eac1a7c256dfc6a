"""GRAPH.md generator — Mermaid diagram plus an entity summary table."""

from pathlib import Path

from openapi_relations.analyzer.types import GraphMetadata, RelationshipGraph
from openapi_relations.config import GRAPH_FILENAME
from openapi_relations.generator.base import renderable_graph

ENTITY_STYLE = "fill:#4A90E2,stroke:#2E5C8A,stroke-width:2px,color:#fff,font-weight:bold"


def render_mermaid(graph: RelationshipGraph) -> str:
    """Render the graph as a Mermaid `graph LR` block body.

    A pair of entities pointing at each other is drawn once as a mutual edge.
    """
    lines = ["graph LR", ""]

    for entity in graph.entities.values():
        lines.append(f'  {entity.name}["{entity.name}"]:::entityStyle')
    if graph.entities:
        lines.append("")

    paired: set[tuple[str, str]] = set()
    mutual_lines = []
    for rel in graph.relationships:
        edge = (rel.source_entity, rel.target_entity)
        if edge in paired or not graph.has_reverse(rel):
            continue
        paired.add(edge)
        paired.add((rel.target_entity, rel.source_entity))
        mutual_lines.append(f"  {rel.source_entity} <-->|mutual| {rel.target_entity}")

    lines.extend(mutual_lines)
    if mutual_lines:
        lines.append("")

    for rel in graph.relationships:
        if (rel.source_entity, rel.target_entity) in paired:
            continue
        lines.append(f"  {rel.source_entity} -->|{rel.kind.value}| {rel.target_entity}")
    if graph.relationships:
        lines.append("")

    lines.append(f"  classDef entityStyle {ENTITY_STYLE}")
    return "\n".join(lines)


def render_summary_table(graph: RelationshipGraph) -> str:
    lines = [
        "## Entity Summary",
        "",
        "| Entity | Endpoints | Relationships | Bidirectional |",
        "|--------|-----------|---------------|---------------|",
    ]
    for name in sorted(graph.entities):
        entity = graph.entities[name]
        related = [r for r in graph.relationships if name in (r.source_entity, r.target_entity)]
        bidirectional = any(graph.has_reverse(r) for r in related)
        lines.append(
            f"| {name} | {len(entity.endpoints)} | {len(entity.relationships)} | "
            f"{'Yes' if bidirectional else 'No'} |"
        )
    return "\n".join(lines)


def render_graph_markdown(graph: RelationshipGraph) -> str:
    graph = renderable_graph(graph)
    lines = ["# Entity Relationship Graph", ""]
    lines.extend(_header(graph.metadata))
    lines += [
        "## Mermaid Diagram",
        "",
        "```mermaid",
        render_mermaid(graph),
        "```",
        "",
        render_summary_table(graph),
        "",
    ]
    return "\n".join(lines)


def write_graph_markdown(graph: RelationshipGraph, output_dir: Path) -> Path:
    """Write GRAPH.md into output_dir and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / GRAPH_FILENAME
    output_file.write_text(render_graph_markdown(graph), encoding="utf-8")
    return output_file


def _header(metadata: GraphMetadata) -> list[str]:
    lines = []
    if metadata.spec_title:
        source = f"Generated from: **{metadata.spec_title}**"
        if metadata.spec_version:
            source += f" v{metadata.spec_version}"
        lines += [source, ""]
    lines += [f"Generated at: {metadata.generated_at.isoformat()}", ""]
    return lines
