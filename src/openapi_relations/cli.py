"""CLI entry point for openapi-relations."""

import logging
from pathlib import Path

import click

from openapi_relations.analyzer.detector import RelationshipDetector
from openapi_relations.analyzer.types import EntityNotFoundError, RelationshipGraph
from openapi_relations.config import DEFAULT_OUTPUT_DIR, LOG_LEVEL
from openapi_relations.generator.context import (
    build_entity_context,
    render_entity_context,
    write_context_files,
)
from openapi_relations.generator.graph_markdown import write_graph_markdown
from openapi_relations.generator.relationships_json import (
    ExportValidationError,
    write_relationships_json,
)
from openapi_relations.parser.swagger import SpecLoadError, load_openapi


def _analyze_spec(spec_path: Path) -> RelationshipGraph:
    """Load a spec file and run relationship detection on it."""
    try:
        document = load_openapi(spec_path)
    except SpecLoadError as e:
        raise click.ClickException(str(e)) from e
    return RelationshipDetector().analyze(document)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """OpenAPI Relations — infer entity relationships from OpenAPI documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=DEFAULT_OUTPUT_DIR, envvar="OPENAPI_RELATIONS_OUTPUT", type=click.Path(file_okay=False, path_type=Path), help="Output directory for generated artifacts.")
@click.option("--format", "fmt", default="all", type=click.Choice(["all", "json", "graph", "context"]), help="Which artifacts to generate.")
def analyze(spec_path: Path, output: Path, fmt: str):
    """Detect relationships and write RELATIONSHIPS.json, GRAPH.md and context files."""
    click.echo(f"Analyzing {spec_path}...")
    graph = _analyze_spec(spec_path)
    click.echo(
        f"Found {graph.metadata.total_entities} entities and "
        f"{graph.metadata.total_relationships} relationships."
    )

    if fmt in ("all", "json"):
        try:
            path = write_relationships_json(graph, output)
        except ExportValidationError as e:
            raise click.ClickException(str(e)) from e
        click.echo(f"  Created {path}")

    if fmt in ("all", "graph"):
        path = write_graph_markdown(graph, output)
        click.echo(f"  Created {path}")

    if fmt in ("all", "context"):
        paths = write_context_files(graph, output)
        click.echo(f"  Created {len(paths)} context files in {output}")

    click.echo(f"Done! Output written to {output}")


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("entity")
def context(spec_path: Path, entity: str):
    """Print the context document for a single ENTITY."""
    graph = _analyze_spec(spec_path)
    try:
        ctx = build_entity_context(graph, entity)
    except EntityNotFoundError as e:
        raise click.ClickException(f"{e}. Known entities: {', '.join(graph.entities)}") from e
    click.echo(render_entity_context(ctx))


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def summary(spec_path: Path):
    """Print detected relationships, one per line."""
    graph = _analyze_spec(spec_path)
    meta = graph.metadata
    title = meta.spec_title or spec_path.name
    if meta.spec_version:
        title += f" v{meta.spec_version}"

    click.echo(title)
    click.echo(f"Entities: {meta.total_entities}")
    click.echo(f"Relationships: {meta.total_relationships}")
    for rel in graph.relationships:
        sources = ", ".join(s.value for s in rel.detected_by)
        click.echo(
            f"  {rel.source_entity} {rel.kind.value} {rel.target_entity} "
            f"[{rel.confidence.value}] ({sources})"
        )
