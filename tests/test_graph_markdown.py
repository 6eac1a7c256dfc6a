from pathlib import Path

from openapi_relations.analyzer.detector import analyze
from openapi_relations.generator.graph_markdown import (
    render_graph_markdown,
    render_mermaid,
    render_summary_table,
    write_graph_markdown,
)
from openapi_relations.parser.swagger import load_openapi

FIXTURES = Path(__file__).parent / "fixtures"


class TestGraphMarkdown:
    def test_mermaid_edges(self):
        graph = analyze(load_openapi(FIXTURES / "store.yaml"))
        diagram = render_mermaid(graph)

        assert diagram.startswith("graph LR")
        assert '  User["User"]:::entityStyle' in diagram
        assert "  User <-->|mutual| Order" in diagram
        assert "  User -->|hasOne| Profile" in diagram
        assert "  Product -->|hasMany| Category" in diagram
        assert "User -->|hasMany| Order" not in diagram
        assert "Order -->|belongsTo| User" not in diagram

    def test_summary_table(self):
        graph = analyze(load_openapi(FIXTURES / "store.yaml"))
        table = render_summary_table(graph)
        assert "| User | 3 | 2 | Yes |" in table
        assert "| Profile | 0 | 0 | No |" in table

    def test_header(self):
        graph = analyze(load_openapi(FIXTURES / "store.yaml"))
        markdown = render_graph_markdown(graph)
        assert markdown.startswith("# Entity Relationship Graph")
        assert "Generated from: **Store API** v1.2.0" in markdown
        assert "```mermaid" in markdown

    def test_empty_graph(self, tmp_path):
        graph = analyze({})
        output = write_graph_markdown(graph, tmp_path)
        content = output.read_text(encoding="utf-8")
        assert output.name == "GRAPH.md"
        assert "Generated from" not in content
        assert "| Entity | Endpoints | Relationships | Bidirectional |" in content

    def test_blank_entity_is_not_drawn(self, caplog):
        graph = analyze(load_openapi(FIXTURES / "blank_ids.yaml"))
        with caplog.at_level("WARNING"):
            content = render_graph_markdown(graph)

        assert '  ["' not in content
        assert "-->|belongsTo|" not in content
        assert "| User |" in content
        assert "Skipping relationship" in caplog.text
