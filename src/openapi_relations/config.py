"""Defaults and environment overrides for openapi-relations."""

import os

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options")

EXPORT_VERSION = "1.0.0"

RELATIONSHIPS_FILENAME = "RELATIONSHIPS.json"
GRAPH_FILENAME = "GRAPH.md"
CONTEXT_DIRNAME = "context"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(value: str | None) -> str:
    """Return a logging level name, falling back to WARNING for unknown values."""
    level = (value or "").strip().upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


DEFAULT_OUTPUT_DIR = os.getenv("OPENAPI_RELATIONS_OUTPUT", "relationships")
LOG_LEVEL = resolve_log_level(os.getenv("OPENAPI_RELATIONS_LOG_LEVEL"))
