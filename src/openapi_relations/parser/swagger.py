"""OpenAPI document loader and normalizer.

Reads OpenAPI 3.x documents (YAML or JSON) and reduces them to an ApiDocument.
Normalization never raises: fragments with an unexpected shape are dropped.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from openapi_relations.config import HTTP_METHODS
from .base import ApiDocument, Operation, PathItem, PropertyDefinition, SchemaDefinition
from .detect import detect_spec_version

logger = logging.getLogger(__name__)


class SpecLoadError(Exception):
    """Base class for errors raised while loading a specification file."""


class SpecNotFoundError(SpecLoadError):
    def __init__(self, file_path: Path):
        super().__init__(f"Specification file not found: {file_path}")
        self.file_path = file_path


class MalformedSpecError(SpecLoadError):
    def __init__(self, file_path: Path, reason: str):
        super().__init__(f"Invalid specification format in {file_path}: {reason}")
        self.file_path = file_path


def load_openapi(file_path: Path) -> ApiDocument:
    """Load an OpenAPI file from disk and normalize it into an ApiDocument."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SpecNotFoundError(file_path) from e

    # YAML is a superset of JSON, so one parser covers both formats
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedSpecError(file_path, str(e)) from e

    if not isinstance(doc, dict):
        raise MalformedSpecError(file_path, "top level is not a mapping")

    if detect_spec_version(doc) != "openapi3":
        logger.warning("%s does not declare OpenAPI 3.x; analyzing anyway", file_path)

    return parse_document(doc)


def parse_document(doc: object) -> ApiDocument:
    """Normalize a parsed OpenAPI mapping into an ApiDocument."""
    if not isinstance(doc, Mapping):
        logger.debug("Document is not a mapping, treating it as empty")
        return ApiDocument()

    info = doc.get("info")
    info = info if isinstance(info, dict) else {}

    components = doc.get("components")
    schemas = components.get("schemas") if isinstance(components, dict) else None
    paths = doc.get("paths")

    return ApiDocument(
        title=_scalar(info.get("title")),
        version=_scalar(info.get("version")),
        paths=_parse_paths(paths if isinstance(paths, dict) else {}),
        schemas=_parse_schemas(schemas if isinstance(schemas, dict) else {}),
    )


def _scalar(value: object) -> str | None:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _parse_schemas(schemas: dict) -> dict[str, SchemaDefinition]:
    result = {}
    for name, schema in schemas.items():
        name = str(name)
        if not isinstance(schema, dict):
            logger.debug("Schema %s is not an object, keeping name only", name)
            result[name] = SchemaDefinition(name=name)
            continue

        properties = schema.get("properties")
        if not isinstance(properties, dict):
            properties = {}

        result[name] = SchemaDefinition(
            name=name,
            properties={str(p): _parse_property(str(p), v) for p, v in properties.items()},
        )
    return result


def _parse_property(name: str, prop: object) -> PropertyDefinition:
    if not isinstance(prop, dict):
        return PropertyDefinition(name=name)

    ref = prop.get("$ref")
    prop_type = prop.get("type")
    items = prop.get("items")
    items_ref = items.get("$ref") if isinstance(items, dict) else None

    all_of = prop.get("allOf")
    all_of_refs = []
    if isinstance(all_of, list):
        for member in all_of:
            if isinstance(member, dict) and isinstance(member.get("$ref"), str):
                all_of_refs.append(member["$ref"])

    return PropertyDefinition(
        name=name,
        ref=ref if isinstance(ref, str) else None,
        type=prop_type if isinstance(prop_type, str) else None,
        items_ref=items_ref if isinstance(items_ref, str) else None,
        all_of_refs=all_of_refs,
    )


def _parse_paths(paths: dict) -> dict[str, PathItem]:
    result = {}
    for path, methods in paths.items():
        path = str(path)
        if not isinstance(methods, dict):
            logger.debug("Path item %s is not an object, keeping path only", path)
            result[path] = PathItem(path=path)
            continue

        operations = []
        for method, operation in methods.items():
            if str(method).lower() not in HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                logger.debug("Skipping malformed %s operation on %s", method, path)
                continue
            operations.append(_parse_operation(str(method), operation))

        result[path] = PathItem(path=path, operations=operations)
    return result


def _parse_operation(method: str, operation: dict) -> Operation:
    operation_id = operation.get("operationId")
    description = operation.get("description") or operation.get("summary")
    tags = operation.get("tags")

    return Operation(
        method=method.upper(),
        operation_id=operation_id if isinstance(operation_id, str) else None,
        description=description if isinstance(description, str) else None,
        tags=[t for t in tags if isinstance(t, str)] if isinstance(tags, list) else [],
    )
