"""Detect which flavour of API description a parsed document is."""


def detect_spec_version(data: object) -> str | None:
    """Detect the specification family of a parsed document.

    Returns: 'openapi3', 'swagger2', or None when the document is neither.
    """
    if not isinstance(data, dict):
        return None

    openapi = data.get("openapi")
    if isinstance(openapi, str) and openapi.startswith("3."):
        return "openapi3"

    swagger = data.get("swagger")
    if swagger is not None and str(swagger).startswith("2"):
        return "swagger2"

    return None
