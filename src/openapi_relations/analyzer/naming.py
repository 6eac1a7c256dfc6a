"""Entity name normalization shared by the detectors and the graph builder.

Singularization is a deliberately small suffix heuristic, not an inflector:
"categories" -> "category", "addresses" -> "address", "users" -> "user",
anything else is left alone.
"""

import re

ID_SUFFIX_RE = re.compile(r"(?:Id|_id|ID|Ids|_ids|IDs)$")


def singularize(word: str) -> str:
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("sses"):
        return word[:-2]
    if is_plural_segment(word):
        return word[:-1]
    return word


def capitalize(word: str) -> str:
    """Uppercase the first character only; the rest is kept as written."""
    return word[:1].upper() + word[1:]


def is_plural_segment(segment: str) -> bool:
    return segment.endswith("s") and not segment.endswith("ss")


def derive_entity_name(prop_name: str) -> str:
    """Derive an entity name from an id property: "userId" -> "User"."""
    base = ID_SUFFIX_RE.sub("", prop_name)
    if is_plural_segment(base):
        base = singularize(base)
    return capitalize(base)


def entity_from_ref(ref: str) -> str:
    """Last segment of a $ref: "#/components/schemas/User" -> "User"."""
    return ref.split("/")[-1] or "Unknown"


def segment_to_entity(segment: str) -> str:
    """Turn a path segment into an entity name: "order-items" -> "OrderItem"."""
    name = "".join(capitalize(part) for part in segment.split("-"))
    name = "".join(capitalize(part) for part in name.split("_"))
    if is_plural_segment(name):
        name = singularize(name)
    return capitalize(name)


def is_path_parameter(segment: str) -> bool:
    return segment.startswith("{")


def path_entity_segments(path: str) -> list[str]:
    """Non-empty, non-parameter segments of a path template."""
    return [s for s in path.split("/") if s and not is_path_parameter(s)]
