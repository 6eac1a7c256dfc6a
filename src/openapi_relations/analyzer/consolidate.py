"""Majority voting over candidate relationships from all detectors."""

import logging
from collections.abc import Iterable

from .types import ConfidenceLevel, Relationship, RelationshipKind

logger = logging.getLogger(__name__)

# Agreement between this many distinct detectors promotes a relationship to HIGH.
AGREEMENT_THRESHOLD = 2


def merge_relationships(base: Relationship, other: Relationship) -> Relationship:
    """Fold `other` into `base`, returning a new record.

    Sources are unioned in first-seen order and evidence is concatenated.
    Confidence becomes HIGH once two or more detectors agree and is otherwise
    left as the base had it.
    """
    detected_by = base.detected_by + tuple(s for s in other.detected_by if s not in base.detected_by)
    confidence = base.confidence
    if len(detected_by) >= AGREEMENT_THRESHOLD:
        confidence = ConfidenceLevel.HIGH

    return base.model_copy(
        update={
            "detected_by": detected_by,
            "evidence": base.evidence + other.evidence,
            "confidence": confidence,
        }
    )


def consolidate(candidates: Iterable[Relationship]) -> list[Relationship]:
    """Deduplicate candidates by (source, target, kind), keeping first-seen order."""
    merged: dict[tuple[str, str, RelationshipKind], Relationship] = {}
    total = 0

    for rel in candidates:
        total += 1
        existing = merged.get(rel.key)
        merged[rel.key] = merge_relationships(existing, rel) if existing is not None else rel

    logger.debug("Consolidated %d candidates into %d relationships", total, len(merged))
    return list(merged.values())
