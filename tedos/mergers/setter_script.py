"""
Setter (appointment booking) script chunk merger.

Two calls:
- chunk 1: call flow (callGoal .. primaryGoal)
- chunk 2: qualification + objections (primaryObstacle .. objectionHandling)

Most steps are objects (say-this / listen-for bags), not plain strings.
"""

import logging
from typing import Any

from tedos.core.logging import get_logger, log_with_context
from tedos.core.schemas_validation import ValidationResult
from tedos.mergers.base import (
    DocumentSchema,
    FieldKind,
    count_filled,
    field_group,
    log_chunk_keys,
    merge_owned_fields,
    unwrap_chunk,
    validate_fields,
)

logger = get_logger(__name__)

SETTER_SCHEMA = DocumentSchema(
    wrapper="setterScript",
    chunk_count=2,
    wrapper_aliases=("setterScript", "setterCallScript"),
    fields=(
        *field_group(FieldKind.TEXT, 0, "callGoal", "setterMindset"),
        *field_group(
            FieldKind.OBJECT, 0,
            "openingOptIn", "permissionPurpose", "currentSituation", "primaryGoal",
        ),
        *field_group(
            FieldKind.OBJECT, 1,
            "primaryObstacle", "authorityDrop", "fitReadiness", "bookCall", "confirmShowUp",
        ),
        *field_group(FieldKind.LIST, 1, "objectionHandling"),
    ),
)

SETTER_FIELDS = SETTER_SCHEMA.field_names


def merge_setter_chunks(chunk1: Any, chunk2: Any) -> dict[str, Any]:
    """
    Merge the two setter script chunks.

    Returns:
        {"setterScript": {...12 fields...}}
    """
    c1 = unwrap_chunk(chunk1, SETTER_SCHEMA.wrapper_aliases, label="SetterMerger")
    c2 = unwrap_chunk(chunk2, SETTER_SCHEMA.wrapper_aliases, label="SetterMerger")
    log_chunk_keys("SetterMerger", [c1, c2])

    script = merge_owned_fields(SETTER_SCHEMA, [c1, c2])

    log_with_context(
        logger,
        logging.INFO,
        f"[SetterMerger] Total fields merged: {count_filled(script)}/{len(SETTER_FIELDS)}",
        section="setterScript",
    )
    return {"setterScript": script}


def validate_merged_setter(merged_result: Any) -> ValidationResult:
    """Validate a merged setter script; empty object steps count as incomplete."""
    return validate_fields(merged_result, SETTER_SCHEMA)
