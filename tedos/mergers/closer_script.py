"""
Closer (sales call) script chunk merger.

Two calls:
- chunk 1: discovery + stakes (agendaPermission .. recapConfirmation)
- chunk 2: pitch + close (pitchScript .. objectionHandling)

The merged document is stored under "salesScripts".
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

CLOSER_SCHEMA = DocumentSchema(
    wrapper="salesScripts",
    chunk_count=2,
    fields=(
        *field_group(FieldKind.TEXT, 0, "agendaPermission"),
        *field_group(FieldKind.LIST, 0, "discoveryQuestions"),
        *field_group(
            FieldKind.TEXT, 0,
            "stakesImpact", "commitmentScale", "decisionGate", "recapConfirmation",
        ),
        *field_group(FieldKind.TEXT, 1, "pitchScript", "proofLine", "investmentClose", "nextSteps"),
        *field_group(FieldKind.LIST, 1, "objectionHandling"),
    ),
)

CLOSER_FIELDS = CLOSER_SCHEMA.field_names

DEFAULT_LOOKING_FOR = "Listen for specific pain points and emotional triggers"
DEFAULT_IF_VAGUE = "Can you give me a specific example?"


def normalize_discovery_questions(questions: Any) -> list[dict[str, str]]:
    """
    Give every discovery question the full label/question/lookingFor/ifVague shape.

    A plain string is taken as the question text. Anything that is not a list
    yields no questions.
    """
    if not isinstance(questions, list):
        return []

    normalized = []
    for idx, q in enumerate(questions):
        if isinstance(q, dict):
            normalized.append({
                "label": q.get("label") or f"Question {idx + 1}",
                "question": q.get("question") or "",
                "lookingFor": q.get("lookingFor") or DEFAULT_LOOKING_FOR,
                "ifVague": q.get("ifVague") or DEFAULT_IF_VAGUE,
            })
        else:
            normalized.append({
                "label": f"Question {idx + 1}",
                "question": q if isinstance(q, str) else "",
                "lookingFor": DEFAULT_LOOKING_FOR,
                "ifVague": DEFAULT_IF_VAGUE,
            })
    return normalized


def merge_closer_chunks(chunk1: Any, chunk2: Any) -> dict[str, Any]:
    """
    Merge the two closer script chunks.

    Args:
        chunk1: Discovery + stakes fields
        chunk2: Pitch + close fields

    Returns:
        {"salesScripts": {...11 fields...}}
    """
    c1 = unwrap_chunk(chunk1, label="CloserMerger")
    c2 = unwrap_chunk(chunk2, label="CloserMerger")
    log_chunk_keys("CloserMerger", [c1, c2])

    script = merge_owned_fields(CLOSER_SCHEMA, [c1, c2])
    script["discoveryQuestions"] = normalize_discovery_questions(c1.get("discoveryQuestions"))

    missing_text = [q["label"] for q in script["discoveryQuestions"] if not q["question"]]
    if missing_text:
        logger.warning(f"[CloserMerger] Discovery questions without text: {missing_text}")

    log_with_context(
        logger,
        logging.INFO,
        f"[CloserMerger] Total fields merged: {count_filled(script)}/{len(CLOSER_FIELDS)}",
        section="salesScripts",
    )
    return {"salesScripts": script}


def validate_merged_closer(merged_result: Any) -> ValidationResult:
    """Validate a merged closer script against its 11-field schema."""
    return validate_fields(merged_result, CLOSER_SCHEMA)
