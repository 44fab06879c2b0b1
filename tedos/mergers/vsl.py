"""
VSL script chunk merger.

The 38-field VSL script is generated in two calls:
- chunk 1: steps 1-4 (hook, problem, credibility, product)
- chunk 2: steps 5-10 (value, engagement, CTA, close)

The merged document is a flat dict of step<N>_<name> fields under "vsl".
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

TEXT = FieldKind.TEXT
LIST = FieldKind.LIST

VSL_SCHEMA = DocumentSchema(
    wrapper="vsl",
    chunk_count=2,
    wrapper_aliases=("vsl", "vslScript"),
    fields=(
        # Chunk 1: hook / problem phase
        *field_group(
            TEXT, 0,
            "step1_patternInterrupt", "step1_characterIntro",
            "step1_problemStatement", "step1_emotionalConnection",
        ),
        *field_group(
            TEXT, 0,
            "step2_benefitLead", "step2_uniqueSolution",
            "step2_benefitsHighlight", "step2_problemAgitation",
        ),
        *field_group(
            TEXT, 0,
            "step3_nightmareStory", "step3_clientTestimonials",
            "step3_dataPoints", "step3_expertEndorsements",
        ),
        *field_group(
            TEXT, 0,
            "step4_detailedDescription", "step4_demonstration", "step4_psychologicalTriggers",
        ),
        # Chunk 2: solution / offer phase
        *field_group(TEXT, 1, "step5_intro"),
        *field_group(LIST, 1, "step5_tips"),
        *field_group(TEXT, 1, "step5_transition"),
        *field_group(
            TEXT, 1,
            "step6_directEngagement", "step6_urgencyCreation", "step6_clearOffer",
        ),
        *field_group(LIST, 1, "step6_stepsToSuccess"),
        *field_group(
            TEXT, 1,
            "step7_recap", "step7_primaryCTA", "step7_offerFeaturesAndPrice",
            "step7_bonuses", "step7_secondaryCTA", "step7_guarantee",
        ),
        *field_group(TEXT, 1, "step8_theClose", "step8_addressObjections", "step8_reiterateValue"),
        *field_group(TEXT, 1, "step9_followUpStrategy", "step9_finalPersuasion"),
        *field_group(
            TEXT, 1,
            "step10_hardClose", "step10_handleObjectionsAgain", "step10_scarcityClose",
            "step10_inspirationClose", "step10_speedUpAction",
        ),
    ),
)

VSL_FIELDS = VSL_SCHEMA.field_names


def merge_vsl_chunks(chunk1: Any, chunk2: Any) -> dict[str, Any]:
    """
    Merge the two VSL chunks into one vsl document.

    Chunk position decides ownership: chunk1 is always read for steps 1-4 and
    chunk2 for steps 5-10, whatever they contain.

    Args:
        chunk1: Steps 1-4 output (None allowed)
        chunk2: Steps 5-10 output (None allowed)

    Returns:
        {"vsl": {...38 fields...}}
    """
    c1 = unwrap_chunk(chunk1, VSL_SCHEMA.wrapper_aliases, label="VslMerger")
    c2 = unwrap_chunk(chunk2, VSL_SCHEMA.wrapper_aliases, label="VslMerger")
    log_chunk_keys("VslMerger", [c1, c2])

    vsl = merge_owned_fields(VSL_SCHEMA, [c1, c2])

    log_with_context(
        logger,
        logging.INFO,
        f"[VslMerger] Total fields merged: {count_filled(vsl)}/{len(VSL_FIELDS)}",
        section="vsl",
    )
    return {"vsl": vsl}


def validate_merged_vsl(merged_result: Any) -> ValidationResult:
    """Validate a merged VSL script against its 38-field schema."""
    return validate_fields(merged_result, VSL_SCHEMA)
