"""
Email sequence chunk merger.

The 19-email nurture sequence is generated in four calls:
- chunk 1: email1-email4
- chunk 2: email5-email7, email8a-email8c
- chunk 3: email9-email12
- chunk 4: email13, email14, email15a-email15c

The generator does not always wrap its output the same way, so every chunk is
parsed first (see parse_email_chunk) before the slots are merged.
"""

import logging
from typing import Any

from tedos.core.logging import get_logger, log_with_context
from tedos.core.schemas_validation import ValidationResult
from tedos.mergers.base import (
    ParsedChunk,
    merge_sequence_slots,
    parse_sequence_chunk,
    validate_sequence,
)

logger = get_logger(__name__)

EMAIL_WRAPPER = "emailSequence"
EMAIL_ALIAS = "emails"
EMAIL_PREFIX = "email"

EMAIL_CHUNK_SLOTS: tuple[tuple[str, ...], ...] = (
    ("email1", "email2", "email3", "email4"),
    ("email5", "email6", "email7", "email8a", "email8b", "email8c"),
    ("email9", "email10", "email11", "email12"),
    ("email13", "email14", "email15a", "email15b", "email15c"),
)

EMAIL_SLOTS: list[str] = [slot for owned in EMAIL_CHUNK_SLOTS for slot in owned]

# Each email is only checked for these keys, not for deep content
EMAIL_REQUIRED_KEYS = ("subject", "body")


def parse_email_chunk(chunk: Any) -> ParsedChunk:
    """
    Parse one email chunk, trying emailSequence, then emails, then flat email* keys.

    Returns:
        ParsedChunk; shape is UNRECOGNIZED (with no items) when no email keys
        could be found
    """
    return parse_sequence_chunk(
        chunk, EMAIL_WRAPPER, EMAIL_ALIAS, EMAIL_PREFIX, label="EmailMerger"
    )


def extract_emails(chunk: Any) -> dict[str, Any]:
    """Email items of a chunk, or {} if the chunk is empty or unrecognized."""
    return parse_email_chunk(chunk).items


def merge_email_chunks(chunk1: Any, chunk2: Any, chunk3: Any, chunk4: Any) -> dict[str, Any]:
    """
    Merge the four email chunks into one emailSequence.

    Slots are taken only from their owning chunk and get no default, so an
    email that did not arrive is absent from the result.

    Args:
        chunk1: email1-email4
        chunk2: email5-email8c
        chunk3: email9-email12
        chunk4: email13-email15c

    Returns:
        {"emailSequence": {"email1": {...}, ...}}
    """
    parsed = [parse_email_chunk(c) for c in (chunk1, chunk2, chunk3, chunk4)]

    for i, p in enumerate(parsed, start=1):
        log_with_context(
            logger,
            logging.DEBUG,
            "[EmailMerger] Parsed chunk",
            section="emails",
            chunk=i,
            shape=p.shape.value,
            keys=",".join(sorted(map(str, p.items))) or "-",
        )

    sequence = merge_sequence_slots(EMAIL_CHUNK_SLOTS, parsed, EMAIL_PREFIX, label="EmailMerger")

    log_with_context(
        logger,
        logging.INFO,
        f"[EmailMerger] Total emails merged: {len(sequence)}/{len(EMAIL_SLOTS)}",
        section="emails",
        unrecognized_chunks=sum(1 for p in parsed if not p.recognized),
    )
    return {EMAIL_WRAPPER: sequence}


def validate_merged_emails(merged_result: Any) -> ValidationResult:
    """Validate that all 19 email slots are present with a subject and body."""
    return validate_sequence(merged_result, EMAIL_WRAPPER, EMAIL_SLOTS, EMAIL_REQUIRED_KEYS)
