"""
SMS sequence chunk merger.

Ten SMS messages in two calls: sms1-sms5, then sms6, sms7a/b and the two
no-show follow-ups.
"""

import logging
from typing import Any

from tedos.core.logging import get_logger, log_with_context
from tedos.core.schemas_validation import ValidationResult
from tedos.mergers.base import merge_sequence_slots, parse_sequence_chunk, validate_sequence

logger = get_logger(__name__)

SMS_WRAPPER = "smsSequence"
SMS_ALIAS = "sms"
SMS_PREFIX = "sms"

SMS_CHUNK_SLOTS: tuple[tuple[str, ...], ...] = (
    ("sms1", "sms2", "sms3", "sms4", "sms5"),
    ("sms6", "sms7a", "sms7b", "smsNoShow1", "smsNoShow2"),
)

SMS_SLOTS: list[str] = [slot for owned in SMS_CHUNK_SLOTS for slot in owned]


def merge_sms_chunks(chunk1: Any, chunk2: Any) -> dict[str, Any]:
    """Merge the two SMS chunks into {"smsSequence": {...}}."""
    parsed = [
        parse_sequence_chunk(c, SMS_WRAPPER, SMS_ALIAS, SMS_PREFIX, label="SmsMerger")
        for c in (chunk1, chunk2)
    ]
    sequence = merge_sequence_slots(SMS_CHUNK_SLOTS, parsed, SMS_PREFIX, label="SmsMerger")

    log_with_context(
        logger,
        logging.INFO,
        f"[SmsMerger] Total SMS merged: {len(sequence)}/{len(SMS_SLOTS)}",
        section="sms",
    )
    return {SMS_WRAPPER: sequence}


def validate_merged_sms(merged_result: Any) -> ValidationResult:
    """Every SMS slot must be present with a message."""
    return validate_sequence(merged_result, SMS_WRAPPER, SMS_SLOTS, ("message",))
