"""Chunk mergers and validators for documents generated in several calls.

Usage:
    from tedos.mergers import merge_email_chunks, validate_merged_emails

    merged = merge_email_chunks(c1, c2, c3, c4)
    result = validate_merged_emails(merged)
    if not result.valid:
        retry(result.missing + result.incomplete)
"""

from tedos.mergers.base import ChunkShape, ParsedChunk
from tedos.mergers.closer_script import merge_closer_chunks, validate_merged_closer
from tedos.mergers.emails import (
    extract_emails,
    merge_email_chunks,
    parse_email_chunk,
    validate_merged_emails,
)
from tedos.mergers.funnel_copy import (
    get_field_counts,
    merge_funnel_copy_chunks,
    validate_merged_funnel_copy,
)
from tedos.mergers.registry import DOCUMENT_REGISTRY, get_chunked_document, merge_and_validate
from tedos.mergers.setter_script import merge_setter_chunks, validate_merged_setter
from tedos.mergers.sms import merge_sms_chunks, validate_merged_sms
from tedos.mergers.vsl import merge_vsl_chunks, validate_merged_vsl

__all__ = [
    "ChunkShape",
    "DOCUMENT_REGISTRY",
    "ParsedChunk",
    "extract_emails",
    "get_chunked_document",
    "get_field_counts",
    "merge_and_validate",
    "merge_closer_chunks",
    "merge_email_chunks",
    "merge_funnel_copy_chunks",
    "merge_setter_chunks",
    "merge_sms_chunks",
    "merge_vsl_chunks",
    "parse_email_chunk",
    "validate_merged_closer",
    "validate_merged_emails",
    "validate_merged_funnel_copy",
    "validate_merged_setter",
    "validate_merged_sms",
    "validate_merged_vsl",
]
