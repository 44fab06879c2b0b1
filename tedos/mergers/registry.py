"""Lookup of merge/validate pairs by content section id."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tedos.core.schemas_validation import FunnelCopyValidation, ValidationResult
from tedos.mergers.closer_script import merge_closer_chunks, validate_merged_closer
from tedos.mergers.emails import merge_email_chunks, validate_merged_emails
from tedos.mergers.funnel_copy import merge_funnel_copy_chunks, validate_merged_funnel_copy
from tedos.mergers.setter_script import merge_setter_chunks, validate_merged_setter
from tedos.mergers.sms import merge_sms_chunks, validate_merged_sms
from tedos.mergers.vsl import merge_vsl_chunks, validate_merged_vsl


@dataclass(frozen=True)
class ChunkedDocument:
    """A section generated in several chunks."""

    section: str
    chunk_count: int
    merge: Callable[..., dict[str, Any]]
    validate: Callable[[Any], ValidationResult | FunnelCopyValidation]


DOCUMENT_REGISTRY: dict[str, ChunkedDocument] = {
    "vsl": ChunkedDocument("vsl", 2, merge_vsl_chunks, validate_merged_vsl),
    "emails": ChunkedDocument("emails", 4, merge_email_chunks, validate_merged_emails),
    "salesScripts": ChunkedDocument("salesScripts", 2, merge_closer_chunks, validate_merged_closer),
    "setterScript": ChunkedDocument("setterScript", 2, merge_setter_chunks, validate_merged_setter),
    "funnelCopy": ChunkedDocument(
        "funnelCopy", 4, merge_funnel_copy_chunks, validate_merged_funnel_copy
    ),
    "sms": ChunkedDocument("sms", 2, merge_sms_chunks, validate_merged_sms),
}


def get_chunked_document(section: str) -> ChunkedDocument:
    """
    Get the merge/validate pair for a section.

    Raises:
        KeyError: If the section is not generated in chunks
    """
    try:
        return DOCUMENT_REGISTRY[section]
    except KeyError:
        raise KeyError(
            f"Section '{section}' is not a chunked document "
            f"(expected one of: {', '.join(DOCUMENT_REGISTRY)})"
        ) from None


def merge_and_validate(
    section: str, *chunks: Any
) -> tuple[dict[str, Any], ValidationResult | FunnelCopyValidation]:
    """
    Merge a section's chunks and validate the result.

    Fewer chunks than the section expects are padded with None, which merges
    as empty chunks.

    Raises:
        KeyError: If the section is not generated in chunks
        TypeError: If more chunks are passed than the section has
    """
    document = get_chunked_document(section)
    if len(chunks) > document.chunk_count:
        raise TypeError(
            f"{section} takes {document.chunk_count} chunks, got {len(chunks)}"
        )

    padded = list(chunks) + [None] * (document.chunk_count - len(chunks))
    merged = document.merge(*padded)
    return merged, document.validate(merged)
