"""
Funnel copy chunk merger.

Four calls, one per funnel page:
- chunk 1: optinPage
- chunk 2: salesPage (the largest)
- chunk 3: bookingPage (older generations call it calendarPage)
- chunk 4: thankYouPage

Pages are open bags of named copy fields, so validation checks page presence
and a minimum field count per page rather than an exact field list. Only a
missing page is fatal; thin or empty pages are reported as warnings.
"""

import copy
import logging
from typing import Any

from tedos.core.logging import get_logger, log_with_context
from tedos.core.schemas_validation import FunnelCopyValidation
from tedos.mergers.base import get_wrapped, is_filled, unwrap_chunk

logger = get_logger(__name__)

FUNNEL_WRAPPER = "funnelCopy"

FUNNEL_PAGES = ("optinPage", "salesPage", "bookingPage", "thankYouPage")

# Keys a page may arrive under, in priority order
PAGE_ALIASES: dict[str, tuple[str, ...]] = {
    "optinPage": ("optinPage",),
    "salesPage": ("salesPage",),
    "bookingPage": ("bookingPage", "calendarPage"),
    "thankYouPage": ("thankYouPage",),
}

MIN_FIELD_COUNTS: dict[str, int] = {
    "optinPage": 3,
    "salesPage": 20,
    "bookingPage": 1,
    "thankYouPage": 5,
}

# Allowed to be blank: the calendar widget is embedded after deployment
OPTIONAL_EMPTY_FIELDS: dict[str, set[str]] = {
    "bookingPage": {"calendar_embedded_code"},
}


def _extract_page(chunk: dict[str, Any], page: str) -> dict[str, Any]:
    for key in PAGE_ALIASES[page]:
        value = chunk.get(key)
        if isinstance(value, dict):
            return copy.deepcopy(value)
    if chunk:
        logger.warning(
            f"[FunnelCopyMerger] Chunk for {page} has no {page} object: {sorted(map(str, chunk))}"
        )
    return {}


def merge_funnel_copy_chunks(chunk1: Any, chunk2: Any, chunk3: Any, chunk4: Any) -> dict[str, Any]:
    """
    Merge the four page chunks into one funnelCopy document.

    Args:
        chunk1: {"optinPage": {...}}
        chunk2: {"salesPage": {...}}
        chunk3: {"bookingPage": {...}} or legacy {"calendarPage": {...}}
        chunk4: {"thankYouPage": {...}}

    Returns:
        {"funnelCopy": {"optinPage": {...}, "salesPage": {...},
                        "bookingPage": {...}, "thankYouPage": {...}}}
    """
    chunks = [
        unwrap_chunk(c, (FUNNEL_WRAPPER,), label="FunnelCopyMerger")
        for c in (chunk1, chunk2, chunk3, chunk4)
    ]

    funnel = {page: _extract_page(chunk, page) for page, chunk in zip(FUNNEL_PAGES, chunks)}
    merged = {FUNNEL_WRAPPER: funnel}

    counts = get_field_counts(merged)
    log_with_context(
        logger,
        logging.INFO,
        f"[FunnelCopyMerger] Total fields merged: {counts['total']}",
        section="funnelCopy",
        **{page: counts[page] for page in FUNNEL_PAGES},
    )
    return merged


def get_field_counts(merged_result: Any) -> dict[str, int]:
    """Per-page and total field counts of a merged funnelCopy document."""
    funnel = get_wrapped(merged_result, FUNNEL_WRAPPER) or {}

    counts = {}
    for page in FUNNEL_PAGES:
        value = funnel.get(page)
        counts[page] = len(value) if isinstance(value, dict) else 0
    counts["total"] = sum(counts[page] for page in FUNNEL_PAGES)
    return counts


def validate_merged_funnel_copy(merged_result: Any) -> FunnelCopyValidation:
    """
    Validate merged funnel copy.

    Issues (make the result invalid):
    - missing funnelCopy wrapper
    - missing page

    Warnings:
    - empty page, or page below its minimum field count
    - blank copy fields

    Returns:
        FunnelCopyValidation
    """
    funnel = get_wrapped(merged_result, FUNNEL_WRAPPER)
    if funnel is None:
        return FunnelCopyValidation(valid=False, issues=[f"Missing {FUNNEL_WRAPPER} wrapper"])

    issues = []
    warnings = []
    empty_fields = []

    for page in FUNNEL_PAGES:
        content = funnel.get(page)
        if not isinstance(content, dict):
            issues.append(f"Missing {page}")
            continue

        if not content:
            warnings.append(f"{page} is empty")
        elif len(content) < MIN_FIELD_COUNTS[page]:
            warnings.append(
                f"{page} has {len(content)} fields (minimum: {MIN_FIELD_COUNTS[page]})"
            )

        exempt = OPTIONAL_EMPTY_FIELDS.get(page, set())
        for key, value in content.items():
            if key not in exempt and not is_filled(value):
                empty_fields.append(f"{page}.{key}")

    if empty_fields:
        warnings.append(f"Found {len(empty_fields)} empty text fields: {', '.join(empty_fields)}")

    pages = [funnel.get(p) for p in FUNNEL_PAGES]
    result = FunnelCopyValidation(
        valid=not issues,
        issues=issues,
        warnings=warnings,
        page_count=sum(1 for p in pages if isinstance(p, dict) and p),
        field_count=sum(len(p) for p in pages if isinstance(p, dict)),
        empty_field_count=len(empty_fields),
    )

    level = logging.INFO if result.valid else logging.WARNING
    log_with_context(
        logger,
        level,
        "[FunnelCopyValidator] Validation finished",
        section="funnelCopy",
        valid=result.valid,
        pages=result.page_count,
        fields=result.field_count,
        issues=len(issues),
        warnings=len(warnings),
    )
    return result
