"""Parsing of raw chunk output returned by the generation layer."""

import json
import logging
import re
from typing import Any

from tedos.core.logging import get_logger, log_with_context

logger = get_logger(__name__)


def _strip_llm_fences(raw_output: str) -> str:
    """Strip markdown code fences from LLM output.

    Handles: ```json ... ```, ``` ... ```, leading/trailing whitespace.
    """
    cleaned = raw_output.strip()

    fence_match = re.search(r"```(?:json)?\s*\n?(.*?)```", cleaned, re.DOTALL)
    if fence_match:
        return fence_match.group(1).strip()

    # Unterminated fence
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _strip_control_chars(text: str) -> str:
    # Newlines and tabs are kept, json.loads(strict=False) accepts them inside strings
    return re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)


def parse_chunk_json(raw_output: str | None, section: str | None = None) -> dict[str, Any] | None:
    """
    Parse one chunk of generated output into a dict.

    A chunk that cannot be parsed is not an error for the merge layer: it is
    reported as None so the merger treats it like a chunk that never arrived,
    and validation surfaces the gap.

    Args:
        raw_output: Raw string from the generation call
        section: Optional section id, used for log context only

    Returns:
        Parsed dict, or None when the output is empty, unparseable, or not a
        JSON object
    """
    if not raw_output or not raw_output.strip():
        log_with_context(logger, logging.WARNING, "Empty chunk output", section=section)
        return None

    cleaned = _strip_control_chars(_strip_llm_fences(raw_output))
    try:
        parsed = json.loads(cleaned, strict=False)
    except json.JSONDecodeError as e:
        log_with_context(
            logger,
            logging.WARNING,
            "Chunk output is not valid JSON",
            section=section,
            error=str(e),
            preview=cleaned[:80],
        )
        return None

    if not isinstance(parsed, dict):
        log_with_context(
            logger,
            logging.WARNING,
            "Chunk output is not a JSON object",
            section=section,
            parsed_type=type(parsed).__name__,
        )
        return None

    return parsed
