"""
Shared chunk merge and validation engine.

Long documents are generated in several parallel calls, each owning a fixed,
disjoint slice of the document's fields. The per-document modules declare
that partition as a DocumentSchema; this module does the actual work:

- unwrap_chunk / parse_sequence_chunk: tolerate the wrapper shapes the
  generator sometimes adds around its own output
- merge_owned_fields: read every field from the chunk that owns it, with a
  zero value when it is absent
- validate_fields / validate_sequence: classify fields as missing or
  incomplete

Nothing here raises for missing or malformed chunks. A chunk that could not
be used degrades to empty fields and validation reports the gap.
"""

import copy
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tedos.core.config import get_settings
from tedos.core.logging import get_logger, log_with_context
from tedos.core.schemas_validation import ValidationResult

logger = get_logger(__name__)


class FieldKind(str, Enum):
    """Value type of a schema field, which decides its zero value."""

    TEXT = "text"
    LIST = "list"
    OBJECT = "object"


@dataclass(frozen=True)
class FieldSpec:
    """One field of a document schema and the chunk that owns it."""

    name: str
    kind: FieldKind = FieldKind.TEXT
    chunk: int = 0


@dataclass(frozen=True)
class DocumentSchema:
    """Fixed field list and chunk partition of one document type."""

    wrapper: str
    fields: tuple[FieldSpec, ...]
    chunk_count: int
    # Keys the generator may wrap a single chunk in
    wrapper_aliases: tuple[str, ...] = ()

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def fields_for_chunk(self, index: int) -> list[str]:
        return [f.name for f in self.fields if f.chunk == index]


def field_group(kind: FieldKind, chunk: int, *names: str) -> tuple[FieldSpec, ...]:
    """Build FieldSpecs sharing a kind and owning chunk."""
    return tuple(FieldSpec(name=n, kind=kind, chunk=chunk) for n in names)


# =============================================================================
# Chunk shape handling
# =============================================================================


def unwrap_chunk(chunk: Any, aliases: Sequence[str] = (), label: str = "Merger") -> dict[str, Any]:
    """
    Return the field bag of a chunk, removing a wrapper the generator added.

    Args:
        chunk: Raw chunk (dict, None, or anything else the generator returned)
        aliases: Wrapper keys to look inside, in priority order
        label: Log prefix

    Returns:
        The first alias value that is a dict, else the chunk itself; {} for
        None or non-dict chunks
    """
    if chunk is None:
        return {}
    if not isinstance(chunk, dict):
        logger.warning(f"[{label}] Ignoring chunk of type {type(chunk).__name__}")
        return {}

    for alias in aliases:
        inner = chunk.get(alias)
        if isinstance(inner, dict):
            logger.debug(f"[{label}] Unwrapping chunk that was wrapped in {alias}")
            return inner

    return chunk


class ChunkShape(str, Enum):
    """How a sequence chunk (emails, SMS) was laid out by the generator."""

    SEQUENCE_WRAPPER = "sequence_wrapper"  # {"emailSequence": {...}}
    ALIAS_WRAPPER = "alias_wrapper"  # {"emails": {...}}
    FLAT = "flat"  # {"email1": {...}, ...}
    EMPTY = "empty"  # None or {}
    UNRECOGNIZED = "unrecognized"  # none of the above


@dataclass
class ParsedChunk:
    """Result of parsing one sequence chunk.

    EMPTY and UNRECOGNIZED both carry no items; the shape tells them apart.
    """

    shape: ChunkShape
    items: dict[str, Any] = field(default_factory=dict)

    @property
    def recognized(self) -> bool:
        return self.shape is not ChunkShape.UNRECOGNIZED


def parse_sequence_chunk(
    chunk: Any,
    wrapper: str,
    alias: str,
    prefix: str,
    label: str = "Merger",
) -> ParsedChunk:
    """
    Locate the sequence items in a chunk, trying each known shape in order.

    Order: `wrapper` key, then `alias` key, then flat keys starting with
    `prefix`. Wrapper keys only count when they hold a dict.

    Args:
        chunk: Raw chunk
        wrapper: Canonical wrapper key (e.g. "emailSequence")
        alias: Alternate wrapper key (e.g. "emails")
        prefix: Item key prefix for flat chunks (e.g. "email")
        label: Log prefix

    Returns:
        ParsedChunk with the detected shape and the item dict
    """
    if chunk is None or (isinstance(chunk, dict) and not chunk):
        return ParsedChunk(shape=ChunkShape.EMPTY)

    if isinstance(chunk, dict):
        if isinstance(chunk.get(wrapper), dict):
            return ParsedChunk(shape=ChunkShape.SEQUENCE_WRAPPER, items=dict(chunk[wrapper]))
        if isinstance(chunk.get(alias), dict):
            return ParsedChunk(shape=ChunkShape.ALIAS_WRAPPER, items=dict(chunk[alias]))

        pattern = re.compile(rf"^{re.escape(prefix)}")
        flat = {
            k: v
            for k, v in chunk.items()
            if isinstance(k, str) and pattern.match(k) and k not in (wrapper, alias)
        }
        if flat:
            return ParsedChunk(shape=ChunkShape.FLAT, items=flat)

        keys = [str(k) for k in chunk]
    else:
        keys = []

    log_with_context(
        logger,
        logging.WARNING,
        f"[{label}] Could not locate {prefix} items in chunk",
        chunk_type=type(chunk).__name__,
        keys=",".join(keys[:10]) or "-",
    )
    return ParsedChunk(shape=ChunkShape.UNRECOGNIZED)


def log_chunk_keys(label: str, chunks: Sequence[dict[str, Any]]) -> None:
    """Log which keys each chunk contributed, if enabled in settings."""
    if not get_settings().MERGE_LOG_CHUNK_KEYS:
        return
    for i, chunk in enumerate(chunks, start=1):
        log_with_context(
            logger,
            logging.DEBUG,
            f"[{label}] Chunk keys",
            chunk=i,
            keys=",".join(sorted(map(str, chunk))) or "-",
        )


# =============================================================================
# Merge
# =============================================================================


def _zero_value(kind: FieldKind) -> Any:
    if kind is FieldKind.LIST:
        return []
    if kind is FieldKind.OBJECT:
        return {}
    return ""


def _coerce(value: Any, kind: FieldKind) -> Any:
    if kind is FieldKind.LIST:
        return value if isinstance(value, list) else []
    if kind is FieldKind.OBJECT:
        return value if isinstance(value, dict) else {}
    return value or _zero_value(kind)


def merge_owned_fields(schema: DocumentSchema, chunks: Sequence[dict[str, Any]]) -> dict[str, Any]:
    """
    Assemble a document by reading every field from the chunk that owns it.

    Chunks are positional: chunks[i] is the output of generation call i. A
    field whose owning chunk is missing, or does not carry it, gets its zero
    value ('' / [] / {}).

    Args:
        schema: Document schema with the chunk partition
        chunks: Unwrapped chunk dicts in call order

    Returns:
        New dict with exactly the schema's fields, in schema order
    """
    merged: dict[str, Any] = {}
    for spec in schema.fields:
        source = chunks[spec.chunk] if spec.chunk < len(chunks) else {}
        merged[spec.name] = copy.deepcopy(_coerce(source.get(spec.name), spec.kind))
    return merged


def is_filled(value: Any) -> bool:
    """Whether a merged value counts as populated."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, dict)):
        return len(value) > 0
    return True


def count_filled(document: dict[str, Any]) -> int:
    return sum(1 for v in document.values() if is_filled(v))


# =============================================================================
# Validation
# =============================================================================


def _invalid(missing: list[str], incomplete: list[str]) -> ValidationResult:
    return ValidationResult(
        valid=False,
        error=f"Missing: {len(missing)}, Incomplete: {len(incomplete)}",
        missing=missing,
        incomplete=incomplete,
    )


def _missing_wrapper(wrapper: str) -> ValidationResult:
    return ValidationResult(valid=False, error=f"Missing {wrapper} wrapper")


def get_wrapped(merged_result: Any, wrapper: str) -> dict[str, Any] | None:
    """Return merged_result[wrapper] when it is a dict, else None."""
    if not isinstance(merged_result, dict):
        return None
    document = merged_result.get(wrapper)
    return document if isinstance(document, dict) else None


def validate_fields(merged_result: Any, schema: DocumentSchema) -> ValidationResult:
    """
    Classify every schema field of a merged document.

    - missing: absent or None
    - incomplete: blank string, empty list, or empty dict
    - anything else is complete

    Args:
        merged_result: Wrapper dict as returned by a merge function
        schema: Document schema

    Returns:
        ValidationResult; field_count is set only when valid
    """
    document = get_wrapped(merged_result, schema.wrapper)
    if document is None:
        return _missing_wrapper(schema.wrapper)

    missing = []
    incomplete = []
    for name in schema.field_names:
        value = document.get(name)
        if value is None:
            missing.append(name)
        elif not is_filled(value):
            incomplete.append(name)

    if missing or incomplete:
        return _invalid(missing, incomplete)

    return ValidationResult(valid=True, field_count=len(schema.fields))


def merge_sequence_slots(
    slot_owners: Sequence[Sequence[str]],
    parsed_chunks: Sequence[ParsedChunk],
    prefix: str,
    label: str = "Merger",
) -> dict[str, Any]:
    """
    Assemble a sequence (emails, SMS) from parsed chunks.

    Each slot is read only from the chunk that owns it. Slots get no default:
    an absent slot stays absent so validation reports it as missing.

    Args:
        slot_owners: slot_owners[i] is the slot list owned by chunk i
        parsed_chunks: Parsed chunks in call order
        prefix: Item key prefix, used to spot stray slots
        label: Log prefix

    Returns:
        New dict of slot -> item, in slot order
    """
    merged: dict[str, Any] = {}
    for index, owned in enumerate(slot_owners):
        items = parsed_chunks[index].items if index < len(parsed_chunks) else {}
        for slot in owned:
            if items.get(slot) is not None:
                merged[slot] = copy.deepcopy(items[slot])

        stray = [
            k for k in items if isinstance(k, str) and k.startswith(prefix) and k not in owned
        ]
        if stray:
            log_with_context(
                logger,
                logging.WARNING,
                f"[{label}] Chunk returned slots it does not own, ignored",
                chunk=index + 1,
                slots=",".join(stray),
            )
    return merged


def validate_sequence(
    merged_result: Any,
    wrapper: str,
    slots: Sequence[str],
    required_keys: Sequence[str],
) -> ValidationResult:
    """
    Validate a merged sequence slot by slot.

    A slot is missing when absent, None or another falsy non-dict value, and
    incomplete when it is not a dict or lacks a truthy value for any of
    required_keys. Item content is not checked beyond that.

    Args:
        merged_result: Wrapper dict as returned by a merge function
        wrapper: Wrapper key (e.g. "emailSequence")
        slots: Expected slot keys in order
        required_keys: Keys every slot item must populate

    Returns:
        ValidationResult; field_count is the slot count when valid
    """
    sequence = get_wrapped(merged_result, wrapper)
    if sequence is None:
        return _missing_wrapper(wrapper)

    missing = []
    incomplete = []
    for slot in slots:
        item = sequence.get(slot)
        if item is None or (not item and not isinstance(item, dict)):
            missing.append(slot)
        elif not isinstance(item, dict) or not all(item.get(k) for k in required_keys):
            incomplete.append(slot)

    if missing or incomplete:
        return _invalid(missing, incomplete)

    return ValidationResult(valid=True, field_count=len(slots))
