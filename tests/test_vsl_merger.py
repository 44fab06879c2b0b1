"""Tests for the VSL chunk merger."""

import logging

from tedos.mergers.vsl import VSL_FIELDS, VSL_SCHEMA, merge_vsl_chunks, validate_merged_vsl
from tests.fixtures_chunks import full_chunks


def test_schema_has_38_fields():
    assert len(VSL_FIELDS) == 38
    assert len(set(VSL_FIELDS)) == 38
    assert len(VSL_SCHEMA.fields_for_chunk(0)) == 15
    assert len(VSL_SCHEMA.fields_for_chunk(1)) == 23


def test_steps_field_counts():
    per_step = {}
    for name in VSL_FIELDS:
        step = name.split("_")[0]
        per_step[step] = per_step.get(step, 0) + 1
    assert [per_step[f"step{i}"] for i in range(1, 11)] == [4, 4, 4, 3, 3, 4, 6, 3, 2, 5]


def test_complete_round_trip():
    chunk1, chunk2 = full_chunks(VSL_SCHEMA)
    merged = merge_vsl_chunks(chunk1, chunk2)

    assert list(merged) == ["vsl"]
    assert list(merged["vsl"]) == VSL_FIELDS

    result = validate_merged_vsl(merged)
    assert result.valid
    assert result.field_count == 38


def test_wrapped_chunks_are_unwrapped():
    chunk1, chunk2 = full_chunks(VSL_SCHEMA)
    merged = merge_vsl_chunks({"vsl": chunk1}, {"vslScript": chunk2})
    assert validate_merged_vsl(merged).valid


def test_merge_is_order_sensitive():
    chunk1, chunk2 = full_chunks(VSL_SCHEMA)

    forward = merge_vsl_chunks(chunk1, chunk2)
    swapped = merge_vsl_chunks(chunk2, chunk1)

    assert forward != swapped
    # chunk position, not content, decides ownership: nothing survives a swap
    assert all(v in ("", []) for v in swapped["vsl"].values())
    result = validate_merged_vsl(swapped)
    assert not result.valid
    assert result.missing == []
    assert result.incomplete == VSL_FIELDS


def test_missing_chunk_degrades_to_incomplete():
    chunk1, _ = full_chunks(VSL_SCHEMA)
    merged = merge_vsl_chunks(chunk1, None)

    vsl = merged["vsl"]
    assert vsl["step5_tips"] == []
    assert vsl["step6_stepsToSuccess"] == []
    assert vsl["step10_speedUpAction"] == ""

    result = validate_merged_vsl(merged)
    assert not result.valid
    assert result.missing == []
    assert result.incomplete == VSL_SCHEMA.fields_for_chunk(1)
    assert result.error == "Missing: 0, Incomplete: 23"


def test_non_list_tips_are_dropped():
    _, chunk2 = full_chunks(VSL_SCHEMA)
    chunk2["step5_tips"] = "Tip one. Tip two."
    merged = merge_vsl_chunks({}, chunk2)
    assert merged["vsl"]["step5_tips"] == []


def test_both_chunks_missing():
    merged = merge_vsl_chunks(None, None)
    result = validate_merged_vsl(merged)
    assert not result.valid
    assert len(result.incomplete) == 38


def test_missing_wrapper():
    result = validate_merged_vsl({"vslScript": {}})
    assert not result.valid
    assert result.error == "Missing vsl wrapper"


def test_removed_field_is_missing():
    merged = merge_vsl_chunks(*full_chunks(VSL_SCHEMA))
    del merged["vsl"]["step3_dataPoints"]
    merged["vsl"]["step9_finalPersuasion"] = None

    result = validate_merged_vsl(merged)
    assert result.missing == ["step3_dataPoints", "step9_finalPersuasion"]
    assert result.incomplete == []


def test_validation_is_idempotent():
    chunk1, _ = full_chunks(VSL_SCHEMA)
    merged = merge_vsl_chunks(chunk1, {"step5_intro": "Here's the thing."})

    first = validate_merged_vsl(merged)
    second = validate_merged_vsl(merged)
    assert first == second
    assert first.incomplete == second.incomplete


def test_merge_does_not_mutate_chunks():
    chunk1, chunk2 = full_chunks(VSL_SCHEMA)
    snapshot = (dict(chunk1), dict(chunk2))
    merged = merge_vsl_chunks(chunk1, chunk2)
    merged["vsl"]["step1_patternInterrupt"] = "changed"
    assert (chunk1, chunk2) == snapshot


def test_non_string_keys_do_not_raise(caplog):
    with caplog.at_level(logging.DEBUG):
        merged = merge_vsl_chunks({1: "x", "step1_patternInterrupt": "Stop scrolling."}, None)
    assert merged["vsl"]["step1_patternInterrupt"] == "Stop scrolling."
    assert not validate_merged_vsl(merged).valid
