"""Tests for raw chunk output parsing."""

import logging

from tedos.core.chunk_parsing import parse_chunk_json


class TestParseChunkJson:
    def test_plain_json(self):
        assert parse_chunk_json('{"email1": {"subject": "Hi"}}') == {"email1": {"subject": "Hi"}}

    def test_fenced_json(self):
        raw = 'Here you go:\n```json\n{"vsl": {"step1_patternInterrupt": "Stop."}}\n```'
        assert parse_chunk_json(raw) == {"vsl": {"step1_patternInterrupt": "Stop."}}

    def test_unterminated_fence(self):
        assert parse_chunk_json('```json\n{"a": 1}') == {"a": 1}

    def test_literal_newline_inside_string(self):
        raw = '{"body": "line one\nline two"}'
        assert parse_chunk_json(raw) == {"body": "line one\nline two"}

    def test_control_characters_removed(self):
        assert parse_chunk_json('{"a": "b\x07"}') == {"a": "b"}

    def test_invalid_json_returns_none(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_chunk_json('{"a": ', section="emails") is None
        assert "not valid JSON" in caplog.text

    def test_non_object_returns_none(self):
        assert parse_chunk_json("[1, 2, 3]") is None

    def test_empty_returns_none(self):
        assert parse_chunk_json("") is None
        assert parse_chunk_json("   ") is None
        assert parse_chunk_json(None) is None
