"""Tests for the safe front-matter loader and top-level line mapping."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from tenetlint.models.document import ABSENT, MappingValue, ScalarValue, SequenceValue
from tenetlint.parser.line_map import LineMapper
from tenetlint.parser.loader import SafeMetadataParser
from tests.conftest import VALID_BINDING_YAML


class TestSafeMetadataParser:
    def test_parse_binding(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse(VALID_BINDING_YAML)
        assert doc.parse_errors == []
        assert isinstance(doc.value, MappingValue)
        assert doc.value.entries == {
            "id": "x",
            "last_modified": "2025-05-10",
            "derived_from": "y",
            "enforced_by": "z",
            "version": "1.0.0",
        }

    @pytest.mark.parametrize("text", [None, "", "   ", "\n\n", " \t\n  "])
    def test_empty_input_is_absent(self, parser: SafeMetadataParser, text: str | None) -> None:
        doc = parser.parse(text)
        assert doc.value == ABSENT
        assert doc.line_map == {}
        assert doc.parse_errors == []

    def test_comment_only_input_is_absent(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("# nothing here yet\n")
        assert doc.value == ABSENT
        assert doc.parse_errors == []

    def test_unquoted_date_is_native(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("last_modified: 2025-05-10\n")
        assert isinstance(doc.value, MappingValue)
        assert doc.value.get("last_modified") == date(2025, 5, 10)

    def test_unquoted_datetime_is_native(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("published: 2025-05-10 08:30:00\n")
        assert isinstance(doc.value, MappingValue)
        assert isinstance(doc.value.get("published"), datetime)

    def test_scalar_types(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("count: 3\nratio: 0.5\ndraft: true\nowner: null\ntags: [a, b]\n")
        assert isinstance(doc.value, MappingValue)
        assert doc.value.entries == {
            "count": 3,
            "ratio": 0.5,
            "draft": True,
            "owner": None,
            "tags": ["a", "b"],
        }

    def test_non_string_keys_become_strings(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("1: one\n")
        assert isinstance(doc.value, MappingValue)
        assert doc.value.entries == {"1": "one"}

    def test_sequence_top_level(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("- a\n- b\n")
        assert doc.value == SequenceValue(["a", "b"])
        assert doc.line_map == {}
        assert doc.parse_errors == []

    def test_scalar_top_level(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("just some text\n")
        assert doc.value == ScalarValue("just some text")
        assert doc.line_map == {}

    def test_syntax_error_reports_position(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("id: test\nbad: value: more\n")
        assert doc.value == ABSENT
        assert doc.line_map == {}
        assert len(doc.parse_errors) == 1
        error = doc.parse_errors[0]
        assert error.message.startswith("YAML syntax error:")
        assert error.line == 2
        assert error.column is not None
        assert error.suggestion is not None
        assert "line 2" in error.suggestion

    def test_multiple_defects_yield_one_error(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("id: [unclosed\nname: {also: unclosed\n  bad: : :\n")
        assert doc.value == ABSENT
        assert len(doc.parse_errors) == 1
        assert doc.parse_errors[0].line is not None

    def test_impossible_unquoted_date_kept_as_text(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("id: x\nlast_modified: 2025-02-30\n")
        assert doc.parse_errors == []
        assert isinstance(doc.value, MappingValue)
        assert doc.value.get("last_modified") == "2025-02-30"
        assert doc.line_map == {"id": 1, "last_modified": 2}

    def test_real_unquoted_date_still_native(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("last_modified: 2024-02-29\n")
        assert isinstance(doc.value, MappingValue)
        assert doc.value.get("last_modified") == date(2024, 2, 29)

    def test_duplicate_key_keeps_first_definition(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("id: first\nversion: '1.0.0'\nid: second\n")
        assert isinstance(doc.value, MappingValue)
        assert doc.value.get("id") == "first"
        assert doc.line_map["id"] == 1


class TestLineMap:
    def test_binding_lines(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse(VALID_BINDING_YAML)
        assert doc.line_map == {
            "id": 1,
            "last_modified": 2,
            "derived_from": 3,
            "enforced_by": 4,
            "version": 5,
        }

    def test_comments_and_blank_lines_count(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("# Comment line\nid: test-binding\nlast_modified: '2025-05-10'\n\nversion: '1.0.0'\n")
        assert doc.line_map == {"id": 2, "last_modified": 3, "version": 5}

    def test_nested_keys_are_not_mapped(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("id: a\nmeta:\n  owner: someone\n  id: nested\nversion: '1.0.0'\n")
        assert doc.line_map == {"id": 1, "meta": 2, "version": 5}

    def test_nested_key_before_top_level_definition(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("meta:\n  version: inner\nversion: '1.0.0'\n")
        assert doc.line_map["version"] == 3

    def test_space_before_colon_is_not_a_candidate(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("id : spaced\nversion: '1.0.0'\n")
        assert isinstance(doc.value, MappingValue)
        assert "id" in doc.value
        assert doc.line_map == {"version": 2}

    def test_flow_mapping_has_no_lines(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("{id: a, version: '1.0.0'}\n")
        assert isinstance(doc.value, MappingValue)
        assert doc.line_map == {}

    def test_hyphenated_and_numeric_keys(self, parser: SafeMetadataParser) -> None:
        doc = parser.parse("x-ref: a\n2fa: b\n")
        assert doc.line_map == {"x-ref": 1, "2fa": 2}

    def test_mapper_ignores_keys_not_in_mapping(self) -> None:
        line_map = LineMapper().build("id: a\nversion: b\n", {"id"})
        assert line_map == {"id": 1}

    def test_mapper_keeps_first_candidate(self) -> None:
        line_map = LineMapper().build("id: a\nother: b\nid: c\n", {"id", "other"})
        assert line_map == {"id": 1, "other": 2}
