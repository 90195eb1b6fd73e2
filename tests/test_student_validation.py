"""Tests for record-level and bulk student validation.

Each test builds a raw record dict and asserts the ValidationResult or
BatchValidationResult produced by the engine.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.schemas.student import FieldConstraints, ValidatedStudentMark
from src.validation import (
    FIELD_RULES,
    validate_and_format_student_data,
    validate_student_data_array,
)
from src.validation.rules import validate_mark

USER_ID = "0b6f3a52-7c1d-4e8a-9b2f-5d4c3e2a1f00"
PROFILE_ID = "9a8b7c6d-5e4f-4a3b-a2c1-d0e9f8a7b6c5"


def _raw_record(**overrides) -> dict:
    """A complete, valid raw record as it arrives from the data store."""
    record = {
        "user_id": USER_ID,
        "profile_id": PROFILE_ID,
        "math_mark": "78.456",
        "math_type": "Mathematics",
        "math_level": "6",
        "home_language": "English",
        "home_language_mark": 71,
        "home_language_level": 6,
        "first_additional_language": "isiZulu",
        "first_additional_language_mark": 65.5,
        "first_additional_language_level": 5,
        "second_additional_language": None,
        "second_additional_language_mark": None,
        "second_additional_language_level": None,
        "subject1": "Physical Sciences",
        "subject1_mark": 74,
        "subject1_level": 6,
        "subject2": "Life Sciences",
        "subject2_mark": "69",
        "subject2_level": 5,
        "subject3": "",
        "subject3_mark": "",
        "subject3_level": "",
        "life_orientation_mark": 82,
        "life_orientation_level": 7,
        "average": 72.3,
        "aps_mark": "34",
    }
    record.update(overrides)
    return record


class TestValidRecord:
    @pytest.fixture()
    def result(self):
        return validate_and_format_student_data(_raw_record())

    def test_is_valid(self, result) -> None:
        assert result.is_valid is True
        assert result.errors == []
        assert result.warnings == []

    def test_formatted_data_typed(self, result) -> None:
        data = result.formatted_data
        assert isinstance(data, ValidatedStudentMark)
        assert data.math_mark == 78.46
        assert data.math_level == 6
        assert data.aps_mark == 34
        assert data.subject2_mark == 69
        assert data.user_id == USER_ID

    def test_empty_and_missing_are_null(self, result) -> None:
        data = result.formatted_data
        assert data.subject3 is None
        assert data.subject3_mark is None
        assert data.subject3_level is None
        # subject4 fields are absent from the raw record entirely
        assert data.subject4 is None
        assert data.subject4_level is None

    def test_formatted_data_frozen(self, result) -> None:
        with pytest.raises(ValidationError):
            result.formatted_data.aps_mark = 40


class TestRejectionLaw:
    @pytest.mark.parametrize("bad_mark", [101, -1])
    def test_out_of_range_mark_voids_record(self, bad_mark) -> None:
        result = validate_and_format_student_data(_raw_record(math_mark=bad_mark))
        assert result.is_valid is False
        assert result.formatted_data is None
        assert any(e.startswith("math_mark:") for e in result.errors)

    def test_fractional_level_rejected(self) -> None:
        result = validate_and_format_student_data(_raw_record(math_level=3.5))
        assert result.is_valid is False
        assert result.errors == ["math_level: Level 3.5 must be an integer"]

    def test_bad_uuid_rejected(self) -> None:
        result = validate_and_format_student_data(_raw_record(user_id="not-a-uuid"))
        assert result.errors == ['user_id: Invalid UUID format "not-a-uuid"']

    @pytest.mark.parametrize("raw_id", ["", "null", None])
    def test_null_like_uuid_accepted(self, raw_id) -> None:
        result = validate_and_format_student_data(_raw_record(profile_id=raw_id))
        assert result.is_valid is True
        assert result.formatted_data.profile_id is None


class TestCollectsEverything:
    def test_all_errors_reported(self) -> None:
        result = validate_and_format_student_data(
            _raw_record(math_mark=150, aps_mark=50, subject1_level="x", user_id="bad")
        )
        assert len(result.errors) == 4
        # Errors follow the rule table order
        assert [e.split(":")[0] for e in result.errors] == [
            "user_id",
            "math_mark",
            "subject1_level",
            "aps_mark",
        ]

    def test_warnings_kept_alongside_errors(self) -> None:
        result = validate_and_format_student_data(
            _raw_record(math_mark=150, subject1="S" * 300)
        )
        assert result.is_valid is False
        assert result.warnings == ["subject1: Text truncated to 255 characters"]

    def test_truncated_text_still_valid(self) -> None:
        result = validate_and_format_student_data(_raw_record(home_language="E" * 400))
        assert result.is_valid is True
        assert len(result.formatted_data.home_language) == 255
        assert len(result.warnings) == 1

    def test_empty_record_is_valid_and_all_null(self) -> None:
        result = validate_and_format_student_data({})
        assert result.is_valid is True
        assert result.formatted_data == ValidatedStudentMark()


class TestRuleTable:
    def test_covers_every_validated_field(self) -> None:
        keys = [rule.key for rule in FIELD_RULES]
        assert len(keys) == len(set(keys))
        assert set(keys) == set(ValidatedStudentMark.model_fields)

    def test_average_uses_mark_rule(self) -> None:
        rule = next(r for r in FIELD_RULES if r.key == "average")
        assert rule.rule is validate_mark


class TestContract:
    @pytest.mark.parametrize("raw", [None, "record", 42, [("math_mark", 50)]])
    def test_non_mapping_raises(self, raw) -> None:
        with pytest.raises(TypeError):
            validate_and_format_student_data(raw)


class TestAlternateConstraints:
    def test_wider_aps_scale(self) -> None:
        constraints = FieldConstraints(max_aps=50)
        result = validate_and_format_student_data(_raw_record(aps_mark=47), constraints)
        assert result.is_valid is True
        assert result.formatted_data.aps_mark == 47

    def test_shorter_text_limit(self) -> None:
        constraints = FieldConstraints(max_text_length=5)
        result = validate_and_format_student_data(_raw_record(math_type="Mathematics"), constraints)
        assert result.formatted_data.math_type == "Mathe"
        assert result.warnings == ["math_type: Text truncated to 5 characters"]


class TestBatchValidation:
    @pytest.mark.parametrize("bad_index", [0, 2, 4])
    def test_single_bad_record_isolated(self, bad_index) -> None:
        records = [_raw_record() for _ in range(5)]
        records[bad_index] = _raw_record(aps_mark=99)

        batch = validate_student_data_array(records)

        assert len(batch.valid_students) == 4
        assert len(batch.invalid_students) == 1
        invalid = batch.invalid_students[0]
        assert invalid.index == bad_index
        assert invalid.data == records[bad_index]
        assert invalid.errors == ["aps_mark: APS 99 must be between 0 and 42"]

    def test_valid_students_keep_input_order(self) -> None:
        records = [_raw_record(aps_mark=aps) for aps in (20, 43, 31, 25)]
        batch = validate_student_data_array(records)
        assert [s.aps_mark for s in batch.valid_students] == [20, 31, 25]

    def test_summary_counts_warnings_from_all_records(self) -> None:
        records = [
            _raw_record(subject1="A" * 300),
            _raw_record(subject2="B" * 300, math_mark=-5),
            _raw_record(),
        ]
        summary = validate_student_data_array(records).validation_summary
        assert summary.total == 3
        assert summary.valid == 2
        assert summary.invalid == 1
        assert summary.warnings == 2

    def test_empty_batch(self) -> None:
        batch = validate_student_data_array([])
        assert batch.valid_students == []
        assert batch.invalid_students == []
        assert batch.validation_summary.total == 0

    def test_accepts_generator(self) -> None:
        batch = validate_student_data_array(_raw_record(aps_mark=a) for a in (10, 20))
        assert batch.validation_summary.total == 2
        assert batch.validation_summary.valid == 2
