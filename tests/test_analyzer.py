"""Unit tests for the pattern analyzer."""

from __future__ import annotations

import logging

import pytest

from core.analyzer import analyze_group_pattern, validate_increments
from core.errors import PatternValidationError
from core.models import ExampleAddress


def _examples(*triples):
    return [
        ExampleAddress(object_name=f"object {i}", main=m, middle=mi, sub=s)
        for i, (m, mi, s) in enumerate(triples, start=1)
    ]


def test_increment_pattern_same_middle(switch_examples):
    pattern = analyze_group_pattern(switch_examples)

    assert pattern.fixed_main == 1
    assert pattern.middle_group_pattern == "same"
    assert pattern.middle_groups is None
    assert pattern.sub_group_pattern == "increment"
    assert pattern.offset_value is None
    assert pattern.start_sub == 1
    assert pattern.objects_per_device == 2
    assert pattern.extra_main_groups is None


def test_offset_of_hundred():
    pattern = analyze_group_pattern(_examples((2, 3, 5), (2, 3, 105)))

    assert pattern.sub_group_pattern == "offset"
    assert pattern.offset_value == 100
    assert pattern.start_sub == 5


def test_offset_requires_all_candidates_equal():
    # 100 and 200 are both multiples of 100 but disagree
    pattern = analyze_group_pattern(_examples((2, 3, 5), (2, 3, 105), (2, 3, 205)))
    assert pattern.sub_group_pattern == "sequence"
    assert pattern.offset_value is None


def test_offset_ignores_non_hundred_differences():
    pattern = analyze_group_pattern(_examples((2, 0, 5), (2, 0, 8), (2, 0, 105)))
    assert pattern.sub_group_pattern == "offset"
    assert pattern.offset_value == 100


def test_irregular_subs_are_a_sequence():
    pattern = analyze_group_pattern(_examples((1, 1, 1), (1, 1, 4), (1, 1, 9)))
    assert pattern.sub_group_pattern == "sequence"
    assert pattern.start_sub == 1


def test_duplicate_subs_are_kept_and_not_sequential():
    pattern = analyze_group_pattern(_examples((1, 1, 0), (1, 2, 0)))
    assert pattern.sub_group_pattern == "sequence"
    assert pattern.start_sub == 0


def test_single_example_is_increment():
    pattern = analyze_group_pattern(_examples((3, 4, 17)))
    assert pattern.sub_group_pattern == "increment"
    assert pattern.start_sub == 17
    assert pattern.objects_per_device == 1


def test_unsorted_subs_are_sorted_first():
    pattern = analyze_group_pattern(_examples((1, 1, 3), (1, 1, 1), (1, 1, 2)))
    assert pattern.sub_group_pattern == "increment"
    assert pattern.start_sub == 1


def test_per_type_middle_groups_keep_first_seen_order():
    pattern = analyze_group_pattern(_examples((1, 4, 0), (1, 2, 1), (1, 4, 2), (1, 3, 3)))

    assert pattern.middle_group_pattern == "perType"
    assert pattern.middle_groups == [4, 2, 3]


def test_per_type_two_middles():
    pattern = analyze_group_pattern(_examples((1, 1, 0), (1, 2, 0)))
    assert pattern.middle_group_pattern == "perType"
    assert pattern.middle_groups == [1, 2]


def test_accepts_plain_dicts():
    pattern = analyze_group_pattern(
        [{"main": 5, "middle": 0, "sub": 10}, {"main": 5, "middle": 0, "sub": 11}]
    )
    assert pattern.fixed_main == 5
    assert pattern.sub_group_pattern == "increment"


def test_analysis_is_idempotent(switch_examples):
    assert analyze_group_pattern(switch_examples) == analyze_group_pattern(switch_examples)


def test_empty_input_rejected():
    with pytest.raises(PatternValidationError, match="No example addresses"):
        analyze_group_pattern([])


def test_main_out_of_range_names_object():
    with pytest.raises(PatternValidationError) as exc:
        analyze_group_pattern(
            [
                ExampleAddress(object_name="on/off", main=1, middle=1, sub=1),
                ExampleAddress(object_name="status", main=32, middle=1, sub=2),
            ]
        )
    message = str(exc.value)
    assert "Object 2 (status)" in message
    assert "Main group 32" in message


def test_all_range_violations_collected():
    with pytest.raises(PatternValidationError) as exc:
        analyze_group_pattern(
            [
                ExampleAddress(main=1, middle=8, sub=1),
                ExampleAddress(object_name="dim", main=1, middle=1, sub=300),
            ]
        )
    assert len(exc.value.errors) == 2
    assert "Object 1 (unknown): Middle group 8" in exc.value.errors[0]
    assert "Object 2 (dim): Sub group 300" in exc.value.errors[1]


def test_range_check_runs_before_main_check():
    with pytest.raises(PatternValidationError, match="Sub group -1"):
        analyze_group_pattern(_examples((1, 0, -1), (2, 0, 1)))


def test_mixed_main_groups_rejected():
    with pytest.raises(PatternValidationError) as exc:
        analyze_group_pattern(_examples((1, 1, 1), (2, 1, 2)))
    assert "1, 2" in str(exc.value)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        analyze_group_pattern([])


def test_increments_required_for_enabled_objects():
    examples = [
        ExampleAddress(object_name="on/off", main=1, middle=1, sub=1, sub_increment=1),
        ExampleAddress(object_name="status", main=1, middle=1, sub=2),
        ExampleAddress(main=1, middle=1, sub=3),
    ]
    with pytest.raises(PatternValidationError) as exc:
        validate_increments(examples)

    assert exc.value.errors == [
        "Object 2 (status): Fill in a main, middle or sub increment to generate further devices",
        "Object 3 (unknown): Fill in a main, middle or sub increment to generate further devices",
    ]


def test_increments_skip_disabled_objects():
    validate_increments(
        [
            {"main": 1, "middle": 1, "sub": 1, "middle_increment": 1},
            {"main": 1, "middle": 1, "sub": 2, "enabled": False},
        ]
    )


def test_analysis_logs_pattern(caplog, switch_examples):
    caplog.set_level(logging.DEBUG, logger="knxga.core.analyzer")
    analyze_group_pattern(switch_examples)
    assert "increment" in caplog.text
