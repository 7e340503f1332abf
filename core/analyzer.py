"""Pattern analyzer: infers a GroupPattern from one device's example addresses.

The user fills in the addresses of a single reference device (e.g. "on/off"
and "on/off status" of one switch output). From those the analyzer decides:

  - the fixed main group shared by every object,
  - whether all objects share one middle group ("same") or each object keeps
    its own middle group across devices ("perType"),
  - how the sub group advances per device: +1 ("increment"), a constant
    stride ("offset"), or irregular ("sequence").
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .errors import PatternValidationError
from .ga import LEVEL_RANGES
from .models import ExampleAddress, GroupPattern

logger = logging.getLogger("knxga.core.analyzer")

_LEVEL_LABELS = {
    "main": "Main group",
    "middle": "Middle group",
    "sub": "Sub group",
}


def _unique(values: Iterable[int]) -> list[int]:
    """Distinct values in first-seen order."""
    return list(dict.fromkeys(values))


def _coerce(examples: Sequence[ExampleAddress | dict]) -> list[ExampleAddress]:
    return [
        ex if isinstance(ex, ExampleAddress) else ExampleAddress.model_validate(ex)
        for ex in examples
    ]


def validate_examples(examples: Sequence[ExampleAddress]) -> None:
    """Raise PatternValidationError if any example is outside the KNX ranges
    or the examples do not share one main group.

    All range violations are collected before raising; the main group check
    only runs once every address is in range.
    """
    if not examples:
        raise PatternValidationError("No example addresses given")

    errors = []
    for position, example in enumerate(examples, start=1):
        label = example.object_name or "unknown"
        for level, (low, high) in LEVEL_RANGES.items():
            value = getattr(example, level)
            if not low <= value <= high:
                errors.append(
                    f"Object {position} ({label}): {_LEVEL_LABELS[level]} {value} "
                    f"is invalid (must be between {low} and {high})"
                )
    if errors:
        raise PatternValidationError("; ".join(errors), errors)

    mains = _unique(ex.main for ex in examples)
    if len(mains) != 1:
        found = ", ".join(str(m) for m in mains)
        raise PatternValidationError(
            "Not all addresses share the same main group. "
            f"Found main groups: {found}. All objects must use the same main group."
        )


def validate_increments(examples: Sequence[ExampleAddress | dict]) -> None:
    """Raise PatternValidationError unless every enabled example has a non-zero
    main, middle or sub increment.

    Without one, further devices would repeat the example's address.
    """
    errors = []
    for position, example in enumerate(_coerce(examples), start=1):
        if not example.enabled:
            continue
        if example.main_increment == example.middle_increment == example.sub_increment == 0:
            label = example.object_name or "unknown"
            errors.append(
                f"Object {position} ({label}): Fill in a main, middle or sub increment "
                "to generate further devices"
            )
    if errors:
        raise PatternValidationError("; ".join(errors), errors)


def _classify_subs(subs: list[int]) -> tuple[str, int | None]:
    """Classify sorted sub groups → (sub_group_pattern, offset_value)."""
    sequential = all(b == a + 1 for a, b in zip(subs, subs[1:]))

    if sequential and len(subs) > 1:
        diff = subs[1] - subs[0]
        if diff == 1:
            return "increment", None
        return "offset", diff

    if len(subs) == 1:
        return "increment", None

    # Non-sequential: look for a status-style offset (e.g. 5, 105)
    first = subs[0]
    offsets = [s - first for s in subs[1:] if s - first > 0 and (s - first) % 100 == 0]
    if offsets and all(o == offsets[0] for o in offsets):
        return "offset", offsets[0]

    return "sequence", None


def analyze_group_pattern(examples: Sequence[ExampleAddress | dict]) -> GroupPattern:
    """Analyze example addresses for one device/zone and return its pattern.

    Args:
        examples: Ordered example addresses (ExampleAddress or plain dicts)

    Raises:
        PatternValidationError: on empty input, out-of-range levels, or
            examples that disagree on the main group.
    """
    examples = _coerce(examples)
    validate_examples(examples)

    fixed_main = examples[0].main

    middles = _unique(ex.middle for ex in examples)
    middle_group_pattern = "same" if len(middles) == 1 else "perType"

    subs = sorted(ex.sub for ex in examples)
    sub_group_pattern, offset_value = _classify_subs(subs)

    pattern = GroupPattern(
        fixed_main=fixed_main,
        middle_group_pattern=middle_group_pattern,
        middle_groups=middles if middle_group_pattern == "perType" else None,
        sub_group_pattern=sub_group_pattern,
        offset_value=offset_value,
        start_sub=subs[0],
        objects_per_device=len(examples),
    )
    logger.debug(
        "Analyzed %d example(s): main=%d middle=%s sub=%s offset=%s start_sub=%d",
        len(examples),
        fixed_main,
        middle_group_pattern,
        sub_group_pattern,
        offset_value,
        pattern.start_sub,
    )
    return pattern
