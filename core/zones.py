"""HVAC zone overflow: spreading zones over middle groups and extra main groups.

With a middle increment of 1 every HVAC zone gets its own middle group. A
main group only has middle groups 0-7, so zones that do not fit overflow into
the extra main/middle pairs stored on the pattern.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from .errors import PatternValidationError
from .ga import MAIN_MAX, MIDDLE_GROUP_COUNT, SUB_MAX, in_range
from .generator import DEFAULT_OFFSET
from .models import ExampleAddress, ExtraMainGroup, GroupAddress, GroupPattern, Placement

logger = logging.getLogger("knxga.core.zones")

# Middle group a freshly added extra main group starts at
EXTRA_GROUP_START_MIDDLE = 1


def _capacity_from(middle: int) -> int:
    return max(0, MIDDLE_GROUP_COUNT - middle)


def _middle_of(group: ExtraMainGroup | Mapping) -> int:
    if isinstance(group, Mapping):
        return group["middle"]
    return group.middle


def zone_capacity(start_middle: int, extra_main_groups: Iterable[ExtraMainGroup | Mapping] = ()) -> int:
    """Number of zones that fit in the primary main group plus all extra groups.

    Informational only; nothing stops a caller from generating more zones.
    """
    total = _capacity_from(start_middle)
    for group in extra_main_groups or ():
        total += _capacity_from(_middle_of(group))
    return total


def zone_main_and_middle(pattern: GroupPattern, start_middle: int, zone_index: int) -> Placement:
    """Main/middle of a zone when every zone takes its own middle group.

    Zones fill the primary main group from ``start_middle`` up to 7, then each
    extra main group in order from its own middle up to 7. Past the total
    capacity the middle group wraps inside the primary main group and the
    placement is marked estimated.
    """
    remaining = zone_index
    primary = _capacity_from(start_middle)
    if remaining < primary:
        return _zone_placement(pattern.fixed_main, start_middle + remaining, estimated=False)
    remaining -= primary

    for group in pattern.extra_main_groups or ():
        capacity = _capacity_from(group.middle)
        if remaining < capacity:
            return _zone_placement(group.main, group.middle + remaining, estimated=False)
        remaining -= capacity

    middle = (start_middle + zone_index) % MIDDLE_GROUP_COUNT
    logger.debug(
        "Zone %d exceeds capacity %d, wrapping to %d/%d",
        zone_index,
        zone_capacity(start_middle, pattern.extra_main_groups or ()),
        pattern.fixed_main,
        middle,
    )
    return _zone_placement(pattern.fixed_main, middle, estimated=True)


def _zone_placement(main: int, middle: int, estimated: bool) -> Placement:
    return Placement(address=GroupAddress(main=main, middle=middle, sub=0), estimated=estimated)


def is_zone_per_middle_group(examples: Sequence[ExampleAddress]) -> bool:
    """True when the first example steps one middle group per zone."""
    return bool(examples) and examples[0].middle_increment == 1


def generate_zone_address(
    pattern: GroupPattern,
    example: ExampleAddress,
    object_index: int,
    zone_index: int,
    start_middle: int | None = None,
    zone_per_middle_group: bool | None = None,
) -> Placement:
    """Address of one object of an HVAC zone.

    With a middle increment of 1 (``zone_per_middle_group``, taken from the
    example when not given) every zone gets its own middle group: main and
    middle come from ``zone_main_and_middle`` and an example sitting above
    ``start_middle`` keeps its distance from it. Otherwise main and middle
    step by the example's ``main_increment``/``middle_increment`` per zone.

    The sub uses the example's own sub increment when set. Without one it is
    ``start_sub + object_index`` in every zone, except for an "offset"
    pattern in shared-middle mode, which spaces objects by the offset, and a
    "sequence" pattern there, which keeps the example's sub (estimated).
    Out-of-range results are not clamped, only marked estimated.
    """
    if zone_per_middle_group is None:
        zone_per_middle_group = example.middle_increment == 1

    estimated = False
    if zone_per_middle_group:
        if start_middle is None:
            start_middle = example.middle
        zone = zone_main_and_middle(pattern, start_middle, zone_index)
        main = zone.address.main
        middle = zone.address.middle + (example.middle - start_middle)
        estimated = zone.estimated
    else:
        main = example.main + example.main_increment * zone_index
        middle = example.middle + example.middle_increment * zone_index

    if example.sub_increment > 0:
        sub = example.sub + example.sub_increment * zone_index
    elif zone_per_middle_group or pattern.sub_group_pattern == "increment":
        sub = pattern.start_sub + object_index
    elif pattern.sub_group_pattern == "offset":
        offset = pattern.offset_value if pattern.offset_value is not None else DEFAULT_OFFSET
        sub = pattern.start_sub + object_index * offset
    else:
        sub = example.sub
        estimated = True

    address = GroupAddress(main=main, middle=middle, sub=sub)
    estimated = estimated or not in_range(address.main, address.middle, address.sub)
    if sub > SUB_MAX:
        logger.debug("Sub %d exceeds %d for zone %d, object %d", sub, SUB_MAX, zone_index, object_index)
    return Placement(address=address, estimated=estimated)


# ---------------------------------------------------------------------------
# Extra main group editing
# ---------------------------------------------------------------------------


def _check_unique(groups: list[ExtraMainGroup]) -> None:
    seen = set()
    for group in groups:
        key = (group.main, group.middle)
        if key in seen:
            raise PatternValidationError(
                f"The combination {group.main}/{group.middle} already exists. "
                "Every main/middle combination must be unique."
            )
        seen.add(key)


def with_extra_main_groups(pattern: GroupPattern, groups: Iterable[ExtraMainGroup | Mapping]) -> GroupPattern:
    """Return a copy of ``pattern`` with the given extra main groups."""
    groups = [g if isinstance(g, ExtraMainGroup) else ExtraMainGroup.model_validate(g) for g in groups]
    _check_unique(groups)
    return pattern.model_copy(update={"extra_main_groups": groups or None})


def add_extra_main_group(pattern: GroupPattern) -> GroupPattern:
    """Append the next extra main group (highest main + 1, middle 1)."""
    existing = list(pattern.extra_main_groups or ())
    if existing:
        next_main = max(g.main for g in existing) + 1
    else:
        next_main = pattern.fixed_main + 1
    next_main = max(0, min(MAIN_MAX, next_main))

    group = ExtraMainGroup(main=next_main, middle=EXTRA_GROUP_START_MIDDLE)
    return with_extra_main_groups(pattern, [*existing, group])


def set_extra_main_group(
    pattern: GroupPattern, index: int, main: int | None = None, middle: int | None = None
) -> GroupPattern:
    """Change main and/or middle of the extra group at ``index``."""
    groups = list(pattern.extra_main_groups or ())
    current = groups[index]
    groups[index] = ExtraMainGroup(
        main=current.main if main is None else main,
        middle=current.middle if middle is None else middle,
    )
    return with_extra_main_groups(pattern, groups)


def remove_extra_main_group(pattern: GroupPattern, index: int) -> GroupPattern:
    """Drop the extra group at ``index``; the field resets to None when empty."""
    groups = [g for i, g in enumerate(pattern.extra_main_groups or ()) if i != index]
    return with_extra_main_groups(pattern, groups)
