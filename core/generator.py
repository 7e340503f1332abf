"""Address generator: replays a GroupPattern for further devices/zones."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .models import ExampleAddress, GroupAddress, GroupPattern, Placement

logger = logging.getLogger("knxga.core.generator")

DEFAULT_MIDDLE = 1
DEFAULT_OFFSET = 100


def _middle_for(pattern: GroupPattern, object_index: int) -> tuple[int, bool]:
    """Return (middle, estimated) for an object of the device."""
    groups = pattern.middle_groups
    if pattern.middle_group_pattern == "same":
        if groups:
            return groups[0], False
        return DEFAULT_MIDDLE, True

    if groups and object_index < len(groups):
        return groups[object_index], False
    if groups:
        return groups[0], True
    return DEFAULT_MIDDLE + object_index, True


def _sub_for(pattern: GroupPattern, device_index: int) -> tuple[int, bool]:
    """Return (sub, estimated) for a device index."""
    if pattern.sub_group_pattern == "increment":
        return pattern.start_sub + device_index, False
    if pattern.sub_group_pattern == "offset":
        offset = pattern.offset_value if pattern.offset_value is not None else DEFAULT_OFFSET
        return pattern.start_sub + device_index * offset, False
    # "sequence": the irregular example sequence is not replayed, +1 per device
    return pattern.start_sub + device_index, True


def place_address(pattern: GroupPattern, object_index: int, device_index: int) -> Placement:
    """Generate the address of one object of one device.

    Args:
        pattern: Analyzed pattern
        object_index: Object within the device (0-based)
        device_index: Device/zone ordinal (0-based)

    Returns:
        Placement whose ``estimated`` flag is set when a fallback branch was
        used instead of data recorded in the pattern. Levels are not clamped;
        use ``GroupAddress.in_range`` to check them.
    """
    middle, middle_estimated = _middle_for(pattern, object_index)
    sub, sub_estimated = _sub_for(pattern, device_index)
    address = GroupAddress(main=pattern.fixed_main, middle=middle, sub=sub)
    estimated = middle_estimated or sub_estimated
    if estimated:
        logger.debug(
            "Estimated placement %s for object %d, device %d (%s/%s)",
            address,
            object_index,
            device_index,
            pattern.middle_group_pattern,
            pattern.sub_group_pattern,
        )
    return Placement(address=address, estimated=estimated)


def generate_address(pattern: GroupPattern, object_index: int, device_index: int) -> GroupAddress:
    """Generate {main, middle, sub} for one object of one device."""
    return place_address(pattern, object_index, device_index).address


def generate_device_placements(pattern: GroupPattern, device_index: int) -> list[Placement]:
    """Placements for every object of a single device."""
    return [
        place_address(pattern, object_index, device_index)
        for object_index in range(pattern.objects_per_device)
    ]


def generate_device_addresses(pattern: GroupPattern, device_index: int) -> list[GroupAddress]:
    """Addresses for every object of a single device."""
    return [p.address for p in generate_device_placements(pattern, device_index)]


def generate_placements(
    pattern: GroupPattern, device_count: int, start_device: int = 0
) -> list[list[Placement]]:
    """Placements for ``device_count`` consecutive devices, one list per device."""
    return [
        generate_device_placements(pattern, device_index)
        for device_index in range(start_device, start_device + device_count)
    ]


def generate_addresses(
    pattern: GroupPattern, device_count: int, start_device: int = 0
) -> list[list[GroupAddress]]:
    """Addresses for ``device_count`` consecutive devices, one list per device."""
    return [
        [p.address for p in placements]
        for placements in generate_placements(pattern, device_count, start_device)
    ]


# ---------------------------------------------------------------------------
# Example-driven generation
# ---------------------------------------------------------------------------


def _base_middle(pattern: GroupPattern, example: ExampleAddress, object_index: int) -> int:
    groups = pattern.middle_groups
    if pattern.middle_group_pattern == "same":
        return groups[0] if groups else example.middle
    if groups and object_index < len(groups):
        return groups[object_index]
    return example.middle


def generate_example_address(
    pattern: GroupPattern, example: ExampleAddress, object_index: int, device_index: int
) -> Placement:
    """Address of one object of a further device, stepped by the example's increments.

    Main and middle start from the example (the middle from the pattern when
    it recorded one) and advance by ``main_increment``/``middle_increment``
    per device. The sub advances by ``sub_increment`` when set, otherwise it
    follows the pattern's sub group rule.
    """
    main = example.main + example.main_increment * device_index
    middle = _base_middle(pattern, example, object_index) + example.middle_increment * device_index
    if example.sub_increment > 0:
        sub, estimated = example.sub + example.sub_increment * device_index, False
    else:
        sub, estimated = _sub_for(pattern, device_index)

    address = GroupAddress(main=main, middle=middle, sub=sub)
    if estimated:
        logger.debug(
            "Estimated sub for %s, object %d, device %d", address, object_index, device_index
        )
    return Placement(address=address, estimated=estimated)


def generate_example_placements(
    pattern: GroupPattern, examples: Sequence[ExampleAddress], device_index: int
) -> list[Placement]:
    """Placements for every example object of a single device."""
    return [
        generate_example_address(pattern, example, object_index, device_index)
        for object_index, example in enumerate(examples)
    ]
