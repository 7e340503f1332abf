"""Collision detection over the flattened address inventory.

The inventory is a plain list of CollisionEntry values assembled by the
caller from every category group and the fixed-address tree. It is a
snapshot: rebuild it after every change to the address set, leaving out the
address currently being edited.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .ga import SUB_MAX
from .models import (
    CATEGORY_ORDER,
    Categories,
    CategoryGroup,
    CollisionEntry,
    CollisionResult,
    FixedMainGroup,
    GroupAddress,
    InventoryExclusion,
)

logger = logging.getLogger("knxga.core.collisions")

CATEGORY_LABELS = {
    "switching": "Switching",
    "dimming": "Dimming",
    "shading": "Shading",
    "hvac": "HVAC",
}

FIXED_LABEL = "Fixed group addresses"

Candidate = GroupAddress | CollisionEntry | Sequence[int]


def _as_tuple(candidate: Candidate) -> tuple[int, ...]:
    if isinstance(candidate, (GroupAddress, CollisionEntry)):
        return candidate.main, candidate.middle, candidate.sub
    return tuple(candidate)


def find_collision(candidate: Candidate, inventory: Iterable[CollisionEntry]) -> CollisionResult:
    """Check whether ``candidate`` is already allocated in ``inventory``.

    0/0/0 means "not filled in yet" and never collides. Otherwise the first
    entry with the same main/middle/sub wins. Candidates are not range
    checked; one outside the KNX ranges simply matches nothing. Parse
    "m/m/s" text with ``core.ga.parse_group_address`` first.
    """
    key = _as_tuple(candidate)
    if key == (0, 0, 0):
        return CollisionResult(is_duplicate=False)

    for entry in inventory:
        if (entry.main, entry.middle, entry.sub) == key:
            return CollisionResult(is_duplicate=True, owner_label=entry.owner_label)
    return CollisionResult(is_duplicate=False)


# ---------------------------------------------------------------------------
# Inventory assembly
# ---------------------------------------------------------------------------


def _group_label(category: str, group: CategoryGroup, group_index: int) -> str:
    category_name = CATEGORY_LABELS[category]
    default_name = category_name if group_index == 0 else f"{category_name} {group_index + 1}"
    name = group.group_name or default_name
    # Stored default names are shown in their canonical form
    if name.lower() == default_name.lower():
        name = default_name
    return f"{category_name} - {name}"


def _with_object(label: str, object_name: str) -> str:
    return f"{label} - {object_name}" if object_name else label


def _category_entries(
    category: str,
    groups: Sequence[CategoryGroup],
    exclude: InventoryExclusion | None,
) -> list[CollisionEntry]:
    entries = []
    for group_index, group in enumerate(groups):
        if group.enabled == "none":
            continue
        label = _group_label(category, group, group_index)

        for address_index, addr in enumerate(group.example_addresses):
            if (
                exclude is not None
                and exclude.category == category
                and exclude.group_index == group_index
                and exclude.address_index == address_index
            ):
                continue
            if (addr.main, addr.middle, addr.sub) == (0, 0, 0):
                continue
            entries.append(
                CollisionEntry(
                    main=addr.main,
                    middle=addr.middle,
                    sub=addr.sub,
                    owner_label=_with_object(label, addr.object_name),
                )
            )

        for obj in group.extra_objects:
            if (obj.main, obj.middle, obj.sub) == (0, 0, 0):
                continue
            entries.append(
                CollisionEntry(
                    main=obj.main,
                    middle=obj.middle,
                    sub=obj.sub,
                    owner_label=_with_object(label, obj.name),
                )
            )
    return entries


def _fixed_entries(
    fixed_addresses: Sequence[FixedMainGroup],
    exclude: InventoryExclusion | None,
) -> list[CollisionEntry]:
    entries = []
    for main_group in fixed_addresses:
        main_name = main_group.name or f"Main group {main_group.main}"
        label = f"{FIXED_LABEL} - {main_name}"
        for middle_group in main_group.middle_groups:
            for sub in middle_group.subs:
                if (
                    exclude is not None
                    and exclude.fixed_main_id == main_group.id
                    and exclude.fixed_middle_id == middle_group.id
                    and exclude.fixed_sub_id == sub.id
                ):
                    continue
                entries.append(
                    CollisionEntry(
                        main=main_group.main,
                        middle=middle_group.middle,
                        sub=sub.sub,
                        owner_label=_with_object(label, sub.name),
                    )
                )
    return entries


def build_inventory(
    categories: Categories | None = None,
    fixed_addresses: Sequence[FixedMainGroup] = (),
    exclude: InventoryExclusion | None = None,
) -> list[CollisionEntry]:
    """Flatten every allocated address into a collision inventory.

    Order: categories (switching, dimming, shading, hvac) → groups in list
    order → example addresses then extra objects; followed by fixed main
    groups → middle groups → subs. Disabled groups and 0/0/0 placeholders
    are skipped.
    """
    entries: list[CollisionEntry] = []
    if categories is not None:
        for category in CATEGORY_ORDER:
            entries.extend(_category_entries(category, getattr(categories, category), exclude))
    entries.extend(_fixed_entries(fixed_addresses, exclude))
    logger.debug("Built collision inventory with %d entries", len(entries))
    return entries


def used_main_groups(categories: Categories) -> list[int]:
    """Main groups (> 0) claimed by any category group, sorted.

    Includes example addresses, extra objects and HVAC extra main groups.
    """
    used = set()
    for category in CATEGORY_ORDER:
        for group in getattr(categories, category):
            used.update(a.main for a in group.example_addresses if a.main > 0)
            used.update(o.main for o in group.extra_objects if o.main > 0)
            if group.pattern and group.pattern.extra_main_groups:
                used.update(g.main for g in group.pattern.extra_main_groups if g.main > 0)
    return sorted(used)


def next_free_sub(inventory: Iterable[CollisionEntry], main: int, middle: int) -> GroupAddress | None:
    """Lowest unused sub group under main/middle, or None if all 256 are taken."""
    used_subs = {e.sub for e in inventory if e.main == main and e.middle == middle}
    for sub in range(SUB_MAX + 1):
        if sub not in used_subs:
            return GroupAddress(main=main, middle=middle, sub=sub)
    return None
