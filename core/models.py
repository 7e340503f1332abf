"""Data shapes shared by the pattern engine.

Patterns, placements and collision entries are frozen; any change produces
a new value via ``model_copy(update=...)``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .ga import MAIN_MAX, MIDDLE_MAX, format_group_address, in_range

MiddleGroupPattern = Literal["same", "perType"]
SubGroupPattern = Literal["increment", "offset", "sequence"]
CategoryKey = Literal["switching", "dimming", "shading", "hvac"]
CategoryUsage = Literal["full", "basic", "none"]

# Traversal order used when flattening categories into a collision inventory
CATEGORY_ORDER: tuple[CategoryKey, ...] = ("switching", "dimming", "shading", "hvac")


# ---------------------------------------------------------------------------
# Example input
# ---------------------------------------------------------------------------


class ExampleAddress(BaseModel):
    """One object of the reference device, as entered by the user.

    Levels are deliberately unconstrained here; the analyzer checks them so
    it can report which object is wrong.
    """

    object_name: str = Field(default="", description="Free-text object label")
    main: int = Field(..., description="Main group (0-31)")
    middle: int = Field(..., description="Middle group (0-7)")
    sub: int = Field(..., description="Sub group (0-255)")
    dpt: str = Field(default="", description="Datapoint type, opaque to the engine")
    enabled: bool = True
    main_increment: int = Field(default=0, description="Main group delta per device/zone")
    middle_increment: int = Field(default=0, description="Middle group delta per device/zone")
    sub_increment: int = Field(default=0, description="Sub group delta per device/zone")


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------


class ExtraMainGroup(BaseModel):
    """Additional main/middle pair HVAC zones overflow into."""

    model_config = ConfigDict(frozen=True)

    main: int = Field(..., ge=0, le=MAIN_MAX)
    middle: int = Field(..., ge=0, le=MIDDLE_MAX)


class GroupPattern(BaseModel):
    """Addressing scheme inferred from one device's example addresses."""

    model_config = ConfigDict(frozen=True)

    fixed_main: int
    middle_group_pattern: MiddleGroupPattern
    middle_groups: list[int] | None = None
    sub_group_pattern: SubGroupPattern
    offset_value: int | None = None
    start_sub: int
    objects_per_device: int
    extra_main_groups: list[ExtraMainGroup] | None = None


# ---------------------------------------------------------------------------
# Generated addresses
# ---------------------------------------------------------------------------


class GroupAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    main: int
    middle: int
    sub: int

    def __str__(self) -> str:
        return format_group_address(self.main, self.middle, self.sub)

    @property
    def in_range(self) -> bool:
        return in_range(self.main, self.middle, self.sub)


class Placement(BaseModel):
    """A generated address plus whether a best-effort branch produced it."""

    model_config = ConfigDict(frozen=True)

    address: GroupAddress
    estimated: bool = False


# ---------------------------------------------------------------------------
# Collision inventory
# ---------------------------------------------------------------------------


class CollisionEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    main: int
    middle: int
    sub: int
    owner_label: str = ""


class CollisionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_duplicate: bool
    owner_label: str | None = None


class ExtraObject(BaseModel):
    """Object added to a category group beyond the analysed examples."""

    id: str = ""
    name: str = ""
    dpt: str = ""
    main: int
    middle: int
    sub: int
    main_increment: int = 0
    middle_increment: int = 0
    sub_increment: int = 0


class CategoryGroup(BaseModel):
    """One configured group within a category (e.g. "Switching 2")."""

    group_name: str | None = None
    enabled: CategoryUsage = "full"
    example_addresses: list[ExampleAddress] = Field(default_factory=list)
    extra_objects: list[ExtraObject] = Field(default_factory=list)
    pattern: GroupPattern | None = None


class Categories(BaseModel):
    switching: list[CategoryGroup] = Field(default_factory=list)
    dimming: list[CategoryGroup] = Field(default_factory=list)
    shading: list[CategoryGroup] = Field(default_factory=list)
    hvac: list[CategoryGroup] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Fixed (manually defined) addresses
# ---------------------------------------------------------------------------


class FixedSub(BaseModel):
    id: str = ""
    sub: int
    name: str = ""


class FixedMiddleGroup(BaseModel):
    id: str = ""
    middle: int
    name: str = ""
    subs: list[FixedSub] = Field(default_factory=list)


class FixedMainGroup(BaseModel):
    id: str = ""
    main: int
    name: str = ""
    middle_groups: list[FixedMiddleGroup] = Field(default_factory=list)


class InventoryExclusion(BaseModel):
    """Address to leave out of the inventory because it is being edited."""

    category: CategoryKey | None = None
    group_index: int | None = None
    address_index: int | None = None
    fixed_main_id: str | None = None
    fixed_middle_id: str | None = None
    fixed_sub_id: str | None = None
