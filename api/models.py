"""Pydantic models for the group address engine API.

Defines request/response schemas; engine data shapes (patterns, example
addresses, inventory entries) are reused from ``core.models``.
"""

from pydantic import BaseModel, Field

from core.ga import MAIN_MAX, MIDDLE_MAX
from core.models import (
    Categories,
    CollisionEntry,
    ExampleAddress,
    ExtraMainGroup,
    FixedMainGroup,
    GroupPattern,
    InventoryExclusion,
)

# ---------------------------------------------------------------------------
# Group Address input
# ---------------------------------------------------------------------------


class AddressInput(BaseModel):
    main: int = Field(..., ge=0, le=MAIN_MAX)
    middle: int = Field(..., ge=0, le=MIDDLE_MAX)
    sub: int = Field(..., ge=0, le=255)


# Candidate may be "1/2/3" or {main, middle, sub}
CandidateValue = str | AddressInput


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------


class AnalyzeRequest(BaseModel):
    examples: list[ExampleAddress] = Field(
        ..., description="Example addresses of one reference device, in object order"
    )


class GenerateRequest(BaseModel):
    pattern: GroupPattern
    examples: list[ExampleAddress] | None = Field(
        default=None,
        description="Example addresses whose increments drive generation when given",
    )
    device_count: int = Field(default=1, ge=1, le=256, description="Devices to generate")
    start_device: int = Field(default=0, ge=0, description="Index of the first device")


class GeneratedAddress(BaseModel):
    object_index: int
    ga: str = Field(..., description="Group address (e.g., '1/2/3')")
    main: int
    middle: int
    sub: int
    estimated: bool = Field(default=False, description="Produced by a fallback branch")
    in_range: bool = True


class GeneratedDevice(BaseModel):
    device_index: int
    addresses: list[GeneratedAddress] = Field(default_factory=list)


class GenerateResponse(BaseModel):
    devices: list[GeneratedDevice] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Addresses / collisions
# ---------------------------------------------------------------------------


class CollisionCheckRequest(BaseModel):
    candidate: CandidateValue
    inventory: list[CollisionEntry] = Field(default_factory=list)


class InventoryRequest(BaseModel):
    categories: Categories = Field(default_factory=Categories)
    fixed_addresses: list[FixedMainGroup] = Field(default_factory=list)
    exclude: InventoryExclusion | None = None


class InventoryResponse(BaseModel):
    entries: list[CollisionEntry] = Field(default_factory=list)
    used_main_groups: list[int] = Field(default_factory=list)


class NextSubRequest(BaseModel):
    inventory: list[CollisionEntry] = Field(default_factory=list)
    main: int = Field(..., ge=0, le=MAIN_MAX)
    middle: int = Field(..., ge=0, le=MIDDLE_MAX)


# ---------------------------------------------------------------------------
# HVAC zones
# ---------------------------------------------------------------------------


class ZoneCapacityRequest(BaseModel):
    start_middle: int = Field(..., ge=0, le=MIDDLE_MAX)
    extra_main_groups: list[ExtraMainGroup] = Field(default_factory=list)


class ZoneCapacityResponse(BaseModel):
    capacity: int
    primary_capacity: int


class ExtraMainGroupRequest(BaseModel):
    pattern: GroupPattern


class ZonePlacementRequest(BaseModel):
    pattern: GroupPattern
    start_middle: int = Field(..., ge=0, le=MIDDLE_MAX)
    zone_count: int = Field(default=1, ge=1, le=256)


class ZonePlacement(BaseModel):
    zone_index: int
    main: int
    middle: int
    estimated: bool = False


class ZonePlacementResponse(BaseModel):
    zones: list[ZonePlacement] = Field(default_factory=list)
    capacity: int
