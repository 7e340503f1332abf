"""HVAC zone capacity and extra main group routes."""

from fastapi import APIRouter, HTTPException

from core.errors import PatternValidationError
from core.models import GroupPattern
from core.zones import add_extra_main_group, zone_capacity, zone_main_and_middle

from .models import (
    ExtraMainGroupRequest,
    ZoneCapacityRequest,
    ZoneCapacityResponse,
    ZonePlacement,
    ZonePlacementRequest,
    ZonePlacementResponse,
)

router = APIRouter(prefix="/api/v1/zones", tags=["zones"])


@router.post("/capacity", response_model=ZoneCapacityResponse)
def get_zone_capacity(body: ZoneCapacityRequest):
    """How many zones fit from start_middle plus all extra main groups."""
    return ZoneCapacityResponse(
        capacity=zone_capacity(body.start_middle, body.extra_main_groups),
        primary_capacity=zone_capacity(body.start_middle),
    )


@router.post("/extra-main-groups", response_model=GroupPattern)
def create_extra_main_group(body: ExtraMainGroupRequest):
    """Return the pattern with one more extra main group appended."""
    try:
        return add_extra_main_group(body.pattern)
    except PatternValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/placements", response_model=ZonePlacementResponse)
def get_zone_placements(body: ZonePlacementRequest):
    """Main/middle group of each zone, overflowing into extra main groups."""
    zones = []
    for zone_index in range(body.zone_count):
        placement = zone_main_and_middle(body.pattern, body.start_middle, zone_index)
        zones.append(
            ZonePlacement(
                zone_index=zone_index,
                main=placement.address.main,
                middle=placement.address.middle,
                estimated=placement.estimated,
            )
        )
    return ZonePlacementResponse(
        zones=zones,
        capacity=zone_capacity(body.start_middle, body.pattern.extra_main_groups or ()),
    )
