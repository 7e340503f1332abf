"""Collision checks and free-address suggestions."""

from fastapi import APIRouter, HTTPException

from core.collisions import build_inventory, find_collision, next_free_sub, used_main_groups
from core.ga import parse_group_address
from core.models import CollisionResult

from .models import CollisionCheckRequest, InventoryRequest, InventoryResponse, NextSubRequest

router = APIRouter(prefix="/api/v1/addresses", tags=["addresses"])


@router.post("/check", response_model=CollisionResult)
def check_address(body: CollisionCheckRequest):
    """Report whether the candidate address is already allocated."""
    candidate = body.candidate
    if isinstance(candidate, str):
        try:
            key = parse_group_address(candidate)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
    else:
        key = (candidate.main, candidate.middle, candidate.sub)
    return find_collision(key, body.inventory)


@router.post("/inventory", response_model=InventoryResponse)
def get_inventory(body: InventoryRequest):
    """Flatten category groups and fixed addresses into a collision inventory."""
    entries = build_inventory(body.categories, body.fixed_addresses, exclude=body.exclude)
    return InventoryResponse(
        entries=entries,
        used_main_groups=used_main_groups(body.categories),
    )


@router.post("/next-sub")
def get_next_sub_address(body: NextSubRequest):
    """Get the next available sub-group address for a main/middle group."""
    address = next_free_sub(body.inventory, body.main, body.middle)
    return {"next_address": str(address) if address else None}
