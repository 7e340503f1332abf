"""Teach-by-example group address engine."""

from .analyzer import analyze_group_pattern, validate_increments
from .collisions import build_inventory, find_collision, next_free_sub, used_main_groups
from .errors import PatternValidationError
from .generator import (
    generate_address,
    generate_addresses,
    generate_example_address,
    place_address,
)
from .zones import generate_zone_address, zone_capacity, zone_main_and_middle

__all__ = [
    "PatternValidationError",
    "analyze_group_pattern",
    "build_inventory",
    "find_collision",
    "generate_address",
    "generate_addresses",
    "generate_example_address",
    "generate_zone_address",
    "next_free_sub",
    "place_address",
    "used_main_groups",
    "validate_increments",
    "zone_capacity",
    "zone_main_and_middle",
]
