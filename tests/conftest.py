"""Pytest configuration and shared fixtures for the group address engine tests."""

from __future__ import annotations

import os
import sys

import pytest

_TESTS_DIR = os.path.dirname(__file__)
_PROJECT_ROOT = os.path.abspath(os.path.join(_TESTS_DIR, ".."))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)


@pytest.fixture
def switch_examples():
    """Reference switch output: on/off and status one sub apart."""
    from core.models import ExampleAddress

    return [
        ExampleAddress(object_name="on/off", main=1, middle=1, sub=1, dpt="DPT1.001"),
        ExampleAddress(object_name="on/off status", main=1, middle=1, sub=2, dpt="DPT1.002"),
    ]


@pytest.fixture
def hvac_pattern():
    """HVAC pattern in main group 4 with zones starting at middle group 5."""
    from core.models import GroupPattern

    return GroupPattern(
        fixed_main=4,
        middle_group_pattern="same",
        sub_group_pattern="increment",
        start_sub=1,
        objects_per_device=2,
    )


@pytest.fixture
def categories():
    """Switching and HVAC groups plus a disabled shading group."""
    from core.models import Categories

    return Categories.model_validate(
        {
            "switching": [
                {
                    "group_name": "Switching",
                    "example_addresses": [
                        {"object_name": "on/off", "main": 1, "middle": 1, "sub": 1},
                        {"object_name": "on/off status", "main": 1, "middle": 2, "sub": 1},
                    ],
                },
                {
                    "example_addresses": [
                        {"object_name": "on/off", "main": 6, "middle": 0, "sub": 1},
                    ],
                    "extra_objects": [
                        {"id": "x1", "name": "lock", "main": 6, "middle": 0, "sub": 50},
                    ],
                },
            ],
            "shading": [
                {
                    "enabled": "none",
                    "example_addresses": [
                        {"object_name": "up/down", "main": 2, "middle": 0, "sub": 1},
                    ],
                }
            ],
            "hvac": [
                {
                    "example_addresses": [
                        {"object_name": "setpoint", "main": 4, "middle": 0, "sub": 0},
                        {"object_name": "actual", "main": 4, "middle": 0, "sub": 1},
                    ],
                    "pattern": {
                        "fixed_main": 4,
                        "middle_group_pattern": "same",
                        "sub_group_pattern": "increment",
                        "start_sub": 0,
                        "objects_per_device": 2,
                        "extra_main_groups": [{"main": 5, "middle": 1}],
                    },
                }
            ],
        }
    )


@pytest.fixture
def fixed_addresses():
    """Manually defined central/scene addresses."""
    from core.models import FixedMainGroup

    return [
        FixedMainGroup.model_validate(
            {
                "id": "m0",
                "main": 0,
                "name": "Central",
                "middle_groups": [
                    {
                        "id": "mid0",
                        "middle": 0,
                        "name": "General",
                        "subs": [
                            {"id": "s1", "sub": 1, "name": "all off"},
                            {"id": "s2", "sub": 2, "name": "day/night"},
                        ],
                    }
                ],
            }
        ),
        FixedMainGroup.model_validate(
            {
                "id": "m7",
                "main": 7,
                "middle_groups": [
                    {"id": "mid1", "middle": 1, "subs": [{"id": "s9", "sub": 9, "name": "scene 1"}]}
                ],
            }
        ),
    ]


@pytest.fixture
def app():
    """Create a FastAPI test app."""
    from api.app import create_app

    return create_app({"api": {"host": "127.0.0.1", "port": 0}})


@pytest.fixture
async def client(app):
    """Create an AsyncClient for HTTP testing against the ASGI app."""
    import httpx

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield client


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on the asyncio backend."""
    return "asyncio"
