"""Pattern analysis and address generation routes."""

from fastapi import APIRouter, HTTPException

from core.analyzer import analyze_group_pattern, validate_increments
from core.errors import PatternValidationError
from core.generator import generate_example_placements, generate_placements
from core.models import GroupPattern

from .models import (
    AnalyzeRequest,
    GeneratedAddress,
    GeneratedDevice,
    GenerateRequest,
    GenerateResponse,
)

router = APIRouter(prefix="/api/v1/patterns", tags=["patterns"])


@router.post("/analyze", response_model=GroupPattern)
def analyze(body: AnalyzeRequest):
    """Infer the addressing pattern from one device's example addresses."""
    try:
        return analyze_group_pattern(body.examples)
    except PatternValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/generate", response_model=GenerateResponse)
def generate(body: GenerateRequest):
    """Generate addresses for a run of devices from an analyzed pattern.

    With examples in the body each object steps by its own increments;
    without them the pattern alone decides.
    """
    device_indices = range(body.start_device, body.start_device + body.device_count)
    if body.examples:
        try:
            validate_increments(body.examples)
        except PatternValidationError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        runs = [generate_example_placements(body.pattern, body.examples, i) for i in device_indices]
    else:
        runs = generate_placements(body.pattern, body.device_count, body.start_device)

    devices = []
    for device_index, placements in zip(device_indices, runs):
        devices.append(
            GeneratedDevice(
                device_index=device_index,
                addresses=[
                    GeneratedAddress(
                        object_index=object_index,
                        ga=str(p.address),
                        main=p.address.main,
                        middle=p.address.middle,
                        sub=p.address.sub,
                        estimated=p.estimated,
                        in_range=p.address.in_range,
                    )
                    for object_index, p in enumerate(placements)
                ],
            )
        )
    return GenerateResponse(devices=devices)
