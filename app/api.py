"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import DeviceView, RepairCheckResponse, StatusCode
from services.repair_check import RepairCheckService, build_default_service

router = APIRouter()


def get_service() -> RepairCheckService:
    return build_default_service()


@router.get(
    "/devices",
    response_model=list[DeviceView],
    summary="List every device known to the directory.",
)
def list_devices(
    service: RepairCheckService = Depends(get_service),
) -> list[DeviceView]:
    return service.list_devices()


@router.get(
    "/devices/{device_id}/repair-check",
    response_model=RepairCheckResponse,
    summary="Report a device together with the current weather at its position.",
)
def repair_check(
    device_id: str,
    service: RepairCheckService = Depends(get_service),
) -> RepairCheckResponse:
    code, result = service.check_repair_feasibility(device_id)
    if code is StatusCode.device_not_found or result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Device {device_id!r} not found.",
        )
    return RepairCheckResponse(status=code, result=result)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
