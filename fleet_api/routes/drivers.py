"""
Fleet API — Driver Route Handlers
==================================

What:  CRUD endpoints under /api/drivers. Same contract as cars, without a
       filter route.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from fleet_api.dependencies import get_driver_service
from fleet_api.schemas.common import DeleteResponse, ErrorResponse
from fleet_api.schemas.driver import DriverCreate, DriverResponse, DriverUpdate
from fleet_api.services.resource_service import ResourceService

router = APIRouter(prefix="/api/drivers", tags=["Driver"])

_BAD_REQUEST = {"description": "Malformed id or invalid body", "model": ErrorResponse}
_NOT_FOUND = {"description": "Driver not found", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Server error", "model": ErrorResponse}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=DriverResponse,
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="Adds a new driver",
)
async def create_driver(
    body: DriverCreate,
    service: ResourceService = Depends(get_driver_service),
) -> DriverResponse:
    return await service.create(body)


@router.get(
    "",
    response_model=List[DriverResponse],
    responses={500: _SERVER_ERROR},
    summary="Returns all drivers",
)
async def list_drivers(
    service: ResourceService = Depends(get_driver_service),
) -> List[DriverResponse]:
    return await service.list_all()


@router.get(
    "/{driver_id}",
    response_model=DriverResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Returns a driver",
)
async def get_driver(
    driver_id: str = Path(description="the driver id (UUID)"),
    service: ResourceService = Depends(get_driver_service),
) -> DriverResponse:
    return await service.get_by_id(driver_id)


@router.put(
    "/{driver_id}",
    response_model=DriverResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Replaces a driver",
)
async def replace_driver(
    body: DriverCreate,
    driver_id: str = Path(description="the driver id (UUID)"),
    service: ResourceService = Depends(get_driver_service),
) -> DriverResponse:
    return await service.replace(driver_id, body)


@router.patch(
    "/{driver_id}",
    response_model=DriverResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Updates some fields of a driver",
)
async def update_driver(
    body: DriverUpdate,
    driver_id: str = Path(description="the driver id (UUID)"),
    service: ResourceService = Depends(get_driver_service),
) -> DriverResponse:
    return await service.merge(driver_id, body)


@router.delete(
    "/{driver_id}",
    response_model=DeleteResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Deletes a driver",
)
async def delete_driver(
    driver_id: str = Path(description="the driver id (UUID)"),
    service: ResourceService = Depends(get_driver_service),
) -> DeleteResponse:
    return await service.delete(driver_id)
