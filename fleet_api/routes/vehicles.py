"""
Fleet API — Vehicle Route Handlers
===================================

What:  CRUD endpoints under /api/vehicles. Same contract as cars, without a
       filter route.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from fleet_api.dependencies import get_vehicle_service
from fleet_api.schemas.common import DeleteResponse, ErrorResponse
from fleet_api.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleUpdate
from fleet_api.services.resource_service import ResourceService

router = APIRouter(prefix="/api/vehicles", tags=["Vehicle"])

_BAD_REQUEST = {"description": "Malformed id or invalid body", "model": ErrorResponse}
_NOT_FOUND = {"description": "Vehicle not found", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Server error", "model": ErrorResponse}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=VehicleResponse,
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="Creates a new vehicle",
)
async def create_vehicle(
    body: VehicleCreate,
    service: ResourceService = Depends(get_vehicle_service),
) -> VehicleResponse:
    return await service.create(body)


@router.get(
    "",
    response_model=List[VehicleResponse],
    responses={500: _SERVER_ERROR},
    summary="Returns all vehicles",
)
async def list_vehicles(
    service: ResourceService = Depends(get_vehicle_service),
) -> List[VehicleResponse]:
    return await service.list_all()


@router.get(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Returns a vehicle",
)
async def get_vehicle(
    vehicle_id: str = Path(description="the vehicle id (UUID)"),
    service: ResourceService = Depends(get_vehicle_service),
) -> VehicleResponse:
    return await service.get_by_id(vehicle_id)


@router.put(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Replaces a vehicle",
)
async def replace_vehicle(
    body: VehicleCreate,
    vehicle_id: str = Path(description="the vehicle id (UUID)"),
    service: ResourceService = Depends(get_vehicle_service),
) -> VehicleResponse:
    return await service.replace(vehicle_id, body)


@router.patch(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Updates some fields of a vehicle",
)
async def update_vehicle(
    body: VehicleUpdate,
    vehicle_id: str = Path(description="the vehicle id (UUID)"),
    service: ResourceService = Depends(get_vehicle_service),
) -> VehicleResponse:
    return await service.merge(vehicle_id, body)


@router.delete(
    "/{vehicle_id}",
    response_model=DeleteResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Deletes a vehicle",
)
async def delete_vehicle(
    vehicle_id: str = Path(description="the vehicle id (UUID)"),
    service: ResourceService = Depends(get_vehicle_service),
) -> DeleteResponse:
    return await service.delete(vehicle_id)
