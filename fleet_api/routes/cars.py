"""
Fleet API — Car Route Handlers
===============================

What:  CRUD endpoints under /api/cars plus the by-driver lookup.
How:   Each handler delegates to the car ResourceService; errors raised there
       are turned into JSON by the global exception handlers.

Route Inventory:
    POST   /api/cars                           → 201 created car
    GET    /api/cars                           → 200 all cars
    GET    /api/cars/findByDriverId/{driverId} → 200 the driver's cars (maybe empty)
    GET    /api/cars/{id}                      → 200 car | 400 | 404
    PUT    /api/cars/{id}                      → 200 replaced car | 400 | 404
    PATCH  /api/cars/{id}                      → 200 merged car | 400 | 404
    DELETE /api/cars/{id}                      → 200 confirmation | 400 | 404
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from fleet_api.dependencies import get_car_service
from fleet_api.schemas.car import CarCreate, CarResponse, CarUpdate
from fleet_api.schemas.common import DeleteResponse, ErrorResponse
from fleet_api.services.resource_service import ResourceService

router = APIRouter(prefix="/api/cars", tags=["Car"])

_BAD_REQUEST = {"description": "Malformed id or invalid body", "model": ErrorResponse}
_NOT_FOUND = {"description": "Car not found", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Server error", "model": ErrorResponse}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CarResponse,
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="Creates a new car",
)
async def create_car(
    body: CarCreate,
    service: ResourceService = Depends(get_car_service),
) -> CarResponse:
    return await service.create(body)


@router.get(
    "",
    response_model=List[CarResponse],
    responses={500: _SERVER_ERROR},
    summary="Returns all cars",
)
async def list_cars(service: ResourceService = Depends(get_car_service)) -> List[CarResponse]:
    return await service.list_all()


@router.get(
    "/findByDriverId/{driver_id}",
    response_model=List[CarResponse],
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="Returns a driver's cars",
    description=(
        "Returns every car whose driverId equals the given value exactly. "
        "A driver without cars yields an empty array, not a 404."
    ),
)
async def find_cars_by_driver(
    driver_id: str = Path(description="the driver id"),
    service: ResourceService = Depends(get_car_service),
) -> List[CarResponse]:
    return await service.find_by_filter("driverId", driver_id)


@router.get(
    "/{car_id}",
    response_model=CarResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Returns a car by car id",
)
async def get_car(
    car_id: str = Path(description="the car id (UUID)"),
    service: ResourceService = Depends(get_car_service),
) -> CarResponse:
    return await service.get_by_id(car_id)


@router.put(
    "/{car_id}",
    response_model=CarResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Replaces a car",
    description="Overwrites every field of the car. All required fields must be supplied.",
)
async def replace_car(
    body: CarCreate,
    car_id: str = Path(description="the car id (UUID)"),
    service: ResourceService = Depends(get_car_service),
) -> CarResponse:
    return await service.replace(car_id, body)


@router.patch(
    "/{car_id}",
    response_model=CarResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Updates some fields of a car",
    description="Overwrites only the supplied fields; omitted fields keep their values.",
)
async def update_car(
    body: CarUpdate,
    car_id: str = Path(description="the car id (UUID)"),
    service: ResourceService = Depends(get_car_service),
) -> CarResponse:
    return await service.merge(car_id, body)


@router.delete(
    "/{car_id}",
    response_model=DeleteResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Deletes a car",
)
async def delete_car(
    car_id: str = Path(description="the car id (UUID)"),
    service: ResourceService = Depends(get_car_service),
) -> DeleteResponse:
    return await service.delete(car_id)
