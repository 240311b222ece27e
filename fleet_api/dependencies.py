"""
Fleet API — FastAPI Dependencies
=================================

What:  Builds a ResourceService for the current request.
Why:   The Database lives on `app.state` (one per application), so handlers get
       their store through dependency injection instead of a global connection.
       Tests can swap the database by building the app with other settings, or
       override these dependencies with `app.dependency_overrides`.
"""

from typing import Callable

from fastapi import Request

from fleet_api.registry import CARS, DRIVERS, VEHICLES, ResourceDefinition
from fleet_api.services.resource_service import ResourceService
from fleet_api.store import DocumentStore


def build_service(request: Request, definition: ResourceDefinition) -> ResourceService:
    settings = request.app.state.settings
    store = DocumentStore(
        request.app.state.database,
        definition.model,
        retry_attempts=settings.store_retry_attempts,
        retry_min_wait=settings.store_retry_min_wait,
        retry_max_wait=settings.store_retry_max_wait,
    )
    return ResourceService(definition, store)


def _service_dependency(definition: ResourceDefinition) -> Callable[[Request], ResourceService]:
    def dependency(request: Request) -> ResourceService:
        return build_service(request, definition)

    dependency.__name__ = f"get_{definition.name}_service"
    return dependency


get_car_service = _service_dependency(CARS)
get_driver_service = _service_dependency(DRIVERS)
get_vehicle_service = _service_dependency(VEHICLES)
