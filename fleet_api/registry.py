"""
Fleet API — Resource Schema Registry
=====================================

What:  One `ResourceDefinition` per CRUD-managed resource (car, driver, vehicle).
Why:   The three resources share an identical contract; only their storage model,
       schemas and names differ. Services and routes are parameterized by a
       definition instead of being written three times.
Who:   Read by the resource services (field mapping, required fields) and by the
       route dependencies that build a service per request.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Type

from pydantic import BaseModel

from fleet_api.database import Base
from fleet_api.models import Car, Driver, Vehicle
from fleet_api.schemas.car import CarCreate, CarResponse, CarUpdate
from fleet_api.schemas.driver import DriverCreate, DriverResponse, DriverUpdate
from fleet_api.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleUpdate


@dataclass(frozen=True)
class ResourceDefinition:
    """
    Everything needed to serve one resource.

    Attributes:
        name:             Singular name used in messages ("car")
        collection:       Plural name used in paths and table names ("cars")
        model:            SQLAlchemy model (storage shape)
        create_schema:    Body schema for create/replace (required fields enforced)
        update_schema:    Body schema for merge (every field optional)
        response_schema:  Serialized record, including `id`
    """

    name: str
    collection: str
    model: Type[Base]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    response_schema: Type[BaseModel]

    @property
    def required_fields(self) -> FrozenSet[str]:
        """Attribute names a create/replace body must carry."""
        return frozenset(
            name for name, field in self.create_schema.model_fields.items() if field.is_required()
        )

    def resolve_field(self, field_name: str) -> Optional[str]:
        """
        Map an API field name (camelCase alias) or attribute name to the attribute name.

        Returns None for unknown fields and for `id`, which is not filterable.
        """
        for name, field in self.create_schema.model_fields.items():
            if field_name in (name, field.alias):
                return name
        return None

    def alias_for(self, attribute: str) -> str:
        field = self.create_schema.model_fields.get(attribute)
        return field.alias if field is not None and field.alias else attribute


CARS = ResourceDefinition(
    name="car",
    collection="cars",
    model=Car,
    create_schema=CarCreate,
    update_schema=CarUpdate,
    response_schema=CarResponse,
)

DRIVERS = ResourceDefinition(
    name="driver",
    collection="drivers",
    model=Driver,
    create_schema=DriverCreate,
    update_schema=DriverUpdate,
    response_schema=DriverResponse,
)

VEHICLES = ResourceDefinition(
    name="vehicle",
    collection="vehicles",
    model=Vehicle,
    create_schema=VehicleCreate,
    update_schema=VehicleUpdate,
    response_schema=VehicleResponse,
)
