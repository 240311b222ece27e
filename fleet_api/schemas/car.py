"""
Fleet API — Car Schemas
========================

What:  API contract for the Car resource.
    CarCreate   → POST and PUT bodies (every field required)
    CarUpdate   → PATCH bodies (every field optional; omitted fields stay unchanged)
    CarResponse → stored record including its identifier
"""

import uuid
from typing import Optional

from pydantic import Field

from fleet_api.schemas.base import FleetSchema, Int32, Str32, Str50, Str64, Str100

CAR_EXAMPLE = {
    "driverId": "627622eaa1161789f49f277c",
    "make": "Honda",
    "model": "Civic",
    "number": "AX1234KA",
    "year": 2018,
    "status": "standard",
}


class CarBase(FleetSchema):
    driver_id: Str64 = Field(description="the driver's id (free text, not checked against drivers)")
    make: Str100 = Field(description="the car make")
    model: Str100 = Field(description="the car model")
    number: Str32 = Field(description="the car registration number")
    year: Int32 = Field(description="the year of production")
    status: Str50 = Field(description="status of the car, e.g. 'standard'")


class CarCreate(CarBase):
    model_config = {"json_schema_extra": {"example": CAR_EXAMPLE}}


class CarUpdate(FleetSchema):
    driver_id: Optional[Str64] = Field(default=None, description="the driver's id")
    make: Optional[Str100] = Field(default=None, description="the car make")
    model: Optional[Str100] = Field(default=None, description="the car model")
    number: Optional[Str32] = Field(default=None, description="the car registration number")
    year: Optional[Int32] = Field(default=None, description="the year of production")
    status: Optional[Str50] = Field(default=None, description="status of the car")

    model_config = {"json_schema_extra": {"example": {"status": "active"}}}


class CarResponse(CarBase):
    id: uuid.UUID = Field(description="the car's id")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {"id": "6f1c2b8e-3a8d-4a4e-9d57-0b6f7a1c2d3e", **CAR_EXAMPLE},
        },
    }
