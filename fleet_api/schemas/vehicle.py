"""
Fleet API — Vehicle Schemas
============================
"""

import uuid
from typing import Optional

from pydantic import Field

from fleet_api.schemas.base import FleetSchema, Int32, Str32, Str50, Str100, Str200

VEHICLE_EXAMPLE = {
    "category": "standard",
    "brand": "honda",
    "number": "AX1234KA",
    "productionYear": 2018,
    "owner": "Alan Ray",
}


class VehicleBase(FleetSchema):
    category: Str50 = Field(description="the vehicle class")
    brand: Str100 = Field(description="the vehicle brand")
    number: Str32 = Field(description="the vehicle number")
    production_year: Int32 = Field(description="the vehicle year of production")
    owner: Str200 = Field(description="the vehicle's owner")


class VehicleCreate(VehicleBase):
    model_config = {"json_schema_extra": {"example": VEHICLE_EXAMPLE}}


class VehicleUpdate(FleetSchema):
    category: Optional[Str50] = None
    brand: Optional[Str100] = None
    number: Optional[Str32] = None
    production_year: Optional[Int32] = None
    owner: Optional[Str200] = None


class VehicleResponse(VehicleBase):
    id: uuid.UUID = Field(description="the vehicle's id")

    model_config = {"from_attributes": True}
