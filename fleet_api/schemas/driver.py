"""
Fleet API — Driver Schemas
===========================

Dates are free-form strings ("23.10.1996") and are stored exactly as sent.
`registrationDate` is optional; every other field is required on create/replace.
"""

import uuid
from typing import Optional

from pydantic import Field

from fleet_api.schemas.base import FleetSchema, Int32, Str32, Str50, Str100, Str200, Str255

DRIVER_EXAMPLE = {
    "name": "Alex Ray",
    "birthDate": "23.10.1996",
    "address": "Green Street",
    "city": "Kharkiv",
    "rating": 10,
    "status": "active",
    "registrationDate": "12.01.2022",
}


class DriverBase(FleetSchema):
    name: Str200 = Field(description="the driver's name")
    birth_date: Str32 = Field(description="date of the driver's birth")
    address: Str255 = Field(description="the address")
    city: Str100 = Field(description="the city")
    rating: Int32 = Field(description="the driver's rating")
    status: Str50 = Field(description="the driver's status, e.g. 'active'")
    registration_date: Optional[Str32] = Field(
        default=None, description="date of the driver's registration"
    )


class DriverCreate(DriverBase):
    model_config = {"json_schema_extra": {"example": DRIVER_EXAMPLE}}


class DriverUpdate(FleetSchema):
    name: Optional[Str200] = None
    birth_date: Optional[Str32] = None
    address: Optional[Str255] = None
    city: Optional[Str100] = None
    rating: Optional[Int32] = None
    status: Optional[Str50] = None
    registration_date: Optional[Str32] = None

    model_config = {"json_schema_extra": {"example": {"rating": 9, "city": "Kyiv"}}}


class DriverResponse(DriverBase):
    id: uuid.UUID = Field(description="the driver's id")

    model_config = {"from_attributes": True}
