"""
Fleet API — Shared Schema Configuration
========================================

What:  Base class for every resource schema, plus the bounded field types.
Why:   The JSON contract is camelCase (driverId, birthDate, productionYear) while
       Python attributes and storage columns are snake_case.
How:   An alias generator maps attribute → camelCase alias. `populate_by_name`
       also accepts snake_case input, and FastAPI serializes responses by alias.
       Unknown body fields are ignored, never rejected.

Bounded types:
    Columns are VARCHAR(n) and 32-bit INTEGER (see fleet_api/models). The same
    limits are declared here so an oversized value is rejected as a 400 by
    pydantic instead of failing inside the database driver.
"""

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints
from pydantic.alias_generators import to_camel

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
Str32 = Annotated[str, StringConstraints(max_length=32)]
Str50 = Annotated[str, StringConstraints(max_length=50)]
Str64 = Annotated[str, StringConstraints(max_length=64)]
Str100 = Annotated[str, StringConstraints(max_length=100)]
Str200 = Annotated[str, StringConstraints(max_length=200)]
Str255 = Annotated[str, StringConstraints(max_length=255)]


class FleetSchema(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }
