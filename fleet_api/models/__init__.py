"""
Fleet API — ORM Models
=======================

Importing this package registers every table with `Base.metadata`
(used by Database.create_all() and by Alembic autogenerate).
"""

from fleet_api.models.car import Car
from fleet_api.models.driver import Driver
from fleet_api.models.vehicle import Vehicle

__all__ = ["Car", "Driver", "Vehicle"]
