"""
Fleet API — API Routes Package
===============================

Route Inventory:
    - cars.py:      /api/cars      (CRUD + findByDriverId)
    - drivers.py:   /api/drivers   (CRUD)
    - vehicles.py:  /api/vehicles  (CRUD)
    - health.py:    GET /health, GET /

Design Principle:
    Routes are THIN: they declare the HTTP shape (paths, status codes, OpenAPI
    metadata) and delegate to a ResourceService. No business logic here.
"""
