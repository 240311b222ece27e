"""
Fleet API — Services Layer
===========================

What:  Resource handlers sitting between routes (HTTP) and the document store.
Why:   Routes handle HTTP; services own the CRUD contract and error translation.

Service Inventory:
    - ResourceService: one instance per resource (car, driver, vehicle) per request,
      built around an injected DocumentStore
"""
