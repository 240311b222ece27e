"""
Fleet API — HTTP Endpoint Tests
================================

What:  End-to-end tests through the FastAPI app (HTTPX + ASGITransport) against
       a temporary SQLite database.

What we test:
    ✅ The driver lifecycle scenario: POST 201 → GET 200 → DELETE 200 → GET 404
    ✅ Status codes of every route for valid, invalid, malformed and unknown ids
    ✅ The JSON error envelope on every failure (including framework errors)
    ✅ OpenAPI documents the API-key scheme; the header is never required
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from fleet_api.dependencies import get_car_service
from fleet_api.exceptions import PersistenceError
from fleet_api.registry import CARS
from fleet_api.services.resource_service import ResourceService


def assert_error(response, status_code, error):
    assert response.status_code == status_code
    body = response.json()
    assert body["code"] == status_code
    assert body["error"] == error
    assert isinstance(body["message"], str) and body["message"]
    assert "request_id" in body
    return body


class TestDriverScenario:

    @pytest.mark.asyncio
    async def test_create_get_delete_get(self, test_client, driver_payload):
        created = await test_client.post("/api/drivers", json=driver_payload)
        assert created.status_code == 201
        body = created.json()
        driver_id = body["id"]
        uuid.UUID(driver_id)
        for field, value in driver_payload.items():
            assert body[field] == value

        fetched = await test_client.get(f"/api/drivers/{driver_id}")
        assert fetched.status_code == 200
        assert fetched.json() == body

        deleted = await test_client.delete(f"/api/drivers/{driver_id}")
        assert deleted.status_code == 200
        assert deleted.json()["id"] == driver_id

        gone = await test_client.get(f"/api/drivers/{driver_id}")
        assert_error(gone, 404, "not_found")

    @pytest.mark.asyncio
    async def test_patch_rating_beyond_int32_is_400(self, test_client, driver_payload):
        created = (await test_client.post("/api/drivers", json=driver_payload)).json()

        response = await test_client.patch(f"/api/drivers/{created['id']}", json={"rating": 10**20})

        body = assert_error(response, 400, "validation_error")
        assert body["details"]["field"] == "rating"
        assert (await test_client.get(f"/api/drivers/{created['id']}")).json() == created


class TestCars:

    @pytest.mark.asyncio
    async def test_create_returns_camel_case_record(self, test_client, car_payload):
        response = await test_client.post("/api/cars", json=car_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["driverId"] == car_payload["driverId"]
        assert "driver_id" not in body

    @pytest.mark.asyncio
    async def test_create_missing_field_is_400(self, test_client, car_payload):
        del car_payload["make"]

        response = await test_client.post("/api/cars", json=car_payload)

        body = assert_error(response, 400, "validation_error")
        assert body["details"]["field"] == "make"

    @pytest.mark.asyncio
    async def test_create_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/cars", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert_error(response, 400, "validation_error")

    @pytest.mark.asyncio
    async def test_list_all(self, test_client, car_payload):
        empty = await test_client.get("/api/cars")
        assert empty.status_code == 200
        assert empty.json() == []

        for number in ("AA0001AA", "AA0002AA"):
            await test_client.post("/api/cars", json={**car_payload, "number": number})

        listed = await test_client.get("/api/cars")
        assert listed.status_code == 200
        assert sorted(car["number"] for car in listed.json()) == ["AA0001AA", "AA0002AA"]

    @pytest.mark.asyncio
    async def test_find_by_driver_id(self, test_client, car_payload):
        await test_client.post("/api/cars", json=car_payload)
        await test_client.post("/api/cars", json={**car_payload, "driverId": "other"})

        response = await test_client.get(f"/api/cars/findByDriverId/{car_payload['driverId']}")

        assert response.status_code == 200
        assert [car["driverId"] for car in response.json()] == [car_payload["driverId"]]

    @pytest.mark.asyncio
    async def test_find_by_driver_id_without_cars_is_empty_200(self, test_client):
        response = await test_client.get("/api/cars/findByDriverId/nobody")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_get_malformed_id_is_400(self, test_client):
        response = await test_client.get("/api/cars/627622eaa1161789f49f277c")

        assert_error(response, 400, "bad_request")

    @pytest.mark.asyncio
    async def test_patch_changes_only_status(self, test_client, car_payload):
        created = (await test_client.post("/api/cars", json=car_payload)).json()

        response = await test_client.patch(f"/api/cars/{created['id']}", json={"status": "active"})

        assert response.status_code == 200
        assert response.json() == {**created, "status": "active"}

    @pytest.mark.asyncio
    async def test_put_requires_every_field(self, test_client, car_payload):
        created = (await test_client.post("/api/cars", json=car_payload)).json()

        response = await test_client.put(f"/api/cars/{created['id']}", json={"status": "active"})

        assert_error(response, 400, "validation_error")

    @pytest.mark.asyncio
    async def test_put_replaces_record(self, test_client, car_payload):
        created = (await test_client.post("/api/cars", json=car_payload)).json()
        replacement = {**car_payload, "make": "Toyota", "model": "Corolla", "year": 2021}

        response = await test_client.put(f"/api/cars/{created['id']}", json=replacement)

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], **replacement}

    @pytest.mark.asyncio
    async def test_unknown_id_is_404_for_every_operation(self, test_client, car_payload):
        missing = str(uuid.uuid4())

        assert_error(await test_client.get(f"/api/cars/{missing}"), 404, "not_found")
        assert_error(await test_client.put(f"/api/cars/{missing}", json=car_payload), 404, "not_found")
        assert_error(
            await test_client.patch(f"/api/cars/{missing}", json={"status": "active"}), 404, "not_found"
        )
        assert_error(await test_client.delete(f"/api/cars/{missing}"), 404, "not_found")

    @pytest.mark.asyncio
    async def test_second_delete_is_404(self, test_client, car_payload):
        created = (await test_client.post("/api/cars", json=car_payload)).json()

        first = await test_client.delete(f"/api/cars/{created['id']}")
        second = await test_client.delete(f"/api/cars/{created['id']}")

        assert first.status_code == 200
        assert_error(second, 404, "not_found")

    @pytest.mark.asyncio
    async def test_year_beyond_int32_is_400(self, test_client, car_payload):
        response = await test_client.post("/api/cars", json={**car_payload, "year": 2**63})

        body = assert_error(response, 400, "validation_error")
        assert body["details"]["field"] == "year"
        assert (await test_client.get("/api/cars")).json() == []

    @pytest.mark.asyncio
    async def test_oversized_driver_id_is_400(self, test_client, car_payload):
        response = await test_client.post("/api/cars", json={**car_payload, "driverId": "d" * 65})

        body = assert_error(response, 400, "validation_error")
        assert body["details"]["field"] == "driverId"

    @pytest.mark.asyncio
    async def test_longest_driver_id_is_accepted(self, test_client, car_payload):
        response = await test_client.post("/api/cars", json={**car_payload, "driverId": "d" * 64})

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_find_by_driver_id_oversized_is_400(self, test_client):
        response = await test_client.get(f"/api/cars/findByDriverId/{'d' * 65}")

        assert_error(response, 400, "bad_request")


class TestVehicles:

    @pytest.mark.asyncio
    async def test_crud(self, test_client, vehicle_payload):
        created = await test_client.post("/api/vehicles", json=vehicle_payload)
        assert created.status_code == 201
        vehicle_id = created.json()["id"]

        patched = await test_client.patch(f"/api/vehicles/{vehicle_id}", json={"owner": "Kate Ray"})
        assert patched.status_code == 200
        assert patched.json()["owner"] == "Kate Ray"
        assert patched.json()["productionYear"] == vehicle_payload["productionYear"]

        listed = await test_client.get("/api/vehicles")
        assert [vehicle["id"] for vehicle in listed.json()] == [vehicle_id]

        assert (await test_client.delete(f"/api/vehicles/{vehicle_id}")).status_code == 200
        assert (await test_client.get("/api/vehicles")).json() == []

    @pytest.mark.asyncio
    async def test_wrong_type_is_400(self, test_client, vehicle_payload):
        vehicle_payload["productionYear"] = "unknown"

        response = await test_client.post("/api/vehicles", json=vehicle_payload)

        body = assert_error(response, 400, "validation_error")
        assert body["details"]["field"] == "productionYear"


class TestErrorsAndAmbient:

    @pytest.mark.asyncio
    async def test_store_failure_is_generic_500(self, app, test_client):
        store = AsyncMock()
        store.find_all = AsyncMock(
            side_effect=PersistenceError(context={"table": "cars", "error_type": "OperationalError"})
        )
        app.dependency_overrides[get_car_service] = lambda: ResourceService(CARS, store)

        response = await test_client.get("/api/cars")

        body = assert_error(response, 500, "server_error")
        assert body["details"] is None
        assert "OperationalError" not in response.text

    @pytest.mark.asyncio
    async def test_unknown_route_is_json_404(self, test_client):
        response = await test_client.get("/api/trucks")

        assert_error(response, 404, "not_found")

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/cars", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"

    @pytest.mark.asyncio
    async def test_api_key_is_documented_not_enforced(self, test_client):
        schema = (await test_client.get("/openapi.json")).json()

        scheme = schema["components"]["securitySchemes"]["app_id"]
        assert scheme == {**scheme, "type": "apiKey", "in": "header", "name": "appid"}
        assert "/api/cars/findByDriverId/{driver_id}" in schema["paths"]
        assert (await test_client.get("/api/drivers")).status_code == 200

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_root_welcome(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert "Welcome" in response.json()["message"]
