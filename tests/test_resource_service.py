"""
Fleet API — Resource Service Unit Tests
========================================

What:  Tests for the CRUD contract in ResourceService.
How:   Most tests use a real DocumentStore over a temporary SQLite file; the
       error-translation tests use a mocked store (no database at all).

What we test:
    ✅ create → get round trip; unknown body fields are ignored
    ✅ BadRequestError for malformed ids, NotFoundError for unknown ids
    ✅ "zero records affected" on replace/merge/delete becomes NotFoundError
    ✅ merge changes only supplied fields; replace requires every required field
    ✅ filter returns an empty list (not an error) when nothing matches
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from fleet_api.exceptions import BadRequestError, NotFoundError, ValidationError
from fleet_api.registry import CARS, DRIVERS, VEHICLES
from fleet_api.schemas.car import CarCreate
from fleet_api.services.resource_service import ResourceService
from fleet_api.store import DocumentStore


def make_service(database, definition):
    store = DocumentStore(database, definition.model, retry_attempts=1)
    return ResourceService(definition, store)


@pytest.fixture
def cars(database):
    return make_service(database, CARS)


@pytest.fixture
def drivers(database):
    return make_service(database, DRIVERS)


@pytest.fixture
def vehicles(database):
    return make_service(database, VEHICLES)


class TestCreateAndRead:

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, drivers, driver_payload):
        created = await drivers.create(driver_payload)

        fetched = await drivers.get_by_id(str(created.id))

        assert fetched == created
        dumped = fetched.model_dump(by_alias=True, exclude={"id", "registration_date"})
        assert dumped == driver_payload

    @pytest.mark.asyncio
    async def test_create_accepts_schema_instance(self, cars, car_payload):
        created = await cars.create(CarCreate.model_validate(car_payload))

        assert created.driver_id == car_payload["driverId"]

    @pytest.mark.asyncio
    async def test_create_ignores_unknown_fields(self, vehicles, vehicle_payload):
        created = await vehicles.create({**vehicle_payload, "color": "red", "_id": "abc"})

        assert "color" not in created.model_dump(by_alias=True)
        assert isinstance(created.id, uuid.UUID)

    @pytest.mark.asyncio
    async def test_create_missing_required_field(self, cars, car_payload):
        del car_payload["year"]

        with pytest.raises(ValidationError) as exc_info:
            await cars.create(car_payload)

        assert exc_info.value.field == "year"

    @pytest.mark.asyncio
    async def test_create_wrong_type(self, vehicles, vehicle_payload):
        vehicle_payload["productionYear"] = "last year"

        with pytest.raises(ValidationError) as exc_info:
            await vehicles.create(vehicle_payload)

        assert exc_info.value.field == "productionYear"

    @pytest.mark.asyncio
    async def test_list_all(self, cars, car_payload):
        assert await cars.list_all() == []

        created = [await cars.create({**car_payload, "number": f"N{i}"}) for i in range(3)]
        listed = await cars.list_all()

        assert len(listed) == 3
        assert {car.id for car in listed} == {car.id for car in created}

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, cars):
        with pytest.raises(BadRequestError):
            await cars.get_by_id("not-a-uuid")

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, cars):
        with pytest.raises(NotFoundError) as exc_info:
            await cars.get_by_id(str(uuid.uuid4()))

        assert exc_info.value.context["resource"] == "car"


class TestFindByFilter:

    @pytest.mark.asyncio
    async def test_matches_by_alias(self, cars, car_payload):
        await cars.create(car_payload)
        await cars.create({**car_payload, "driverId": "someone-else"})

        matches = await cars.find_by_filter("driverId", car_payload["driverId"])

        assert len(matches) == 1
        assert matches[0].driver_id == car_payload["driverId"]

    @pytest.mark.asyncio
    async def test_no_match_is_empty_list(self, cars, car_payload):
        await cars.create(car_payload)

        assert await cars.find_by_filter("driverId", "nobody") == []

    @pytest.mark.asyncio
    async def test_value_coerced_to_field_type(self, cars, car_payload):
        await cars.create(car_payload)

        assert len(await cars.find_by_filter("year", "2018")) == 1

    @pytest.mark.asyncio
    async def test_unknown_field(self, cars):
        with pytest.raises(BadRequestError):
            await cars.find_by_filter("color", "red")

    @pytest.mark.asyncio
    async def test_blank_value(self, cars):
        with pytest.raises(BadRequestError):
            await cars.find_by_filter("driverId", "   ")

    @pytest.mark.asyncio
    async def test_uncoercible_value(self, cars):
        with pytest.raises(BadRequestError):
            await cars.find_by_filter("year", "twenty")


class TestReplaceAndMerge:

    @pytest.mark.asyncio
    async def test_merge_changes_only_supplied_fields(self, drivers, driver_payload):
        created = await drivers.create(driver_payload)

        merged = await drivers.merge(str(created.id), {"status": "X"})

        assert merged.status == "X"
        before = created.model_dump(exclude={"status"})
        after = merged.model_dump(exclude={"status"})
        assert after == before

    @pytest.mark.asyncio
    async def test_merge_empty_body_returns_record_unchanged(self, cars, car_payload):
        created = await cars.create(car_payload)

        assert await cars.merge(created.id, {}) == created

    @pytest.mark.asyncio
    async def test_merge_rejects_null_required_field(self, cars, car_payload):
        created = await cars.create(car_payload)

        with pytest.raises(ValidationError) as exc_info:
            await cars.merge(created.id, {"driverId": None})

        assert exc_info.value.field == "driverId"

    @pytest.mark.asyncio
    async def test_replace_overwrites_all_fields(self, vehicles, vehicle_payload):
        created = await vehicles.create(vehicle_payload)
        replacement = {**vehicle_payload, "owner": "Kate Ray", "productionYear": 2020}

        replaced = await vehicles.replace(str(created.id), replacement)

        assert replaced.id == created.id
        assert replaced.owner == "Kate Ray"
        assert replaced.production_year == 2020

    @pytest.mark.asyncio
    async def test_replace_requires_all_fields(self, vehicles, vehicle_payload):
        created = await vehicles.create(vehicle_payload)

        with pytest.raises(ValidationError):
            await vehicles.replace(str(created.id), {"owner": "Kate Ray"})

        assert (await vehicles.get_by_id(created.id)).owner == vehicle_payload["owner"]

    @pytest.mark.asyncio
    async def test_replace_and_merge_unknown_id(self, cars, car_payload):
        missing = str(uuid.uuid4())

        with pytest.raises(NotFoundError):
            await cars.replace(missing, car_payload)
        with pytest.raises(NotFoundError):
            await cars.merge(missing, {"status": "active"})

        assert await cars.list_all() == []


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_then_delete_again(self, drivers, driver_payload):
        created = await drivers.create(driver_payload)

        confirmation = await drivers.delete(str(created.id))

        assert confirmation.id == created.id
        with pytest.raises(NotFoundError):
            await drivers.get_by_id(created.id)
        with pytest.raises(NotFoundError):
            await drivers.delete(str(created.id))

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, drivers):
        with pytest.raises(BadRequestError):
            await drivers.delete("123")


class TestNoMatchTranslation:
    """Zero-affected results from the store must never look like success."""

    def setup_method(self):
        self.store = AsyncMock()
        self.store.update_by_id = AsyncMock(return_value=0)
        self.store.delete_by_id = AsyncMock(return_value=0)
        self.service = ResourceService(CARS, self.store)

    @pytest.mark.asyncio
    async def test_update_no_match(self, car_payload):
        with pytest.raises(NotFoundError):
            await self.service.replace(uuid.uuid4(), car_payload)
        self.store.update_by_id.assert_awaited_once()
        self.store.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_no_match(self):
        with pytest.raises(NotFoundError):
            await self.service.delete(uuid.uuid4())
        self.store.delete_by_id.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_malformed_id_never_reaches_store(self):
        with pytest.raises(BadRequestError):
            await self.service.delete("../etc/passwd")
        self.store.delete_by_id.assert_not_awaited()
