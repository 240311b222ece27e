"""
Fleet API — Resource Service (CRUD Contract)
=============================================

What:  The uniform create/list/get/filter/replace/merge/delete contract shared by
       cars, drivers and vehicles.
Why:   Encapsulates the contract independent of HTTP. Routes stay thin and the
       same rules apply to every resource:
         - only schema fields are persisted; unknown body fields are ignored
         - "zero records affected" on replace/merge/delete is a 404, never a 200
         - a malformed identifier is a 400, an unknown one a 404
         - an empty filter result is a valid empty list, not a 404
How:   Each instance wraps one `ResourceDefinition` and one injected
       `DocumentStore`. Instances are cheap and built per request.

State machine (per record):
    Absent --create--> Active --replace/merge--> Active --delete--> Absent
    replace/merge/delete on Absent → NotFoundError
"""

import logging
import uuid
from typing import Annotated, Any, Dict, List, Mapping, Type, Union

import pydantic
from pydantic import BaseModel, TypeAdapter

from fleet_api.exceptions import BadRequestError, NotFoundError, ValidationError
from fleet_api.registry import ResourceDefinition
from fleet_api.schemas.common import DeleteResponse
from fleet_api.store import DocumentStore

logger = logging.getLogger(__name__)

Body = Union[BaseModel, Mapping[str, Any]]


class ResourceService:
    """
    Resource handler for one resource kind.

    Error Handling Strategy:
        The store already translates driver failures into ValidationError or
        PersistenceError; those propagate unchanged. This layer adds the
        contract-level errors: BadRequestError and NotFoundError.
    """

    def __init__(self, definition: ResourceDefinition, store: DocumentStore):
        self.definition = definition
        self.store = store

    @property
    def name(self) -> str:
        return self.definition.name

    # ── Create / Read ─────────────────────────────────────────────────────

    async def create(self, body: Body) -> BaseModel:
        """
        Persist a new record built from the schema fields of `body`.

        Raises:
            ValidationError: required field missing or mistyped (→ 400)
            PersistenceError: store failure (→ 500)
        """
        payload = self._validate(self.definition.create_schema, body)
        record = await self.store.insert(payload.model_dump())
        logger.info("Created %s %s", self.name, record.id)
        return self._to_response(record)

    async def list_all(self) -> List[BaseModel]:
        records = await self.store.find_all()
        return [self._to_response(record) for record in records]

    async def get_by_id(self, record_id: Union[str, uuid.UUID]) -> BaseModel:
        """
        Retrieve a single record.

        Raises:
            BadRequestError: `record_id` is not a well-formed identifier (→ 400)
            NotFoundError: no record with this identifier (→ 404)
        """
        key = self.parse_id(record_id)
        record = await self.store.find_by_id(key)
        if record is None:
            raise NotFoundError(resource=self.name, resource_id=str(key))
        return self._to_response(record)

    async def find_by_filter(self, field_name: str, value: Any) -> List[BaseModel]:
        """
        Return every record whose `field_name` equals `value` exactly.

        `field_name` may be the API alias ("driverId") or the attribute name
        ("driver_id"). String values are coerced to the field's declared type,
        so "2018" matches an integer year. No match is an empty list.

        Raises:
            BadRequestError: unknown field, blank value, or value not coercible
        """
        attribute = self.definition.resolve_field(field_name)
        if attribute is None:
            raise BadRequestError(
                message=f"'{field_name}' is not a filterable {self.name} field",
                context={"field": field_name},
            )
        if value is None or (isinstance(value, str) and not value.strip()):
            raise BadRequestError(
                message=f"A value is required to filter {self.definition.collection} by '{field_name}'",
                context={"field": field_name},
            )

        field = self.definition.create_schema.model_fields[attribute]
        # Keep the field's bounds so an out-of-range value never reaches the store
        annotation = Annotated[(field.annotation, *field.metadata)] if field.metadata else field.annotation
        try:
            typed_value = TypeAdapter(annotation).validate_python(value)
        except pydantic.ValidationError:
            raise BadRequestError(
                message=f"'{value}' is not a valid value for '{field_name}'",
                context={"field": field_name},
            )

        records = await self.store.find_by_equality(attribute, typed_value)
        logger.debug(
            "Filter %s by %s=%r matched %d record(s)",
            self.definition.collection, attribute, typed_value, len(records),
        )
        return [self._to_response(record) for record in records]

    # ── Update / Delete ───────────────────────────────────────────────────

    async def replace(self, record_id: Union[str, uuid.UUID], body: Body) -> BaseModel:
        """
        Overwrite every schema field of an existing record (PUT).

        `body` must carry all required fields, exactly as for create.
        """
        key = self.parse_id(record_id)
        payload = self._validate(self.definition.create_schema, body)
        affected = await self.store.update_by_id(key, payload.model_dump())
        if affected == 0:
            raise NotFoundError(resource=self.name, resource_id=str(key))
        return await self.get_by_id(key)

    async def merge(self, record_id: Union[str, uuid.UUID], body: Body) -> BaseModel:
        """
        Overwrite only the fields present in `body` (PATCH).

        Omitted fields keep their stored values. An explicit null for a required
        field is rejected, since the record would no longer be valid.
        """
        key = self.parse_id(record_id)
        payload = self._validate(self.definition.update_schema, body)
        changes: Dict[str, Any] = payload.model_dump(exclude_unset=True)

        cleared = sorted(
            name for name, value in changes.items()
            if value is None and name in self.definition.required_fields
        )
        if cleared:
            alias = self.definition.alias_for(cleared[0])
            raise ValidationError(
                message=f"Field '{alias}' is required and cannot be null",
                field=alias,
            )

        affected = await self.store.update_by_id(key, changes)
        if affected == 0:
            raise NotFoundError(resource=self.name, resource_id=str(key))
        return await self.get_by_id(key)

    async def delete(self, record_id: Union[str, uuid.UUID]) -> DeleteResponse:
        key = self.parse_id(record_id)
        affected = await self.store.delete_by_id(key)
        if affected == 0:
            raise NotFoundError(resource=self.name, resource_id=str(key))
        return DeleteResponse(id=key, message=f"{self.name.capitalize()} deleted successfully")

    # ── Helpers ───────────────────────────────────────────────────────────

    def parse_id(self, record_id: Union[str, uuid.UUID]) -> uuid.UUID:
        if isinstance(record_id, uuid.UUID):
            return record_id
        try:
            return uuid.UUID(str(record_id).strip())
        except ValueError:
            raise BadRequestError(
                message=f"'{record_id}' is not a valid {self.name} id",
                context={"resource": self.name, "resource_id": str(record_id)},
            )

    def _validate(self, schema: Type[BaseModel], body: Body) -> BaseModel:
        if isinstance(body, schema):
            return body
        if isinstance(body, BaseModel):
            body = body.model_dump(exclude_unset=True)
        try:
            return schema.model_validate(body)
        except pydantic.ValidationError as e:
            raise ValidationError.from_errors(e.errors())

    def _to_response(self, record: Any) -> BaseModel:
        return self.definition.response_schema.model_validate(record)
