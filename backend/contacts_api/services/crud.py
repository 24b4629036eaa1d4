"""CRUD Orchestration — validate, persist, respond for any registered resource.

Invariants:
    - Stages run RECEIVED -> VALIDATED -> PERSISTED -> RESPONDED; a validation
      failure exits before any store call, a store failure exits after it
    - Exactly one logical persistence operation per request, always through
      SQLAlchemy bound parameters (no SQL built from strings)
    - import_records writes every row inside one transaction: all or none
    - Public methods never raise; each returns exactly one Outcome
    - Validation and not-found exits are logged at INFO; store failures at ERROR
      with the triggering input, and the client only sees "Database error"

Design Decisions:
    - ResourceDefinition carries everything resource-specific (model, schema,
      required fields, extra checks) so one service class serves any resource
    - Read-one maps zero rows to NOT_FOUND; read-all returns an empty list
    - Ids the store cannot hold are NOT_FOUND without a store call
"""

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from contacts_api.core.domain_types import (
    MAX_RECORD_ID, Operation, RecordId, RequestStage,
)
from contacts_api.core.envelope import Outcome, error_response, success_response
from contacts_api.core.errors import (
    ErrorContext, NotFoundError, PersistenceFailure, ValidationFailure,
)
from contacts_api.core.validation import (
    FieldCheck, sanitize_payload, validate_payload,
)
from contacts_api.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _addressable(record_id: RecordId) -> bool:
    return 1 <= record_id <= MAX_RECORD_ID


@dataclass(frozen=True)
class ResourceDefinition:
    """Everything the orchestration needs to know about one resource."""
    name: str
    plural: str
    model: type
    schema: type[BaseModel]
    required_fields: tuple[str, ...]
    writable_fields: tuple[str, ...]
    field_checks: tuple[FieldCheck, ...] = ()

    @property
    def label(self) -> str:
        return self.name.capitalize()


class CrudService:
    """Five-operation CRUD pattern plus atomic bulk import."""

    def __init__(self, store: DatabaseSessionManager, resource: ResourceDefinition):
        self._store = store
        self._resource = resource

    # ─── Operations ──────────────────────────────────────────────

    async def list_records(self, limit: int, offset: int = 0) -> Outcome:
        model = self._resource.model

        async def fetch(db: AsyncSession) -> list[dict]:
            result = await db.execute(
                select(model).order_by(model.id).limit(limit).offset(offset),
            )
            return [self._serialize(row) for row in result.scalars().all()]

        try:
            rows = await self._execute(Operation.LIST, fetch)
        except PersistenceFailure as exc:
            return self._fail(exc, Operation.LIST, payload={"limit": limit, "offset": offset})
        return success_response("success", rows)

    async def get_record(self, record_id: RecordId) -> Outcome:
        if not _addressable(record_id):
            return self._not_found(record_id, Operation.GET)

        async def fetch(db: AsyncSession) -> dict | None:
            row = await db.get(self._resource.model, record_id)
            return self._serialize(row) if row is not None else None

        try:
            data = await self._execute(Operation.GET, fetch)
        except PersistenceFailure as exc:
            return self._fail(exc, Operation.GET, record_id=record_id)
        if data is None:
            return self._not_found(record_id, Operation.GET)
        return success_response("success", data)

    async def create_record(self, payload: Any) -> Outcome:
        fields, failure = self._prepare(payload)
        if failure is not None:
            return self._reject(failure, Operation.CREATE)

        async def insert(db: AsyncSession) -> dict:
            row = self._resource.model(**fields)
            db.add(row)
            await db.commit()
            await db.refresh(row)
            return self._serialize(row)

        try:
            data = await self._execute(Operation.CREATE, insert)
        except PersistenceFailure as exc:
            return self._fail(exc, Operation.CREATE, payload=fields)
        logger.info(
            f"{self._resource.label} {data['id']} created",
            extra=self._extra(Operation.CREATE, RequestStage.PERSISTED, data["id"]),
        )
        return success_response(f"{self._resource.label} created", data, created=True)

    async def update_record(self, record_id: RecordId, payload: Any) -> Outcome:
        fields, failure = self._prepare(payload)
        if failure is not None:
            return self._reject(failure, Operation.UPDATE, record_id)
        if not _addressable(record_id):
            return self._not_found(record_id, Operation.UPDATE)

        async def update(db: AsyncSession) -> dict | None:
            row = await db.get(self._resource.model, record_id)
            if row is None:
                return None
            for name, value in fields.items():
                setattr(row, name, value)
            await db.commit()
            await db.refresh(row)
            return self._serialize(row)

        try:
            data = await self._execute(Operation.UPDATE, update)
        except PersistenceFailure as exc:
            return self._fail(exc, Operation.UPDATE, record_id=record_id, payload=fields)
        if data is None:
            return self._not_found(record_id, Operation.UPDATE)
        logger.info(
            f"{self._resource.label} {record_id} updated",
            extra=self._extra(Operation.UPDATE, RequestStage.PERSISTED, record_id),
        )
        return success_response(f"{self._resource.label} updated", data)

    async def delete_record(self, record_id: RecordId) -> Outcome:
        if not _addressable(record_id):
            return self._not_found(record_id, Operation.DELETE)

        model = self._resource.model

        async def remove(db: AsyncSession) -> int:
            result = await db.execute(delete(model).where(model.id == record_id))
            await db.commit()
            return result.rowcount

        try:
            deleted = await self._execute(Operation.DELETE, remove)
        except PersistenceFailure as exc:
            return self._fail(exc, Operation.DELETE, record_id=record_id)
        if not deleted:
            return self._not_found(record_id, Operation.DELETE)
        logger.info(
            f"{self._resource.label} {record_id} deleted",
            extra=self._extra(Operation.DELETE, RequestStage.PERSISTED, record_id),
        )
        return success_response(f"{self._resource.label} deleted")

    async def import_records(self, items: Any) -> Outcome:
        """Validate every row, then insert them all in one transaction."""
        if not isinstance(items, Sequence) or isinstance(items, (str, bytes)) or not items:
            return self._reject(
                ValidationFailure("items must be a non-empty list", field="items"),
                Operation.IMPORT,
            )
        batch: list[dict[str, Any]] = []
        for index, item in enumerate(items):
            fields, failure = self._prepare(item)
            if failure is not None:
                return self._reject(failure.for_row(index), Operation.IMPORT)
            batch.append(fields)

        async def insert_all(db: AsyncSession) -> list[int]:
            rows = [self._resource.model(**fields) for fields in batch]
            db.add_all(rows)
            await db.flush()
            return [row.id for row in rows]

        try:
            ids = await self._execute(Operation.IMPORT, insert_all, atomic=True)
        except PersistenceFailure as exc:
            return self._fail(exc, Operation.IMPORT, payload=batch)
        logger.info(
            f"Imported {len(ids)} {self._resource.plural}",
            extra=self._extra(Operation.IMPORT, RequestStage.PERSISTED),
        )
        return success_response(
            f"Imported {len(ids)} {self._resource.plural}",
            {"imported": len(ids), "ids": ids},
            created=True,
        )

    # ─── Stages ──────────────────────────────────────────────────

    def _prepare(self, payload: Any) -> tuple[dict[str, Any], ValidationFailure | None]:
        """RECEIVED -> VALIDATED: sanitize, validate, keep writable fields only."""
        if not isinstance(payload, Mapping):
            return {}, validate_payload(self._resource.required_fields, payload)
        clean = sanitize_payload(payload)
        failure = validate_payload(
            self._resource.required_fields, clean, self._resource.field_checks,
        )
        if failure is not None:
            return {}, failure
        fields = {
            name: (clean[name] if clean[name] != "" else None)
            for name in self._resource.writable_fields
            if name in clean
        }
        return fields, None

    async def _execute(
        self,
        operation: Operation,
        work: Callable[[AsyncSession], Awaitable[T]],
        atomic: bool = False,
    ) -> T:
        """VALIDATED -> PERSISTED: run one unit of store work in a scoped session."""
        scope = self._store.transaction if atomic else self._store.session
        try:
            async with scope(operation.value) as db:
                return await work(db)
        except PersistenceFailure:
            raise
        except Exception as e:
            raise PersistenceFailure(
                "Unexpected store error", operation.value, detail=repr(e),
            ) from e

    def _serialize(self, row: Any) -> dict[str, Any]:
        return self._resource.schema.model_validate(row).model_dump(
            mode="json", exclude_none=True,
        )

    # ─── Exits ───────────────────────────────────────────────────

    def _reject(
        self,
        failure: ValidationFailure,
        operation: Operation,
        record_id: RecordId | None = None,
    ) -> Outcome:
        logger.info(
            f"{self._resource.label} {operation.value} rejected: {failure.message}",
            extra=self._extra(operation, RequestStage.RECEIVED, record_id),
        )
        return error_response(failure)

    def _not_found(self, record_id: RecordId, operation: Operation) -> Outcome:
        exc = NotFoundError(
            self._resource.label, record_id,
            ErrorContext(resource=self._resource.name, operation=operation.value),
        )
        logger.info(exc.message, extra=exc.log_extra())
        return error_response(exc)

    def _fail(
        self,
        exc: PersistenceFailure,
        operation: Operation,
        record_id: RecordId | None = None,
        payload: Any = None,
    ) -> Outcome:
        exc.context.resource = self._resource.name
        exc.context.resource_id = record_id
        logger.error(
            f"{self._resource.label} {operation.value} failed: {exc.reason}: {exc.detail}",
            exc_info=exc,
            extra={
                **exc.log_extra(),
                "stage": RequestStage.VALIDATED.value,
                "payload": payload,
            },
        )
        return error_response(exc)

    def _extra(
        self,
        operation: Operation,
        stage: RequestStage,
        record_id: RecordId | None = None,
    ) -> dict[str, Any]:
        return {
            "resource": self._resource.name,
            "resource_id": record_id,
            "operation": operation.value,
            "stage": stage.value,
        }
