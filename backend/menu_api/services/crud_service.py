"""
Menu API — CRUD Service (Generic Resource Protocol)
===================================================

What:  The one implementation of list / get / create / partial update /
       delete, parameterized by a ResourceDefinition.
How:   Validate (pure, before any storage call) → build a SQLAlchemy
       statement from the descriptor → execute on the injected AsyncSession
       → return read models. Failures are raised as application exceptions
       and turned into envelopes by the handlers in main.py.
Who:   One instance per resource, created by the router factory.

Protocol:
    ┌──────────┐   ┌────────────┐   ┌──────────────┐   ┌──────────────┐
    │  Route   │──▶│ Validator  │──▶│  Statement   │──▶│ AsyncSession │
    │ (raw in) │   │ id + body  │   │ (descriptor) │   │  (executor)  │
    └──────────┘   └────────────┘   └──────────────┘   └──────────────┘

    list    SELECT cols, labels FROM t LEFT JOIN ... ORDER BY t.id DESC
    get     same projection WHERE t.id = :id        0 rows → NotFoundError
    create  INSERT, then re-read with the get projection
    update  UPDATE t SET <present fields> WHERE id   0 rows → NotFoundError
    delete  reference check, DELETE WHERE id         0 rows → NotFoundError

Error Handling Strategy:
    ValidationError / EmptyUpdateError are raised before the session is used.
    Anything raised by the session is rolled back, logged with context and
    re-raised as DatabaseError carrying the resource's generic message.
    Nothing is retried.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy import delete, func, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased
from sqlalchemy.sql import Select

from menu_api.exceptions import (
    ConflictError,
    DatabaseError,
    EmptyUpdateError,
    NotFoundError,
)
from menu_api.resources import ResourceDefinition
from menu_api.schemas.menu import INT_ID_MAX
from menu_api.validation import validate_body, validate_id

logger = logging.getLogger(__name__)

# Errors that mean "the query executor failed"
STORAGE_ERRORS = (SQLAlchemyError, OSError)


class CrudService:
    """
    Stateless CRUD engine for one resource.

    The session is passed to every call; the service holds only the
    descriptor and the projection built from it.
    """

    def __init__(self, resource: ResourceDefinition):
        self.resource = resource
        self.model = resource.model
        self._projection = self._build_projection()

    # ── Statement building ────────────────────────────────────────────────

    def _build_projection(self) -> Select:
        """
        SELECT <persisted columns>, <join labels> FROM <table> [LEFT JOIN ...].

        Outer joins keep a row visible even if its related row is missing.
        """
        model = self.model
        selected = [getattr(model, name) for name in self.resource.columns]
        joins = []
        for join in self.resource.display_joins:
            target = aliased(join.target, name=f"{join.alias}_label")
            selected.append(getattr(target, join.label_column).label(join.alias))
            joins.append((target, getattr(model, join.fk_field) == target.id))

        stmt = select(*selected).select_from(model)
        for target, onclause in joins:
            stmt = stmt.outerjoin(target, onclause)
        return stmt

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Keep only allow-listed columns and apply coercions.

        Column names come from the descriptor, never from the request keys.
        """
        coercions = self.resource.coercions
        values = {}
        for name in self.resource.writable_fields:
            # Absent means "leave as is" on update; never written as NULL
            if name not in data:
                continue
            value = data[name]
            # An explicit null only survives validation on nullable columns;
            # it is written as-is, coercions apply to real values only
            if value is not None and name in coercions:
                value = coercions[name](value)
            values[name] = value
        return values

    def _present(self, row: RowMapping) -> BaseModel:
        return self.resource.read_schema.model_validate(dict(row))

    def _resolve_id(self, raw_id: Any) -> int:
        """
        Validate the path id and rule out ids no row can have.

        An integer beyond the column range is a well-formed id that matches
        nothing: it is answered with NotFoundError without querying, since
        the driver would reject the bound parameter (OverflowError on SQLite,
        DataError on PostgreSQL).
        """
        return self._in_column_range(validate_id(raw_id))

    def _in_column_range(self, resource_id: int) -> int:
        if not -INT_ID_MAX - 1 <= resource_id <= INT_ID_MAX:
            raise self._not_found(resource_id)
        return resource_id

    async def _fetch_one(self, db: AsyncSession, resource_id: int) -> Optional[RowMapping]:
        """
        One row through the list projection, so get, create and update all
        return the same shape (join labels included). None when absent.
        """
        stmt = self._projection.where(self.model.id == resource_id)
        result = await db.execute(stmt)
        return result.mappings().one_or_none()

    def _storage_error(self, message: str, operation: str, exc: Exception, **context: Any) -> DatabaseError:
        logger.error(
            "Storage error during %s on %s: %s",
            operation,
            self.resource.table,
            str(exc),
            exc_info=True,
        )
        return DatabaseError(
            message=message,
            context={
                "table": self.resource.table,
                "operation": operation,
                "error_type": type(exc).__name__,
                **context,
            },
        )

    def _not_found(self, resource_id: int) -> NotFoundError:
        return NotFoundError(
            message=self.resource.messages.not_found,
            resource=self.resource.table,
            resource_id=resource_id,
        )

    # ── Operations ────────────────────────────────────────────────────────

    async def list(self, db: AsyncSession) -> List[BaseModel]:
        """All rows, most recently created first (primary key descending)."""
        try:
            result = await db.execute(self._projection.order_by(self.model.id.desc()))
            rows = result.mappings().all()
        except STORAGE_ERRORS as e:
            raise self._storage_error(self.resource.messages.list_failed, "list", e)
        return [self._present(row) for row in rows]

    async def get(self, db: AsyncSession, raw_id: Any) -> BaseModel:
        resource_id = self._resolve_id(raw_id)
        try:
            row = await self._fetch_one(db, resource_id)
        except STORAGE_ERRORS as e:
            raise self._storage_error(self.resource.messages.get_failed, "get", e, id=resource_id)
        if row is None:
            raise self._not_found(resource_id)
        return self._present(row)

    async def create(self, db: AsyncSession, body: Any) -> BaseModel:
        """
        Validate against the create rules, INSERT, then re-read the row.

        The re-read returns server-assigned id/timestamps and join labels.
        """
        values = self._prepare(validate_body(self.resource.create_rules, body))

        try:
            instance = self.model(**values)
            db.add(instance)
            await db.flush()  # assigns the generated id
            new_id = instance.id
            await db.commit()
            # Re-read rather than serialize `instance`: the projection adds
            # the display labels and the server-side timestamp values
            row = await self._fetch_one(db, new_id)
        except STORAGE_ERRORS as e:
            await db.rollback()
            raise self._storage_error(self.resource.messages.create_failed, "create", e)

        logger.info("Created %s id=%s", self.resource.table, new_id)
        return self._present(row)

    async def update(self, db: AsyncSession, raw_id: Any, body: Any) -> BaseModel:
        """
        Partial update: only the fields present in the body are written.

        `updated_at` is refreshed by the column's onupdate hook.
        """
        # Input checks first, in the order a client would fix them: id format,
        # body rules, then "nothing to write". No session call before this.
        resource_id = validate_id(raw_id)
        values = self._prepare(validate_body(self.resource.update_rules, body, partial=True))
        if not values:
            raise EmptyUpdateError(context={"table": self.resource.table, "id": resource_id})
        self._in_column_range(resource_id)

        stmt = (
            update(self.model)
            .where(self.model.id == resource_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        row = None
        try:
            # rowcount is the number of rows matched by the WHERE clause;
            # 0 means the id does not exist
            result = await db.execute(stmt)
            affected = result.rowcount
            if affected:
                await db.commit()
                row = await self._fetch_one(db, resource_id)
        except STORAGE_ERRORS as e:
            await db.rollback()
            raise self._storage_error(
                self.resource.messages.update_failed, "update", e,
                id=resource_id, fields=sorted(values),
            )

        if not affected or row is None:
            raise self._not_found(resource_id)

        logger.info("Updated %s id=%s fields=%s", self.resource.table, resource_id, sorted(values))
        return self._present(row)

    async def delete(self, db: AsyncSession, raw_id: Any) -> None:
        """
        Hard delete by id.

        Raises ConflictError when rows in other tables still reference it.
        """
        resource_id = self._resolve_id(raw_id)

        try:
            await self._ensure_unreferenced(db, resource_id)
            result = await db.execute(
                delete(self.model)
                .where(self.model.id == resource_id)
                .execution_options(synchronize_session=False)
            )
            affected = result.rowcount
            if affected:
                await db.commit()
        except IntegrityError as e:
            # A reference appeared between the check and the DELETE
            await db.rollback()
            logger.warning("Delete of %s id=%s blocked by constraint: %s", self.resource.table, resource_id, e)
            raise ConflictError(
                message=self.resource.messages.in_use.format(label="registros"),
                context={"table": self.resource.table, "id": resource_id},
            )
        except STORAGE_ERRORS as e:
            await db.rollback()
            raise self._storage_error(self.resource.messages.delete_failed, "delete", e, id=resource_id)

        if not affected:
            raise self._not_found(resource_id)

        logger.info("Deleted %s id=%s", self.resource.table, resource_id)

    async def _ensure_unreferenced(self, db: AsyncSession, resource_id: int) -> None:
        for ref in self.resource.referenced_by:
            fk = getattr(ref.model, ref.fk_field)
            count = await db.scalar(select(func.count()).select_from(ref.model).where(fk == resource_id))
            if count:
                raise ConflictError(
                    message=self.resource.messages.in_use.format(label=ref.label),
                    context={
                        "table": self.resource.table,
                        "id": resource_id,
                        "referenced_by": ref.model.__tablename__,
                        "count": count,
                    },
                )
