"""SQLAlchemy implementation of the store interface."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import false, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload
from sqlalchemy.orm.strategy_options import Load

from .. import models
from ..db_types import GUID
from ..exceptions import ConstraintViolation, StoreError
from .base import MONTHS, PAYMENTS, PROVIDERS, WEEKS, Filter, Order, Record, Store

LOGGER = logging.getLogger(__name__)

_MODELS: dict[str, type] = {
    MONTHS: models.Month,
    WEEKS: models.Week,
    PROVIDERS: models.Provider,
    PAYMENTS: models.Payment,
}

IncludeTree = dict[str, "IncludeTree"]


def _parse_includes(include: Sequence[str]) -> IncludeTree:
    tree: IncludeTree = {}
    for path in include:
        node = tree
        for part in path.split("."):
            node = node.setdefault(part, {})
    return tree


def _coerce_id(record_id: Any) -> Optional[str]:
    try:
        return str(uuid.UUID(str(record_id)))
    except (TypeError, ValueError):
        return None


def _constraint_field(exc: IntegrityError) -> Optional[str]:
    message = str(exc.orig)
    lowered = message.lower()
    if "week_number" in lowered and ("unique" in lowered or "duplicate" in lowered):
        return "week_number"
    return None


class SqlAlchemyStore(Store):
    """Store backed by a SQLAlchemy session.

    Each mutating call commits on its own; a failed call rolls the session
    back before the error is raised.
    """

    def __init__(self, session: Session):
        self.session = session

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _model(collection: str) -> type:
        try:
            return _MODELS[collection]
        except KeyError as exc:
            raise ValueError(f"Unknown collection: {collection}") from exc

    @staticmethod
    def _column(model: type, field: str):
        mapper = model.__mapper__
        if field not in mapper.column_attrs:
            raise ValueError(f"{model.__tablename__} has no column {field}")
        return getattr(model, field)

    @classmethod
    def _loader_options(cls, model: type, tree: IncludeTree) -> list[Load]:
        options: list[Load] = []
        for name, children in tree.items():
            relationship = model.__mapper__.relationships.get(name)
            if relationship is None:
                raise ValueError(f"{model.__tablename__} has no relation {name}")
            loader = selectinload(getattr(model, name))
            nested = cls._loader_options(relationship.mapper.class_, children)
            if nested:
                loader = loader.options(*nested)
            options.append(loader)
        return options

    @classmethod
    def _serialize(cls, obj: Any, tree: IncludeTree) -> Record:
        mapper = obj.__mapper__
        record: Record = {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}
        for name, children in tree.items():
            related = getattr(obj, name)
            if related is None:
                record[name] = None
            elif mapper.relationships[name].uselist:
                record[name] = [cls._serialize(item, children) for item in related]
            else:
                record[name] = cls._serialize(related, children)
        return record

    @classmethod
    def _apply_filters(cls, query: Query, model: type, filters: Sequence[Filter]) -> Query:
        for item in filters:
            column = cls._column(model, item.field)
            if isinstance(column.type, GUID) and item.op in ("eq", "in"):
                query = cls._apply_id_filter(query, column, item)
                continue
            if item.op == "eq":
                query = query.filter(column.is_(None) if item.value is None else column == item.value)
            elif item.op == "gte":
                query = query.filter(column >= item.value)
            elif item.op == "lte":
                query = query.filter(column <= item.value)
            elif item.op == "ilike":
                term = f"%{str(item.value).strip().lower()}%"
                query = query.filter(func.lower(column).like(term))
            elif item.op == "in":
                query = query.filter(column.in_(list(item.value)))
        return query

    @staticmethod
    def _apply_id_filter(query: Query, column, item: Filter) -> Query:
        # A malformed identifier cannot match any stored row.
        if item.op == "eq":
            if item.value is None:
                return query.filter(column.is_(None))
            key = _coerce_id(item.value)
            return query.filter(column == key if key is not None else false())
        keys = [key for key in (_coerce_id(value) for value in item.value) if key is not None]
        return query.filter(column.in_(keys) if keys else false())

    def _assign(self, obj: Any, values: Mapping[str, Any]) -> None:
        model = type(obj)
        for field, value in values.items():
            self._column(model, field)
            setattr(obj, field, value)

    def _commit(self, collection: str, action: str, obj: Any = None) -> None:
        """Commit, then reload ``obj`` so server-side defaults are visible."""
        try:
            self.session.commit()
            if obj is not None:
                self.session.refresh(obj)
        except IntegrityError as exc:
            self.session.rollback()
            LOGGER.info("Store rejected %s on %s: %s", action, collection, exc.orig)
            raise ConstraintViolation(
                f"Cannot {action} {collection} record: {exc.orig}",
                field=_constraint_field(exc),
            ) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Unable to {action} {collection} record") from exc

    # -- reads -------------------------------------------------------------

    def get(
        self, collection: str, record_id: str, *, include: Sequence[str] = ()
    ) -> Optional[Record]:
        model = self._model(collection)
        key = _coerce_id(record_id)
        if key is None:
            return None
        tree = _parse_includes(include)
        try:
            obj = (
                self.session.query(model)
                .options(*self._loader_options(model, tree))
                .filter(model.id == key)
                .first()
            )
            if obj is None:
                return None
            return self._serialize(obj, tree)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Unable to read {collection} record") from exc

    def list(
        self,
        collection: str,
        *,
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
        include: Sequence[str] = (),
        limit: Optional[int] = None,
    ) -> list[Record]:
        model = self._model(collection)
        tree = _parse_includes(include)
        query = self._apply_filters(self.session.query(model), model, filters)
        for item in order:
            column = self._column(model, item.field)
            query = query.order_by(column.desc() if item.descending else column.asc())
        if limit is not None:
            if limit < 1:
                raise ValueError(f"limit must be at least 1, got {limit}")
            query = query.limit(limit)
        query = query.options(*self._loader_options(model, tree))
        try:
            return [self._serialize(obj, tree) for obj in query.all()]
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Unable to list {collection} records") from exc

    def count(self, collection: str, *, filters: Sequence[Filter] = ()) -> int:
        model = self._model(collection)
        query = self._apply_filters(self.session.query(model), model, filters)
        try:
            return query.count()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Unable to count {collection} records") from exc

    # -- writes ------------------------------------------------------------

    def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        model = self._model(collection)
        obj = model()
        self._assign(obj, record)
        self.session.add(obj)
        self._commit(collection, "insert", obj)
        return self._serialize(obj, {})

    def update(
        self, collection: str, record_id: str, patch: Mapping[str, Any]
    ) -> Optional[Record]:
        model = self._model(collection)
        key = _coerce_id(record_id)
        if key is None:
            return None
        try:
            obj = self.session.get(model, key)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Unable to read {collection} record") from exc
        if obj is None:
            return None
        self._assign(obj, patch)
        self._commit(collection, "update", obj)
        return self._serialize(obj, {})

    def delete(self, collection: str, record_id: str) -> bool:
        model = self._model(collection)
        key = _coerce_id(record_id)
        if key is None:
            return False
        try:
            obj = self.session.get(model, key)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Unable to read {collection} record") from exc
        if obj is None:
            return False
        self.session.delete(obj)
        self._commit(collection, "delete")
        return True
