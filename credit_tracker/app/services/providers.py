"""Business logic for providers."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from .. import mappers, schemas
from ..exceptions import NotFoundError
from ..models.timestamps import utcnow
from ..store import PROVIDERS, Store, asc, eq, ilike
from ..validation import EntityKind, validate
from .reconciliation import ReconciliationService
from .summaries import SummaryService

LOGGER = logging.getLogger(__name__)

Payload = Union[Mapping[str, Any], BaseModel]


class ProviderService:
    """CRUD operations and lookups for providers."""

    @staticmethod
    def list_providers(
        store: Store,
        *,
        active_only: bool = False,
        search: Optional[str] = None,
    ) -> list[schemas.ProviderRead]:
        filters = []
        if active_only:
            filters.append(eq("is_active", True))
        if search and search.strip():
            filters.append(ilike("name", search))
        records = store.list(PROVIDERS, filters=filters, order=[asc("name")])
        return mappers.to_models(schemas.ProviderRead, records)

    @classmethod
    def list_active(cls, store: Store) -> list[schemas.ProviderRead]:
        return cls.list_providers(store, active_only=True)

    @classmethod
    def search_by_name(cls, store: Store, term: str) -> list[schemas.ProviderRead]:
        return cls.list_providers(store, search=term)

    @staticmethod
    def get_provider(store: Store, provider_id: str) -> Optional[schemas.ProviderRead]:
        record = store.get(PROVIDERS, provider_id)
        return mappers.to_provider(record) if record is not None else None

    @classmethod
    def require_provider(
        cls, store: Store, provider_id: str, *, field: Optional[str] = None
    ) -> schemas.ProviderRead:
        provider = cls.get_provider(store, provider_id)
        if provider is None:
            raise NotFoundError("provider", provider_id, field=field)
        return provider

    @staticmethod
    def create_provider(store: Store, payload: Payload) -> schemas.ProviderRead:
        data = validate(EntityKind.PROVIDER, payload).unwrap()
        provider = mappers.to_provider(store.insert(PROVIDERS, data))
        LOGGER.info("Created provider %s (%s)", provider.id, provider.name)
        return provider

    @staticmethod
    def update_provider(
        store: Store, provider_id: str, payload: Payload
    ) -> schemas.ProviderRead:
        patch = validate(EntityKind.PROVIDER, payload, partial=True).unwrap()
        patch["updated_at"] = utcnow()
        record = store.update(PROVIDERS, provider_id, patch)
        if record is None:
            raise NotFoundError("provider", provider_id)
        return mappers.to_provider(record)

    @classmethod
    def toggle_active(
        cls, store: Store, provider_id: str, is_active: bool
    ) -> schemas.ProviderRead:
        return cls.update_provider(store, provider_id, {"is_active": is_active})

    @classmethod
    def delete_provider(cls, store: Store, provider_id: str) -> None:
        """Delete a provider; refused while any payment references it."""

        cls.require_provider(store, provider_id)
        ReconciliationService.ensure_provider_deletable(store, provider_id)
        if not store.delete(PROVIDERS, provider_id):
            raise NotFoundError("provider", provider_id)
        LOGGER.info("Deleted provider %s", provider_id)

    @staticmethod
    def provider_stats(store: Store, provider_id: str) -> schemas.ProviderSummary:
        return SummaryService.provider_summary(store, provider_id)

    @staticmethod
    def list_with_stats(store: Store) -> list[schemas.ProviderSummary]:
        return SummaryService.provider_summaries(store)
