"""Catalog defaults merged with admin price/availability overrides."""

from __future__ import annotations

from typing import Callable, Iterable, Mapping

from ..domain.repositories import RecordStore
from ..errors import AppError
from ..logging_config import get_logger
from ..models import CatalogProductOverride, Product, ProductAvailability, ProductOverrideUpdate
from ..validation import parse_model

logger = get_logger(__name__)

OverrideStoreProvider = Callable[[], RecordStore[CatalogProductOverride]]


def merge_product(default: Mapping[str, object], override: CatalogProductOverride | None) -> Product:
    """Apply the non-empty override fields on top of a default product record."""

    merged = dict(default)
    merged.setdefault("availability", ProductAvailability.AVAILABLE.value)
    if override is not None:
        if override.price is not None:
            merged["price"] = override.price
        if override.availability is not None:
            merged["availability"] = override.availability
    return Product.model_validate(merged)


class CatalogService:
    """Storefront product list with per-product overrides.

    The override store is resolved lazily so the public product list keeps
    working (with defaults) when storage is misconfigured.
    """

    def __init__(self, overrides: OverrideStoreProvider, defaults: Iterable[Mapping[str, object]]):
        self._overrides = overrides
        self.defaults = [dict(product) for product in defaults]

    def _load_overrides(self) -> dict[str, CatalogProductOverride]:
        try:
            return {o.id: o for o in self._overrides().list()}
        except AppError as exc:
            logger.warning("Catalog overrides unavailable; serving defaults", extra={"reason": exc.message})
            return {}

    def list(self) -> list[Product]:
        overrides = self._load_overrides()
        return [merge_product(p, overrides.get(str(p["id"]))) for p in self.defaults]

    def update(self, product_id: str, changes: ProductOverrideUpdate) -> CatalogProductOverride:
        """Upsert the override with the provided fields, keeping other overridden fields."""

        store = self._overrides()
        existing = store.get(product_id)
        payload = existing.model_dump(exclude_none=True) if existing else {}
        payload.update(changes.model_dump(exclude_none=True))
        payload["id"] = product_id
        stored = store.put(product_id, parse_model(CatalogProductOverride, payload))
        logger.info("Catalog override saved", extra={"product_id": product_id})
        return stored

    def reset(self, product_id: str) -> None:
        self._overrides().delete(product_id)
        logger.info("Catalog override reset", extra={"product_id": product_id})
