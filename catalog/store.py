"""
catalog/store.py -- MongoDB persistence layer for products and categories.

Pattern: Repository + Data Mapper. ProductStore and CategoryStore are the
repositories; the _doc_to_* functions are the mappers that translate raw
documents into the dataclasses in catalog/models.py. Route handlers never
touch pymongo directly.

Both collections follow the same contract, implemented once in _ResourceStore:

  list_all()              -- every document, natural order, no pagination
  get_by_id(id)           -- first document whose "id" field matches, or None
  create(entity)          -- insert as given; no id generation, no duplicate check
  update_by_id(id, dict)  -- $set the given fields on the first match
  delete_by_id(id)        -- remove the first match

update_by_id() and delete_by_id() return False when nothing matched. The
route layer decides whether that is reported (STRICT_NOT_FOUND) or ignored.

Duplicate "id" values are accepted unless the store is created with
unique_ids=True, in which case a unique index is ensured and pymongo raises
DuplicateKeyError on collision.

Usage:
    products = ProductStore(db)
    products.create(Product(id="p1", title="Rose", price="10"))
    products.get_by_id("p1")
    products.update_by_id("p1", {"price": "12"})
    products.delete_by_id("p1")
"""

import logging
from dataclasses import asdict, fields
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Optional, TypeVar

from pymongo import ReturnDocument
from pymongo.database import Database

from catalog.models import Category, Product

logger = logging.getLogger("scentshop.catalog")

T = TypeVar("T")

_PRODUCT_FIELDS = tuple(f.name for f in fields(Product))
_CATEGORY_FIELDS = tuple(f.name for f in fields(Category))


# ---------------------------------------------------------------------------
# Mappers
# ---------------------------------------------------------------------------


def _as_utc(value: Any) -> Any:
    # pymongo hands back naive datetimes that are UTC by convention.
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _doc_to_product(doc: dict) -> Product:
    return Product(**{name: doc.get(name) for name in _PRODUCT_FIELDS})


def _doc_to_category(doc: dict) -> Category:
    return Category(**{name: _as_utc(doc.get(name)) for name in _CATEGORY_FIELDS})


def _to_doc(entity: Any) -> dict:
    """Drop unset fields so absent attributes stay absent in the document."""
    return {key: value for key, value in asdict(entity).items() if value is not None}


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class _ResourceStore(Generic[T]):
    """id-keyed CRUD over one collection."""

    collection_name: str = ""
    _mapper: Callable[[dict], Any]

    def __init__(self, db: Database, unique_ids: bool = False) -> None:
        self.collection = db[self.collection_name]
        if unique_ids:
            self.collection.create_index("id", unique=True)
            logger.info("Unique index on %s.id ensured", self.collection_name)

    def _map(self, doc: dict) -> T:
        return type(self)._mapper(doc)

    def _prepare(self, entity: T) -> dict:
        return _to_doc(entity)

    def list_all(self) -> list[T]:
        return [self._map(doc) for doc in self.collection.find()]

    def get_by_id(self, resource_id: str) -> Optional[T]:
        doc = self.collection.find_one({"id": resource_id})
        return self._map(doc) if doc else None

    def create(self, entity: T) -> T:
        """Insert entity and return it as stored (defaults applied)."""
        doc = self._prepare(entity)
        self.collection.insert_one(doc)
        logger.info("Inserted %s id=%s", self.collection_name, doc.get("id"))
        return self._map(doc)

    def update_by_id(self, resource_id: str, changes: dict) -> bool:
        """Apply changes to the first document matching resource_id.

        An empty change set still reports whether a document matched; MongoDB
        rejects an empty $set so it is not sent.
        """
        if not changes:
            return self.collection.find_one({"id": resource_id}) is not None
        doc = self.collection.find_one_and_update(
            {"id": resource_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            logger.info("Update on %s matched nothing for id=%s", self.collection_name, resource_id)
            return False
        return True

    def delete_by_id(self, resource_id: str) -> bool:
        doc = self.collection.find_one_and_delete({"id": resource_id})
        if doc is None:
            logger.info("Delete on %s matched nothing for id=%s", self.collection_name, resource_id)
            return False
        return True


class ProductStore(_ResourceStore[Product]):
    collection_name = "products"
    _mapper = staticmethod(_doc_to_product)


class CategoryStore(_ResourceStore[Category]):
    """Categories get create_at/update_at stamped on insert when not supplied."""

    collection_name = "categories"
    _mapper = staticmethod(_doc_to_category)

    def _prepare(self, entity: Category) -> dict:
        doc = _to_doc(entity)
        # Millisecond precision matches what MongoDB stores for dates.
        now = datetime.now(timezone.utc)
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)
        doc.setdefault("create_at", now)
        doc.setdefault("update_at", now)
        return doc
