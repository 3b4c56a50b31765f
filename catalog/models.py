"""
catalog/models.py -- Domain dataclasses for the product catalog.

These are pure data containers with zero logic. Persistence lives in
catalog/store.py.

id is the application-level key supplied by the caller. It is unrelated to
MongoDB's _id, which never leaves the store.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


@dataclass
class Product:
    """A sellable item. Prices are kept as the strings the client sent."""

    id: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    is_enabled: Optional[Union[int, float]] = None
    origin_price: Optional[str] = None
    price: Optional[str] = None
    title: Optional[str] = None
    unit: Optional[str] = None


@dataclass
class Category:
    """A product grouping.

    create_at and update_at are filled with the insert time by the store when
    left as None. update_at is not refreshed on update.
    """

    id: Optional[str] = None
    category_name: Optional[str] = None
    create_at: Optional[datetime] = None
    update_at: Optional[datetime] = None
