"""
API request and response models for ScentShop REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in catalog/models.py and
auth/models.py, which own the internal domain representation. Route handlers
map between the two.

Resource bodies are shaped, not validated: every field is optional and
unknown fields are ignored, so a client can send any subset. JSON numbers
sent for string fields are stored as their string form ({"price": 10} ->
"10").
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from catalog.models import Category, Product

# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class ProductBody(BaseModel):
    """Body for POST /products and PUT /products/{id}.

    On PUT only the fields actually present in the JSON are written
    (model_dump(exclude_unset=True)).
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    is_enabled: Optional[Union[int, float]] = None
    origin_price: Optional[str] = None
    price: Optional[str] = None
    title: Optional[str] = None
    unit: Optional[str] = None

    def to_domain(self) -> Product:
        return Product(**self.model_dump())


class ProductResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    is_enabled: Optional[Union[int, float]] = None
    origin_price: Optional[str] = None
    price: Optional[str] = None
    title: Optional[str] = None
    unit: Optional[str] = None

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            category=product.category,
            image=product.image,
            is_enabled=product.is_enabled,
            origin_price=product.origin_price,
            price=product.price,
            title=product.title,
            unit=product.unit,
        )


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class CategoryBody(BaseModel):
    """Body for POST /categories and PUT /categories/{id}.

    create_at and update_at may be supplied explicitly; otherwise the store
    stamps both with the insert time.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    category_name: Optional[str] = None
    create_at: Optional[datetime] = None
    update_at: Optional[datetime] = None

    def to_domain(self) -> Category:
        return Category(**self.model_dump())


class CategoryResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    category_name: Optional[str] = None
    create_at: Optional[datetime] = None
    update_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryResponse":
        return cls(
            id=category.id,
            category_name=category.category_name,
            create_at=category.create_at,
            update_at=category.update_at,
        )


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class CredentialsRequest(BaseModel):
    """Body for POST /register and POST /login."""

    username: str
    password: str


class MeResponse(BaseModel):
    """Response for GET /me."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str


# ---------------------------------------------------------------------------
# Errors / health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]
