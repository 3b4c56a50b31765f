"""
api/routes/products.py -- Product CRUD routes.

Routes:
  GET    /products         -- list every product (store order, no paging)
  GET    /products/{id}    -- first product whose id matches; 404 otherwise
  POST   /products         -- insert as given; 201 "Product added"
  PUT    /products/{id}    -- $set the fields present in the body; "Product updated"
  DELETE /products/{id}    -- remove the first match; "Product deleted"

PUT and DELETE on an unknown id answer 200 like a hit, unless the app runs
with STRICT_NOT_FOUND=true, in which case they answer 404.

Handlers are plain def functions: pymongo is blocking, so Starlette runs
them in its threadpool.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from api.models import ErrorDetail, ProductBody, ProductResponse
from auth.dependencies import enforce_token_if_enabled
from catalog.store import ProductStore

# Auth policy: open by default. The router-level dependency only checks the
# token when the app was started with REQUIRE_AUTH=true.
router = APIRouter(dependencies=[Depends(enforce_token_if_enabled)])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorDetail(code="not_found", message="Product not found").model_dump(),
    )


@router.get("/products", response_model=list[ProductResponse], response_model_exclude_none=True)
def list_products(request: Request) -> list[ProductResponse]:
    """Return all products. An empty collection yields []."""
    store: ProductStore = request.app.state.products
    return [ProductResponse.from_domain(p) for p in store.list_all()]


@router.get("/products/{product_id}", response_model=ProductResponse, response_model_exclude_none=True)
def get_product(request: Request, product_id: str) -> ProductResponse:
    store: ProductStore = request.app.state.products
    product = store.get_by_id(product_id)
    if product is None:
        raise _not_found()
    return ProductResponse.from_domain(product)


@router.post("/products", status_code=201, response_class=PlainTextResponse)
def create_product(request: Request, body: ProductBody) -> PlainTextResponse:
    """Insert the product verbatim, including the caller-supplied id."""
    store: ProductStore = request.app.state.products
    store.create(body.to_domain())
    return PlainTextResponse("Product added", status_code=201)


@router.put("/products/{product_id}", response_class=PlainTextResponse)
def update_product(request: Request, product_id: str, body: ProductBody) -> PlainTextResponse:
    store: ProductStore = request.app.state.products
    matched = store.update_by_id(product_id, body.model_dump(exclude_unset=True))
    if not matched and request.app.state.strict_not_found:
        raise _not_found()
    return PlainTextResponse("Product updated")


@router.delete("/products/{product_id}", response_class=PlainTextResponse)
def delete_product(request: Request, product_id: str) -> PlainTextResponse:
    store: ProductStore = request.app.state.products
    deleted = store.delete_by_id(product_id)
    if not deleted and request.app.state.strict_not_found:
        raise _not_found()
    return PlainTextResponse("Product deleted")
