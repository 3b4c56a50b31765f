"""
api/routes/categories.py -- Category CRUD routes.

Same contract as api/routes/products.py:
  GET    /categories
  GET    /categories/{id}
  POST   /categories        -- create_at/update_at default to the insert time
  PUT    /categories/{id}   -- update_at is NOT refreshed; send it to change it
  DELETE /categories/{id}
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from api.models import CategoryBody, CategoryResponse, ErrorDetail
from auth.dependencies import enforce_token_if_enabled
from catalog.store import CategoryStore

router = APIRouter(dependencies=[Depends(enforce_token_if_enabled)])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorDetail(code="not_found", message="Category not found").model_dump(),
    )


@router.get("/categories", response_model=list[CategoryResponse], response_model_exclude_none=True)
def list_categories(request: Request) -> list[CategoryResponse]:
    store: CategoryStore = request.app.state.categories
    return [CategoryResponse.from_domain(c) for c in store.list_all()]


@router.get("/categories/{category_id}", response_model=CategoryResponse, response_model_exclude_none=True)
def get_category(request: Request, category_id: str) -> CategoryResponse:
    store: CategoryStore = request.app.state.categories
    category = store.get_by_id(category_id)
    if category is None:
        raise _not_found()
    return CategoryResponse.from_domain(category)


@router.post("/categories", status_code=201, response_class=PlainTextResponse)
def create_category(request: Request, body: CategoryBody) -> PlainTextResponse:
    store: CategoryStore = request.app.state.categories
    store.create(body.to_domain())
    return PlainTextResponse("Category added", status_code=201)


@router.put("/categories/{category_id}", response_class=PlainTextResponse)
def update_category(request: Request, category_id: str, body: CategoryBody) -> PlainTextResponse:
    store: CategoryStore = request.app.state.categories
    matched = store.update_by_id(category_id, body.model_dump(exclude_unset=True))
    if not matched and request.app.state.strict_not_found:
        raise _not_found()
    return PlainTextResponse("Category updated")


@router.delete("/categories/{category_id}", response_class=PlainTextResponse)
def delete_category(request: Request, category_id: str) -> PlainTextResponse:
    store: CategoryStore = request.app.state.categories
    deleted = store.delete_by_id(category_id)
    if not deleted and request.app.state.strict_not_found:
        raise _not_found()
    return PlainTextResponse("Category deleted")
