"""Categories — list/get/create/update/patch/delete for blog categories.

Invariants:
    - Id-addressed routes receive the entity from the existence gate
    - Create/update bodies pass the validation stage before the gate runs
    - PUT answers 200 with the updated category; PATCH and DELETE answer 204
    - DELETE cascades to the category's posts and their comments

Design Decisions:
    - collection/({ids}) routes declared before /{category_id}
    - Location header points at the created item or collection
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

import simpleblog.api.convertors  # noqa: F401  registers "idlist"
from simpleblog.api.gates import DbSession, existing_category
from simpleblog.api.payloads import PatchDocument, manipulation_body
from simpleblog.core.domain_types import ResourceKind
from simpleblog.infrastructure.entity_store import SqlAlchemyStore
from simpleblog.models.category import Category
from simpleblog.schemas.category import (
    CategoryCreate, CategoryResponse, CategoryUpdate,
)
from simpleblog.services.fetch_collection import fetch_collection
from simpleblog.services.mapping import category_from_create, category_to_response
from simpleblog.services.update_entity import commit_update, patch_to_dto

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/categories", tags=["categories"])

ExistingCategory = Annotated[Category, Depends(existing_category)]


@router.get("", response_model=list[CategoryResponse])
async def get_categories(db: DbSession):
    """Get a list of all categories."""
    categories = await SqlAlchemyStore(db, Category).find_all()
    return [category_to_response(c) for c in categories]


@router.get(
    "/collection/({ids:idlist})", response_model=list[CategoryResponse],
)
async def get_category_collection(ids: str, db: DbSession):
    """Get categories by a comma-separated id list, all or nothing."""
    categories = await fetch_collection(
        SqlAlchemyStore(db, Category), ids, ResourceKind.CATEGORY.label,
    )
    return [category_to_response(c) for c in categories]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category: ExistingCategory):
    """Get the category by id."""
    return category_to_response(category)


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: Annotated[
        CategoryCreate,
        Depends(manipulation_body(CategoryCreate, ResourceKind.CATEGORY)),
    ],
    request: Request,
    response: Response,
    db: DbSession,
):
    """Create a category, with any nested posts and comments."""
    store = SqlAlchemyStore(db, Category)
    category = category_from_create(body)
    store.add(category)
    await store.save()
    await store.refresh(category)

    logger.info(
        f"Category {category.id} created",
        extra={"resource": ResourceKind.CATEGORY.value, "resource_id": category.id},
    )
    response.headers["Location"] = str(
        request.url_for("get_category", category_id=category.id),
    )
    return category_to_response(category)


@router.post(
    "/collection",
    response_model=list[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_category_collection(
    body: Annotated[
        list[CategoryCreate],
        Depends(manipulation_body(list[CategoryCreate], ResourceKind.CATEGORY)),
    ],
    request: Request,
    response: Response,
    db: DbSession,
):
    """Create several categories in one commit."""
    store = SqlAlchemyStore(db, Category)
    categories = [category_from_create(item) for item in body]
    store.add_all(categories)
    await store.save()
    for category in categories:
        await store.refresh(category)

    ids = ",".join(str(c.id) for c in categories)
    response.headers["Location"] = str(
        request.url_for("get_category_collection", ids=ids),
    )
    return [category_to_response(c) for c in categories]


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    body: Annotated[
        CategoryUpdate,
        Depends(manipulation_body(CategoryUpdate, ResourceKind.CATEGORY)),
    ],
    category: ExistingCategory,
    db: DbSession,
):
    """Replace the category's editable fields."""
    store = SqlAlchemyStore(db, Category)
    await commit_update(store, category, body)
    await store.refresh(category)
    return category_to_response(category)


@router.patch(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def partially_update_category(
    category: ExistingCategory,
    db: DbSession,
    document: PatchDocument = None,
):
    """Apply a JSON Patch document to the category."""
    patched = patch_to_dto(
        category, document, CategoryUpdate, ResourceKind.CATEGORY.label,
    )
    await commit_update(SqlAlchemyStore(db, Category), category, patched)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_category(category: ExistingCategory, db: DbSession):
    """Delete the category together with its posts and comments."""
    category_id = category.id
    store = SqlAlchemyStore(db, Category)
    await store.remove(category)
    await store.save()
    logger.info(
        f"Category {category_id} deleted",
        extra={"resource": ResourceKind.CATEGORY.value, "resource_id": category_id},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
