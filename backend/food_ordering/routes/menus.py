"""
Food Ordering Backend — Menu Route Handlers
=============================================

What:  CRUD endpoints for menu items.
How:   Each handler extracts the body/path id, makes exactly one
       CatalogStore call, and shapes the response. Errors raised by the
       store are turned into JSON responses by the handlers in main.py.

Route Inventory:
    GET    /api/all-menus      → 200 [MenuItem]
    GET    /api/menus/{id}     → 200 MenuItem | 404
    POST   /api/menus          → 201 {message, menuItem} | 400
    PUT    /api/menus/{id}     → 200 {message, menuItem} | 400 | 404
    DELETE /api/menus/{id}     → 200 {message} | 404
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from food_ordering.database import get_db_session
from food_ordering.models.menu_item import MenuItem
from food_ordering.schemas.common import ErrorResponse, MessageResponse
from food_ordering.schemas.menu_item import (
    MenuItemCreate,
    MenuItemMutationResponse,
    MenuItemResponse,
    MenuItemUpdate,
)
from food_ordering.services.catalog_store import catalog_store

router = APIRouter(prefix="/api", tags=["Menus"])


def to_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=item.id,
        name=item.name,
        description=item.description,
        price=item.price,
        category=item.category,
        image_url=item.image_url,
    )


@router.get(
    "/all-menus",
    response_model=List[MenuItemResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all menu items",
)
async def list_menus(db: AsyncSession = Depends(get_db_session)) -> List[MenuItemResponse]:
    items = await catalog_store.list_all(db)
    return [to_response(item) for item in items]


@router.get(
    "/menus/{menu_id}",
    response_model=MenuItemResponse,
    responses={
        404: {"description": "Menu item not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single menu item by ID",
)
async def get_menu(menu_id: str, db: AsyncSession = Depends(get_db_session)) -> MenuItemResponse:
    """
    Args:
        menu_id: Taken as a plain string; a malformed id is a 404 rather
                 than a schema error.
    """
    item = await catalog_store.get_by_id(db, menu_id)
    return to_response(item)


@router.post(
    "/menus",
    status_code=201,
    response_model=MenuItemMutationResponse,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Add a menu item",
)
async def create_menu(
    payload: MenuItemCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MenuItemMutationResponse:
    item = await catalog_store.create(db, payload.model_dump())
    return MenuItemMutationResponse(
        message="Menu item added successfully!",
        menu_item=to_response(item),
    )


@router.put(
    "/menus/{menu_id}",
    response_model=MenuItemMutationResponse,
    responses={
        400: {"description": "Invalid field values", "model": ErrorResponse},
        404: {"description": "Menu item not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a menu item by ID",
)
async def update_menu(
    menu_id: str,
    payload: MenuItemUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MenuItemMutationResponse:
    """Only the fields present in the request body are changed."""
    item = await catalog_store.update(db, menu_id, payload.model_dump(exclude_unset=True))
    return MenuItemMutationResponse(
        message="Menu item updated successfully!",
        menu_item=to_response(item),
    )


@router.delete(
    "/menus/{menu_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Menu item not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a menu item by ID",
)
async def delete_menu(menu_id: str, db: AsyncSession = Depends(get_db_session)) -> MessageResponse:
    await catalog_store.delete(db, menu_id)
    return MessageResponse(message="Menu item deleted successfully!")
