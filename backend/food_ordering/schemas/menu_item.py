"""
Food Ordering Backend — Menu Item Schemas
===========================================

What:  Request and response contracts for the /api/menus endpoints.

Request fields are all Optional at the schema level: a missing `name` or
`price` is a business-rule failure reported by CatalogStore as a 400 with a
readable message, not a framework-level schema error. Type errors are still
rejected by Pydantic and mapped to 400 in main.py:
    - price is strict: JSON booleans and numeric strings are refused
    - price must be finite (no NaN / Infinity)
    - string lengths match the menu_items column sizes
"""

import uuid
from typing import Optional

from pydantic import Field

from food_ordering.schemas.common import ApiModel

NAME_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 100
IMAGE_URL_MAX_LENGTH = 2048


class MenuItemCreate(ApiModel):
    """Body of POST /api/menus."""
    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, strict=True, allow_inf_nan=False)
    category: Optional[str] = Field(default=None, max_length=CATEGORY_MAX_LENGTH)
    image_url: Optional[str] = Field(default=None, max_length=IMAGE_URL_MAX_LENGTH)


class MenuItemUpdate(ApiModel):
    """
    Body of PUT /api/menus/{id}.

    Only fields present in the body are applied; use
    `model_dump(exclude_unset=True)` to get them.
    """
    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, strict=True, allow_inf_nan=False)
    category: Optional[str] = Field(default=None, max_length=CATEGORY_MAX_LENGTH)
    image_url: Optional[str] = Field(default=None, max_length=IMAGE_URL_MAX_LENGTH)


class MenuItemResponse(ApiModel):
    """A menu item as returned by the API."""
    id: uuid.UUID = Field(description="Unique menu item identifier (UUID)")
    name: str
    description: Optional[str] = None
    price: float
    category: str
    image_url: Optional[str] = None


class MenuItemMutationResponse(ApiModel):
    """Returned by create (201) and update (200)."""
    message: str
    menu_item: MenuItemResponse
