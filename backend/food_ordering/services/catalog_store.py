"""
Food Ordering Backend — Catalog Store
=======================================

What:  Owns MenuItem entities: list, get, create, partial update, delete.
Who:   Called by the /api/menus route handlers.

Identifiers:
    Menu items are addressed by UUID. A path segment that is not a valid
    UUID cannot name an existing item, so it raises NotFoundError just
    like a well-formed id with no row behind it.

Field rules (create, and every field supplied to update):
    name, category: non-empty strings
    price:          finite number >= 0 (bool is not a number)
    description, image_url: optional, may be cleared with null
"""

import logging
import math
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from food_ordering.exceptions import InternalError, NotFoundError, ValidationError
from food_ordering.models.menu_item import MenuItem

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "description", "price", "category", "image_url")
REQUIRED_FIELDS = ("name", "price", "category")


def parse_menu_item_id(raw_id: Any) -> uuid.UUID:
    """Coerce a path id to UUID; anything unparsable is reported as not found."""
    if isinstance(raw_id, uuid.UUID):
        return raw_id
    try:
        return uuid.UUID(str(raw_id))
    except (TypeError, ValueError):
        raise NotFoundError(resource="menu item", resource_id=str(raw_id))


def _validate_fields(fields: Dict[str, Any], partial: bool) -> Dict[str, Any]:
    """
    Check menu fields and return the cleaned subset to persist.

    With partial=False every REQUIRED_FIELDS entry must be present.
    With partial=True only the supplied keys are checked, but a supplied
    required field still may not be empty.
    """
    cleaned = {key: fields[key] for key in EDITABLE_FIELDS if key in fields}

    if not partial:
        missing = [
            key for key in REQUIRED_FIELDS
            if cleaned.get(key) is None or (isinstance(cleaned[key], str) and not cleaned[key].strip())
        ]
        if missing:
            raise ValidationError(
                message="Name, price, and category are required.",
                context={"missing": missing},
            )

    for key in ("name", "category"):
        if key in cleaned:
            value = cleaned[key]
            if value is None or not str(value).strip():
                raise ValidationError(message=f"{key.capitalize()} must not be empty.", field=key)
            cleaned[key] = str(value).strip()

    if "price" in cleaned:
        price = cleaned["price"]
        if price is None:
            raise ValidationError(message="Price must not be empty.", field="price")
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValidationError(message="Price must be a number.", field="price")
        if not math.isfinite(price):
            raise ValidationError(message="Price must be a finite number.", field="price")
        if price < 0:
            raise ValidationError(message="Price must not be negative.", field="price")

    return cleaned


class CatalogStore:
    """
    Business logic for menu items.

    Stateless: every method receives the request's AsyncSession. Driver
    failures are wrapped in InternalError; NotFoundError/ValidationError
    propagate as raised.
    """

    async def list_all(self, db: AsyncSession) -> List[MenuItem]:
        """Return every menu item in insertion order (possibly empty)."""
        try:
            result = await db.execute(select(MenuItem).order_by(MenuItem.seq))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing menu items: %s", str(e), exc_info=True)
            raise InternalError(
                message="Server error fetching menus.",
                context={"error_type": type(e).__name__},
            )

    async def get_by_id(self, db: AsyncSession, item_id: Any) -> MenuItem:
        """
        Fetch one menu item.

        Raises:
            NotFoundError: no item with that id (or id malformed)
            InternalError: Database failure
        """
        item_uuid = parse_menu_item_id(item_id)
        try:
            item = await self._find(db, item_uuid)
        except SQLAlchemyError as e:
            logger.error("Database error fetching menu item %s: %s", item_uuid, str(e))
            raise InternalError(
                message="Server error fetching menu item.",
                context={"item_id": str(item_uuid)},
            )
        if item is None:
            raise NotFoundError(resource="menu item", resource_id=str(item_uuid))
        return item

    async def create(self, db: AsyncSession, fields: Dict[str, Any]) -> MenuItem:
        """
        Persist a new menu item with a fresh id.

        Raises:
            ValidationError: name/price/category missing, or price < 0
            InternalError: Database failure
        """
        cleaned = _validate_fields(fields, partial=False)
        item = MenuItem(**cleaned)
        try:
            db.add(item)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error adding menu item: %s", str(e), exc_info=True)
            raise InternalError(
                message="Server error adding menu item.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Menu item created: %s (%s)", item.id, item.name)
        return item

    async def update(self, db: AsyncSession, item_id: Any, fields: Dict[str, Any]) -> MenuItem:
        """
        Apply the supplied fields to an existing item; omitted fields keep
        their current values.

        Raises:
            NotFoundError: no item with that id
            ValidationError: a supplied field breaks the create rules
            InternalError: Database failure
        """
        item = await self.get_by_id(db, item_id)
        cleaned = _validate_fields(fields, partial=True)
        try:
            for key, value in cleaned.items():
                setattr(item, key, value)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error updating menu item %s: %s", item.id, str(e))
            raise InternalError(
                message="Server error updating menu item.",
                context={"item_id": str(item.id)},
            )
        logger.info("Menu item updated: %s (fields=%s)", item.id, sorted(cleaned))
        return item

    async def delete(self, db: AsyncSession, item_id: Any) -> None:
        """
        Permanently remove a menu item.

        Raises:
            NotFoundError: no item with that id (including already deleted)
            InternalError: Database failure
        """
        item = await self.get_by_id(db, item_id)
        try:
            await db.delete(item)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error deleting menu item %s: %s", item.id, str(e))
            raise InternalError(
                message="Server error deleting menu item.",
                context={"item_id": str(item.id)},
            )
        logger.info("Menu item deleted: %s", item.id)

    async def _find(self, db: AsyncSession, item_uuid: uuid.UUID) -> Optional[MenuItem]:
        result = await db.execute(select(MenuItem).where(MenuItem.id == item_uuid))
        return result.scalar_one_or_none()


catalog_store = CatalogStore()
