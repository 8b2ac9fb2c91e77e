# backend/modules/menu/services/menu_service.py

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError, ValidationError
from ..models.menu_models import MenuItem, MenuItemModifier, MenuModifier
from ..schemas.menu_schemas import (
    MenuItemCreate, MenuItemUpdate, ModifierCreate, ModifierUpdate,
)

logger = logging.getLogger(__name__)


class MenuService:
    def __init__(self, db: Session, restaurant_id: int):
        self.db = db
        self.restaurant_id = restaurant_id

    def create_item(self, data: MenuItemCreate) -> MenuItem:
        item = MenuItem(restaurant_id=self.restaurant_id, **data.model_dump())
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Created menu item {item.id} for restaurant {self.restaurant_id}")
        return item

    def get_item(self, item_id: int) -> MenuItem:
        item = (
            self.db.query(MenuItem)
            .filter(MenuItem.id == item_id, MenuItem.restaurant_id == self.restaurant_id)
            .first()
        )
        if not item:
            raise NotFoundError(f"Menu item {item_id} not found")
        return item

    def list_items(
        self, category: Optional[str] = None, available_only: bool = False
    ) -> List[MenuItem]:
        query = self.db.query(MenuItem).filter(MenuItem.restaurant_id == self.restaurant_id)
        if category:
            query = query.filter(MenuItem.category == category)
        if available_only:
            query = query.filter(MenuItem.is_available.is_(True))
        return query.order_by(MenuItem.category, MenuItem.name).all()

    def update_item(self, item_id: int, data: MenuItemUpdate) -> MenuItem:
        item = self.get_item(item_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(item, field, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item_id: int) -> None:
        item = self.get_item(item_id)
        self.db.delete(item)
        self.db.commit()

    # ========== Modifiers ==========

    def create_modifier(self, data: ModifierCreate) -> MenuModifier:
        if self._find_modifier_by_name(data.name):
            raise ConflictError(f"Modifier '{data.name}' already exists")
        values = data.model_dump()
        values["modifier_type"] = data.modifier_type.value
        modifier = MenuModifier(restaurant_id=self.restaurant_id, **values)
        self.db.add(modifier)
        self.db.commit()
        self.db.refresh(modifier)
        logger.info(f"Created modifier {modifier.id} for restaurant {self.restaurant_id}")
        return modifier

    def get_modifier(self, modifier_id: int) -> MenuModifier:
        modifier = (
            self.db.query(MenuModifier)
            .filter(
                MenuModifier.id == modifier_id,
                MenuModifier.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not modifier:
            raise NotFoundError(f"Modifier {modifier_id} not found")
        return modifier

    def list_modifiers(self, active_only: bool = False) -> List[MenuModifier]:
        query = self.db.query(MenuModifier).filter(MenuModifier.restaurant_id == self.restaurant_id)
        if active_only:
            query = query.filter(MenuModifier.is_active.is_(True))
        return query.order_by(MenuModifier.name).all()

    def update_modifier(self, modifier_id: int, data: ModifierUpdate) -> MenuModifier:
        modifier = self.get_modifier(modifier_id)
        updates = data.model_dump(exclude_unset=True)
        if "name" in updates:
            existing = self._find_modifier_by_name(updates["name"])
            if existing is not None and existing.id != modifier.id:
                raise ConflictError(f"Modifier '{updates['name']}' already exists")
        if updates.get("modifier_type") is not None:
            updates["modifier_type"] = updates["modifier_type"].value
        for field, value in updates.items():
            setattr(modifier, field, value)
        self.db.commit()
        self.db.refresh(modifier)
        return modifier

    def attach_modifier(
        self, item_id: int, modifier_id: int, is_required: bool = False
    ) -> MenuItemModifier:
        """Offer a modifier on a menu item, or update whether it is required"""
        item = self.get_item(item_id)
        modifier = self.get_modifier(modifier_id)
        if not modifier.applies_to(item.category):
            raise ValidationError(
                f"Modifier '{modifier.name}' does not apply to category '{item.category}'"
            )

        link = self._find_link(item.id, modifier.id)
        if link is None:
            link = MenuItemModifier(menu_item_id=item.id, modifier_id=modifier.id)
            self.db.add(link)
        link.is_required = is_required
        self.db.commit()
        self.db.refresh(link)
        return link

    def detach_modifier(self, item_id: int, modifier_id: int) -> None:
        item = self.get_item(item_id)
        link = self._find_link(item.id, modifier_id)
        if link is None:
            raise NotFoundError(f"Modifier {modifier_id} is not offered on menu item {item_id}")
        self.db.delete(link)
        self.db.commit()

    def list_item_modifiers(self, item_id: int, active_only: bool = False) -> List[MenuItemModifier]:
        item = self.get_item(item_id)
        query = (
            self.db.query(MenuItemModifier)
            .join(MenuModifier, MenuItemModifier.modifier_id == MenuModifier.id)
            .filter(MenuItemModifier.menu_item_id == item.id)
        )
        if active_only:
            query = query.filter(MenuModifier.is_active.is_(True))
        return query.order_by(MenuModifier.name).all()

    def _find_modifier_by_name(self, name: str) -> Optional[MenuModifier]:
        return (
            self.db.query(MenuModifier)
            .filter(MenuModifier.restaurant_id == self.restaurant_id, MenuModifier.name == name)
            .first()
        )

    def _find_link(self, item_id: int, modifier_id: int) -> Optional[MenuItemModifier]:
        return (
            self.db.query(MenuItemModifier)
            .filter(
                MenuItemModifier.menu_item_id == item_id,
                MenuItemModifier.modifier_id == modifier_id,
            )
            .first()
        )
