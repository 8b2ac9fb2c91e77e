# backend/modules/menu/models/__init__.py

from .menu_models import MenuItem, MenuItemModifier, MenuModifier, ModifierType

__all__ = ["MenuItem", "MenuItemModifier", "MenuModifier", "ModifierType"]
