from .inventory_models import (
    Supplier, InventoryItem, MenuItemIngredient, InventoryTransaction, TransactionType,
)

__all__ = [
    "Supplier",
    "InventoryItem",
    "MenuItemIngredient",
    "InventoryTransaction",
    "TransactionType",
]
