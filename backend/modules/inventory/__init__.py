# backend/modules/inventory/__init__.py

"""
Suppliers, stock items, recipe links and stock movements.
"""
