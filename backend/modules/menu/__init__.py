# backend/modules/menu/__init__.py

"""
Menu items with pricing, preparation and dietary information.
"""
