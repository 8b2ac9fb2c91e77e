# backend/modules/restaurants/__init__.py

"""
Restaurant accounts, dining tables and owner/staff access checks.
"""
