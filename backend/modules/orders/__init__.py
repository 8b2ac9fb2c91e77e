# backend/modules/orders/__init__.py

"""
Order intake, status lifecycle and staff notifications.
"""
