# backend/modules/staff/__init__.py

"""
Staff roles, restaurant staff membership and shift tracking.
"""
