# backend/modules/loyalty/__init__.py

"""
Per-restaurant loyalty programs, point calculation and the order-served
bookkeeping that credits customer profiles.
"""
