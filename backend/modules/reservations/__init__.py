# backend/modules/reservations/__init__.py

"""
Table reservations and live table availability.
"""
