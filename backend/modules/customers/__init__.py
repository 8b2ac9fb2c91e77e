# backend/modules/customers/__init__.py

"""
Customer profiles and their aggregate visit, spend and points counters.
"""
