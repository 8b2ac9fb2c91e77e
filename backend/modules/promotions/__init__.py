# backend/modules/promotions/__init__.py

"""
Promotional campaigns: time-boxed discounts an order can claim at checkout.
"""
