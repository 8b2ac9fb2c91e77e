# backend/modules/analytics/__init__.py

"""
Analytics Module - Sales Reports & Customer Insights

Components:
- Models: daily sales summaries and customer feedback
- Services: popularity, revenue trend, low stock and loyalty tier reports,
  daily summary refresh, feedback collection
- Routers: restaurant-scoped reporting endpoints
"""
