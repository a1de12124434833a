"""
API routers - /api/*

- orders: worklist, assignment workflow, admin edits, ingestion
- labels: label registry
- products: catalog products and their labels
- analytics: florist stats
- public.health: liveness and database checks
"""

from .orders import router as orders_router
from .labels import router as labels_router
from .products import router as products_router
from .analytics import router as analytics_router
from .public.health import router as health_router

__all__ = [
    "orders_router",
    "labels_router",
    "products_router",
    "analytics_router",
    "health_router",
]
