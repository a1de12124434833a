"""
Florist API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from florist_api.core.cors import configure_cors
from florist_api.core.lifespan import lifespan
from florist_api.routers import (
    analytics_router,
    health_router,
    labels_router,
    orders_router,
    products_router,
)
from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware


app = FastAPI(
    title="Florist Fulfillment API",
    description="Order assignment, worklist ranking and florist analytics",
    version="0.1.0",
    lifespan=lifespan,
)

configure_cors(app)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(orders_router)
app.include_router(labels_router)
app.include_router(products_router)
app.include_router(analytics_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "florist_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
