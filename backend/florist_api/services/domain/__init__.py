"""
Domain Services - application layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from florist_api.services.domain import OrderWorkflowService

    # In router
    service = OrderWorkflowService(db, clock=clock)
    order = service.assign_to_self(order_id, florist_id)
"""

from .label_service import LabelService
from .order_workflow_service import OrderWorkflowService
from .worklist_service import WorklistService
from .analytics_service import AnalyticsService
from .ingestion_service import OrderIngestionService

__all__ = [
    "LabelService",
    "OrderWorkflowService",
    "WorklistService",
    "AnalyticsService",
    "OrderIngestionService",
]
