"""
Services module for business logic.

- domain/: application services (database-backed business logic)
- ranking: worklist filtering and hierarchical sort (pure)
- analytics: time windows and florist stats (pure)
- labels: label priority snapshot and Known/UNKNOWN lookups (pure)
- clock: injectable "now" and UTC helpers

Usage:
    from florist_api.services.domain import WorklistService
    from florist_api.services.ranking import rank_orders, WorklistFilters
"""
