"""
Products router.
Catalog products with the labels orders inherit from them.
"""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from florist_api.core.dependencies import store_filter
from florist_api.repositories import get_order_repository
from florist_api.services.domain import LabelService
from shared.config.constants import ALL_STAFF_ROLES, MANAGEMENT_ROLES
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context, require_roles
from shared.utils.schemas import ProductLabelsUpdate, ProductOutput


router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductOutput])
def list_products(
    stores: list[str] = Depends(store_filter),
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> list[ProductOutput]:
    require_roles(ctx, list(ALL_STAFF_ROLES))
    products = get_order_repository(db).fetch_products(stores or None)
    return [ProductOutput.model_validate(product) for product in products]


@router.patch("/{product_id}/labels", response_model=ProductOutput)
def set_product_labels(
    product_id: str,
    body: ProductLabelsUpdate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> ProductOutput:
    """Set difficulty and product type labels; orders pick them up on the next read."""
    require_roles(ctx, list(MANAGEMENT_ROLES))
    product = LabelService(db).set_product_labels(
        product_id,
        difficulty_label=body.difficulty_label,
        product_type_label=body.product_type_label,
    )
    return ProductOutput.model_validate(product)
