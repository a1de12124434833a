"""
Labels router.
Label registry reads for everyone, writes for admins.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from florist_api.services.domain import LabelService
from shared.config.constants import ALL_STAFF_ROLES, MANAGEMENT_ROLES
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context, require_roles
from shared.utils.schemas import LabelInput, LabelOutput


router = APIRouter(prefix="/api/labels", tags=["labels"])


@router.get("", response_model=list[LabelOutput])
def list_labels(
    category: str | None = Query(default=None),
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> list[LabelOutput]:
    """Labels ordered by category then priority, optionally for one category."""
    require_roles(ctx, list(ALL_STAFF_ROLES))
    service = LabelService(db)
    labels = service.list_by_category(category) if category else service.list_labels()
    return [LabelOutput.model_validate(label) for label in labels]


@router.get("/{label_id}", response_model=LabelOutput)
def get_label(
    label_id: str,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> LabelOutput:
    require_roles(ctx, list(ALL_STAFF_ROLES))
    return LabelOutput.model_validate(LabelService(db).get_label(label_id))


@router.post("", response_model=LabelOutput, status_code=status.HTTP_201_CREATED)
def create_label(
    body: LabelInput,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> LabelOutput:
    """Create a label, or replace the label with body.id."""
    require_roles(ctx, list(MANAGEMENT_ROLES))
    label = LabelService(db).upsert_label(
        name=body.name,
        category=body.category,
        priority=body.priority,
        color=body.color,
        label_id=body.id,
    )
    return LabelOutput.model_validate(label)


@router.put("/{label_id}", response_model=LabelOutput)
def replace_label(
    label_id: str,
    body: LabelInput,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> LabelOutput:
    """Replace a label. Renaming relabels the products that carried the old name."""
    require_roles(ctx, list(MANAGEMENT_ROLES))
    label = LabelService(db).upsert_label(
        name=body.name,
        category=body.category,
        priority=body.priority,
        color=body.color,
        label_id=label_id,
    )
    return LabelOutput.model_validate(label)


@router.delete("/{label_id}")
def delete_label(
    label_id: str,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> dict[str, Any]:
    """Delete a label; its products fall back to the top remaining label of the category."""
    require_roles(ctx, list(MANAGEMENT_ROLES))
    relabelled = LabelService(db).delete_label(label_id)
    return {"deleted": label_id, "products_relabelled": relabelled}
