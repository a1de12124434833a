"""
Label Domain Service.

Owns the label registry: admin-defined (category, name) -> priority entries
used to rank the worklist, and the label names assigned to products.
"""

import math
import uuid
from typing import Any, Sequence

from sqlalchemy.orm import Session

from florist_api.models import Product, ProductLabel
from florist_api.repositories import LabelRepository, store_unavailable_guard
from florist_api.services.labels import LabelPriority, LabelPriorityTable
from shared.config.constants import DEFAULT_LABELS, LabelCategory, Limits
from shared.config.logging import labels_logger as logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    DuplicateLabelError,
    InvalidArgumentError,
    LabelNotFoundError,
    ProductNotFoundError,
)


# Categories whose labels are assigned to products (custom labels are not)
PRODUCT_CATEGORIES = frozenset({LabelCategory.DIFFICULTY, LabelCategory.PRODUCT_TYPE})


def validate_category(category: Any) -> str:
    if category not in LabelCategory.ALL:
        raise InvalidArgumentError(
            f"Unknown label category '{category}', expected one of: {', '.join(LabelCategory.ALL)}",
            field="category",
            value=category,
        )
    return category


def validate_priority(priority: Any) -> int:
    """Accept non-negative integers, including integral floats like 2.0."""
    if isinstance(priority, bool):
        raise InvalidArgumentError("Priority must be a number, not a boolean", field="priority")
    if isinstance(priority, float):
        if not math.isfinite(priority) or not priority.is_integer():
            raise InvalidArgumentError(
                "Priority must be a finite whole number", field="priority", value=priority
            )
        priority = int(priority)
    if not isinstance(priority, int):
        raise InvalidArgumentError("Priority must be a whole number", field="priority")
    if priority < 0:
        raise InvalidArgumentError("Priority must not be negative", field="priority", value=priority)
    return priority


def _new_label_id() -> str:
    return f"label-{uuid.uuid4().hex[:12]}"


class LabelService:
    """
    Domain service for the label registry.

    Label names are what products carry, so renaming or deleting a label
    rewrites the products that referenced it.
    """

    def __init__(self, db: Session):
        self._db = db
        self._labels = LabelRepository(db)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_labels(self, category: str | None = None) -> Sequence[ProductLabel]:
        if category is not None:
            validate_category(category)
        return self._labels.find_all(category)

    def list_by_category(self, category: str) -> Sequence[ProductLabel]:
        """Labels of one category, highest precedence (lowest priority) first."""
        return self._labels.find_all(validate_category(category))

    def get_label(self, label_id: str) -> ProductLabel:
        label = self._labels.find_by_id(label_id)
        if label is None:
            raise LabelNotFoundError(label_id)
        return label

    def priority_table(self) -> LabelPriorityTable:
        """Snapshot of all priorities for ranking."""
        return LabelPriorityTable.from_labels(self._labels.find_all())

    def resolve_priority(self, category: str, label_name: str | None) -> LabelPriority:
        return self.priority_table().resolve(category, label_name)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def upsert_label(
        self,
        name: str,
        category: str,
        priority: Any,
        color: str = "#3b82f6",
        label_id: str | None = None,
    ) -> ProductLabel:
        """
        Insert a label or replace the one with the same id.

        Raises:
            InvalidArgumentError: bad category, priority or name
            DuplicateLabelError: another label already has this (category, name)
        """
        category = validate_category(category)
        priority = validate_priority(priority)
        name = (name or "").strip()
        if not name:
            raise InvalidArgumentError("Label name is required", field="name")
        if len(name) > Limits.MAX_NAME_LENGTH:
            raise InvalidArgumentError("Label name is too long", field="name")

        clash = self._labels.find_by_name(category, name)
        if clash is not None and clash.id != label_id:
            raise DuplicateLabelError(category, name, existing_id=clash.id)

        existing = self._labels.find_by_id(label_id) if label_id else None
        if existing is None:
            label = ProductLabel(
                id=label_id or _new_label_id(),
                name=name,
                category=category,
                priority=priority,
                color=color,
            )
            self._labels.save(label)
            self._commit("upsert label")
            logger.info("Label created", label_id=label.id, category=category, name=name, priority=priority)
            return label

        old_category, old_name = existing.category, existing.name
        existing.name = name
        existing.category = category
        existing.priority = priority
        existing.color = color
        self._db.flush()

        relabelled = 0
        if (old_category, old_name) != (category, name):
            if old_category == category:
                relabelled = self._labels.relabel_products(category, old_name, name)
            else:
                relabelled = self._fall_back_products(old_category, old_name)

        self._commit("upsert label")
        logger.info(
            "Label updated",
            label_id=existing.id,
            category=category,
            name=name,
            priority=priority,
            products_relabelled=relabelled,
        )
        return existing

    def delete_label(self, label_id: str) -> int:
        """
        Delete a label. Products that carried it move to the remaining label
        of the same category with the lowest priority, or to no label.

        Returns the number of products that were relabelled.
        """
        label = self.get_label(label_id)
        category, name = label.category, label.name
        self._labels.delete(label)

        relabelled = self._fall_back_products(category, name)
        self._commit("delete label")
        logger.info("Label deleted", label_id=label_id, category=category, name=name, products_relabelled=relabelled)
        return relabelled

    def set_product_labels(
        self,
        product_id: str,
        difficulty_label: str | None,
        product_type_label: str | None,
    ) -> Product:
        """Assign label names to a product. Names must exist in the registry."""
        product = self._db.get(Product, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        for category, value in (
            (LabelCategory.DIFFICULTY, difficulty_label),
            (LabelCategory.PRODUCT_TYPE, product_type_label),
        ):
            if value is not None and self._labels.find_by_name(category, value) is None:
                raise InvalidArgumentError(
                    f"No {category} label named '{value}'", field=category, value=value
                )

        product.difficulty_label = difficulty_label
        product.product_type_label = product_type_label
        self._commit("set product labels")
        logger.info(
            "Product labels updated",
            product_id=product_id,
            difficulty_label=difficulty_label,
            product_type_label=product_type_label,
        )
        return product

    def seed_defaults(self) -> int:
        """Insert the default difficulty and product type labels into an empty registry."""
        if self._labels.count() > 0:
            return 0

        created = 0
        for category, entries in DEFAULT_LABELS.items():
            for name, priority, color in entries:
                self._db.add(
                    ProductLabel(
                        id=f"{category}-{name.lower().replace(' ', '-')}",
                        name=name,
                        category=category,
                        priority=priority,
                        color=color,
                    )
                )
                created += 1
        safe_commit(self._db)
        logger.info("Default labels seeded", count=created)
        return created

    def _fall_back_products(self, category: str, name: str) -> int:
        if category not in PRODUCT_CATEGORIES:
            return 0
        self._db.flush()
        remaining = [label for label in self._labels.find_all(category) if label.name != name]
        fallback = remaining[0].name if remaining else None
        return self._labels.relabel_products(category, name, fallback)

    def _commit(self, operation: str) -> None:
        with store_unavailable_guard(operation):
            safe_commit(self._db)
