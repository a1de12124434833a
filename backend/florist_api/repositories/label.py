"""
Label Repository - Data access for product labels.
"""

from typing import Sequence

from sqlalchemy import Select, select, update
from sqlalchemy.orm import Session

from florist_api.models import Product, ProductLabel
from shared.config.constants import LabelCategory
from .base import BaseRepository, store_unavailable_guard


# Product column holding the label name of each reassignable category
PRODUCT_LABEL_COLUMNS = {
    LabelCategory.DIFFICULTY: Product.difficulty_label,
    LabelCategory.PRODUCT_TYPE: Product.product_type_label,
}


class LabelRepository(BaseRepository[ProductLabel]):
    """Repository for ProductLabel entities."""

    @property
    def model(self) -> type[ProductLabel]:
        return ProductLabel

    def _base_query(self) -> Select:
        return select(ProductLabel).order_by(
            ProductLabel.category, ProductLabel.priority, ProductLabel.name
        )

    def find_all(self, category: str | None = None) -> Sequence[ProductLabel]:
        """All labels ordered by category, priority, name."""
        query = self._base_query()
        if category:
            query = query.where(ProductLabel.category == category)
        with store_unavailable_guard("find labels"):
            return self._db.execute(query).scalars().all()

    def find_by_name(self, category: str, name: str) -> ProductLabel | None:
        query = select(ProductLabel).where(
            ProductLabel.category == category,
            ProductLabel.name == name,
        )
        with store_unavailable_guard("find label"):
            return self._db.scalar(query)

    def relabel_products(self, category: str, old_name: str, new_name: str | None) -> int:
        """Point every product labelled old_name at new_name. Returns affected rows."""
        column = PRODUCT_LABEL_COLUMNS.get(category)
        if column is None:
            return 0
        stmt = (
            update(Product)
            .where(column == old_name)
            .values({column.key: new_name})
            .execution_options(synchronize_session=False)
        )
        with store_unavailable_guard("relabel products"):
            return self._db.execute(stmt).rowcount


def get_label_repository(db: Session) -> LabelRepository:
    """Factory function for LabelRepository."""
    return LabelRepository(db)
