"""
Seed data for development and testing.
Creates reference data: stores, the florist roster, a starter catalog and
the default label registry.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from florist_api.models import Product, Store, User
from florist_api.services.domain.label_service import LabelService
from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)


STORES = [
    {"id": "store-1", "name": "Windflower Florist", "domain": "windflower-florist.myshopify.com", "color": "#10B981"},
    {"id": "store-2", "name": "Bloom & Co", "domain": "bloom-and-co.myshopify.com", "color": "#8B5CF6"},
    {"id": "store-3", "name": "Garden Dreams", "domain": "garden-dreams.myshopify.com", "color": "#F59E0B"},
]

USERS = [
    {"id": "admin-1", "name": "Sarah Manager", "email": "sarah@floralshop.com", "role": Roles.ADMIN},
    {"id": "florist-1", "name": "Maya", "email": "maya@floralshop.com", "role": Roles.FLORIST},
    {"id": "florist-2", "name": "Jenny", "email": "jenny@floralshop.com", "role": Roles.FLORIST},
    {"id": "florist-3", "name": "Serena", "email": "serena@floralshop.com", "role": Roles.FLORIST},
    {"id": "florist-4", "name": "Julie", "email": "julie@floralshop.com", "role": Roles.FLORIST},
    {"id": "florist-5", "name": "Enie", "email": "enie@floralshop.com", "role": Roles.FLORIST},
]

PRODUCTS = [
    # (id, store_id, name, variant, difficulty, product type)
    ("prod-1", "store-1", "Trio Matthiola in White", "Bouquet", "Medium", "Bouquet"),
    ("prod-2", "store-1", "Unconditional Love", "7 stalks", "Hard", "Bouquet"),
    ("prod-3", "store-1", "Windflower x Sarah's Loft Cupcake Bundle", "Bright Smile", "Medium", "Bundle"),
    ("prod-4", "store-1", "Daily Surprise - Fresh Flowers", "Warm Pastels / Small", "Easy", "Bouquet"),
    ("prod-15", "store-1", "Rose Elegance", "Red Roses / 12 stalks", "Medium", "Bouquet"),
    ("prod-16", "store-1", "Sunflower Delight", "Bright Yellow / Large", "Easy", "Arrangement"),
    ("prod-17", "store-1", "Orchid Paradise", "Purple Orchids / Premium", "Very Hard", "Arrangement"),
]


def seed_reference_data(db: Session) -> None:
    """
    Seed stores, users and products.
    Idempotent: only inserts if no store exists yet.
    """
    if db.scalar(select(Store.id).limit(1)):
        logger.info("Reference data already seeded, skipping")
        return

    logger.info("Seeding reference data")
    for store_data in STORES:
        db.add(Store(**store_data))
    for user_data in USERS:
        db.add(User(**user_data))
    db.flush()

    for product_id, store_id, name, variant, difficulty, product_type in PRODUCTS:
        db.add(
            Product(
                id=product_id,
                store_id=store_id,
                name=name,
                variant=variant,
                difficulty_label=difficulty,
                product_type_label=product_type,
            )
        )
    db.commit()
    logger.info("Reference data seeded", stores=len(STORES), users=len(USERS), products=len(PRODUCTS))


def seed(db: Session) -> None:
    """Seed everything a fresh development database needs."""
    if settings.seed_default_labels:
        LabelService(db).seed_defaults()
    seed_reference_data(db)
