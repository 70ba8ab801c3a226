"""Database seeding helpers."""

import logging

from sqlalchemy.orm import Session

from weekly_orders.core.config import settings
from weekly_orders.models.catalog import Category, Dish
from weekly_orders.services.catalog_service import create_category, create_dish

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES: list[str] = [
    "Món Cuốn",
    "Món dùng kèm Bánh Mì",
    "Mì/ Bún/ Bánh canh",
    "Mì/ Bún Xào",
    "Nước uống",
]

SAMPLE_DISHES: list[dict] = [
    {
        "name": "Phở chay",
        "description": "Nước dùng ngọt thanh từ hành củ, nấm hương, đậu hũ non, rau thơm",
        "category": "Mì/ Bún/ Bánh canh",
        "base_price": 45000,
        "size_options": [
            {"name": "Phần 1 người", "servings": 1, "price": 45000},
            {"name": "Phần 2 người", "servings": 2, "price": 85000},
        ],
    },
    {
        "name": "Gỏi cuốn chay",
        "description": "Bánh tráng cuốn rau củ tươi, nấm rơm, bún, kèm nước chấm đậu phộng",
        "category": "Món Cuốn",
        "base_price": 35000,
        "size_options": [],
    },
    {
        "name": "Đậu hũ sốt cà chua",
        "description": "Đậu hũ chiên giòn, sốt cà chua chua ngọt, hành tây, ớt chuông",
        "category": "Món dùng kèm Bánh Mì",
        "base_price": 40000,
        "size_options": [],
    },
]


def ensure_seed_data(session: Session) -> bool:
    """Seed sample categories and library dishes into an empty store when enabled."""
    if not settings.seed_sample_data:
        return False
    if session.query(Dish.id).first() is not None or session.query(Category.id).first() is not None:
        return False

    for index, name in enumerate(SAMPLE_CATEGORIES, start=1):
        create_category(session, name=name, display_order=index)
    for dish in SAMPLE_DISHES:
        create_dish(session, **dish)
    logger.info("Seeded %s categories and %s dishes", len(SAMPLE_CATEGORIES), len(SAMPLE_DISHES))
    return True
