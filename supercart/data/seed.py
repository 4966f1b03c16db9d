# supercart/data/seed.py
from sqlalchemy.orm import Session

from supercart.data.database import Base, SessionLocal, engine
from supercart.data.models import ProductModel
from supercart.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    {"external_id": 1, "name": "Milk 3%", "category": "Dairy", "unit": "liter",
     "prices": {"Shufersal": 6.9, "Rami Levy": 6.2, "Victory": 6.5}},
    {"external_id": 2, "name": "Cottage Cheese", "category": "Dairy",
     "prices": {"Shufersal": 5.9, "Rami Levy": 5.5, "Victory": 5.8}},
    {"external_id": 3, "name": "Bread", "category": "Bakery",
     "prices": {"Shufersal": 8.5, "Rami Levy": 7.9, "Victory": 9.9}},
    {"external_id": 4, "name": "Eggs (12)", "category": "Dairy",
     "prices": {"Shufersal": 12.9, "Rami Levy": 11.9, "Victory": 12.5}},
    {"external_id": 5, "name": "Tomatoes", "category": "Produce", "unit": "kg",
     "prices": {"Shufersal": 7.9, "Rami Levy": 4.9, "Victory": 6.9}},
    {"external_id": 6, "name": "Olive Oil", "category": "Pantry", "unit": "liter",
     "prices": {"Shufersal": 39.9, "Rami Levy": 29.9, "Victory": 34.9}},
]


def seed(db: Session | None = None) -> int:
    """Insert the demo catalogue into an empty products table."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return 0
        for data in DEMO_PRODUCTS:
            db.add(ProductModel(**data))
        db.commit()
        logger.info(f"Seeded {len(DEMO_PRODUCTS)} products")
        return len(DEMO_PRODUCTS)
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    seed()
