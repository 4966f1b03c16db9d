from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text

from supercart.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    # numeric product id exposed to clients, independent of the row key
    external_id = Column(Integer, nullable=False, unique=True, index=True)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False, index=True)
    image_url = Column(String, nullable=False, default="/placeholder.jpg")

    # supermarket -> price
    prices = Column(JSON, nullable=False, default=dict)
    unit = Column(String, nullable=False, default="unit")

    popularity = Column(Float, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
