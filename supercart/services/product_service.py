# supercart/services/product_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from supercart.data.models.product import ProductModel
from supercart.domain.entities import Product
from supercart.domain.errors import ConflictError
from supercart.domain.ranking import rank
from supercart.domain.schemas import ProductCreate, ProductUpdate
from supercart.repos.product_repo import ProductRepo
from supercart.utils.logging import get_logger

logger = get_logger(__name__)


def to_entity(p: ProductModel) -> Product:
    return Product(
        id=p.external_id,
        name=p.name,
        category=p.category,
        prices=dict(p.prices or {}),
        description=p.description,
        unit=p.unit,
        popularity=p.popularity or 0,
        rating=p.rating or 0,
        rating_count=p.rating_count or 0,
        pk=p.id,
    )


def to_dict(p: ProductModel) -> Dict[str, Any]:
    return {
        "pk": p.id,
        "id": p.external_id,
        "name": p.name,
        "category": p.category,
        "description": p.description,
        "image_url": p.image_url,
        "prices": dict(p.prices or {}),
        "unit": p.unit,
        "popularity": p.popularity,
        "rating": p.rating,
        "rating_count": p.rating_count,
        "created_at": p.created_at,
        "updated_at": p.updated_at,
    }


class ProductService:
    """
    Catalogue queries and admin commands.
    Queries return plain dicts ready for the response model.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    # queries
    def list_products(self) -> List[Dict[str, Any]]:
        return [to_dict(p) for p in self.repo.list_products()]

    def list_categories(self) -> List[str]:
        return self.repo.list_categories()

    def list_by_category(self, category: str) -> List[Dict[str, Any]]:
        return [to_dict(p) for p in self.repo.list_by_category(category)]

    def search(self, term: str | None) -> List[Dict[str, Any]]:
        term = (term or "").strip()
        if not term:
            raise ValueError("A search term is required")

        # a numeric term is a lookup by public product id
        try:
            rows = self.repo.search_by_external_id(int(term))
        except ValueError:
            rows = self.repo.search_text(term)
        return [to_dict(p) for p in rows]

    def top(self, criterion: str, limit: int) -> List[Dict[str, Any]]:
        rows = self.repo.list_products()
        by_pk = {p.id: p for p in rows}
        ranked = rank([to_entity(p) for p in rows], criterion, limit)
        logger.info(f"Top products by {criterion!r}: {len(ranked)} of {len(rows)}")
        return [to_dict(by_pk[p.pk]) for p in ranked]

    def get_product(self, pk: int) -> Dict[str, Any]:
        return to_dict(self._require(pk))

    # commands
    def create_product(self, payload: ProductCreate) -> Dict[str, Any]:
        if self.repo.get_by_external_id(payload.id):
            raise ConflictError(f"Product id {payload.id} already exists")

        product = ProductModel(
            external_id=payload.id,
            name=payload.name.strip(),
            category=payload.category.strip(),
            description=payload.description,
            prices=dict(payload.prices),
            unit=payload.unit or "unit",
        )
        if payload.image_url:
            product.image_url = payload.image_url

        created = self.repo.create_product(product)
        logger.info(f"Created product {created.external_id} ({created.name})")
        return to_dict(created)

    def update_product(self, pk: int, payload: ProductUpdate) -> Dict[str, Any]:
        product = self._require(pk)

        changes = payload.model_dump(exclude_unset=True)
        for field in ("name", "category", "unit"):
            # empty values keep the current one
            if changes.get(field):
                setattr(product, field, changes[field])
        if "description" in changes:
            product.description = changes["description"]
        if changes.get("prices") is not None:
            product.prices = dict(changes["prices"])
        for field in ("popularity", "rating"):
            if changes.get(field) is not None:
                setattr(product, field, changes[field])

        product.updated_at = datetime.now(timezone.utc)
        saved = self.repo.save(product)
        logger.info(f"Updated product {saved.external_id}")
        return to_dict(saved)

    def delete_product(self, pk: int) -> None:
        product = self._require(pk)
        self.repo.delete_product(product)
        logger.info(f"Deleted product {product.external_id}")

    def rate_product(self, pk: int, score: int) -> Dict[str, Any]:
        """Fold one 1-5 score into the running average."""
        product = self._require(pk)

        count = product.rating_count or 0
        product.rating = ((product.rating or 0) * count + score) / (count + 1)
        product.rating_count = count + 1
        product.updated_at = datetime.now(timezone.utc)

        saved = self.repo.save(product)
        return to_dict(saved)

    def _require(self, pk: int) -> ProductModel:
        product = self.repo.get_product(pk)
        if not product:
            raise LookupError("Product not found")
        return product
