# supercart/repos/product_repo.py
from typing import Dict, Iterable, List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from supercart.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self) -> List[ProductModel]:
        return self.db.query(ProductModel).order_by(ProductModel.name, ProductModel.id).all()

    def list_by_category(self, category: str) -> List[ProductModel]:
        return (
            self.db.query(ProductModel)
            .filter(ProductModel.category == category)
            .order_by(ProductModel.name, ProductModel.id)
            .all()
        )

    def list_categories(self) -> List[str]:
        rows = self.db.query(ProductModel.category).distinct().order_by(ProductModel.category).all()
        return [r[0] for r in rows]

    def search_by_external_id(self, external_id: int) -> List[ProductModel]:
        return self.db.query(ProductModel).filter(ProductModel.external_id == external_id).all()

    def search_text(self, term: str) -> List[ProductModel]:
        pattern = f"%{term}%"
        return (
            self.db.query(ProductModel)
            .filter(or_(ProductModel.name.ilike(pattern), ProductModel.category.ilike(pattern)))
            .order_by(ProductModel.name, ProductModel.id)
            .all()
        )

    def get_product(self, pk: int) -> ProductModel | None:
        return self.db.get(ProductModel, pk)

    def get_by_external_id(self, external_id: int) -> ProductModel | None:
        return self.db.query(ProductModel).filter(ProductModel.external_id == external_id).first()

    def get_by_external_ids(self, external_ids: Iterable[int]) -> Dict[int, ProductModel]:
        ids = set(external_ids)
        if not ids:
            return {}
        rows = self.db.query(ProductModel).filter(ProductModel.external_id.in_(ids)).all()
        return {p.external_id: p for p in rows}

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def save(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()

    def increment_popularity(self, external_id: int, amount: int) -> int:
        return (
            self.db.query(ProductModel)
            .filter(ProductModel.external_id == external_id)
            .update(
                {ProductModel.popularity: ProductModel.popularity + amount},
                synchronize_session=False,
            )
        )

    def commit(self):
        self.db.commit()
