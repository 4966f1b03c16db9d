# supercart/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from supercart.api.deps import get_current_admin, get_current_user
from supercart.data.database import get_db
from supercart.domain.errors import ConflictError
from supercart.domain.schemas import MessageOut, ProductCreate, ProductOut, ProductUpdate, RateIn
from supercart.services.product_service import ProductService
from supercart.utils.settings import TOP_PRODUCTS_DEFAULT_LIMIT

router = APIRouter(prefix="/api/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


def parse_limit(raw: str | None) -> int:
    """Absent or non-numeric limits fall back to the default."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        return TOP_PRODUCTS_DEFAULT_LIMIT


def normalize_criterion(raw: str | None) -> str:
    # older clients send "highest rated" instead of "highest_rated"
    if raw is None:
        return "cheapest"
    return raw.strip().replace(" ", "_")


# public
@router.get("/", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return get_service(db).list_products()


@router.get("/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)):
    return get_service(db).list_categories()


@router.get("/category/{category}", response_model=List[ProductOut])
def list_by_category(category: str, db: Session = Depends(get_db)):
    return get_service(db).list_by_category(category)


@router.get("/search", response_model=List[ProductOut])
def search_products(q: str | None = Query(None), db: Session = Depends(get_db)):
    try:
        return get_service(db).search(q)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/top", response_model=List[ProductOut])
def top_products(
    criteria: str | None = Query(None),
    limit: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return get_service(db).top(normalize_criterion(criteria), parse_limit(limit))


@router.get("/{pk}", response_model=ProductOut)
def get_product(pk: int, db: Session = Depends(get_db)):
    try:
        return get_service(db).get_product(pk)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{pk}/rate", response_model=ProductOut)
def rate_product(
    pk: int,
    payload: RateIn,
    user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).rate_product(pk, payload.score)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# admin
@router.post("/", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).create_product(payload)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{pk}", response_model=ProductOut)
def update_product(
    pk: int,
    payload: ProductUpdate,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).update_product(pk, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{pk}", response_model=MessageOut)
def delete_product(
    pk: int,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    try:
        get_service(db).delete_product(pk)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Product deleted"}
