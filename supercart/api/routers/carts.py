#supercart/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from supercart.api.deps import get_cart_service, get_current_user
from supercart.data.models.user import UserModel
from supercart.domain.errors import ConflictError
from supercart.domain.schemas import (
    CartCreate,
    CartItemsIn,
    CartOut,
    CartTotalsOut,
    CartUpdate,
    MessageOut,
)
from supercart.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["carts"])


def _raise_http(e: Exception):
    if isinstance(e, LookupError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, PermissionError):
        raise HTTPException(status_code=403, detail=str(e))
    if isinstance(e, ConflictError):
        raise HTTPException(status_code=409, detail=str(e))
    if isinstance(e, ValueError):
        raise HTTPException(status_code=400, detail=str(e))
    raise e


@router.get("/", response_model=List[CartOut])
def list_carts(
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    return svc.list_carts(user.id)


@router.post("/totals", response_model=CartTotalsOut)
def preview_totals(
    payload: CartItemsIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.preview_totals(payload.items)
    except ValueError as e:
        _raise_http(e)


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(
    cart_id: int,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.get_cart(cart_id, user.id)
    except (LookupError, PermissionError) as e:
        _raise_http(e)


@router.get("/{cart_id}/totals", response_model=CartTotalsOut)
def cart_totals(
    cart_id: int,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.cart_totals(cart_id, user.id)
    except (LookupError, PermissionError, ValueError) as e:
        _raise_http(e)


@router.post("/", response_model=CartOut, status_code=201)
def create_cart(
    payload: CartCreate,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.create_cart(user.id, payload.name, payload.items)
    except ValueError as e:
        _raise_http(e)


@router.put("/{cart_id}", response_model=CartOut)
def update_cart(
    cart_id: int,
    payload: CartUpdate,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.update_cart(user.id, cart_id, payload.name, payload.items)
    except (LookupError, PermissionError, ConflictError, ValueError) as e:
        _raise_http(e)


@router.delete("/{cart_id}", response_model=MessageOut)
def delete_cart(
    cart_id: int,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        svc.delete_cart(user.id, cart_id)
    except (LookupError, PermissionError) as e:
        _raise_http(e)
    return {"message": "Cart deleted"}
