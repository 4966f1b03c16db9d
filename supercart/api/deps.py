"""
API dependencies: token auth and service wiring
"""
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from supercart.data.database import get_db
from supercart.data.models.user import UserModel
from supercart.repos.user_repo import UserRepo
from supercart.services.cart_service import CartService
from supercart.services.lock_service import LockService
from supercart.services.popularity_service import PopularityService
from supercart.utils.security import decode_token

bearer = HTTPBearer(auto_error=False)


def get_token_payload(
    x_auth_token: str | None = Header(None, alias="x-auth-token"),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> dict:
    """Accepts the token from ``x-auth-token`` or ``Authorization: Bearer``."""
    token = x_auth_token or (credentials.credentials if credentials else None)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token required",
        )

    payload = decode_token(token)
    if not payload or payload.get("type") != "access" or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return payload


def get_current_user(
    payload: dict = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> UserModel:
    user = UserRepo(db).get_user(int(payload["sub"]))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_current_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def get_lock_service() -> LockService:
    return LockService()


def get_popularity_service() -> PopularityService:
    return PopularityService()


def get_cart_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    popularity: PopularityService = Depends(get_popularity_service),
) -> CartService:
    return CartService(db=db, lock_service=lock_service, popularity=popularity)
