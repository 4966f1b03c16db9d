# supercart/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from supercart.data.database import get_db
from supercart.domain.errors import AuthenticationError, ConflictError
from supercart.domain.schemas import AuthOut, LoginIn, RegisterIn
from supercart.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    service = AuthService(db)
    try:
        return service.register(payload)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    service = AuthService(db)
    try:
        return service.login(payload)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
