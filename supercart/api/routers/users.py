from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from supercart.api.deps import get_token_payload
from supercart.data.database import get_db
from supercart.domain.schemas import UserRead
from supercart.services.auth_service import AuthService

router = APIRouter(prefix="/api/user", tags=["users"])


@router.get("/profile", response_model=UserRead)
def get_profile(payload: dict = Depends(get_token_payload), db: Session = Depends(get_db)):
    service = AuthService(db)
    try:
        return service.get_user(int(payload["sub"]))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
