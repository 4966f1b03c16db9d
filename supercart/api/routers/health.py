from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok", "service": "supercart"}


@router.get("/")
def root():
    return {"message": "SuperCart API is running"}
